from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class MailMessage:
	"""A fully formatted notification ready for dispatch."""

	to: str
	from_address: str
	reply_to: str
	subject: str
	text: str
	html: str


@dataclass(frozen=True)
class SendResult:
	"""Outcome of a single send attempt.

	Attributes:
		success: Whether the provider accepted the message.
		message_id: Provider message id when available.
		error: Provider or transport error message on failure.
	"""

	success: bool
	message_id: str | None = None
	error: str | None = None

	@classmethod
	def ok(cls, message_id: str | None = None) -> "SendResult":
		return cls(success=True, message_id=message_id)

	@classmethod
	def failed(cls, error: str) -> "SendResult":
		return cls(success=False, error=error or "Unknown error")


class AbstractMailSender(ABC):
	"""Interface for the external mail-sending capability."""

	@abstractmethod
	async def send(self, message: MailMessage) -> SendResult:
		"""Hand one message to the provider.

		Implementations must not retry and must report provider failures as
		``SendResult.failed`` rather than raising.

		Args:
			message: Formatted message to deliver.

		Returns:
			SendResult describing whether the provider accepted it.
		"""
		...
