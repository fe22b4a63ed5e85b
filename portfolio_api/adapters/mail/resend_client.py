"""Resend mail adapter."""

import asyncio
import logging
from typing import Any

import resend

from portfolio_api.adapters.mail.base import AbstractMailSender, MailMessage, SendResult

logger = logging.getLogger(__name__)


class ResendMailSender(AbstractMailSender):
    """Send notifications through the Resend HTTP API.

    The official SDK is synchronous, so each call runs in a worker thread and
    is bounded by ``timeout_seconds``. There is no retry: a failed send is
    reported to the caller, who may resubmit the form.

    The timeout only stops waiting; it cannot cancel the worker thread. A
    request already in flight may still be delivered after the caller was
    told it timed out, so a resubmission can produce a duplicate email.
    """

    def __init__(self, api_key: str, timeout_seconds: float = 10.0) -> None:
        """Initialize the Resend adapter.

        Args:
            api_key: Resend API key.
            timeout_seconds: Upper bound for one send call.
        """
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds

    @staticmethod
    def build_params(message: MailMessage) -> dict[str, Any]:
        """Translate a MailMessage into Resend's send parameters."""
        return {
            "from": message.from_address,
            "to": [message.to],
            "reply_to": message.reply_to,
            "subject": message.subject,
            "text": message.text,
            "html": message.html,
        }

    def _send_blocking(self, params: dict[str, Any]) -> Any:
        resend.api_key = self.api_key
        return resend.Emails.send(params)

    async def send(self, message: MailMessage) -> SendResult:
        """Send one message via Resend.

        Args:
            message: Formatted message to deliver.

        Returns:
            SendResult with the Resend message id, or the failure reason.
        """
        params = self.build_params(message)

        try:
            response = await asyncio.wait_for(
                asyncio.to_thread(self._send_blocking, params),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "mail.provider_timeout",
                extra={"provider": "resend", "timeout_seconds": self.timeout_seconds},
            )
            return SendResult.failed(f"Resend request timed out after {self.timeout_seconds}s")
        except Exception as exc:
            logger.warning(
                "mail.provider_error",
                extra={"provider": "resend", "error_type": type(exc).__name__},
            )
            return SendResult.failed(str(exc))

        message_id = response.get("id") if isinstance(response, dict) else getattr(response, "id", None)
        return SendResult.ok(message_id)
