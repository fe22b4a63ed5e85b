"""Application-level exception types.

This module defines domain errors used across services/adapters, enabling
consistent error handling, logging, and API responses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, NotRequired, TypedDict


REQUIRED_FIELDS: tuple[str, ...] = ("name", "company", "email", "challenge")


class ErrorDetails(TypedDict, total=False):
    """Structured error context for observability and clients."""

    hint: str
    missing: list[str]
    limit: int
    retry_after: int
    provider: str
    provider_error: str
    request_id: str
    context: NotRequired[dict[str, Any]]


@dataclass
class AppError(Exception):
    """Base error for application/domain failures.

    Attributes:
        code: Stable, machine-readable error code.
        message: Human-readable error message (rendered as ``error``).
        details: Optional structured details for debugging/observability.
        headers: Optional response headers (e.g. Retry-After).
    """

    code: str
    message: str
    details: ErrorDetails | None = None
    headers: dict[str, str] | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        # Populate Exception args so str(error) is useful in logs/tracebacks.
        super().__init__(self.message)

    def to_payload(self) -> dict[str, Any]:
        """Render the JSON body returned to the client."""
        return {"error": self.message, "code": self.code}


class ValidationAppError(AppError):
    """Raised when request input validation fails."""


class MissingFieldsAppError(ValidationAppError):
    """Raised when one or more required submission fields are absent."""

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["required"] = list(REQUIRED_FIELDS)
        return payload


class RateLimitAppError(AppError):
    """Raised when a client exceeds its submission budget."""


class ConfigurationAppError(AppError):
    """Raised when required server configuration (e.g. mail credentials) is absent."""


class MailDispatchAppError(AppError):
    """Raised when the mail provider rejects or fails to deliver a message."""

    def to_payload(self) -> dict[str, Any]:
        provider_error = (self.details or {}).get("provider_error") or "Unknown error"
        return {
            "success": False,
            "error": self.message,
            "code": self.code,
            "details": provider_error,
        }
