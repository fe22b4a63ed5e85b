"""Contact-form submission validation.

Turns whatever the client posted (decoded JSON, a JSON string, raw bytes)
into a ContactSubmission, or raises a structured validation error:

1. all of name/company/email/challenge present and non-blank
2. email shaped like ``local@domain.tld``
3. every value accepted by the ContactSubmission model

Content is not sanitized here; the mail dispatcher escapes it for HTML.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from portfolio_api.core.errors import REQUIRED_FIELDS, MissingFieldsAppError, ValidationAppError
from portfolio_api.schemas.contact import ContactSubmission

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def decode_payload(payload: Any) -> Mapping[str, Any]:
    """Decode a raw request payload into a mapping.

    Args:
        payload: Parsed JSON object, JSON text (str/bytes) or None.

    Returns:
        The decoded mapping; non-object JSON values decode to an empty mapping.

    Raises:
        ValidationAppError: If text payloads are not valid JSON.
    """
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8", errors="replace")

    if isinstance(payload, str):
        if not payload.strip():
            return {}
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise ValidationAppError(
                code="invalid_json",
                message="Invalid JSON body",
                details={"hint": f"JSON decode failed at position {exc.pos}"},
            ) from exc

        # Some clients double-encode the body as a JSON string
        if isinstance(payload, str):
            return decode_payload(payload)

    if isinstance(payload, Mapping):
        return payload

    return {}


def _clean(value: Any) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip()


def find_missing_fields(data: Mapping[str, Any]) -> list[str]:
    """Return required field names that are absent, non-string or blank."""
    return [name for name in REQUIRED_FIELDS if not _clean(data.get(name))]


def is_valid_email(address: str) -> bool:
    """Check an address against the basic ``local@domain.tld`` shape.

    Examples:
        >>> is_valid_email("jane@acme.com")
        True
        >>> is_valid_email("not-an-email")
        False
    """
    return bool(EMAIL_PATTERN.match(address))


def validate_submission(payload: Any) -> ContactSubmission:
    """Validate a raw contact payload.

    Args:
        payload: Parsed JSON object, JSON text (str/bytes) or None.

    Returns:
        ContactSubmission with the free-text fields as submitted and the
        email address trimmed.

    Raises:
        ValidationAppError: Invalid JSON, malformed email address or a field
            value that cannot be represented as text (e.g. a lone surrogate).
        MissingFieldsAppError: One or more required fields are missing.
    """
    data = decode_payload(payload)

    missing = find_missing_fields(data)
    if missing:
        logger.info("contact.missing_fields", extra={"missing": missing})
        raise MissingFieldsAppError(
            code="missing_fields",
            message="Missing required fields",
            details={"missing": missing},
        )

    email = _clean(data.get("email"))
    if not is_valid_email(email):
        logger.info("contact.invalid_email")
        raise ValidationAppError(code="invalid_email", message="Invalid email address")

    # Free-text fields are forwarded as submitted; only the address is normalized
    fields = {name: data[name] for name in REQUIRED_FIELDS}
    fields["email"] = email

    try:
        return ContactSubmission(**fields)
    except PydanticValidationError as exc:
        invalid = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
        logger.info("contact.invalid_field", extra={"invalid": invalid})
        raise ValidationAppError(
            code="invalid_field",
            message="Invalid field value",
            details={"invalid": invalid},
        ) from exc
