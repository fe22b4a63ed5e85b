"""Contact notification formatting and dispatch.

Builds the notification email for a validated submission and hands it to the
injected mail sender:
- subject combining submitter name and company
- plain-text body listing every field verbatim
- HTML body with the same fields, escaped, with inline styling
- Reply-To set to the submitter so the owner can answer directly

Exactly one send per accepted submission; failures surface as
MailDispatchAppError and are never retried here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from html import escape

from portfolio_api.adapters.mail.base import AbstractMailSender, MailMessage
from portfolio_api.core.errors import MailDispatchAppError
from portfolio_api.core.logging import hash_for_log
from portfolio_api.schemas.contact import ContactSubmission

logger = logging.getLogger(__name__)

ACCENT_COLOR = "#2563eb"


@dataclass(frozen=True)
class DispatchReceipt:
    """Proof of a successful dispatch."""

    message_id: str | None
    timestamp: datetime

    @property
    def timestamp_iso(self) -> str:
        """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
        return self.timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_subject(submission: ContactSubmission) -> str:
    return f"Portfolio Contact: {submission.name} from {submission.company}"


def build_text_body(submission: ContactSubmission, site_name: str) -> str:
    """Render the plain-text notification body."""
    return (
        "New contact form submission from your portfolio:\n"
        "\n"
        f"Name: {submission.name}\n"
        f"Company: {submission.company}\n"
        f"Email: {submission.email}\n"
        "\n"
        "Message:\n"
        f"{submission.challenge}\n"
        "\n"
        "---\n"
        f"Sent from {site_name}\n"
        f"Reply directly to this email to respond to {submission.name}\n"
    )


def build_html_body(submission: ContactSubmission, site_name: str) -> str:
    """Render the HTML notification body.

    All user-supplied values are HTML-escaped before embedding.
    """
    name = escape(submission.name)
    company = escape(submission.company)
    email = escape(submission.email)
    challenge = escape(submission.challenge)
    site = escape(site_name)

    return f"""<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
  <h2 style="color: {ACCENT_COLOR};">New Portfolio Contact</h2>
  <div style="background: #f8fafc; padding: 20px; border-radius: 8px; margin: 20px 0;">
    <p><strong>Name:</strong> {name}</p>
    <p><strong>Company:</strong> {company}</p>
    <p><strong>Email:</strong> <a href="mailto:{email}">{email}</a></p>
  </div>
  <div style="margin: 20px 0;">
    <h3 style="color: #374151;">Message:</h3>
    <p style="background: #ffffff; padding: 15px; border-left: 4px solid {ACCENT_COLOR}; white-space: pre-wrap;">{challenge}</p>
  </div>
  <hr style="margin: 30px 0; border: none; border-top: 1px solid #e5e7eb;">
  <p style="color: #6b7280; font-size: 14px;">
    Sent from <strong>{site}</strong><br>
    Reply directly to this email to respond to {name}
  </p>
</div>"""


class MailDispatcher:
    """Format contact notifications and send them through a mail sender.

    Attributes:
        sender: External mail-sending capability.
        to_address: Destination address for notifications.
        from_address: Verified sender address (defaults to ``to_address``).
        site_name: Brand line used in the notification footer.
    """

    def __init__(
        self,
        sender: AbstractMailSender,
        to_address: str,
        from_address: str | None = None,
        site_name: str = "Portfolio",
    ) -> None:
        self.sender = sender
        self.to_address = to_address
        self.from_address = from_address or to_address
        self.site_name = site_name

    def build_message(self, submission: ContactSubmission) -> MailMessage:
        return MailMessage(
            to=self.to_address,
            from_address=self.from_address,
            reply_to=submission.email,
            subject=build_subject(submission),
            text=build_text_body(submission, self.site_name),
            html=build_html_body(submission, self.site_name),
        )

    async def dispatch(self, submission: ContactSubmission) -> DispatchReceipt:
        """Send the notification for one submission.

        Args:
            submission: Validated contact submission.

        Returns:
            DispatchReceipt with provider message id and dispatch time.

        Raises:
            MailDispatchAppError: If the provider reports a failure.
        """
        message = self.build_message(submission)
        result = await self.sender.send(message)

        if not result.success:
            logger.error(
                "mail.dispatch_failed",
                extra={
                    "submitter_hash": hash_for_log(submission.email),
                    "provider_error": result.error,
                },
            )
            raise MailDispatchAppError(
                code="mail_dispatch_failed",
                message="Failed to send email",
                details={"provider_error": result.error or "Unknown error"},
            )

        receipt = DispatchReceipt(message_id=result.message_id, timestamp=datetime.now(timezone.utc))
        logger.info(
            "mail.dispatched",
            extra={
                "message_id": result.message_id,
                "submitter_hash": hash_for_log(submission.email),
                "company": submission.company,
            },
        )
        return receipt
