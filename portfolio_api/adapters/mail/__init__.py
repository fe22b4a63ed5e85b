"""Mail adapter layer - abstracts over the email-sending provider."""

from portfolio_api.adapters.mail.base import AbstractMailSender, MailMessage, SendResult
from portfolio_api.adapters.mail.factory import create_mail_sender
from portfolio_api.adapters.mail.resend_client import ResendMailSender

__all__ = [
    "AbstractMailSender",
    "MailMessage",
    "ResendMailSender",
    "SendResult",
    "create_mail_sender",
]
