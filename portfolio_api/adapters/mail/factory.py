"""Factory for the configured mail sender."""

import logging

from portfolio_api.adapters.mail.base import AbstractMailSender
from portfolio_api.adapters.mail.resend_client import ResendMailSender
from portfolio_api.core.config import MailSettings
from portfolio_api.core.errors import ConfigurationAppError

logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "Email service not configured"


def create_mail_sender(mail_settings: MailSettings) -> AbstractMailSender:
    """Instantiate the mail sender for the configured provider.

    Called per request so a missing credential is reported as a failed
    submission instead of preventing startup.

    Args:
        mail_settings: Resolved mail settings.

    Returns:
        AbstractMailSender: Configured sender instance.

    Raises:
        ConfigurationAppError: If credentials/addresses are missing or the
            provider is unknown.
    """
    provider = mail_settings.mail_provider.lower()

    if provider == "resend":
        if not mail_settings.resend_api_key:
            logger.error("mail.not_configured", extra={"reason": "missing_api_key", "provider": provider})
            raise ConfigurationAppError(code="mail_not_configured", message=NOT_CONFIGURED_MESSAGE)
        if not mail_settings.to_email:
            logger.error("mail.not_configured", extra={"reason": "missing_to_email", "provider": provider})
            raise ConfigurationAppError(code="mail_not_configured", message=NOT_CONFIGURED_MESSAGE)
        return ResendMailSender(
            api_key=mail_settings.resend_api_key,
            timeout_seconds=mail_settings.mail_timeout_seconds,
        )

    logger.error("mail.not_configured", extra={"reason": "unknown_provider", "provider": provider})
    raise ConfigurationAppError(code="mail_unknown_provider", message=NOT_CONFIGURED_MESSAGE)
