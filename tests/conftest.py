"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It pins the environment before any settings are imported so no local .env
file or real mail credentials leak into the test run.
"""

import os

# CRITICAL: Set these before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ["RESEND_API_KEY"] = "re_test_key_123"
os.environ["TO_EMAIL"] = "owner@example.com"
os.environ["FROM_EMAIL"] = "noreply@example.com"
os.environ.setdefault("MAIL_SITE_NAME", "Test Portfolio")
os.environ.setdefault("APP_RATE_LIMIT_ENABLED", "true")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402

from portfolio_api.adapters.mail.base import AbstractMailSender, MailMessage, SendResult  # noqa: E402


class RecordingMailSender(AbstractMailSender):
    """Mail sender double that records messages instead of sending them."""

    def __init__(self, result: SendResult | None = None) -> None:
        self.result = result or SendResult.ok("msg_test_1")
        self.sent: list[MailMessage] = []

    async def send(self, message: MailMessage) -> SendResult:
        self.sent.append(message)
        return self.result


@pytest.fixture
def recording_sender() -> RecordingMailSender:
    return RecordingMailSender()


@pytest.fixture
def valid_payload() -> dict[str, str]:
    return {
        "name": "Jane",
        "company": "Acme",
        "email": "jane@acme.com",
        "challenge": "Need X",
    }


@pytest.fixture
def failing_sender() -> RecordingMailSender:
    return RecordingMailSender(SendResult.failed("Domain not verified"))
