import logging
from typing import Callable

from fastapi import APIRouter, Depends, Request, Response

from portfolio_api.adapters.mail.factory import create_mail_sender
from portfolio_api.core.config import settings
from portfolio_api.core.logging import hash_for_log
from portfolio_api.core.rate_limit import enforce_rate_limit
from portfolio_api.schemas.contact import (
    ContactSuccessResponse,
    DispatchFailureResponse,
    ErrorResponse,
    MissingFieldsResponse,
)
from portfolio_api.services.mail_dispatcher import MailDispatcher
from portfolio_api.services.submission_validator import validate_submission

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Contact"])

MailDispatcherFactory = Callable[[], MailDispatcher]


def build_mail_dispatcher() -> MailDispatcher:
    """Build a dispatcher from current settings.

    Raises:
        ConfigurationAppError: If mail credentials are not configured.
    """
    mail = settings.mail
    sender = create_mail_sender(mail)
    return MailDispatcher(
        sender=sender,
        to_address=mail.to_email,
        from_address=mail.from_email,
        site_name=mail.mail_site_name,
    )


def get_mail_dispatcher_factory() -> MailDispatcherFactory:
    """Dependency returning the dispatcher factory.

    The factory is invoked only after validation passes, so invalid input is
    reported as 400 even when mail is not configured.
    """
    return build_mail_dispatcher


@router.options("/api/contact", include_in_schema=False)
async def contact_preflight() -> Response:
    """CORS preflight: 200 with an empty body (headers added by middleware)."""
    return Response(status_code=200)


@router.post(
    "/api/contact",
    response_model=ContactSuccessResponse,
    dependencies=[Depends(enforce_rate_limit)],
    responses={
        400: {"model": MissingFieldsResponse},
        405: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": DispatchFailureResponse},
    },
)
async def submit_contact(
    request: Request,
    dispatcher_factory: MailDispatcherFactory = Depends(get_mail_dispatcher_factory),
) -> ContactSuccessResponse:
    """Relay a contact-form submission to the site owner by email.

    Accepts a JSON object (or a JSON-encoded string) with name, company,
    email and challenge.

    Returns:
        ContactSuccessResponse with the dispatch timestamp.

    Raises:
        RateLimitAppError: 429 when the client exceeded its budget.
        ValidationAppError: 400 for missing fields, bad JSON or bad email.
        ConfigurationAppError: 500 when mail is not configured.
        MailDispatchAppError: 500 when the provider fails.
    """
    raw_body = await request.body()
    submission = validate_submission(raw_body)

    dispatcher = dispatcher_factory()
    receipt = await dispatcher.dispatch(submission)

    logger.info(
        "contact.accepted",
        extra={
            "submitter_hash": hash_for_log(submission.email),
            "company": submission.company,
            "message_id": receipt.message_id,
        },
    )

    return ContactSuccessResponse(
        success=True,
        message="Email sent successfully",
        timestamp=receipt.timestamp_iso,
    )
