"""Pydantic schemas for the contact endpoint."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ContactSubmission(BaseModel):
    """A validated contact-form submission (email trimmed, other fields verbatim)."""

    name: str = Field(..., min_length=1, description="Submitter's name.")
    company: str = Field(..., min_length=1, description="Submitter's company.")
    email: str = Field(..., min_length=3, description="Submitter's email; used as Reply-To.")
    challenge: str = Field(..., min_length=1, description="Free-text message describing the challenge.")


class ContactSuccessResponse(BaseModel):
    success: bool = Field(True, description="Always true for accepted submissions.")
    message: str = Field(..., description="Human-readable confirmation.")
    timestamp: str = Field(..., description="ISO-8601 UTC time the email was dispatched.")


class ErrorResponse(BaseModel):
    """Flat error body shared by client and configuration errors."""

    error: str = Field(..., description="Human-readable error message.")
    code: str | None = Field(None, description="Stable machine-readable error code.")


class MissingFieldsResponse(ErrorResponse):
    required: list[str] = Field(..., description="All required field names.")


class DispatchFailureResponse(ErrorResponse):
    success: bool = Field(False, description="Always false for dispatch failures.")
    details: str = Field(..., description="Best-effort provider diagnostic.")
