from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Liveness probe used by the hosting platform and uptime checks.

    Does not touch the mail provider, so it stays green when mail
    credentials are missing.
    """

    return {"status": "ok"}
