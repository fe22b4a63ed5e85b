"""HTTP middleware for request correlation and contact-endpoint CORS.

``request_id_middleware``:
- Accepts incoming X-Request-ID header or generates a UUID
- Stores request_id in contextvars for log correlation
- Echoes request_id and total duration in response headers

``contact_cors_middleware``:
- Adds the CORS headers of ``portfolio_api.core.cors`` to every response
  under ``/api/contact``, error responses included

Unexpected exceptions are rendered by ``general_exception_handler`` inside
these middlewares. Starlette would otherwise build the 500 in its outermost
``ServerErrorMiddleware``, after the headers above could be applied.

Usage:
    app.middleware("http")(contact_cors_middleware)
    app.middleware("http")(request_id_middleware)
"""

from __future__ import annotations

import time
import uuid

from fastapi import Request, Response

from portfolio_api.core.config import settings
from portfolio_api.core.cors import build_cors_headers, parse_allowed_origins, request_origin
from portfolio_api.core.exception_handlers import general_exception_handler
from portfolio_api.core.logging import clear_request_id, set_request_id

CONTACT_PATH_PREFIX = "/api/contact"


async def request_id_middleware(request: Request, call_next) -> Response:
    """Propagate a correlation id for the lifetime of the request.

    If the client provides the configured request-id header, that value is
    reused; otherwise a UUID4 is generated. The id is cleared from context
    once the response is produced.

    Args:
        request: The incoming HTTP request object.
        call_next: The next middleware/route handler in the stack.

    Returns:
        Response with request-id and duration headers added.
    """

    header_name = settings.log.request_id_header
    request_id = request.headers.get(header_name) or str(uuid.uuid4())
    set_request_id(request_id)
    start = time.perf_counter()
    try:
        response: Response = await call_next(request)
    except Exception as exc:
        response = await general_exception_handler(request, exc)
    finally:
        clear_request_id()

    duration_ms = (time.perf_counter() - start) * 1000
    response.headers[header_name] = request_id
    response.headers.setdefault("X-Request-Duration-ms", f"{duration_ms:.2f}")
    return response


async def contact_cors_middleware(request: Request, call_next) -> Response:
    """Attach CORS headers to contact-endpoint responses."""

    try:
        response: Response = await call_next(request)
    except Exception as exc:
        response = await general_exception_handler(request, exc)

    if not request.url.path.startswith(CONTACT_PATH_PREFIX):
        return response

    allowed = parse_allowed_origins(settings.app.cors_allowed_origins)
    for name, value in build_cors_headers(request_origin(request.headers), allowed).items():
        response.headers[name] = value
    return response
