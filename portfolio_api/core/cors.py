"""CORS policy for the contact endpoint.

Origins are matched by prefix against an allow-list, so a ``Referer`` such as
``https://mattheneus.com/contact`` is accepted when ``https://mattheneus.com``
is configured. Only matched values are echoed back.
"""

from __future__ import annotations

from typing import Iterable, Mapping

ALLOW_METHODS = "POST, OPTIONS"
ALLOW_HEADERS = "Content-Type"


def parse_allowed_origins(origins: str | None) -> tuple[str, ...]:
    """Parse a comma-separated allow-list into a tuple of trimmed origins.

    Examples:
        >>> parse_allowed_origins("https://a.com, http://localhost:5000")
        ('https://a.com', 'http://localhost:5000')
        >>> parse_allowed_origins(None)
        ()
    """
    if not origins:
        return ()
    return tuple(o.strip() for o in origins.split(",") if o.strip())


def request_origin(headers: Mapping[str, str]) -> str | None:
    """Return the ``Origin`` header, falling back to ``Referer``."""
    return headers.get("origin") or headers.get("referer") or None


def is_allowed_origin(origin: str | None, allowed: Iterable[str]) -> bool:
    if not origin:
        return False
    return any(origin.startswith(prefix) for prefix in allowed)


def build_cors_headers(origin: str | None, allowed: Iterable[str]) -> dict[str, str]:
    """Build the CORS response headers for a request.

    ``Access-Control-Allow-Methods`` and ``Access-Control-Allow-Headers`` are
    always advertised; ``Access-Control-Allow-Origin`` only for allowed origins.
    """
    headers = {
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
    }
    if origin and is_allowed_origin(origin, allowed):
        headers["Access-Control-Allow-Origin"] = origin
        headers["Vary"] = "Origin"
    return headers
