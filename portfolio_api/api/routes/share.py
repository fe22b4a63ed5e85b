from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from portfolio_api.services.crawler_responder import (
    MAIC_WORKFLOW_PAGE,
    build_redirect_url,
    is_crawler,
    render_share_html,
    resolve_base_url,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Share"])


@router.api_route(
    MAIC_WORKFLOW_PAGE.share_path,
    methods=["GET", "HEAD"],
    response_class=HTMLResponse,
    responses={302: {"description": "Redirect for non-crawler clients"}},
)
async def share_maic_workflow(request: Request) -> Response:
    """Serve preview metadata to crawlers, redirect everyone else.

    The response varies only on the User-Agent header.
    """
    user_agent = request.headers.get("user-agent", "")
    base_url = resolve_base_url(request.headers)
    crawler = is_crawler(user_agent)

    logger.info(
        "share.request",
        extra={
            "share_path": MAIC_WORKFLOW_PAGE.share_path,
            "user_agent": user_agent[:200],
            "is_crawler": crawler,
        },
    )

    if crawler:
        return HTMLResponse(
            content=render_share_html(MAIC_WORKFLOW_PAGE, base_url),
            status_code=200,
            headers={"Vary": "User-Agent"},
        )

    return RedirectResponse(
        url=build_redirect_url(MAIC_WORKFLOW_PAGE, base_url),
        status_code=302,
        headers={"Vary": "User-Agent"},
    )
