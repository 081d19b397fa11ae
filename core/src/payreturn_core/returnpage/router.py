from __future__ import annotations

import logging
from urllib.parse import urlparse

from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.responses import HTMLResponse

from payreturn_core.config import CoreConfig, ReturnPageConfig
from payreturn_core.returnpage.renderer import ReturnPageOptions, render_return_page
from payreturn_core.returnpage.status import PaymentStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/payment", tags=["payment-return"])


def _get_return_page_config(request: Request) -> ReturnPageConfig:
    config = getattr(request.app.state, "payreturn_config", None)
    if not isinstance(config, CoreConfig):
        raise HTTPException(status_code=500, detail="Config not initialized")
    return config.return_page


def resolve_redirect_target(
    cfg: ReturnPageConfig, *, raw_status: str | None, redirect: str | None
) -> str:
    """Pick the deep link the page should open.

    Explicit targets are checked against the scheme allow-list; derived targets
    are built from deep_link_base and are trusted as configured.
    """

    if redirect is None:
        segment = raw_status or PaymentStatus.ISSUE.value
        return f"{cfg.deep_link_base}/{segment}"

    if not redirect.strip():
        raise HTTPException(status_code=400, detail="Redirect target must not be blank")

    if cfg.allowed_redirect_schemes:
        scheme = urlparse(redirect).scheme.lower()
        if scheme not in cfg.allowed_redirect_schemes:
            raise HTTPException(
                status_code=400,
                detail=f"Redirect scheme not allowed: {scheme or '(none)'}",
            )

    return redirect


def _respond(request: Request, raw_status: str | None, redirect: str | None) -> HTMLResponse:
    cfg = _get_return_page_config(request)
    target = resolve_redirect_target(cfg, raw_status=raw_status, redirect=redirect)
    status = PaymentStatus.parse(raw_status)
    if status is PaymentStatus.ISSUE and raw_status not in (None, "", "issue"):
        logger.info("Unrecognized payment status %r rendered as issue", raw_status)

    options = ReturnPageOptions(
        loading_indicator=cfg.loading_indicator,
        fallback_timeout_ms=cfg.fallback_timeout_ms,
    )
    return render_return_page(status, target, options)


@router.get("/return", response_class=HTMLResponse)
async def payment_return_query(
    request: Request,
    status: str | None = Query(default=None),
    redirect: str | None = Query(default=None),
) -> HTMLResponse:
    return _respond(request, status, redirect)


@router.get("/return/{status}", response_class=HTMLResponse)
async def payment_return_path(
    request: Request,
    status: str,
    redirect: str | None = Query(default=None),
) -> HTMLResponse:
    return _respond(request, status, redirect)
