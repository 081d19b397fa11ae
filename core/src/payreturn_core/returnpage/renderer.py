from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from fastapi.responses import HTMLResponse
from jinja2 import Environment, PackageLoader, Template, select_autoescape

from payreturn_core.returnpage.status import PaymentStatus, content_for_status

logger = logging.getLogger(__name__)

TEMPLATE_NAME: Final[str] = "payment_return.html"

# Content-Type (text/html; charset=utf-8) is added by HTMLResponse itself.
RETURN_PAGE_HEADERS: Final[dict[str, str]] = {
    "Cache-Control": "no-store, no-cache, must-revalidate, proxy-revalidate",
    "X-Content-Type-Options": "nosniff",
}

_TEMPLATE_ENV: Final[Environment] = Environment(
    loader=PackageLoader("payreturn_core.returnpage", "templates"),
    autoescape=select_autoescape(enabled_extensions=("html",)),
)
_RETURN_TEMPLATE: Final[Template] = _TEMPLATE_ENV.get_template(TEMPLATE_NAME)


@dataclass(frozen=True)
class ReturnPageOptions:
    """Switches for the handoff page.

    loading_indicator=False renders the minimal page: no spinner text, no
    failure message, no pagehide listener; a failed handoff is only logged to
    the browser console and the button stays as it is.
    """

    loading_indicator: bool = True
    fallback_timeout_ms: int = 2000


DEFAULT_OPTIONS: Final[ReturnPageOptions] = ReturnPageOptions()


def render_return_page_html(
    status: PaymentStatus | str | None,
    redirect_target: str,
    options: ReturnPageOptions = DEFAULT_OPTIONS,
) -> str:
    resolved = status if isinstance(status, PaymentStatus) else PaymentStatus.parse(status)
    logger.debug("Rendering return page for status=%s", resolved.value)
    return _RETURN_TEMPLATE.render(
        content=content_for_status(resolved),
        redirect_target=redirect_target,
        options=options,
    )


def render_return_page(
    status: PaymentStatus | str | None,
    redirect_target: str,
    options: ReturnPageOptions = DEFAULT_OPTIONS,
) -> HTMLResponse:
    """Build the payment return page that hands control back to the native app.

    The redirect target is trusted caller input; it is JSON-encoded into the
    inline script so quotes cannot end the string literal, but no scheme or
    host checks happen here.
    """

    html = render_return_page_html(status, redirect_target, options)
    return HTMLResponse(
        content=html,
        status_code=200,
        headers=dict(RETURN_PAGE_HEADERS),
        media_type="text/html",
    )
