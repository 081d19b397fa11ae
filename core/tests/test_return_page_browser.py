"""Drive the rendered return page in headless Chromium with a fake clock.

Navigation is captured by swapping window.paymentReturn.navigate after load,
so the custom-scheme deep link never leaves about:blank.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from payreturn_core.returnpage.renderer import ReturnPageOptions, render_return_page_html

sync_api = pytest.importorskip("playwright.sync_api")

EXPO_TARGET = "exp://localhost:8081/--/payment/success"

_CAPTURE_NAVIGATION = """
() => {
  window.__navigations = [];
  window.paymentReturn.navigate = (target) => window.__navigations.push(target);
}
"""

_SET_VISIBILITY = """
(state) => {
  Object.defineProperty(document, 'visibilityState', {configurable: true, get: () => state});
  Object.defineProperty(document, 'hidden', {configurable: true, get: () => state === 'hidden'});
  document.dispatchEvent(new Event('visibilitychange'));
}
"""


@pytest.fixture(scope="module")
def browser() -> Iterator:
    with sync_api.sync_playwright() as p:
        try:
            chromium = p.chromium.launch()
        except sync_api.Error as exc:
            pytest.skip(f"Chromium is not installed for Playwright: {exc}")
        yield chromium
        chromium.close()


@pytest.fixture
def page(browser) -> Iterator:
    pg = browser.new_page()
    pg.clock.install()
    yield pg
    pg.close()


def _load(page, options: ReturnPageOptions | None = None) -> None:
    html = render_return_page_html("success", EXPO_TARGET, options or ReturnPageOptions())
    page.set_content(html)
    page.evaluate(_CAPTURE_NAVIGATION)


def _navigations(page) -> list[str]:
    return page.evaluate("() => window.__navigations")


def test_no_navigation_without_click(page) -> None:
    _load(page)

    page.clock.run_for(5000)

    assert _navigations(page) == []
    assert page.evaluate("() => window.paymentReturn.attempts") == 0
    assert page.url == "about:blank"
    assert page.is_visible("#return-btn")
    assert page.inner_text("#return-btn") == "Return to App"
    assert page.is_hidden("#loading")


def test_click_navigates_synchronously_and_shows_loading(page) -> None:
    _load(page)

    page.click("#return-btn")

    assert _navigations(page) == [EXPO_TARGET]
    assert page.is_hidden("#return-btn")
    assert page.is_visible("#loading")
    assert page.inner_text("#loading-text") == "Opening app..."


def test_hidden_page_counts_as_handoff(page) -> None:
    _load(page)

    page.click("#return-btn")
    page.clock.run_for(500)
    page.evaluate(_SET_VISIBILITY, "hidden")
    # User comes back before the check; the earlier hide is still evidence.
    page.evaluate(_SET_VISIBILITY, "visible")
    page.clock.run_for(2000)

    assert page.evaluate("() => window.paymentReturn.appOpened()") is True
    assert page.is_hidden("#return-btn")
    assert "Unable to open app" not in page.inner_text("#loading")


@pytest.mark.parametrize("event_name", ["blur", "pagehide"])
def test_blur_or_pagehide_counts_as_handoff(page, event_name: str) -> None:
    _load(page)

    page.click("#return-btn")
    page.evaluate("(name) => window.dispatchEvent(new Event(name))", event_name)
    page.clock.run_for(2100)

    assert page.is_hidden("#return-btn")
    assert page.inner_text("#loading-text") == "Opening app..."


def test_no_signal_shows_try_again(page) -> None:
    _load(page)

    page.click("#return-btn")
    page.clock.run_for(1500)
    assert page.is_hidden("#return-btn")

    page.clock.run_for(600)

    assert page.is_visible("#return-btn")
    assert page.inner_text("#return-btn") == "Try Again"
    assert (
        page.inner_text("#loading-text")
        == "Unable to open app. Please try again or close this page."
    )


def test_try_again_rearms_a_fresh_window(page) -> None:
    _load(page)

    page.click("#return-btn")
    page.clock.run_for(2100)
    assert page.inner_text("#return-btn") == "Try Again"

    page.click("#return-btn")

    assert _navigations(page) == [EXPO_TARGET, EXPO_TARGET]
    assert page.is_hidden("#return-btn")
    assert page.inner_text("#loading-text") == "Opening app..."

    page.clock.run_for(1500)
    assert page.is_hidden("#return-btn")

    page.clock.run_for(600)
    assert page.is_visible("#return-btn")
    assert page.inner_text("#return-btn") == "Try Again"


def test_minimal_variant_only_logs_to_console(page) -> None:
    messages: list[str] = []
    page.on("console", lambda msg: messages.append(msg.text))
    _load(page, ReturnPageOptions(loading_indicator=False))

    page.click("#return-btn")
    page.clock.run_for(2100)

    assert _navigations(page) == [EXPO_TARGET]
    assert "App may not have opened" in messages
    assert page.is_visible("#return-btn")
    assert page.inner_text("#return-btn") == "Return to App"
    assert page.query_selector("#loading") is None
