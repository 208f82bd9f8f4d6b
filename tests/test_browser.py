"""Browser-level checks: fallback mounting, error capture and bounded navigation.

Skipped when Playwright's Chromium is not installed.
"""
from __future__ import annotations

import time
from urllib.parse import quote

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from kyros_site.capability import FallbackPolicy
from kyros_site.presets import select_preset
from kyros_site.probes import DEFAULT_READY_EXPRESSION, count_canvases, read_page_state
from kyros_site.session import SessionOptions, run_session_with
from kyros_site.site import render_index

pytestmark = pytest.mark.browser

SITE = "http://kyros.test/"
MAC_SAFARI_UA = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.0 Safari/605.1.15"
)

NO_WEBGL_JS = """
(() => {
    const original = HTMLCanvasElement.prototype.getContext;
    HTMLCanvasElement.prototype.getContext = function (type, ...rest) {
        if (type === 'webgl' || type === 'experimental-webgl' || type === 'webgl2') return null;
        return original.call(this, type, ...rest);
    };
})();
"""

# Minimal stand-in context so the 3D path runs the same on GPU-less machines.
FAKE_WEBGL_JS = """
(() => {
    const original = HTMLCanvasElement.prototype.getContext;
    const fake = {
        MAX_TEXTURE_SIZE: 0x0D33,
        MAX_VERTEX_ATTRIBS: 0x8869,
        COLOR_BUFFER_BIT: 0x4000,
        getExtension: () => null,
        getParameter: () => 4096,
        viewport: () => {},
        clearColor: () => {},
        clear: () => {},
    };
    HTMLCanvasElement.prototype.getContext = function (type, ...rest) {
        if (type === 'webgl' || type === 'experimental-webgl') return fake;
        return original.call(this, type, ...rest);
    };
})();
"""

# Reports a heap at 97 % of its limit.
HEAVY_HEAP_JS = """
Object.defineProperty(performance, "memory", {
    configurable: true,
    get: () => ({
        usedJSHeapSize: 97 * 1024 * 1024,
        totalJSHeapSize: 98 * 1024 * 1024,
        jsHeapSizeLimit: 100 * 1024 * 1024,
    }),
});
"""


@pytest.fixture(scope="module")
def pw():
    with sync_playwright() as p:
        try:
            browser = p.chromium.launch()
        except PlaywrightError as e:
            pytest.skip(f"Chromium unavailable: {e.message}")
        browser.close()
        yield p


@pytest.fixture
def site_page(pw):
    """Returns a loader that serves the rendered index with init scripts installed."""
    browser = pw.chromium.launch()

    def load(*init_scripts: str, preset=None, policy=None, **page_options):
        html = render_index(preset or select_preset(""), policy)
        page = browser.new_page(**page_options)
        for script in init_scripts:
            page.add_init_script(script)
        page.route(SITE, lambda route: route.fulfill(status=200, content_type="text/html", body=html))
        page.goto(SITE, wait_until="load")
        page.wait_for_function(DEFAULT_READY_EXPRESSION, timeout=5000)
        return page

    yield load
    browser.close()


def test_webgl_unavailable_mounts_single_fallback_canvas(site_page) -> None:
    page = site_page(NO_WEBGL_JS)

    assert count_canvases(page) == {"total": 1, "scene": 0, "fallback": 1}
    state = read_page_state(page)
    assert state.mode == "fallback"
    assert state.fallback_reason == "no-context"
    assert state.fallback_mounts == 1
    assert page.query_selector('[data-role="fallback-notice"]') is not None


def test_context_loss_switches_to_fallback_once(site_page) -> None:
    page = site_page(FAKE_WEBGL_JS)
    assert read_page_state(page).mode == "3d"
    assert count_canvases(page) == {"total": 1, "scene": 1, "fallback": 0}

    page.evaluate("""() => {
        const scene = document.querySelector('canvas[data-role="scene"]');
        scene.dispatchEvent(new Event('webglcontextlost', { cancelable: true }));
        scene.dispatchEvent(new Event('webglcontextlost', { cancelable: true }));
    }""")

    assert count_canvases(page) == {"total": 1, "scene": 0, "fallback": 1}
    state = read_page_state(page)
    assert state.mode == "fallback"
    assert state.fallback_reason == "context-lost"
    assert state.fallback_mounts == 1


def test_heap_pressure_switches_protected_preset_to_fallback(site_page) -> None:
    page = site_page(
        FAKE_WEBGL_JS,
        HEAVY_HEAP_JS,
        preset=select_preset(MAC_SAFARI_UA),
        policy=FallbackPolicy(memory_check_ms=100),
    )
    page.wait_for_function("() => window.__kyros.mode === 'fallback'", timeout=5000)

    assert count_canvases(page) == {"total": 1, "scene": 0, "fallback": 1}
    state = read_page_state(page)
    assert state.fallback_reason == "low-memory"
    assert state.fallback_mounts == 1


def test_unprotected_preset_ignores_heap_pressure(site_page) -> None:
    page = site_page(FAKE_WEBGL_JS, HEAVY_HEAP_JS, policy=FallbackPolicy(memory_check_ms=100))
    page.wait_for_timeout(500)

    assert read_page_state(page).mode == "3d"
    assert count_canvases(page) == {"total": 1, "scene": 1, "fallback": 0}


def test_fallback_canvas_follows_pixel_ratio_and_resize(site_page) -> None:
    page = site_page(NO_WEBGL_JS, device_scale_factor=2, viewport={"width": 640, "height": 480})
    size = """() => {
        const canvas = document.querySelector('canvas[data-role="fallback"]');
        return [canvas.width, canvas.height, canvas.getContext('2d').getTransform().a];
    }"""
    assert page.evaluate(size) == [1280, 960, 2]

    page.set_viewport_size({"width": 400, "height": 300})
    page.wait_for_function(
        "() => document.querySelector('canvas[data-role=\"fallback\"]').width === 800", timeout=5000
    )
    assert page.evaluate(size) == [800, 600, 2]


def test_sync_script_error_recorded_verbatim(pw) -> None:
    url = "data:text/html," + quote("<script>throw new Error('kyros-load-failure: 42')</script>")
    result = run_session_with(pw, SessionOptions(url=url, wait_until="load", settle_ms=200))

    assert result.success
    assert "kyros-load-failure: 42" in result.page_errors


def test_unreachable_url_reports_navigation_failure(pw) -> None:
    start = time.monotonic()
    result = run_session_with(
        pw,
        SessionOptions(url="http://127.0.0.1:9/", navigation_timeout_ms=3000, settle_ms=0),
    )
    elapsed = time.monotonic() - start

    assert not result.success
    assert result.failed_stage == "navigation"
    assert result.error
    assert result.load_time_ms is None
    assert elapsed < 30


def test_readiness_timeout_is_reported(pw) -> None:
    result = run_session_with(
        pw,
        SessionOptions(
            url="data:text/html,<p>no scene</p>",
            wait_until="load",
            ready_expression=DEFAULT_READY_EXPRESSION,
            ready_timeout_ms=500,
            settle_ms=0,
        ),
    )

    assert not result.success
    assert result.failed_stage == "readiness"
