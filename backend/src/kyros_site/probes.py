"""JavaScript probes evaluated inside the page, and their Python readers."""

from __future__ import annotations

import logging
from typing import Any

from playwright.sync_api import Error as PlaywrightError
from pydantic import BaseModel

from .capability import WebGLProbe

logger = logging.getLogger(__name__)

WEBGL_INFO_JS = """() => {
    try {
        const canvas = document.createElement('canvas');
        const gl = canvas.getContext('webgl') || canvas.getContext('experimental-webgl');
        if (!gl) return { supported: false };
        const debugInfo = gl.getExtension('WEBGL_debug_renderer_info');
        return {
            supported: true,
            version: String(gl.getParameter(gl.VERSION)),
            vendor: debugInfo ? String(gl.getParameter(debugInfo.UNMASKED_VENDOR_WEBGL)) : 'Unknown',
            renderer: debugInfo ? String(gl.getParameter(debugInfo.UNMASKED_RENDERER_WEBGL)) : 'Unknown',
            max_texture_size: gl.getParameter(gl.MAX_TEXTURE_SIZE),
            max_vertex_attribs: gl.getParameter(gl.MAX_VERTEX_ATTRIBS),
            max_varying_vectors: gl.getParameter(gl.MAX_VARYING_VECTORS),
            extensions: gl.getSupportedExtensions() || [],
        };
    } catch (e) {
        return { supported: false, error: String(e) };
    }
}"""

# Installed before any page script runs: one FPS sample per second, heap every 2 s.
PERFORMANCE_MONITOR_JS = """
window.__diagnostics = window.__diagnostics || { frameRates: [], memory: [], errors: [] };
(() => {
    const metrics = window.__diagnostics;
    let lastTime = performance.now();
    let frames = 0;
    const tick = () => {
        frames++;
        const now = performance.now();
        if (now - lastTime >= 1000) {
            metrics.frameRates.push((frames * 1000) / (now - lastTime));
            frames = 0;
            lastTime = now;
        }
        requestAnimationFrame(tick);
    };
    requestAnimationFrame(tick);
    setInterval(() => {
        if (performance.memory) {
            metrics.memory.push({
                used: performance.memory.usedJSHeapSize,
                total: performance.memory.totalJSHeapSize,
                limit: performance.memory.jsHeapSizeLimit,
                timestamp: Date.now(),
            });
        }
    }, 2000);
})();
"""

ERROR_TRACKER_JS = """
window.__diagnostics = window.__diagnostics || { frameRates: [], memory: [], errors: [] };
window.addEventListener('error', (e) => {
    window.__diagnostics.errors.push({
        type: 'error',
        message: e.message,
        filename: e.filename,
        lineno: e.lineno,
        colno: e.colno,
        timestamp: Date.now(),
    });
});
window.addEventListener('unhandledrejection', (e) => {
    window.__diagnostics.errors.push({
        type: 'unhandledrejection',
        reason: e.reason ? String(e.reason) : null,
        timestamp: Date.now(),
    });
});
"""

PAGE_STATE_JS = """() => {
    const state = window.__kyros;
    if (!state) return null;
    return {
        ready: !!state.ready,
        mode: state.mode || null,
        fallback_reason: state.fallbackReason || null,
        fallback_mounts: state.fallbackMounts || 0,
    };
}"""

COUNT_CANVASES_JS = """() => {
    const all = document.querySelectorAll('canvas');
    return {
        total: all.length,
        scene: document.querySelectorAll('canvas[data-role="scene"]').length,
        fallback: document.querySelectorAll('canvas[data-role="fallback"]').length,
    };
}"""

DEFAULT_READY_EXPRESSION = "() => !!(window.__kyros && window.__kyros.ready)"


class PageState(BaseModel):
    ready: bool = False
    mode: str | None = None
    fallback_reason: str | None = None
    fallback_mounts: int = 0


class InteractionResult(BaseModel):
    success: bool
    response_time_ms: int | None = None
    error: str | None = None


def read_webgl_info(page: Any) -> WebGLProbe:
    return WebGLProbe.model_validate(page.evaluate(WEBGL_INFO_JS))


def read_page_state(page: Any) -> PageState | None:
    raw = page.evaluate(PAGE_STATE_JS)
    return PageState.model_validate(raw) if raw else None


def count_canvases(page: Any) -> dict[str, int]:
    return page.evaluate(COUNT_CANVASES_JS)


def has_canvas(page: Any) -> bool:
    return page.query_selector("canvas") is not None


def read_frame_rates(page: Any) -> list[float]:
    return page.evaluate("() => (window.__diagnostics && window.__diagnostics.frameRates) || []")


def read_memory_samples(page: Any) -> list[dict[str, float]]:
    return page.evaluate("() => (window.__diagnostics && window.__diagnostics.memory) || []")


def read_tracked_errors(page: Any) -> list[dict[str, Any]]:
    return page.evaluate("() => (window.__diagnostics && window.__diagnostics.errors) || []")


def exercise_interactions(page: Any, target: str, touch: bool) -> InteractionResult:
    """Tap or click the target, then drag across the viewport centre."""
    start = page.evaluate("() => Date.now()")
    viewport = page.viewport_size or {"width": 800, "height": 600}
    cx = viewport["width"] / 2
    cy = viewport["height"] / 2
    try:
        if touch:
            page.tap(target, timeout=5000)
            page.wait_for_timeout(100)
            page.touchscreen.tap(cx, cy)
        else:
            page.click(target, timeout=5000)
            page.wait_for_timeout(100)
        page.mouse.move(cx, cy)
        page.mouse.down()
        page.mouse.move(cx + 50, cy + 50)
        page.mouse.up()
    except PlaywrightError as e:
        logger.warning("Interaction failed on %s: %s", target, e.message)
        return InteractionResult(success=False, error=e.message)
    elapsed = page.evaluate("() => Date.now()") - start
    return InteractionResult(success=True, response_time_ms=int(elapsed))
