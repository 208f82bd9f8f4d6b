"""One diagnostic run: one browser, one page, one result record."""

from __future__ import annotations

import logging
import time
from pathlib import Path

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Playwright, sync_playwright
from pydantic import BaseModel, Field

from . import probes
from .capability import FallbackDecision, FallbackPolicy, WebGLProbe, evaluate_probe
from .collector import SessionCollector
from .metrics import FrameRateStats, MemoryStats, summarize_frame_rates, summarize_memory
from .profiles import DeviceProfile

logger = logging.getLogger(__name__)


class Screenshot(BaseModel):
    path: str
    delay_ms: int = 0
    full_page: bool = False


class SessionOptions(BaseModel):
    url: str
    profile: DeviceProfile = DeviceProfile(name="Default")
    headless: bool = True
    browser_args: list[str] = Field(default_factory=list)
    wait_until: str = "networkidle"
    navigation_timeout_ms: int = 15000
    ready_expression: str | None = None
    ready_timeout_ms: int = 15000
    settle_ms: int = 5000
    screenshots: list[Screenshot] = Field(default_factory=list)
    watch: list[str] = Field(default_factory=list)
    probe_webgl: bool = False
    sample_performance: bool = False
    stabilize_ms: int = 3000
    performance_window_ms: int = 10000
    interact_target: str | None = None
    init_scripts: list[str] = Field(default_factory=list)


class SessionResult(BaseModel):
    name: str
    url: str
    is_mobile: bool = False
    memory_limit_mb: int | None = None
    success: bool = False
    failed_stage: str | None = None
    error: str | None = None
    load_time_ms: int | None = None
    console: list[str] = Field(default_factory=list)
    page_errors: list[str] = Field(default_factory=list)
    error_stacks: list[str] = Field(default_factory=list)
    failed_requests: list[str] = Field(default_factory=list)
    watched_responses: list[str] = Field(default_factory=list)
    crashes: list[str] = Field(default_factory=list)
    tracked_errors: list[dict] = Field(default_factory=list)
    canvas_present: bool = False
    webgl: WebGLProbe | None = None
    fallback: FallbackDecision | None = None
    page_state: probes.PageState | None = None
    frame_rates: FrameRateStats | None = None
    memory: MemoryStats | None = None
    interaction: probes.InteractionResult | None = None
    screenshots: list[str] = Field(default_factory=list)


def run_session(options: SessionOptions, policy: FallbackPolicy | None = None) -> SessionResult:
    """Launch Chromium, observe the page, and close it again."""
    with sync_playwright() as p:
        return run_session_with(p, options, policy)


def run_session_with(
    p: Playwright, options: SessionOptions, policy: FallbackPolicy | None = None
) -> SessionResult:
    """Run one session on an already started Playwright driver.

    Navigation and readiness failures, timeouts included, end the session
    early with success=False; they are never retried. A browser that cannot
    be launched at all raises.
    """
    profile = options.profile
    result = SessionResult(
        name=profile.name,
        url=options.url,
        is_mobile=profile.is_mobile,
        memory_limit_mb=profile.memory_limit_mb,
    )
    collector = SessionCollector(watch=options.watch)

    browser = p.chromium.launch(headless=options.headless, args=options.browser_args)
    stage = "setup"
    try:
        context = browser.new_context(**profile.context_options())
        context.add_init_script(probes.ERROR_TRACKER_JS)
        if options.sample_performance:
            context.add_init_script(probes.PERFORMANCE_MONITOR_JS)
        for script in options.init_scripts:
            context.add_init_script(script)
        page = context.new_page()
        collector.attach(page)

        stage = "navigation"
        logger.info("Loading %s as %s", options.url, profile.name)
        start = time.monotonic()
        page.goto(options.url, wait_until=options.wait_until, timeout=options.navigation_timeout_ms)

        if options.ready_expression:
            stage = "readiness"
            page.wait_for_function(options.ready_expression, timeout=options.ready_timeout_ms)
        result.load_time_ms = int((time.monotonic() - start) * 1000)
        logger.info("Loaded %s in %dms", options.url, result.load_time_ms)

        stage = "observation"
        page.wait_for_timeout(options.settle_ms)
        for shot in options.screenshots:
            if shot.delay_ms:
                page.wait_for_timeout(shot.delay_ms)
            Path(shot.path).parent.mkdir(parents=True, exist_ok=True)
            page.screenshot(path=shot.path, full_page=shot.full_page)
            result.screenshots.append(shot.path)
            logger.info("Screenshot saved to %s", shot.path)

        result.canvas_present = probes.has_canvas(page)
        if options.probe_webgl:
            result.webgl = probes.read_webgl_info(page)
            result.fallback = evaluate_probe(result.webgl, policy)

        if options.sample_performance:
            page.wait_for_timeout(options.stabilize_ms)
            page.wait_for_timeout(options.performance_window_ms)
            result.frame_rates = summarize_frame_rates(probes.read_frame_rates(page))
            result.memory = summarize_memory(probes.read_memory_samples(page))

        if options.interact_target:
            result.interaction = probes.exercise_interactions(
                page, options.interact_target, touch=profile.has_touch
            )

        result.page_state = probes.read_page_state(page)
        result.tracked_errors = probes.read_tracked_errors(page)
        result.success = True
    except PlaywrightError as e:
        logger.error("%s failed for %s: %s", stage.capitalize(), options.url, e.message)
        result.failed_stage = stage
        result.error = e.message
    finally:
        result.console = list(collector.console)
        result.page_errors = list(collector.page_errors)
        result.error_stacks = list(collector.error_stacks)
        result.failed_requests = list(collector.failed_requests)
        result.watched_responses = list(collector.watched_responses)
        result.crashes = list(collector.crashes)
        browser.close()

    return result
