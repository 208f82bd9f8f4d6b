"""Diagnostic reports: building, recommendations, JSON persistence and console summary."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .capability import WebGLProbe
from .metrics import LOW_FPS
from .session import SessionResult

logger = logging.getLogger(__name__)


class ReportSummary(BaseModel):
    total_tests: int
    successful_tests: int
    success_rate: float


class CrashPoint(BaseModel):
    config: str
    error: str


class Recommendation(BaseModel):
    category: str
    priority: str
    issue: str
    items: list[str]


class DiagnosticReport(BaseModel):
    timestamp: str
    title: str
    summary: ReportSummary
    results: dict[str, SessionResult] = Field(default_factory=dict)
    crash_points: list[CrashPoint] = Field(default_factory=list)
    webgl_capabilities: WebGLProbe | None = None
    recommendations: list[Recommendation] = Field(default_factory=list)


class SuiteSummary(BaseModel):
    total_tests: int = 0
    passed_tests: int = 0
    success_rate: float = 0.0
    found: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)
    unreadable: dict[str, str] = Field(default_factory=dict)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def crash_points(results: list[SessionResult]) -> list[CrashPoint]:
    points = []
    for r in results:
        if not r.success and r.error:
            points.append(CrashPoint(config=r.name, error=r.error))
        for crash in r.crashes:
            points.append(CrashPoint(config=r.name, error=crash))
    return points


def recommend(results: list[SessionResult], points: list[CrashPoint]) -> list[Recommendation]:
    """Derive follow-up recommendations from a set of session results."""
    recommendations: list[Recommendation] = []

    mobile_fps = [
        r.frame_rates.average
        for r in results
        if r.is_mobile and r.success and r.frame_rates and r.frame_rates.samples
    ]
    if mobile_fps and sum(mobile_fps) / len(mobile_fps) < LOW_FPS:
        recommendations.append(Recommendation(
            category="Mobile Performance",
            priority="High",
            issue="Low frame rates on mobile devices",
            items=[
                "Reduce star count from 400 to 150-200 on mobile",
                "Implement texture atlasing",
                "Add mobile-specific LOD system",
                "Use compressed texture formats (ASTC, ETC2)",
            ],
        ))

    if any(r.success and r.memory and r.memory.high_usage for r in results):
        recommendations.append(Recommendation(
            category="Memory",
            priority="Medium",
            issue="Heap usage above 80% of the limit",
            items=[
                "Implement texture compression",
                "Add memory pooling",
                "Implement progressive loading",
            ],
        ))

    mobile_names = {r.name for r in results if r.is_mobile}
    if any(p.config in mobile_names for p in points):
        recommendations.append(Recommendation(
            category="Mobile Optimization",
            priority="High",
            issue="Sessions failed on mobile profiles",
            items=[
                "Reduce WebGL texture sizes",
                "Add mobile-specific LOD (Level of Detail) system",
                "Implement memory pooling for scene objects",
                "Consider fallback for older iOS versions",
            ],
        ))

    if any("webgl" in p.error.lower() or "context" in p.error.lower() for p in points):
        recommendations.append(Recommendation(
            category="WebGL Stability",
            priority="Critical",
            issue="Failures mention WebGL or context loss",
            items=[
                "Add WebGL context loss/restore handlers",
                "Fall back to Canvas 2D rendering",
                "Add error boundaries around renderer initialization",
                "Use WebGL 1.0 compatibility mode for older devices",
            ],
        ))

    return recommendations


def build_report(
    title: str,
    results: list[SessionResult],
    webgl_capabilities: WebGLProbe | None = None,
) -> DiagnosticReport:
    total = len(results)
    successful = sum(1 for r in results if r.success)
    points = crash_points(results)
    return DiagnosticReport(
        timestamp=_now_iso(),
        title=title,
        summary=ReportSummary(
            total_tests=total,
            successful_tests=successful,
            success_rate=(successful / total) * 100 if total else 0.0,
        ),
        results={r.name: r for r in results},
        crash_points=points,
        webgl_capabilities=webgl_capabilities,
        recommendations=recommend(results, points),
    )


def write_report(report: DiagnosticReport, path: str | Path) -> Path:
    """Write the report as indented JSON. The file is overwritten in place."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report.model_dump_json(indent=2), encoding="utf-8")
    logger.info("Report saved to %s", path)
    return path


def load_report(path: str | Path) -> DiagnosticReport:
    return DiagnosticReport.model_validate_json(Path(path).read_text(encoding="utf-8"))


def summarize_reports(paths: list[str | Path]) -> SuiteSummary:
    """Combine the summaries of several report files; missing files are listed, not fatal."""
    summary = SuiteSummary()
    for path in map(Path, paths):
        if not path.exists():
            summary.missing.append(str(path))
            continue
        try:
            report = load_report(path)
        except (OSError, ValidationError) as e:
            logger.warning("Could not parse report %s: %s", path, e)
            summary.unreadable[str(path)] = str(e)
            continue
        summary.found.append(str(path))
        summary.total_tests += report.summary.total_tests
        summary.passed_tests += report.summary.successful_tests
    if summary.total_tests:
        summary.success_rate = (summary.passed_tests / summary.total_tests) * 100
    return summary


def format_session(result: SessionResult) -> list[str]:
    lines = [f"   {result.name}:"]
    if not result.success:
        lines.append(f"     Failed ({result.failed_stage}): {result.error}")
        return lines
    lines.append(f"     Load time: {result.load_time_ms}ms")
    if result.webgl:
        lines.append(f"     WebGL: {'Supported' if result.webgl.supported else 'Not supported'}")
        if result.webgl.supported:
            lines.append(f"     Renderer: {result.webgl.renderer}")
    if result.frame_rates:
        fr = result.frame_rates
        lines.append(f"     FPS: {fr.average:.1f} ({fr.frame_drops} drops)")
        lines.append(f"     Smooth: {'Yes' if fr.smooth else 'No'} ({fr.consistency_score:.1f}% consistency)")
    if result.memory:
        m = result.memory
        lines.append(f"     Memory: {m.peak_mb:.1f}MB / {m.limit_mb:.1f}MB ({m.usage_percent:.1f}%)")
    if result.interaction:
        lines.append(f"     Interaction: {'Responsive' if result.interaction.success else 'Issues detected'}")
    if result.page_state:
        lines.append(f"     Render mode: {result.page_state.mode}")
    if result.page_errors:
        lines.append(f"     Page errors: {len(result.page_errors)}")
    return lines


def format_report(report: DiagnosticReport) -> str:
    """Human-readable console summary of a report."""
    s = report.summary
    lines = [
        report.title,
        "=" * 60,
        f"Overall Results: {s.successful_tests}/{s.total_tests} tests passed ({s.success_rate:.1f}%)",
        "",
        "Crash Points:",
    ]
    if report.crash_points:
        lines.extend(f"   {i}. {p.config}: {p.error}" for i, p in enumerate(report.crash_points, 1))
    else:
        lines.append("   No crashes detected")

    lines.append("")
    lines.append("Sessions:")
    for result in report.results.values():
        lines.extend(format_session(result))

    if report.webgl_capabilities:
        caps = report.webgl_capabilities
        lines.append("")
        lines.append(f"WebGL: {'Supported' if caps.supported else 'Not supported - fallback needed'}")
        if caps.supported:
            lines.append(f"   Renderer: {caps.renderer}")
            lines.append(f"   Max texture size: {caps.max_texture_size}x{caps.max_texture_size}")

    lines.append("")
    lines.append("Recommendations:")
    if report.recommendations:
        for rec in report.recommendations:
            lines.append(f"   [{rec.priority}] {rec.category}: {rec.issue}")
            lines.extend(f"     - {item}" for item in rec.items)
    else:
        lines.append("   None")
    return "\n".join(lines)
