"""WebGL capability probes and the decision to fall back to 2D rendering."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

DEFAULT_BLOCKLIST = (
    "Software Renderer",
    "Mesa",
    "Intel HD Graphics 3000",
    "Intel HD Graphics 4000",
)


class FallbackReason(str, Enum):
    NO_CONTEXT = "no-context"
    BLOCKLISTED_DRIVER = "blocklisted-driver"
    LIMITED_CAPABILITIES = "limited-capabilities"
    PROBE_FAILED = "probe-failed"
    CONTEXT_LOST = "context-lost"
    LOW_MEMORY = "low-memory"


class WebGLProbe(BaseModel):
    supported: bool
    version: str | None = None
    vendor: str | None = None
    renderer: str | None = None
    max_texture_size: int | None = None
    max_vertex_attribs: int | None = None
    max_varying_vectors: int | None = None
    extensions: list[str] = Field(default_factory=list)
    error: str | None = None


class FallbackPolicy(BaseModel):
    blocklist: list[str] = Field(default_factory=lambda: list(DEFAULT_BLOCKLIST))
    min_texture_size: int = 1024
    min_vertex_attribs: int = 8
    notification_ms: int = 5000
    # Heap watch, run by the page only for presets with context_loss_protection
    memory_check_ms: int = 5000
    memory_warn_percent: float = 80.0
    memory_fallback_percent: float = 95.0


class FallbackDecision(BaseModel):
    use_fallback: bool
    reason: FallbackReason | None = None
    detail: str | None = None


def blocklisted_driver(probe: WebGLProbe, policy: FallbackPolicy) -> str | None:
    """Return the first blocklisted driver name found in renderer or vendor."""
    for driver in policy.blocklist:
        if driver in (probe.renderer or "") or driver in (probe.vendor or ""):
            return driver
    return None


def evaluate_probe(probe: WebGLProbe, policy: FallbackPolicy | None = None) -> FallbackDecision:
    """Decide whether a probed context is usable for the 3D scene.

    Checks run in a fixed order and the first failing one names the reason.
    Probes without debug-renderer info skip the driver check.
    """
    policy = policy or FallbackPolicy()

    if probe.error:
        return FallbackDecision(use_fallback=True, reason=FallbackReason.PROBE_FAILED, detail=probe.error)
    if not probe.supported:
        return FallbackDecision(use_fallback=True, reason=FallbackReason.NO_CONTEXT)

    driver = blocklisted_driver(probe, policy)
    if driver:
        return FallbackDecision(
            use_fallback=True, reason=FallbackReason.BLOCKLISTED_DRIVER, detail=driver
        )

    texture = probe.max_texture_size or 0
    attribs = probe.max_vertex_attribs or 0
    if texture < policy.min_texture_size or attribs < policy.min_vertex_attribs:
        return FallbackDecision(
            use_fallback=True,
            reason=FallbackReason.LIMITED_CAPABILITIES,
            detail=f"max_texture_size={texture} max_vertex_attribs={attribs}",
        )

    return FallbackDecision(use_fallback=False)
