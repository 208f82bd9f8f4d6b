from __future__ import annotations

from kyros_site.capability import (
    FallbackPolicy,
    FallbackReason,
    WebGLProbe,
    evaluate_probe,
)


def good_probe(**overrides) -> WebGLProbe:
    values = {
        "supported": True,
        "vendor": "Google Inc. (NVIDIA)",
        "renderer": "ANGLE (NVIDIA GeForce RTX 3060)",
        "max_texture_size": 16384,
        "max_vertex_attribs": 16,
    }
    values.update(overrides)
    return WebGLProbe(**values)


def test_capable_context_keeps_3d() -> None:
    decision = evaluate_probe(good_probe())
    assert not decision.use_fallback
    assert decision.reason is None


def test_missing_context_falls_back() -> None:
    decision = evaluate_probe(WebGLProbe(supported=False))
    assert decision.use_fallback
    assert decision.reason is FallbackReason.NO_CONTEXT


def test_blocklisted_renderer_falls_back() -> None:
    decision = evaluate_probe(good_probe(renderer="Mesa DRI Intel(R) HD Graphics"))
    assert decision.reason is FallbackReason.BLOCKLISTED_DRIVER
    assert decision.detail == "Mesa"


def test_blocklisted_vendor_falls_back() -> None:
    decision = evaluate_probe(good_probe(vendor="Intel HD Graphics 4000"))
    assert decision.reason is FallbackReason.BLOCKLISTED_DRIVER


def test_limits_below_floor_fall_back() -> None:
    assert evaluate_probe(good_probe(max_texture_size=512)).reason is FallbackReason.LIMITED_CAPABILITIES
    assert evaluate_probe(good_probe(max_vertex_attribs=4)).reason is FallbackReason.LIMITED_CAPABILITIES
    assert evaluate_probe(good_probe(max_texture_size=None)).reason is FallbackReason.LIMITED_CAPABILITIES


def test_limits_at_floor_are_accepted() -> None:
    assert not evaluate_probe(good_probe(max_texture_size=1024, max_vertex_attribs=8)).use_fallback


def test_probe_error_wins_over_everything() -> None:
    decision = evaluate_probe(WebGLProbe(supported=False, error="SecurityError"))
    assert decision.reason is FallbackReason.PROBE_FAILED
    assert decision.detail == "SecurityError"


def test_unknown_driver_strings_skip_blocklist() -> None:
    assert not evaluate_probe(good_probe(renderer=None, vendor=None)).use_fallback


def test_custom_policy_floor_and_blocklist() -> None:
    policy = FallbackPolicy(blocklist=["GeForce"], min_texture_size=32768)
    assert evaluate_probe(good_probe(), policy).reason is FallbackReason.BLOCKLISTED_DRIVER
    policy = FallbackPolicy(blocklist=[], min_texture_size=32768)
    assert evaluate_probe(good_probe(), policy).reason is FallbackReason.LIMITED_CAPABILITIES


def test_default_policy_heap_thresholds() -> None:
    policy = FallbackPolicy()
    assert (policy.memory_check_ms, policy.memory_warn_percent, policy.memory_fallback_percent) == (5000, 80.0, 95.0)
    assert FallbackReason("low-memory") is FallbackReason.LOW_MEMORY
