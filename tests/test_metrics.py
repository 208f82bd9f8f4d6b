from __future__ import annotations

import pytest

from kyros_site.metrics import summarize_frame_rates, summarize_memory

MB = 1024 * 1024


def test_steady_sixty_fps_is_smooth() -> None:
    stats = summarize_frame_rates([60.0, 59.0, 61.0, 60.0])

    assert stats.samples == 4
    assert stats.average == pytest.approx(60.0)
    assert stats.minimum == 59.0
    assert stats.maximum == 61.0
    assert stats.frame_drops == 0
    assert stats.smooth
    assert stats.consistency_score == pytest.approx(100.0 - stats.std_dev)


def test_single_stutter_breaks_smoothness() -> None:
    stats = summarize_frame_rates([60.0, 60.0, 60.0, 60.0, 19.0])
    assert stats.frame_drops == 1
    assert not stats.smooth


def test_low_average_is_not_smooth() -> None:
    stats = summarize_frame_rates([25.0, 26.0, 24.0])
    assert stats.frame_drops == 3
    assert not stats.smooth


def test_high_variance_is_not_smooth() -> None:
    stats = summarize_frame_rates([30.0, 60.0, 30.0, 60.0])
    assert stats.std_dev == pytest.approx(15.0)
    assert not stats.smooth


def test_consistency_score_never_negative() -> None:
    stats = summarize_frame_rates([1.0, 500.0])
    assert stats.consistency_score == 0.0


def test_no_frames_reports_reason() -> None:
    stats = summarize_frame_rates([])
    assert stats.samples == 0
    assert not stats.smooth
    assert stats.reason == "No frame data"


def test_memory_peak_and_usage() -> None:
    samples = [
        {"used": 100 * MB, "total": 150 * MB, "limit": 200 * MB},
        {"used": 170 * MB, "total": 180 * MB, "limit": 200 * MB},
    ]
    stats = summarize_memory(samples)

    assert stats.samples == 2
    assert stats.peak_mb == pytest.approx(170.0)
    assert stats.average_mb == pytest.approx(135.0)
    assert stats.limit_mb == pytest.approx(200.0)
    assert stats.usage_percent == pytest.approx(85.0)
    assert stats.high_usage


def test_memory_without_samples_or_limit() -> None:
    assert summarize_memory([]).peak_mb == 0.0
    stats = summarize_memory([{"used": MB, "limit": 0}])
    assert stats.usage_percent == 0.0
    assert not stats.high_usage
