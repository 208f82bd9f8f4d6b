"""Frame-rate and heap summaries over the samples collected in a session."""

from __future__ import annotations

from typing import Any

import numpy as np
from pydantic import BaseModel

LOW_FPS = 30.0
STUTTER_FPS = 20.0
MAX_SMOOTH_STD = 10.0
HIGH_MEMORY_PERCENT = 80.0

_MB = 1024 * 1024


class FrameRateStats(BaseModel):
    samples: int = 0
    average: float = 0.0
    minimum: float = 0.0
    maximum: float = 0.0
    std_dev: float = 0.0
    frame_drops: int = 0
    consistency_score: float = 0.0
    smooth: bool = False
    reason: str | None = None


class MemoryStats(BaseModel):
    samples: int = 0
    peak_mb: float = 0.0
    average_mb: float = 0.0
    limit_mb: float = 0.0
    usage_percent: float = 0.0
    high_usage: bool = False


def summarize_frame_rates(frame_rates: list[float]) -> FrameRateStats:
    """Aggregate per-second FPS samples.

    An animation counts as smooth when it averages at least 30 fps with a
    standard deviation under 10 and never dips below 20 fps.
    """
    if not frame_rates:
        return FrameRateStats(reason="No frame data")

    fps = np.asarray(frame_rates, dtype=float)
    average = float(fps.mean())
    std = float(fps.std())
    smooth = average >= LOW_FPS and std < MAX_SMOOTH_STD and not bool((fps < STUTTER_FPS).any())
    return FrameRateStats(
        samples=int(fps.size),
        average=average,
        minimum=float(fps.min()),
        maximum=float(fps.max()),
        std_dev=std,
        frame_drops=int((fps < LOW_FPS).sum()),
        consistency_score=max(0.0, 100.0 - std),
        smooth=smooth,
    )


def summarize_memory(samples: list[dict[str, Any]]) -> MemoryStats:
    """Aggregate heap samples; the limit comes from the first sample."""
    if not samples:
        return MemoryStats()

    used = np.asarray([s["used"] for s in samples], dtype=float)
    limit = float(samples[0].get("limit") or 0)
    peak = float(used.max())
    usage = (peak / limit) * 100 if limit else 0.0
    return MemoryStats(
        samples=int(used.size),
        peak_mb=peak / _MB,
        average_mb=float(used.mean()) / _MB,
        limit_mb=limit / _MB,
        usage_percent=usage,
        high_usage=usage > HIGH_MEMORY_PERCENT,
    )
