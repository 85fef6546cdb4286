# src/doseengine/geometry.py
"""
Cumulative phase geometry for plotting an intensity-vs-time chart.

All x values are seconds since ingestion, y values are intensities. Absent
phases are treated as zero-length ranges.
"""
from __future__ import annotations

from typing import List, Tuple

from .phases import WALK_ORDER, PhaseRange
from .types import RouteProfile

Point = Tuple[float, float]


def _seconds(route: RouteProfile, name: str) -> PhaseRange:
    return route.phases.or_zero(name).as_seconds()


def _cumulative(route: RouteProfile, attr: str) -> List[float]:
    """Running sums of `attr` (start/end/midpoint) over onset..offset."""
    out: List[float] = []
    acc = 0.0
    for name in WALK_ORDER:
        acc += getattr(_seconds(route, name), attr)
        out.append(acc)
    return out


def cumulative_total(route: RouteProfile) -> float:
    """Time (s) at which the effect walk runs out: sum of the phase midpoints."""
    return _cumulative(route, "midpoint")[-1]


def cumulative_maximum(route: RouteProfile) -> float:
    """Latest documented end of effects (s): sum of each phase's `end`."""
    return _cumulative(route, "end")[-1]


def estimate_points(route: RouteProfile) -> List[Point]:
    """Five-vertex estimate of the curve: start, onset end, comeup end, peak end, offset end."""
    onset, comeup, peak, offset = _cumulative(route, "midpoint")
    return [
        (0.0, 0.0),
        (onset, 0.0),
        (comeup, 1.0),
        (peak, 1.0),
        (offset, 0.0),
    ]


def comeup_distribution(route: RouteProfile) -> List[Point]:
    """Closed polygon spanning the earliest and latest possible comeup."""
    onset_start, comeup_start, _, _ = _cumulative(route, "start")
    onset_end, comeup_end, _, _ = _cumulative(route, "end")
    return [
        (onset_start, 0.0),
        (onset_end, 0.0),
        (comeup_end, 1.0),
        (comeup_start, 1.0),
        (onset_start, 0.0),
    ]


def offset_distribution(route: RouteProfile) -> List[Point]:
    """Closed polygon spanning the earliest and latest possible offset."""
    _, _, peak_start, offset_start = _cumulative(route, "start")
    _, _, peak_end, offset_end = _cumulative(route, "end")
    return [
        (peak_start, 1.0),
        (peak_end, 1.0),
        (offset_end, 0.0),
        (offset_start, 0.0),
        (peak_start, 1.0),
    ]
