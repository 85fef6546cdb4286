# src/doseviz/series.py
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from doseengine import config
from doseengine.effect import sample_effect
from doseengine.geometry import comeup_distribution, estimate_points, offset_distribution
from doseengine.types import IngestionEvent, RouteProfile
from doseengine.units import TimeUnit, convert_time

Series = Tuple[np.ndarray, np.ndarray]


@dataclass(frozen=True)
class TimelineSeries:
    """
    Everything the plot draws for one ingestion, x in hours.

    curve    : sampled effect intensity
    estimate : five-vertex estimate line
    comeup   : closed polygon of possible comeups
    offset   : closed polygon of possible offsets
    """
    curve: Series
    estimate: Series
    comeup: Series
    offset: Series


def points_to_hours(points: Sequence[Tuple[float, float]]) -> Series:
    """Split (seconds, y) points into x (hours) and y arrays."""
    if not points:
        return np.zeros(0), np.zeros(0)
    xs, ys = zip(*points)
    x = np.asarray([convert_time(v, TimeUnit.SECONDS, TimeUnit.HOURS) for v in xs], dtype=float)
    return x, np.asarray(ys, dtype=float)


def build_timeline(route: RouteProfile, ingestion: IngestionEvent,
                   dt_h: float = config.SAMPLE_DT_H, t_end_h: Optional[float] = None) -> TimelineSeries:
    """
    Compute the plot series for an ingestion taken by `route`.

    The sampled curve covers the longest documented timeline unless `t_end_h`
    is given, so it never stops short of the offset polygon.
    """
    comeup = points_to_hours(comeup_distribution(route))
    offset = points_to_hours(offset_distribution(route))
    if t_end_h is None:
        t_end_h = float(np.max(offset[0])) if offset[0].size else 0.0
    return TimelineSeries(
        curve=sample_effect(route, ingestion, t_end_h=t_end_h, dt_h=dt_h),
        estimate=points_to_hours(estimate_points(route)),
        comeup=comeup,
        offset=offset,
    )
