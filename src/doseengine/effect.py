# src/doseengine/effect.py
from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from . import config
from .classify import classify
from .geometry import cumulative_total
from .phases import WALK_ORDER
from .types import DosageTier, IngestionEvent, RouteProfile
from .units import TimeUnit, convert_time


def lerp(a: float, b: float, t: float) -> float:
    return a * (1.0 - t) + b * t


def _contribution(phase_name: str, remaining_h: float, length_h: float) -> float:
    if phase_name == "onset":
        return 0.0
    if phase_name == "peak":
        return 1.0
    # Zero-length phase reached exactly at its boundary counts as finished.
    t = remaining_h / length_h if length_h > 0 else 1.0
    if phase_name == "comeup":
        return lerp(0.0, 1.0, t)
    return lerp(1.0, 0.0, t)  # offset


def effect(route_profile: RouteProfile, ingestion: IngestionEvent, elapsed_hours: float) -> float:
    """
    Effect intensity in [0, 1] at `elapsed_hours` after the ingestion.

    Doses below threshold give 0 without looking at the timings. Otherwise
    elapsed time is spent against onset, comeup, peak and offset in that
    order, each phase lasting its midpoint (in hours):
      onset  -> 0
      comeup -> rises linearly 0 -> 1
      peak   -> 1
      offset -> falls linearly 1 -> 0
    Absent phases take no time. Past the end of offset the effect is 0.
    Afterglow is not part of the walk.
    """
    if classify(route_profile, ingestion) is DosageTier.BELOW_THRESHOLD:
        return 0.0
    if elapsed_hours < 0:
        return 0.0

    remaining = float(elapsed_hours)
    for name in WALK_ORDER:
        phase = getattr(route_profile.phases, name)
        if phase is None:
            continue
        length = phase.as_hours().midpoint
        if remaining <= length:
            return _contribution(name, remaining, length)
        remaining -= length

    return 0.0


def sample_effect(route_profile: RouteProfile, ingestion: IngestionEvent,
                  t_end_h: Optional[float] = None, dt_h: float = config.SAMPLE_DT_H) -> Tuple[np.ndarray, np.ndarray]:
    """
    Sample the effect curve on a regular grid.

    t_end_h : horizon in hours (default: the end of the offset phase)
    dt_h    : sampling step in hours (default DOSEENGINE_SAMPLE_DT_H)

    Returns:
      t : array of time points (hours), starting at 0
      E : array of intensities in [0, 1]
    """
    if not (dt_h > 0):
        raise ValueError(f"dt_h must be > 0 (got {dt_h}).")
    if t_end_h is None:
        t_end_h = convert_time(cumulative_total(route_profile), TimeUnit.SECONDS, TimeUnit.HOURS)
    if t_end_h < 0:
        raise ValueError(f"t_end_h must be >= 0 (got {t_end_h}).")

    t = np.arange(0.0, t_end_h + dt_h / 2.0, dt_h)
    E = np.fromiter((effect(route_profile, ingestion, float(x)) for x in t), dtype=float, count=t.size)
    return t, E
