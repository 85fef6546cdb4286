# src/doseengine/phases.py
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import timedelta
from typing import Optional

from .units import TimeUnit, convert_time

# Phases consumed by the effect walk, in order. Afterglow is documented but never walked.
WALK_ORDER = ("onset", "comeup", "peak", "offset")


@dataclass
class PhaseRange:
    """
    A documented duration range for one phase of a substance's effects.

    start : shortest documented length of the phase, in `unit`
    end   : longest documented length of the phase, in `unit`
    unit  : time unit of start/end

    The phase's effective length is its midpoint. Only `convert_to` changes an
    instance; everything else returns new ranges.
    """
    start: float
    end: float
    unit: TimeUnit = TimeUnit.HOURS

    @classmethod
    def zero(cls) -> "PhaseRange":
        """Zero-length stand-in for an absent phase."""
        return cls(start=0.0, end=0.0, unit=TimeUnit.HOURS)

    @classmethod
    def from_bounds(cls, lo: Optional[float], hi: Optional[float], unit: TimeUnit) -> "PhaseRange":
        """Build from possibly-missing min/max values (missing -> 0)."""
        return cls(start=float(lo or 0.0), end=float(hi or 0.0), unit=unit)

    @property
    def midpoint(self) -> float:
        return (self.start + self.end) / 2.0

    @property
    def duration(self) -> timedelta:
        """Wall-clock length of `end`, for display."""
        return timedelta(seconds=convert_time(self.end, self.unit, TimeUnit.SECONDS))

    def to(self, unit: TimeUnit) -> "PhaseRange":
        """Return a copy rescaled to `unit`."""
        return replace(
            self,
            start=convert_time(self.start, self.unit, unit),
            end=convert_time(self.end, self.unit, unit),
            unit=unit,
        )

    def convert_to(self, unit: TimeUnit) -> None:
        """Rescale this range in place."""
        # Convert both bounds before touching any field so a failed conversion leaves us intact.
        start = convert_time(self.start, self.unit, unit)
        end = convert_time(self.end, self.unit, unit)
        self.start, self.end, self.unit = start, end, unit

    def as_hours(self) -> "PhaseRange":
        return self.to(TimeUnit.HOURS)

    def as_seconds(self) -> "PhaseRange":
        return self.to(TimeUnit.SECONDS)


@dataclass
class PhaseSet:
    """Optional timing phases of one route. An absent phase counts as zero-length."""
    onset: Optional[PhaseRange] = None
    comeup: Optional[PhaseRange] = None
    peak: Optional[PhaseRange] = None
    offset: Optional[PhaseRange] = None
    afterglow: Optional[PhaseRange] = None
    duration: Optional[PhaseRange] = None
    total: Optional[PhaseRange] = None

    def or_zero(self, name: str) -> PhaseRange:
        phase = getattr(self, name)
        return phase if phase is not None else PhaseRange.zero()
