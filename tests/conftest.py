"""Shared fixtures: a small hand-built substance with one documented route."""

import sys
from datetime import datetime, timezone
from pathlib import Path

SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

import pytest

from doseengine.phases import PhaseRange, PhaseSet
from doseengine.types import DoseMetadata, DoseRange, RouteKind, RouteProfile, Substance
from doseengine.units import MassUnit, TimeUnit

T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def sublingual_lsd() -> RouteProfile:
    """Roughly the wiki's sublingual LSD entry (µg doses, mixed time units)."""
    return RouteProfile(
        route=RouteKind.SUBLINGUAL,
        dose=DoseMetadata(
            unit=MassUnit.UG,
            threshold=15.0,
            heavy=300.0,
            light=DoseRange(25.0, 75.0),
            common=DoseRange(75.0, 150.0),
            strong=DoseRange(150.0, 300.0),
        ),
        phases=PhaseSet(
            onset=PhaseRange(15.0, 45.0, TimeUnit.MINUTES),   # midpoint 0.5 h
            comeup=PhaseRange(45.0, 75.0, TimeUnit.MINUTES),  # midpoint 1.0 h
            peak=PhaseRange(3.0, 5.0, TimeUnit.HOURS),        # midpoint 4.0 h
            offset=PhaseRange(3.0, 5.0, TimeUnit.HOURS),      # midpoint 4.0 h
            afterglow=PhaseRange(12.0, 48.0, TimeUnit.HOURS),
            total=PhaseRange(8.0, 12.0, TimeUnit.HOURS),
        ),
    )


@pytest.fixture
def lsd(sublingual_lsd) -> Substance:
    return Substance(
        name="LSD",
        cross_tolerances=("psychedelics",),
        routes=(sublingual_lsd,),
        unsafe_interactions=("Lithium",),
    )
