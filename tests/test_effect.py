import math

import numpy as np

from conftest import T0
from doseengine import config
from doseengine.effect import effect, lerp, sample_effect
from doseengine.phases import PhaseRange, PhaseSet
from doseengine.types import DoseMetadata, DoseRange, RouteKind, RouteProfile, Substance
from doseengine.units import MassUnit, TimeUnit

DOSE = DoseMetadata(unit=MassUnit.MG, common=DoseRange(10.0, 20.0))


def _route(**phases) -> RouteProfile:
    return RouteProfile(route=RouteKind.ORAL, dose=DOSE, phases=PhaseSet(**phases))


def _ingest(route: RouteProfile, amount: float = 15.0):
    return Substance(name="test", routes=(route,)).new_ingestion(amount, MassUnit.MG, T0, RouteKind.ORAL)


def test_lerp():
    assert lerp(0.0, 1.0, 0.25) == 0.25
    assert lerp(1.0, 0.0, 0.25) == 0.75


def test_comeup_boundary_returns_full_intensity():
    route = _route(comeup=PhaseRange(0.5, 1.5), peak=PhaseRange(1.0, 3.0))
    assert effect(route, _ingest(route), 1.0) == 1.0


def test_comeup_midline():
    route = _route(comeup=PhaseRange(0.0, 2.0), peak=PhaseRange(1.0, 3.0))
    assert math.isclose(effect(route, _ingest(route), 0.5), 0.5)


def test_absent_onset_same_as_zero_length_onset():
    without = _route(comeup=PhaseRange(0.0, 2.0))
    with_zero = _route(onset=PhaseRange(0.0, 0.0), comeup=PhaseRange(0.0, 2.0))
    for elapsed in (0.25, 0.5, 0.9):
        a = effect(without, _ingest(without), elapsed)
        b = effect(with_zero, _ingest(with_zero), elapsed)
        assert a == b
    assert math.isclose(effect(without, _ingest(without), 0.5), 0.5)


def test_full_walk_with_mixed_units(sublingual_lsd, lsd):
    """
    onset 0.5 h, comeup 1.0 h, peak 4.0 h, offset 4.0 h (midpoints).
    """
    ing = lsd.new_ingestion(100.0, MassUnit.UG, T0, RouteKind.SUBLINGUAL)
    e = lambda h: effect(sublingual_lsd, ing, h)

    assert e(0.0) == 0.0
    assert e(0.4) == 0.0                         # onset
    assert math.isclose(e(1.0), 0.5)             # halfway through comeup
    assert e(1.5) == 1.0                         # end of comeup
    assert e(3.0) == 1.0                         # peak
    assert math.isclose(e(5.5 + 1.0), 0.75)      # a quarter into offset
    assert math.isclose(e(9.5), 0.0, abs_tol=1e-12)
    assert e(12.0) == 0.0                        # afterglow is not walked
    assert ing.effect(3.0) == 1.0


def test_below_threshold_is_zero_everywhere():
    route = _route(onset=PhaseRange(0.1, 0.3), comeup=PhaseRange(0.0, 2.0),
                   peak=PhaseRange(1.0, 3.0), offset=PhaseRange(1.0, 2.0))
    ing = _ingest(route, amount=1.0)
    assert all(effect(route, ing, h) == 0.0 for h in np.linspace(0.0, 10.0, 101))


def test_minutes_and_hours_give_same_curve():
    hours = _route(comeup=PhaseRange(0.5, 1.5, TimeUnit.HOURS), offset=PhaseRange(1.0, 3.0, TimeUnit.HOURS))
    minutes = _route(comeup=PhaseRange(30.0, 90.0, TimeUnit.MINUTES), offset=PhaseRange(60.0, 180.0, TimeUnit.MINUTES))
    for h in (0.2, 0.5, 1.3, 2.0, 2.9, 3.5):
        assert math.isclose(effect(hours, _ingest(hours), h), effect(minutes, _ingest(minutes), h))


def test_negative_elapsed_time_is_zero():
    route = _route(comeup=PhaseRange(0.0, 2.0))
    assert effect(route, _ingest(route), -1.0) == 0.0


def test_zero_length_phase_boundary_is_finite():
    route = _route(comeup=PhaseRange(0.0, 0.0), peak=PhaseRange(1.0, 1.0))
    assert effect(route, _ingest(route), 0.0) == 1.0


def test_sample_effect_grid_and_range(sublingual_lsd, lsd):
    ing = lsd.new_ingestion(100.0, MassUnit.UG, T0, RouteKind.SUBLINGUAL)
    t, E = sample_effect(sublingual_lsd, ing, dt_h=0.5)

    # default horizon is the end of offset: 0.5 + 1 + 4 + 4 h
    assert t[0] == 0.0
    assert np.isclose(t[-1], 9.5)
    assert len(t) == len(E) == 20
    assert np.all((E >= 0.0) & (E <= 1.0))
    assert float(np.max(E)) == 1.0


def test_short_comeup_is_finished_at_its_midpoint():
    # comeup [0, 1) h lasts its midpoint, 0.5 h, so 0.5 h elapsed is full intensity
    route = _route(comeup=PhaseRange(0.0, 1.0))
    assert effect(route, _ingest(route), 0.5) == 1.0


def test_sample_effect_default_step_comes_from_config(sublingual_lsd, lsd):
    ing = lsd.new_ingestion(100.0, MassUnit.UG, T0, RouteKind.SUBLINGUAL)
    t, _ = sample_effect(sublingual_lsd, ing)
    assert np.isclose(t[1] - t[0], config.SAMPLE_DT_H)
