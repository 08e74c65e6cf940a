import math
from dataclasses import replace

import numpy as np
import pytest

from physiotrace.models.one_compartment import bateman
from physiotrace.solvers import (absorption_rate, elimination_rate, integrate_dose,
                                 point_concentration, volume_of_distribution)
from physiotrace.types import Compound, Dose, SubjectProfile


def test_bateman_matches_ode_reference(caffeine, subject):
    """
    The closed form and a numerical integration of
      dA_gut/dt = -ka*A_gut,  dA_c/dt = ka*A_gut - kel*A_c
    describe the same curve.
    """
    dose = Dose(dose_id="a", compound_id="caffeine", timestamp_h=1.0, amount_mg=200.0)
    t = np.linspace(0.0, 24.0, 97)

    C_ode = integrate_dose(t, dose, caffeine, subject)
    C_closed = np.array([point_concentration(ti, dose, caffeine, subject) for ti in t])

    assert C_ode[0] == 0.0
    assert np.allclose(C_closed, C_ode, rtol=1e-5, atol=1e-7)


def test_rate_constants_for_standard_subject(caffeine, subject):
    assert elimination_rate(caffeine, subject) == pytest.approx(math.log(2) / 5.0)
    assert absorption_rate(caffeine) == pytest.approx(2.5 / 0.75)
    assert volume_of_distribution(caffeine, subject) == pytest.approx(52.5)


def test_elderly_and_activity_modifiers(caffeine, subject):
    base = elimination_rate(caffeine, subject)
    assert elimination_rate(caffeine, replace(subject, age_y=70)) == pytest.approx(base * 0.7)
    assert elimination_rate(caffeine, replace(subject, age_y=65)) == pytest.approx(base)
    assert elimination_rate(caffeine, replace(subject, activity_level=5)) == pytest.approx(base * 1.5)
    assert elimination_rate(caffeine, replace(subject, activity_level=1)) == pytest.approx(base * 0.8)


def test_unknown_activity_level_is_rejected(caffeine, subject):
    with pytest.raises(ValueError, match="activity_level"):
        elimination_rate(caffeine, replace(subject, activity_level=7))


def test_pre_dose_is_exactly_zero(caffeine, subject):
    dose = Dose(dose_id="a", compound_id="caffeine", timestamp_h=6.0, amount_mg=100.0)
    for t in (0.0, 3.0, 5.999):
        assert point_concentration(t, dose, caffeine, subject) == 0.0
    assert point_concentration(6.0, dose, caffeine, subject) == 0.0
    assert point_concentration(6.25, dose, caffeine, subject) > 0.0


def test_concentration_is_never_negative(caffeine, subject):
    dose = Dose(dose_id="a", compound_id="caffeine", timestamp_h=0.0, amount_mg=100.0)
    for t in np.linspace(0.0, 500.0, 2001):
        assert point_concentration(float(t), dose, caffeine, subject) >= 0.0


def test_degenerate_rates_use_limit_form():
    # ka == kel: D*ka*t*exp(-ka*t)/V
    C = bateman(2.0, 100.0, ka=1.0, kel=1.0, V=10.0)
    assert C == pytest.approx(100.0 * 2.0 * math.exp(-2.0) / 10.0)


@pytest.mark.parametrize("tau", [0.1, 0.5, 1.0, 3.0, 10.0])
def test_degenerate_case_is_continuous(tau):
    limit = bateman(tau, 100.0, ka=1.0, kel=1.0, V=10.0)
    for gap in (1e-4, 1e-6, -1e-6):
        near = bateman(tau, 100.0, ka=1.0, kel=1.0 + gap, V=10.0)
        assert near == pytest.approx(limit, rel=1e-3)
        assert math.isfinite(near)


def test_degenerate_compound_does_not_divide_by_zero(subject):
    # half-life picked so that kel == ka == 2.5 /h for the standard subject
    coincident = Compound("x", "X", half_life_h=math.log(2) / 2.5, bioavailability=1.0,
                          time_to_peak_h=1.0, vd_L_per_kg=1.0, tox_threshold_mg_per_L=10.0,
                          metabolism="hepatic")
    dose = Dose(dose_id="a", compound_id="x", timestamp_h=0.0, amount_mg=75.0)

    C = point_concentration(1.0, dose, coincident, subject)
    assert math.isfinite(C)
    assert C == pytest.approx(75.0 * 2.5 * 1.0 * math.exp(-2.5) / 75.0, rel=1e-6)


def test_decay_tail_is_monotonic(caffeine, subject):
    dose = Dose(dose_id="a", compound_id="caffeine", timestamp_h=0.0, amount_mg=100.0)
    t = np.arange(5.0, 72.0, 0.5)
    C = np.array([point_concentration(float(ti), dose, caffeine, subject) for ti in t])

    assert np.all(np.diff(C) <= 0.0)
    assert C[-1] < 1e-3


def test_concentration_scales_linearly_with_dose(caffeine, subject):
    small = Dose(dose_id="a", compound_id="caffeine", timestamp_h=0.0, amount_mg=50.0)
    large = replace(small, amount_mg=150.0)
    for t in (0.5, 2.0, 10.0):
        assert point_concentration(t, large, caffeine, subject) == pytest.approx(
            3.0 * point_concentration(t, small, caffeine, subject))
