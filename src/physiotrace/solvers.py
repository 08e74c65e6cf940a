# src/physiotrace/solvers.py
import logging
import math
from typing import Iterable, Optional, Sequence

import numpy as np
from scipy.integrate import solve_ivp

from .types import (ACTIVITY_MULTIPLIERS, ELDERLY_AGE_Y, ELDERLY_CLEARANCE_MULTIPLIER,
                    Compound, Dose, SimulationResult, SubjectProfile)
from .models.one_compartment import bateman, one_compartment_first_order
from .helpers import group_doses_by_compound, index_compounds
from .organs import organ_loads

logger = logging.getLogger(__name__)

LN2 = math.log(2.0)
KA_TMAX_FACTOR = 2.5  # ka ~= 2.5 / Tmax


def activity_multiplier(activity_level: int) -> float:
    try:
        return ACTIVITY_MULTIPLIERS[activity_level]
    except KeyError:
        raise ValueError(f"activity_level must be one of {tuple(ACTIVITY_MULTIPLIERS)} "
                         f"(got {activity_level}).") from None


def elimination_rate(compound: Compound, subject: SubjectProfile) -> float:
    """
    Effective elimination rate constant kel (1/h).

    The literature half-life is scaled by the subject's activity level and
    slowed for subjects older than 65.
    """
    age_mod = ELDERLY_CLEARANCE_MULTIPLIER if subject.age_y > ELDERLY_AGE_Y else 1.0
    return (LN2 / compound.half_life_h) * activity_multiplier(subject.activity_level) * age_mod


def absorption_rate(compound: Compound) -> float:
    """Absorption rate constant ka (1/h), approximated from time to peak."""
    return KA_TMAX_FACTOR / compound.time_to_peak_h


def volume_of_distribution(compound: Compound, subject: SubjectProfile) -> float:
    return subject.weight_kg * compound.vd_L_per_kg


def point_concentration(t_h: float, dose: Dose, compound: Compound, subject: SubjectProfile) -> float:
    """
    Plasma concentration (mg/L) contributed by one dose at time t_h.
    Exactly 0 before the dose is taken.
    """
    tau = t_h - dose.timestamp_h
    if tau < 0:
        return 0.0
    return bateman(
        tau,
        effective_dose_mg=dose.amount_mg * compound.bioavailability,
        ka=absorption_rate(compound),
        kel=elimination_rate(compound, subject),
        V=volume_of_distribution(compound, subject),
    )


def dominant_compound(contributions: dict[str, float], compounds: dict[str, Compound]) -> Optional[Compound]:
    """
    Largest contributor, scanning in compound-list order so the first one wins ties.
    None when nothing contributes.
    """
    best_id, best = None, 0.0
    for compound_id, conc in contributions.items():
        if conc > best:
            best_id, best = compound_id, conc
    return compounds[best_id] if best_id is not None else None


def simulate_grid(time_grid: Iterable[float], doses: Sequence[Dose],
                  compounds: Sequence[Compound], subject: SubjectProfile) -> tuple[SimulationResult, ...]:
    """
    Superpose every dose on the caller's time grid.

    Returns one SimulationResult per grid point, in the order given. Doses whose
    compound_id is not in compounds contribute nothing.

    Parameters
    ----------
    time_grid : iterable of float
        Time points in hours; any order, kept as is.
    doses : sequence of Dose
        The schedule. Not modified.
    compounds : sequence of Compound
        Active compounds. Their order decides ties for the dominant compound.
    subject : SubjectProfile
        Person being simulated.
    """
    index = index_compounds(compounds)
    per_compound = group_doses_by_compound(doses)

    orphans = [d.dose_id for cid, ds in per_compound.items() if cid not in index for d in ds]
    if orphans:
        logger.debug("Ignoring %d dose(s) with unknown compound: %s", len(orphans), orphans)

    # Only compounds that actually have doses take part, in compound-list order
    dosed = [(cid, per_compound[cid]) for cid in index if cid in per_compound]

    results: list[SimulationResult] = []
    for t in time_grid:
        t = float(t)
        contributions: dict[str, float] = {}
        total = 0.0
        for cid, ds in dosed:
            compound = index[cid]
            conc = sum(point_concentration(t, d, compound, subject) for d in ds)
            contributions[cid] = conc
            total += conc

        main = dominant_compound(contributions, index)
        results.append(SimulationResult(
            time=t,
            concentration=total,
            is_toxic=(total > main.tox_threshold_mg_per_L) if main is not None else False,
            organ_loads=organ_loads(total, main),
            dominant_compound_id=main.compound_id if main is not None else None,
        ))

    logger.debug("Simulated %d time points for %d dose(s) of %d compound(s)",
                 len(results), sum(len(ds) for _, ds in dosed), len(dosed))
    return tuple(results)


def integrate_dose(times_h: Sequence[float], dose: Dose, compound: Compound,
                   subject: SubjectProfile, rtol: float = 1e-8, atol: float = 1e-10) -> np.ndarray:
    """
    Numerically integrate the one-compartment ODE for a single dose.

    Same model as point_concentration, solved with scipy instead of the closed
    form; useful as a cross-check. Returns concentrations (mg/L) at times_h.
    """
    t = np.asarray(times_h, dtype=float)
    tau = t - dose.timestamp_h
    C = np.zeros_like(tau)

    mask = tau > 0
    if not np.any(mask):
        return C

    ka = absorption_rate(compound)
    kel = elimination_rate(compound, subject)
    V = volume_of_distribution(compound, subject)
    y0 = [dose.amount_mg * compound.bioavailability, 0.0]

    # solve_ivp wants sorted evaluation points
    tau_eval = np.unique(tau[mask])

    def rhs(_t, y):
        return one_compartment_first_order(_t, y, ka, kel)

    sol = solve_ivp(rhs, t_span=(0.0, float(tau_eval[-1])), y0=y0, method="RK45",
                    t_eval=tau_eval, rtol=rtol, atol=atol)
    if not sol.success:
        raise RuntimeError(f"ODE integration failed: {sol.message}")

    A_c = np.interp(tau[mask], sol.t, sol.y[1])
    C[mask] = np.maximum(A_c / V, 0.0)
    return C
