# src/physiotrace/dosing.py
from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Iterable, Optional, Sequence

import numpy as np

from .types import ACTIVITY_MULTIPLIERS, PATHWAYS, Compound, Dose, SubjectProfile


def new_dose(compound: Compound, timestamp_h: float, amount_mg: Optional[float] = None,
             *, dose_id: Optional[str] = None) -> Dose:
    """
    Create one dose of a compound.
    amount_mg defaults to the compound's default_dose_mg; dose_id defaults to a fresh unique id.
    Example: new_dose(caffeine, 8.0) -> 100 mg caffeine at t=8 h
    """
    amount = compound.default_dose_mg if amount_mg is None else amount_mg
    _validate_zero_or_positive("amount_mg", amount)
    _validate_zero_or_positive("timestamp_h", timestamp_h)
    return Dose(dose_id=dose_id or uuid.uuid4().hex[:9],
                compound_id=compound.compound_id,
                timestamp_h=float(timestamp_h),
                amount_mg=float(amount))


def add_dose(doses: Iterable[Dose], dose: Dose) -> tuple[Dose, ...]:
    """
    Return a new schedule with dose added, ordered by timestamp.
    Doses sharing a timestamp keep their insertion order.
    """
    existing = tuple(doses)
    if any(d.dose_id == dose.dose_id for d in existing):
        raise ValueError(f"dose_id '{dose.dose_id}' is already in the schedule.")
    return tuple(sorted(existing + (dose,), key=lambda d: d.timestamp_h))


def update_dose_amount(doses: Iterable[Dose], dose_id: str, amount_mg: float) -> tuple[Dose, ...]:
    """Return a new schedule where the dose with dose_id has a new amount."""
    _validate_zero_or_positive("amount_mg", amount_mg)
    existing = tuple(doses)
    if not any(d.dose_id == dose_id for d in existing):
        raise KeyError(f"No dose with id '{dose_id}' in the schedule.")
    return tuple(replace(d, amount_mg=float(amount_mg)) if d.dose_id == dose_id else d
                 for d in existing)


def remove_dose(doses: Iterable[Dose], dose_id: str) -> tuple[Dose, ...]:
    existing = tuple(doses)
    kept = tuple(d for d in existing if d.dose_id != dose_id)
    if len(kept) == len(existing):
        raise KeyError(f"No dose with id '{dose_id}' in the schedule.")
    return kept


def remove_compound_doses(doses: Iterable[Dose], compound_id: str) -> tuple[Dose, ...]:
    """Drop every dose of a compound (e.g. when it is taken off the active list)."""
    return tuple(d for d in doses if d.compound_id != compound_id)


def repeated_doses(compound: Compound, amount_mg: float, every_h: float, n: int,
                   start_h: float = 0.0) -> tuple[Dose, ...]:
    """
    Make a fixed-interval schedule like: 200 mg ibuprofen every 6 hours, 4 times.

    amount_mg : size of each dose, mg
    every_h   : spacing between doses, hours
    n         : number of doses
    start_h   : time of the first dose
    """
    _validate_zero_or_positive("amount_mg", amount_mg)
    _validate_positive("every_h", every_h)
    _validate_positive_int("n", n)
    _validate_zero_or_positive("start_h", start_h)

    times_h = float(start_h) + np.arange(n, dtype=float) * float(every_h)
    return tuple(
        Dose(dose_id=f"{compound.compound_id}-{i}", compound_id=compound.compound_id,
             timestamp_h=float(t), amount_mg=float(amount_mg))
        for i, t in enumerate(times_h)
    )


def validate_compound(compound: Compound) -> None:
    """Raise ValueError if any PK parameter is outside its valid range."""
    prefix = f"{compound.compound_id}."
    _validate_positive(prefix + "half_life_h", compound.half_life_h)
    _validate_positive(prefix + "time_to_peak_h", compound.time_to_peak_h)
    _validate_positive(prefix + "vd_L_per_kg", compound.vd_L_per_kg)
    _validate_positive(prefix + "tox_threshold_mg_per_L", compound.tox_threshold_mg_per_L)
    if not (0 < compound.bioavailability <= 1):
        raise ValueError(f"{prefix}bioavailability must be in (0, 1] (got {compound.bioavailability}).")
    if compound.metabolism not in PATHWAYS:
        raise ValueError(f"{prefix}metabolism must be one of {PATHWAYS} (got {compound.metabolism!r}).")


def validate_subject(subject: SubjectProfile) -> None:
    _validate_positive("age_y", subject.age_y)
    _validate_positive("weight_kg", subject.weight_kg)
    if subject.activity_level not in ACTIVITY_MULTIPLIERS:
        raise ValueError(f"activity_level must be one of {tuple(ACTIVITY_MULTIPLIERS)} "
                         f"(got {subject.activity_level}).")


def validate_doses(doses: Sequence[Dose]) -> None:
    for d in doses:
        _validate_zero_or_positive(f"{d.dose_id}.timestamp_h", d.timestamp_h)
        _validate_zero_or_positive(f"{d.dose_id}.amount_mg", d.amount_mg)


# --------------------------
# Small input validators
# --------------------------
def _validate_positive(name: str, x: float) -> None:
    if not (x > 0):
        raise ValueError(f"{name} must be > 0 (got {x}).")

def _validate_zero_or_positive(name: str, x: float) -> None:
    if not (x >= 0):
        raise ValueError(f"{name} must be >= 0 (got {x}).")

def _validate_positive_int(name: str, x: int) -> None:
    if not (isinstance(x, int) and x > 0):
        raise ValueError(f"{name} must be a positive integer (got {x}).")
