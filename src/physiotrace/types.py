# src/physiotrace/types.py
from dataclasses import dataclass
from collections.abc import Mapping
from types import MappingProxyType
from typing import Literal, Optional

# We keep *all* time in HOURS internally. (Easy math, avoids unit drift.)
Pathway = Literal["hepatic", "renal", "cardiovascular", "neurological", "gastric"]
Sex = Literal["male", "female"]
Severity = Literal["danger", "warning", "success", "neutral"]
Phase = Literal["Absorption", "Elimination", "Cleared", "Peak"]

# Fixed order; organ load mappings and crowding checks iterate in this order.
PATHWAYS: tuple[Pathway, ...] = ("hepatic", "renal", "cardiovascular", "neurological", "gastric")

# Clearance multiplier per activity level (1 = sedentary, 3 = normal, 5 = highly active)
ACTIVITY_MULTIPLIERS: Mapping[int, float] = MappingProxyType({1: 0.8, 2: 0.9, 3: 1.0, 4: 1.2, 5: 1.5})

ELDERLY_AGE_Y = 65
ELDERLY_CLEARANCE_MULTIPLIER = 0.7


@dataclass(frozen=True)
class Compound:
    """
    A drug or supplement with its one-compartment PK parameters.

    half_life_h            : elimination half-life (h)
    bioavailability        : fraction of the dose reaching circulation, (0, 1]
    time_to_peak_h         : Tmax of a single dose (h); sets the absorption rate
    vd_L_per_kg            : volume of distribution per kg body weight
    tox_threshold_mg_per_L : plasma concentration above which it is toxic
    metabolism             : main clearance pathway (one of PATHWAYS)
    color, default_dose_mg : presentation only, ignored by the model
    """
    compound_id: str
    name: str
    half_life_h: float
    bioavailability: float
    time_to_peak_h: float
    vd_L_per_kg: float
    tox_threshold_mg_per_L: float
    metabolism: Pathway
    category: str = ""
    description: str = ""
    color: str = "#64748b"
    default_dose_mg: float = 0.0


@dataclass(frozen=True)
class SubjectProfile:
    """
    Snapshot of the person being simulated.
    sex and height_cm are carried along but not used by the model yet.
    """
    age_y: float = 30.0
    sex: Sex = "male"
    weight_kg: float = 75.0
    height_cm: float = 180.0
    activity_level: int = 3


@dataclass(frozen=True)
class Dose:
    """
    A single administration.

    dose_id     : unique identifier within a schedule
    compound_id : which Compound this dose refers to
    timestamp_h : when it is taken (hours from simulation start)
    amount_mg   : dose size in milligrams
    """
    dose_id: str
    compound_id: str
    timestamp_h: float
    amount_mg: float


class OrganLoads(Mapping[Pathway, float]):
    """
    Read-only pathway -> load (%) mapping. Always holds every pathway, in PATHWAYS order;
    pathways missing from the input read as 0.
    """
    __slots__ = ("_values",)

    def __init__(self, loads: Optional[Mapping[str, float]] = None):
        loads = loads or {}
        self._values = tuple(float(loads.get(p, 0.0)) for p in PATHWAYS)

    def __getitem__(self, pathway: str) -> float:
        try:
            return self._values[PATHWAYS.index(pathway)]
        except ValueError:
            raise KeyError(pathway) from None

    def __iter__(self):
        return iter(PATHWAYS)

    def __len__(self) -> int:
        return len(PATHWAYS)

    def __reduce__(self):
        return (OrganLoads, (dict(self),))

    def __repr__(self) -> str:
        return f"OrganLoads({dict(self)!r})"


@dataclass(frozen=True)
class SimulationResult:
    time: float
    concentration: float
    is_toxic: bool
    organ_loads: OrganLoads
    dominant_compound_id: Optional[str] = None


@dataclass(frozen=True)
class Status:
    message: str
    severity: Severity
    phase: Phase
