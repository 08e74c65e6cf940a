# src/physiotrace/simulate.py
from dataclasses import replace
from typing import Iterable, Optional, Sequence

from .config import SimulationConfig
from .dosing import validate_compound, validate_doses, validate_subject
from .solvers import simulate_grid
from .types import Compound, Dose, SimulationResult, SubjectProfile

# Sedentary, normal, hyper-metabolic
DEFAULT_ACTIVITY_COMPARISON = (1, 3, 5)


def simulate(time_grid: Iterable[float], doses: Sequence[Dose], compounds: Sequence[Compound],
             subject: SubjectProfile, *, validate: bool = False) -> tuple[SimulationResult, ...]:
    """
    Concentration, toxicity flag and organ loads at every point of time_grid.
    With validate=True, bad PK parameters raise ValueError up front instead of
    producing NaN/inf in the output.
    """
    if validate:
        for c in compounds:
            validate_compound(c)
        validate_subject(subject)
        validate_doses(doses)
    return simulate_grid(time_grid, doses, compounds, subject)


def run_simulation(doses: Sequence[Dose], compounds: Sequence[Compound], subject: SubjectProfile,
                   config: Optional[SimulationConfig] = None) -> tuple[SimulationResult, ...]:
    """
    High-level wrapper: simulate on the grid described by config (0-24 h every 15 min by default).
    """
    config = config or SimulationConfig()
    return simulate(config.grid(), doses, compounds, subject, validate=config.validate)


def compare_activity_levels(time_grid: Sequence[float], doses: Sequence[Dose],
                            compounds: Sequence[Compound], subject: SubjectProfile,
                            levels: Iterable[int] = DEFAULT_ACTIVITY_COMPARISON
                            ) -> dict[int, tuple[SimulationResult, ...]]:
    """
    Run the same schedule for several activity levels of one subject.
    activity_level -> results
    """
    grid = list(time_grid)
    return {
        level: simulate_grid(grid, doses, compounds, replace(subject, activity_level=level))
        for level in levels
    }
