# src/physiotrace/metrics.py
import math
from typing import Sequence, Tuple

import numpy as np

from .types import PATHWAYS, SimulationResult
from .models.one_compartment import RATE_COLLISION_TOL


def series(results: Sequence[SimulationResult]) -> Tuple[np.ndarray, np.ndarray]:
    """Time (h) and concentration (mg/L) arrays from simulation results."""
    t = np.array([r.time for r in results], dtype=float)
    C = np.array([r.concentration for r in results], dtype=float)
    return t, C

def cmax(C: np.ndarray) -> float:
    """Global maximum concentration (mg/L)."""
    return float(np.max(C))

def tmax(t: np.ndarray, C: np.ndarray) -> float:
    """Time of maximum concentration (h)."""
    return float(t[int(np.argmax(C))])

def auc_trapz(t: np.ndarray, C: np.ndarray) -> float:
    """Area Under the Curve (AUC) via trapezoidal rule (mg*h/L)."""
    return float(np.trapezoid(C, t))

def cavg(t: np.ndarray, C: np.ndarray) -> float:
    """Time-weighted average concentration over the simulated span."""
    span = float(t[-1] - t[0])
    if span <= 0:
        return float(np.mean(C))
    return auc_trapz(t, C) / span

def toxic_duration(results: Sequence[SimulationResult]) -> float:
    """
    Hours flagged toxic: each grid interval counts when the sample closing it is toxic.
    Assumes results are in increasing time order.
    """
    total = 0.0
    for prev, curr in zip(results, results[1:]):
        if curr.is_toxic:
            total += curr.time - prev.time
    return total

def peak_organ_loads(results: Sequence[SimulationResult]) -> dict[str, float]:
    """Highest load reached by each pathway over the run."""
    return {p: max((r.organ_loads[p] for r in results), default=0.0) for p in PATHWAYS}

def analytic_tmax(ka: float, kel: float) -> float:
    """
    Time of peak for a single dose: ln(ka/kel) / (ka - kel).
    Falls back to 1/ka when the two rates coincide.
    """
    if abs(ka - kel) < RATE_COLLISION_TOL:
        return 1.0 / ka
    return math.log(ka / kel) / (ka - kel)
