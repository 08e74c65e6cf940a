# src/physiotrace/status.py
from typing import Callable, Literal, NamedTuple, Sequence

from .helpers import nearest_index
from .types import Phase, SimulationResult, Status

MSG_TOXIC = "CRITICAL: Plasma concentration exceeds therapeutic safety threshold. Toxicity risk detected."
MSG_NEAR_THRESHOLD = "WARNING: Approaching upper limit of therapeutic window. Monitor closely."
MSG_CLEARED = "Drug effectively cleared from system. Concentration negligible."
MSG_PEAK = "Peak plasma concentration (Cmax) reached. Bioavailability maximized."
MSG_RISING = "Absorption phase active. Plasma concentration rising."
MSG_FALLING = "Elimination phase active. Metabolic clearance proceeding."

NEAR_THRESHOLD_FRACTION = 0.8
CLEARED_MG_PER_L = 0.1
CLEARED_AFTER_H = 2.0
FLAT_SLOPE_MG_PER_L = 0.001
PEAK_MIN_MG_PER_L = 0.5

ExposureBand = Literal["high", "elevated", "normal"]


class _Sample(NamedTuple):
    concentration: float
    prev_concentration: float
    threshold: float
    time_h: float

    @property
    def slope(self) -> float:
        return self.concentration - self.prev_concentration


def _trend(s: _Sample) -> Phase:
    return "Absorption" if s.concentration > s.prev_concentration else "Elimination"


# Ordered (guard, status) rules; the first guard that holds decides.
_RULES: tuple[tuple[Callable[[_Sample], bool], Callable[[_Sample], Status]], ...] = (
    (lambda s: s.concentration > s.threshold,
     lambda s: Status(MSG_TOXIC, "danger", _trend(s))),
    (lambda s: s.concentration > NEAR_THRESHOLD_FRACTION * s.threshold,
     lambda s: Status(MSG_NEAR_THRESHOLD, "warning", _trend(s))),
    (lambda s: s.concentration < CLEARED_MG_PER_L and s.time_h > CLEARED_AFTER_H,
     lambda s: Status(MSG_CLEARED, "success", "Cleared")),
    (lambda s: abs(s.slope) < FLAT_SLOPE_MG_PER_L and s.concentration > PEAK_MIN_MG_PER_L,
     lambda s: Status(MSG_PEAK, "neutral", "Peak")),
    (lambda s: s.slope > 0,
     lambda s: Status(MSG_RISING, "neutral", "Absorption")),
    (lambda s: True,
     lambda s: Status(MSG_FALLING, "neutral", "Elimination")),
)


def classify(concentration: float, prev_concentration: float,
             tox_threshold: float, time_h: float) -> Status:
    """
    Label phase and risk from the current sample and the one before it.

    Rules, first match wins:
      1. above threshold            -> danger  (Absorption/Elimination by slope)
      2. above 80% of threshold     -> warning (Absorption/Elimination by slope)
      3. < 0.1 mg/L after 2 h       -> success, Cleared
      4. flat and > 0.5 mg/L        -> neutral, Peak
      5. rising                     -> neutral, Absorption
      6. otherwise                  -> neutral, Elimination
    """
    sample = _Sample(concentration, prev_concentration, tox_threshold, time_h)
    for guard, status in _RULES:
        if guard(sample):
            return status(sample)
    raise AssertionError("unreachable: last rule always matches")


def sample_at(results: Sequence[SimulationResult], time_h: float) -> tuple[SimulationResult, SimulationResult]:
    """
    Record nearest to time_h and the record just before it.
    At the first grid point the record is its own predecessor.
    """
    idx = nearest_index([r.time for r in results], time_h)
    return results[idx], results[max(0, idx - 1)]


def status_at(results: Sequence[SimulationResult], time_h: float, tox_threshold: float) -> Status:
    current, prev = sample_at(results, time_h)
    return classify(current.concentration, prev.concentration, tox_threshold, time_h)


def threshold_fraction(concentration: float, tox_threshold: float) -> float:
    """Concentration as a percentage of the threshold, capped at 100."""
    return min(concentration / (tox_threshold or 1.0) * 100.0, 100.0)


def exposure_band(concentration: float, tox_threshold: float) -> ExposureBand:
    if tox_threshold == 0:
        return "normal"
    ratio = concentration / tox_threshold
    if ratio > 0.8:
        return "high"
    if ratio > 0.5:
        return "elevated"
    return "normal"
