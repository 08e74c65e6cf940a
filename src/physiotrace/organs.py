from typing import Optional

from .types import PATHWAYS, Compound, OrganLoads


def organ_loads(total_mg_per_L: float, dominant: Optional[Compound]) -> OrganLoads:
    """
    Stylized per-pathway load (percent, 0-100) at one instant.

    Not a physiological model: the dominant compound's pathway scales with
    concentration relative to its toxicity threshold, while renal, hepatic and
    cardiovascular pick up capped secondary loads. Every pathway key is present.
    """
    loads = {p: 0.0 for p in PATHWAYS}
    if dominant is None:
        return OrganLoads(loads)

    intensity = total_mg_per_L / dominant.tox_threshold_mg_per_L
    loads[dominant.metabolism] = min(intensity * 100.0, 100.0)

    # Renal and hepatic are max-merged with the dominant value; cardiovascular is overwritten.
    loads["renal"] = max(loads["renal"], min(intensity * 40.0, 60.0))
    loads["hepatic"] = max(loads["hepatic"], min(intensity * 50.0, 70.0))
    if dominant.metabolism == "neurological":
        loads["cardiovascular"] = min(intensity * 30.0, 50.0)
    else:
        loads["cardiovascular"] = min(intensity * 15.0, 30.0)

    return OrganLoads(loads)
