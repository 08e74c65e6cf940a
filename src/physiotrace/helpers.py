from collections import defaultdict
from typing import Iterable, Sequence

import numpy as np

from .types import Compound, Dose


def index_compounds(compounds: Iterable[Compound]) -> dict[str, Compound]:
    """
    Map compound_id -> Compound, keeping list order. The first entry wins on duplicate ids.
    """
    index: dict[str, Compound] = {}
    for c in compounds:
        index.setdefault(c.compound_id, c)
    return index


def group_doses_by_compound(doses: Iterable[Dose]) -> dict[str, tuple[Dose, ...]]:
    """
    Group doses by compound_id, each group sorted by timestamp.
    """
    buckets: dict[str, list[Dose]] = defaultdict(list)
    for d in doses:
        buckets[d.compound_id].append(d)
    return {
        compound_id: tuple(sorted(ds, key=lambda x: x.timestamp_h))
        for compound_id, ds in buckets.items()
    }


def nearest_index(times: Sequence[float], target_h: float) -> int:
    """Index of the grid point closest to target_h (first one on ties)."""
    t = np.asarray(times, dtype=float)
    if t.size == 0:
        raise ValueError("times must not be empty.")
    return int(np.argmin(np.abs(t - target_h)))
