import pytest

from physiotrace.catalog import find_compound
from physiotrace.types import Dose, SubjectProfile


DEFAULT_SUBJECT = dict(age_y=30, sex="male", weight_kg=75, height_cm=180, activity_level=3)


@pytest.fixture
def subject():
    """Standard adult used across most tests."""
    return SubjectProfile(**DEFAULT_SUBJECT)


@pytest.fixture
def caffeine():
    return find_compound("caffeine")


@pytest.fixture
def make_dose():
    """Build a dose with a predictable id."""
    counter = iter(range(10_000))

    def _make(compound_id, timestamp_h, amount_mg):
        return Dose(dose_id=f"d{next(counter)}", compound_id=compound_id,
                    timestamp_h=timestamp_h, amount_mg=amount_mg)

    return _make


@pytest.fixture
def quarter_hour_grid():
    return [i * 0.25 for i in range(97)]
