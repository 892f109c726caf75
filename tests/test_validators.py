from datetime import date

import pytest

from src.hr_worklog.hr_worklog.common.locks import KeyedLock
from src.hr_worklog.hr_worklog.common.validators import optional_int, require_date_range, require_max_length
from src.hr_worklog.hr_worklog.core.exceptions import ValidationError


def test_max_length_treats_none_as_empty():
    assert require_max_length(None, "Notes", 10) == ""


@pytest.mark.parametrize("value", [0, False, 12, ["a"], {}])
def test_max_length_rejects_non_strings(value):
    with pytest.raises(ValidationError):
        require_max_length(value, "Notes", 10)


def test_max_length_boundary():
    assert require_max_length("a" * 10, "Notes", 10) == "a" * 10
    with pytest.raises(ValidationError):
        require_max_length("a" * 11, "Notes", 10)


def test_date_range_allows_single_day():
    require_date_range(date(2026, 1, 1), date(2026, 1, 1))


def test_optional_int():
    assert optional_int("", "Page") is None
    assert optional_int("4", "Page") == 4
    with pytest.raises(ValidationError):
        optional_int("four", "Page")


def test_keyed_lock_reuses_one_lock_per_key():
    locks = KeyedLock()

    with locks.hold(2):
        with locks.hold(3):
            pass

    assert locks._lock_for(2) is locks._lock_for(2)
    assert locks._lock_for(2) is not locks._lock_for(3)
