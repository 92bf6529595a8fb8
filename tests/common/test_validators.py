from datetime import datetime

import pytest

from class_management.common.datetime_utils import parse_iso_datetime
from class_management.common.validators import require_int, require_number
from class_management.core.exceptions import ValidationError


def test_require_number_keeps_integers_integral():
    assert require_number(5, "n") == 5
    assert isinstance(require_number(5, "n"), int)
    assert require_number(2.5, "n") == 2.5


@pytest.mark.parametrize("value", [None, True, "x", float("nan"), float("inf")])
def test_require_number_rejects_non_numbers(value):
    with pytest.raises(ValidationError):
        require_number(value, "n")


def test_require_number_bounds():
    assert require_number(0, "weight", minimum=0, maximum=10) == 0
    with pytest.raises(ValidationError, match="greater than 0"):
        require_number(0, "maxScore", minimum=0, exclusive_minimum=True)
    with pytest.raises(ValidationError, match="at most 10"):
        require_number(10.5, "weight", maximum=10)


def test_require_int_rejects_fractions():
    with pytest.raises(ValidationError, match="whole number"):
        require_int(2.5, "maxStudents")


def test_parse_iso_datetime_normalizes_to_naive_utc():
    assert parse_iso_datetime("2026-02-03") == datetime(2026, 2, 3)
    assert parse_iso_datetime("2026-02-03T10:00:00Z") == datetime(2026, 2, 3, 10, 0)
    assert parse_iso_datetime("2026-02-03T10:00:00+02:00") == datetime(2026, 2, 3, 8, 0)

    with pytest.raises(ValidationError):
        parse_iso_datetime("tomorrow", "dueDate")
