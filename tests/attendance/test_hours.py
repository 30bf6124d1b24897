import pytest

from classroom_attendance.attendance.hours import compute_hours, round_half_up
from classroom_attendance.attendance.model import TimeRange
from classroom_attendance.core.exceptions import InvalidTimeFormat, ValidationError


def test_two_hour_range():
    assert compute_hours(TimeRange("09:00", "11:00")) == 2.0


def test_end_before_start_is_negative():
    assert compute_hours(TimeRange("11:00", "09:00")) == -2.0


@pytest.mark.parametrize(
    "start,end,expected",
    [
        ("09:00", "09:00", 0.0),
        ("09:00", "09:20", 0.3),
        ("08:15", "10:45", 2.5),
        ("00:00", "23:59", 24.0),
        # 3 minutes is exactly 0.05h: ties go up
        ("09:00", "09:03", 0.1),
        ("09:00", "09:02", 0.0),
    ],
)
def test_rounds_to_one_decimal(start, end, expected):
    assert compute_hours(TimeRange(start, end)) == expected


def test_negative_tie_rounds_away_from_zero():
    assert compute_hours(TimeRange("09:03", "09:00")) == -0.1


@pytest.mark.parametrize("time_range", [None, TimeRange(), TimeRange("09:00", None), TimeRange(None, "10:00"), TimeRange("", "10:00")])
def test_missing_range_is_zero(time_range):
    assert compute_hours(time_range) == 0


@pytest.mark.parametrize("bad", ["9am", "25:00", "10:60", "10-00", "abc", "1000"])
def test_malformed_time_raises(bad):
    with pytest.raises(InvalidTimeFormat):
        compute_hours(TimeRange("09:00", bad))


def test_invalid_time_is_a_validation_error():
    with pytest.raises(ValidationError):
        compute_hours(TimeRange("xx:yy", "10:00"))


def test_single_digit_hour_is_accepted():
    assert compute_hours(TimeRange("9:00", "10:30")) == 1.5


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -3
    assert round_half_up(2.4) == 2
