import pytest

from tardiness_tracker.attendance.time_rules import format_duration, late_minutes, time_to_minutes


@pytest.mark.parametrize(
    "value, expected",
    [
        ("06:30", 390),
        ("06:30:59", 390),
        (" 07:05 ", 425),
        ("00:00", 0),
        ("99:99", 99 * 60 + 99),
        ("", 0),
        (None, 0),
        ("ab:cd", 0),
        ("6:30", 0),
        ("-1:30", 0),
        ("07", 420),
    ],
)
def test_time_to_minutes(value, expected):
    assert time_to_minutes(value) == expected


@pytest.mark.parametrize("value", ["", "06:30", "23:59", "xx", "12:3x", "-9:-9", "99:99:99"])
def test_time_to_minutes_is_non_negative_and_stable(value):
    first = time_to_minutes(value)
    assert first >= 0
    assert time_to_minutes(value) == first


@pytest.mark.parametrize(
    "arrival, expected_minutes, expected_label",
    [
        ("06:45", 15, "15 minutes"),
        ("07:05", 35, "35 minutes"),
        ("08:35", 125, "2 hours 5 minutes"),
        ("06:10", 0, "0 minutes"),
    ],
)
def test_lateness_against_school_cutoff(arrival, expected_minutes, expected_label):
    minutes = late_minutes(arrival, "06:30")
    assert minutes == expected_minutes
    assert format_duration(minutes) == expected_label


def test_arriving_exactly_at_cutoff_is_not_late():
    assert late_minutes("06:30", "06:30") == 0


def test_missing_arrival_time_reads_as_midnight():
    assert late_minutes("", "06:30") == 0
    assert late_minutes("07:00", "") == 420


@pytest.mark.parametrize(
    "minutes, expected",
    [
        (0, "0 minutes"),
        (1, "1 minute"),
        (45, "45 minutes"),
        (59, "59 minutes"),
        (60, "1 hour"),
        (61, "1 hour 1 minute"),
        (90, "1 hour 30 minutes"),
        (120, "2 hours"),
        (-15, "0 minutes"),
        ("abc", "0 minutes"),
        (None, "0 minutes"),
        ("75", "1 hour 15 minutes"),
    ],
)
def test_format_duration(minutes, expected):
    assert format_duration(minutes) == expected
