from datetime import datetime, timedelta, timezone

import pytest

from heatmap import (
    DAY_LABELS,
    HEAT_COLORS,
    bucketize,
    format_hour,
    heat_color,
    heat_level,
    parse_timestamp,
)

UTC = timezone.utc


def test_two_sunday_afternoon_timestamps():
    result = bucketize(["2024-01-07T14:30:00Z", "2024-01-07T14:05:00Z"], tz=UTC)
    assert result.grid[0][14] == 2
    assert result.max_count == 2
    assert result.has_data
    assert (result.peak_day, result.peak_hour) == ("Sun", "2p")
    assert (result.peak_day_index, result.peak_hour_index) == (0, 14)


def test_empty_list_has_no_peak():
    result = bucketize([], tz=UTC)
    assert len(result.grid) == 7
    assert all(len(row) == 24 for row in result.grid)
    assert all(cell == 0 for row in result.grid for cell in row)
    assert result.max_count == 0
    assert not result.has_data
    assert result.peak_day is None
    assert result.peak_hour is None


def test_unparseable_timestamps_are_skipped():
    result = bucketize(["not a date", "", None, 12345, "2024-01-08T09:00:00Z"], tz=UTC)
    assert result.total == 1
    assert result.skipped == 4
    assert result.grid[1][9] == 1
    assert sum(sum(row) for row in result.grid) == result.total


def test_only_invalid_timestamps_means_no_data():
    result = bucketize(["garbage", "2024-13-45T99:00:00Z"], tz=UTC)
    assert not result.has_data
    assert result.peak_day is None
    assert result.skipped == 2


def test_converts_to_requested_timezone():
    eastern = timezone(timedelta(hours=-5))
    # domingo 03:00 UTC = sábado 22:00 em UTC-5
    result = bucketize(["2024-01-07T03:00:00Z"], tz=eastern)
    assert result.grid[6][22] == 1
    assert (result.peak_day, result.peak_hour) == ("Sat", "10p")


def test_naive_timestamps_are_taken_as_local():
    eastern = timezone(timedelta(hours=-5))
    result = bucketize(["2024-01-10T08:15:00"], tz=eastern)
    assert result.grid[3][8] == 1


def test_accepts_datetime_objects():
    moments = [
        datetime(2024, 1, 13, 23, 59, tzinfo=UTC),
        datetime(2024, 1, 13, 23, 1, tzinfo=UTC),
        datetime(2024, 1, 9, 0, 0, tzinfo=UTC),
    ]
    result = bucketize(moments, tz=UTC)
    assert result.grid[6][23] == 2
    assert result.grid[2][0] == 1
    assert (result.peak_day, result.peak_hour) == ("Sat", "11p")


def test_tie_break_is_first_in_row_major_order():
    stamps = [
        "2024-01-10T18:00:00Z",  # Wed 18h
        "2024-01-08T20:00:00Z",  # Mon 20h
        "2024-01-08T07:00:00Z",  # Mon 7h
    ]
    result = bucketize(stamps, tz=UTC)
    assert result.max_count == 1
    assert (result.peak_day_index, result.peak_hour_index) == (1, 7)


def test_peak_cell_holds_maximum_and_cells_sum_to_total():
    base = datetime(2024, 3, 1, tzinfo=UTC)
    stamps = [(base + timedelta(hours=7 * i)).isoformat() for i in range(50)]
    stamps += ["bad"] * 3
    result = bucketize(stamps, tz=UTC)
    assert sum(sum(row) for row in result.grid) == 50 == result.total
    assert result.grid[result.peak_day_index][result.peak_hour_index] == result.max_count
    assert result.max_count == max(max(row) for row in result.grid)
    assert all(cell >= 0 for row in result.grid for cell in row)


def test_bucketize_is_idempotent():
    stamps = ["2024-01-07T14:30:00Z", "2024-02-01T01:00:00Z", "oops"]
    assert bucketize(stamps, tz=UTC) == bucketize(stamps, tz=UTC)


def test_levels_follow_grid():
    result = bucketize(["2024-01-07T14:30:00Z"] * 4 + ["2024-01-08T10:00:00Z"], tz=UTC)
    assert result.levels[0][14] == len(HEAT_COLORS) - 1
    assert result.levels[1][10] == 2
    assert result.levels[3][3] == 0


@pytest.mark.parametrize("hour, label", [
    (0, "12a"), (1, "1a"), (9, "9a"), (11, "11a"),
    (12, "12p"), (13, "1p"), (23, "11p"),
])
def test_format_hour(hour, label):
    assert format_hour(hour) == label


def test_day_labels():
    assert DAY_LABELS == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


@pytest.mark.parametrize("count, max_count, level", [
    (0, 0, 0),
    (0, 5, 0),
    (3, 0, 0),
    (1, 10, 1),
    (1, 4, 2),
    (2, 4, 3),
    (4, 4, 6),
    (9, 4, 6),
])
def test_heat_level(count, max_count, level):
    assert heat_level(count, max_count) == level


def test_heat_level_custom_levels_and_color():
    assert heat_level(5, 5, levels=4) == 3
    assert heat_level(1, 5, levels=4) == 1
    assert heat_color(0, 10) == HEAT_COLORS[0]
    assert heat_color(10, 10) == HEAT_COLORS[-1]
    assert heat_color(3, 7) == heat_color(3, 7)


def test_parse_timestamp():
    assert parse_timestamp("2024-01-07T14:30:00Z") == datetime(2024, 1, 7, 14, 30, tzinfo=UTC)
    assert parse_timestamp("2024-01-07T14:30:00+02:00").utcoffset() == timedelta(hours=2)
    assert parse_timestamp("yesterday") is None
    assert parse_timestamp(None) is None
