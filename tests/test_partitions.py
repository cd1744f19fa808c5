"""Tests for calendar partitions built on top of Range."""

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from chronorange import Range, YearPartition


def at(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_current_range_of_year():
    year = YearPartition(2018)

    current = year.current_range(at(2018, 2, 4))

    assert current == Range.between(at(2018, 1, 1), at(2019, 1, 1))
    assert year.current_range(at(2017, 2, 4)) is None


def test_year_range_is_half_open():
    rng = YearPartition(2018).range
    assert rng.contains(at(2018, 1, 1))
    assert rng.contains(at(2018, 12, 31, 23, 59, 59))
    assert not rng.contains(at(2019, 1, 1))


def test_leap_year_spans_366_days():
    assert YearPartition(2020).range.interval == timedelta(days=366)
    assert YearPartition(2019).range.interval == timedelta(days=365)


def test_next_and_previous():
    year = YearPartition(2018)
    assert year.next_range(at(2017, 6, 1)) == year.range
    assert year.next_range(at(2018, 6, 1)) is None
    assert year.previous_range(at(2019, 6, 1)) == year.range
    assert year.previous_range(at(2018, 6, 1)) is None


def test_ranges_after_and_before():
    year = YearPartition(2018)
    moment = at(2018, 6, 1)

    assert list(year.ranges_after(moment)) == []
    assert list(year.ranges_after(moment, include_current=True)) == [year.range]
    assert list(year.ranges_after(at(2010, 1, 1))) == [year.range]

    assert list(year.ranges_before(moment)) == []
    assert list(year.ranges_before(moment, include_current=True)) == [year.range]
    assert list(year.ranges_before(at(2030, 1, 1))) == [year.range]


def test_timezone_shifts_boundaries():
    pacific = YearPartition(2018, tz="US/Pacific")
    assert pacific.range.start == at(2018, 1, 1, 8)

    # New Year's Eve evening in California is already 2019 in UTC
    moment = at(2019, 1, 1, 3)
    assert pacific.current_range(moment) == pacific.range
    assert YearPartition(2018).current_range(moment) is None


def test_intersects_with_other_ranges():
    summer = Range.between(
        datetime(2018, 6, 1, tzinfo=ZoneInfo("UTC")),
        datetime(2019, 6, 1, tzinfo=ZoneInfo("UTC")),
    )
    assert YearPartition(2018).range & summer == Range.between(
        at(2018, 6, 1), at(2019, 1, 1)
    )


def test_zoned_ranges_intersect_utc_ranges_across_dst():
    new_york = ZoneInfo("America/New_York")
    first_half = Range.between(at(2018, 1, 1), at(2018, 6, 1))
    just_before = at(2018, 5, 31, 23, 30)

    local = Range.between(
        datetime(2018, 3, 1, tzinfo=new_york), datetime(2018, 12, 1, tzinfo=new_york)
    )
    result = local & first_half
    assert result.contains(just_before)
    assert not result.contains(at(2018, 6, 1))
    assert result == Range.between(at(2018, 3, 1, 5), at(2018, 6, 1))

    year = YearPartition(2018, tz="America/New_York").range
    clipped = year & first_half
    assert clipped.end == at(2018, 6, 1)
    assert clipped.contains(just_before)
    assert clipped == Range.between(at(2018, 1, 1, 5), at(2018, 6, 1))


def test_partition_metadata():
    year = YearPartition(2018)
    assert year.count == 1
    assert year.interval_between_successive_ranges is None
    assert str(year) == "2018"


def test_naive_datetime_rejected():
    with pytest.raises(TypeError, match="timezone-aware"):
        YearPartition(2018).current_range(datetime(2018, 1, 1))


def test_invalid_year_rejected():
    with pytest.raises(ValueError, match="Year must be between"):
        YearPartition(0)
