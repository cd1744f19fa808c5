"""Tests for Range equality and hashing across encodings."""

from collections import defaultdict
from datetime import datetime, timedelta, timezone
from itertools import combinations

from chronorange import Kind, Range

POSITIONS = (10, 20, 30)
PROBES = tuple(range(5, 40, 5))


def every_encoding() -> list[Range]:
    ranges = []
    for start_closed in (False, True):
        for end_closed in (False, True):
            for normal in (False, True):
                flags = dict(start_closed=start_closed, end_closed=end_closed, normal=normal)
                for point in POSITIONS:
                    ranges.append(Range(start=point, interval=0, **flags))
                for lo, hi in combinations(POSITIONS, 2):
                    ranges.append(Range(start=lo, interval=hi - lo, **flags))
                    ranges.append(Range(start=hi, interval=lo - hi, **flags))
    return ranges


def test_equality_follows_membership():
    """Two encodings are equal exactly when they hold the same instants."""
    by_members = defaultdict(list)
    for rng in every_encoding():
        by_members[tuple(rng.contains(x) for x in PROBES)].append(rng)

    groups = list(by_members.values())
    for group in groups:
        first = group[0]
        for other in group[1:]:
            assert first == other, (first, other)
            assert hash(first) == hash(other), (first, other)

    for left, right in combinations(groups, 2):
        assert left[0] != right[0], (left[0], right[0])


class TestClasses:
    def test_empty_encodings(self):
        zero = Range(start=5, interval=0, start_closed=False, end_closed=False, normal=False)
        forward = Range(start=-3, interval=9, start_closed=False, end_closed=False, normal=False)
        assert zero.kind is forward.kind is Kind.EMPTY
        assert zero == forward
        assert hash(zero) == hash(forward)

    def test_universal_encodings(self):
        zero = Range(start=5, interval=0, start_closed=True, end_closed=True, normal=False)
        reverse = Range(start=5, interval=-2, start_closed=True, end_closed=True, normal=False)
        assert zero.kind is reverse.kind is Kind.UNIVERSAL
        assert zero == reverse
        assert {zero, reverse} == {Range.universal(100)}

    def test_empty_is_not_universal(self):
        assert Range.empty(0) != Range.universal(0)

    def test_singletons_compare_their_instant(self):
        tag4 = Range(start=7, interval=0, start_closed=True, end_closed=False, normal=False)
        tag5 = Range(start=7, interval=3, start_closed=True, end_closed=False, normal=False)
        tag9 = Range(start=4, interval=3, start_closed=False, end_closed=True, normal=False)
        assert [r.tag for r in (tag4, tag5, tag9)] == [4, 5, 9]
        assert tag4 == tag5 == tag9
        assert len({tag4, tag5, tag9}) == 1

    def test_singletons_at_different_instants_differ(self):
        assert Range.point(7) != Range.point(8)
        tag9 = Range(start=4, interval=3, start_closed=False, end_closed=True, normal=False)
        assert tag9 != Range.point(4)

    def test_co_singletons_compare_their_instant(self):
        tag6 = Range(start=9, interval=-2, start_closed=True, end_closed=False, normal=False)
        tag8 = Range(start=7, interval=0, start_closed=False, end_closed=True, normal=False)
        tag10 = Range(start=7, interval=-5, start_closed=False, end_closed=True, normal=False)
        assert [r.tag for r in (tag6, tag8, tag10)] == [6, 8, 10]
        assert tag6 == tag8 == tag10 == Range.excluding(7)
        assert len({tag6, tag8, tag10}) == 1
        assert tag6 != Range.excluding(9)

    def test_point_is_not_its_complement(self):
        assert Range.point(7) != Range.excluding(7)

    def test_general_ranges_compare_structurally(self):
        assert Range.between(1, 5) == Range(start=1, interval=4)
        assert Range.between(1, 5) != Range.between(1, 5, end_closed=True)
        assert Range.between(1, 5) != Range.between(1, 6)

    def test_datetime_co_singletons(self):
        moment = datetime(2020, 1, 1, tzinfo=timezone.utc)
        hole = Range.excluding(moment)
        shifted = Range(
            start=moment,
            interval=timedelta(hours=-6),
            start_closed=False,
            end_closed=True,
            normal=False,
        )
        assert hole == shifted
        assert {hole: "hole"}[shifted] == "hole"


def test_other_types_are_not_equal():
    assert Range.point(1) != 1
    assert Range.point(1) != "Range"
