"""Boundary and segment bookkeeping for range intersection.

A range splits the timeline at (at most) two boundary instants into three
segments. Intersecting two ranges merges their four boundaries into one
ascending sequence, decides the membership of the five resulting segments,
and then reduces the description until it fits a single range again.
"""

from collections.abc import Sequence
from typing import Any, NamedTuple

from chronorange.errors import InvalidInputError


class Bound(NamedTuple):
    instant: Any
    closed: bool


Segments = tuple[bool, bool, bool]
Outcomes = tuple[int, int, int]


def order_pair(first: Bound, second: Bound) -> tuple[int, Bound, Bound]:
    """Return ``(outcome, low, high)`` for two bounds.

    The outcome is -1 when ``first`` is strictly earlier (kept in place),
    0 when both instants coincide, and +1 when the pair had to be swapped.
    """
    if first.instant < second.instant:
        return -1, first, second
    if first.instant > second.instant:
        return 1, second, first
    return 0, first, second


def merge_bounds(
    a_lo: Bound, a_hi: Bound, b_lo: Bound, b_hi: Bound
) -> tuple[Outcomes, tuple[Bound, Bound, Bound, Bound]]:
    """Merge two ascending bound pairs into one ascending sequence of four.

    Three compare-and-swap steps are enough because each input pair is
    already ordered: the lows, then the highs, then the inner two.
    """
    s0, d1, d3 = order_pair(a_lo, b_lo)
    s1, d2, d4 = order_pair(a_hi, b_hi)
    s2, d2, d3 = order_pair(d2, d3)
    return (s0, s1, s2), (d1, d2, d3, d4)


def cover_regions(
    outcomes: Outcomes, a: Segments, b: Segments
) -> tuple[bool, bool, bool, bool, bool]:
    """Membership of the five regions around a merged sequence of bounds.

    Region ``k`` lies between merged bounds ``k-1`` and ``k``. Which of its
    own three segments each operand contributes to a region follows from the
    three merge outcomes. Regions that collapse to nothing (tied bounds) get
    an arbitrary value and are dropped by ``collapse_ties``.
    """
    s0, s1, s2 = outcomes
    a0, a1, a2 = a
    b0, b1, b2 = b

    r1 = a1 and b0 if s0 < 0 else a0 and b1
    r3 = a2 and b1 if s1 < 0 else a1 and b2

    if s0 < 0 and s1 < 0 and s2 < 0:
        # a lies entirely before b
        r2 = a2 and b0
    elif s0 > 0 and s1 > 0 and s2 < 0:
        # b lies entirely before a
        r2 = a0 and b2
    else:
        r2 = a1 and b1

    return a0 and b0, r1, r2, r3, a2 and b2


# tie mask (bit 0: d1 == d2, bit 1: d2 == d3, bit 2: d3 == d4)
# -> groups of merged positions that become one instant
_TIE_GROUPS: dict[int, tuple[tuple[int, ...], ...]] = {
    0b000: ((0,), (1,), (2,), (3,)),
    0b001: ((0, 1), (2,), (3,)),
    0b010: ((0,), (1, 2), (3,)),
    0b011: ((0, 1, 2), (3,)),
    0b100: ((0,), (1,), (2, 3)),
    0b101: ((0, 1), (2, 3)),
    0b110: ((0,), (1, 2, 3)),
    0b111: ((0, 1, 2, 3),),
}


def collapse_ties(
    bounds: Sequence[Bound], regions: Sequence[bool]
) -> tuple[list[Any], list[bool], list[bool]]:
    """Fold coincident merged bounds into single instants.

    Returns ``(instants, segments, closures)`` with strictly ascending
    instants. A folded instant is closed only if every bound at it is.
    """
    mask = 0
    for index in range(3):
        if bounds[index].instant == bounds[index + 1].instant:
            mask |= 1 << index

    groups = _TIE_GROUPS[mask]
    instants = [bounds[group[0]].instant for group in groups]
    closures = [all(bounds[i].closed for i in group) for group in groups]
    segments = [regions[0]] + [regions[group[-1] + 1] for group in groups]
    return instants, segments, closures


def validate_points(
    instants: Sequence[Any], segments: Sequence[bool], closures: Sequence[bool]
) -> None:
    if not 1 <= len(instants) <= 4:
        raise InvalidInputError(
            f"A range description needs 1 to 4 instants, got {len(instants)}."
        )
    if len(segments) != len(instants) + 1 or len(closures) != len(instants):
        raise InvalidInputError(
            f"Got {len(instants)} instants, {len(segments)} segments and "
            f"{len(closures)} closures.\n"
            f"Hint: n instants need n + 1 segments and n closures."
        )
    for index, (low, high) in enumerate(zip(instants, instants[1:])):
        if low >= high:
            raise InvalidInputError(
                f"Instants must be strictly ascending, but instant {index} "
                f"({low!r}) is not before instant {index + 1} ({high!r})."
            )


def reduce_points(
    instants: Sequence[Any], segments: Sequence[bool], closures: Sequence[bool]
) -> tuple[list[Any], list[bool], list[bool]]:
    """Drop instants that do not change membership.

    An instant is removable when it and both neighbouring segments share the
    same membership. Removing one never changes whether another is
    removable, so a single pass from the highest index down suffices. At
    least one instant is always kept.
    """
    instants, segments, closures = list(instants), list(segments), list(closures)
    for index in reversed(range(len(instants))):
        if len(instants) == 1:
            break
        if segments[index] == closures[index] == segments[index + 1]:
            del instants[index]
            del closures[index]
            del segments[index + 1]
    return instants, segments, closures
