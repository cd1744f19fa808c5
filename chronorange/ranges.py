"""The Range value type.

A Range is a subset of the timeline encoded as a start instant, a signed
interval and three flags. Forward intervals describe the usual bounded
ranges, zero intervals describe single points and rays, and reversed
intervals describe complements. See ``chronorange.shape`` for the full table.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import reduce
from typing import Any, TypeAlias

from chronorange.errors import InvalidInputError, UnrepresentableError
from chronorange.segments import (
    Bound,
    Segments,
    collapse_ties,
    cover_regions,
    merge_bounds,
    reduce_points,
    validate_points,
)
from chronorange.shape import Kind, Shape, SignClass

logger = logging.getLogger(__name__)

Instant: TypeAlias = datetime | int
Span: TypeAlias = timedelta | int


def _absolute(instant: Instant) -> Instant:
    """Move an aware datetime to UTC so subtraction measures elapsed time."""
    if isinstance(instant, datetime) and instant.tzinfo is not None:
        return instant.astimezone(timezone.utc)
    return instant


@dataclass(frozen=True, eq=False, kw_only=True)
class Range:
    start: Instant
    interval: Span
    start_closed: bool = True
    end_closed: bool = False
    normal: bool = True

    def __post_init__(self) -> None:
        if isinstance(self.start, datetime) != isinstance(self.interval, timedelta):
            raise TypeError(
                f"Range start and interval must come from the same family.\n"
                f"Got start {type(self.start).__name__!r} with interval "
                f"{type(self.interval).__name__!r}\n"
                f"Hint: Pair datetime with timedelta, or ticks with ints:\n"
                f"  Range(start=datetime(2020, 1, 1, tzinfo=timezone.utc), "
                f"interval=timedelta(days=1))\n"
                f"  Range(start=ticks(dt), interval=DAY)"
            )
        # end = start + interval must be absolute, not wall-clock, time
        object.__setattr__(self, "start", _absolute(self.start))

    @classmethod
    def from_instants(
        cls,
        start: Instant,
        end: Instant,
        *,
        start_closed: bool = True,
        end_closed: bool = True,
        normal: bool = True,
    ) -> "Range":
        """Build a range from its two raw instants; ``end`` may precede ``start``.

        Both ends are closed by default and ``normal`` defaults to True, so
        ``from_instants(a, b)`` is the closed range ``[a, b]`` and not the two
        isolated instants ``{a} ∪ {b}``; pass ``normal=False`` for those.
        """
        start, end = _absolute(start), _absolute(end)
        return cls(
            start=start,
            interval=end - start,
            start_closed=start_closed,
            end_closed=end_closed,
            normal=normal,
        )

    @classmethod
    def from_points(
        cls,
        instants: Sequence[Instant],
        segments: Sequence[bool],
        closures: Sequence[bool],
    ) -> "Range":
        """Build the range described by boundary instants and memberships.

        ``segments[k]`` is the membership of the region before ``instants[k]``
        (the last one is the region after the final instant) and
        ``closures[k]`` the membership of ``instants[k]`` itself.

        Raises:
            InvalidInputError: If the instants are not strictly ascending or
                the sequence lengths do not match
            UnrepresentableError: If the description does not reduce to at
                most two instants with alternating (or uniform) membership
        """
        instants = [_absolute(instant) for instant in instants]
        validate_points(instants, segments, closures)
        points, segs, closed = reduce_points(
            instants, [bool(s) for s in segments], [bool(c) for c in closures]
        )

        if len(points) == 1:
            (point,) = points
            return cls(
                start=point,
                interval=point - point,
                start_closed=closed[0],
                end_closed=segs[1],
                normal=segs[0] != segs[1],
            )

        if len(points) == 2:
            s0, s1, s2 = segs
            alternating = s0 != s1 and s1 != s2
            if alternating or s0 == s1 == s2:
                lo, hi = points
                lo_closed, hi_closed = closed
                if s0:
                    # outer segments included: reversed range anchored at hi
                    return cls(
                        start=hi,
                        interval=lo - hi,
                        start_closed=hi_closed,
                        end_closed=lo_closed,
                        normal=alternating,
                    )
                return cls(
                    start=lo,
                    interval=hi - lo,
                    start_closed=lo_closed,
                    end_closed=hi_closed,
                    normal=alternating,
                )

        logger.debug(
            "Irreducible range description: instants=%r segments=%r closures=%r",
            points,
            segs,
            closed,
        )
        raise UnrepresentableError(
            f"Cannot build a Range from {len(points)} boundary instants with "
            f"segments {segs} and closures {closed}.\n"
            f"A Range has at most two boundary instants, and with two the "
            f"memberships must alternate or all be equal."
        )

    @classmethod
    def between(
        cls,
        start: Instant,
        end: Instant,
        *,
        start_closed: bool = True,
        end_closed: bool = False,
    ) -> "Range":
        """Ordinary bounded range; ``[start, end)`` by default.

        When ``start == end`` the result is that single instant if both ends
        are closed, and the empty set otherwise.
        """
        if start > end:
            raise InvalidInputError(
                f"between() needs start <= end, got {start!r} > {end!r}.\n"
                f"Hint: Use Range.from_instants() to build a reversed range."
            )
        if start == end:
            return cls.from_points([start], [False, False], [start_closed and end_closed])
        return cls.from_points(
            [start, end], [False, True, False], [start_closed, end_closed]
        )

    @classmethod
    def point(cls, instant: Instant) -> "Range":
        return cls.from_points([instant], [False, False], [True])

    @classmethod
    def excluding(cls, instant: Instant) -> "Range":
        """Every instant except ``instant``."""
        return cls.from_points([instant], [True, True], [False])

    @classmethod
    def after(cls, instant: Instant, *, closed: bool = False) -> "Range":
        return cls.from_points([instant], [False, True], [closed])

    @classmethod
    def before(cls, instant: Instant, *, closed: bool = False) -> "Range":
        return cls.from_points([instant], [True, False], [closed])

    @classmethod
    def empty(cls, anchor: Instant) -> "Range":
        """The empty set, encoded at ``anchor`` (any instant of the right type)."""
        return cls.from_points([anchor], [False, False], [False])

    @classmethod
    def universal(cls, anchor: Instant) -> "Range":
        """The whole timeline, encoded at ``anchor``."""
        return cls.from_points([anchor], [True, True], [True])

    @property
    def end(self) -> Instant:
        return self.start + self.interval

    @property
    def sign(self) -> SignClass:
        return SignClass.of(self.interval)

    @property
    def shape(self) -> Shape:
        return Shape(
            sign=self.sign,
            start_closed=self.start_closed,
            end_closed=self.end_closed,
            normal=self.normal,
        )

    @property
    def tag(self) -> int:
        return self.shape.tag

    @property
    def kind(self) -> Kind:
        return self.shape.kind

    @property
    def is_empty(self) -> bool:
        return self.kind is Kind.EMPTY

    @property
    def is_universal(self) -> bool:
        return self.kind is Kind.UNIVERSAL

    def contains(self, instant: Instant) -> bool:
        """Return True if ``instant`` belongs to the range."""
        sign = self.sign

        if sign is SignClass.POSITIVE:
            if instant < self.start:
                return False
            if instant == self.start:
                return self.start_closed
            end = self.end
            if instant > end:
                return False
            if instant == end:
                return self.end_closed
            return self.normal

        if sign is SignClass.ZERO:
            if instant == self.start:
                return self.start_closed
            if not self.normal:
                return self.end_closed
            return (instant > self.start) == self.end_closed

        # reversed: both outer rays are always members
        if instant > self.start:
            return True
        if instant == self.start:
            return self.start_closed
        end = self.end
        if instant < end:
            return True
        if instant == end:
            return self.end_closed
        return not self.normal

    def __contains__(self, instant: Instant) -> bool:
        return self.contains(instant)

    def segments(self) -> Segments:
        """Membership below, between and above the two raw instants.

        For a zero interval the middle segment is empty and reported as False.
        """
        sign = self.sign
        if not self.normal:
            value = self.end_closed if sign is SignClass.ZERO else sign is SignClass.NEGATIVE
            return value, value, value
        if sign is SignClass.ZERO:
            return not self.end_closed, False, self.end_closed
        inside = sign is SignClass.POSITIVE
        return not inside, inside, not inside

    def sorted_bounds(self) -> tuple[Instant, Instant, bool, bool]:
        """Return ``(lo, hi, lo_closed, hi_closed)`` in ascending order.

        A reversed range starts at its upper instant, so its closures swap.
        A zero interval has a single point, reported twice with its closure.
        """
        sign = self.sign
        if sign is SignClass.NEGATIVE:
            return self.end, self.start, self.end_closed, self.start_closed
        if sign is SignClass.ZERO:
            return self.start, self.start, self.start_closed, self.start_closed
        return self.start, self.end, self.start_closed, self.end_closed

    def intersect(self, other: "Range") -> "Range":
        """Return the range of instants contained in both ranges.

        Raises:
            UnrepresentableError: If the common instants need more boundaries
                than a single Range can hold, e.g. a ray cut by a two-sided
                complement
        """
        a_lo, a_hi, a_lo_closed, a_hi_closed = self.sorted_bounds()
        b_lo, b_hi, b_lo_closed, b_hi_closed = other.sorted_bounds()

        # a boundary only keeps its closure where the other range covers it
        outcomes, bounds = merge_bounds(
            Bound(a_lo, a_lo_closed and other.contains(a_lo)),
            Bound(a_hi, a_hi_closed and other.contains(a_hi)),
            Bound(b_lo, b_lo_closed and self.contains(b_lo)),
            Bound(b_hi, b_hi_closed and self.contains(b_hi)),
        )
        regions = cover_regions(outcomes, self.segments(), other.segments())
        instants, segments, closures = collapse_ties(bounds, regions)

        try:
            return Range.from_points(instants, segments, closures)
        except UnrepresentableError as exc:
            logger.debug("Intersection of %r and %r is not representable", self, other)
            raise UnrepresentableError(
                f"The intersection of {self} and {other} is not a single Range.\n"
                f"Hint: Intersect with each bounded piece separately."
            ) from exc

    def __and__(self, other: object) -> "Range":
        if not isinstance(other, Range):
            return NotImplemented
        return self.intersect(other)

    def _fields(self) -> tuple[Any, ...]:
        return (
            self.start,
            self.interval,
            self.start_closed,
            self.end_closed,
            self.normal,
        )

    def _anchor_instant(self, shape: Shape) -> Instant:
        return self.end if shape.anchor == "end" else self.start

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        if self._fields() == other._fields():
            return True

        mine, theirs = self.shape, other.shape
        if mine.kind is not theirs.kind:
            return False
        if mine.kind in (Kind.EMPTY, Kind.UNIVERSAL):
            return True
        if mine.kind is Kind.GENERAL:
            return False
        return self._anchor_instant(mine) == other._anchor_instant(theirs)

    def __hash__(self) -> int:
        shape = self.shape
        if shape.kind in (Kind.EMPTY, Kind.UNIVERSAL):
            return hash(shape.kind)
        if shape.kind is Kind.GENERAL:
            return hash(self._fields())
        return hash((shape.kind, self._anchor_instant(shape)))

    def describe(self) -> tuple[list[Instant], list[bool], list[bool]]:
        """Return the reduced ``(instants, segments, closures)`` description."""
        lo, hi, lo_closed, hi_closed = self.sorted_bounds()
        seg0, seg1, seg2 = self.segments()
        if lo == hi:
            return reduce_points([lo], [seg0, seg2], [lo_closed])
        return reduce_points([lo, hi], [seg0, seg1, seg2], [lo_closed, hi_closed])

    def __str__(self) -> str:
        """Interval notation, e.g. ``[1, 5) ∪ (7, +inf)``."""
        instants, segments, closures = self.describe()
        parts: list[str] = []
        opened = "(-inf" if segments[0] else None

        for index, instant in enumerate(instants):
            closed, after = closures[index], segments[index + 1]
            if opened is None:
                if after:
                    opened = f"[{instant}" if closed else f"({instant}"
                elif closed:
                    parts.append(f"{{{instant}}}")
            elif not closed:
                parts.append(f"{opened}, {instant})")
                opened = f"({instant}" if after else None
            elif not after:
                parts.append(f"{opened}, {instant}]")
                opened = None

        if opened is not None:
            parts.append(f"{opened}, +inf)")
        return " ∪ ".join(parts) or "∅"


def intersection(*ranges: Range) -> Range:
    """Intersect ranges left to right (equivalent to chaining `&`)."""

    if not ranges:
        raise ValueError(
            f"intersection() requires at least one range argument.\n"
            f"Example: intersection(year, weekday_window, opening_hours)"
        )

    def reducer(acc: Range, nxt: Range) -> Range:
        return acc & nxt

    return reduce(reducer, ranges)
