"""Shape classification for ranges.

A range's behaviour depends only on the sign of its interval and its three
flags. ``Shape`` is that combination; ``Kind`` groups the shapes into the
equivalence classes used for equality and hashing.

Each row below draws the set left to right as segment, point, segment
(zero interval) or segment, point, segment, point, segment. ``x`` marks a
member, ``-`` a non-member segment and ``o`` an open point. Columns are the
interval sign, start and end closure, degenerate/normal and the tag
(``tag = flags * 4 + sign`` with start 1, end 2, normal 4)::

    --o--  0 O O D   0        xxo--  0 O O N  16
    xxoxx  0 O C D   8        --oxx  0 O C N  24
    --x--  0 C O D   4        xxx--  0 C O N  20
    xxxxx  0 C C D  12        --xxx  0 C C N  28

    -o-o-  + O O D   1        -oxo-  + O O N  17
    -o-x-  + O C D   9        -oxx-  + O C N  25
    -x-o-  + C O D   5        -xxo-  + C O N  21
    -x-x-  + C C D  13        -xxx-  + C C N  29

    xoxox  - O O D   2        xo-ox  - O O N  18
    xxxox  - O C D  10        xx-ox  - O C N  26
    xoxxx  - C O D   6        xo-xx  - C O N  22
    xxxxx  - C C D  14        xx-xx  - C C N  30
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Literal


class SignClass(IntEnum):
    ZERO = 0
    POSITIVE = 1
    NEGATIVE = 2

    @classmethod
    def of(cls, interval: Any) -> "SignClass":
        """Classify a signed duration (timedelta or int)."""
        zero = interval * 0
        if interval > zero:
            return cls.POSITIVE
        if interval < zero:
            return cls.NEGATIVE
        return cls.ZERO


class Kind(Enum):
    EMPTY = "empty"
    UNIVERSAL = "universal"
    CO_SINGLETON = "co-singleton"
    SINGLETON = "singleton"
    GENERAL = "general"


# tag -> (kind, which instant identifies the set)
_CLASSES: dict[int, tuple[Kind, Literal["start", "end"] | None]] = {
    0: (Kind.EMPTY, None),
    1: (Kind.EMPTY, None),
    12: (Kind.UNIVERSAL, None),
    14: (Kind.UNIVERSAL, None),
    6: (Kind.CO_SINGLETON, "end"),
    8: (Kind.CO_SINGLETON, "start"),
    10: (Kind.CO_SINGLETON, "start"),
    4: (Kind.SINGLETON, "start"),
    5: (Kind.SINGLETON, "start"),
    9: (Kind.SINGLETON, "end"),
}


@dataclass(frozen=True)
class Shape:
    sign: SignClass
    start_closed: bool
    end_closed: bool
    normal: bool

    @property
    def flags(self) -> int:
        return (
            int(self.start_closed)
            | int(self.end_closed) << 1
            | int(self.normal) << 2
        )

    @property
    def tag(self) -> int:
        return self.flags * 4 + int(self.sign)

    @property
    def kind(self) -> Kind:
        return _CLASSES.get(self.tag, (Kind.GENERAL, None))[0]

    @property
    def anchor(self) -> Literal["start", "end"] | None:
        """Name of the instant that identifies a singleton or co-singleton."""
        return _CLASSES.get(self.tag, (Kind.GENERAL, None))[1]

    @classmethod
    def from_tag(cls, tag: int) -> "Shape":
        flags, sign = divmod(tag, 4)
        if sign > 2 or not 0 <= flags < 8:
            raise ValueError(f"Invalid shape tag {tag}; valid tags are flags*4 + (0|1|2)")
        return cls(
            sign=SignClass(sign),
            start_closed=bool(flags & 1),
            end_closed=bool(flags & 2),
            normal=bool(flags & 4),
        )


ALL_SHAPES: tuple[Shape, ...] = tuple(
    Shape.from_tag(flags * 4 + sign) for flags in range(8) for sign in range(3)
)
