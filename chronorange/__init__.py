from .errors import InvalidInputError, RangeError, UnrepresentableError
from .partitions import Partition, YearPartition
from .ranges import Range, intersection
from .shape import Kind, Shape, SignClass
from .util import TICKS_PER_SECOND, from_ticks, ticks

__all__ = [
    "Range",
    "intersection",
    "Shape",
    "SignClass",
    "Kind",
    "RangeError",
    "InvalidInputError",
    "UnrepresentableError",
    "Partition",
    "YearPartition",
    "ticks",
    "from_ticks",
    "TICKS_PER_SECOND",
]
