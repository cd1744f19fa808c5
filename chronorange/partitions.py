"""Calendar partitions that produce Range values.

A partition names a subset of the calendar ("the year 2018") and answers
queries about where its ranges fall relative to a given moment. Partitions
only build ranges through Range's public constructors.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from dateutil.relativedelta import relativedelta
from typing_extensions import override

from chronorange.ranges import Range


class Partition(ABC):

    @property
    @abstractmethod
    def count(self) -> int | None:
        """Number of ranges in the partition, or None when unbounded."""
        pass

    @property
    @abstractmethod
    def interval_between_successive_ranges(self) -> timedelta | None:
        """Exact distance between successive ranges, or None when it varies."""
        pass

    @abstractmethod
    def current_range(self, moment: datetime) -> Range | None:
        """Return the range containing ``moment``, if any."""
        pass

    @abstractmethod
    def next_range(self, moment: datetime) -> Range | None:
        """Return the first range starting after the one holding ``moment``."""
        pass

    @abstractmethod
    def previous_range(self, moment: datetime) -> Range | None:
        """Return the last range ending before the one holding ``moment``."""
        pass

    @abstractmethod
    def ranges_after(
        self, moment: datetime, include_current: bool = False
    ) -> Iterable[Range]:
        """Yield later ranges, plus the one holding ``moment`` if ``include_current``."""
        pass

    @abstractmethod
    def ranges_before(
        self, moment: datetime, include_current: bool = False
    ) -> Iterable[Range]:
        """Yield earlier ranges, plus the one holding ``moment`` if ``include_current``."""
        pass

    def _coerce_moment(self, moment: datetime, zone: ZoneInfo) -> datetime:
        if moment.tzinfo is None:
            raise TypeError(
                f"{type(self).__name__} queries need a timezone-aware datetime.\n"
                f"Got naive datetime: {moment!r}\n"
                f"Hint: Add timezone info:\n"
                f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))"
            )
        return moment.astimezone(zone)


class YearPartition(Partition):
    """A single calendar year, as the half-open range [Jan 1, next Jan 1)."""

    def __init__(self, value: int, tz: str = "UTC"):
        if not 1 <= value < 9999:
            raise ValueError(f"Year must be between 1 and 9998, got {value}")
        self.value: int = value
        self.zone: ZoneInfo = ZoneInfo(tz)

    @property
    def range(self) -> Range:
        start = datetime(self.value, 1, 1, tzinfo=self.zone)
        return Range.between(start, start + relativedelta(years=1))

    @property
    @override
    def count(self) -> int | None:
        return 1

    @property
    @override
    def interval_between_successive_ranges(self) -> timedelta | None:
        # a specific year does not recur
        return None

    def _year_of(self, moment: datetime) -> int:
        return self._coerce_moment(moment, self.zone).year

    @override
    def current_range(self, moment: datetime) -> Range | None:
        return self.range if self.value == self._year_of(moment) else None

    @override
    def next_range(self, moment: datetime) -> Range | None:
        return self.range if self.value > self._year_of(moment) else None

    @override
    def previous_range(self, moment: datetime) -> Range | None:
        return self.range if self.value < self._year_of(moment) else None

    @override
    def ranges_after(
        self, moment: datetime, include_current: bool = False
    ) -> Iterable[Range]:
        year = self._year_of(moment)
        if self.value > year or (include_current and self.value == year):
            yield self.range

    @override
    def ranges_before(
        self, moment: datetime, include_current: bool = False
    ) -> Iterable[Range]:
        year = self._year_of(moment)
        if self.value < year or (include_current and self.value == year):
            yield self.range

    @override
    def __str__(self) -> str:
        return str(self.value)
