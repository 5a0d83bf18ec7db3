"""
Conversion of seconds-since-epoch timestamps into the short "Mon DD HH:MM"
form used in long listings.

The calendar arithmetic is done by hand (rather than via :py:mod:`datetime`
or :py:func:`time.strftime`) and only ever applies a single fixed UTC offset
which is supplied by the caller. Only :py:func:`local_utc_offset` consults
the host's timezone rules.
"""

from typing import Optional

import os
import time

from enum import IntEnum
from dataclasses import dataclass, field


SECONDS_PER_DAY = 86400

MONTH_ABBREVIATIONS = [
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
]


class CreationTimeUnavailableError(OSError):
    """Raised when the platform does not record file creation times."""


class Weekday(IntEnum):
    monday = 0
    tuesday = 1
    wednesday = 2
    thursday = 3
    friday = 4
    saturday = 5
    sunday = 6


def is_leap_year(year: int) -> bool:
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def days_in_month(month: int, year: int) -> int:
    """
    Number of days in the given (1-based) month. Returns 0 for months
    outside 1-12.
    """
    if month in (1, 3, 5, 7, 8, 10, 12):
        return 31
    elif month in (4, 6, 9, 11):
        return 30
    elif month == 2:
        return 29 if is_leap_year(year) else 28
    else:
        return 0


def to_calendar_date(
    epoch_seconds: int,
    utc_offset_seconds: int,
) -> tuple[int, int, int]:
    """
    Return the local (year, month, day) for a timestamp. Month and day are
    1-based.

    Local times before 1970 (e.g. a timestamp close to the epoch combined
    with a negative UTC offset) are handled by walking backwards a year at a
    time.
    """
    local_seconds = epoch_seconds + utc_offset_seconds

    # Floor division: a negative local time lands on the preceding day.
    days = local_seconds // SECONDS_PER_DAY

    year = 1970
    while days >= days_in_year(year):
        days -= days_in_year(year)
        year += 1
    while days < 0:
        year -= 1
        days += days_in_year(year)

    month = 1
    while days >= days_in_month(month, year):
        days -= days_in_month(month, year)
        month += 1

    return (year, month, days + 1)


def to_time_parts(
    epoch_seconds: int,
    utc_offset_seconds: int,
) -> tuple[int, int, int]:
    """
    Return the local (hour, minute, second) for a timestamp, 24-hour clock.
    """
    seconds_of_day = (epoch_seconds + utc_offset_seconds) % SECONDS_PER_DAY
    return (
        seconds_of_day // 3600,
        (seconds_of_day % 3600) // 60,
        seconds_of_day % 60,
    )


def day_of_week(year: int, month: int, day: int) -> Weekday:
    """
    Compute the day of the week of a (proleptic Gregorian) date using
    Zeller's congruence.
    """
    # January and February count as months 13 and 14 of the previous year
    if month < 3:
        month += 12
        year -= 1

    k = year % 100
    j = year // 100
    h = (day + (13 * (month + 1)) // 5 + k + k // 4 + j // 4 - 2 * j) % 7

    # Zeller's h counts from Saturday (0); shift so Monday is 0.
    return Weekday((h + 5) % 7)


def render(epoch_seconds: int, utc_offset_seconds: int) -> str:
    """
    Format a timestamp as "Mon DD HH:MM" in the local time given by the
    supplied UTC offset, e.g. "Jan  5 09:03".
    """
    _year, month, day = to_calendar_date(epoch_seconds, utc_offset_seconds)
    hours, minutes, _seconds = to_time_parts(epoch_seconds, utc_offset_seconds)

    if 1 <= month <= len(MONTH_ABBREVIATIONS):
        month_str = MONTH_ABBREVIATIONS[month - 1]
    else:
        month_str = "???"

    return f"{month_str} {day:>2} {hours:02}:{minutes:02}"


def local_utc_offset(epoch_seconds: int) -> int:
    """
    Query the host's timezone rules for the UTC offset (in seconds) in force
    at the given instant. Returns 0 if the host can't say.
    """
    try:
        offset: Optional[int] = time.localtime(epoch_seconds).tm_gmtoff
    except (OverflowError, OSError, ValueError):
        return 0
    return offset if offset is not None else 0


@dataclass(frozen=True, order=True)
class Timestamp:
    """
    A point in time (whole seconds since the epoch) along with the UTC offset
    which should be used to display it.

    The offset is fixed when the timestamp is created and plays no part in
    comparisons.
    """

    secs: int
    offset: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        if self.secs < 0:
            raise ValueError(f"timestamp before the epoch: {self.secs}")

    @classmethod
    def from_epoch(cls, secs: float) -> "Timestamp":
        # Pre-epoch times aren't representable; show them as the epoch
        secs = max(0, int(secs))
        return cls(secs, local_utc_offset(secs))

    @classmethod
    def from_modified(cls, stat_result: os.stat_result) -> "Timestamp":
        return cls.from_epoch(stat_result.st_mtime)

    @classmethod
    def from_created(cls, stat_result: os.stat_result) -> "Timestamp":
        """
        Raises CreationTimeUnavailableError on platforms (or filesystems)
        which do not record file creation times.
        """
        birthtime = getattr(stat_result, "st_birthtime", None)
        if birthtime is None:
            raise CreationTimeUnavailableError(
                "creation time not available on this platform"
            )
        return cls.from_epoch(birthtime)

    def to_calendar_date(self) -> tuple[int, int, int]:
        return to_calendar_date(self.secs, self.offset)

    def to_time_parts(self) -> tuple[int, int, int]:
        return to_time_parts(self.secs, self.offset)

    def day_of_week(self) -> Weekday:
        return day_of_week(*self.to_calendar_date())

    def format(self) -> str:
        return render(self.secs, self.offset)
