"""
Domain models for zone records, time-of-day ranges, schedules and meeting slots.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import FrozenSet, Optional

import pendulum
from pendulum import DateTime
from pydantic import BaseModel, ConfigDict, field_validator

from .exceptions import InvalidArgumentError
from .offsets import parse_base_offset


class ZoneRecord(BaseModel):
    """
    Reference data for one canonical zone id.

    Records come from the packaged reference tables and never change for the
    lifetime of the process.
    """
    model_config = ConfigDict(frozen=True)

    alternate_id: str = ""
    abbreviations: FrozenSet[str] = frozenset()
    display_name: str = ""
    base_offset: timedelta = timedelta(0)
    supports_dst: bool = False
    countries: FrozenSet[str] = frozenset()

    @field_validator("base_offset", mode="before")
    @classmethod
    def parse_offset(cls, value):
        """Accept ``+HH:MM`` strings as stored in the tables."""
        if isinstance(value, str):
            return parse_base_offset(value)
        return value

    @field_validator("countries", mode="before")
    @classmethod
    def normalize_countries(cls, value):
        """Country codes are stored upper-case."""
        if value is None:
            return frozenset()
        return frozenset(code.upper() for code in value)


def _check_bounds(name: str, value: int, upper: int) -> None:
    if not 0 <= value <= upper:
        raise InvalidArgumentError(f"{name} must be between 0 and {upper}, got {value}")


_RANGE_FIELDS = ("start_hour", "start_minute", "end_hour", "end_minute")


@dataclass(frozen=True, init=False)
class TimeRange:
    """
    Represents an immutable time-of-day range ``[start, end)``.

    Built either as ``TimeRange(start_hour, end_hour)`` or as
    ``TimeRange(start_hour, start_minute, end_hour, end_minute)``; any field
    may also be passed by keyword.

    Invariant: hours are within 0..23 and minutes within 0..59. The end is
    exclusive, so ``TimeRange(9, 17)`` contains 09:00 but not 17:00.
    """
    start_hour: int
    start_minute: int
    end_hour: int
    end_minute: int

    def __init__(self, *args: int, **kwargs: int):
        if len(args) == 2:
            names = ("start_hour", "end_hour")
        elif len(args) == 4:
            names = _RANGE_FIELDS
        elif args:
            raise TypeError(f"TimeRange takes 2 or 4 positional arguments, got {len(args)}")
        else:
            names = ()

        values = {"start_minute": 0, "end_minute": 0}
        for name, value in zip(names, args):
            if name in kwargs:
                raise TypeError(f"TimeRange got multiple values for '{name}'")
            values[name] = value
        unknown = set(kwargs) - set(_RANGE_FIELDS)
        if unknown:
            raise TypeError(f"TimeRange got unexpected arguments: {', '.join(sorted(unknown))}")
        values.update(kwargs)

        for name in ("start_hour", "end_hour"):
            if name not in values:
                raise TypeError(f"TimeRange missing required argument '{name}'")

        _check_bounds("start_hour", values["start_hour"], 23)
        _check_bounds("end_hour", values["end_hour"], 23)
        _check_bounds("start_minute", values["start_minute"], 59)
        _check_bounds("end_minute", values["end_minute"], 59)

        for name in _RANGE_FIELDS:
            object.__setattr__(self, name, values[name])

    @classmethod
    def from_times(cls, start: time, end: time) -> "TimeRange":
        """Build a range from two ``time`` objects."""
        return cls(
            start_hour=start.hour,
            end_hour=end.hour,
            start_minute=start.minute,
            end_minute=end.minute,
        )

    @property
    def start_time(self) -> time:
        return time(self.start_hour, self.start_minute)

    @property
    def end_time(self) -> time:
        return time(self.end_hour, self.end_minute)

    def contains(self, value: time | datetime) -> bool:
        """
        Check if a time of day falls within this range.

        For a datetime only the wall-clock time part is compared.
        """
        if isinstance(value, datetime):
            value = value.time()
        else:
            value = value.replace(tzinfo=None)
        return self.start_time <= value < self.end_time

    def __str__(self) -> str:
        return f"{self.start_hour:02d}:{self.start_minute:02d} - {self.end_hour:02d}:{self.end_minute:02d}"


@dataclass
class BusinessSchedule:
    """
    Per-weekday opening hours for one zone.

    A weekday set to None is closed all day. Wall-clock values handed to
    ``is_open`` and ``next_available`` are read in the schedule's own zone.
    """
    zone_id: str
    monday: Optional[TimeRange] = None
    tuesday: Optional[TimeRange] = None
    wednesday: Optional[TimeRange] = None
    thursday: Optional[TimeRange] = None
    friday: Optional[TimeRange] = None
    saturday: Optional[TimeRange] = None
    sunday: Optional[TimeRange] = None

    def __post_init__(self):
        if not self.zone_id or not self.zone_id.strip():
            raise InvalidArgumentError("zone_id cannot be empty")

    @classmethod
    def standard(cls, zone_id: str, start_hour: int = 9, end_hour: int = 17) -> "BusinessSchedule":
        """Monday to Friday with the same hours, closed at the weekend."""
        hours = TimeRange(start_hour, end_hour)
        return cls(
            zone_id=zone_id,
            monday=hours,
            tuesday=hours,
            wednesday=hours,
            thursday=hours,
            friday=hours,
        )

    def hours_for_day(self, weekday: int) -> Optional[TimeRange]:
        """Get the range for a weekday (0=Monday, 6=Sunday)."""
        days = (
            self.monday,
            self.tuesday,
            self.wednesday,
            self.thursday,
            self.friday,
            self.saturday,
            self.sunday,
        )
        if not 0 <= weekday <= 6:
            raise InvalidArgumentError(f"weekday must be between 0 and 6, got {weekday}")
        return days[weekday]

    def is_open(self, wall_clock: datetime) -> bool:
        """Check if the schedule is open at a wall-clock time in its zone."""
        hours = self.hours_for_day(wall_clock.weekday())
        if hours is None:
            return False
        return hours.contains(wall_clock)

    def next_available(self, wall_clock: datetime, horizon_days: int = 7) -> datetime | None:
        """
        Find the next opening time within ``horizon_days`` days.

        Day 0 only counts when ``wall_clock`` lies strictly before that day's
        opening. Starting inside today's window still moves on to the next
        open day.

        Returns:
            The opening wall-clock time, or None if nothing opens in time.
            Aware input yields an aware result in the same zone.
        """
        start_day = wall_clock.date()

        for offset in range(horizon_days):
            day = start_day + timedelta(days=offset)
            hours = self.hours_for_day(day.weekday())
            if hours is None:
                continue

            if offset == 0 and wall_clock.time() >= hours.start_time:
                continue

            return self._opening_on(day, hours, wall_clock)

        return None

    @staticmethod
    def _opening_on(day: date, hours: TimeRange, reference: datetime) -> datetime:
        if reference.tzinfo is None:
            return datetime.combine(day, hours.start_time)
        return pendulum.datetime(
            day.year,
            day.month,
            day.day,
            hours.start_hour,
            hours.start_minute,
            tz=reference.tzinfo,
        )


@dataclass(frozen=True)
class MeetingSlot:
    """
    A window in UTC during which every considered zone is open.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start >= self.end:
            raise InvalidArgumentError(f"Start time {self.start} must be before end time {self.end}")

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    def start_in_zone(self, zone) -> DateTime:
        """Get the start as wall-clock time in another zone."""
        return self.start.in_timezone(zone)

    def end_in_zone(self, zone) -> DateTime:
        """Get the end as wall-clock time in another zone."""
        return self.end.in_timezone(zone)

    def __str__(self) -> str:
        hours = self.duration.total_seconds() / 3600
        return (
            f"{self.start.format('YYYY-MM-DD HH:mm')} UTC - "
            f"{self.end.format('HH:mm')} UTC ({hours:.1f}h)"
        )
