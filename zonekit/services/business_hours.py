"""
Business-hour checks against fixed weekday hours or a BusinessSchedule.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from pendulum import DateTime

from ..domain.exceptions import InvalidArgumentError
from ..domain.models import BusinessSchedule
from .conversion import ZoneConverter, localize, to_instant
from .resolver import ZoneResolver

logger = logging.getLogger(__name__)

SATURDAY = 5
SUNDAY = 6


def is_weekend(value: datetime) -> bool:
    return value.weekday() in (SATURDAY, SUNDAY)


def _check_hours(start_hour: int, end_hour: int) -> None:
    for name, value in (("start_hour", start_hour), ("end_hour", end_hour)):
        if not 0 <= value <= 24:
            raise InvalidArgumentError(f"{name} must be between 0 and 24, got {value}")


class BusinessHoursCalculator:
    """
    Two independent models of "open":

    - fixed hours: Monday to Friday, ``start_hour <= hour < end_hour`` in the
      zone's wall clock, weekends always closed
    - a BusinessSchedule with per-weekday ranges
    """

    def __init__(self, resolver: ZoneResolver, converter: ZoneConverter):
        self._resolver = resolver
        self._converter = converter

    def is_business_hour(
        self,
        value: datetime,
        zone: str,
        start_hour: int = 9,
        end_hour: int = 17,
    ) -> bool:
        """Check whether an instant falls inside fixed weekday hours in ``zone``."""
        _check_hours(start_hour, end_hour)
        local = self._converter.convert(value, zone)

        if is_weekend(local):
            return False
        return start_hour <= local.hour < end_hour

    def next_business_hour(
        self,
        value: datetime,
        zone: str,
        start_hour: int = 9,
        end_hour: int = 17,
        max_days: int = 7,
    ) -> DateTime | None:
        """
        Find the next instant inside fixed weekday hours in ``zone``.

        The search walks the zone's wall clock one hour at a time, jumping to
        the next day's opening once past closing or on a weekend. An instant
        that is already inside business hours is returned unchanged.

        Returns:
            The UTC instant, or None if nothing opens within ``max_days``.
        """
        _check_hours(start_hour, end_hour)
        handle = self._resolver.resolve(zone)
        current = to_instant(value).in_timezone(handle).naive()

        for _ in range(max_days * 24):
            if not is_weekend(current) and start_hour <= current.hour < end_hour:
                return localize(current, handle).in_timezone("UTC")

            current = current + timedelta(hours=1)

            if current.hour >= end_hour or is_weekend(current):
                next_day = current.date() + timedelta(days=1)
                current = datetime(next_day.year, next_day.month, next_day.day) + timedelta(hours=start_hour)

        logger.debug("No business hour in %s within %d days of %s", zone, max_days, value)
        return None

    def is_schedule_open(self, value: datetime, schedule: BusinessSchedule) -> bool:
        """
        Check a schedule at a given time.

        Aware values are converted into the schedule's zone first. Naive values
        are read as wall-clock time in that zone already.
        """
        if value.tzinfo is None:
            return schedule.is_open(value)

        handle = self._resolver.resolve(schedule.zone_id)
        return schedule.is_open(to_instant(value).in_timezone(handle))

    def next_available(
        self,
        value: datetime,
        schedule: BusinessSchedule,
        horizon_days: int = 7,
    ) -> datetime | None:
        """
        Next opening of a schedule, searched in the schedule's zone.

        See ``BusinessSchedule.next_available`` for the day-0 rule.
        """
        if horizon_days <= 0:
            raise InvalidArgumentError(f"horizon_days must be positive, got {horizon_days}")

        if value.tzinfo is None:
            return schedule.next_available(value, horizon_days)

        handle = self._resolver.resolve(schedule.zone_id)
        return schedule.next_available(to_instant(value).in_timezone(handle), horizon_days)
