"""
Finds UTC windows during which every participating zone is open.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Sequence

import pendulum
from pendulum import DateTime

from ..domain.exceptions import InvalidArgumentError
from ..domain.models import BusinessSchedule, MeetingSlot, TimeRange
from .business_hours import BusinessHoursCalculator, is_weekend
from .resolver import ZoneResolver

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 24


class MeetingSlotFinder:
    """
    Hour-granular meeting search over one UTC calendar day.

    Algorithm:
    1. Build the 24 UTC hour starts of the day
    2. Keep an hour if every zone accepts it
    3. Turn kept hours into one-hour slots
    4. Merge slots that touch into maximal windows

    Openings or closings that do not fall on a UTC hour are not visible.
    """

    def __init__(self, resolver: ZoneResolver, business_hours: BusinessHoursCalculator):
        self._resolver = resolver
        self._business_hours = business_hours

    def find_meeting_time(
        self,
        zones: Sequence[str],
        working_hours: TimeRange,
        day: date,
    ) -> List[MeetingSlot]:
        """
        Find windows where all zones are inside ``working_hours`` on a weekday.

        Args:
            zones: Zone ids, each accepted by the resolver
            working_hours: Local time-of-day range applied in every zone
            day: UTC calendar day to search

        Returns:
            Ordered, non-overlapping slots

        Raises:
            InvalidArgumentError: If no zones or no working hours are given
            ZoneNotFoundError: If a zone cannot be resolved
        """
        if not zones:
            raise InvalidArgumentError("At least one timezone must be provided.")
        if working_hours is None:
            raise InvalidArgumentError("working_hours cannot be None")

        handles = [self._resolver.resolve(zone) for zone in zones]

        def accepts(utc_hour: DateTime) -> bool:
            for handle in handles:
                local = utc_hour.in_timezone(handle)
                if is_weekend(local) or not working_hours.contains(local):
                    return False
            return True

        return self._collect_slots(day, accepts)

    def find_meeting_time_for_schedules(
        self,
        schedules: Sequence[BusinessSchedule],
        day: date,
    ) -> List[MeetingSlot]:
        """
        Same search as ``find_meeting_time`` with each zone judged by its own schedule.

        Raises:
            InvalidArgumentError: If no schedules are given
            ZoneNotFoundError: If a schedule's zone cannot be resolved
        """
        if not schedules:
            raise InvalidArgumentError("At least one business hours configuration must be provided.")

        def accepts(utc_hour: DateTime) -> bool:
            return all(
                self._business_hours.is_schedule_open(utc_hour, schedule)
                for schedule in schedules
            )

        return self._collect_slots(day, accepts)

    def _collect_slots(
        self,
        day: date,
        accepts: Callable[[DateTime], bool],
    ) -> List[MeetingSlot]:
        slots: List[MeetingSlot] = []

        for hour in range(HOURS_PER_DAY):
            utc_hour = pendulum.datetime(day.year, day.month, day.day, hour, tz="UTC")
            if accepts(utc_hour):
                slots.append(MeetingSlot(start=utc_hour, end=utc_hour.add(hours=1)))

        merged = self._merge_consecutive_slots(slots)
        logger.debug("Found %d candidate hours, %d merged slots on %s", len(slots), len(merged), day)
        return merged

    def _merge_consecutive_slots(self, slots: List[MeetingSlot]) -> List[MeetingSlot]:
        """
        Merge slots where one ends exactly when the next starts.

        Input must be sorted by start time.
        """
        if not slots:
            return []

        merged: List[MeetingSlot] = []
        current = slots[0]

        for slot in slots[1:]:
            if slot.start == current.end:
                current = MeetingSlot(start=current.start, end=slot.end)
            else:
                merged.append(current)
                current = slot

        merged.append(current)
        return merged
