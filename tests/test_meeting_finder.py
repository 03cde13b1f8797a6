"""
Tests for the meeting slot finder.
"""

from datetime import date

import pendulum
import pytest

from zonekit.domain.exceptions import InvalidArgumentError, ZoneNotFoundError
from zonekit.domain.models import BusinessSchedule, MeetingSlot, TimeRange
from zonekit.services.business_hours import BusinessHoursCalculator
from zonekit.services.conversion import ZoneConverter
from zonekit.services.meeting_finder import MeetingSlotFinder
from zonekit.services.resolver import ZoneResolver


@pytest.fixture
def finder(tables):
    resolver = ZoneResolver(tables)
    business_hours = BusinessHoursCalculator(resolver, ZoneConverter(resolver))
    return MeetingSlotFinder(resolver, business_hours)


def utc(*args):
    return pendulum.datetime(*args, tz="UTC")


def assert_ordered_and_disjoint(slots):
    for earlier, later in zip(slots, slots[1:]):
        assert earlier.end < later.start


class TestFindMeetingTime:
    """Tests for the zone list + working hours form."""

    def test_new_york_and_london(self, finder):
        """Test that the overlap of 9-17 in both zones is 14:00-17:00 UTC in January."""
        slots = finder.find_meeting_time(
            ["America/New_York", "Europe/London"], TimeRange(9, 17), date(2025, 1, 28)
        )

        assert slots == [MeetingSlot(start=utc(2025, 1, 28, 14), end=utc(2025, 1, 28, 17))]

    def test_hours_outside_overlap_are_absent(self, finder):
        slots = finder.find_meeting_time(
            ["America/New_York", "Europe/London"], TimeRange(9, 17), date(2025, 1, 28)
        )

        for hour in (9, 13, 17, 20):
            candidate = utc(2025, 1, 28, hour)
            assert not any(slot.start <= candidate < slot.end for slot in slots)

    def test_single_zone_covers_working_day(self, finder):
        slots = finder.find_meeting_time(["Asia/Kolkata"], TimeRange(9, 17), date(2025, 1, 28))

        # 09:00-17:00 IST starts at 03:30 UTC; only whole UTC hours from 04:00 count
        assert slots == [MeetingSlot(start=utc(2025, 1, 28, 4), end=utc(2025, 1, 28, 12))]

    def test_no_overlap(self, finder):
        slots = finder.find_meeting_time(
            ["America/New_York", "Asia/Tokyo"], TimeRange(9, 17), date(2025, 1, 28)
        )

        assert slots == []

    def test_weekend_has_no_slots(self, finder):
        slots = finder.find_meeting_time(["Europe/London"], TimeRange(0, 23), date(2025, 2, 1))

        assert slots == []

    def test_split_windows_stay_ordered(self, finder):
        """Test that a closed hour in the middle splits the day into separate slots."""
        slots = finder.find_meeting_time(["UTC", "Asia/Kolkata"], TimeRange(1, 23), date(2025, 1, 28))

        assert slots
        assert_ordered_and_disjoint(slots)

    def test_empty_zone_list_raises_error(self, finder):
        with pytest.raises(InvalidArgumentError):
            finder.find_meeting_time([], TimeRange(9, 17), date(2025, 1, 28))

    def test_missing_working_hours_raises_error(self, finder):
        with pytest.raises(InvalidArgumentError):
            finder.find_meeting_time(["UTC"], None, date(2025, 1, 28))

    def test_unknown_zone_raises_error(self, finder):
        with pytest.raises(ZoneNotFoundError):
            finder.find_meeting_time(["Invalid/Timezone"], TimeRange(9, 17), date(2025, 1, 28))


class TestFindMeetingTimeForSchedules:
    """Tests for the per-zone schedule form."""

    def test_standard_schedules_match_fixed_hours(self, finder):
        schedules = [
            BusinessSchedule.standard("America/New_York"),
            BusinessSchedule.standard("Europe/London"),
        ]

        slots = finder.find_meeting_time_for_schedules(schedules, date(2025, 1, 28))

        assert slots == [MeetingSlot(start=utc(2025, 1, 28, 14), end=utc(2025, 1, 28, 17))]

    def test_weekend_override(self, finder):
        """Test that schedules open on Saturday produce Saturday slots."""
        saturday_hours = TimeRange(9, 17)
        schedules = [
            BusinessSchedule(zone_id="America/New_York", saturday=saturday_hours),
            BusinessSchedule(zone_id="Europe/London", saturday=saturday_hours),
        ]

        slots = finder.find_meeting_time_for_schedules(schedules, date(2025, 2, 1))

        assert slots == [MeetingSlot(start=utc(2025, 2, 1, 14), end=utc(2025, 2, 1, 17))]

    def test_per_zone_hours(self, finder):
        schedules = [
            BusinessSchedule.standard("America/New_York", 8, 18),
            BusinessSchedule.standard("Europe/London", 10, 16),
        ]

        slots = finder.find_meeting_time_for_schedules(schedules, date(2025, 1, 28))

        assert slots == [MeetingSlot(start=utc(2025, 1, 28, 13), end=utc(2025, 1, 28, 16))]

    def test_empty_schedule_list_raises_error(self, finder):
        with pytest.raises(InvalidArgumentError):
            finder.find_meeting_time_for_schedules([], date(2025, 1, 28))


class TestMergeConsecutiveSlots:
    """Tests for merging one-hour candidates."""

    def test_merge_adjacent_and_keep_gaps(self, finder):
        slots = [
            MeetingSlot(start=utc(2025, 1, 28, 0), end=utc(2025, 1, 28, 1)),
            MeetingSlot(start=utc(2025, 1, 28, 1), end=utc(2025, 1, 28, 2)),
            MeetingSlot(start=utc(2025, 1, 28, 3), end=utc(2025, 1, 28, 4)),
        ]

        merged = finder._merge_consecutive_slots(slots)

        assert merged == [
            MeetingSlot(start=utc(2025, 1, 28, 0), end=utc(2025, 1, 28, 2)),
            MeetingSlot(start=utc(2025, 1, 28, 3), end=utc(2025, 1, 28, 4)),
        ]

    def test_merge_empty(self, finder):
        assert finder._merge_consecutive_slots([]) == []
