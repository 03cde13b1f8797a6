"""
Tests for domain models.
"""

from datetime import datetime, time, timedelta

import pendulum
import pytest
from pydantic import ValidationError

from zonekit.domain.exceptions import InvalidArgumentError
from zonekit.domain.models import BusinessSchedule, MeetingSlot, TimeRange, ZoneRecord


class TestZoneRecord:
    """Tests for ZoneRecord model."""

    def test_offset_string_is_parsed(self):
        record = ZoneRecord(display_name="India Standard Time", base_offset="+05:30", countries=["in"])

        assert record.base_offset == timedelta(hours=5, minutes=30)
        assert record.countries == frozenset({"IN"})

    def test_invalid_offset_raises_error(self):
        with pytest.raises(ValidationError):
            ZoneRecord(base_offset="five hours")

    def test_record_is_frozen(self):
        record = ZoneRecord(display_name="Japan Standard Time")

        with pytest.raises(ValidationError):
            record.display_name = "Something else"


class TestTimeRange:
    """Tests for TimeRange model."""

    def test_contains_is_start_inclusive_end_exclusive(self):
        """Test boundary behaviour of contains."""
        tr = TimeRange(9, 17)

        assert tr.contains(time(10, 0))
        assert tr.contains(time(9, 0))
        assert not tr.contains(time(17, 0))
        assert not tr.contains(time(8, 0))
        assert not tr.contains(time(18, 0))

    @pytest.mark.parametrize("start_hour, end_hour", [(0, 1), (8, 12), (9, 17), (13, 23)])
    def test_contains_boundaries_for_any_valid_range(self, start_hour, end_hour):
        tr = TimeRange(start_hour, end_hour)

        assert tr.contains(time(start_hour, 0))
        assert not tr.contains(time(end_hour, 0))

    def test_contains_with_minutes(self):
        tr = TimeRange(9, 17, start_minute=30, end_minute=15)

        assert not tr.contains(time(9, 29))
        assert tr.contains(time(9, 30))
        assert tr.contains(time(17, 14))
        assert not tr.contains(time(17, 15))

    def test_four_argument_form_orders_minutes_after_hours(self):
        """Test that TimeRange(h, m, h, m) reads as start hour/minute then end hour/minute."""
        tr = TimeRange(8, 0, 12, 0)

        assert tr == TimeRange(8, 12)
        assert tr.contains(time(9, 0))
        assert str(tr) == "08:00 - 12:00"
        assert str(TimeRange(8, 30, 12, 15)) == "08:30 - 12:15"

    @pytest.mark.parametrize("args", [(9,), (9, 0, 17)])
    def test_wrong_number_of_positional_arguments(self, args):
        with pytest.raises(TypeError):
            TimeRange(*args)

    def test_contains_uses_time_of_day_of_datetime(self):
        tr = TimeRange(9, 17)

        assert tr.contains(datetime(2025, 1, 28, 10, 0))
        assert tr.contains(pendulum.datetime(2025, 1, 28, 16, 59, tz="Asia/Tokyo"))
        assert not tr.contains(pendulum.datetime(2025, 1, 28, 17, 0, tz="Asia/Tokyo"))

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"start_hour": 24, "end_hour": 17},
            {"start_hour": 9, "end_hour": -1},
            {"start_hour": 9, "end_hour": 17, "start_minute": 60},
            {"start_hour": 9, "end_hour": 17, "end_minute": -5},
        ],
    )
    def test_out_of_range_values_raise_error(self, kwargs):
        """Test that invalid hours or minutes raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="must be between"):
            TimeRange(**kwargs)

    def test_from_times_and_str(self):
        tr = TimeRange.from_times(time(8, 30), time(12, 0))

        assert tr.start_time == time(8, 30)
        assert tr.end_time == time(12, 0)
        assert str(tr) == "08:30 - 12:00"


class TestBusinessSchedule:
    """Tests for BusinessSchedule model."""

    def test_standard_schedule(self):
        schedule = BusinessSchedule.standard("America/New_York", 9, 17)

        assert schedule.hours_for_day(0) == TimeRange(9, 17)
        assert schedule.hours_for_day(4) == TimeRange(9, 17)
        assert schedule.hours_for_day(5) is None
        assert schedule.hours_for_day(6) is None

    def test_empty_zone_raises_error(self):
        with pytest.raises(InvalidArgumentError):
            BusinessSchedule(zone_id="  ")

    def test_invalid_weekday_raises_error(self):
        schedule = BusinessSchedule.standard("Europe/London")

        with pytest.raises(InvalidArgumentError):
            schedule.hours_for_day(7)

    def test_is_open(self):
        schedule = BusinessSchedule.standard("America/New_York")

        assert schedule.is_open(datetime(2025, 1, 28, 10, 0))  # Tuesday
        assert not schedule.is_open(datetime(2025, 1, 28, 17, 0))
        assert not schedule.is_open(datetime(2025, 2, 1, 10, 0))  # Saturday

    def test_custom_weekend_hours(self):
        schedule = BusinessSchedule(
            zone_id="Asia/Dubai",
            saturday=TimeRange(10, 14),
            sunday=TimeRange(9, 17),
        )

        assert schedule.is_open(datetime(2025, 2, 1, 11, 0))
        assert not schedule.is_open(datetime(2025, 2, 1, 15, 0))
        assert not schedule.is_open(datetime(2025, 1, 28, 11, 0))

    def test_next_available_from_weekend(self):
        """Test that Saturday morning moves to Monday's opening."""
        schedule = BusinessSchedule.standard("America/New_York")

        next_open = schedule.next_available(datetime(2025, 2, 1, 10, 0))

        assert next_open == datetime(2025, 2, 3, 9, 0)

    def test_next_available_before_opening_is_same_day(self):
        schedule = BusinessSchedule.standard("America/New_York")

        assert schedule.next_available(datetime(2025, 1, 28, 8, 0)) == datetime(2025, 1, 28, 9, 0)

    def test_next_available_while_open_moves_to_next_day(self):
        """Test that being inside today's window still returns the next opening day."""
        schedule = BusinessSchedule.standard("America/New_York")

        assert schedule.next_available(datetime(2025, 1, 28, 10, 0)) == datetime(2025, 1, 29, 9, 0)
        assert schedule.next_available(datetime(2025, 1, 28, 9, 0)) == datetime(2025, 1, 29, 9, 0)

    def test_next_available_keeps_zone_of_aware_input(self):
        schedule = BusinessSchedule.standard("America/New_York")
        saturday = pendulum.datetime(2025, 2, 1, 10, 0, tz="America/New_York")

        next_open = schedule.next_available(saturday)

        assert next_open == pendulum.datetime(2025, 2, 3, 9, 0, tz="America/New_York")

    def test_next_available_respects_horizon(self):
        schedule = BusinessSchedule(zone_id="UTC", monday=TimeRange(9, 17))

        # Tuesday: the next Monday is six days away
        assert schedule.next_available(datetime(2025, 1, 28, 10, 0)) == datetime(2025, 2, 3, 9, 0)
        assert schedule.next_available(datetime(2025, 1, 28, 10, 0), horizon_days=6) is None

    def test_next_available_closed_schedule(self):
        schedule = BusinessSchedule(zone_id="UTC")

        assert schedule.next_available(datetime(2025, 1, 28, 10, 0)) is None


class TestMeetingSlot:
    """Tests for MeetingSlot model."""

    def test_create_valid_slot(self):
        start = pendulum.datetime(2025, 1, 28, 14, tz="UTC")
        end = pendulum.datetime(2025, 1, 28, 17, tz="UTC")

        slot = MeetingSlot(start=start, end=end)

        assert slot.duration == timedelta(hours=3)
        assert str(slot) == "2025-01-28 14:00 UTC - 17:00 UTC (3.0h)"

    def test_invalid_slot_raises_error(self):
        start = pendulum.datetime(2025, 1, 28, 17, tz="UTC")
        end = pendulum.datetime(2025, 1, 28, 14, tz="UTC")

        with pytest.raises(ValueError, match="Start time .* must be before end time"):
            MeetingSlot(start=start, end=end)

    def test_times_in_zone(self):
        slot = MeetingSlot(
            start=pendulum.datetime(2025, 1, 28, 14, tz="UTC"),
            end=pendulum.datetime(2025, 1, 28, 17, tz="UTC"),
        )

        assert slot.start_in_zone("America/New_York").hour == 9
        assert slot.end_in_zone("Europe/London").hour == 17
