"""
ZoneToolkit - the public operation surface.

Wires the reference tables to the resolver, parser, conversion engine,
business-hours engine and meeting finder, and adds the geographic lookups.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from pendulum import DateTime

from ..adapters.reference_tables import ReferenceTables, get_reference_tables
from ..domain.exceptions import InvalidArgumentError, ZoneKitError, ZoneNotFoundError
from ..domain.models import BusinessSchedule, MeetingSlot, TimeRange
from ..domain.offsets import format_offset
from .business_hours import BusinessHoursCalculator
from .conversion import ZoneConverter
from .meeting_finder import MeetingSlotFinder
from .parser import ZoneParser
from .resolver import ZoneCache, ZoneHandle, ZoneResolver

logger = logging.getLogger(__name__)


class ZoneToolkit:
    """
    Timezone resolution, conversion and scheduling over one set of tables.

    Instances are safe to share between threads.
    """

    def __init__(self, tables: ReferenceTables | None = None, cache: ZoneCache | None = None):
        self.tables = tables if tables is not None else get_reference_tables()
        self.resolver = ZoneResolver(self.tables, cache)
        self.parser = ZoneParser(self.tables, self.resolver)
        self.converter = ZoneConverter(self.resolver)
        self.business_hours = BusinessHoursCalculator(self.resolver, self.converter)
        self.meeting_finder = MeetingSlotFinder(self.resolver, self.business_hours)

    # Parsing and resolution

    def parse_timezone(self, text: str) -> ZoneHandle:
        """Parse free-form input (id, abbreviation, city, offset...) into a zone handle."""
        return self.resolver.resolve(self.parser.parse(text))

    def try_parse_timezone(self, text: str) -> Tuple[bool, Optional[ZoneHandle]]:
        try:
            return True, self.parse_timezone(text)
        except ZoneKitError:
            return False, None

    def search_timezones(self, query: str) -> List[str]:
        return self.parser.search(query)

    def resolve_zone(self, zone_id: str) -> ZoneHandle:
        return self.resolver.resolve(zone_id)

    def try_resolve_zone(self, zone_id: str) -> Tuple[bool, Optional[ZoneHandle]]:
        return self.resolver.try_resolve(zone_id)

    def canonical_to_alternate(self, canonical_id: str) -> Optional[str]:
        return self.resolver.canonical_to_alternate(canonical_id)

    def alternate_to_canonical(self, alternate_id: str) -> Optional[str]:
        return self.resolver.alternate_to_canonical(alternate_id)

    # Conversion

    def convert(self, value: datetime, zone: str, to_zone: str | None = None) -> DateTime:
        return self.converter.convert(value, zone, to_zone)

    def to_utc(self, wall_clock: datetime, zone: str) -> DateTime:
        return self.converter.to_utc(wall_clock, zone)

    def offset_at(self, zone: str, value: datetime) -> timedelta:
        return self.converter.offset_at(zone, value)

    def supports_dst(self, zone: str) -> bool:
        return self.converter.supports_dst(zone)

    def is_dst(self, zone: str, value: datetime) -> bool:
        return self.converter.is_dst(zone, value)

    def friendly_name(self, zone_id: str) -> str:
        """
        Human-readable zone name.

        Uses the display-name table when it has an entry, otherwise a label
        such as ``(UTC+05:45) Asia/Kathmandu`` built from the standard offset.
        """
        if zone_id is None:
            raise InvalidArgumentError("zone_id cannot be None")

        display_name = self.tables.display_names.get(zone_id)
        if display_name is not None:
            return display_name

        handle = self.resolver.resolve(zone_id)
        offset = self.converter.standard_offset(zone_id)
        return f"(UTC{format_offset(offset)}) {handle.name}"

    # Geography

    def common_zones(self) -> List[str]:
        return list(self.tables.common_zones)

    def zones_by_country(self, country_code: str) -> List[str]:
        """
        Canonical ids used in a country (ISO 3166 alpha-2, any case).

        Raises:
            InvalidArgumentError: If the code is None or blank
            ZoneNotFoundError: If the country is not in the table
        """
        if country_code is None or not country_code.strip():
            raise InvalidArgumentError("Country code cannot be null or empty.")

        code = country_code.strip().upper()
        zone_ids = self.tables.countries.get(code)
        if zone_ids is None:
            raise ZoneNotFoundError(f"Country code not found: {code}", query=country_code)
        return list(zone_ids)

    def try_zones_by_country(self, country_code: str) -> Tuple[bool, Optional[List[str]]]:
        try:
            return True, self.zones_by_country(country_code)
        except ZoneKitError:
            return False, None

    def zones_by_offset(self, offset: timedelta) -> List[str]:
        """Canonical ids whose base offset equals ``offset`` exactly."""
        return self.tables.zones_with_base_offset(offset)

    def zone_by_city(self, city: str) -> ZoneHandle:
        return self.resolver.resolve(self.parser.city_to_canonical(city))

    def try_zone_by_city(self, city: str) -> Tuple[bool, Optional[ZoneHandle]]:
        try:
            return True, self.zone_by_city(city)
        except ZoneKitError:
            return False, None

    # Business hours

    def is_business_hour(
        self,
        value: datetime,
        zone: str | BusinessSchedule,
        start_hour: int = 9,
        end_hour: int = 17,
    ) -> bool:
        """
        Check business hours either with fixed weekday hours in a zone or
        against a BusinessSchedule.
        """
        if isinstance(zone, BusinessSchedule):
            return self.business_hours.is_schedule_open(value, zone)
        return self.business_hours.is_business_hour(value, zone, start_hour, end_hour)

    def next_business_hour(
        self,
        value: datetime,
        zone: str,
        start_hour: int = 9,
        end_hour: int = 17,
        max_days: int = 7,
    ) -> DateTime | None:
        return self.business_hours.next_business_hour(value, zone, start_hour, end_hour, max_days)

    def next_available(
        self,
        value: datetime,
        schedule: BusinessSchedule,
        horizon_days: int = 7,
    ) -> datetime | None:
        return self.business_hours.next_available(value, schedule, horizon_days)

    # Meetings

    def find_meeting_time(
        self,
        zones: Sequence[str] | Sequence[BusinessSchedule],
        working_hours: TimeRange | date | None = None,
        day: date | None = None,
    ) -> List[MeetingSlot]:
        """
        Find UTC windows in which every participant is open.

        Call it either as ``find_meeting_time(zone_ids, working_hours, day)``
        or as ``find_meeting_time(schedules, day)``.

        An unresolvable zone yields an empty list. Argument errors still raise.
        """
        schedule_count = sum(isinstance(item, BusinessSchedule) for item in zones or ())
        if 0 < schedule_count < len(zones):
            raise InvalidArgumentError("Pass either zone ids or BusinessSchedules, not a mix of both.")
        by_schedule = schedule_count > 0
        if by_schedule and day is None:
            day = working_hours
        if day is None or isinstance(day, TimeRange):
            raise InvalidArgumentError("A date must be provided.")

        try:
            if by_schedule:
                return self.meeting_finder.find_meeting_time_for_schedules(zones, day)
            return self.meeting_finder.find_meeting_time(zones, working_hours, day)
        except ZoneNotFoundError as exc:
            logger.warning("No meeting slots: %s", exc)
            return []
