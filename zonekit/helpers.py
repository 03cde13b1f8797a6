"""
Module-level shortcuts backed by one shared ZoneToolkit.

    >>> import zonekit
    >>> zonekit.parse_timezone("EST").name
    'America/New_York'
"""

from __future__ import annotations

import threading
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Tuple

from pendulum import DateTime

from .domain.models import BusinessSchedule, MeetingSlot, TimeRange
from .services.resolver import ZoneHandle
from .services.toolkit import ZoneToolkit

_default_toolkit: Optional[ZoneToolkit] = None
_default_lock = threading.Lock()


def get_toolkit() -> ZoneToolkit:
    """Get the shared toolkit, building it (and loading the tables) on first use."""
    global _default_toolkit

    toolkit = _default_toolkit
    if toolkit is not None:
        return toolkit

    with _default_lock:
        if _default_toolkit is None:
            _default_toolkit = ZoneToolkit()
        return _default_toolkit


def reset_toolkit() -> None:
    """Drop the shared toolkit and its cache (tests only)."""
    global _default_toolkit
    with _default_lock:
        _default_toolkit = None


def parse_timezone(text: str) -> ZoneHandle:
    return get_toolkit().parse_timezone(text)


def try_parse_timezone(text: str) -> Tuple[bool, Optional[ZoneHandle]]:
    return get_toolkit().try_parse_timezone(text)


def search_timezones(query: str) -> List[str]:
    return get_toolkit().search_timezones(query)


def resolve_zone(zone_id: str) -> ZoneHandle:
    return get_toolkit().resolve_zone(zone_id)


def try_resolve_zone(zone_id: str) -> Tuple[bool, Optional[ZoneHandle]]:
    return get_toolkit().try_resolve_zone(zone_id)


def canonical_to_alternate(canonical_id: str) -> Optional[str]:
    return get_toolkit().canonical_to_alternate(canonical_id)


def alternate_to_canonical(alternate_id: str) -> Optional[str]:
    return get_toolkit().alternate_to_canonical(alternate_id)


def convert(value: datetime, zone: str, to_zone: str | None = None) -> DateTime:
    return get_toolkit().convert(value, zone, to_zone)


def to_utc(wall_clock: datetime, zone: str) -> DateTime:
    return get_toolkit().to_utc(wall_clock, zone)


def offset_at(zone: str, value: datetime) -> timedelta:
    return get_toolkit().offset_at(zone, value)


def supports_dst(zone: str) -> bool:
    return get_toolkit().supports_dst(zone)


def is_dst(zone: str, value: datetime) -> bool:
    return get_toolkit().is_dst(zone, value)


def friendly_name(zone_id: str) -> str:
    return get_toolkit().friendly_name(zone_id)


def common_zones() -> List[str]:
    return get_toolkit().common_zones()


def zones_by_country(country_code: str) -> List[str]:
    return get_toolkit().zones_by_country(country_code)


def try_zones_by_country(country_code: str) -> Tuple[bool, Optional[List[str]]]:
    return get_toolkit().try_zones_by_country(country_code)


def zones_by_offset(offset: timedelta) -> List[str]:
    return get_toolkit().zones_by_offset(offset)


def zone_by_city(city: str) -> ZoneHandle:
    return get_toolkit().zone_by_city(city)


def try_zone_by_city(city: str) -> Tuple[bool, Optional[ZoneHandle]]:
    return get_toolkit().try_zone_by_city(city)


def is_business_hour(
    value: datetime,
    zone: str | BusinessSchedule,
    start_hour: int = 9,
    end_hour: int = 17,
) -> bool:
    return get_toolkit().is_business_hour(value, zone, start_hour, end_hour)


def next_business_hour(
    value: datetime,
    zone: str,
    start_hour: int = 9,
    end_hour: int = 17,
    max_days: int = 7,
) -> DateTime | None:
    return get_toolkit().next_business_hour(value, zone, start_hour, end_hour, max_days)


def find_meeting_time(
    zones: Sequence[str] | Sequence[BusinessSchedule],
    working_hours: TimeRange | date | None = None,
    day: date | None = None,
) -> List[MeetingSlot]:
    return get_toolkit().find_meeting_time(zones, working_hours, day)
