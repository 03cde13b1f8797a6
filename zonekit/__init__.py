"""
zonekit - timezone resolution, DST-aware conversion and business-hours scheduling.
"""

__version__ = "1.0.0"

from .domain import (
    BusinessSchedule,
    InvalidArgumentError,
    MeetingSlot,
    ReferenceDataError,
    TimeRange,
    ZoneKitError,
    ZoneNotFoundError,
)
from .helpers import (
    alternate_to_canonical,
    canonical_to_alternate,
    common_zones,
    convert,
    find_meeting_time,
    friendly_name,
    get_toolkit,
    is_business_hour,
    is_dst,
    next_business_hour,
    offset_at,
    parse_timezone,
    resolve_zone,
    search_timezones,
    supports_dst,
    to_utc,
    try_parse_timezone,
    try_resolve_zone,
    try_zone_by_city,
    try_zones_by_country,
    zone_by_city,
    zones_by_country,
    zones_by_offset,
)
from .services import ZoneToolkit

__all__ = [
    "__version__",
    "BusinessSchedule",
    "InvalidArgumentError",
    "MeetingSlot",
    "ReferenceDataError",
    "TimeRange",
    "ZoneKitError",
    "ZoneNotFoundError",
    "ZoneToolkit",
    "alternate_to_canonical",
    "canonical_to_alternate",
    "common_zones",
    "convert",
    "find_meeting_time",
    "friendly_name",
    "get_toolkit",
    "is_business_hour",
    "is_dst",
    "next_business_hour",
    "offset_at",
    "parse_timezone",
    "resolve_zone",
    "search_timezones",
    "supports_dst",
    "to_utc",
    "try_parse_timezone",
    "try_resolve_zone",
    "try_zone_by_city",
    "try_zones_by_country",
    "zone_by_city",
    "zones_by_country",
    "zones_by_offset",
]
