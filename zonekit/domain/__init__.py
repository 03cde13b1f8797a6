"""
Domain layer - value types, errors and the offset grammar.
"""

from .exceptions import InvalidArgumentError, ReferenceDataError, ZoneKitError, ZoneNotFoundError
from .models import BusinessSchedule, MeetingSlot, TimeRange, ZoneRecord

__all__ = [
    "BusinessSchedule",
    "InvalidArgumentError",
    "MeetingSlot",
    "ReferenceDataError",
    "TimeRange",
    "ZoneKitError",
    "ZoneNotFoundError",
    "ZoneRecord",
]
