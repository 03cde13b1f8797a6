"""
Service layer that resolves, converts and schedules over the reference tables.
"""

from .business_hours import BusinessHoursCalculator
from .conversion import ZoneConverter
from .meeting_finder import MeetingSlotFinder
from .parser import ZoneParser
from .resolver import ZoneCache, ZoneHandle, ZoneResolver
from .toolkit import ZoneToolkit

__all__ = [
    "BusinessHoursCalculator",
    "MeetingSlotFinder",
    "ZoneCache",
    "ZoneConverter",
    "ZoneHandle",
    "ZoneParser",
    "ZoneResolver",
    "ZoneToolkit",
]
