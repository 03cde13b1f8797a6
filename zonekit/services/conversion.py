"""
DST-aware conversion between zones.

Input datetimes are read as follows:

- aware values are instants; their own offset places them on the UTC
  timeline (this covers host-local values such as ``pendulum.local(...)``
  or ``datetime.now().astimezone()``)
- naive values given as instants are taken to be UTC already
- wall-clock arguments (``convert`` with two zones, ``to_utc``) only use the
  calendar fields; any attached tzinfo is ignored

Results are pendulum ``DateTime`` objects carrying the target zone.
"""

from __future__ import annotations

from datetime import datetime, timedelta

import pendulum
from pendulum import DateTime

from .resolver import ZoneHandle, ZoneResolver

# Look ahead one year, once a week, when deciding if a zone still observes DST.
DST_SCAN_DAYS = 371
DST_SCAN_STEP_DAYS = 7


def to_instant(value: datetime) -> DateTime:
    """Normalize a tagged datetime to a UTC instant."""
    if value.tzinfo is None or value.utcoffset() is None:
        return pendulum.instance(value.replace(tzinfo=None), tz="UTC")
    return pendulum.instance(value).in_timezone("UTC")


def localize(wall_clock: datetime, zone: ZoneHandle) -> DateTime:
    """
    Attach ``zone`` to the calendar fields of ``wall_clock``.

    Ambiguous times resolve to the later (standard time) reading and times
    skipped by a DST jump move forward, following the zone's own rules.
    """
    return pendulum.datetime(
        wall_clock.year,
        wall_clock.month,
        wall_clock.day,
        wall_clock.hour,
        wall_clock.minute,
        wall_clock.second,
        wall_clock.microsecond,
        tz=zone,
    )


class ZoneConverter:
    """Conversion, offset and DST queries over resolved zone handles."""

    def __init__(self, resolver: ZoneResolver):
        self._resolver = resolver

    def convert(self, value: datetime, zone: str, to_zone: str | None = None) -> DateTime:
        """
        Convert a datetime into another zone.

        With one zone, ``value`` is an instant rendered as wall-clock time in
        ``zone``. With two zones, ``value`` is wall-clock time in ``zone`` and
        the result is the same moment in ``to_zone``.
        """
        if to_zone is None:
            target = self._resolver.resolve(zone)
            return to_instant(value).in_timezone(target)

        source = self._resolver.resolve(zone)
        target = self._resolver.resolve(to_zone)
        return localize(value, source).in_timezone(target)

    def to_utc(self, wall_clock: datetime, zone: str) -> DateTime:
        """Read ``wall_clock`` as local time in ``zone`` and return the UTC instant."""
        handle = self._resolver.resolve(zone)
        return localize(wall_clock, handle).in_timezone("UTC")

    def offset_at(self, zone: str, value: datetime) -> timedelta:
        """UTC offset of ``zone`` at an instant, DST included."""
        handle = self._resolver.resolve(zone)
        return to_instant(value).in_timezone(handle).utcoffset()

    def is_dst(self, zone: str, value: datetime) -> bool:
        """Whether DST is in effect in ``zone`` at an instant."""
        handle = self._resolver.resolve(zone)
        return to_instant(value).in_timezone(handle).is_dst()

    def supports_dst(self, zone: str, today: datetime | None = None) -> bool:
        """
        Whether ``zone`` still observes DST.

        Only current and future rules count: zones that used DST in the past
        but no longer do report False.
        """
        handle = self._resolver.resolve(zone)
        start = to_instant(today) if today is not None else pendulum.now("UTC")
        start = start.start_of("day")

        for days in range(0, DST_SCAN_DAYS, DST_SCAN_STEP_DAYS):
            if start.add(days=days).in_timezone(handle).is_dst():
                return True
        return False

    def standard_offset(self, zone: str, today: datetime | None = None) -> timedelta:
        """
        Offset of ``zone`` without any DST adjustment.

        Zones in the reference tables use their recorded base offset. Other
        zones take the smaller of the January and July offsets of the current
        year, so zones whose rules model winter as negative DST (Europe/Dublin)
        still report their winter offset.
        """
        handle = self._resolver.resolve(zone)
        record = self._resolver.record(handle.name)
        if record is not None:
            return record.base_offset

        moment = to_instant(today) if today is not None else pendulum.now("UTC")
        year = moment.year
        return min(
            pendulum.datetime(year, 1, 1, tz="UTC").in_timezone(handle).utcoffset(),
            pendulum.datetime(year, 7, 1, tz="UTC").in_timezone(handle).utcoffset(),
        )
