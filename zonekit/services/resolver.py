"""
Identifier resolution between canonical (IANA) ids, alternate (Windows) ids
and pendulum zone handles.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional, Tuple, Union

import pendulum
from pendulum.tz.exceptions import InvalidTimezone

from ..adapters.reference_tables import ReferenceTables
from ..domain.exceptions import InvalidArgumentError, ZoneKitError, ZoneNotFoundError
from ..domain.models import ZoneRecord

logger = logging.getLogger(__name__)

ZoneHandle = Union[pendulum.Timezone, pendulum.FixedTimezone]


class ZoneCache:
    """
    Thread-safe map from the caller's original input string to a zone handle.

    Entries are never evicted. Two threads missing on the same key may both
    compute a handle; the first one stored wins and both callers get it.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._handles: Dict[str, ZoneHandle] = {}

    def get(self, key: str) -> Optional[ZoneHandle]:
        with self._lock:
            return self._handles.get(key)

    def get_or_add(self, key: str, handle: ZoneHandle) -> ZoneHandle:
        """Store ``handle`` unless the key is already cached; return the cached value."""
        with self._lock:
            return self._handles.setdefault(key, handle)

    def clear(self) -> None:
        with self._lock:
            self._handles.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._handles)


def find_platform_zone(zone_id: str) -> Optional[ZoneHandle]:
    """Look an id up in the host zone database, returning None when it is unknown."""
    try:
        return pendulum.timezone(zone_id)
    except (InvalidTimezone, KeyError, ValueError, OSError):
        # zoneinfo raises ValueError for malformed keys, ZoneInfoNotFoundError
        # (a KeyError) for unknown ones and OSError for directories like "America"
        return None


class ZoneResolver:
    """
    Resolves accepted id strings to zone handles and memoizes the results.

    Resolution order, first success wins:
    1. the id as given
    2. the alternate id recorded for a canonical id
    3. the canonical id recorded for an alternate id
    """

    def __init__(self, tables: ReferenceTables, cache: ZoneCache | None = None):
        self._tables = tables
        self._cache = cache if cache is not None else ZoneCache()

    @property
    def cache(self) -> ZoneCache:
        return self._cache

    def record(self, canonical_id: str) -> Optional[ZoneRecord]:
        """Reference record for a canonical id, if the tables have one."""
        return self._tables.zones.get(canonical_id)

    def canonical_to_alternate(self, canonical_id: str) -> Optional[str]:
        """Get the alternate id recorded for a canonical id, if any."""
        if canonical_id is None:
            raise InvalidArgumentError("canonical_id cannot be None")
        record = self._tables.zones.get(canonical_id)
        if record is None or not record.alternate_id:
            return None
        return record.alternate_id

    def alternate_to_canonical(self, alternate_id: str) -> Optional[str]:
        """
        Get the canonical id for an alternate id (case-insensitive).

        Several canonical ids can share one alternate id; the first record in
        table order wins.
        """
        if alternate_id is None:
            raise InvalidArgumentError("alternate_id cannot be None")
        wanted = alternate_id.lower()
        for canonical_id, record in self._tables.zones.items():
            if record.alternate_id and record.alternate_id.lower() == wanted:
                return canonical_id
        return None

    def resolve(self, zone_id: str) -> ZoneHandle:
        """
        Resolve an id to a zone handle.

        Raises:
            InvalidArgumentError: If the id is None, not a string, or blank
            ZoneNotFoundError: If no resolution step succeeds
        """
        if zone_id is not None and not isinstance(zone_id, str):
            raise InvalidArgumentError(f"Timezone ID must be a string, got {type(zone_id).__name__}")
        if zone_id is None or not zone_id.strip():
            raise InvalidArgumentError("Timezone ID cannot be null or empty.")

        cached = self._cache.get(zone_id)
        if cached is not None:
            return cached

        handle = self._lookup(zone_id)
        logger.debug("Caching zone handle %s for %r", handle.name, zone_id)
        return self._cache.get_or_add(zone_id, handle)

    def try_resolve(self, zone_id: str) -> Tuple[bool, Optional[ZoneHandle]]:
        """Resolve without raising; returns ``(found, handle)``."""
        try:
            return True, self.resolve(zone_id)
        except ZoneKitError:
            return False, None

    def _lookup(self, zone_id: str) -> ZoneHandle:
        handle = find_platform_zone(zone_id)
        if handle is not None:
            return handle

        alternate_id = self.canonical_to_alternate(zone_id)
        if alternate_id is not None:
            logger.debug("Retrying %r as alternate id %r", zone_id, alternate_id)
            handle = find_platform_zone(alternate_id)
            if handle is not None:
                return handle

        canonical_id = self.alternate_to_canonical(zone_id)
        if canonical_id is not None:
            logger.debug("Retrying %r as canonical id %r", zone_id, canonical_id)
            handle = find_platform_zone(canonical_id)
            if handle is not None:
                return handle

        raise ZoneNotFoundError(f"Timezone not found: {zone_id}", query=zone_id)
