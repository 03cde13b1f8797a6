"""
Parsing of free-form timezone designators into canonical zone ids.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Set, Tuple

from ..adapters.reference_tables import ReferenceTables
from ..domain.exceptions import InvalidArgumentError, ZoneKitError, ZoneNotFoundError
from ..domain.offsets import parse_offset_designator
from .resolver import ZoneResolver

logger = logging.getLogger(__name__)


def _first_key_match(pairs: Iterable[Tuple[str, str]], text: str) -> Optional[str]:
    """Value of the first pair whose key equals ``text`` ignoring case."""
    wanted = text.lower()
    for key, value in pairs:
        if key.lower() == wanted:
            return value
    return None


class ZoneParser:
    """
    Turns user input into a canonical zone id.

    Tried in order, stopping at the first hit:

    1. canonical id (exact)
    2. alternate id, e.g. ``Eastern Standard Time``
    3. abbreviation, e.g. ``est``
    4. city name, e.g. ``new york``
    5. part of a display name, e.g. ``Pacific Time``
    6. offset designator, e.g. ``GMT-5`` or ``UTC+5:30``

    Abbreviations, cities and display names can be ambiguous; only the first
    entry in table order is returned.
    """

    def __init__(self, tables: ReferenceTables, resolver: ZoneResolver):
        self._tables = tables
        self._resolver = resolver

    def parse(self, text: str) -> str:
        """
        Parse input into a canonical id.

        Raises:
            InvalidArgumentError: If the input is None or blank
            ZoneNotFoundError: If nothing matches
        """
        if text is None or not text.strip():
            raise InvalidArgumentError("Timezone input cannot be null or empty.")

        text = text.strip()

        if text in self._tables.zones:
            return text

        canonical_id = self._resolver.alternate_to_canonical(text)
        if canonical_id is not None:
            return canonical_id

        canonical_id = _first_key_match(self._tables.abbreviations.items(), text)
        if canonical_id is not None:
            return canonical_id

        canonical_id = _first_key_match(self._tables.cities.items(), text)
        if canonical_id is not None:
            return canonical_id

        canonical_id = self._match_display_name(text)
        if canonical_id is not None:
            return canonical_id

        offset = parse_offset_designator(text)
        if offset is not None:
            matches = self._tables.zones_with_base_offset(offset)
            if matches:
                return matches[0]
            logger.debug("No zone with base offset %s for %r", offset, text)

        raise ZoneNotFoundError(f"Could not parse timezone: {text}", query=text)

    def try_parse(self, text: str) -> Tuple[bool, Optional[str]]:
        """Parse without raising; returns ``(found, canonical_id)``."""
        try:
            return True, self.parse(text)
        except ZoneKitError:
            return False, None

    def search(self, query: str) -> List[str]:
        """
        Find canonical ids whose id, display name, abbreviation or city
        contains ``query`` (case-insensitive).

        The result has no duplicates and no particular order. A blank query
        returns an empty list.
        """
        if query is None or not query.strip():
            return []

        needle = query.strip().lower()
        results: Set[str] = set()

        for zone_id, record in self._tables.zones.items():
            if needle in zone_id.lower() or needle in record.display_name.lower():
                results.add(zone_id)

        for abbreviation, zone_id in self._tables.abbreviations.items():
            if needle in abbreviation.lower():
                results.add(zone_id)

        for city, zone_id in self._tables.cities.items():
            if needle in city.lower():
                results.add(zone_id)

        return list(results)

    def city_to_canonical(self, city: str) -> str:
        """
        Look a city up: exact name first, then any city containing the text.

        Raises:
            InvalidArgumentError: If the name is None or blank
            ZoneNotFoundError: If no city matches
        """
        if city is None or not city.strip():
            raise InvalidArgumentError("City name cannot be null or empty.")

        city = city.strip()
        canonical_id = _first_key_match(self._tables.cities.items(), city)
        if canonical_id is not None:
            return canonical_id

        needle = city.lower()
        for name, zone_id in self._tables.cities.items():
            if needle in name.lower():
                return zone_id

        raise ZoneNotFoundError(f"City not found: {city}", query=city)

    def _match_display_name(self, text: str) -> Optional[str]:
        needle = text.lower()
        for zone_id, record in self._tables.zones.items():
            if needle in record.display_name.lower():
                return zone_id
        return None
