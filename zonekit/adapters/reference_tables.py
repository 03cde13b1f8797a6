"""
Loader for the packaged zone reference tables.

The tables ship as JSON documents next to this module. They are read once,
validated into immutable structures and shared by every resolver and parser
in the process.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import ValidationError

from ..domain.exceptions import ReferenceDataError
from ..domain.models import ZoneRecord

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path(__file__).parent / "data"

ZONES_FILE = "zones.json"
ABBREVIATIONS_FILE = "abbreviations.json"
CITIES_FILE = "cities.json"
COUNTRIES_FILE = "countries.json"
COMMON_ZONES_FILE = "common_zones.json"
DISPLAY_NAMES_FILE = "display_names.json"


@dataclass(frozen=True)
class ReferenceTables:
    """
    Immutable, in-memory view of the reference data.

    Mapping iteration order follows the order of the source files, so every
    "first match" scan over these tables is deterministic.
    """
    zones: Mapping[str, ZoneRecord]
    abbreviations: Mapping[str, str]
    cities: Mapping[str, str]
    countries: Mapping[str, Tuple[str, ...]]
    common_zones: Tuple[str, ...]
    display_names: Mapping[str, str]

    @classmethod
    def load(cls, data_dir: Path | None = None) -> "ReferenceTables":
        """
        Load and validate all tables from a data directory.

        Args:
            data_dir: Directory holding the JSON files. Defaults to the
                tables packaged with zonekit.

        Returns:
            ReferenceTables instance

        Raises:
            ReferenceDataError: If a file is missing, malformed or invalid
        """
        data_dir = Path(data_dir) if data_dir else DEFAULT_DATA_DIR

        raw_zones = _read_json(data_dir / ZONES_FILE, dict)
        try:
            zones = {zone_id: ZoneRecord(**record) for zone_id, record in raw_zones.items()}
        except (ValidationError, TypeError) as exc:
            raise ReferenceDataError(f"Invalid zone record in {data_dir / ZONES_FILE}: {exc}") from exc

        abbreviations = _string_mapping(data_dir / ABBREVIATIONS_FILE)
        cities = _string_mapping(data_dir / CITIES_FILE)
        display_names = _string_mapping(data_dir / DISPLAY_NAMES_FILE)

        raw_countries = _read_json(data_dir / COUNTRIES_FILE, dict)
        countries = {
            code.upper(): tuple(zone_ids)
            for code, zone_ids in raw_countries.items()
        }

        common_zones = tuple(_read_json(data_dir / COMMON_ZONES_FILE, list))

        logger.info(
            "Loaded reference tables from %s: %d zones, %d abbreviations, %d cities, %d countries",
            data_dir,
            len(zones),
            len(abbreviations),
            len(cities),
            len(countries),
        )

        return cls(
            zones=MappingProxyType(zones),
            abbreviations=MappingProxyType(abbreviations),
            cities=MappingProxyType(cities),
            countries=MappingProxyType(countries),
            common_zones=common_zones,
            display_names=MappingProxyType(display_names),
        )

    def canonical_ids(self) -> List[str]:
        """All canonical ids in table order."""
        return list(self.zones.keys())

    def zones_with_base_offset(self, offset: timedelta) -> List[str]:
        """Canonical ids whose base offset equals ``offset`` exactly."""
        return [
            zone_id
            for zone_id, record in self.zones.items()
            if record.base_offset == offset
        ]


def _read_json(path: Path, expected_type: type) -> Any:
    if not path.exists():
        raise ReferenceDataError(f"Reference table not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise ReferenceDataError(f"Could not read reference table {path}: {exc}") from exc

    if not isinstance(data, expected_type):
        raise ReferenceDataError(
            f"Reference table {path} must contain a {expected_type.__name__} at the root level."
        )
    return data


def _string_mapping(path: Path) -> Dict[str, str]:
    data = _read_json(path, dict)
    bad_keys = [key for key, value in data.items() if not isinstance(value, str)]
    if bad_keys:
        raise ReferenceDataError(f"Non-string values in {path} for keys: {', '.join(bad_keys)}")
    return dict(data)


_tables: Optional[ReferenceTables] = None
_tables_lock = threading.Lock()


def get_reference_tables(data_dir: Path | None = None) -> ReferenceTables:
    """
    Return the process-wide reference tables, loading them on first use.

    Concurrent first calls serialize on a lock and all receive the same
    instance. ``data_dir`` only has an effect on the call that performs the
    load.
    """
    global _tables

    tables = _tables
    if tables is not None:
        return tables

    with _tables_lock:
        if _tables is None:
            _tables = ReferenceTables.load(data_dir)
        return _tables


def reset_reference_tables() -> None:
    """Forget the loaded tables (tests only)."""
    global _tables
    with _tables_lock:
        _tables = None
