"""
Shared fixtures.
"""

import pytest

from zonekit.adapters.reference_tables import ReferenceTables, reset_reference_tables
from zonekit.helpers import reset_toolkit
from zonekit.services.toolkit import ZoneToolkit


@pytest.fixture(scope="session")
def tables():
    """The packaged reference tables."""
    return ReferenceTables.load()


@pytest.fixture
def toolkit(tables):
    """A toolkit with its own, empty resolver cache."""
    return ZoneToolkit(tables)


@pytest.fixture
def fresh_globals():
    """Reset process-wide tables and the shared toolkit around a test."""
    reset_reference_tables()
    reset_toolkit()
    yield
    reset_reference_tables()
    reset_toolkit()
