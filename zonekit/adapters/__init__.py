"""
Adapters layer - loading of the packaged reference tables.
"""

from .reference_tables import ReferenceTables, get_reference_tables, reset_reference_tables

__all__ = ["ReferenceTables", "get_reference_tables", "reset_reference_tables"]
