"""Datenablage (JSON-Dateien)."""

from .json_store import JsonStore, StoreError, timetable_key

__all__ = ["JsonStore", "StoreError", "timetable_key"]
