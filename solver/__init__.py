"""Solver-Modul: zufallsbasierter Stundenplan-Generator."""

from .timetable_generator import (
    InsufficientDataError,
    InvalidDateError,
    MissingDateError,
    TimetableError,
    TimetableGenerator,
    filter_available,
)

__all__ = [
    "TimetableGenerator",
    "TimetableError",
    "MissingDateError",
    "InvalidDateError",
    "InsufficientDataError",
    "filter_available",
]
