from models.teacher import Teacher
from models.group import Group
from models.room import Room
from models.constraint import Constraint
from models.timetable import Assignment, Timetable, TimetableEntry, format_cell, parse_cell

__all__ = [
    "Teacher",
    "Group",
    "Room",
    "Constraint",
    "Assignment",
    "Timetable",
    "TimetableEntry",
    "format_cell",
    "parse_cell",
]
