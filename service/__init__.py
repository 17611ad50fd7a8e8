from .timetable_service import TimetableService

__all__ = ["TimetableService"]
