"""ドメインエンティティ"""

from .school import School
from .school_calendar import DivisionSchedule, Period, SchoolCalendar, SpecialEvent
from .schedule import Schedule
from .conflict_ledger import ConflictLedger, SlotUsage
from .teacher_load import TeacherLoad, TeacherLoadTracker
from .generation_state import GenerationState

__all__ = [
    'School',
    'SchoolCalendar',
    'DivisionSchedule',
    'Period',
    'SpecialEvent',
    'Schedule',
    'ConflictLedger',
    'SlotUsage',
    'TeacherLoad',
    'TeacherLoadTracker',
    'GenerationState'
]
