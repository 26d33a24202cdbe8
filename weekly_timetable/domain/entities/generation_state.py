"""1回の時間割生成で使う可変状態一式"""
from dataclasses import dataclass, field
from typing import List

from .conflict_ledger import ConflictLedger
from .schedule import Schedule
from .school import School
from .school_calendar import SchoolCalendar
from .teacher_load import TeacherLoadTracker
from ..value_objects.assignment import UnplacedLesson
from ..value_objects.constraint_config import ConstraintConfig


@dataclass
class GenerationState:
    """時間割・使用状況台帳・教員負荷・未配置ログ

    生成開始時に毎回新しく作り、生成エンジンだけが変更する。
    """

    schedule: Schedule
    ledger: ConflictLedger
    load_tracker: TeacherLoadTracker
    unplaced: List[UnplacedLesson] = field(default_factory=list)

    @classmethod
    def create(cls, school: School, calendar: SchoolCalendar,
               constraints: ConstraintConfig) -> 'GenerationState':
        schedule = Schedule(school.get_all_classes(), calendar.days)
        ledger = ConflictLedger(calendar.days, calendar.period_ids, constraints.resource_subjects)
        load_tracker = TeacherLoadTracker(calendar.days)
        for teacher, total in school.get_teacher_required_totals().items():
            load_tracker.register(teacher, total)
        return cls(schedule, ledger, load_tracker)

    def record_unplaced(self, entry: UnplacedLesson) -> None:
        self.unplaced.append(entry)
