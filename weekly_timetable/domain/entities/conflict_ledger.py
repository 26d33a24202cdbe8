"""教員・共有施設の使用状況台帳"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Set

from ..value_objects.time_slot import ClassReference, Subject, Teacher, TimeSlot


@dataclass
class SlotUsage:
    """1つの時間枠の使用状況"""

    teachers: Set[Teacher] = field(default_factory=set)
    resources: Dict[Subject, Optional[ClassReference]] = field(default_factory=dict)


class ConflictLedger:
    """時間枠ごとの使用中教員と、共有施設教科の使用クラスを記録する台帳

    教員は実際にその時間枠で授業を持っているときだけ busy になり、
    共有施設は1つの時間枠につき高々1クラスしか保持できない。
    """

    def __init__(self, days: Iterable[str], period_ids: Iterable[int],
                 resource_subjects: Iterable[Subject] = ()):
        self._resource_subjects = tuple(resource_subjects)
        self._usage: Dict[TimeSlot, SlotUsage] = {}
        period_ids = list(period_ids)
        for day in days:
            for period in period_ids:
                self._usage[TimeSlot(day, period)] = self._new_usage()

    def _new_usage(self) -> SlotUsage:
        return SlotUsage(resources={subject: None for subject in self._resource_subjects})

    def _get_usage(self, time_slot: TimeSlot) -> SlotUsage:
        # カレンダー外の時間枠（設定ミス）もその場で台帳に加える
        usage = self._usage.get(time_slot)
        if usage is None:
            usage = self._new_usage()
            self._usage[time_slot] = usage
        return usage

    def is_teacher_busy(self, time_slot: TimeSlot, teacher: Teacher) -> bool:
        usage = self._usage.get(time_slot)
        return usage is not None and teacher in usage.teachers

    def get_resource_holder(self, time_slot: TimeSlot, subject: Subject) -> Optional[ClassReference]:
        """共有施設教科を使用中のクラス（空いていればNone）"""
        usage = self._usage.get(time_slot)
        if usage is None:
            return None
        return usage.resources.get(subject)

    def book_teacher(self, time_slot: TimeSlot, teacher: Teacher) -> None:
        self._get_usage(time_slot).teachers.add(teacher)

    def book_resource(self, time_slot: TimeSlot, subject: Subject, class_ref: ClassReference) -> None:
        self._get_usage(time_slot).resources[subject] = class_ref
