"""スケジュールエンティティ（クラス別時間割）"""
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..exceptions import ScheduleAssignmentError
from ..value_objects.assignment import Assignment
from ..value_objects.time_slot import ClassReference, Subject, Teacher, TimeSlot


class Schedule:
    """時間割を管理するエンティティ

    1つの (クラス, 曜日, 校時) には高々1つの割り当てしか入らない。
    """

    def __init__(self, classes: Sequence[ClassReference] = (), days: Sequence[str] = ()):
        self._classes: List[ClassReference] = list(classes)
        self._days: List[str] = list(days)
        self._assignments: Dict[TimeSlot, Dict[ClassReference, Assignment]] = defaultdict(dict)

    @property
    def classes(self) -> List[ClassReference]:
        return list(self._classes)

    @property
    def days(self) -> List[str]:
        return list(self._days)

    def assign(self, time_slot: TimeSlot, assignment: Assignment) -> None:
        """指定された時間枠にクラスの割り当てを設定

        Raises:
            ScheduleAssignmentError: 既に割り当てがあるセルに書き込もうとした場合
        """
        existing = self.get_assignment(time_slot, assignment.class_ref)
        if existing is not None:
            raise ScheduleAssignmentError(
                f"Cell already assigned: {time_slot} - {assignment.class_ref} ({existing.subject})",
                time_slot=time_slot,
                class_ref=assignment.class_ref,
                subject=assignment.subject
            )
        if assignment.class_ref not in self._classes:
            self._classes.append(assignment.class_ref)
        self._assignments[time_slot][assignment.class_ref] = assignment

    def get_assignment(self, time_slot: TimeSlot, class_ref: ClassReference) -> Optional[Assignment]:
        """指定された時間枠・クラスの割り当てを取得"""
        slot_assignments = self._assignments.get(time_slot)
        if not slot_assignments:
            return None
        return slot_assignments.get(class_ref)

    def is_occupied(self, time_slot: TimeSlot, class_ref: ClassReference) -> bool:
        return self.get_assignment(time_slot, class_ref) is not None

    def get_all_assignments(self) -> List[Tuple[TimeSlot, Assignment]]:
        """全ての割り当てを取得"""
        return [
            (time_slot, assignment)
            for time_slot, class_assignments in self._assignments.items()
            for assignment in class_assignments.values()
        ]

    def get_assignments_by_class(self, class_ref: ClassReference) -> List[Tuple[TimeSlot, Assignment]]:
        """指定されたクラスの全ての割り当てを取得"""
        return [
            (time_slot, class_assignments[class_ref])
            for time_slot, class_assignments in self._assignments.items()
            if class_ref in class_assignments
        ]

    def get_assignments_by_teacher(self, teacher: Teacher) -> List[Tuple[TimeSlot, Assignment]]:
        """指定された教員の全ての割り当てを取得"""
        return [
            (time_slot, assignment)
            for time_slot, assignment in self.get_all_assignments()
            if assignment.involves_teacher(teacher)
        ]

    def count_subject_on_day(self, class_ref: ClassReference, subject: Subject, day: str) -> int:
        return sum(
            1 for time_slot, assignment in self.get_assignments_by_class(class_ref)
            if time_slot.day == day and assignment.subject == subject
        )

    def count_subject_hours(self, class_ref: ClassReference, subject: Subject) -> int:
        """指定されたクラス・教科の配置済みコマ数"""
        return sum(
            1 for _, assignment in self.get_assignments_by_class(class_ref)
            if assignment.subject == subject
        )

    def get_subject_slots(self, class_ref: ClassReference, subject: Subject) -> List[TimeSlot]:
        """指定されたクラス・教科が配置されている時間枠（曜日・校時順）"""
        day_order = {day: index for index, day in enumerate(self._days)}
        slots = [
            time_slot for time_slot, assignment in self.get_assignments_by_class(class_ref)
            if assignment.subject == subject
        ]
        return sorted(slots, key=lambda ts: (day_order.get(ts.day, len(day_order)), ts.period))

    def to_dict(self) -> Dict[str, Dict[str, Dict[int, Dict[str, Any]]]]:
        """クラス → 曜日 → 校時 → {subject, teacher} の辞書に変換（空きコマは省略）"""
        result: Dict[str, Dict[str, Dict[int, Dict[str, Any]]]] = {
            class_ref.name: {day: {} for day in self._days} for class_ref in self._classes
        }
        for time_slot, assignment in self.get_all_assignments():
            day_table = result.setdefault(assignment.class_ref.name, {}).setdefault(time_slot.day, {})
            day_table[time_slot.period] = {
                "subject": assignment.subject.name,
                "teacher": assignment.teacher.name
            }
        for days in result.values():
            for day, periods in days.items():
                days[day] = dict(sorted(periods.items()))
        return result
