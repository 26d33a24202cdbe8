"""同期グループ配置サービス

複数クラスが1人の教員のもとで同じ曜日・校時に合同授業を受ける教科
（合同体育など）を、グループ全体に対して同時に配置する。
"""
import logging
from typing import List, Optional, Sequence

from ....domain.entities.school import School
from ....domain.entities.school_calendar import SchoolCalendar
from ....domain.interfaces.search_order import SearchOrder
from ....domain.services.placement_validator import PlacementValidator
from ....domain.services.slot_calendar import SlotCalendar
from ....domain.value_objects.constraint_config import ConstraintConfig, SynchronizedGroup
from ....domain.value_objects.time_slot import Teacher


class SynchronizedGroupPlacementService:
    """同期グループの合同コマを全クラス同時に配置する

    教員は先頭クラスの担当教員、授業可能校時も先頭クラスのものを使う
    （グループ内のクラスは同じ学部・日課であることが前提）。
    ダブルは隣接校時のみで、休憩をまたぐ配置はしない。
    """

    def __init__(self, school: School, calendar: SchoolCalendar, constraints: ConstraintConfig,
                 slot_calendar: SlotCalendar, validator: PlacementValidator,
                 search_order: SearchOrder):
        self.school = school
        self.calendar = calendar
        self.constraints = constraints
        self.slot_calendar = slot_calendar
        self.validator = validator
        self.search_order = search_order
        self.logger = logging.getLogger(__name__)

    def resolve_teacher(self, group: SynchronizedGroup) -> Optional[Teacher]:
        return self.school.get_assigned_teacher(group.lead_class, group.subject)

    def get_allowed_days(self, teacher: Teacher) -> List[str]:
        """教員の勤務可能曜日で絞り込んだ曜日一覧"""
        availability = self.constraints.get_teacher_availability(teacher)
        if availability is None:
            return list(self.calendar.days)
        return availability.filter_days(self.calendar.days)

    def place_block(self, group: SynchronizedGroup, length: int) -> bool:
        """length コマ（1または2）の連続枠をグループ全体に配置

        全クラス・全校時で配置可能な枠が見つかった場合だけ確定する。
        """
        teacher = self.resolve_teacher(group)
        if teacher is None:
            self.logger.warning(
                f"同期グループ {group.label}: {group.lead_class}の{group.subject}の担当教員が見つかりません"
            )
            return False

        for day in self.search_order.shuffle(self.get_allowed_days(teacher)):
            slots = self.slot_calendar.available_slots(group.lead_class, day)
            if len(slots) < length:
                continue

            for start in range(len(slots) - length + 1):
                window = slots[start:start + length]
                if window[-1] - window[0] != length - 1:
                    continue
                if self._can_place_window(group, teacher, day, window):
                    for class_ref in group.classes:
                        for period in window:
                            self.validator.commit(class_ref, group.subject, teacher, day, period)
                    self.logger.debug(f"{day} {window}: {group}を同期配置")
                    return True
        return False

    def _can_place_window(self, group: SynchronizedGroup, teacher: Teacher,
                          day: str, window: Sequence[int]) -> bool:
        for class_ref in group.classes:
            for period in window:
                if not self.validator.can_place(class_ref, group.subject, teacher, day, period):
                    return False
        return self.validator.has_daily_capacity(teacher, day, len(group.classes) * len(window))
