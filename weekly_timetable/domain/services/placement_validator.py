"""配置可否の判定と確定

配置戦略はすべて can_place で判定し、成功した場合だけ commit で
時間割・台帳・教員負荷を更新する。状態を変更するのは commit のみ。
"""
import logging

from .slot_calendar import SlotCalendar
from ..entities.generation_state import GenerationState
from ..value_objects.assignment import Assignment
from ..value_objects.constraint_config import ConstraintConfig
from ..value_objects.placement_check import PlacementCheck, PlacementRejection
from ..value_objects.time_slot import ClassReference, Subject, Teacher, TimeSlot


class PlacementValidator:
    """1コマの配置可否判定と確定処理"""

    def __init__(self, constraints: ConstraintConfig, slot_calendar: SlotCalendar,
                 state: GenerationState):
        self.constraints = constraints
        self.slot_calendar = slot_calendar
        self.state = state
        self.logger = logging.getLogger(__name__)

    def can_place(self, class_ref: ClassReference, subject: Subject, teacher: Teacher,
                  day: str, period: int) -> PlacementCheck:
        """(クラス, 教科, 教員, 曜日, 校時) が配置可能か判定

        以下の順にチェックし、最初に失敗した理由を返す。
        1. 教員が負荷トラッカーに登録されているか
        2. 教員のその日の担当コマ数が上限未満か
        3. 行事で塞がっていないか
        4. 教員の勤務可能曜日か
        5. 教科の実施可能曜日か
        6. 教員がその時間に空いているか
        7. クラスがその時間に空いているか
        8. 共有施設教科なら施設が空いているか
        """
        load_tracker = self.state.load_tracker
        if not load_tracker.is_known(teacher):
            return PlacementCheck.reject(PlacementRejection.TEACHER_NOT_FOUND)

        limit = self.constraints.workload_limits.limit_for(teacher)
        if load_tracker.get_daily_count(teacher, day) >= limit:
            return PlacementCheck.reject(PlacementRejection.WORKLOAD_EXCEEDED)

        if self.slot_calendar.is_blocked_by_event(class_ref, day, period):
            return PlacementCheck.reject(PlacementRejection.EVENT_BOOKED)

        availability = self.constraints.get_teacher_availability(teacher)
        if availability is not None and not availability.allows(day):
            return PlacementCheck.reject(
                PlacementRejection.TEACHER_UNAVAILABLE,
                availability.describe_rejection(day)
            )

        restriction = self.constraints.get_subject_restriction(subject)
        if restriction is not None and not restriction.allows(day):
            return PlacementCheck.reject(
                PlacementRejection.SUBJECT_RESTRICTED,
                f"Subject restricted to {','.join(restriction.days)}"
            )

        time_slot = TimeSlot(day, period)
        if self.state.ledger.is_teacher_busy(time_slot, teacher):
            return PlacementCheck.reject(PlacementRejection.TEACHER_BOOKED)

        if self.state.schedule.is_occupied(time_slot, class_ref):
            return PlacementCheck.reject(PlacementRejection.CLASS_BOOKED)

        if self.constraints.is_resource_subject(subject):
            if self.state.ledger.get_resource_holder(time_slot, subject) is not None:
                return PlacementCheck.reject(
                    PlacementRejection.RESOURCE_BOOKED,
                    f"{subject} resource booked"
                )

        return PlacementCheck.ok()

    def has_daily_capacity(self, teacher: Teacher, day: str, periods: int) -> bool:
        """まとめて確定する periods コマ分の余裕が教員のその日の上限にあるか

        ダブルや同期グループは全コマを判定してから一括で commit するため、
        個々の can_place だけでは上限を超える場合がある。
        """
        limit = self.constraints.workload_limits.limit_for(teacher)
        return self.state.load_tracker.get_daily_count(teacher, day) + periods <= limit

    def commit(self, class_ref: ClassReference, subject: Subject, teacher: Teacher,
               day: str, period: int) -> None:
        """配置を確定する（can_place 成功後にのみ呼ぶ。再チェックはしない）"""
        time_slot = TimeSlot(day, period)
        self.state.schedule.assign(time_slot, Assignment(class_ref, subject, teacher))
        self.state.ledger.book_teacher(time_slot, teacher)
        if self.constraints.is_resource_subject(subject):
            self.state.ledger.book_resource(time_slot, subject, class_ref)
        self.state.load_tracker.increment(teacher, day)
        self.logger.debug(f"{time_slot}: {class_ref}に{subject}({teacher})を配置")
