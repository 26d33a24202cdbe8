"""貪欲法による単独コマ・ダブル（連続2コマ）配置サービス"""
import logging
from itertools import combinations
from typing import Optional, Sequence, Tuple

from ....domain.entities.generation_state import GenerationState
from ....domain.entities.school_calendar import SchoolCalendar
from ....domain.interfaces.search_order import SearchOrder
from ....domain.services.placement_validator import PlacementValidator
from ....domain.services.slot_calendar import SlotCalendar
from ....domain.value_objects.assignment import LessonDemand, UnplacedLesson, UnplacedReason
from ....domain.value_objects.constraint_config import ConstraintConfig


class LessonPlacementService:
    """1クラス・1教科の残り時数を配置するサービス

    ダブル配置ルール（strict）がある教科は先にダブルを試み、
    失敗した時点で残りを単独コマとして配置する。単独コマが置けなければ
    残り時数を未配置ログに記録してその要求の処理を終える（後戻りはしない）。
    """

    def __init__(self, calendar: SchoolCalendar, constraints: ConstraintConfig,
                 slot_calendar: SlotCalendar, validator: PlacementValidator,
                 state: GenerationState, search_order: SearchOrder):
        self.calendar = calendar
        self.constraints = constraints
        self.slot_calendar = slot_calendar
        self.validator = validator
        self.state = state
        self.search_order = search_order
        self.logger = logging.getLogger(__name__)

    def schedule_lesson(self, demand: LessonDemand, allowed_days: Sequence[str]) -> int:
        """要求を配置し、配置できたコマ数を返す"""
        remaining = demand.periods
        rule = self.constraints.find_double_period_rule(demand.subject, demand.class_ref.division)

        if rule is not None:
            for _ in range(rule.doubles_to_attempt(remaining)):
                if not self.place_double(demand, allowed_days):
                    self.logger.debug(f"{demand.class_ref}の{demand.subject}: ダブル配置不可、単独コマで配置")
                    break
                remaining -= 2

        while remaining > 0:
            if not self.place_single(demand, allowed_days):
                entry = UnplacedLesson(
                    (demand.class_ref,), demand.subject, remaining, UnplacedReason.NO_FREE_SLOT
                )
                self.state.record_unplaced(entry)
                self.logger.warning(f"未配置: {entry}")
                break
            remaining -= 1

        return demand.periods - remaining

    def place_single(self, demand: LessonDemand, allowed_days: Sequence[str]) -> bool:
        """1コマ配置する（曜日・校時とも探索順はシャッフル）"""
        for day in self.search_order.shuffle(allowed_days):
            slots = self.slot_calendar.available_slots(demand.class_ref, day)
            for period in self.search_order.shuffle(slots):
                if self.validator.can_place(demand.class_ref, demand.subject, demand.teacher, day, period):
                    self.validator.commit(demand.class_ref, demand.subject, demand.teacher, day, period)
                    return True
        return False

    def place_double(self, demand: LessonDemand, allowed_days: Sequence[str]) -> bool:
        """ダブル（2コマ）を同じ日に配置する

        各曜日で、まず隣接する2校時を探し、なければ休憩・昼食の1校時を
        挟んだ2校時を探す。その教科が既に入っている曜日は使わない。
        """
        for day in self.search_order.shuffle(allowed_days):
            slots = self.slot_calendar.available_slots(demand.class_ref, day)
            if len(slots) < 2:
                continue
            if self.state.schedule.count_subject_on_day(demand.class_ref, demand.subject, day) > 0:
                continue

            pair = self._find_adjacent_pair(demand, day, slots)
            if pair is None:
                pair = self._find_pair_across_break(demand, day, slots)
            if pair is None:
                continue

            for period in pair:
                self.validator.commit(demand.class_ref, demand.subject, demand.teacher, day, period)
            return True
        return False

    def _find_adjacent_pair(self, demand: LessonDemand, day: str,
                            slots: Sequence[int]) -> Optional[Tuple[int, int]]:
        for first, second in zip(slots, slots[1:]):
            if second - first == 1 and self._can_place_pair(demand, day, first, second):
                return first, second
        return None

    def _find_pair_across_break(self, demand: LessonDemand, day: str,
                                slots: Sequence[int]) -> Optional[Tuple[int, int]]:
        division_schedule = self.calendar.get_division_schedule(demand.class_ref.division)
        if division_schedule is None:
            return None

        for first, second in combinations(slots, 2):
            if second - first != 2:
                continue
            if not division_schedule.is_break_or_lunch(first + 1):
                continue
            if self._can_place_pair(demand, day, first, second):
                return first, second
        return None

    def _can_place_pair(self, demand: LessonDemand, day: str, first: int, second: int) -> bool:
        return (
            bool(self.validator.can_place(demand.class_ref, demand.subject, demand.teacher, day, first))
            and bool(self.validator.can_place(demand.class_ref, demand.subject, demand.teacher, day, second))
            and self.validator.has_daily_capacity(demand.teacher, day, 2)
        )
