"""授業に使える校時の算出"""
from typing import List

from ..entities.school_calendar import SchoolCalendar
from ..value_objects.time_slot import ClassReference


class SlotCalendar:
    """クラス・曜日ごとの授業可能校時を求める

    学部の日課表から、その学部に適用される行事の校時を除いたもの。
    行事は生成中に変わらないため、毎回その場で計算する。
    """

    def __init__(self, calendar: SchoolCalendar):
        self.calendar = calendar

    def available_slots(self, class_ref: ClassReference, day: str) -> List[int]:
        """授業可能な校時IDを日課表の順で返す（日課表がない学部は空）"""
        division = class_ref.division
        schedule = self.calendar.get_division_schedule(division)
        if schedule is None:
            return []

        blocked = self.calendar.get_blocked_periods(day, division)
        return [period for period in schedule.lesson_slots if period not in blocked]

    def is_blocked_by_event(self, class_ref: ClassReference, day: str, period: int) -> bool:
        return period in self.calendar.get_blocked_periods(day, class_ref.division)
