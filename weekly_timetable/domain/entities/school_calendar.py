"""学校カレンダー（曜日・校時・学部別日課・行事）"""
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Sequence, Set, Tuple

from ..value_objects.division import Division


@dataclass(frozen=True)
class Period:
    """校時"""

    id: int
    label: str = ""


@dataclass(frozen=True)
class DivisionSchedule:
    """学部ごとの日課表

    lesson_slots は授業に使える校時IDの並び。休憩・昼食は
    校時IDとして持ち、休憩をまたぐダブル配置の判定に使う。
    """

    lesson_slots: Tuple[int, ...]
    break_period: Optional[int] = None
    lunch_period: Optional[int] = None

    def is_break_or_lunch(self, period_id: int) -> bool:
        if period_id is None:
            return False
        return period_id in (self.break_period, self.lunch_period)


@dataclass(frozen=True)
class SpecialEvent:
    """特別行事（集会など）で授業に使えない校時

    applies_to が None の場合は全学部に適用される。
    """

    day: str
    period_ids: Tuple[int, ...]
    applies_to: Optional[FrozenSet[Division]] = None
    name: str = ""

    def applies(self, day: str, division: Division) -> bool:
        if self.day != day:
            return False
        return self.applies_to is None or division in self.applies_to


class SchoolCalendar:
    """週の曜日・校時と学部別日課をまとめたもの（生成中は不変）"""

    def __init__(self,
                 days: Sequence[str],
                 periods: Sequence[Period],
                 division_schedules: Dict[Division, DivisionSchedule],
                 special_events: Sequence[SpecialEvent] = ()):
        self.days: Tuple[str, ...] = tuple(days)
        self.periods: Tuple[Period, ...] = tuple(periods)
        self.division_schedules = dict(division_schedules)
        self.special_events: Tuple[SpecialEvent, ...] = tuple(special_events)

    @property
    def period_ids(self) -> List[int]:
        return [period.id for period in self.periods]

    def get_division_schedule(self, division: Division) -> Optional[DivisionSchedule]:
        return self.division_schedules.get(division)

    def get_events_on(self, day: str, division: Division) -> List[SpecialEvent]:
        return [event for event in self.special_events if event.applies(day, division)]

    def get_blocked_periods(self, day: str, division: Division) -> Set[int]:
        """指定学部・曜日で行事により使えない校時ID"""
        blocked: Set[int] = set()
        for event in self.get_events_on(day, division):
            blocked.update(event.period_ids)
        return blocked
