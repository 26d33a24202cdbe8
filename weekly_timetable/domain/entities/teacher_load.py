"""教員の担当コマ数トラッカー"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from ..value_objects.time_slot import Teacher


@dataclass
class TeacherLoad:
    """1人の教員の週当たり予定時数と曜日別配置済みコマ数"""

    teacher: Teacher
    required_periods: int = 0
    daily_periods: Dict[str, int] = field(default_factory=dict)

    @property
    def scheduled_periods(self) -> int:
        return sum(self.daily_periods.values())


class TeacherLoadTracker:
    """教員ごとの担当コマ数を追跡する"""

    def __init__(self, days: Iterable[str]):
        self._days = list(days)
        self._loads: Dict[Teacher, TeacherLoad] = {}

    def register(self, teacher: Teacher, required_periods: int = 0) -> None:
        """教員を登録し、週当たり予定時数を加算"""
        load = self._loads.get(teacher)
        if load is None:
            load = TeacherLoad(teacher, 0, {day: 0 for day in self._days})
            self._loads[teacher] = load
        load.required_periods += required_periods

    def is_known(self, teacher: Teacher) -> bool:
        return teacher in self._loads

    def get_daily_count(self, teacher: Teacher, day: str) -> int:
        load = self._loads.get(teacher)
        if load is None:
            return 0
        return load.daily_periods.get(day, 0)

    def increment(self, teacher: Teacher, day: str) -> None:
        """指定曜日の配置済みコマ数を1増やす（未登録の教員は登録してから）"""
        if teacher not in self._loads:
            self.register(teacher)
        daily = self._loads[teacher].daily_periods
        daily[day] = daily.get(day, 0) + 1

    def snapshot(self) -> List[TeacherLoad]:
        """予定時数の多い順に並べた写し（同数は登録順）"""
        copies = [
            TeacherLoad(load.teacher, load.required_periods, dict(load.daily_periods))
            for load in self._loads.values()
        ]
        return sorted(copies, key=lambda load: load.required_periods, reverse=True)
