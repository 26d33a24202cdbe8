"""教員負荷サマリーのレポート"""
from pathlib import Path
from typing import List, Sequence

import pandas as pd

from ...domain.entities.teacher_load import TeacherLoad
from ...shared.mixins.logging_mixin import LoggingMixin


class TeacherWorkloadReporter(LoggingMixin):
    """教員ごとの予定時数と曜日別配置コマ数をまとめる

    入力は TeacherLoadTracker.snapshot()（予定時数の多い順）を想定。
    """

    def build_frame(self, teacher_loads: Sequence[TeacherLoad], days: Sequence[str]) -> pd.DataFrame:
        rows = []
        for load in teacher_loads:
            row = {"teacher": load.teacher.name, "total": load.required_periods}
            for day in days:
                row[day] = load.daily_periods.get(day, 0)
            rows.append(row)
        return pd.DataFrame(rows, columns=["teacher", "total", *days])

    def format_summary(self, teacher_loads: Sequence[TeacherLoad], days: Sequence[str]) -> List[str]:
        """1教員1行のテキストサマリー（例: "Ms Ito      : 12 total | M:3 T:2 ..."）"""
        lines = []
        for load in teacher_loads:
            daily = " ".join(f"{day[:1]}:{load.daily_periods.get(day, 0)}" for day in days)
            lines.append(f"{load.teacher.name.ljust(25)}: {load.required_periods} total | {daily}")
        return lines

    def log_summary(self, teacher_loads: Sequence[TeacherLoad], days: Sequence[str]) -> None:
        self.logger.info("--- 教員負荷サマリー ---")
        for line in self.format_summary(teacher_loads, days):
            self.logger.info(f"  {line}")

    def write(self, teacher_loads: Sequence[TeacherLoad], days: Sequence[str], file_path: Path) -> None:
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        self.build_frame(teacher_loads, days).to_csv(file_path, index=False, encoding="utf-8")
        self.logger.info(f"教員負荷サマリーを保存しました: {file_path}")
