"""CSV形式の時間割書き込み"""
from pathlib import Path
from typing import Sequence

import pandas as pd

from .base import ScheduleWriter
from ....domain.entities.schedule import Schedule
from ....domain.entities.school import School
from ....domain.entities.school_calendar import SchoolCalendar
from ....domain.value_objects.assignment import UnplacedLesson
from ....domain.value_objects.time_slot import TimeSlot
from ....shared.mixins.logging_mixin import LoggingMixin


class CSVTimetableWriter(ScheduleWriter, LoggingMixin):
    """クラス別時間割をCSVに書き出す

    1行1クラス、列は (曜日, 校時) の2段ヘッダー。
    セルは "教科 (教員)"、空きコマは空文字。
    """

    UNPLACED_COLUMNS = ["class", "subject", "periods_remaining", "reason"]

    def build_frame(self, schedule: Schedule, calendar: SchoolCalendar, school: School) -> pd.DataFrame:
        columns = pd.MultiIndex.from_product(
            [list(calendar.days), calendar.period_ids], names=["day", "period"]
        )
        classes = school.get_all_classes()
        for class_ref in schedule.classes:
            if class_ref not in classes:
                classes.append(class_ref)

        rows = []
        for class_ref in classes:
            row = []
            for day, period in columns:
                assignment = schedule.get_assignment(TimeSlot(day, int(period)), class_ref)
                row.append(f"{assignment.subject} ({assignment.teacher})" if assignment else "")
            rows.append(row)

        index = pd.Index([class_ref.name for class_ref in classes], name="class")
        return pd.DataFrame(rows, index=index, columns=columns)

    def write(self, schedule: Schedule, calendar: SchoolCalendar, school: School, file_path: Path) -> None:
        """時間割をCSVファイルに書き込む"""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        self.build_frame(schedule, calendar, school).to_csv(file_path, encoding="utf-8")
        self.logger.info(f"時間割を保存しました: {file_path}")

    def build_unplaced_frame(self, unplaced: Sequence[UnplacedLesson]) -> pd.DataFrame:
        rows = [
            {
                "class": entry.label,
                "subject": entry.subject.name,
                "periods_remaining": entry.periods_remaining,
                "reason": str(entry.reason)
            }
            for entry in unplaced
        ]
        return pd.DataFrame(rows, columns=self.UNPLACED_COLUMNS)

    def write_unplaced(self, unplaced: Sequence[UnplacedLesson], file_path: Path) -> None:
        """未配置ログをCSVファイルに書き込む（0件でもヘッダーは出力）"""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        self.build_unplaced_frame(unplaced).to_csv(file_path, index=False, encoding="utf-8")
        self.logger.info(f"未配置ログを保存しました: {file_path} ({len(unplaced)}件)")
