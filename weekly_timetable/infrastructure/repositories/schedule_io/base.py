"""時間割出力の基底クラス"""
from abc import ABC, abstractmethod
from pathlib import Path

from ....domain.entities.schedule import Schedule
from ....domain.entities.school import School
from ....domain.entities.school_calendar import SchoolCalendar


class ScheduleWriter(ABC):
    """時間割書き込みの抽象基底クラス"""

    @abstractmethod
    def write(self, schedule: Schedule, calendar: SchoolCalendar, school: School, file_path: Path) -> None:
        """時間割を書き込む"""
        pass
