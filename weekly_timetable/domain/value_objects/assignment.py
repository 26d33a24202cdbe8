"""割り当て・配置要求・未配置記録を表す値オブジェクト"""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .time_slot import ClassReference, Subject, Teacher


@dataclass(frozen=True)
class Assignment:
    """時間割の1つの割り当て（クラス・教科・教員）を表す不変オブジェクト"""

    class_ref: ClassReference
    subject: Subject
    teacher: Teacher

    def __str__(self) -> str:
        return f"{self.class_ref}: {self.subject}({self.teacher})"

    def involves_teacher(self, teacher: Teacher) -> bool:
        """指定された教員が関与しているかどうか"""
        return self.teacher == teacher


@dataclass(frozen=True)
class LessonDemand:
    """1クラス・1教科の残り配置要求"""

    class_ref: ClassReference
    subject: Subject
    teacher: Teacher
    periods: int

    def __str__(self) -> str:
        return f"{self.class_ref} {self.subject}({self.teacher}): 残り{self.periods}コマ"


class UnplacedReason(Enum):
    """配置を諦めた理由"""

    NO_FREE_SLOT = "Could not find a free slot for single period"
    NO_SYNC_SLOT = "Could not find synchronized slot"
    SYNC_TEACHER_MISSING = "Teacher for synchronized subject not found"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class UnplacedLesson:
    """未配置の時数を表す記録（追記専用ログの1行）

    同期グループの場合、label はクラス名をカンマで連結したものになる。
    """

    classes: Tuple[ClassReference, ...]
    subject: Subject
    periods_remaining: int
    reason: UnplacedReason

    @property
    def label(self) -> str:
        return ",".join(c.name for c in self.classes)

    def __str__(self) -> str:
        return f"{self.label} {self.subject}: 残り{self.periods_remaining}コマ ({self.reason})"
