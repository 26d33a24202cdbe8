"""配置可否判定の結果"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PlacementRejection(Enum):
    """配置不可の理由（判定順）"""

    TEACHER_NOT_FOUND = "Teacher not found in stats"
    WORKLOAD_EXCEEDED = "Teacher workload exceeded"
    EVENT_BOOKED = "Class slot booked by special event"
    TEACHER_UNAVAILABLE = "Teacher unavailable"
    SUBJECT_RESTRICTED = "Subject restricted"
    TEACHER_BOOKED = "Teacher booked"
    CLASS_BOOKED = "Class booked"
    RESOURCE_BOOKED = "Resource booked"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PlacementCheck:
    """配置可否判定の結果

    bool() で判定結果をそのまま使える。
    """

    reason: Optional[PlacementRejection] = None
    detail: str = ""

    @property
    def is_valid(self) -> bool:
        return self.reason is None

    def __bool__(self) -> bool:
        return self.is_valid

    def __str__(self) -> str:
        if self.is_valid:
            return "OK"
        return self.detail or self.reason.value

    @classmethod
    def ok(cls) -> 'PlacementCheck':
        return cls()

    @classmethod
    def reject(cls, reason: PlacementRejection, detail: str = "") -> 'PlacementCheck':
        return cls(reason=reason, detail=detail or reason.value)
