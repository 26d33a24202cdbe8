"""値オブジェクト（Value Objects）

このパッケージは、ドメインモデルで使用される値オブジェクトを定義します。
値オブジェクトは不変で、同値性によって識別されます。
"""

from .division import Division
from .time_slot import TimeSlot, ClassReference, Subject, Teacher
from .assignment import Assignment, LessonDemand, UnplacedLesson, UnplacedReason
from .placement_check import PlacementCheck, PlacementRejection
from .constraint_config import (
    ConstraintConfig,
    DoublePeriodRule,
    SubjectRestriction,
    SynchronizedGroup,
    TeacherAvailability,
    WorkloadLimits
)

__all__ = [
    'Division',
    'TimeSlot',
    'ClassReference',
    'Subject',
    'Teacher',
    'Assignment',
    'LessonDemand',
    'UnplacedLesson',
    'UnplacedReason',
    'PlacementCheck',
    'PlacementRejection',
    'ConstraintConfig',
    'DoublePeriodRule',
    'SubjectRestriction',
    'SynchronizedGroup',
    'TeacherAvailability',
    'WorkloadLimits'
]
