"""制約設定を表す値オブジェクト

1回の生成処理の間は変更されない。
"""
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from .division import Division
from .time_slot import ClassReference, Subject, Teacher


@dataclass(frozen=True)
class WorkloadLimits:
    """教員の1日あたり最大担当コマ数"""

    max_periods_per_day: int
    max_periods_per_day_exception: int
    exception_teachers: FrozenSet[Teacher] = frozenset()

    def limit_for(self, teacher: Teacher) -> int:
        """例外リストの教員には緩和された上限を適用"""
        if teacher in self.exception_teachers:
            return self.max_periods_per_day_exception
        return self.max_periods_per_day


@dataclass(frozen=True)
class TeacherAvailability:
    """教員の勤務可能曜日

    available_days と unavailable_days は両方指定された場合、両方とも適用される。
    """

    available_days: Optional[Tuple[str, ...]] = None
    unavailable_days: Optional[Tuple[str, ...]] = None

    def allows(self, day: str) -> bool:
        if self.available_days is not None and day not in self.available_days:
            return False
        if self.unavailable_days is not None and day in self.unavailable_days:
            return False
        return True

    def filter_days(self, days: Iterable[str]) -> List[str]:
        return [day for day in days if self.allows(day)]

    def describe_rejection(self, day: str) -> str:
        if self.available_days is not None and day not in self.available_days:
            return f"Teacher only available on {','.join(self.available_days)}"
        return f"Teacher unavailable on {day}"


@dataclass(frozen=True)
class SubjectRestriction:
    """教科の実施可能曜日"""

    days: Tuple[str, ...]

    def allows(self, day: str) -> bool:
        return day in self.days


@dataclass(frozen=True)
class DoublePeriodRule:
    """連続2コマ（ダブル）配置ルール

    strict が真のときだけ、単独コマより先にダブルを試みる。
    fixed_doubles が指定されている場合（"mixed"）はその数だけダブルを試みる。
    """

    subject: Subject
    divisions: FrozenSet[Division]
    strict: bool = False
    fixed_doubles: Optional[int] = None
    fixed_singles: Optional[int] = None

    def applies_to(self, subject: Subject, division: Division) -> bool:
        return self.subject == subject and division in self.divisions

    def doubles_to_attempt(self, periods_needed: int) -> int:
        """試行するダブル数（残り時数を超えて配置しないよう上限をかける）"""
        if not self.strict:
            return 0
        max_doubles = periods_needed // 2
        if self.fixed_doubles is not None:
            return min(self.fixed_doubles, max_doubles)
        return max_doubles


@dataclass(frozen=True)
class SynchronizedGroup:
    """同一教員が同じ時間に合同で教えるクラスのグループ"""

    classes: Tuple[ClassReference, ...]
    subject: Subject

    @property
    def label(self) -> str:
        return ",".join(c.name for c in self.classes)

    @property
    def lead_class(self) -> ClassReference:
        """教員・時数・利用可能コマの参照に使う先頭クラス"""
        return self.classes[0]

    def __str__(self) -> str:
        return f"{self.label} ({self.subject})"


@dataclass
class ConstraintConfig:
    """制約設定一式"""

    workload_limits: WorkloadLimits
    teacher_availability: Dict[Teacher, TeacherAvailability] = field(default_factory=dict)
    subject_restrictions: Dict[Subject, SubjectRestriction] = field(default_factory=dict)
    resource_subjects: Tuple[Subject, ...] = ()
    double_period_rules: List[DoublePeriodRule] = field(default_factory=list)
    synchronized_groups: List[SynchronizedGroup] = field(default_factory=list)

    def is_resource_subject(self, subject: Subject) -> bool:
        return subject in self.resource_subjects

    def get_teacher_availability(self, teacher: Teacher) -> Optional[TeacherAvailability]:
        return self.teacher_availability.get(teacher)

    def get_subject_restriction(self, subject: Subject) -> Optional[SubjectRestriction]:
        return self.subject_restrictions.get(subject)

    def find_double_period_rule(self, subject: Subject,
                                division: Division) -> Optional[DoublePeriodRule]:
        """最初に一致したダブル配置ルールを返す"""
        return next(
            (rule for rule in self.double_period_rules if rule.applies_to(subject, division)),
            None
        )

    def get_strict_double_subjects(self) -> List[Subject]:
        subjects = [rule.subject for rule in self.double_period_rules if rule.strict]
        return list(dict.fromkeys(subjects))
