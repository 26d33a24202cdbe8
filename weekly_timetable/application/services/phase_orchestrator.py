"""時間割生成のフェーズ制御

以下の順にフェーズを実行する。順序が業務ルールそのものなので、
ここ以外でフェーズ順を決めてはいけない。

1. 曜日制限のある教科
2. 同期グループ（合同授業）の教科
3. 共有施設を使う教科
4. ダブル配置必須（strict）の教科
5. その他の教科（教科順はシャッフル）

各フェーズは確定済みの配置を取り消さない。前のフェーズで必要時数を
満たしたクラス・教科は後のフェーズでスキップされる。
"""
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .generators.lesson_placement_service import LessonPlacementService
from .generators.synchronized_group_service import SynchronizedGroupPlacementService
from ...domain.entities.generation_state import GenerationState
from ...domain.entities.schedule import Schedule
from ...domain.entities.school import School
from ...domain.entities.school_calendar import SchoolCalendar
from ...domain.entities.teacher_load import TeacherLoad
from ...domain.interfaces.search_order import SearchOrder
from ...domain.services.placement_validator import PlacementValidator
from ...domain.services.search_order import RandomSearchOrder
from ...domain.services.slot_calendar import SlotCalendar
from ...domain.value_objects.assignment import LessonDemand, UnplacedLesson, UnplacedReason
from ...domain.value_objects.constraint_config import ConstraintConfig, SynchronizedGroup
from ...domain.value_objects.time_slot import ClassReference, Subject
from ...infrastructure.config.logging_config import get_schedule_logger
from ...infrastructure.reporting.workload_reporter import TeacherWorkloadReporter


@dataclass
class GenerationResult:
    """時間割生成結果"""
    schedule: Schedule
    unplaced: List[UnplacedLesson] = field(default_factory=list)
    teacher_loads: List[TeacherLoad] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """全ての必要時数が配置できたか"""
        return not self.unplaced

    @property
    def unplaced_periods(self) -> int:
        return sum(entry.periods_remaining for entry in self.unplaced)


class PhaseOrchestrator:
    """フェーズ順に配置戦略を呼び出して時間割を生成する"""

    def __init__(self, school: School, calendar: SchoolCalendar, constraints: ConstraintConfig,
                 search_order: Optional[SearchOrder] = None):
        self.school = school
        self.calendar = calendar
        self.constraints = constraints
        self.search_order = search_order or RandomSearchOrder()
        self.logger = get_schedule_logger(__name__)
        self.workload_reporter = TeacherWorkloadReporter()
        self._synchronized_pairs = {
            (class_ref, group.subject)
            for group in constraints.synchronized_groups
            for class_ref in group.classes
        }
        self.reset()

    def reset(self) -> None:
        """可変状態を作り直す"""
        self.state = GenerationState.create(self.school, self.calendar, self.constraints)
        self.slot_calendar = SlotCalendar(self.calendar)
        self.validator = PlacementValidator(self.constraints, self.slot_calendar, self.state)
        self.lesson_service = LessonPlacementService(
            self.calendar, self.constraints, self.slot_calendar,
            self.validator, self.state, self.search_order
        )
        self.sync_service = SynchronizedGroupPlacementService(
            self.school, self.calendar, self.constraints, self.slot_calendar,
            self.validator, self.search_order
        )

    def generate(self) -> GenerationResult:
        """全フェーズを実行して時間割を生成"""
        self.logger.info("時間割生成を開始")
        self.reset()

        self._schedule_restricted_subjects()
        if self.constraints.synchronized_groups:
            self._schedule_synchronized_groups()
        self._schedule_resource_subjects()
        self._schedule_strict_doubles()
        self._schedule_remaining_subjects()

        result = GenerationResult(
            schedule=self.state.schedule,
            unplaced=list(self.state.unplaced),
            teacher_loads=self.state.load_tracker.snapshot()
        )
        self.logger.info(
            f"時間割生成が完了: 未配置 {len(result.unplaced)}件 ({result.unplaced_periods}コマ)"
        )
        self.workload_reporter.log_summary(result.teacher_loads, self.calendar.days)
        return result

    # --- 共通処理 ---
    def schedule_remaining_demand(self, class_ref: ClassReference, subject: Subject,
                                  allowed_days: Optional[Sequence[str]] = None) -> int:
        """クラス・教科の不足分を配置し、配置したコマ数を返す

        担当教員または必要時数が未定義の場合、既に必要時数を満たしている
        場合は何もしない。
        """
        teacher = self.school.get_assigned_teacher(class_ref, subject)
        needed = self.school.get_required_periods(class_ref, subject)
        if teacher is None or needed is None:
            return 0

        scheduled = self.state.schedule.count_subject_hours(class_ref, subject)
        if scheduled >= needed:
            return 0

        if allowed_days is None:
            allowed_days = self.calendar.days
        demand = LessonDemand(class_ref, subject, teacher, needed - scheduled)
        return self.lesson_service.schedule_lesson(demand, allowed_days)

    def schedule_all_for_subject(self, subject: Subject,
                                 allowed_days: Optional[Sequence[str]] = None) -> int:
        """全クラスについて教科の不足分を配置

        同期グループに属するクラスの教科は Phase 2 の担当なので、
        失敗して残った分も個別には配置しない。
        """
        return sum(
            self.schedule_remaining_demand(class_ref, subject, allowed_days)
            for class_ref in self.school.get_all_classes()
            if (class_ref, subject) not in self._synchronized_pairs
        )

    # --- フェーズ ---
    def _schedule_restricted_subjects(self) -> None:
        phase = "Phase 1: 曜日制限教科"
        self.logger.phase_start(phase)
        unplaced_before = len(self.state.unplaced)
        placed = 0
        for subject, restriction in self.constraints.subject_restrictions.items():
            placed += self.schedule_all_for_subject(subject, restriction.days)
        self.logger.phase_end(phase, success=len(self.state.unplaced) == unplaced_before, placed=placed)

    def _schedule_synchronized_groups(self) -> None:
        phase = "Phase 2: 同期グループ"
        self.logger.phase_start(phase)
        unplaced_before = len(self.state.unplaced)
        placed = 0
        for group in self.constraints.synchronized_groups:
            placed += self._schedule_synchronized_group(group)
        self.logger.phase_end(phase, success=len(self.state.unplaced) == unplaced_before, placed=placed)

    def _schedule_synchronized_group(self, group: SynchronizedGroup) -> int:
        """グループの必要時数に達するまでダブル（残り1なら単独）を同期配置"""
        needed = self.school.get_required_periods(group.lead_class, group.subject)
        if not needed:
            self.logger.warning(
                f"同期グループ {group.label}: {group.lead_class.division}の{group.subject}の時数が未定義のためスキップ"
            )
            return 0

        scheduled = self.state.schedule.count_subject_hours(group.lead_class, group.subject)
        placed = 0
        while scheduled < needed:
            length = 2 if needed - scheduled >= 2 else 1
            if not self.sync_service.place_block(group, length):
                if self.sync_service.resolve_teacher(group) is None:
                    reason = UnplacedReason.SYNC_TEACHER_MISSING
                else:
                    reason = UnplacedReason.NO_SYNC_SLOT
                entry = UnplacedLesson(group.classes, group.subject, needed - scheduled, reason)
                self.state.record_unplaced(entry)
                self.logger.warning(f"未配置: {entry}")
                break
            scheduled += length
            placed += length * len(group.classes)
        return placed

    def _schedule_resource_subjects(self) -> None:
        # 施設の排他は can_place 側で判定される
        phase = "Phase 3: 共有施設教科"
        self.logger.phase_start(phase)
        unplaced_before = len(self.state.unplaced)
        placed = 0
        for subject in self.constraints.resource_subjects:
            placed += self.schedule_all_for_subject(subject)
        self.logger.phase_end(phase, success=len(self.state.unplaced) == unplaced_before, placed=placed)

    def _schedule_strict_doubles(self) -> None:
        phase = "Phase 4: ダブル配置必須教科"
        self.logger.phase_start(phase)
        unplaced_before = len(self.state.unplaced)
        placed = 0
        for subject in self.constraints.get_strict_double_subjects():
            placed += self.schedule_all_for_subject(subject)
        self.logger.phase_end(phase, success=len(self.state.unplaced) == unplaced_before, placed=placed)

    def _schedule_remaining_subjects(self) -> None:
        phase = "Phase 5: その他の教科"
        self.logger.phase_start(phase)
        unplaced_before = len(self.state.unplaced)
        handled = set(self.constraints.subject_restrictions)
        handled.update(self.constraints.resource_subjects)
        handled.update(self.constraints.get_strict_double_subjects())

        subjects = [s for s in self.school.get_all_subjects() if s not in handled]
        placed = 0
        for subject in self.search_order.shuffle(subjects):
            placed += self.schedule_all_for_subject(subject)
        self.logger.phase_end(phase, success=len(self.state.unplaced) == unplaced_before, placed=placed)
