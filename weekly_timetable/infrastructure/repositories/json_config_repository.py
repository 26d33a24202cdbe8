"""JSON形式の学校データ・制約設定の読み込み

設定ファイルは schoolData と constraints の2つのオブジェクトを持つ。
文字列の識別子はここで一度だけ値オブジェクトに変換する。
"""
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ...domain.entities.school import School
from ...domain.entities.school_calendar import DivisionSchedule, Period, SchoolCalendar, SpecialEvent
from ...domain.exceptions import ConfigurationError, DataLoadingError
from ...domain.value_objects.constraint_config import (
    ConstraintConfig,
    DoublePeriodRule,
    SubjectRestriction,
    SynchronizedGroup,
    TeacherAvailability,
    WorkloadLimits
)
from ...domain.value_objects.division import Division
from ...domain.value_objects.time_slot import ClassReference, Subject, Teacher
from ...shared.mixins.logging_mixin import LoggingMixin
from ...shared.mixins.validation_mixin import ValidationError, ValidationMixin

# 合同体育（peSynchronization）の教科名
PE_SUBJECT = "P.E."


@dataclass
class TimetableConfig:
    """読み込んだ設定一式"""
    school: School
    calendar: SchoolCalendar
    constraints: ConstraintConfig


class JsonConfigRepository(LoggingMixin, ValidationMixin):
    """JSON設定ファイルから School / SchoolCalendar / ConstraintConfig を組み立てる"""

    def load(self, file_path: Path) -> TimetableConfig:
        """設定ファイルを読み込む

        Raises:
            DataLoadingError: ファイルが読めない、またはJSONとして不正な場合
            ConfigurationError: 必須項目の欠落や型の誤りがある場合
        """
        file_path = Path(file_path)
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise DataLoadingError(f"設定ファイルが見つかりません: {file_path}", file_path=str(file_path)) from e
        except (OSError, json.JSONDecodeError) as e:
            raise DataLoadingError(f"設定ファイルを読み込めません: {file_path}: {e}",
                                   file_path=str(file_path)) from e

        config = self.parse(data)
        self.logger.info(
            f"設定を読み込みました: {file_path} "
            f"(クラス {len(config.school.get_all_classes())}, 教員 {len(config.school.get_all_teachers())})"
        )
        return config

    def parse(self, data: Dict[str, Any]) -> TimetableConfig:
        """辞書から設定一式を組み立てる"""
        try:
            self.validate_type(data, dict, "config")
            self.validate_required_keys(data, ["schoolData"], "config")
            school_data = self.validate_type(data["schoolData"], dict, "schoolData")
            constraint_data = self.validate_type(data.get("constraints", {}), dict, "constraints")

            calendar = self._parse_calendar(school_data)
            school = self._parse_school(school_data)
            constraints = self._parse_constraints(constraint_data)
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

        self._warn_inconsistencies(school, calendar, constraints)
        return TimetableConfig(school, calendar, constraints)

    # --- schoolData ---
    def _parse_division(self, key: str, config_key: str) -> Division:
        try:
            return Division.from_key(key)
        except ValueError as e:
            choices = [d.value for d in Division]
            raise ConfigurationError(
                f"{config_key}: 未知の学部名です: {key!r} (有効: {choices})",
                config_key=config_key
            ) from e

    def _parse_calendar(self, school_data: Dict[str, Any]) -> SchoolCalendar:
        self.validate_required_keys(school_data, ["days", "periods", "divisionSchedules"], "schoolData")
        days = [self.validate_type(d, str, "schoolData.days[]")
                for d in self.validate_type(school_data["days"], list, "schoolData.days")]

        periods = []
        for raw in self.validate_type(school_data["periods"], list, "schoolData.periods"):
            if isinstance(raw, dict):
                self.validate_required_keys(raw, ["id"], "schoolData.periods[]")
                period_id = self.validate_type(raw["id"], int, "schoolData.periods[].id")
                periods.append(Period(period_id, str(raw.get("label", raw.get("time", "")))))
            else:
                periods.append(Period(self.validate_type(raw, int, "schoolData.periods[]")))

        division_schedules = {}
        raw_schedules = self.validate_type(school_data["divisionSchedules"], dict, "schoolData.divisionSchedules")
        for key, raw in raw_schedules.items():
            config_key = f"schoolData.divisionSchedules.{key}"
            division = self._parse_division(key, config_key)
            self.validate_type(raw, dict, config_key)
            self.validate_required_keys(raw, ["lessonSlots"], config_key)
            slots = tuple(self.validate_type(s, int, f"{config_key}.lessonSlots[]")
                          for s in self.validate_type(raw["lessonSlots"], list, f"{config_key}.lessonSlots"))
            division_schedules[division] = DivisionSchedule(
                lesson_slots=slots,
                break_period=self._optional_int(raw.get("breakPeriod"), f"{config_key}.breakPeriod"),
                lunch_period=self._optional_int(raw.get("lunchPeriod"), f"{config_key}.lunchPeriod")
            )

        events = [
            self._parse_special_event(raw, index)
            for index, raw in enumerate(
                self.validate_type(school_data.get("specialEvents", []), list, "schoolData.specialEvents")
            )
        ]
        return SchoolCalendar(days, periods, division_schedules, events)

    def _parse_special_event(self, raw: Dict[str, Any], index: int) -> SpecialEvent:
        config_key = f"schoolData.specialEvents[{index}]"
        self.validate_type(raw, dict, config_key)
        self.validate_required_keys(raw, ["day"], config_key)

        if "periodIds" in raw:
            period_ids = tuple(self.validate_type(p, int, f"{config_key}.periodIds[]")
                               for p in self.validate_type(raw["periodIds"], list, f"{config_key}.periodIds"))
        elif "periodId" in raw:
            period_ids = (self.validate_type(raw["periodId"], int, f"{config_key}.periodId"),)
        else:
            raise ConfigurationError(f"{config_key}: periodIds または periodId が必要です", config_key=config_key)

        applies_to = raw.get("appliesTo", "all")
        if applies_to == "all":
            divisions = None
        else:
            divisions = frozenset(
                self._parse_division(key, f"{config_key}.appliesTo")
                for key in self.validate_type(applies_to, list, f"{config_key}.appliesTo")
            )
        return SpecialEvent(
            day=self.validate_type(raw["day"], str, f"{config_key}.day"),
            period_ids=period_ids,
            applies_to=divisions,
            name=str(raw.get("name", raw.get("event", "")))
        )

    def _parse_school(self, school_data: Dict[str, Any]) -> School:
        self.validate_required_keys(school_data, ["subjects", "teachers"], "schoolData")
        school = School()

        raw_subjects = self.validate_type(school_data["subjects"], dict, "schoolData.subjects")
        for key, table in raw_subjects.items():
            config_key = f"schoolData.subjects.{key}"
            division = self._parse_division(key, config_key)
            for subject_name, periods in self.validate_type(table, dict, config_key).items():
                self.validate_type(periods, int, f"{config_key}.{subject_name}")
                self.validate_range(periods, min_value=0, name=f"{config_key}.{subject_name}")
                school.set_required_periods(division, Subject(subject_name), periods)

        raw_teachers = self.validate_type(school_data["teachers"], dict, "schoolData.teachers")
        for class_name, table in raw_teachers.items():
            class_ref = ClassReference(class_name)
            school.add_class(class_ref)
            for subject_name, teacher_name in self.validate_type(table, dict, f"schoolData.teachers.{class_name}").items():
                # 担当教員が空のクラス・教科は未設定として扱う（配置時にスキップ）
                if not teacher_name:
                    continue
                self.validate_type(teacher_name, str, f"schoolData.teachers.{class_name}.{subject_name}")
                school.assign_teacher(class_ref, Subject(subject_name), Teacher(teacher_name))
        return school

    # --- constraints ---
    def _parse_constraints(self, data: Dict[str, Any]) -> ConstraintConfig:
        limits = self.validate_type(data.get("workloadLimits", {}), dict, "constraints.workloadLimits")
        max_per_day = self.validate_type(limits.get("maxTeacherPeriodsPerDay", 6), int,
                                         "constraints.workloadLimits.maxTeacherPeriodsPerDay")
        max_exception = self.validate_type(limits.get("maxTeacherPeriodsPerDayException", max_per_day), int,
                                           "constraints.workloadLimits.maxTeacherPeriodsPerDayException")
        self.validate_range(max_per_day, min_value=0, name="constraints.workloadLimits.maxTeacherPeriodsPerDay")
        # maxClassPeriodsPerDay は受け付けるが適用しない
        exceptions = frozenset(
            Teacher(name) for name in
            self.validate_type(data.get("teacherWorkloadExceptions", []), list, "constraints.teacherWorkloadExceptions")
        )

        availability = {}
        raw_availability = self.validate_type(data.get("teacherAvailability", {}), dict,
                                              "constraints.teacherAvailability")
        for teacher_name, rule in raw_availability.items():
            config_key = f"constraints.teacherAvailability.{teacher_name}"
            self.validate_type(rule, dict, config_key)
            availability[Teacher(teacher_name)] = TeacherAvailability(
                available_days=self._optional_days(rule.get("availableDays"), f"{config_key}.availableDays"),
                unavailable_days=self._optional_days(rule.get("unavailableDays"), f"{config_key}.unavailableDays")
            )

        restrictions = {}
        raw_restrictions = self.validate_type(data.get("subjectRestrictions", {}), dict,
                                              "constraints.subjectRestrictions")
        for subject_name, rule in raw_restrictions.items():
            config_key = f"constraints.subjectRestrictions.{subject_name}"
            self.validate_type(rule, dict, config_key)
            days = self._optional_days(rule.get("days"), f"{config_key}.days")
            if days is None:
                continue
            restrictions[Subject(subject_name)] = SubjectRestriction(days)

        resource_subjects = tuple(dict.fromkeys(
            Subject(name) for name in
            self.validate_type(data.get("singleResourceSubjects", []), list, "constraints.singleResourceSubjects")
        ))

        double_rules = [
            self._parse_double_rule(raw, index)
            for index, raw in enumerate(
                self.validate_type(data.get("doublePeriodSubjects", []), list, "constraints.doublePeriodSubjects")
            )
        ]

        return ConstraintConfig(
            workload_limits=WorkloadLimits(max_per_day, max_exception, exceptions),
            teacher_availability=availability,
            subject_restrictions=restrictions,
            resource_subjects=resource_subjects,
            double_period_rules=double_rules,
            synchronized_groups=self._parse_synchronized_groups(data)
        )

    def _parse_double_rule(self, raw: Dict[str, Any], index: int) -> DoublePeriodRule:
        config_key = f"constraints.doublePeriodSubjects[{index}]"
        self.validate_type(raw, dict, config_key)
        self.validate_required_keys(raw, ["subject"], config_key)
        divisions = frozenset(
            self._parse_division(key, f"{config_key}.divisions")
            for key in self.validate_type(raw.get("divisions", [d.value for d in Division]), list,
                                          f"{config_key}.divisions")
        )

        strict = raw.get("strict", False)
        self.validate_type(strict, (bool, str), f"{config_key}.strict")
        self.validate_in_choices(strict, [True, False, "mixed"], f"{config_key}.strict")
        fixed_doubles = fixed_singles = None
        if strict == "mixed":
            structure = self.validate_type(raw.get("structure"), dict, f"{config_key}.structure")
            self.validate_required_keys(structure, ["doubles"], f"{config_key}.structure")
            fixed_doubles = self.validate_type(structure["doubles"], int, f"{config_key}.structure.doubles")
            fixed_singles = self._optional_int(structure.get("singles"), f"{config_key}.structure.singles")

        return DoublePeriodRule(
            subject=Subject(raw["subject"]),
            divisions=divisions,
            strict=bool(strict),
            fixed_doubles=fixed_doubles,
            fixed_singles=fixed_singles
        )

    def _parse_synchronized_groups(self, data: Dict[str, Any]) -> List[SynchronizedGroup]:
        groups = []
        for index, raw in enumerate(self.validate_type(data.get("peSynchronization", []), list,
                                                       "constraints.peSynchronization")):
            classes = self._parse_group_classes(raw, f"constraints.peSynchronization[{index}]")
            groups.append(self._new_group(classes, Subject(PE_SUBJECT), groups,
                                          f"constraints.peSynchronization[{index}]"))

        for index, raw in enumerate(self.validate_type(data.get("synchronizedGroups", []), list,
                                                       "constraints.synchronizedGroups")):
            config_key = f"constraints.synchronizedGroups[{index}]"
            self.validate_type(raw, dict, config_key)
            self.validate_required_keys(raw, ["subject", "classes"], config_key)
            classes = self._parse_group_classes(raw["classes"], f"{config_key}.classes")
            groups.append(self._new_group(classes, Subject(raw["subject"]), groups, config_key))
        return groups

    def _parse_group_classes(self, raw: Any, config_key: str) -> Tuple[ClassReference, ...]:
        names = self.validate_type(raw, list, config_key)
        if not names:
            raise ConfigurationError(f"{config_key}: クラスが指定されていません", config_key=config_key)
        classes = tuple(ClassReference(name) for name in names)
        if len(set(classes)) != len(classes):
            raise ConfigurationError(f"{config_key}: 同じクラスが重複しています", config_key=config_key)
        return classes

    def _new_group(self, classes: Tuple[ClassReference, ...], subject: Subject,
                   groups: List[SynchronizedGroup], config_key: str) -> SynchronizedGroup:
        """同じ教科で複数のグループに属するクラスがあれば設定エラー"""
        for group in groups:
            if group.subject != subject:
                continue
            shared = [c.name for c in classes if c in group.classes]
            if shared:
                raise ConfigurationError(
                    f"{config_key}: {','.join(shared)} は既に{subject}の同期グループ {group.label} に属しています",
                    config_key=config_key
                )
        return SynchronizedGroup(classes, subject)

    # --- helpers ---
    def _optional_int(self, value: Any, name: str) -> Optional[int]:
        if value is None:
            return None
        return self.validate_type(value, int, name)

    def _optional_days(self, value: Any, name: str) -> Optional[Tuple[str, ...]]:
        if value is None:
            return None
        return tuple(self.validate_type(day, str, f"{name}[]")
                     for day in self.validate_type(value, list, name))

    def _warn_inconsistencies(self, school: School, calendar: SchoolCalendar,
                              constraints: ConstraintConfig) -> None:
        """生成は続行できるが未配置になりそうな設定を警告"""
        for class_ref in school.get_all_classes():
            division = class_ref.division
            if calendar.get_division_schedule(division) is None:
                self.logger.warning(f"{class_ref}: 学部 {division} の日課表が定義されていません")
            if not school.has_division(division):
                self.logger.warning(f"{class_ref}: 学部 {division} の教科時数が定義されていません")
            for subject, periods in school.get_division_subjects(division).items():
                if periods > 0 and school.get_assigned_teacher(class_ref, subject) is None:
                    self.logger.warning(f"{class_ref}: {subject}の担当教員が設定されていません")

        for group in constraints.synchronized_groups:
            divisions = {class_ref.division for class_ref in group.classes}
            if len(divisions) > 1:
                self.logger.warning(f"同期グループ {group.label}: 学部が混在しています")
