"""学校エンティティ（名簿・担当教員・学部別時数）"""
from typing import Dict, List, Optional, Tuple

from ..value_objects.division import Division
from ..value_objects.time_slot import ClassReference, Subject, Teacher


class School:
    """学校全体の名簿情報を管理するエンティティ

    クラスは登録順を保持する（各フェーズのクラス処理順になる）。
    """

    def __init__(self):
        self._classes: List[ClassReference] = []
        self._teacher_assignments: Dict[Tuple[ClassReference, Subject], Teacher] = {}
        self._required_periods: Dict[Division, Dict[Subject, int]] = {}

    # クラス管理
    def add_class(self, class_ref: ClassReference) -> None:
        """クラスを追加（重複登録は無視）"""
        if class_ref not in self._classes:
            self._classes.append(class_ref)

    def get_all_classes(self) -> List[ClassReference]:
        return list(self._classes)

    # 教員-クラス割り当て管理
    def assign_teacher(self, class_ref: ClassReference, subject: Subject, teacher: Teacher) -> None:
        """教員を特定のクラス・教科に割り当て"""
        self.add_class(class_ref)
        self._teacher_assignments[(class_ref, subject)] = teacher

    def get_assigned_teacher(self, class_ref: ClassReference, subject: Subject) -> Optional[Teacher]:
        """指定されたクラス・教科の担当教員を取得（未設定ならNone）"""
        return self._teacher_assignments.get((class_ref, subject))

    def get_all_teachers(self) -> List[Teacher]:
        """担当教員の一覧（初出順）"""
        return list(dict.fromkeys(self._teacher_assignments.values()))

    # 学部別時数管理
    def set_required_periods(self, division: Division, subject: Subject, periods: int) -> None:
        """学部・教科の週当たり時数を設定"""
        self._required_periods.setdefault(division, {})[subject] = periods

    def get_required_periods(self, class_ref: ClassReference, subject: Subject) -> Optional[int]:
        """クラスの学部における教科の週当たり時数（未定義ならNone）"""
        return self.get_division_periods(class_ref.division, subject)

    def get_division_periods(self, division: Division, subject: Subject) -> Optional[int]:
        return self._required_periods.get(division, {}).get(subject)

    def get_division_subjects(self, division: Division) -> Dict[Subject, int]:
        return dict(self._required_periods.get(division, {}))

    def has_division(self, division: Division) -> bool:
        return division in self._required_periods

    def get_all_subjects(self) -> List[Subject]:
        """全学部の教科の和集合（定義順、重複なし）"""
        subjects: List[Subject] = []
        for table in self._required_periods.values():
            subjects.extend(table)
        return list(dict.fromkeys(subjects))

    def get_teacher_required_totals(self) -> Dict[Teacher, int]:
        """教員ごとの週当たり担当予定時数

        各クラスについて、学部の時数表にある教科のうち担当教員が
        設定されているものの時数を合計する。
        """
        totals: Dict[Teacher, int] = {teacher: 0 for teacher in self.get_all_teachers()}
        for class_ref in self._classes:
            for subject, periods in self.get_division_subjects(class_ref.division).items():
                teacher = self.get_assigned_teacher(class_ref, subject)
                if teacher is not None:
                    totals[teacher] += periods
        return totals
