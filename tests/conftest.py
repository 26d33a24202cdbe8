"""テスト共通のフィクスチャ"""
import copy
from pathlib import Path

import pytest

from weekly_timetable.application.services.phase_orchestrator import PhaseOrchestrator
from weekly_timetable.domain.services.search_order import FixedSearchOrder
from weekly_timetable.infrastructure.repositories.json_config_repository import JsonConfigRepository

PROJECT_ROOT = Path(__file__).parent.parent

# 1限・2限、休憩(3)、4限・5限、昼食(6)、7限
BASE_CONFIG = {
    "schoolData": {
        "days": ["Mon", "Tue", "Wed", "Thu", "Fri"],
        "periods": [{"id": period} for period in range(1, 8)],
        "divisionSchedules": {
            "lowerPrimary": {"lessonSlots": [1, 2, 4, 5, 7], "breakPeriod": 3, "lunchPeriod": 6},
            "upperPrimary": {"lessonSlots": [1, 2, 4, 5, 7], "breakPeriod": 3, "lunchPeriod": 6},
            "lowerSecondary": {"lessonSlots": [1, 2, 4, 5, 7], "breakPeriod": 3, "lunchPeriod": 6}
        },
        "specialEvents": [],
        "subjects": {
            "lowerPrimary": {"Math": 4, "English": 3},
            "upperPrimary": {"Math": 4, "English": 3, "P.E.": 2},
            "lowerSecondary": {"Math": 4, "English": 3}
        },
        "teachers": {
            "1A": {"Math": "Ms Ito", "English": "Mr Sato"}
        }
    },
    "constraints": {
        "workloadLimits": {"maxTeacherPeriodsPerDay": 4, "maxTeacherPeriodsPerDayException": 6},
        "teacherWorkloadExceptions": [],
        "teacherAvailability": {},
        "subjectRestrictions": {},
        "singleResourceSubjects": [],
        "doublePeriodSubjects": []
    }
}


@pytest.fixture
def config_data():
    """テストごとに変更してよい設定辞書"""
    return copy.deepcopy(BASE_CONFIG)


@pytest.fixture
def parse_config():
    return JsonConfigRepository().parse


@pytest.fixture
def build_orchestrator(parse_config):
    """設定辞書から PhaseOrchestrator を作る（探索順は既定で入力順）"""
    def _build(data, search_order=None):
        config = parse_config(data)
        return PhaseOrchestrator(
            config.school, config.calendar, config.constraints,
            search_order=search_order or FixedSearchOrder()
        )
    return _build


@pytest.fixture
def sample_config_path():
    return PROJECT_ROOT / "data" / "config" / "school_data.json"
