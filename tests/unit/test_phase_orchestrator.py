"""フェーズ制御のテスト"""
import logging

import pytest

from weekly_timetable.application.services.phase_orchestrator import PhaseOrchestrator
from weekly_timetable.domain.services.search_order import RandomSearchOrder
from weekly_timetable.domain.value_objects import ClassReference, Subject, TimeSlot, UnplacedReason

CLASS_1A = ClassReference("1A")
CLASS_4A = ClassReference("4A")
CLASS_5A = ClassReference("5A")
MATH = Subject("Math")
PE = Subject("P.E.")


class TestScheduleRemainingDemand:
    """クラス・教科ごとの不足分の配置"""

    def test_generates_complete_timetable(self, build_orchestrator, config_data):
        result = build_orchestrator(config_data).generate()

        assert result.is_complete
        assert result.unplaced_periods == 0
        assert result.schedule.count_subject_hours(CLASS_1A, MATH) == 4
        assert result.schedule.count_subject_hours(CLASS_1A, Subject("English")) == 3

    def test_second_call_commits_nothing(self, build_orchestrator, config_data):
        orchestrator = build_orchestrator(config_data)
        orchestrator.generate()
        before = len(orchestrator.state.schedule.get_all_assignments())

        assert orchestrator.schedule_remaining_demand(CLASS_1A, MATH) == 0
        assert len(orchestrator.state.schedule.get_all_assignments()) == before

    def test_pair_without_teacher_is_skipped_silently(self, build_orchestrator, config_data):
        config_data["schoolData"]["teachers"]["2A"] = {"Math": "Ms Ito"}
        orchestrator = build_orchestrator(config_data)
        result = orchestrator.generate()

        assert orchestrator.schedule_remaining_demand(ClassReference("2A"), Subject("English")) == 0
        assert result.schedule.count_subject_hours(ClassReference("2A"), Subject("English")) == 0
        assert result.is_complete

    def test_generate_resets_previous_run(self, build_orchestrator, config_data):
        orchestrator = build_orchestrator(config_data)
        orchestrator.generate()
        result = orchestrator.generate()

        assert result.schedule.count_subject_hours(CLASS_1A, MATH) == 4


class TestPhaseOrder:
    """フェーズ順による優先度"""

    def test_restricted_subject_is_placed_first(self, build_orchestrator, config_data):
        config_data["schoolData"]["subjects"]["lowerPrimary"]["Music"] = 1
        config_data["schoolData"]["teachers"]["1A"]["Music"] = "Ms Okafor"
        config_data["constraints"]["subjectRestrictions"] = {"Music": {"days": ["Mon"]}}
        result = build_orchestrator(config_data).generate()

        assert result.schedule.get_subject_slots(CLASS_1A, Subject("Music")) == [TimeSlot("Mon", 1)]
        assert result.schedule.get_subject_slots(CLASS_1A, MATH)[0] == TimeSlot("Mon", 2)

    def test_resource_subject_is_exclusive_across_classes(self, build_orchestrator, config_data):
        config_data["schoolData"]["subjects"]["lowerPrimary"]["ICT"] = 1
        config_data["schoolData"]["teachers"]["1A"]["ICT"] = "Mr Kato"
        config_data["schoolData"]["teachers"]["2A"] = {"ICT": "Ms Mori"}
        config_data["constraints"]["singleResourceSubjects"] = ["ICT"]
        result = build_orchestrator(config_data).generate()

        assert result.schedule.get_subject_slots(CLASS_1A, Subject("ICT")) == [TimeSlot("Mon", 1)]
        assert result.schedule.get_subject_slots(ClassReference("2A"), Subject("ICT")) == [TimeSlot("Mon", 2)]

    def test_teacher_loads_sorted_by_required_periods(self, build_orchestrator, config_data):
        result = build_orchestrator(config_data).generate()

        assert [load.teacher.name for load in result.teacher_loads] == ["Ms Ito", "Mr Sato"]
        assert result.teacher_loads[0].required_periods == 4
        assert result.teacher_loads[0].scheduled_periods == 4

    def test_same_seed_gives_same_timetable(self, build_orchestrator, config_data):
        config_data["schoolData"]["teachers"]["2A"] = {"Math": "Ms Ito", "English": "Ms Novak"}
        first = build_orchestrator(config_data, RandomSearchOrder(7)).generate()
        second = build_orchestrator(config_data, RandomSearchOrder(7)).generate()

        assert first.schedule.to_dict() == second.schedule.to_dict()


class TestStrictDoubleScenario:
    """4コマ・ダブル2つ指定の教科は2つの曜日にダブルで入る"""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3, 4])
    def test_two_doubles_on_two_days(self, build_orchestrator, config_data, seed):
        config_data["constraints"]["doublePeriodSubjects"] = [
            {"subject": "Math", "divisions": ["lowerPrimary"], "strict": "mixed",
             "structure": {"doubles": 2, "singles": 0}}
        ]
        result = build_orchestrator(config_data, RandomSearchOrder(seed)).generate()

        slots = result.schedule.get_subject_slots(CLASS_1A, MATH)
        days = sorted({slot.day for slot in slots})
        assert len(slots) == 4
        assert len(days) == 2
        for day in days:
            first, second = [slot.period for slot in slots if slot.day == day]
            assert second - first == 1 or (second - first == 2 and first + 1 in (3, 6))
        assert result.unplaced == []


class TestRestrictedScenario:
    """曜日制限のある教科で空きが1コマしかない場合"""

    def test_one_placed_one_unplaced(self, build_orchestrator, config_data):
        config_data["schoolData"]["subjects"]["lowerPrimary"] = {"Music": 2}
        config_data["schoolData"]["teachers"]["1A"] = {"Music": "Ms Okafor"}
        config_data["schoolData"]["specialEvents"] = [
            {"day": "Mon", "periodIds": [1, 2, 4, 5, 7]},
            {"day": "Wed", "periodIds": [1, 2, 4, 5]}
        ]
        config_data["constraints"]["subjectRestrictions"] = {"Music": {"days": ["Mon", "Wed"]}}
        result = build_orchestrator(config_data).generate()

        assert result.schedule.get_subject_slots(CLASS_1A, Subject("Music")) == [TimeSlot("Wed", 7)]
        assert len(result.unplaced) == 1
        assert result.unplaced[0].periods_remaining == 1
        assert result.unplaced[0].reason == UnplacedReason.NO_FREE_SLOT
        assert not result.is_complete

    def test_phase_log_reports_unplaced(self, build_orchestrator, config_data, caplog):
        config_data["schoolData"]["subjects"]["lowerPrimary"] = {"Music": 2}
        config_data["schoolData"]["teachers"]["1A"] = {"Music": "Ms Okafor"}
        config_data["constraints"]["subjectRestrictions"] = {"Music": {"days": ["Mon"]}}
        config_data["constraints"]["workloadLimits"]["maxTeacherPeriodsPerDay"] = 1
        caplog.set_level(logging.INFO, logger=PhaseOrchestrator.__module__)

        build_orchestrator(config_data).generate()

        messages = [record.getMessage() for record in caplog.records]
        assert "=== Phase 1: 曜日制限教科 未配置あり ===" in messages
        assert "=== Phase 5: その他の教科 完了 ===" in messages


class TestSynchronizedGroupPhase:
    """同期グループのフェーズ"""

    @pytest.fixture
    def sync_config(self, config_data):
        config_data["schoolData"]["teachers"].update({
            "4A": {"P.E.": "Coach Lee"},
            "5A": {"P.E.": "Coach Lee"},
        })
        config_data["constraints"]["peSynchronization"] = [["4A", "5A"]]
        config_data["constraints"]["workloadLimits"]["maxTeacherPeriodsPerDay"] = 6
        return config_data

    def test_group_receives_required_periods(self, build_orchestrator, sync_config):
        result = build_orchestrator(sync_config).generate()

        assert result.schedule.get_subject_slots(CLASS_4A, PE) == result.schedule.get_subject_slots(CLASS_5A, PE)
        assert result.schedule.count_subject_hours(CLASS_4A, PE) == 2

    def test_odd_requirement_ends_with_single(self, build_orchestrator, sync_config):
        sync_config["schoolData"]["subjects"]["upperPrimary"]["P.E."] = 3
        result = build_orchestrator(sync_config).generate()

        assert result.schedule.count_subject_hours(CLASS_4A, PE) == 3
        assert result.schedule.count_subject_hours(CLASS_5A, PE) == 3

    def test_fully_booked_teacher_leaves_group_unplaced(self, build_orchestrator, sync_config):
        # 曜日制限教科（Phase 1）で Coach Lee が毎日上限に達する
        sync_config["schoolData"]["subjects"]["upperPrimary"]["Swimming"] = 5
        sync_config["schoolData"]["teachers"]["4A"]["Swimming"] = "Coach Lee"
        sync_config["constraints"]["subjectRestrictions"] = {
            "Swimming": {"days": ["Mon", "Tue", "Wed", "Thu", "Fri"]}
        }
        sync_config["constraints"]["workloadLimits"]["maxTeacherPeriodsPerDay"] = 1
        result = build_orchestrator(sync_config).generate()

        pe_entries = [entry for entry in result.unplaced if entry.subject == PE]
        assert len(pe_entries) == 1
        assert pe_entries[0].label == "4A,5A"
        assert pe_entries[0].periods_remaining == 2
        assert pe_entries[0].reason == UnplacedReason.NO_SYNC_SLOT
        assert result.schedule.count_subject_hours(CLASS_4A, PE) == 0
        assert result.schedule.count_subject_hours(CLASS_5A, PE) == 0

    def test_missing_lead_teacher_is_reported(self, build_orchestrator, sync_config):
        del sync_config["schoolData"]["teachers"]["4A"]["P.E."]
        sync_config["schoolData"]["teachers"]["4A"]["English"] = "Mr Evans"
        result = build_orchestrator(sync_config).generate()

        pe_entries = [entry for entry in result.unplaced if entry.subject == PE]
        assert [entry.reason for entry in pe_entries] == [UnplacedReason.SYNC_TEACHER_MISSING]
        assert result.schedule.count_subject_hours(CLASS_5A, PE) == 0

    def test_class_outside_group_gets_subject_in_last_phase(self, build_orchestrator, sync_config):
        sync_config["schoolData"]["teachers"]["6A"] = {"P.E.": "Ms Walsh"}
        result = build_orchestrator(sync_config).generate()

        assert result.schedule.count_subject_hours(ClassReference("6A"), PE) == 2

    def test_group_without_requirement_is_skipped(self, build_orchestrator, sync_config):
        sync_config["constraints"]["peSynchronization"] = [["1A", "2A"]]
        sync_config["schoolData"]["teachers"]["2A"] = {"Math": "Ms Novak"}
        result = build_orchestrator(sync_config).generate()

        assert [entry for entry in result.unplaced if entry.subject == PE] == []
