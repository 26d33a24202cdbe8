"""配置可否判定と確定処理のテスト"""
from weekly_timetable.domain.value_objects import (
    ClassReference,
    PlacementRejection,
    Subject,
    Teacher,
    TimeSlot
)

CLASS_1A = ClassReference("1A")
CLASS_2A = ClassReference("2A")
MATH = Subject("Math")
ENGLISH = Subject("English")
ICT = Subject("ICT")
ITO = Teacher("Ms Ito")
SATO = Teacher("Mr Sato")


def build(build_orchestrator, data):
    orchestrator = build_orchestrator(data)
    return orchestrator.validator, orchestrator.state


class TestCanPlace:
    """判定順に最初の拒否理由を返す"""

    def test_free_slot_is_accepted(self, build_orchestrator, config_data):
        validator, _ = build(build_orchestrator, config_data)
        check = validator.can_place(CLASS_1A, MATH, ITO, "Mon", 1)
        assert check
        assert check.reason is None

    def test_unknown_teacher_is_rejected(self, build_orchestrator, config_data):
        validator, _ = build(build_orchestrator, config_data)
        check = validator.can_place(CLASS_1A, MATH, Teacher("Ghost"), "Mon", 1)
        assert check.reason == PlacementRejection.TEACHER_NOT_FOUND

    def test_daily_workload_limit(self, build_orchestrator, config_data):
        validator, _ = build(build_orchestrator, config_data)
        for period in (1, 2, 4, 5):
            validator.commit(CLASS_1A, MATH, ITO, "Mon", period)

        check = validator.can_place(CLASS_1A, MATH, ITO, "Mon", 7)
        assert check.reason == PlacementRejection.WORKLOAD_EXCEEDED
        assert validator.can_place(CLASS_1A, MATH, ITO, "Tue", 1)

    def test_exception_teacher_uses_elevated_limit(self, build_orchestrator, config_data):
        config_data["constraints"]["teacherWorkloadExceptions"] = ["Ms Ito"]
        validator, _ = build(build_orchestrator, config_data)
        for period in (1, 2, 4, 5):
            validator.commit(CLASS_1A, MATH, ITO, "Mon", period)

        assert validator.can_place(CLASS_1A, MATH, ITO, "Mon", 7)

    def test_special_event_blocks_slot(self, build_orchestrator, config_data):
        config_data["schoolData"]["specialEvents"] = [
            {"day": "Mon", "appliesTo": "all", "periodIds": [1]},
            {"day": "Tue", "appliesTo": ["upperPrimary"], "periodId": 1}
        ]
        validator, _ = build(build_orchestrator, config_data)

        assert validator.can_place(CLASS_1A, MATH, ITO, "Mon", 1).reason == PlacementRejection.EVENT_BOOKED
        assert validator.can_place(CLASS_1A, MATH, ITO, "Tue", 1)

    def test_teacher_available_days(self, build_orchestrator, config_data):
        config_data["constraints"]["teacherAvailability"] = {"Ms Ito": {"availableDays": ["Tue"]}}
        validator, _ = build(build_orchestrator, config_data)

        check = validator.can_place(CLASS_1A, MATH, ITO, "Mon", 1)
        assert check.reason == PlacementRejection.TEACHER_UNAVAILABLE
        assert check.detail == "Teacher only available on Tue"
        assert validator.can_place(CLASS_1A, MATH, ITO, "Tue", 1)

    def test_teacher_unavailable_days(self, build_orchestrator, config_data):
        config_data["constraints"]["teacherAvailability"] = {"Ms Ito": {"unavailableDays": ["Fri"]}}
        validator, _ = build(build_orchestrator, config_data)

        check = validator.can_place(CLASS_1A, MATH, ITO, "Fri", 1)
        assert check.reason == PlacementRejection.TEACHER_UNAVAILABLE
        assert check.detail == "Teacher unavailable on Fri"

    def test_subject_day_restriction(self, build_orchestrator, config_data):
        config_data["constraints"]["subjectRestrictions"] = {"Math": {"days": ["Wed"]}}
        validator, _ = build(build_orchestrator, config_data)

        assert validator.can_place(CLASS_1A, MATH, ITO, "Mon", 1).reason == PlacementRejection.SUBJECT_RESTRICTED
        assert validator.can_place(CLASS_1A, MATH, ITO, "Wed", 1)

    def test_teacher_already_teaching_another_class(self, build_orchestrator, config_data):
        config_data["schoolData"]["teachers"]["2A"] = {"Math": "Ms Ito"}
        validator, _ = build(build_orchestrator, config_data)
        validator.commit(CLASS_1A, MATH, ITO, "Mon", 1)

        assert validator.can_place(CLASS_2A, MATH, ITO, "Mon", 1).reason == PlacementRejection.TEACHER_BOOKED
        assert validator.can_place(CLASS_2A, MATH, ITO, "Mon", 2)

    def test_class_already_has_a_lesson(self, build_orchestrator, config_data):
        validator, _ = build(build_orchestrator, config_data)
        validator.commit(CLASS_1A, MATH, ITO, "Mon", 1)

        assert validator.can_place(CLASS_1A, ENGLISH, SATO, "Mon", 1).reason == PlacementRejection.CLASS_BOOKED

    def test_resource_subject_is_exclusive(self, build_orchestrator, config_data):
        config_data["schoolData"]["subjects"]["lowerPrimary"]["ICT"] = 1
        config_data["schoolData"]["teachers"]["1A"]["ICT"] = "Mr Kato"
        config_data["schoolData"]["teachers"]["2A"] = {"ICT": "Ms Mori"}
        config_data["constraints"]["singleResourceSubjects"] = ["ICT"]
        validator, _ = build(build_orchestrator, config_data)
        validator.commit(CLASS_1A, ICT, Teacher("Mr Kato"), "Mon", 1)

        check = validator.can_place(CLASS_2A, ICT, Teacher("Ms Mori"), "Mon", 1)
        assert check.reason == PlacementRejection.RESOURCE_BOOKED
        assert validator.can_place(CLASS_2A, ICT, Teacher("Ms Mori"), "Mon", 2)

    def test_event_is_checked_before_teacher_availability(self, build_orchestrator, config_data):
        config_data["schoolData"]["specialEvents"] = [{"day": "Mon", "periodIds": [1]}]
        config_data["constraints"]["teacherAvailability"] = {"Ms Ito": {"availableDays": ["Tue"]}}
        validator, _ = build(build_orchestrator, config_data)

        assert validator.can_place(CLASS_1A, MATH, ITO, "Mon", 1).reason == PlacementRejection.EVENT_BOOKED
        assert validator.can_place(CLASS_1A, MATH, ITO, "Mon", 2).reason == PlacementRejection.TEACHER_UNAVAILABLE

    def test_can_place_does_not_mutate_state(self, build_orchestrator, config_data):
        validator, state = build(build_orchestrator, config_data)
        validator.can_place(CLASS_1A, MATH, ITO, "Mon", 1)

        assert state.schedule.get_all_assignments() == []
        assert state.load_tracker.get_daily_count(ITO, "Mon") == 0


class TestCommit:
    """確定処理は時間割・台帳・教員負荷をまとめて更新する"""

    def test_commit_updates_all_structures(self, build_orchestrator, config_data):
        validator, state = build(build_orchestrator, config_data)
        validator.commit(CLASS_1A, MATH, ITO, "Tue", 4)

        slot = TimeSlot("Tue", 4)
        assignment = state.schedule.get_assignment(slot, CLASS_1A)
        assert assignment.subject == MATH
        assert assignment.teacher == ITO
        assert state.ledger.is_teacher_busy(slot, ITO)
        assert state.load_tracker.get_daily_count(ITO, "Tue") == 1

    def test_commit_books_resource(self, build_orchestrator, config_data):
        config_data["schoolData"]["teachers"]["1A"]["ICT"] = "Mr Kato"
        config_data["constraints"]["singleResourceSubjects"] = ["ICT"]
        validator, state = build(build_orchestrator, config_data)
        validator.commit(CLASS_1A, ICT, Teacher("Mr Kato"), "Mon", 2)

        assert state.ledger.get_resource_holder(TimeSlot("Mon", 2), ICT) == CLASS_1A

    def test_daily_capacity_for_block(self, build_orchestrator, config_data):
        validator, _ = build(build_orchestrator, config_data)
        for period in (1, 2, 4):
            validator.commit(CLASS_1A, MATH, ITO, "Mon", period)

        assert validator.has_daily_capacity(ITO, "Mon", 1)
        assert not validator.has_daily_capacity(ITO, "Mon", 2)
