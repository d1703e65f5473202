# /tests/test_database_service.py

import pytest

from app.services.database_service import DatabaseService


@pytest.fixture
def db_service(db_session, teacher):
    """A DatabaseService bound to the default test teacher."""
    return DatabaseService(db_session, teacher.id)


@pytest.fixture
def other_db_service(db_session, make_teacher):
    """A DatabaseService for a second, unrelated teacher."""
    other = make_teacher(email="ravi@example.com", name="Ravi")
    return DatabaseService(db_session, other.id)


def _student(name, grade="3", roll="1"):
    return {"name": name, "grade": grade, "rollNumber": roll, "subjects": [], "performance": {}}


def test_requires_a_teacher_id(db_session):
    """A DatabaseService cannot be built without a tenant."""
    with pytest.raises(ValueError):
        DatabaseService(db_session, "")


def test_add_student_stamps_owner_and_id(db_service, teacher):
    saved = db_service.add_student(_student("Asha"))
    assert saved["id"].startswith("stu_")
    assert saved["teacherId"] == teacher.id
    assert db_service.get_student_by_id(saved["id"])["name"] == "Asha"


def test_add_student_ignores_a_forged_teacher_id(db_service, teacher):
    """The tenant comes from the service, never from the record."""
    record = _student("Asha")
    record["teacherId"] = "tch_someone_else"
    saved = db_service.add_student(record)
    assert saved["teacherId"] == teacher.id


def test_get_students_orders_by_name(db_service):
    for name in ["Meena", "Arjun", "Kabir"]:
        db_service.add_student(_student(name))
    assert [s["name"] for s in db_service.get_students()] == ["Arjun", "Kabir", "Meena"]


def test_other_teacher_cannot_see_or_touch_students(db_service, other_db_service):
    """
    GIVEN a student owned by teacher A
    WHEN teacher B lists, reads, updates or deletes it
    THEN B sees nothing and A's record is unchanged.
    """
    student = db_service.add_student(_student("Asha"))

    assert other_db_service.get_students() == []
    assert other_db_service.get_student_by_id(student["id"]) is None
    assert other_db_service.update_student(student["id"], {"name": "Hacked"}) is None
    assert other_db_service.delete_student(student["id"]) is False
    assert other_db_service.save_assessment({
        "studentId": student["id"], "type": "reading", "subject": "reading", "score": 90,
    }) is None

    assert db_service.get_student_by_id(student["id"])["name"] == "Asha"
    print("\n✅ SUCCESS: test_other_teacher_cannot_see_or_touch_students passed.")


def test_update_student_sets_updated_at(db_service):
    student = db_service.add_student(_student("Asha"))
    updated = db_service.update_student(student["id"], {"grade": "4", "performance": {"math": 88.0}})
    assert updated["grade"] == "4"
    assert updated["performance"] == {"math": 88.0}
    assert updated["updatedAt"] is not None


def test_update_never_changes_the_owner(db_service, teacher):
    student = db_service.add_student(_student("Asha"))
    updated = db_service.update_student(student["id"], {"teacherId": "tch_other", "id": "stu_other"})
    assert updated["teacherId"] == teacher.id
    assert updated["id"] == student["id"]


def test_save_assessment_stamps_last_assessment(db_service):
    student = db_service.add_student(_student("Asha"))
    assert student["lastAssessment"] is None

    assessment = db_service.save_assessment({
        "studentId": student["id"], "type": "reading", "subject": "reading",
        "score": 87, "feedback": "Good", "metadata": {"fluency": 80},
    })

    assert assessment["id"].startswith("asm_")
    assert assessment["metadata"] == {"fluency": 80}
    assert db_service.get_student_by_id(student["id"])["lastAssessment"] is not None


def test_delete_student_cascades_to_assessments(db_service):
    """
    GIVEN a student with two assessments
    WHEN the student is deleted
    THEN neither the student nor any of its assessments remain.
    """
    student = db_service.add_student(_student("Asha", roll="12"))
    keeper = db_service.add_student(_student("Kabir", roll="13"))
    for score in (70, 90):
        db_service.save_assessment({"studentId": student["id"], "type": "reading", "subject": "reading", "score": score})
    db_service.save_assessment({"studentId": keeper["id"], "type": "reading", "subject": "reading", "score": 60})

    assert db_service.delete_student(student["id"]) is True

    assert db_service.get_student_by_id(student["id"]) is None
    assert db_service.get_assessments(student["id"]) == []
    remaining = db_service.get_assessments()
    assert [a["studentId"] for a in remaining] == [keeper["id"]]


def test_generated_content_is_newest_first_and_filterable(db_service):
    db_service.save_generated_content({"type": "story", "title": "Old", "content": "a", "createdAt": "2024-01-01T00:00:00+00:00"})
    db_service.save_generated_content({"type": "worksheet", "title": "Mid", "content": "b", "createdAt": "2024-02-01T00:00:00+00:00"})
    db_service.save_generated_content({"type": "story", "title": "New", "content": "c", "createdAt": "2024-03-01T00:00:00+00:00"})

    assert [c["title"] for c in db_service.get_generated_content()] == ["New", "Mid", "Old"]
    assert [c["title"] for c in db_service.get_generated_content("story")] == ["New", "Old"]


def test_generated_content_listing_is_capped_at_fifty(db_service):
    for i in range(55):
        db_service.save_generated_content({"type": "story", "title": f"Story {i}", "content": "text"})
    assert len(db_service.get_generated_content()) == 50


def test_lesson_plan_defaults_to_draft(db_service):
    plan = db_service.save_lesson_plan({"title": "Fractions", "subject": "math", "grade": "4"})
    assert plan["status"] == "draft"
    assert plan["id"].startswith("lp_")

    updated = db_service.update_lesson_plan(plan["id"], {"status": "active"})
    assert updated["status"] == "active"
    assert db_service.delete_lesson_plan(plan["id"]) is True
    assert db_service.get_lesson_plans() == []


def test_existing_client_refs_only_reports_known_refs(db_service):
    db_service.add_student({**_student("Asha"), "clientRef": "ref-1"})
    assert db_service.existing_client_refs("students", ["ref-1", "ref-2", None]) == {"ref-1"}
    assert db_service.get_by_client_ref("students", "ref-1")["name"] == "Asha"
