# /tests/test_dashboard.py

from app.services import dashboard_service


def test_stats_for_a_new_teacher_are_empty(data_service):
    stats = dashboard_service.get_teacher_stats(data_service)

    assert stats.totalContent == 0
    assert stats.totalStudents == 0
    assert stats.contentByType == {}
    assert stats.recentActivity == []


def test_stats_count_backend_and_queued_records(data_service):
    """
    GIVEN content, students, a lesson plan and an assessment, some queued offline
    WHEN the dashboard stats are computed
    THEN every record is counted once and recent activity is newest first.
    """
    for i, kind in enumerate(["story", "story", "worksheet", "visual-aid", "story", "worksheet"]):
        data_service.save_generated_content({
            "type": kind, "title": f"Item {i}", "content": "text",
            "createdAt": f"2024-01-0{i + 1}T08:00:00+00:00",
        })
    asha = data_service.add_student({"name": "Asha", "grade": "3", "rollNumber": "1"})
    data_service.add_student({"name": "Kabir", "grade": "4", "rollNumber": "2"})
    data_service.save_lesson_plan({"title": "Plants", "subject": "science", "grade": "3"})
    data_service.save_assessment({"studentId": asha["id"], "type": "reading", "subject": "reading", "score": 82})

    data_service.enable_offline_mode()
    data_service.add_student({"name": "Meena", "grade": "3", "rollNumber": "3"})
    data_service.save_generated_content({"type": "story", "title": "Queued", "content": "text"})

    stats = dashboard_service.get_teacher_stats(data_service)

    assert stats.totalContent == 7
    assert stats.totalStudents == 3
    assert stats.totalAssessments == 1
    assert stats.totalLessonPlans == 1
    assert stats.contentByType == {"story": 4, "worksheet": 2, "visual-aid": 1}
    assert stats.studentsByGrade == {"3": 2, "4": 1}
    assert len(stats.recentActivity) == 5
    assert stats.recentActivity[0].title == "Queued"
    assert [a.title for a in stats.recentActivity[1:]] == ["Item 5", "Item 4", "Item 3", "Item 2"]
    print("\n✅ SUCCESS: test_stats_count_backend_and_queued_records passed.")


def test_stats_route(client, auth_headers):
    headers = auth_headers()
    client.post("/api/students", json={"name": "Asha", "grade": "3", "rollNumber": "1"}, headers=headers)

    response = client.get("/api/dashboard/stats", headers=headers)

    assert response.status_code == 200
    assert response.json()["totalStudents"] == 1
