# /tests/test_lesson_plans_router.py


def test_lesson_plan_crud(client, auth_headers):
    headers = auth_headers()

    created = client.post("/api/lesson-plans", json={
        "title": "Plants around us", "subject": "science", "grade": "3",
        "week": "Week 2", "objectives": ["Name parts of a plant"],
    }, headers=headers)
    assert created.status_code == 201
    plan = created.json()
    assert plan["status"] == "draft"

    updated = client.put(f"/api/lesson-plans/{plan['id']}", json={"status": "active"}, headers=headers)
    assert updated.status_code == 200
    assert updated.json()["status"] == "active"

    assert [p["title"] for p in client.get("/api/lesson-plans", headers=headers).json()] == ["Plants around us"]
    assert client.delete(f"/api/lesson-plans/{plan['id']}", headers=headers).status_code == 204
    assert client.get("/api/lesson-plans", headers=headers).json() == []


def test_unknown_lesson_plan_is_404(client, auth_headers):
    headers = auth_headers()
    assert client.put("/api/lesson-plans/lp_missing", json={"title": "x"}, headers=headers).status_code == 404
    assert client.delete("/api/lesson-plans/lp_missing", headers=headers).status_code == 404


def test_sync_routes_report_the_queue(client, auth_headers):
    headers = auth_headers()

    status = client.post("/api/sync/offline", headers=headers).json()
    assert status["forcedOffline"] is True
    client.post("/api/lesson-plans", json={"title": "Fractions", "subject": "math", "grade": "4"}, headers=headers)
    assert client.get("/api/sync/status", headers=headers).json()["pending"]["offline_lesson_plans"] == 1

    report = client.post("/api/sync/online", headers=headers).json()

    assert report["synced"] == {"offline_lesson_plans": 1}
    assert report["remaining"] == 0
    assert client.get("/api/lesson-plans", headers=headers).json()[0]["title"] == "Fractions"
