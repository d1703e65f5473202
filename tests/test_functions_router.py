# /tests/test_functions_router.py

GEMINI = "app.services.gemini_service"


def test_callable_returns_result_envelope(client, mocker):
    mocker.patch(f"{GEMINI}.generate_text", return_value="Once upon a time...")

    response = client.post("/functions/generateStory", json={"data": {"prompt": "A monsoon day", "grade": "2"}})

    assert response.status_code == 200
    assert response.json() == {"result": {"story": "Once upon a time..."}}


def test_unknown_callable_is_not_found(client):
    response = client.post("/functions/generatePoem", json={"data": {}})

    assert response.status_code == 404
    assert response.json()["error"]["status"] == "NOT_FOUND"


def test_invalid_arguments_are_rejected(client, mocker):
    mock_text = mocker.patch(f"{GEMINI}.generate_text")

    response = client.post("/functions/translateContent", json={"data": {"text": "Hello"}})

    assert response.status_code == 400
    assert response.json()["error"]["status"] == "INVALID_ARGUMENT"
    mock_text.assert_not_called()


def test_body_must_be_a_json_object(client):
    response = client.post("/functions/generateStory", content=b"not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400

    response = client.post("/functions/generateStory", json={"data": ["a", "b"]})
    assert response.status_code == 400


def test_generation_failure_maps_to_internal(client, mocker):
    mocker.patch(f"{GEMINI}.generate_text", side_effect=RuntimeError("upstream timeout"))

    response = client.post("/functions/translateContent", json={"data": {"text": "Hello", "targetLanguage": "tamil"}})

    assert response.status_code == 500
    assert response.json() == {"error": {"status": "INTERNAL", "message": "Failed to generate translation."}}


def test_health_check_lists_callables(client):
    response = client.get("/healthCheck")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "OK"
    assert body["timestamp"].endswith("Z")
    assert body["services"]["database"] == "connected"
    assert "generateLearningPath" in body["endpoints"]
    assert len(body["endpoints"]) == 12
