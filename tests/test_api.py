"""Tests for the HTTP endpoints."""

from fastapi.testclient import TestClient

from class_responses.api.app import create_app
from class_responses.domain.errors import StorageError


def _client(container) -> TestClient:
    return TestClient(create_app(container))


def test_health(container) -> None:
    response = _client(container).get("/health")

    assert response.json() == {"status": "ok"}


def test_create_then_fetch_session(container) -> None:
    client = _client(container)

    session_id = client.post("/create").json()["id"]
    response = client.get(f"/data/{session_id}")

    assert response.status_code == 200
    data = response.json()
    assert data["id"] == session_id
    assert data["status"] == "draft"
    assert data["responses"] == [""] * 30
    assert data["expiresAt"] - data["createdAt"] == 30 * 24 * 60 * 60 * 1000


def test_fetch_unknown_session_returns_404(container) -> None:
    response = _client(container).get("/data/missing")

    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_save_responses_roundtrip(container) -> None:
    client = _client(container)
    session_id = client.post("/create").json()["id"]
    answers = [f"answer {index}" for index in range(30)]

    response = client.post(f"/save/{session_id}", json={"responses": answers})

    assert response.json() == {"success": True}
    assert client.get(f"/data/{session_id}").json()["responses"] == answers


def test_save_responses_unknown_session_still_succeeds(container) -> None:
    response = _client(container).post(
        "/save/missing", json={"responses": [""] * 30}
    )

    assert response.json() == {"success": True}


def test_save_responses_rejects_wrong_length(container) -> None:
    client = _client(container)
    session_id = client.post("/create").json()["id"]

    response = client.post(f"/save/{session_id}", json={"responses": ["a"]})

    assert response.status_code == 422


def test_export_session_downloads_pdf(container) -> None:
    client = _client(container)
    session_id = client.post("/create").json()["id"]

    response = client.get(f"/submit/{session_id}")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="session.pdf"' in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_export_unknown_session_returns_plain_text(container) -> None:
    response = _client(container).get("/submit/missing")

    assert response.status_code == 200
    assert response.text == "Not found"


def test_submit_response_flow(container) -> None:
    client = _client(container)

    first = client.post(
        "/submit-response/class-1", json={"name": "Alice", "response": "Hi"}
    )
    duplicate = client.post(
        "/submit-response/class-1", json={"name": " alice ", "response": "Again"}
    )
    missing = client.post("/submit-response/class-1", json={"name": "Bob"})

    assert first.json() == {"success": True}
    assert duplicate.status_code == 409
    assert duplicate.json() == {"error": "You already submitted"}
    assert missing.status_code == 400
    assert missing.json() == {"error": "Missing fields"}


def test_download_without_submissions_returns_plain_text(container) -> None:
    response = _client(container).get("/download/class-1")

    assert response.status_code == 200
    assert response.text == "No responses yet"
    assert not container.report_service.report_dir.exists()


def test_download_combined_report(container) -> None:
    client = _client(container)
    for name in ["bob", "Alice", "carol"]:
        client.post("/submit-response/class-1", json={"name": name, "response": "x"})

    response = client.get("/download/class-1")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert "class-class-1.pdf" in response.headers["content-disposition"]
    assert (container.report_service.report_dir / "class-class-1.pdf").exists()


def test_storage_failure_returns_500(container, monkeypatch) -> None:
    def fail() -> str:
        raise StorageError("Failed to create session")

    monkeypatch.setattr(container.session_service, "create_session", fail)

    response = _client(container).post("/create")

    assert response.status_code == 500
    assert response.json() == {"error": "Storage failure"}
