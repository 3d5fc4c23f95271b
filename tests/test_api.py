"""Tests for the FastAPI surface of the extractor."""

from __future__ import annotations

from unittest.mock import patch

from fastapi.testclient import TestClient

from journal_tasks.main import app, extractor

client = TestClient(app)
client_no_raise = TestClient(app, raise_server_exceptions=False)

REFERENCE_TIME = "2025-03-01T09:30:00"


class TestHealth:
    def test_health(self) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestExtractTasks:
    def test_extracts_tasks(self) -> None:
        response = client.post(
            "/extract-tasks",
            json={
                "text": "I have a meeting on 28th March 2025. The weather was nice today. Buy milk!",
                "reference_time": REFERENCE_TIME,
            },
        )
        assert response.status_code == 200
        tasks = response.json()["tasks"]
        assert [(task["text"], task["date"]) for task in tasks] == [
            ("I have a meeting on 28th March 2025", "2025-03-28"),
            ("Buy milk", "2025-03-02"),
        ]
        first = tasks[0]
        assert first["priority"] == "medium"
        assert first["source"] == "audio"
        assert first["completed"] is False
        assert first["id"].startswith("task_")

    def test_skips_existing_tasks(self) -> None:
        response = client.post(
            "/extract-tasks",
            json={
                "text": "Buy milk. Call the plumber.",
                "existing_tasks": ["buy milk"],
                "reference_time": REFERENCE_TIME,
            },
        )
        assert response.status_code == 200
        assert [task["text"] for task in response.json()["tasks"]] == ["Call the plumber"]

    def test_no_tasks(self) -> None:
        response = client.post("/extract-tasks", json={"text": "What a lovely evening."})
        assert response.status_code == 200
        assert response.json() == {"tasks": []}

    def test_empty_text_rejected(self) -> None:
        response = client.post("/extract-tasks", json={"text": ""})
        assert response.status_code == 422

    def test_missing_text_rejected(self) -> None:
        response = client.post("/extract-tasks", json={})
        assert response.status_code == 422

    def test_unexpected_failure_maps_to_500(self) -> None:
        with patch.object(extractor, "extract_tasks", side_effect=RuntimeError("boom")):
            response = client_no_raise.post("/extract-tasks", json={"text": "Buy milk"})
        assert response.status_code == 500
        assert response.json()["detail"] == "Internal error during extraction"
