"""
Unit Tests for the FastAPI server

Endpoints exercised through FastAPI's TestClient against an in-memory service.
"""

import pytest
from fastapi.testclient import TestClient

from conftest import make_test, mcq
from exam_app.core.models import Submission
from exam_app.core.test_importer import parse_test_text
from exam_app.server.api_server import create_api_app


@pytest.fixture
def client(service) -> TestClient:
    return TestClient(create_api_app(service))


# ─────────────────────────────────────────────────────────────────────────────
# Student endpoints
# ─────────────────────────────────────────────────────────────────────────────


class TestStudentEndpoints:
    """Tests for the endpoints the attempt client uses."""

    def test_list_tests_when_published_then_status_per_test(self, client, service):
        service.add_test(make_test(mcq("q1"), test_id="draft", published=False))
        service.submit_attempt(Submission("mixed", "s1", {}, 10))
        response = client.get("/tests", params={"student_id": "s1"})
        assert response.status_code == 200
        by_id = {row["id"]: row for row in response.json()}
        assert set(by_id) == {"t1", "mixed"}
        assert by_id["t1"]["status"] == "not_started"
        assert by_id["mixed"]["status"] == "pending"
        assert by_id["t1"]["question_count"] == 3
        assert by_id["t1"]["total_marks"] == 4

    def test_get_test_when_published_then_redacted(self, client):
        response = client.get("/tests/t1", params={"student_id": "s1"})
        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "t1"
        assert len(body["questions"]) == 3
        assert all(q["correct_option_index"] is None for q in body["questions"])

    def test_get_test_when_unknown_then_404(self, client):
        response = client.get("/tests/missing", params={"student_id": "s1"})
        assert response.status_code == 404
        assert "not found" in response.json()["detail"]

    def test_get_submission_when_none_then_null(self, client):
        response = client.get("/tests/t1/submissions/s1")
        assert response.status_code == 200
        assert response.json() is None

    def test_submit_when_first_then_201_and_graded(self, client):
        response = client.post(
            "/tests/t1/submissions",
            json={"student_id": "s1", "answers": {"q1": 1}, "time_taken_seconds": 40},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["state"] == "graded"
        assert body["score"] == 2
        assert len(body["results"]) == 3
        status = client.get("/tests/t1/submissions/s1").json()
        assert status["score"] == 2

    def test_submit_when_free_text_then_pending_state(self, client):
        response = client.post(
            "/tests/mixed/submissions",
            json={"student_id": "s1", "answers": {"q2": "My essay"}, "time_taken_seconds": 40},
        )
        assert response.status_code == 201
        assert response.json()["state"] == "pending"
        assert response.json()["score"] is None

    def test_submit_when_duplicate_then_409(self, client):
        body = {"student_id": "s1", "answers": {}, "time_taken_seconds": 5}
        assert client.post("/tests/t1/submissions", json=body).status_code == 201
        response = client.post("/tests/t1/submissions", json=body)
        assert response.status_code == 409
        assert "already" in response.json()["detail"]

    def test_submit_when_unknown_test_then_404(self, client):
        body = {"student_id": "s1", "answers": {}, "time_taken_seconds": 5}
        assert client.post("/tests/missing/submissions", json=body).status_code == 404

    def test_submit_when_body_test_id_differs_then_422(self, client):
        body = {"test_id": "mixed", "student_id": "s1", "answers": {}, "time_taken_seconds": 5}
        assert client.post("/tests/t1/submissions", json=body).status_code == 422

    def test_submit_when_body_incomplete_then_422(self, client):
        assert client.post("/tests/t1/submissions", json={"student_id": "s1"}).status_code == 422


# ─────────────────────────────────────────────────────────────────────────────
# Teacher endpoints
# ─────────────────────────────────────────────────────────────────────────────


class TestTeacherEndpoints:
    """Tests for grading and results."""

    def test_grade_when_pending_then_graded(self, client, service):
        service.submit_attempt(Submission("mixed", "s1", {"q1": 1, "q2": "essay"}, 10))
        response = client.post("/tests/mixed/submissions/s1/grade", json={"awarded": {"q2": 4}})
        assert response.status_code == 200
        assert response.json()["state"] == "graded"
        assert response.json()["score"] == 6

    def test_grade_when_no_submission_then_404(self, client):
        response = client.post("/tests/mixed/submissions/nobody/grade", json={"awarded": {}})
        assert response.status_code == 404

    def test_grade_when_already_graded_then_409(self, client, service):
        service.submit_attempt(Submission("t1", "s1", {}, 10))
        response = client.post("/tests/t1/submissions/s1/grade", json={"awarded": {}})
        assert response.status_code == 409

    def test_grade_when_marks_invalid_then_422(self, client, service):
        service.submit_attempt(Submission("mixed", "s1", {"q2": "essay"}, 10))
        response = client.post("/tests/mixed/submissions/s1/grade", json={"awarded": {"q2": 50}})
        assert response.status_code == 422

    def test_list_submissions_when_submitted_then_rows(self, client, service):
        service.submit_attempt(Submission("t1", "s1", {"q1": 1}, 10))
        response = client.get("/tests/t1/submissions")
        assert response.status_code == 200
        rows = response.json()
        assert [row["student_id"] for row in rows] == ["s1"]
        assert rows[0]["score"] == 2

    def test_list_submissions_when_unknown_test_then_404(self, client):
        assert client.get("/tests/missing/submissions").status_code == 404

    def test_results_csv_when_submitted_then_plain_text(self, client, service):
        service.submit_attempt(Submission("t1", "s1", {"q1": 1}, 10))
        response = client.get("/tests/t1/results.csv")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        lines = response.text.splitlines()
        assert lines[0].startswith("Student ID,Score")
        assert lines[1].startswith("s1,2,4,10,")

    def test_export_test_when_known_then_text_format_with_key(self, client, service):
        """The download loads back as the stored test, answer key included."""
        service.add_test(make_test(mcq("q1", correct=2), test_id="draft", published=False))
        response = client.get("/tests/draft/export.txt")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "CORRECT: C" in response.text
        assert parse_test_text(response.text) == service.get_test("draft")

    def test_export_test_when_unknown_then_404(self, client):
        assert client.get("/tests/missing/export.txt").status_code == 404
