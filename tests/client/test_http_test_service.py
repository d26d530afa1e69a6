"""
Unit Tests for HttpTestService

The HTTP client is driven against the real FastAPI app through TestClient, and
against httpx.MockTransport for transport-level failures.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from exam_app.client.http_test_service import HttpTestService
from exam_app.core.errors import NotFoundError, SubmissionRejectedError, TestServiceError
from exam_app.core.models import QuestionOutcome, Submission, SubmissionState
from exam_app.core.session_controller import SessionPhase, TestSessionController
from exam_app.server.api_server import create_api_app


@pytest.fixture
def http_service(service) -> HttpTestService:
    return HttpTestService(client=TestClient(create_api_app(service)))


def mock_service(handler) -> HttpTestService:
    client = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://exam.test")
    return HttpTestService(client=client)


def forward(app_client: TestClient, request: httpx.Request) -> httpx.Response:
    """Replay a mock-transport request against the real app."""
    response = app_client.request(
        request.method,
        request.url.path,
        params=request.url.params,
        content=request.content,
        headers={"content-type": "application/json"},
    )
    return httpx.Response(
        response.status_code,
        content=response.content,
        headers={"content-type": response.headers["content-type"]},
    )


# ─────────────────────────────────────────────────────────────────────────────
# Against the API server
# ─────────────────────────────────────────────────────────────────────────────


class TestAgainstServer:
    """Tests for the client talking to the real app."""

    def test_fetch_attemptable_test_when_published_then_domain_test(self, http_service, mcq_test):
        test = http_service.fetch_attemptable_test("t1", "s1")
        assert test.id == "t1"
        assert test.duration_minutes == mcq_test.duration_minutes
        assert [q.options for q in test.questions] == [q.options for q in mcq_test.questions]
        assert all(q.correct_option_index is None for q in test.questions)

    def test_fetch_attemptable_test_when_unknown_then_not_found(self, http_service):
        with pytest.raises(NotFoundError, match="not found"):
            http_service.fetch_attemptable_test("missing", "s1")

    def test_fetch_existing_submission_when_none_then_none(self, http_service):
        assert http_service.fetch_existing_submission("t1", "s1") is None

    def test_submit_attempt_when_accepted_then_status(self, http_service):
        status = http_service.submit_attempt(Submission("t1", "s1", {"q1": 1, "q2": 2}, 75))
        assert status.state is SubmissionState.GRADED
        assert status.score == 2
        assert status.time_taken_seconds == 75
        assert status.results[1].outcome is QuestionOutcome.INCORRECT
        assert http_service.fetch_existing_submission("t1", "s1").score == 2

    def test_submit_attempt_when_free_text_answer_then_sent_as_string(self, http_service, service):
        http_service.submit_attempt(Submission("mixed", "s1", {"q1": 1, "q2": "42"}, 10))
        graded = service.grade_submission("mixed", "s1", {"q2": 5})
        assert graded.score == 7

    def test_submit_attempt_when_duplicate_then_rejected(self, http_service):
        http_service.submit_attempt(Submission("t1", "s1", {}, 10))
        with pytest.raises(SubmissionRejectedError, match="already"):
            http_service.submit_attempt(Submission("t1", "s1", {}, 10))

    def test_controller_when_driven_over_http_then_graded(self, http_service, clock_factory):
        """The attempt engine works unchanged against the HTTP client."""
        controller = TestSessionController(http_service, "t1", "s1", clock_factory=clock_factory)
        assert controller.enter() is SessionPhase.IN_PROGRESS
        controller.attempt.answer("q1", 1)
        controller.submit()
        assert controller.phase is SessionPhase.GRADED
        assert controller.status.score == 2


# ─────────────────────────────────────────────────────────────────────────────
# Transport failures
# ─────────────────────────────────────────────────────────────────────────────


class TestFailures:
    """Tests for mapping HTTP failures onto service errors."""

    def test_request_when_connection_fails_then_test_service_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TestServiceError, match="Unable to reach"):
            mock_service(handler).fetch_attemptable_test("t1", "s1")

    def test_request_when_server_error_then_detail_in_message(self):
        service = mock_service(lambda request: httpx.Response(500, json={"detail": "database down"}))
        with pytest.raises(TestServiceError, match="database down") as excinfo:
            service.fetch_existing_submission("t1", "s1")
        assert not isinstance(excinfo.value, (NotFoundError, SubmissionRejectedError))

    def test_request_when_error_without_json_then_fallback_message(self):
        service = mock_service(lambda request: httpx.Response(503, text="<html>busy</html>"))
        with pytest.raises(TestServiceError, match="503"):
            service.fetch_existing_submission("t1", "s1")

    def test_request_when_body_not_json_then_test_service_error(self):
        service = mock_service(lambda request: httpx.Response(200, text="not json"))
        with pytest.raises(TestServiceError, match="unreadable"):
            service.fetch_attemptable_test("t1", "s1")

    @pytest.mark.parametrize(
        "call",
        [
            lambda svc: svc.fetch_attemptable_test("t1", "s1"),
            lambda svc: svc.fetch_existing_submission("t1", "s1"),
            lambda svc: svc.submit_attempt(Submission("t1", "s1", {}, 5)),
        ],
        ids=["fetch_test", "fetch_submission", "submit"],
    )
    def test_request_when_json_has_wrong_shape_then_test_service_error(self, call):
        """Valid JSON that is not the expected payload is reported like any bad response."""
        service = mock_service(lambda request: httpx.Response(200, json={"unexpected": True}))
        with pytest.raises(TestServiceError, match="unreadable") as excinfo:
            call(service)
        assert not isinstance(excinfo.value, (NotFoundError, SubmissionRejectedError))

    def test_controller_when_wrong_shape_on_submit_then_retry_offered(self, service, clock_factory):
        """A garbled acknowledgement leaves the attempt retryable instead of crashing."""
        app_client = TestClient(create_api_app(service))

        def handler(request):
            if request.method == "POST":
                return httpx.Response(201, json=[1, 2, 3])
            return forward(app_client, request)

        controller = TestSessionController(mock_service(handler), "t1", "s1", clock_factory=clock_factory)
        controller.enter()
        controller.submit()
        assert isinstance(controller.submit_error, TestServiceError)
        assert controller.is_submitting is False
        assert controller.phase is SessionPhase.IN_PROGRESS

    def test_controller_when_submit_response_lost_then_retry_shows_stored_result(self, service, clock_factory):
        """The server kept the first send; the 409 on retry resolves to its status."""
        calls = {"post": 0}
        app_client = TestClient(create_api_app(service))

        def handler(request):
            response = forward(app_client, request)
            if request.method == "POST" and calls["post"] == 0:
                calls["post"] += 1
                raise httpx.ReadTimeout("timed out", request=request)
            return response

        controller = TestSessionController(mock_service(handler), "t1", "s1", clock_factory=clock_factory)
        controller.enter()
        controller.attempt.answer("q1", 1)
        controller.submit()
        assert isinstance(controller.submit_error, TestServiceError)
        assert service.fetch_existing_submission("t1", "s1") is not None
        assert controller.retry_submit() is True
        assert controller.submit_error is None
        assert controller.phase is SessionPhase.GRADED
        assert controller.status.score == 2

    def test_controller_when_submit_transport_fails_then_retry_possible(self, service, clock_factory):
        """A network failure on submit keeps the snapshot for a retry."""
        calls = {"post": 0}
        app_client = TestClient(create_api_app(service))

        def handler(request):
            if request.method == "POST" and calls["post"] == 0:
                calls["post"] += 1
                raise httpx.ReadTimeout("timed out", request=request)
            return forward(app_client, request)

        controller = TestSessionController(mock_service(handler), "t1", "s1", clock_factory=clock_factory)
        controller.enter()
        controller.attempt.answer("q1", 1)
        controller.submit()
        assert isinstance(controller.submit_error, TestServiceError)
        assert controller.retry_submit() is True
        assert controller.phase is SessionPhase.GRADED


class TestConstruction:
    """Tests for client ownership."""

    def test_init_when_no_url_or_client_then_value_error(self):
        with pytest.raises(ValueError):
            HttpTestService()

    def test_close_when_client_injected_then_left_open(self):
        client = httpx.Client(base_url="http://exam.test")
        HttpTestService(client=client).close()
        assert client.is_closed is False
        client.close()

    def test_close_when_owned_client_then_closed(self):
        service = HttpTestService("http://exam.test")
        service.close()
        assert service._client.is_closed is True
