"""FastAPI server exposing the test service to students and teachers."""

from __future__ import annotations

import logging
from threading import Thread
import time

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import PlainTextResponse
import uvicorn

from exam_app.constants.about import APP_NAME, APP_VERSION
from exam_app.constants.network_constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    SERVER_STARTUP_TIMEOUT_SECONDS,
)
from exam_app.core.errors import NotFoundError, SubmissionRejectedError
from exam_app.core.models import SubmissionStatus
from exam_app.core.results_exporter import export_results_csv
from exam_app.core.services.test_service import InMemoryTestService
from exam_app.core.test_exporter import serialize_test
from exam_app.server.schemas import (
    GradePayload,
    StudentTestPayload,
    SubmissionPayload,
    SubmissionStatusPayload,
    SubmissionSummaryPayload,
    TestPayload,
)

logger = logging.getLogger(__name__)

STATUS_NOT_STARTED = "not_started"


def _get_service_dependency(service: InMemoryTestService):
    def dependency() -> InMemoryTestService:
        return service

    return dependency


def _status_label(status: SubmissionStatus | None) -> str:
    if status is None:
        return STATUS_NOT_STARTED
    return status.state.value


def create_api_app(service: InMemoryTestService) -> FastAPI:
    """Create a FastAPI application wired to the provided test service."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    service_dep = _get_service_dependency(service)

    @app.get("/tests")
    def list_tests(
        student_id: str,
        svc: InMemoryTestService = Depends(service_dep),
    ) -> list[StudentTestPayload]:
        return [
            StudentTestPayload(
                id=entry.test.id,
                title=entry.test.title,
                description=entry.test.description,
                duration_minutes=entry.test.duration_minutes,
                question_count=entry.test.question_count,
                total_marks=entry.test.total_marks,
                status=_status_label(entry.status),
            )
            for entry in svc.list_student_tests(student_id)
        ]

    @app.get("/tests/{test_id}")
    def get_test(
        test_id: str,
        student_id: str,
        svc: InMemoryTestService = Depends(service_dep),
    ) -> TestPayload:
        try:
            test = svc.fetch_attemptable_test(test_id, student_id)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return TestPayload.from_domain(test)

    @app.get("/tests/{test_id}/submissions/{student_id}")
    def get_submission(
        test_id: str,
        student_id: str,
        svc: InMemoryTestService = Depends(service_dep),
    ) -> SubmissionStatusPayload | None:
        status = svc.fetch_existing_submission(test_id, student_id)
        if status is None:
            return None
        return SubmissionStatusPayload.from_domain(status)

    @app.post("/tests/{test_id}/submissions", status_code=201)
    def submit_attempt(
        test_id: str,
        payload: SubmissionPayload,
        svc: InMemoryTestService = Depends(service_dep),
    ) -> SubmissionStatusPayload:
        if payload.test_id is not None and payload.test_id != test_id:
            raise HTTPException(status_code=422, detail="Test id in body does not match the URL.")
        try:
            status = svc.submit_attempt(payload.to_domain(test_id))
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except SubmissionRejectedError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return SubmissionStatusPayload.from_domain(status)

    @app.post("/tests/{test_id}/submissions/{student_id}/grade")
    def grade_submission(
        test_id: str,
        student_id: str,
        payload: GradePayload,
        svc: InMemoryTestService = Depends(service_dep),
    ) -> SubmissionStatusPayload:
        try:
            status = svc.grade_submission(test_id, student_id, payload.awarded)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except SubmissionRejectedError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        return SubmissionStatusPayload.from_domain(status)

    @app.get("/tests/{test_id}/submissions")
    def list_submissions(
        test_id: str,
        svc: InMemoryTestService = Depends(service_dep),
    ) -> list[SubmissionSummaryPayload]:
        try:
            rows = svc.list_submissions(test_id)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return [SubmissionSummaryPayload.from_domain(row) for row in rows]

    @app.get("/tests/{test_id}/results.csv", response_class=PlainTextResponse)
    def export_results(
        test_id: str,
        svc: InMemoryTestService = Depends(service_dep),
    ) -> str:
        try:
            rows = svc.list_submissions(test_id)
        except NotFoundError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return export_results_csv(rows)

    @app.get("/tests/{test_id}/export.txt", response_class=PlainTextResponse)
    def export_test(
        test_id: str,
        svc: InMemoryTestService = Depends(service_dep),
    ) -> str:
        """The full test, answer key included, in the text import format."""
        test = svc.get_test(test_id)
        if test is None:
            raise HTTPException(status_code=404, detail=f"Test '{test_id}' not found.")
        return serialize_test(test)

    return app


def start_api_server(
    service: InMemoryTestService,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(service)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="ExamApiServer", daemon=True)
    thread.start()

    deadline = time.monotonic() + SERVER_STARTUP_TIMEOUT_SECONDS
    while not server.started and thread.is_alive() and time.monotonic() < deadline:
        time.sleep(0.05)
    if server.started:
        logger.info("API server listening on http://%s:%s", host, port)
    else:
        logger.warning("API server on %s:%s did not report startup", host, port)
    return thread
