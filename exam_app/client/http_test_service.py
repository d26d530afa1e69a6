"""Test service implementation that talks to the exam API over HTTP."""

from __future__ import annotations

import logging
from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from exam_app.constants.network_constants import REQUEST_TIMEOUT_SECONDS
from exam_app.core.errors import NotFoundError, SubmissionRejectedError, TestServiceError
from exam_app.core.models import Submission, SubmissionStatus, TestDefinition
from exam_app.server.schemas import SubmissionPayload, SubmissionStatusPayload, TestPayload

logger = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class HttpTestService:
    """Synchronous client for the endpoints served by :mod:`exam_app.server.api_server`.

    Either ``base_url`` or a ready ``client`` must be given; an injected client
    is not closed by :meth:`close`.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        client: httpx.Client | None = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        if client is None and base_url is None:
            raise ValueError("HttpTestService needs a base_url or a client.")
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def fetch_attemptable_test(self, test_id: str, student_id: str) -> TestDefinition:
        data = self._request("GET", f"/tests/{test_id}", params={"student_id": student_id})
        return _decode(TestPayload, data).to_domain()

    def fetch_existing_submission(self, test_id: str, student_id: str) -> SubmissionStatus | None:
        data = self._request("GET", f"/tests/{test_id}/submissions/{student_id}")
        if data is None:
            return None
        return _decode(SubmissionStatusPayload, data).to_domain()

    def submit_attempt(self, submission: Submission) -> SubmissionStatus:
        payload = SubmissionPayload.from_domain(submission)
        data = self._request(
            "POST",
            f"/tests/{submission.test_id}/submissions",
            json=payload.model_dump(mode="json"),
        )
        return _decode(SubmissionStatusPayload, data).to_domain()

    def _request(self, method: str, url: str, **kwargs) -> object:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise TestServiceError("Unable to reach the exam server.") from exc

        if response.status_code == 404:
            raise NotFoundError(_detail(response, "Not found."))
        if response.status_code == 409:
            raise SubmissionRejectedError(_detail(response, "Submission rejected."))
        if response.is_error:
            logger.warning("%s %s returned HTTP %s", method, url, response.status_code)
            raise TestServiceError(_detail(response, f"Server error ({response.status_code})."))

        try:
            return response.json()
        except ValueError as exc:
            raise TestServiceError("Server sent an unreadable response.") from exc


def _decode(payload_type: type[PayloadT], data: object) -> PayloadT:
    try:
        return payload_type.model_validate(data)
    except ValidationError as exc:
        logger.warning("Response did not match %s: %s", payload_type.__name__, exc)
        raise TestServiceError("Server sent an unreadable response.") from exc


def _detail(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and isinstance(body.get("detail"), str):
        return body["detail"]
    return fallback
