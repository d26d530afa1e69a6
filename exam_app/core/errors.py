"""Exceptions raised at the boundary between the attempt engine and its collaborators."""

from __future__ import annotations


class TestServiceError(Exception):
    """A call to the test service failed; the user may retry."""

    __test__ = False


class NotFoundError(TestServiceError):
    """The test or submission does not exist or is not visible to this student."""


class SubmissionRejectedError(TestServiceError):
    """The test service declined a submission (already submitted, test closed, bad answers)."""


class TestImportError(Exception):
    """Raised when a test definition cannot be parsed."""

    __test__ = False
