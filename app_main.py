"""Application entry point for the ExamQt student client."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from PySide6.QtWidgets import QApplication

from exam_app.client.http_test_service import HttpTestService
from exam_app.constants.exam_constants import DEFAULT_STUDENT_ID, DEFAULT_TEST_FILE
from exam_app.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from exam_app.core.errors import TestImportError
from exam_app.core.services.test_service import InMemoryTestService
from exam_app.core.session_controller import TestSessionController
from exam_app.core.test_importer import load_test_from_file
from exam_app.server.api_server import start_api_server
from exam_app.ui.dialog_helpers import show_error
from exam_app.ui.student_main_window import StudentMainWindow
from exam_app.utils.logging_config import configure_logging


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="ExamQt timed test player")
    parser.add_argument("--test-file", type=Path, default=Path(DEFAULT_TEST_FILE),
                        help="test (.txt or bulk .csv) to serve from the local API server")
    parser.add_argument("--test-id", default=None,
                        help="test to attempt (defaults to the id of --test-file)")
    parser.add_argument("--student-id", default=DEFAULT_STUDENT_ID)
    parser.add_argument("--server-url", default=None,
                        help="use a remote exam server instead of starting a local one")
    return parser.parse_args(argv)


def _auto_load_test(service: InMemoryTestService, path: Path, logger: logging.Logger) -> str | None:
    if not path.exists():
        logger.warning("Test file %s not found; the local server starts empty", path)
        return None
    imported = load_test_from_file(path)
    stored = service.add_test(imported.test)
    logger.info("Loaded %s (%s questions) as test '%s'", path, stored.question_count, stored.id)
    return stored.id


def main(argv: list[str] | None = None) -> None:
    """Initialize logging, start or reach the API server, and launch the Qt UI."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logger = configure_logging()
    logger.info("Starting ExamQt…")

    app = QApplication(sys.argv)

    test_id = args.test_id
    server_url = args.server_url
    if server_url is None:
        service = InMemoryTestService()
        try:
            loaded_id = _auto_load_test(service, args.test_file, logger)
        except (OSError, TestImportError, ValueError) as exc:
            show_error(None, "Import failed", str(exc))
            loaded_id = None
        test_id = test_id or loaded_id
        start_api_server(service, host=DEFAULT_HOST, port=DEFAULT_PORT)
        server_url = f"http://{DEFAULT_HOST}:{DEFAULT_PORT}"

    if not test_id:
        show_error(None, "No test", "Pass --test-id or a valid --test-file.")
        sys.exit(2)

    client = HttpTestService(server_url)
    controller = TestSessionController(client, test_id, args.student_id)
    window = StudentMainWindow(service=client, controller=controller)
    if not window.start():
        client.close()
        sys.exit(1)
    exit_code = app.exec()
    client.close()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
