"""Exam-related constants shared across UI and core layers."""

SECONDS_PER_MINUTE: int = 60
URGENT_THRESHOLD_SECONDS: int = 300
CLOCK_POLL_INTERVAL_MS: int = 200
DEFAULT_STUDENT_ID: str = "student-1"
DEFAULT_TEST_FILE: str = "exam_test.txt"
CSV_IMPORT_DURATION_MINUTES: int = 30
