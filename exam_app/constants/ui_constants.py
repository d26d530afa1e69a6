"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "ExamQt Student"

LOADING_MESSAGE: str = "Loading test…"
NOT_FOUND_MESSAGE: str = "This test does not exist or is not available to you."

PREV_BUTTON: str = "Previous"
NEXT_BUTTON: str = "Next"
SUBMIT_BUTTON: str = "Submit Test"
SUBMITTING_BUTTON: str = "Submitting…"
RETRY_BUTTON: str = "Retry"
TIME_REMAINING_LABEL: str = "Time Remaining"
TEXT_ANSWER_PLACEHOLDER: str = "Type your answer here..."

SUBMIT_CONFIRM_TITLE: str = "Submit Test?"
SUBMIT_CONFIRM_TEMPLATE: str = (
    "You have answered {answered} out of {total} questions.\n"
    "Once submitted, you cannot change your answers."
)
SUBMIT_FAILED_TITLE: str = "Submission failed"
AUTO_SUBMIT_TITLE: str = "Time is up"
AUTO_SUBMIT_MESSAGE: str = "The time limit was reached and your answers were submitted."

PENDING_TITLE: str = "Submission received"
PENDING_MESSAGE: str = "Your answers are awaiting grading by your teacher. Check back later for results."
RESULTS_TITLE: str = "Test Results"

QUESTION_TYPE_HINTS: dict[str, str] = {
    "Essay": "Write a detailed answer (minimum 100 words recommended)",
    "Short Answer": "Write a brief answer (2-3 sentences)",
    "Very Short Answer": "Write a very short answer (1-2 words or a phrase)",
}
LOAD_FAILED_TITLE: str = "Unable to load test"
