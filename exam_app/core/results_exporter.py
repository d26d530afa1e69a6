"""CSV export of the submissions received for a test."""

from __future__ import annotations

import csv
import io

from exam_app.core.models import SubmissionSummary

RESULTS_HEADER = ("Student ID", "Score", "Total Marks", "Time Taken (s)", "Submitted At")


def export_results_csv(rows: list[SubmissionSummary]) -> str:
    """Render submission summaries as CSV; pending submissions leave Score blank."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(RESULTS_HEADER)
    for row in rows:
        writer.writerow(
            (
                row.student_id,
                "" if row.score is None else row.score,
                row.total_marks,
                row.time_taken_seconds,
                row.submitted_at.isoformat() if row.submitted_at else "",
            )
        )
    return buffer.getvalue()
