"""Question rendering utilities for the attempt view."""

from __future__ import annotations

from exam_app.core.markdown_math_renderer import renderer
from exam_app.core.models import Question


def render_question(question: Question, font_size: int = 14) -> str:
    """Render a question and its lettered options as a MathJax-ready HTML document."""
    return renderer.render_question_page(question.text, question.options, font_size=font_size)
