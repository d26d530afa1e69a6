"""Turns exam question text into the HTML page shown beside the answer controls.

Teachers write question stems and MCQ options as Markdown with ``$...$`` or
``$$...$$`` math. The page carries the stem followed by the lettered options
and loads MathJax, which typesets the math once ``QWebEngineView`` shows it.
Raw HTML in question text is escaped unless ``enable_html`` is set.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import html
from typing import Sequence

from markdown_it import MarkdownIt

from exam_app.constants.about import APP_NAME

_MATHJAX_SCRIPT = "https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js"
_OPTION_LETTERS = "ABCD"
EMPTY_QUESTION_HTML = "<p><em>No question text.</em></p>"


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Renders question stems and options for the attempt view."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        text = markdown_text.strip()
        if not text:
            return EMPTY_QUESTION_HTML
        return self._markdown.render(text)

    def render_question_page(
        self,
        question_text: str,
        options: Sequence[str] = (),
        font_size: int = 14,
    ) -> str:
        """Stem plus lettered options in one page, so math in options is typeset too.

        The radio buttons under the view only carry the letters.
        """
        parts = [self.render_fragment(question_text)]
        for letter, option in zip(_OPTION_LETTERS, options):
            parts.append(self._markdown.render(f"**{letter}.** {option.strip() or '(empty)'}"))
        return self.wrap_with_mathjax("".join(parts), font_size=font_size)

    def wrap_with_mathjax(self, body_html: str, title: str = APP_NAME, font_size: int = 14) -> str:
        return f"""<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <title>{html.escape(title)}</title>
    <style>
      body {{ font-family: 'Segoe UI', system-ui, sans-serif; margin: 0; padding: 0.5rem; background: transparent; }}
      .question-html {{ font-size: {font_size}pt; line-height: 1.5; }}
    </style>
    <script>
      window.MathJax = {{ tex: {{ inlineMath: [['$','$']], displayMath: [['$$','$$']] }} }};
    </script>
    <script defer src="{_MATHJAX_SCRIPT}"></script>
  </head>
  <body>
    <div class="question-html">{body_html}</div>
  </body>
</html>"""


# Used by the attempt panel on the Qt thread only.
renderer = MarkdownMathRenderer()
