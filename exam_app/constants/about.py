"""Static metadata describing ExamQt."""

APP_NAME = "ExamQt"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "ExamQt is a timed test player for students built with Qt and FastAPI. "
    "Answers are collected locally and handed to the test service once when the attempt ends."
)

HELP_TEXT = (
    "Navigate freely between questions with Previous/Next or the numbered buttons. "
    "Answers are kept as you type or select them. The test is submitted automatically "
    "when the clock reaches zero.\n\n"
    "Tests are authored as .txt files:\n\n"
    "TITLE: Angles\nDURATION: 10\n\n"
    "Q: What is $30^o$ in radians?\n"
    "A: \\frac{\\pi}{2}\nB: \\frac{\\pi}{6}\nC: \\frac{\\pi}{3}\n"
    "CORRECT: B\nMARKS: 2\nNEGATIVE: 1\n\n"
    "Q: Explain what a radian is.\nTYPE: Short Answer\nMARKS: 3"
)
