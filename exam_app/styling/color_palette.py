"""Color palette for the ExamQt client supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    TEXT_PRIMARY = ThemeColors(light="#111827", dark="#F5F5F5")
    TEXT_MUTED = ThemeColors(light="#6B7280", dark="#9CA3AF")

    BACKGROUND_PRIMARY = ThemeColors(light="#FFFFFF", dark="#1E1E1E")
    BACKGROUND_SECONDARY = ThemeColors(light="#F3F4F6", dark="#2D2D2D")

    ACCENT_PRIMARY = ThemeColors(light="#2563EB", dark="#60A5FA")
    ACCENT_TEXT = ThemeColors(light="#FFFFFF", dark="#000000")

    # Navigator chips
    ANSWERED_BG = ThemeColors(light="#DCFCE7", dark="#14532D")
    ANSWERED_TEXT = ThemeColors(light="#15803D", dark="#86EFAC")

    # Timer
    TIMER_NORMAL = ThemeColors(light="#1D4ED8", dark="#93C5FD")
    TIMER_URGENT_BG = ThemeColors(light="#FEE2E2", dark="#7F1D1D")
    TIMER_URGENT_TEXT = ThemeColors(light="#DC2626", dark="#FCA5A5")

    SUCCESS = ThemeColors(light="#16A34A", dark="#4ADE80")
    WARNING = ThemeColors(light="#CA8A04", dark="#FACC15")
    ERROR = ThemeColors(light="#DC2626", dark="#F87171")

    BORDER_PRIMARY = ThemeColors(light="#D1D5DB", dark="#555555")
