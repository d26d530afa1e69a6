"""Centralized stylesheets for the student client."""

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.BACKGROUND_SECONDARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:checked {{
                background-color: {ColorPalette.ACCENT_PRIMARY.get(theme)};
                color: {ColorPalette.ACCENT_TEXT.get(theme)};
            }}
            QPushButton:disabled {{
                color: {ColorPalette.TEXT_MUTED.get(theme)};
            }}
            QPlainTextEdit {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 4px;
            }}
        """

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_muted_label_style(theme: Theme = Theme.LIGHT) -> str:
        return f"color: {ColorPalette.TEXT_MUTED.get(theme)};"

    @staticmethod
    def get_timer_style(urgent: bool, theme: Theme = Theme.LIGHT) -> str:
        base = "font-size: 18pt; font-weight: bold; padding: 4px 10px; border-radius: 6px;"
        if urgent:
            return (
                base
                + f" color: {ColorPalette.TIMER_URGENT_TEXT.get(theme)};"
                + f" background-color: {ColorPalette.TIMER_URGENT_BG.get(theme)};"
            )
        return base + f" color: {ColorPalette.TIMER_NORMAL.get(theme)};"

    @staticmethod
    def get_navigator_style(answered: bool, theme: Theme = Theme.LIGHT) -> str:
        if not answered:
            return "min-width: 32px;"
        return (
            "min-width: 32px;"
            f" background-color: {ColorPalette.ANSWERED_BG.get(theme)};"
            f" color: {ColorPalette.ANSWERED_TEXT.get(theme)};"
        )

    @staticmethod
    def get_score_style(percentage: int, theme: Theme = Theme.LIGHT) -> str:
        if percentage >= 80:
            color = ColorPalette.SUCCESS
        elif percentage >= 50:
            color = ColorPalette.WARNING
        else:
            color = ColorPalette.ERROR
        return f"font-size: 28pt; font-weight: bold; color: {color.get(theme)};"
