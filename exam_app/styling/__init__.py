"""Styling module for the ExamQt student client."""

from .color_palette import ColorPalette, Theme

__all__ = ["ColorPalette", "Theme"]
