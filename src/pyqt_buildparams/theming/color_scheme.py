"""
PyQt6 color scheme for the build parameters popover.

Semantic color names for the handful of surfaces the popover draws:
content text, dividers, links, buttons and the error banner.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class ColorScheme:
    """
    Semantic colors for popover content. Defaults are the dark theme.

    All text colors meet a 4.5:1 contrast ratio against ``panel_bg``.
    """

    # Backgrounds and separators
    panel_bg: Tuple[int, int, int] = (30, 30, 30)        # #1e1e1e - Popover background
    divider: Tuple[int, int, int] = (51, 51, 51)         # #333333 - Section dividers

    # Text hierarchy
    text_primary: Tuple[int, int, int] = (255, 255, 255)    # #ffffff - Labels, titles
    text_secondary: Tuple[int, int, int] = (204, 204, 204)  # #cccccc - Helper text
    text_link: Tuple[int, int, int] = (0, 170, 255)         # #00aaff - Links

    # Buttons
    button_bg: Tuple[int, int, int] = (64, 64, 64)       # #404040
    button_text: Tuple[int, int, int] = (255, 255, 255)  # #ffffff

    # Error banner
    error_bg: Tuple[int, int, int] = (90, 20, 20)        # #5a1414
    error_text: Tuple[int, int, int] = (255, 100, 100)   # #ff6464

    def to_hex(self, color_tuple: Tuple[int, int, int]) -> str:
        """
        Convert RGB tuple to hex color string.

        Args:
            color_tuple: RGB color tuple (r, g, b)

        Returns:
            str: Hex color string (e.g., "#ff0000")
        """
        r, g, b = color_tuple
        return f"#{r:02x}{g:02x}{b:02x}"

    def button_style(self) -> str:
        """Stylesheet for the popover's push buttons."""
        return (
            f"QPushButton {{ background-color: {self.to_hex(self.button_bg)}; "
            f"color: {self.to_hex(self.button_text)}; "
            f"padding: 6px 12px; border-radius: 4px; }}"
        )

    @classmethod
    def create_light_theme(cls) -> 'ColorScheme':
        """Light theme variant with dark text on a light panel."""
        return cls(
            panel_bg=(255, 255, 255),
            divider=(221, 221, 221),
            text_primary=(20, 20, 20),
            text_secondary=(85, 85, 85),
            text_link=(0, 102, 204),
            button_bg=(230, 230, 230),
            button_text=(20, 20, 20),
            error_bg=(253, 236, 236),
            error_text=(176, 0, 32),
        )
