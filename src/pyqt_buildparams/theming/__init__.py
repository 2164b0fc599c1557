"""
Theming for popover content.

Semantic color scheme shared by the popover views.
"""

from .color_scheme import ColorScheme

__all__ = [
    "ColorScheme",
]
