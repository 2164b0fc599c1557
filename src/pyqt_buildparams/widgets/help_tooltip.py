"""Help tooltip building blocks: title, body text and documentation links."""

import html
from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QLabel, QVBoxLayout, QWidget

from pyqt_buildparams.theming import ColorScheme


class HelpTooltipTitle(QLabel):
    """Bold heading of a help section."""

    def __init__(self, text: str, color_scheme: Optional[ColorScheme] = None, parent=None):
        super().__init__(text, parent)
        self.color_scheme = color_scheme or ColorScheme()
        font = QFont()
        font.setBold(True)
        self.setFont(font)
        self.setStyleSheet(f"color: {self.color_scheme.to_hex(self.color_scheme.text_primary)};")


class HelpTooltipText(QLabel):
    """Wrapped secondary-color body text."""

    def __init__(self, text: str, color_scheme: Optional[ColorScheme] = None, parent=None):
        super().__init__(text, parent)
        self.color_scheme = color_scheme or ColorScheme()
        self.setWordWrap(True)
        self.setStyleSheet(f"color: {self.color_scheme.to_hex(self.color_scheme.text_secondary)};")


class HelpTooltipLink(QLabel):
    """Clickable link that opens ``href`` in the system browser."""

    def __init__(self, text: str, href: str, color_scheme: Optional[ColorScheme] = None, parent=None):
        color_scheme = color_scheme or ColorScheme()
        link_color = color_scheme.to_hex(color_scheme.text_link)
        super().__init__(
            f'<a href="{html.escape(href, quote=True)}" style="color: {link_color};">'
            f'{html.escape(text)}</a>',
            parent,
        )
        self.href = href
        self.color_scheme = color_scheme
        self.setTextFormat(Qt.TextFormat.RichText)
        self.setTextInteractionFlags(Qt.TextInteractionFlag.TextBrowserInteraction)
        self.setOpenExternalLinks(True)
        self.setCursor(Qt.CursorShape.PointingHandCursor)


class HelpTooltipLinksGroup(QWidget):
    """Vertical group of HelpTooltipLink widgets."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 8, 0, 0)
        self._layout.setSpacing(4)

    def add_link(self, link: HelpTooltipLink) -> HelpTooltipLink:
        self._layout.addWidget(link)
        return link
