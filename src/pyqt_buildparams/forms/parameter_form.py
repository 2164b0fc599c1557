"""Build parameters form widget hosting a ParameterFormController."""

import logging
from typing import Callable, List, Optional

from PyQt6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

from pyqt_buildparams.theming import ColorScheme
from .parameter_form_controller import ParameterFormController
from .widget_factory import WidgetFactory

logger = logging.getLogger(__name__)

SUBMIT_BUTTON_TEXT = "Build workspace"
FIELD_SPACING = 16
SUBMIT_TOP_PADDING = 24
SUBMIT_BOTTOM_PADDING = 8


class BuildParametersForm(QWidget):
    """
    One input per ephemeral parameter plus a submit button.

    Each widget's change signal commits into the controller by index.
    Clicking the submit button calls ``on_submit`` with no arguments;
    the owner decides what submitting means.
    """

    def __init__(
        self,
        controller: ParameterFormController,
        on_submit: Callable[[], None],
        color_scheme: Optional[ColorScheme] = None,
        widget_factory: Optional[WidgetFactory] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.setObjectName("build-parameters-form")
        self.controller = controller
        self._on_submit = on_submit
        self.color_scheme = color_scheme or ColorScheme()
        self._factory = widget_factory or WidgetFactory()
        self.widgets: List[QWidget] = []
        self.setup_ui()

    def setup_ui(self):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(FIELD_SPACING)

        for index, definition in enumerate(self.controller.definitions):
            layout.addWidget(self._create_field(index, definition))

        self.submit_button = QPushButton(SUBMIT_BUTTON_TEXT)
        self.submit_button.setObjectName("build-parameters-submit")
        self.submit_button.setStyleSheet(self.color_scheme.button_style())
        self.submit_button.clicked.connect(self._handle_submit)
        button_box = QWidget()
        button_layout = QVBoxLayout(button_box)
        button_layout.setContentsMargins(0, SUBMIT_TOP_PADDING, 0, SUBMIT_BOTTOM_PADDING)
        button_layout.addWidget(self.submit_button)
        layout.addWidget(button_box)

    def _create_field(self, index: int, definition) -> QWidget:
        helpers = self.controller.field_helpers(index)

        field = QWidget()
        field_layout = QVBoxLayout(field)
        field_layout.setContentsMargins(0, 0, 0, 0)
        field_layout.setSpacing(4)

        label = QLabel(definition.label)
        label.setStyleSheet(f"color: {self.color_scheme.to_hex(self.color_scheme.text_primary)}; font-weight: bold;")
        field_layout.addWidget(label)

        widget = self._factory.create_widget(definition)
        widget.setObjectName(helpers.id)
        # Pre-fill before connecting so autofilled values keep their provenance
        widget.set_value(helpers.value)
        widget.connect_change_signal(lambda value, i=index: self.controller.set_value(i, value))
        label.setBuddy(widget)
        field_layout.addWidget(widget)
        self.widgets.append(widget)

        if helpers.helper_text:
            helper = QLabel(helpers.helper_text)
            helper.setWordWrap(True)
            helper.setStyleSheet(f"color: {self.color_scheme.to_hex(self.color_scheme.text_secondary)};")
            field_layout.addWidget(helper)

        return field

    def _handle_submit(self):
        logger.debug(f"Submit clicked with {len(self.controller)} field(s)")
        self._on_submit()
