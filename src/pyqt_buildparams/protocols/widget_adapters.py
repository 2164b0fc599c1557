"""
Widget adapters that wrap Qt widgets to implement the input ABCs.

Normalizes Qt's inconsistent APIs:
- QLineEdit.text() vs QComboBox.currentData() vs QCheckBox.isChecked()
- textChanged vs currentIndexChanged vs stateChanged

Build parameter values are strings on the wire, so every adapter reads
and writes strings.
"""

from abc import ABCMeta
from typing import Callable, Dict, Sequence

from PyQt6.QtCore import QObject, Qt
from PyQt6.QtWidgets import QCheckBox, QComboBox, QLineEdit

from pyqt_buildparams.forms.parameter_types import ParameterOption
from .widget_protocols import (
    ValueGettable, ValueSettable, PlaceholderCapable, ChangeSignalEmitter
)

# Order matters: Qt's metaclass first, ABCMeta adds abstract method checks
_QtMetaclass = type(QObject)

# Marks a combo item added for a value outside the option list
UNLISTED_ITEM_ROLE = Qt.ItemDataRole.UserRole + 1
UNLISTED_OPTION_SUFFIX = "(not an option)"


class PyQtWidgetMeta(_QtMetaclass, ABCMeta):
    """Metaclass for PyQt widgets that need ABC support."""
    pass


class _SlotBookkeeping:
    """Remembers the wrapper slot connected for each callback so it can be disconnected."""

    def _slots(self) -> Dict[Callable, Callable]:
        if not hasattr(self, "_connected_slots"):
            self._connected_slots = {}
        return self._connected_slots

    def _connect(self, signal, callback: Callable[[str], None]) -> None:
        slot = lambda *_: callback(self.get_value())
        self._slots()[callback] = slot
        signal.connect(slot)

    def _disconnect(self, signal, callback: Callable[[str], None]) -> None:
        slot = self._slots().pop(callback, None)
        if slot is None:
            return
        try:
            signal.disconnect(slot)
        except TypeError:
            # Signal not connected - ignore
            pass


class LineEditAdapter(QLineEdit, _SlotBookkeeping, ValueGettable, ValueSettable,
                      PlaceholderCapable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """Free-text parameter input."""

    _widget_id = "line_edit"

    def get_value(self) -> str:
        return self.text()

    def set_value(self, value: str) -> None:
        self.setText(value or "")

    def set_placeholder(self, text: str) -> None:
        self.setPlaceholderText(text)

    def connect_change_signal(self, callback: Callable[[str], None]) -> None:
        self._connect(self.textChanged, callback)

    def disconnect_change_signal(self, callback: Callable[[str], None]) -> None:
        self._disconnect(self.textChanged, callback)


class ComboBoxAdapter(QComboBox, _SlotBookkeeping, ValueGettable, ValueSettable,
                      PlaceholderCapable, ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Input for parameters with a fixed option list.

    Shows option names, stores option values in itemData.
    """

    _widget_id = "combo_box"

    def populate_options(self, options: Sequence[ParameterOption]) -> None:
        """Replace the items with the given options, leaving nothing selected."""
        self.clear()
        for option in options:
            self.addItem(option.name, option.value)
            if option.description:
                self.setItemData(self.count() - 1, option.description,
                                 Qt.ItemDataRole.ToolTipRole)
        self.setCurrentIndex(-1)

    def get_value(self) -> str:
        if self.currentIndex() < 0:
            return ""
        return self.itemData(self.currentIndex())

    def set_value(self, value: str) -> None:
        self._remove_unlisted_item()
        for i in range(self.count()):
            if self.itemData(i) == value:
                self.setCurrentIndex(i)
                return
        if not value:
            self.setCurrentIndex(-1)
            return
        # Value not among options: show it as a marked extra item
        self.addItem(f"{value} {UNLISTED_OPTION_SUFFIX}", value)
        self.setItemData(self.count() - 1, True, UNLISTED_ITEM_ROLE)
        self.setCurrentIndex(self.count() - 1)

    def _remove_unlisted_item(self) -> None:
        for i in reversed(range(self.count())):
            if self.itemData(i, UNLISTED_ITEM_ROLE):
                self.removeItem(i)

    def set_placeholder(self, text: str) -> None:
        self.setPlaceholderText(text)

    def connect_change_signal(self, callback: Callable[[str], None]) -> None:
        self._connect(self.currentIndexChanged, callback)

    def disconnect_change_signal(self, callback: Callable[[str], None]) -> None:
        self._disconnect(self.currentIndexChanged, callback)


class CheckBoxAdapter(QCheckBox, _SlotBookkeeping, ValueGettable, ValueSettable,
                      ChangeSignalEmitter, metaclass=PyQtWidgetMeta):
    """
    Input for bool parameters. Reads and writes "true" / "false".

    An empty value shows as partially checked and reads back as "";
    the first click leaves that state for good.
    """

    _widget_id = "check_box"

    def get_value(self) -> str:
        state = self.checkState()
        if state == Qt.CheckState.PartiallyChecked:
            return ""
        return "true" if state == Qt.CheckState.Checked else "false"

    def set_value(self, value: str) -> None:
        value = (value or "").strip().lower()
        if not value:
            self.setTristate(True)
            self.setCheckState(Qt.CheckState.PartiallyChecked)
            return
        self.setTristate(False)
        self.setChecked(value == "true")

    def nextCheckState(self) -> None:
        if self.checkState() == Qt.CheckState.PartiallyChecked:
            self.setTristate(False)
            self.setCheckState(Qt.CheckState.Checked)
            return
        super().nextCheckState()

    def connect_change_signal(self, callback: Callable[[str], None]) -> None:
        self._connect(self.stateChanged, callback)

    def disconnect_change_signal(self, callback: Callable[[str], None]) -> None:
        self._disconnect(self.stateChanged, callback)
