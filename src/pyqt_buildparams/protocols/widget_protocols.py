"""
Widget ABC contracts for parameter inputs.

Every input the form renders implements these explicitly, so the form
never duck-types Qt's per-widget signal and accessor names.

Design Philosophy:
- Explicit inheritance over duck typing
- Values cross the boundary as strings, the wire type of build parameters
"""

from abc import ABC, abstractmethod
from typing import Callable


class ValueGettable(ABC):
    """ABC for widgets that report their committed value."""

    @abstractmethod
    def get_value(self) -> str:
        """
        Get the current value from the widget.

        Returns:
            The widget's value as a string. Empty string if nothing is set.
        """
        pass


class ValueSettable(ABC):
    """ABC for widgets that can be pre-filled."""

    @abstractmethod
    def set_value(self, value: str) -> None:
        """
        Set the widget's value without treating it as a user edit.

        Args:
            value: The value to show. Empty string clears the widget.
        """
        pass


class PlaceholderCapable(ABC):
    """ABC for widgets that can display placeholder text."""

    @abstractmethod
    def set_placeholder(self, text: str) -> None:
        """
        Set placeholder text for the widget.

        Args:
            text: Placeholder text to display (e.g., "Default: us-east")
        """
        pass


class ChangeSignalEmitter(ABC):
    """
    ABC for widgets that emit change signals.

    Hides whether the underlying Qt signal is textChanged,
    currentIndexChanged or stateChanged.
    """

    @abstractmethod
    def connect_change_signal(self, callback: Callable[[str], None]) -> None:
        """
        Connect callback to widget's change signal.

        Args:
            callback: Function to call with the new value on every change.
        """
        pass

    @abstractmethod
    def disconnect_change_signal(self, callback: Callable[[str], None]) -> None:
        """
        Disconnect a callback previously passed to connect_change_signal.

        Args:
            callback: The callback function to disconnect
        """
        pass
