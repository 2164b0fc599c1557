"""Navigator protocol for routing to in-app pages.

The popover never owns routing; it asks the host application to
navigate through whatever implements this protocol.
"""

from typing import Protocol, Optional


class NavigatorProtocol(Protocol):
    """Protocol for host routers.

    Example:
        from pyqt_buildparams.protocols import register_navigator

        class MainWindowRouter:
            def navigate(self, path: str) -> None:
                self.stack.setCurrentWidget(self.pages.for_path(path))

        register_navigator(MainWindowRouter())
    """

    def navigate(self, path: str) -> None:
        """Show the page at path."""
        ...


# Global navigator instance (set by application)
_navigator: Optional[NavigatorProtocol] = None


def register_navigator(navigator: NavigatorProtocol) -> None:
    """Register the application's navigator."""
    global _navigator
    _navigator = navigator


def get_navigator() -> Optional[NavigatorProtocol]:
    """Get the registered navigator, or None if not registered."""
    return _navigator
