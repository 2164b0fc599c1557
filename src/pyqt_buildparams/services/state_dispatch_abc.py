"""
Abstract base for services that dispatch on a tagged-variant class name.

Pattern:
    Instead of:
        if isinstance(state, Loading):
            ...
        elif isinstance(state, FormReady):
            ...

    Use:
        class Renderer(StateDispatchABC):
            def _get_handler_prefix(self) -> str:
                return '_render_'

            def _render_Loading(self, state, ...):
                ...

            def _render_FormReady(self, state, ...):
                ...

Adding a variant means adding one handler method; a missing handler
fails loudly at dispatch time.
"""

from typing import Any, Callable, Dict
from abc import ABC, abstractmethod
import logging

logger = logging.getLogger(__name__)


class StateDispatchABC(ABC):
    """
    Auto-discovers ``{prefix}{ClassName}`` handler methods and dispatches to them.
    """

    def __init__(self):
        self._handlers: Dict[str, Callable] = {}
        prefix = self._get_handler_prefix()

        for attr_name in dir(self):
            if attr_name.startswith(prefix):
                # e.g. '_render_FormReady' -> 'FormReady'
                class_name = attr_name[len(prefix):]
                handler = getattr(self, attr_name)
                if callable(handler):
                    self._handlers[class_name] = handler

        if self._handlers:
            logger.debug(
                f"{self.__class__.__name__} auto-discovered handlers: "
                f"{list(self._handlers.keys())}"
            )
        else:
            logger.warning(
                f"{self.__class__.__name__} found no handlers with prefix '{prefix}'. "
                f"Did you forget to define handler methods?"
            )

    @abstractmethod
    def _get_handler_prefix(self) -> str:
        """Return the method prefix for this service's handlers (e.g. '_render_')."""
        pass

    def dispatch(self, variant: Any, *args, **kwargs) -> Any:
        """
        Call the handler registered for ``type(variant).__name__``.

        Raises:
            ValueError: If no handler is defined for the variant's class
        """
        class_name = variant.__class__.__name__
        handler = self._handlers.get(class_name)

        if handler is None:
            raise ValueError(
                f"No handler for {class_name} in {self.__class__.__name__}. "
                f"Available handlers: {list(self._handlers.keys())}. "
                f"Did you forget to define {self._get_handler_prefix()}{class_name}()?"
            )

        return handler(variant, *args, **kwargs)

    def has_handler(self, variant: Any) -> bool:
        return variant.__class__.__name__ in self._handlers

    def get_supported_types(self) -> list[str]:
        return list(self._handlers.keys())
