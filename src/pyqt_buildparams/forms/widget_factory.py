"""
Widget factory with explicit dispatch on the declared parameter type.

Design:
- PARAMETER_TYPE_REGISTRY: schema type string -> adapter factory
- Parameters with an option list always get a combo box
- Fail-loud for unknown types unless a fallback is allowed
"""

import logging
from typing import Any, Callable, Dict

from pyqt_buildparams.protocols.widget_adapters import (
    CheckBoxAdapter, ComboBoxAdapter, LineEditAdapter
)
from pyqt_buildparams.protocols.widget_protocols import PlaceholderCapable
from .parameter_types import ParameterDefinition

logger = logging.getLogger(__name__)

# Maps schema type -> widget factory function
PARAMETER_TYPE_REGISTRY: Dict[str, Callable[[], Any]] = {
    "string": LineEditAdapter,
    "number": LineEditAdapter,
    "bool": CheckBoxAdapter,
    "list(string)": LineEditAdapter,
}


class WidgetFactory:
    """
    Create the input widget for one parameter definition.

    Example:
        factory = WidgetFactory()
        widget = factory.create_widget(definition)
        widget.set_value("us-east")
    """

    def __init__(self, strict: bool = False):
        """
        Args:
            strict: Raise for unregistered types instead of falling back to a line edit
        """
        self._strict = strict

    def create_widget(self, definition: ParameterDefinition) -> Any:
        """
        Create widget for a parameter using explicit dispatch.

        Raises:
            TypeError: In strict mode, if no widget is registered for the type
        """
        if definition.options:
            return self._create_options_widget(definition)

        factory_func = PARAMETER_TYPE_REGISTRY.get(definition.type)
        if factory_func is None:
            if self._strict:
                raise TypeError(
                    f"No widget registered for type '{definition.type}' "
                    f"(parameter: '{definition.name}'). "
                    f"Available types: {list(PARAMETER_TYPE_REGISTRY.keys())}."
                )
            logger.warning(f"Unknown parameter type '{definition.type}' for '{definition.name}', using line edit")
            factory_func = LineEditAdapter

        widget = factory_func()
        if definition.default_value and isinstance(widget, PlaceholderCapable):
            widget.set_placeholder(f"Default: {definition.default_value}")
        logger.debug(f"Created {type(widget).__name__} for parameter '{definition.name}' (type: {definition.type})")
        return widget

    def _create_options_widget(self, definition: ParameterDefinition) -> ComboBoxAdapter:
        widget = ComboBoxAdapter()
        widget.populate_options(definition.options)
        widget.set_placeholder("Select an option")
        logger.debug(f"Created ComboBoxAdapter with {len(definition.options)} option(s) for '{definition.name}'")
        return widget
