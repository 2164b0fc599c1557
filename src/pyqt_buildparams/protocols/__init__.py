"""
Pluggable collaborators and widget contracts.

Protocols for the metadata source and navigator, the application-wide
configuration, and ABC-based input widget contracts with Qt adapters.
"""

from .widget_protocols import (
    ValueGettable,
    ValueSettable,
    PlaceholderCapable,
    ChangeSignalEmitter,
)
from .widget_adapters import (
    LineEditAdapter,
    ComboBoxAdapter,
    CheckBoxAdapter,
    PyQtWidgetMeta,
)
from .form_config import BuildParamsConfig, set_build_params_config, get_build_params_config, docs_url
from .parameter_source import (
    WorkspaceParameterSource,
    StaticParameterSource,
    register_parameter_source,
    get_parameter_source,
)
from .navigation import NavigatorProtocol, register_navigator, get_navigator

__all__ = [
    "ValueGettable",
    "ValueSettable",
    "PlaceholderCapable",
    "ChangeSignalEmitter",
    "LineEditAdapter",
    "ComboBoxAdapter",
    "CheckBoxAdapter",
    "PyQtWidgetMeta",
    "BuildParamsConfig",
    "set_build_params_config",
    "get_build_params_config",
    "docs_url",
    "WorkspaceParameterSource",
    "StaticParameterSource",
    "register_parameter_source",
    "get_parameter_source",
    "NavigatorProtocol",
    "register_navigator",
    "get_navigator",
]
