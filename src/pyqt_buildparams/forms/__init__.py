"""
Parameter resolution and form management.

Autofill resolution, the form controller, and the Qt form widget that
renders one input per ephemeral build parameter.
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .parameter_types import (
        AutofillSource,
        AutofillValue,
        BuildParameterValue,
        ParameterDefinition,
        ParameterOption,
        Workspace,
        WorkspaceParameters,
    )
    from .autofill import filter_ephemeral, get_initial_parameter_values
    from .parameter_form_controller import FieldHelpers, ParameterFormController
    from .parameter_form import BuildParametersForm
    from .widget_factory import WidgetFactory

_EXPORTS = {
    "AutofillSource": ("pyqt_buildparams.forms.parameter_types", "AutofillSource"),
    "AutofillValue": ("pyqt_buildparams.forms.parameter_types", "AutofillValue"),
    "BuildParameterValue": ("pyqt_buildparams.forms.parameter_types", "BuildParameterValue"),
    "ParameterDefinition": ("pyqt_buildparams.forms.parameter_types", "ParameterDefinition"),
    "ParameterOption": ("pyqt_buildparams.forms.parameter_types", "ParameterOption"),
    "Workspace": ("pyqt_buildparams.forms.parameter_types", "Workspace"),
    "WorkspaceParameters": ("pyqt_buildparams.forms.parameter_types", "WorkspaceParameters"),
    "filter_ephemeral": ("pyqt_buildparams.forms.autofill", "filter_ephemeral"),
    "get_initial_parameter_values": ("pyqt_buildparams.forms.autofill", "get_initial_parameter_values"),
    "FieldHelpers": ("pyqt_buildparams.forms.parameter_form_controller", "FieldHelpers"),
    "ParameterFormController": ("pyqt_buildparams.forms.parameter_form_controller", "ParameterFormController"),
    "BuildParametersForm": ("pyqt_buildparams.forms.parameter_form", "BuildParametersForm"),
    "WidgetFactory": ("pyqt_buildparams.forms.widget_factory", "WidgetFactory"),
}


def __getattr__(name: str):
    if name in _EXPORTS:
        module_name, attr = _EXPORTS[name]
        module = importlib.import_module(module_name)
        value = getattr(module, attr)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_EXPORTS.keys())
