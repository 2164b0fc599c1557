"""
Popover workflow states.

A tagged variant: one frozen dataclass per state, each carrying exactly
the payload its view needs. Renderers dispatch on the class name.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from pyqt_buildparams.forms.parameter_form_controller import ParameterFormController
from pyqt_buildparams.forms.parameter_types import ParameterDefinition


class CloseReason(Enum):
    SUBMITTED = "submitted"
    REDIRECTED = "redirected"
    DISMISSED = "dismissed"


@dataclass(frozen=True)
class Loading:
    """Waiting for the schema and prior build values. ``error`` is shown as a banner."""
    error: Optional[str] = None


@dataclass(frozen=True)
class RedirectEligible:
    """Non-classic flow: the parameters are edited on the settings page instead."""
    parameters: Tuple[ParameterDefinition, ...]
    settings_path: str


@dataclass(frozen=True)
class NoEphemeralParameters:
    """The template declares no ephemeral parameters."""
    docs_url: str


@dataclass(frozen=True)
class FormReady:
    """Classic flow with ephemeral parameters: the form is editable."""
    controller: ParameterFormController = field(compare=False)


@dataclass(frozen=True)
class Closed:
    """Terminal state of one open popover."""
    reason: CloseReason


PopoverState = Union[Loading, RedirectEligible, NoEphemeralParameters, FormReady, Closed]
