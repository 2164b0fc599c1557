"""
Popover workflow.

The state machine that decides what an open build parameters popover
shows, and the inbound query that feeds it.
"""

from .popover_states import (
    CloseReason,
    Closed,
    FormReady,
    Loading,
    NoEphemeralParameters,
    PopoverState,
    RedirectEligible,
)
from .popover_workflow import EPHEMERAL_PARAMETERS_DOCS_PATH, PopoverWorkflow
from .parameter_fetch import get_workspace_parameters

__all__ = [
    "CloseReason",
    "Closed",
    "FormReady",
    "Loading",
    "NoEphemeralParameters",
    "PopoverState",
    "RedirectEligible",
    "EPHEMERAL_PARAMETERS_DOCS_PATH",
    "PopoverWorkflow",
    "get_workspace_parameters",
]
