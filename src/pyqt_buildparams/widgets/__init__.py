"""
Popover widgets.

The trigger button and popup host for the build parameters workflow,
plus the help tooltip labels its views are made of.
"""

from .help_tooltip import (
    HelpTooltipLink,
    HelpTooltipLinksGroup,
    HelpTooltipText,
    HelpTooltipTitle,
)
from .popover import BuildParametersPopover, PopoverContent, PopoverContentRenderer

__all__ = [
    "HelpTooltipLink",
    "HelpTooltipLinksGroup",
    "HelpTooltipText",
    "HelpTooltipTitle",
    "BuildParametersPopover",
    "PopoverContent",
    "PopoverContentRenderer",
]
