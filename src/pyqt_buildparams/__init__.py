"""
pyqt-buildparams: build-parameter popover for workspace rebuilds in PyQt6.

Resolves which ephemeral parameters a workspace rebuild needs, pre-fills
them from the active build and hands an ordered parameter list to a
build-trigger callback.

Architecture:
- Tier 1 (Core): background fetch tasks on QThread
- Tier 2 (Protocols): parameter source, navigator, widget ABCs and config
- Tier 3 (Forms): autofill resolver, form controller, form widget
- Tier 4 (Workflow): popover state machine and its rendering host
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
