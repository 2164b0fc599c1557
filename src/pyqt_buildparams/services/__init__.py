"""
Service layer shared by the workflow and its rendering host.
"""

from .state_dispatch_abc import StateDispatchABC

__all__ = [
    "StateDispatchABC",
]
