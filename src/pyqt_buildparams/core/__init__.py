"""
Core PyQt6 utilities.

Threading helpers with no workspace-specific logic.
"""

from .background_task import BackgroundTask, BackgroundTaskManager

__all__ = [
    "BackgroundTask",
    "BackgroundTaskManager",
]
