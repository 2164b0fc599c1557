"""Background fetch task with cancellation and cleanup."""

import logging
from typing import Callable, Any, List, Optional, Tuple
from PyQt6.QtCore import QThread, pyqtSignal

logger = logging.getLogger(__name__)

# --- Module-level constants ---
CANCEL_WAIT_MS = 100      # Wait time when cancelling previous task
CLEANUP_WAIT_MS = 200     # Wait time during popover close cleanup


class BackgroundTask(QThread):
    """
    Run a blocking call off the GUI thread.

    Usage:
        task = BackgroundTask(target=get_workspace_parameters, args=(source, workspace))
        task.result_ready.connect(on_success)
        task.error_occurred.connect(on_error)  # Receives Exception, not str
        task.start()

        # Later:
        task.cancel()  # Signals won't emit after this

    Signals are queued onto the receiver's thread, so callbacks always run
    on the GUI event loop.
    """

    result_ready = pyqtSignal(object)
    error_occurred = pyqtSignal(Exception)

    def __init__(
        self,
        target: Callable[..., Any],
        args: Tuple = (),
        kwargs: dict = None,
        parent=None
    ):
        super().__init__(parent)
        self._target = target
        self._args = args
        self._kwargs = kwargs or {}
        self.cancelled = False

    def run(self):
        """Execute target in background, respecting cancellation."""
        try:
            result = self._target(*self._args, **self._kwargs)
            if not self.cancelled:
                self.result_ready.emit(result)
        except Exception as e:
            if not self.cancelled:
                self.error_occurred.emit(e)

    def cancel(self):
        """Cancel task. Signals won't emit after this."""
        self.cancelled = True


class BackgroundTaskManager:
    """
    Owns at most one running BackgroundTask for a widget.

    Usage in widget:
        self._task_manager = BackgroundTaskManager()

        def _start_fetch(self, workflow):
            token = workflow.instance_id
            self._task_manager.run(
                target=get_workspace_parameters,
                args=(self._source, self._workspace),
                on_success=lambda parameters: workflow.resolve(token, parameters),
                on_error=lambda error: workflow.fail(token, error),
            )

        def closeEvent(self, event):
            self._task_manager.cleanup()
            super().closeEvent(event)
    """

    def __init__(self):
        self._current_task: Optional[BackgroundTask] = None
        # Cancelled tasks still running; referenced until they finish
        self._retired: List[BackgroundTask] = []

    def run(
        self,
        target: Callable[..., Any],
        args: Tuple = (),
        kwargs: dict = None,
        on_success: Callable[[Any], None] = None,
        on_error: Callable[[Exception], None] = None,
    ) -> BackgroundTask:
        """
        Run a background task, cancelling any previous one.

        Args:
            target: Function to execute in background
            args: Positional arguments for target
            kwargs: Keyword arguments for target
            on_success: Callback for successful result
            on_error: Callback for error (receives Exception, not str)

        Returns:
            The started BackgroundTask
        """
        self.cancel()

        task = BackgroundTask(target=target, args=args, kwargs=kwargs)
        if on_success:
            task.result_ready.connect(on_success)
        if on_error:
            task.error_occurred.connect(on_error)

        self._current_task = task
        task.start()
        logger.debug(f"Started background task for {getattr(target, '__name__', target)}")
        return task

    def cancel(self):
        """Cancel the current task, waiting briefly for it to finish."""
        task, self._current_task = self._current_task, None
        if task is None or not task.isRunning():
            return
        task.cancel()
        if not task.wait(CANCEL_WAIT_MS):
            self._retired.append(task)
            task.finished.connect(lambda: self._release(task))
            if task.isFinished():
                self._release(task)

    def _release(self, task: BackgroundTask) -> None:
        if task in self._retired:
            self._retired.remove(task)

    def cleanup(self):
        """Cancel and wait for the current and retired tasks. Call from closeEvent."""
        tasks = list(self._retired)
        if self._current_task is not None:
            tasks.append(self._current_task)
        self._current_task = None
        for task in tasks:
            if task.isRunning():
                task.cancel()
                if not task.wait(CLEANUP_WAIT_MS):
                    logger.warning("Background task still running after cleanup wait")
