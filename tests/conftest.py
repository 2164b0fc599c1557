"""pytest configuration and fixtures for pyqt-buildparams tests."""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for tests."""
    app = QApplication.instance() or QApplication([])
    yield app
    # Don't quit - may cause issues with other tests


class InlineTaskManager:
    """Runs tasks synchronously so tests control when fetches resolve."""

    def __init__(self, deferred: bool = False):
        self.deferred = deferred
        self.pending = []
        self.cancelled = 0

    def run(self, target, args=(), kwargs=None, on_success=None, on_error=None):
        call = (target, args, kwargs or {}, on_success, on_error)
        if self.deferred:
            self.pending.append(call)
        else:
            self._execute(call)

    def flush(self):
        pending, self.pending = self.pending, []
        for call in pending:
            self._execute(call)

    @staticmethod
    def _execute(call):
        target, args, kwargs, on_success, on_error = call
        try:
            result = target(*args, **kwargs)
        except Exception as e:
            if on_error:
                on_error(e)
            return
        if on_success:
            on_success(result)

    def cancel(self):
        self.cancelled += 1

    def cleanup(self):
        self.pending = []


class RecordingNavigator:
    def __init__(self):
        self.paths = []

    def navigate(self, path):
        self.paths.append(path)


@pytest.fixture
def task_manager():
    return InlineTaskManager()


@pytest.fixture
def deferred_task_manager():
    return InlineTaskManager(deferred=True)


@pytest.fixture
def navigator():
    return RecordingNavigator()


@pytest.fixture
def region_definitions():
    """Scenario A schema: one ephemeral, one standing parameter."""
    from pyqt_buildparams.forms.parameter_types import ParameterDefinition

    return [
        ParameterDefinition(name="region", display_name="Region", ephemeral=True),
        ParameterDefinition(name="size", ephemeral=False),
    ]


@pytest.fixture
def region_prior_values():
    from pyqt_buildparams.forms.parameter_types import BuildParameterValue

    return [BuildParameterValue(name="region", value="us-east")]


def make_workspace(classic: bool = True):
    from pyqt_buildparams.forms.parameter_types import Workspace

    return Workspace(
        id="ws-1",
        name="dev",
        owner_name="alice",
        template_use_classic_parameter_flow=classic,
        template_version_id="tv-1",
        latest_build_id="build-1",
    )


@pytest.fixture
def workspace_factory():
    return make_workspace


@pytest.fixture
def classic_workspace():
    return make_workspace(classic=True)


@pytest.fixture
def modern_workspace():
    return make_workspace(classic=False)


@pytest.fixture
def region_source(region_definitions, region_prior_values):
    from pyqt_buildparams.protocols import StaticParameterSource

    return StaticParameterSource(
        rich_parameters={"tv-1": region_definitions},
        build_parameters={"build-1": region_prior_values},
    )


@pytest.fixture
def wait_until(qapp):
    """Process Qt events until ``predicate()`` holds or the timeout expires."""
    import time

    def _wait(predicate, timeout=5.0):
        deadline = time.monotonic() + timeout
        while not predicate():
            if time.monotonic() > deadline:
                return False
            qapp.processEvents()
            time.sleep(0.01)
        return True

    return _wait
