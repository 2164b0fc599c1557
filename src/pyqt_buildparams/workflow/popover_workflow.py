"""
Build parameters popover workflow.

One PopoverWorkflow exists per open popover. It starts in Loading, moves
to exactly one content state once both parameter fetches resolved, and
ends in Closed. Nothing survives a close: reopening creates a new
instance that fetches again.

Transitions:
    Loading -> RedirectEligible        non-classic flow, ephemeral parameters present
    Loading -> NoEphemeralParameters   no ephemeral parameters (any flow)
    Loading -> FormReady               classic flow, ephemeral parameters present
    FormReady -> Closed                submit()
    RedirectEligible -> Closed         go_to_settings()
    any -> Closed                      dismiss()
"""

from __future__ import annotations

import logging
import uuid
from typing import Callable, List, Optional

from pyqt_buildparams.exceptions import NavigationUnavailableError
from pyqt_buildparams.forms.parameter_form_controller import ParameterFormController
from pyqt_buildparams.forms.parameter_types import (
    BuildParameterValue,
    Workspace,
    WorkspaceBuildRequest,
    WorkspaceParameters,
)
from pyqt_buildparams.protocols.form_config import (
    BuildParamsConfig,
    docs_url,
    get_build_params_config,
)
from pyqt_buildparams.protocols.navigation import NavigatorProtocol, get_navigator
from .popover_states import (
    Closed,
    CloseReason,
    FormReady,
    Loading,
    NoEphemeralParameters,
    PopoverState,
    RedirectEligible,
)

logger = logging.getLogger(__name__)

EPHEMERAL_PARAMETERS_DOCS_PATH = "/admin/templates/extending-templates/parameters#ephemeral-parameters"

StateListener = Callable[[PopoverState], None]
SubmitCallback = Callable[[List[BuildParameterValue]], None]


class PopoverWorkflow:
    """
    State machine for one open build parameters popover.

    Examples:
        workflow = PopoverWorkflow(workspace, on_submit=start_build)
        workflow.add_listener(renderer.render)

        # When both fetches resolve (on the GUI thread):
        workflow.resolve(workflow.instance_id, parameters)

        workflow.set_value(0, "us-west")
        workflow.submit()  # closes, then calls start_build([...])
    """

    def __init__(
        self,
        workspace: Workspace,
        on_submit: SubmitCallback,
        navigator: Optional[NavigatorProtocol] = None,
        config: Optional[BuildParamsConfig] = None,
    ):
        self.workspace = workspace
        self._on_submit = on_submit
        self._navigator = navigator
        self.config = config or get_build_params_config()
        self.instance_id = uuid.uuid4().hex
        self._state: PopoverState = Loading()
        self._listeners: List[StateListener] = []
        logger.debug(f"Opened popover workflow {self.instance_id} for {workspace.owner_name}/{workspace.name}")

    # ========== STATE ==========

    @property
    def state(self) -> PopoverState:
        return self._state

    @property
    def is_closed(self) -> bool:
        return isinstance(self._state, Closed)

    @property
    def settings_path(self) -> str:
        return self.config.settings_path_template.format(
            owner_name=self.workspace.owner_name,
            workspace_name=self.workspace.name,
        )

    def add_listener(self, listener: StateListener) -> None:
        """Call ``listener(new_state)`` after every transition."""
        self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _transition(self, new_state: PopoverState) -> None:
        old_state = self._state
        self._state = new_state
        logger.debug(
            f"Workflow {self.instance_id}: {type(old_state).__name__} -> {type(new_state).__name__}"
        )
        for listener in list(self._listeners):
            listener(new_state)

    def _accepts_fetch_result(self, token: str) -> bool:
        if token != self.instance_id:
            logger.debug(f"Ignoring fetch result for stale instance {token}")
            return False
        if not isinstance(self._state, Loading):
            logger.debug(
                f"Ignoring fetch result for workflow {self.instance_id} "
                f"in state {type(self._state).__name__}"
            )
            return False
        return True

    # ========== FETCH RESULTS ==========

    def resolve(self, token: str, parameters: WorkspaceParameters) -> bool:
        """
        Leave Loading once both the schema and the prior values are known.

        Args:
            token: instance_id captured when the fetch was started
            parameters: Result of the inbound parameter query

        Returns:
            True if the result was applied, False if it was stale
        """
        if not self._accepts_fetch_result(token):
            return False

        ephemeral = parameters.ephemeral_parameters
        if not ephemeral:
            self._transition(NoEphemeralParameters(
                docs_url=docs_url(EPHEMERAL_PARAMETERS_DOCS_PATH, self.config)
            ))
        elif not self.workspace.template_use_classic_parameter_flow:
            self._transition(RedirectEligible(
                parameters=tuple(ephemeral),
                settings_path=self.settings_path,
            ))
        else:
            controller = ParameterFormController.from_parameters(
                parameters.template_version_rich_parameters,
                parameters.build_parameters,
            )
            self._transition(FormReady(controller=controller))
        return True

    def fail(self, token: str, error: Exception) -> bool:
        """
        Record a failed fetch as a banner message; the workflow stays in Loading.

        Returns:
            True if the error was applied, False if it was stale
        """
        if not self._accepts_fetch_result(token):
            return False
        logger.error(f"Failed to load build parameters for workflow {self.instance_id}", exc_info=error)
        self._transition(Loading(error=str(error) or type(error).__name__))
        return True

    # ========== FORM ==========

    def set_value(self, index: int, value: str) -> None:
        """Forward a field edit to the form; ignored outside FormReady."""
        if not isinstance(self._state, FormReady):
            logger.debug(f"Ignoring edit in state {type(self._state).__name__}")
            return
        self._state.controller.set_value(index, value)

    def submit(self) -> Optional[WorkspaceBuildRequest]:
        """
        Close the popover and hand the build request to ``on_submit``.

        The workflow closes before ``on_submit`` runs, so a second click
        (or any re-entrant call from inside the callback) finds it closed
        and is dropped. The build's outcome is not tracked here.

        Returns:
            The submitted request, or None if the form was not open
        """
        if not isinstance(self._state, FormReady):
            logger.debug(f"Dropping submit in state {type(self._state).__name__}")
            return None
        request = self._state.controller.submit()
        self._transition(Closed(reason=CloseReason.SUBMITTED))
        logger.info(
            f"Submitting {len(request)} build parameter(s) for "
            f"{self.workspace.owner_name}/{self.workspace.name}"
        )
        self._on_submit(request)
        return request

    # ========== REDIRECT / DISMISS ==========

    def go_to_settings(self) -> bool:
        """
        Close and navigate to the workspace parameter settings page.

        Returns:
            True if navigation was requested, False outside RedirectEligible

        Raises:
            NavigationUnavailableError: if no navigator was given or registered
        """
        if not isinstance(self._state, RedirectEligible):
            logger.debug(f"Ignoring redirect in state {type(self._state).__name__}")
            return False
        path = self._state.settings_path
        self._transition(Closed(reason=CloseReason.REDIRECTED))

        navigator = self._navigator or get_navigator()
        if navigator is None:
            raise NavigationUnavailableError(f"No navigator registered to open {path}")
        logger.debug(f"Navigating to {path}")
        navigator.navigate(path)
        return True

    def dismiss(self) -> None:
        """Close without submitting; uncommitted edits are discarded."""
        if self.is_closed:
            return
        self._transition(Closed(reason=CloseReason.DISMISSED))
