"""
Build parameters popover: trigger button, popup frame and state renderer.

The popover owns the current PopoverWorkflow instance and re-renders its
content whenever the workflow changes state. Workflow logic stays in the
workflow; this module only draws states and forwards user actions.
"""

import logging
from typing import Callable, List, Optional

from PyQt6.QtCore import QPoint, Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QFrame, QLabel, QPushButton, QToolButton, QVBoxLayout, QWidget
)

from pyqt_buildparams.core import BackgroundTaskManager
from pyqt_buildparams.exceptions import NavigationUnavailableError, ParameterFetchError
from pyqt_buildparams.forms.parameter_form import BuildParametersForm
from pyqt_buildparams.forms.parameter_types import BuildParameterValue, Workspace
from pyqt_buildparams.protocols.form_config import BuildParamsConfig, get_build_params_config
from pyqt_buildparams.protocols.navigation import NavigatorProtocol
from pyqt_buildparams.protocols.parameter_source import (
    WorkspaceParameterSource,
    get_parameter_source,
)
from pyqt_buildparams.services import StateDispatchABC
from pyqt_buildparams.theming import ColorScheme
from pyqt_buildparams.workflow import (
    Closed,
    FormReady,
    Loading,
    NoEphemeralParameters,
    PopoverState,
    PopoverWorkflow,
    RedirectEligible,
    get_workspace_parameters,
)
from .help_tooltip import (
    HelpTooltipLink,
    HelpTooltipLinksGroup,
    HelpTooltipText,
    HelpTooltipTitle,
)

logger = logging.getLogger(__name__)

# --- Copy ---
BUILD_OPTIONS_TITLE = "Build Options"
FORM_INTRO_TEXT = "These parameters only apply for a single workspace start."
NO_EPHEMERAL_TEXT = "This template has no ephemeral build options."
READ_DOCS_TEXT = "Read the docs"
REDIRECT_TEXT = (
    "This workspace has ephemeral parameters which may use a temporary "
    "value on workspace start. Configure the following parameters in "
    "workspace settings."
)
REDIRECT_BUTTON_TEXT = "Go to workspace parameters"


def _section(config: BuildParamsConfig, color_scheme: ColorScheme, divider: bool = False) -> QFrame:
    """Padded content block, optionally with a bottom divider."""
    frame = QFrame()
    padding = config.content_padding
    layout = QVBoxLayout(frame)
    layout.setContentsMargins(padding, padding, padding, padding)
    layout.setSpacing(8)
    if divider:
        frame.setObjectName("popover-section")
        frame.setStyleSheet(
            f"QFrame#popover-section {{ border-bottom: 1px solid "
            f"{color_scheme.to_hex(color_scheme.divider)}; }}"
        )
    return frame


class PopoverContentRenderer(StateDispatchABC):
    """
    Single render dispatcher: one ``_render_<State>`` per workflow state.

    Each handler returns the content widget for its state, or None when
    the popover should not show anything.
    """

    def __init__(self, config: BuildParamsConfig, color_scheme: ColorScheme):
        self.config = config
        self.color_scheme = color_scheme
        super().__init__()

    def _get_handler_prefix(self) -> str:
        return '_render_'

    def render(self, state: PopoverState, workflow: PopoverWorkflow) -> Optional[QWidget]:
        return self.dispatch(state, workflow)

    def _render_Loading(self, state: Loading, workflow: PopoverWorkflow) -> QWidget:
        section = _section(self.config, self.color_scheme)
        section.setObjectName("build-parameters-loading")
        layout = section.layout()
        if state.error:
            banner = QLabel(f"Failed to load build parameters: {state.error}")
            banner.setObjectName("build-parameters-error")
            banner.setWordWrap(True)
            banner.setStyleSheet(
                f"background-color: {self.color_scheme.to_hex(self.color_scheme.error_bg)};"
                f"color: {self.color_scheme.to_hex(self.color_scheme.error_text)};"
                f"padding: 8px; border-radius: 4px;"
            )
            layout.addWidget(banner)
        else:
            layout.addWidget(QLabel(self.config.loading_text), alignment=Qt.AlignmentFlag.AlignCenter)
        return section

    def _render_RedirectEligible(self, state: RedirectEligible, workflow: PopoverWorkflow) -> QWidget:
        section = _section(self.config, self.color_scheme)
        section.setObjectName("build-parameters-redirect")
        layout = section.layout()
        layout.setSpacing(16)
        layout.addWidget(HelpTooltipText(REDIRECT_TEXT, self.color_scheme))

        parameter_list = QWidget()
        list_layout = QVBoxLayout(parameter_list)
        list_layout.setContentsMargins(12, 0, 0, 0)
        list_layout.setSpacing(8)
        for parameter in state.parameters:
            list_layout.addWidget(HelpTooltipTitle(parameter.label, self.color_scheme))
            if parameter.description:
                list_layout.addWidget(HelpTooltipText(parameter.description, self.color_scheme))
        layout.addWidget(parameter_list)

        button = QPushButton(REDIRECT_BUTTON_TEXT)
        button.setObjectName("build-parameters-redirect-button")
        button.setStyleSheet(self.color_scheme.button_style())
        button.clicked.connect(lambda: self._go_to_settings(workflow))
        layout.addWidget(button)
        return section

    def _go_to_settings(self, workflow: PopoverWorkflow) -> None:
        try:
            workflow.go_to_settings()
        except NavigationUnavailableError as e:
            logger.error(f"Cannot open workspace settings: {e}")

    def _render_NoEphemeralParameters(self, state: NoEphemeralParameters, workflow: PopoverWorkflow) -> QWidget:
        section = _section(self.config, self.color_scheme, divider=True)
        section.setObjectName("build-parameters-empty")
        layout = section.layout()
        layout.addWidget(HelpTooltipTitle(BUILD_OPTIONS_TITLE, self.color_scheme))
        layout.addWidget(HelpTooltipText(NO_EPHEMERAL_TEXT, self.color_scheme))
        links = HelpTooltipLinksGroup()
        links.add_link(HelpTooltipLink(READ_DOCS_TEXT, state.docs_url, self.color_scheme))
        layout.addWidget(links)
        return section

    def _render_FormReady(self, state: FormReady, workflow: PopoverWorkflow) -> QWidget:
        content = QWidget()
        content.setObjectName("build-parameters-form-view")
        layout = QVBoxLayout(content)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        header = _section(self.config, self.color_scheme, divider=True)
        header.layout().addWidget(HelpTooltipTitle(BUILD_OPTIONS_TITLE, self.color_scheme))
        header.layout().addWidget(HelpTooltipText(FORM_INTRO_TEXT, self.color_scheme))
        layout.addWidget(header)

        body = _section(self.config, self.color_scheme)
        body.layout().addWidget(BuildParametersForm(
            state.controller,
            on_submit=workflow.submit,
            color_scheme=self.color_scheme,
        ))
        layout.addWidget(body)
        return content

    def _render_Closed(self, state: Closed, workflow: PopoverWorkflow) -> None:
        return None


class PopoverContent(QFrame):
    """Popup frame; clicking outside hides it and emits ``dismissed``."""

    dismissed = pyqtSignal()

    def __init__(self, width: int, color_scheme: ColorScheme, parent=None):
        super().__init__(parent, Qt.WindowType.Popup)
        self.setObjectName("build-parameters-popover")
        self.setFixedWidth(width)
        self.setFrameShape(QFrame.Shape.StyledPanel)
        self.setStyleSheet(
            f"QFrame#build-parameters-popover {{ background-color: "
            f"{color_scheme.to_hex(color_scheme.panel_bg)}; }}"
        )
        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._view: Optional[QWidget] = None

    @property
    def view(self) -> Optional[QWidget]:
        return self._view

    def set_view(self, view: Optional[QWidget]) -> None:
        if self._view is not None:
            self._layout.removeWidget(self._view)
            self._view.deleteLater()
        self._view = view
        if view is not None:
            self._layout.addWidget(view)
        self.adjustSize()

    def hideEvent(self, event):
        super().hideEvent(event)
        self.dismissed.emit()


class BuildParametersPopover(QWidget):
    """
    Trigger button that opens the build parameters popover for one workspace.

    Usage:
        popover = BuildParametersPopover(
            workspace,
            on_submit=lambda params: api.start_workspace(workspace, params),
            label="Start with build options",
            source=api,
            navigator=router,
        )
        toolbar.addWidget(popover)

    Each open creates a fresh PopoverWorkflow and fetches the parameters
    again; results that arrive for a previous open are ignored.
    """

    workflow_changed = pyqtSignal(object)

    def __init__(
        self,
        workspace: Workspace,
        on_submit: Callable[[List[BuildParameterValue]], None],
        label: str,
        disabled: bool = False,
        source: Optional[WorkspaceParameterSource] = None,
        navigator: Optional[NavigatorProtocol] = None,
        task_manager: Optional[BackgroundTaskManager] = None,
        config: Optional[BuildParamsConfig] = None,
        color_scheme: Optional[ColorScheme] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.workspace = workspace
        self._on_submit = on_submit
        self._source = source
        self._navigator = navigator
        self._task_manager = task_manager or BackgroundTaskManager()
        self.config = config or get_build_params_config()
        self.color_scheme = color_scheme or ColorScheme()
        self._renderer = PopoverContentRenderer(self.config, self.color_scheme)
        self.workflow: Optional[PopoverWorkflow] = None

        self._setup_ui(label, disabled)

    def _setup_ui(self, label: str, disabled: bool):
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.trigger = QToolButton()
        self.trigger.setObjectName("build-parameters-button")
        self.trigger.setArrowType(Qt.ArrowType.DownArrow)
        self.trigger.setAccessibleName(label)
        self.trigger.setToolTip(label)
        self.trigger.setEnabled(not disabled)
        self.trigger.clicked.connect(self.open_popover)
        layout.addWidget(self.trigger)

        self.content = PopoverContent(self.config.popover_width, self.color_scheme, self)
        self.content.dismissed.connect(self.close_popover)

    def set_disabled(self, disabled: bool) -> None:
        self.trigger.setEnabled(not disabled)

    # ========== OPEN / CLOSE ==========

    def open_popover(self) -> PopoverWorkflow:
        """Open a new workflow instance, or return the one already open."""
        if self.workflow is not None and not self.workflow.is_closed:
            return self.workflow

        workflow = PopoverWorkflow(
            self.workspace,
            on_submit=self._on_submit,
            navigator=self._navigator,
            config=self.config,
        )
        workflow.add_listener(lambda state, wf=workflow: self._on_state_changed(wf, state))
        self.workflow = workflow
        self.workflow_changed.emit(workflow)

        self.content.set_view(self._renderer.render(workflow.state, workflow))
        self.content.move(self.trigger.mapToGlobal(QPoint(
            self.trigger.width() - self.config.popover_width, self.trigger.height()
        )))
        self.content.show()
        self._start_fetch(workflow)
        return workflow

    def close_popover(self) -> None:
        """Dismiss the open workflow, discarding uncommitted edits."""
        if self.workflow is not None:
            self.workflow.dismiss()

    def _start_fetch(self, workflow: PopoverWorkflow) -> None:
        source = self._source or get_parameter_source()
        token = workflow.instance_id
        if source is None:
            workflow.fail(token, ParameterFetchError("No parameter source registered"))
            return

        # Results are routed to the instance that started the fetch, never to self.workflow
        self._task_manager.run(
            target=get_workspace_parameters,
            args=(source, self.workspace),
            on_success=lambda parameters: workflow.resolve(token, parameters),
            on_error=lambda error: workflow.fail(token, error),
        )

    def _on_state_changed(self, workflow: PopoverWorkflow, state: PopoverState) -> None:
        if workflow is not self.workflow:
            return
        view = self._renderer.render(state, workflow)
        self.content.set_view(view)
        if view is None:
            self._task_manager.cancel()
            if self.content.isVisible():
                self.content.hide()

    def closeEvent(self, event):
        self.close_popover()
        self._task_manager.cleanup()
        super().closeEvent(event)
