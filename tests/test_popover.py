"""Tests for the build parameters popover widget."""

import pytest


def _popover(workspace, source, task_manager, navigator=None, submitted=None):
    from pyqt_buildparams.widgets import BuildParametersPopover

    submitted = submitted if submitted is not None else []
    return BuildParametersPopover(
        workspace,
        on_submit=submitted.append,
        label="Build options",
        source=source,
        navigator=navigator,
        task_manager=task_manager,
    )


def test_trigger_button(qapp, classic_workspace, region_source, task_manager):
    """The trigger carries the accessible label and honours disabled."""
    from pyqt_buildparams.widgets import BuildParametersPopover

    popover = BuildParametersPopover(
        classic_workspace, on_submit=lambda p: None, label="Build options",
        disabled=True, source=region_source, task_manager=task_manager,
    )

    assert popover.trigger.objectName() == "build-parameters-button"
    assert popover.trigger.accessibleName() == "Build options"
    assert not popover.trigger.isEnabled()


def test_form_edit_and_submit(qapp, classic_workspace, region_source, task_manager):
    """Editing a field and clicking submit hands the edited list to on_submit and closes."""
    from PyQt6.QtWidgets import QPushButton
    from pyqt_buildparams.forms.parameter_types import BuildParameterValue
    from pyqt_buildparams.protocols import LineEditAdapter
    from pyqt_buildparams.workflow import Closed, FormReady

    submitted = []
    popover = _popover(classic_workspace, region_source, task_manager, submitted=submitted)
    workflow = popover.open_popover()

    assert isinstance(workflow.state, FormReady)
    field = popover.content.findChild(LineEditAdapter, "rich_parameter_values[0].value")
    assert field.get_value() == "us-east"

    field.setText("us-west")
    popover.content.findChild(QPushButton, "build-parameters-submit").click()

    assert submitted == [[BuildParameterValue(name="region", value="us-west")]]
    assert isinstance(workflow.state, Closed)
    assert popover.content.view is None


def test_redirect_view_navigates(qapp, modern_workspace, region_source, task_manager, navigator):
    """Non-classic templates offer only a link to the settings page."""
    from PyQt6.QtWidgets import QPushButton
    from pyqt_buildparams.workflow import RedirectEligible

    popover = _popover(modern_workspace, region_source, task_manager, navigator)
    workflow = popover.open_popover()

    assert isinstance(workflow.state, RedirectEligible)
    assert popover.content.findChild(QPushButton, "build-parameters-submit") is None

    popover.content.findChild(QPushButton, "build-parameters-redirect-button").click()

    assert navigator.paths == ["/@alice/dev/settings/parameters"]
    assert workflow.is_closed


def test_empty_view_links_to_docs(qapp, classic_workspace, task_manager):
    """Templates without ephemeral parameters show the docs link."""
    from pyqt_buildparams.forms.parameter_types import ParameterDefinition
    from pyqt_buildparams.protocols import StaticParameterSource
    from pyqt_buildparams.widgets import HelpTooltipLink

    source = StaticParameterSource(
        rich_parameters={"tv-1": [ParameterDefinition(name="size")]},
        build_parameters={"build-1": []},
    )
    popover = _popover(classic_workspace, source, task_manager)
    popover.open_popover()

    link = popover.content.findChild(HelpTooltipLink)
    assert link.href.endswith("/admin/templates/extending-templates/parameters#ephemeral-parameters")


def test_fetch_failure_shows_error_banner(qapp, classic_workspace, task_manager):
    """A failed fetch renders an inline banner instead of the form."""
    from PyQt6.QtWidgets import QLabel
    from pyqt_buildparams.protocols import StaticParameterSource
    from pyqt_buildparams.workflow import Loading

    popover = _popover(classic_workspace, StaticParameterSource(), task_manager)
    workflow = popover.open_popover()

    assert isinstance(workflow.state, Loading)
    banner = popover.content.findChild(QLabel, "build-parameters-error")
    assert "tv-1" in banner.text()


def test_reopen_ignores_stale_fetch(qapp, classic_workspace, region_source, deferred_task_manager):
    """A fetch from a dismissed open does not touch the new instance."""
    from pyqt_buildparams.workflow import Closed, FormReady

    popover = _popover(classic_workspace, region_source, deferred_task_manager)
    first = popover.open_popover()
    popover.close_popover()
    second = popover.open_popover()

    deferred_task_manager.flush()

    assert first is not second
    assert isinstance(first.state, Closed)
    assert isinstance(second.state, FormReady)
    assert popover.workflow is second


def test_renderer_fails_loud_for_unknown_state(qapp):
    """The render dispatcher has one handler per state and rejects anything else."""
    from pyqt_buildparams.protocols import BuildParamsConfig
    from pyqt_buildparams.theming import ColorScheme
    from pyqt_buildparams.widgets import PopoverContentRenderer

    renderer = PopoverContentRenderer(BuildParamsConfig(), ColorScheme())

    assert set(renderer.get_supported_types()) == {
        "Loading", "RedirectEligible", "NoEphemeralParameters", "FormReady", "Closed"
    }
    with pytest.raises(ValueError):
        renderer.dispatch(object(), None)


def test_workflow_changed_announces_each_open(qapp, classic_workspace, region_source, task_manager):
    """Every new workflow instance is announced; returning the open one is not."""
    popover = _popover(classic_workspace, region_source, task_manager)
    announced = []
    popover.workflow_changed.connect(announced.append)

    first = popover.open_popover()
    assert popover.open_popover() is first
    popover.close_popover()
    second = popover.open_popover()

    assert announced == [first, second]


def test_light_theme_styles_popover_buttons(qapp, modern_workspace, region_source, task_manager):
    """Popover buttons take their colors from the color scheme."""
    from PyQt6.QtWidgets import QPushButton
    from pyqt_buildparams.theming import ColorScheme
    from pyqt_buildparams.widgets import BuildParametersPopover

    scheme = ColorScheme.create_light_theme()
    popover = BuildParametersPopover(
        modern_workspace, on_submit=lambda p: None, label="Build options",
        source=region_source, task_manager=task_manager, color_scheme=scheme,
    )
    popover.open_popover()

    button = popover.content.findChild(QPushButton, "build-parameters-redirect-button")
    assert scheme.to_hex(scheme.button_bg) in button.styleSheet()
    assert scheme.to_hex(scheme.button_text) in button.styleSheet()
    assert scheme.to_hex(scheme.panel_bg) in popover.content.styleSheet()
