"""Tests for the popover workflow state machine."""

import pytest


def _parameters(definitions, prior=()):
    from pyqt_buildparams.forms.parameter_types import WorkspaceParameters

    return WorkspaceParameters(
        template_version_rich_parameters=tuple(definitions),
        build_parameters=tuple(prior),
    )


def _workflow(workspace, submitted=None, navigator=None):
    from pyqt_buildparams.workflow import PopoverWorkflow

    submitted = submitted if submitted is not None else []
    return PopoverWorkflow(workspace, on_submit=submitted.append, navigator=navigator)


def test_starts_loading(classic_workspace):
    """A new workflow waits for parameter data."""
    from pyqt_buildparams.workflow import Loading

    workflow = _workflow(classic_workspace)

    assert workflow.state == Loading()


def test_classic_flow_with_ephemeral_parameters_shows_form(
    classic_workspace, region_definitions, region_prior_values
):
    """Classic flow with ephemeral parameters enters FormReady with autofilled values."""
    from pyqt_buildparams.forms.parameter_types import AutofillSource
    from pyqt_buildparams.workflow import FormReady

    workflow = _workflow(classic_workspace)
    assert workflow.resolve(workflow.instance_id, _parameters(region_definitions, region_prior_values))

    assert isinstance(workflow.state, FormReady)
    values = workflow.state.controller.values
    assert [(v.name, v.value, v.source) for v in values] == [
        ("region", "us-east", AutofillSource.ACTIVE_BUILD)
    ]


@pytest.mark.parametrize("classic", [True, False])
def test_no_ephemeral_parameters(classic, workspace_factory):
    """Scenario B: an all-standing schema shows the informational view on any flow."""
    from pyqt_buildparams.forms.parameter_types import ParameterDefinition
    from pyqt_buildparams.workflow import EPHEMERAL_PARAMETERS_DOCS_PATH, NoEphemeralParameters

    workflow = _workflow(workspace_factory(classic=classic))
    workflow.resolve(workflow.instance_id, _parameters([ParameterDefinition(name="size")]))

    assert isinstance(workflow.state, NoEphemeralParameters)
    assert workflow.state.docs_url == "https://coder.com/docs" + EPHEMERAL_PARAMETERS_DOCS_PATH
    assert workflow.submit() is None


def test_non_classic_flow_redirects(modern_workspace, navigator):
    """Scenario C: non-classic flow with an ephemeral parameter never shows the form."""
    from pyqt_buildparams.forms.parameter_types import ParameterDefinition
    from pyqt_buildparams.workflow import Closed, CloseReason, RedirectEligible

    submitted = []
    workflow = _workflow(modern_workspace, submitted, navigator)
    definition = ParameterDefinition(name="region", ephemeral=True)
    workflow.resolve(workflow.instance_id, _parameters([definition]))

    assert isinstance(workflow.state, RedirectEligible)
    assert workflow.state.parameters == (definition,)
    assert workflow.submit() is None

    assert workflow.go_to_settings() is True
    assert workflow.state == Closed(reason=CloseReason.REDIRECTED)
    assert navigator.paths == ["/@alice/dev/settings/parameters"]
    assert submitted == []


def test_redirect_without_navigator_raises_after_closing(modern_workspace):
    """A missing navigator is reported loudly, but the popover still closes."""
    from pyqt_buildparams.exceptions import NavigationUnavailableError
    from pyqt_buildparams.forms.parameter_types import ParameterDefinition
    from pyqt_buildparams.protocols import register_navigator

    register_navigator(None)
    workflow = _workflow(modern_workspace)
    workflow.resolve(workflow.instance_id, _parameters([ParameterDefinition(name="r", ephemeral=True)]))

    with pytest.raises(NavigationUnavailableError):
        workflow.go_to_settings()
    assert workflow.is_closed


def test_submit_closes_before_calling_back(classic_workspace, region_definitions, region_prior_values):
    """Scenario D through the workflow: close first, then hand off the request once."""
    from pyqt_buildparams.forms.parameter_types import BuildParameterValue
    from pyqt_buildparams.workflow import Closed, CloseReason

    states_at_callback = []
    workflow = None

    def on_submit(request):
        states_at_callback.append(workflow.state)
        # Re-entrant submit from inside the callback is dropped
        assert workflow.submit() is None

    from pyqt_buildparams.workflow import PopoverWorkflow
    workflow = PopoverWorkflow(classic_workspace, on_submit=on_submit)
    workflow.resolve(workflow.instance_id, _parameters(region_definitions, region_prior_values))
    workflow.set_value(0, "us-west")

    request = workflow.submit()

    assert request == [BuildParameterValue(name="region", value="us-west")]
    assert states_at_callback == [Closed(reason=CloseReason.SUBMITTED)]


def test_double_submit_calls_back_once(classic_workspace, region_definitions, region_prior_values):
    """A second click after submission does not trigger another build."""
    submitted = []
    workflow = _workflow(classic_workspace, submitted)
    workflow.resolve(workflow.instance_id, _parameters(region_definitions, region_prior_values))

    workflow.submit()
    workflow.submit()

    assert len(submitted) == 1


def test_dismiss_discards_edits(classic_workspace, region_definitions, region_prior_values):
    """Dismissal closes without calling the build trigger."""
    from pyqt_buildparams.workflow import Closed, CloseReason

    submitted = []
    workflow = _workflow(classic_workspace, submitted)
    workflow.resolve(workflow.instance_id, _parameters(region_definitions, region_prior_values))
    workflow.set_value(0, "us-west")

    workflow.dismiss()

    assert workflow.state == Closed(reason=CloseReason.DISMISSED)
    assert workflow.submit() is None
    assert submitted == []


def test_resolution_after_dismiss_is_ignored(classic_workspace, region_definitions):
    """A fetch that settles after dismissal does not revive the workflow."""
    from pyqt_buildparams.workflow import Closed

    workflow = _workflow(classic_workspace)
    workflow.dismiss()

    assert workflow.resolve(workflow.instance_id, _parameters(region_definitions)) is False
    assert isinstance(workflow.state, Closed)


def test_resolution_for_other_instance_is_ignored(classic_workspace, region_definitions):
    """Results are keyed by instance token."""
    from pyqt_buildparams.workflow import Loading

    first = _workflow(classic_workspace)
    second = _workflow(classic_workspace)

    assert first.instance_id != second.instance_id
    assert second.resolve(first.instance_id, _parameters(region_definitions)) is False
    assert second.state == Loading()


def test_fetch_failure_shows_banner_and_stays_loading(classic_workspace):
    """A failed fetch keeps the form closed and records a banner message."""
    from pyqt_buildparams.exceptions import ParameterFetchError
    from pyqt_buildparams.workflow import Loading

    workflow = _workflow(classic_workspace)

    assert workflow.fail(workflow.instance_id, ParameterFetchError("service unavailable"))
    assert workflow.state == Loading(error="service unavailable")
    workflow.set_value(0, "x")
    assert workflow.submit() is None


def test_listeners_receive_each_transition(classic_workspace, region_definitions, region_prior_values):
    """Listeners see every state the workflow enters, in order."""
    from pyqt_buildparams.workflow import Closed, FormReady

    seen = []
    workflow = _workflow(classic_workspace)
    workflow.add_listener(lambda state: seen.append(type(state)))
    workflow.resolve(workflow.instance_id, _parameters(region_definitions, region_prior_values))
    workflow.submit()
    workflow.dismiss()

    assert seen == [FormReady, Closed]


def test_removed_listener_is_not_called(classic_workspace, region_definitions):
    """A removed listener misses later transitions; removing twice is harmless."""
    from pyqt_buildparams.workflow import Closed, FormReady

    kept, removed = [], []
    workflow = _workflow(classic_workspace)
    workflow.add_listener(lambda state: kept.append(type(state)))
    workflow.add_listener(removed.append)
    workflow.resolve(workflow.instance_id, _parameters(region_definitions))

    workflow.remove_listener(removed.append)
    workflow.remove_listener(removed.append)
    workflow.dismiss()

    assert kept == [FormReady, Closed]
    assert [type(state) for state in removed] == [FormReady]
