"""Tests for the parameter form controller."""

import pytest


@pytest.fixture
def controller(region_definitions, region_prior_values):
    from pyqt_buildparams.forms.parameter_form_controller import ParameterFormController

    return ParameterFormController.from_parameters(region_definitions, region_prior_values)


def test_set_value_then_submit(controller):
    """Scenario D: an edited value is what gets submitted."""
    from pyqt_buildparams.forms.parameter_types import BuildParameterValue

    controller.set_value(0, "us-west")

    assert controller.submit() == [BuildParameterValue(name="region", value="us-west")]


def test_set_value_tags_user_entered(controller):
    """Edits keep the name and re-tag provenance."""
    from pyqt_buildparams.forms.parameter_types import AutofillSource

    controller.set_value(0, "us-west")
    value = controller.values[0]

    assert value.name == "region"
    assert value.value == "us-west"
    assert value.source is AutofillSource.USER_ENTERED


def test_out_of_range_set_value_is_ignored(controller):
    """Out-of-range indexes leave the form state untouched."""
    before = controller.values

    controller.set_value(5, "x")
    controller.set_value(-1, "x")

    assert controller.values == before


def test_submit_is_idempotent(controller):
    """Two submits without edits in between produce equal requests."""
    first = controller.submit()
    second = controller.submit()

    assert first == second
    assert first is not second


def test_submit_drops_provenance(controller):
    """The submitted payload carries only name and value."""
    request = controller.submit()

    assert [p.to_dict() for p in request] == [{"name": "region", "value": "us-east"}]
    assert not hasattr(request[0], "source")


def test_empty_required_value_is_not_blocked():
    """Required-field validation is left to the field widgets."""
    from pyqt_buildparams.forms.parameter_form_controller import ParameterFormController
    from pyqt_buildparams.forms.parameter_types import ParameterDefinition

    definitions = [ParameterDefinition(name="token", ephemeral=True, required=True)]
    controller = ParameterFormController.from_parameters(definitions, [])

    assert [p.to_dict() for p in controller.submit()] == [{"name": "token", "value": ""}]


def test_field_helpers_report_path_description_and_error():
    """Helper lookup exposes the form path, description and last reported error."""
    from pyqt_buildparams.forms.parameter_form_controller import ParameterFormController
    from pyqt_buildparams.forms.parameter_types import ParameterDefinition

    definitions = [ParameterDefinition(name="region", description="Where to run", ephemeral=True)]
    controller = ParameterFormController.from_parameters(definitions, [])

    controller.report_field_error(0, "Value is required")
    helpers = controller.field_helpers(0)

    assert helpers.name == "rich_parameter_values[0].value"
    assert helpers.helper_text == "Where to run"
    assert helpers.error == "Value is required"
    assert helpers.has_error

    controller.report_field_error(0, None)
    assert controller.field_helpers(0).error is None

    with pytest.raises(IndexError):
        controller.field_helpers(1)


def test_misaligned_form_state_is_rejected():
    """A form state that does not match the definitions is a programming error."""
    from pyqt_buildparams.exceptions import FormStateMismatchError
    from pyqt_buildparams.forms.parameter_form_controller import ParameterFormController
    from pyqt_buildparams.forms.parameter_types import (
        AutofillSource, AutofillValue, ParameterDefinition
    )

    definitions = [ParameterDefinition(name="a", ephemeral=True)]

    with pytest.raises(FormStateMismatchError):
        ParameterFormController(definitions, [])
    with pytest.raises(FormStateMismatchError):
        ParameterFormController(definitions, [AutofillValue("b", "", AutofillSource.DEFAULT)])
