"""
Edit state and submission packaging for the build parameters form.

The controller owns the FormState for one open popover. Fields are
addressed by their index in definition order, which is also the render
order. Validation belongs to the field widgets; the controller only
records what they report and forwards whatever value they commit.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from pyqt_buildparams.exceptions import FormStateMismatchError
from .autofill import filter_ephemeral, get_initial_parameter_values
from .parameter_types import (
    AutofillSource,
    AutofillValue,
    BuildParameterValue,
    FormState,
    ParameterDefinition,
    WorkspaceBuildRequest,
)

logger = logging.getLogger(__name__)

FORM_FIELD_ROOT = "rich_parameter_values"


@dataclass(frozen=True)
class FieldHelpers:
    """Everything a field widget needs to render one parameter."""
    name: str                    # Form path, e.g. "rich_parameter_values[0].value"
    id: str
    value: str
    helper_text: str             # Parameter description
    error: Optional[str] = None  # Last error reported by the field widget

    @property
    def has_error(self) -> bool:
        return bool(self.error)


class ParameterFormController:
    """
    Track edits to the form state and package them for submission.

    Examples:
        controller = ParameterFormController.from_parameters(definitions, prior_values)
        controller.set_value(0, "us-west")
        request = controller.submit()  # [BuildParameterValue("region", "us-west")]
    """

    def __init__(self, definitions: Sequence[ParameterDefinition], form_state: FormState):
        """
        Args:
            definitions: The ephemeral parameter definitions, in schema order
            form_state: Initial values, index-aligned with definitions

        Raises:
            FormStateMismatchError: if form_state is not aligned with definitions
        """
        self._definitions: List[ParameterDefinition] = list(definitions)
        self._values: List[AutofillValue] = list(form_state)
        self._errors: Dict[int, str] = {}
        self._check_alignment()

    @classmethod
    def from_parameters(
        cls,
        definitions: Sequence[ParameterDefinition],
        prior_values: Sequence[BuildParameterValue],
    ) -> "ParameterFormController":
        """Build a controller for the ephemeral subset of ``definitions``."""
        return cls(
            filter_ephemeral(definitions),
            get_initial_parameter_values(definitions, prior_values),
        )

    def _check_alignment(self) -> None:
        if len(self._definitions) != len(self._values):
            raise FormStateMismatchError(
                f"Form state has {len(self._values)} value(s) for "
                f"{len(self._definitions)} definition(s)"
            )
        seen = set()
        for index, (definition, value) in enumerate(zip(self._definitions, self._values)):
            if definition.name != value.name:
                raise FormStateMismatchError(
                    f"Value '{value.name}' at index {index} does not match "
                    f"definition '{definition.name}'"
                )
            if value.name in seen:
                raise FormStateMismatchError(f"Duplicate parameter '{value.name}'")
            seen.add(value.name)

    # ========== READ ACCESS ==========

    @property
    def definitions(self) -> List[ParameterDefinition]:
        return list(self._definitions)

    @property
    def values(self) -> List[AutofillValue]:
        return list(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._values)

    # ========== EDITING ==========

    def set_value(self, index: int, value: str) -> None:
        """
        Commit a field value reported by the field widget.

        An out-of-range index is a programming error; it is logged and ignored.
        """
        if not self._in_range(index):
            logger.warning(f"set_value index {index} out of range for {len(self._values)} field(s)")
            return
        current = self._values[index]
        self._values[index] = AutofillValue(
            name=current.name,
            value=value,
            source=AutofillSource.USER_ENTERED,
        )
        logger.debug(f"Field {index} ({current.name}) set by user")

    def report_field_error(self, index: int, message: Optional[str]) -> None:
        """Record (or clear, with None) the validation message a field widget shows."""
        if not self._in_range(index):
            logger.warning(f"report_field_error index {index} out of range")
            return
        if message:
            self._errors[index] = message
        else:
            self._errors.pop(index, None)

    def field_helpers(self, index: int) -> FieldHelpers:
        """
        Look up the rendering helpers for one field.

        Raises:
            IndexError: if index is out of range
        """
        if not self._in_range(index):
            raise IndexError(f"No field at index {index}")
        name = f"{FORM_FIELD_ROOT}[{index}].value"
        return FieldHelpers(
            name=name,
            id=name,
            value=self._values[index].value,
            helper_text=self._definitions[index].description,
            error=self._errors.get(index),
        )

    # ========== SUBMISSION ==========

    def submit(self) -> WorkspaceBuildRequest:
        """
        Package the current form state as a build request.

        Provenance is dropped here; only name and value reach the
        build-trigger collaborator. Calling this twice without edits in
        between returns equal requests.
        """
        request = [value.to_build_parameter() for value in self._values]
        logger.debug(f"Packaged build request with {len(request)} parameter(s)")
        return request
