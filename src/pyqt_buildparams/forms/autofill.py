"""
Autofill resolution for ephemeral build parameters.

Merges a template version's parameter schema with the values of the
workspace's active build into the initial form state. Schema order is
kept: it fixes display and submission order for the whole workflow.
"""

import logging
from typing import Dict, Iterable, List, Sequence

from .parameter_types import (
    AutofillSource,
    AutofillValue,
    BuildParameterValue,
    FormState,
    ParameterDefinition,
)

logger = logging.getLogger(__name__)


def filter_ephemeral(definitions: Iterable[ParameterDefinition]) -> List[ParameterDefinition]:
    """Keep ephemeral definitions, in schema order."""
    return [d for d in definitions if d.ephemeral]


def _index_prior_values(prior_values: Iterable[BuildParameterValue]) -> Dict[str, str]:
    """Map name -> value; the first occurrence of a repeated name wins."""
    index: Dict[str, str] = {}
    for prior in prior_values:
        if prior.name in index:
            logger.debug(f"Ignoring repeated prior value for '{prior.name}'")
            continue
        index[prior.name] = prior.value
    return index


def get_initial_parameter_values(
    definitions: Sequence[ParameterDefinition],
    prior_values: Sequence[BuildParameterValue],
) -> FormState:
    """
    Build the initial form state for the ephemeral subset of ``definitions``.

    Each ephemeral definition yields exactly one AutofillValue:
    the active build's value tagged ``ACTIVE_BUILD`` when one exists,
    otherwise an empty placeholder tagged ``DEFAULT``. A missing prior
    value is the normal case for a first fill, not an error.

    Args:
        definitions: All parameters declared by the template version
        prior_values: Parameter values of the workspace's active build

    Returns:
        FormState index-aligned with filter_ephemeral(definitions)
    """
    prior = _index_prior_values(prior_values)
    ephemeral = filter_ephemeral(definitions)

    form_state: FormState = []
    for definition in ephemeral:
        if definition.name in prior:
            form_state.append(AutofillValue(
                name=definition.name,
                value=prior[definition.name],
                source=AutofillSource.ACTIVE_BUILD,
            ))
        else:
            form_state.append(AutofillValue(
                name=definition.name,
                value="",
                source=AutofillSource.DEFAULT,
            ))

    unused = set(prior) - {d.name for d in ephemeral}
    if unused:
        logger.debug(f"Prior values not offered for editing: {sorted(unused)}")

    logger.debug(
        f"Resolved {len(form_state)} ephemeral parameter(s) from "
        f"{len(definitions)} definition(s), "
        f"{sum(v.source is AutofillSource.ACTIVE_BUILD for v in form_state)} from active build"
    )
    return form_state
