"""Inbound parameter query: template schema plus active build values."""

import logging

from pyqt_buildparams.exceptions import ParameterFetchError
from pyqt_buildparams.forms.parameter_types import Workspace, WorkspaceParameters
from pyqt_buildparams.protocols.parameter_source import WorkspaceParameterSource

logger = logging.getLogger(__name__)


def get_workspace_parameters(
    source: WorkspaceParameterSource, workspace: Workspace
) -> WorkspaceParameters:
    """
    Fetch the template version's parameter schema and the latest build's values.

    Both fetches must succeed; partial results are never returned.

    Raises:
        ParameterFetchError: if either fetch fails or the workspace has no build
    """
    if not workspace.template_version_id or not workspace.latest_build_id:
        raise ParameterFetchError(
            f"Workspace {workspace.owner_name}/{workspace.name} has no latest build"
        )

    try:
        rich_parameters = source.get_template_version_rich_parameters(workspace.template_version_id)
    except Exception as e:
        raise ParameterFetchError(
            f"Failed to fetch parameters for template version {workspace.template_version_id}: {e}",
            cause=e,
        ) from e

    try:
        build_parameters = source.get_workspace_build_parameters(workspace.latest_build_id)
    except Exception as e:
        raise ParameterFetchError(
            f"Failed to fetch parameters of build {workspace.latest_build_id}: {e}",
            cause=e,
        ) from e

    logger.debug(
        f"Fetched {len(rich_parameters)} definition(s) and "
        f"{len(build_parameters)} build value(s) for {workspace.owner_name}/{workspace.name}"
    )
    return WorkspaceParameters(
        template_version_rich_parameters=tuple(rich_parameters),
        build_parameters=tuple(build_parameters),
    )
