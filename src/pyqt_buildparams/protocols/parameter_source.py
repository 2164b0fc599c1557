"""Parameter source protocol for pluggable metadata lookup.

Allows applications to provide their own workspace metadata client
without pyqt-buildparams depending on a specific API client.
"""

from typing import Protocol, Optional, Dict, Sequence, List

from pyqt_buildparams.forms.parameter_types import (
    BuildParameterValue,
    ParameterDefinition,
)


class WorkspaceParameterSource(Protocol):
    """Protocol for services that expose template schemas and build values.

    Example:
        from pyqt_buildparams.protocols import register_parameter_source
        from myapp.api import MyCoderClient

        register_parameter_source(MyCoderClient())
    """

    def get_template_version_rich_parameters(
        self, template_version_id: str
    ) -> Sequence[ParameterDefinition]:
        """Get the parameters declared by a template version, in schema order."""
        ...

    def get_workspace_build_parameters(self, build_id: str) -> Sequence[BuildParameterValue]:
        """Get the parameter values a workspace build was started with."""
        ...


class StaticParameterSource:
    """In-memory source keyed by template version id and build id."""

    def __init__(
        self,
        rich_parameters: Optional[Dict[str, Sequence[ParameterDefinition]]] = None,
        build_parameters: Optional[Dict[str, Sequence[BuildParameterValue]]] = None,
    ):
        self._rich_parameters = dict(rich_parameters or {})
        self._build_parameters = dict(build_parameters or {})

    def get_template_version_rich_parameters(
        self, template_version_id: str
    ) -> List[ParameterDefinition]:
        if template_version_id not in self._rich_parameters:
            raise KeyError(f"Unknown template version: {template_version_id}")
        return list(self._rich_parameters[template_version_id])

    def get_workspace_build_parameters(self, build_id: str) -> List[BuildParameterValue]:
        if build_id not in self._build_parameters:
            raise KeyError(f"Unknown workspace build: {build_id}")
        return list(self._build_parameters[build_id])


# Global source instance (set by application)
_parameter_source: Optional[WorkspaceParameterSource] = None


def register_parameter_source(source: WorkspaceParameterSource) -> None:
    """Register a parameter source implementation.

    Args:
        source: Object implementing WorkspaceParameterSource
    """
    global _parameter_source
    _parameter_source = source


def get_parameter_source() -> Optional[WorkspaceParameterSource]:
    """Get the registered parameter source.

    Returns:
        Registered source or None if not registered
    """
    return _parameter_source
