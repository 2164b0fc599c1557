"""
Value types for workspace build parameters.

Frozen records shared by the resolver, the form controller and the popover
workflow. Records coming from the metadata service are built from their
API dict shape with ``from_dict``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


def _text(value: Any) -> str:
    """API string field; null reads as empty."""
    return "" if value is None else str(value)


class AutofillSource(Enum):
    """Provenance of a pre-filled form value. UI-only, never sent on the wire."""
    ACTIVE_BUILD = "active_build"
    USER_ENTERED = "user_entered"
    DEFAULT = "default"


@dataclass(frozen=True)
class ParameterOption:
    """One selectable value of a parameter with a fixed option list."""
    name: str
    value: str
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParameterOption":
        return cls(
            name=data["name"],
            value=_text(data["value"]),
            description=_text(data.get("description")),
        )


@dataclass(frozen=True)
class ParameterDefinition:
    """
    A parameter declared by a template version.

    Identity is ``name``. Only ``ephemeral`` affects resolution; ``type`` and
    ``options`` pick the input widget, ``description`` becomes helper text.
    """
    name: str
    display_name: str = ""
    description: str = ""
    ephemeral: bool = False
    type: str = "string"
    options: Tuple[ParameterOption, ...] = ()
    default_value: str = ""
    required: bool = False
    mutable: bool = True

    @property
    def label(self) -> str:
        """Display name, falling back to the parameter name."""
        return self.display_name or self.name

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParameterDefinition":
        return cls(
            name=data["name"],
            display_name=_text(data.get("display_name")),
            description=_text(data.get("description")),
            ephemeral=bool(data.get("ephemeral", False)),
            type=data.get("type", "string"),
            options=tuple(ParameterOption.from_dict(o) for o in data.get("options") or ()),
            default_value=_text(data.get("default_value")),
            required=bool(data.get("required", False)),
            mutable=bool(data.get("mutable", True)),
        )


@dataclass(frozen=True)
class BuildParameterValue:
    """A parameter value as supplied to (or recorded by) a workspace build."""
    name: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        """Wire shape accepted by the build-trigger collaborator."""
        return {"name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BuildParameterValue":
        return cls(name=data["name"], value=_text(data.get("value")))


@dataclass(frozen=True)
class AutofillValue:
    """A build parameter value tagged with where it came from."""
    name: str
    value: str
    source: AutofillSource

    def to_build_parameter(self) -> BuildParameterValue:
        """Drop provenance for submission."""
        return BuildParameterValue(name=self.name, value=self.value)


# Index-aligned with the ephemeral ParameterDefinition sequence
FormState = List[AutofillValue]

# Terminal artifact handed to the build-trigger collaborator
WorkspaceBuildRequest = List[BuildParameterValue]


@dataclass(frozen=True)
class WorkspaceParameters:
    """Result of the inbound parameter query for one workspace."""
    template_version_rich_parameters: Tuple[ParameterDefinition, ...] = ()
    build_parameters: Tuple[BuildParameterValue, ...] = ()

    @property
    def ephemeral_parameters(self) -> List[ParameterDefinition]:
        return [p for p in self.template_version_rich_parameters if p.ephemeral]


@dataclass(frozen=True)
class Workspace:
    """The host application's view of a workspace."""
    id: str
    name: str
    owner_name: str
    template_use_classic_parameter_flow: bool = False
    template_version_id: Optional[str] = None
    latest_build_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Workspace":
        latest_build = data.get("latest_build") or {}
        known = {"id", "name", "owner_name", "template_use_classic_parameter_flow", "latest_build"}
        return cls(
            id=data["id"],
            name=data["name"],
            owner_name=data["owner_name"],
            template_use_classic_parameter_flow=bool(
                data.get("template_use_classic_parameter_flow", False)
            ),
            template_version_id=latest_build.get("template_version_id"),
            latest_build_id=latest_build.get("id"),
            extra={k: v for k, v in data.items() if k not in known},
        )
