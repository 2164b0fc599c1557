"""Base configuration for the build parameters popover.

Provides hooks for applications to customize copy, links and sizing.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass
class BuildParamsConfig:
    """Configuration for build parameter popovers.

    Applications can subclass this to provide custom configuration.

    Attributes:
        docs_base_url: Prefix joined with documentation paths by docs_url()
        settings_path_template: Path of the workspace parameter settings page
        popover_width: Fixed width of the popover content in pixels
        content_padding: Padding around each popover section in pixels
        loading_text: Label shown while parameters are being fetched
    """

    docs_base_url: str = "https://coder.com/docs"
    settings_path_template: str = "/@{owner_name}/{workspace_name}/settings/parameters"
    popover_width: int = 304
    content_padding: int = 20
    loading_text: str = "Loading..."


# Global config instance (set by application)
_build_params_config: Optional[BuildParamsConfig] = None


def set_build_params_config(config: BuildParamsConfig) -> None:
    """Set the global build parameters configuration.

    Args:
        config: BuildParamsConfig instance
    """
    global _build_params_config
    _build_params_config = config


def get_build_params_config() -> BuildParamsConfig:
    """Get the current build parameters configuration.

    Returns:
        Current BuildParamsConfig or default if not set
    """
    if _build_params_config is None:
        return BuildParamsConfig()
    return _build_params_config


def docs_url(path: str, config: Optional[BuildParamsConfig] = None) -> str:
    """Join a documentation path onto the configured docs base URL."""
    config = config or get_build_params_config()
    return f"{config.docs_base_url.rstrip('/')}/{path.lstrip('/')}"
