"""Build parameter exceptions."""


class BuildParametersError(Exception):
    """Base class for build parameter errors."""


class ParameterFetchError(BuildParametersError):
    """Raised when the parameter schema or prior build values cannot be fetched."""

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message)
        self.cause = cause


class FormStateMismatchError(BuildParametersError):
    """Raised when a form state is not index-aligned with its parameter definitions."""


class NavigationUnavailableError(BuildParametersError):
    """Raised when a redirect is requested but no navigator is registered."""
