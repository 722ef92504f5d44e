"""Application errors and their user-facing formatting."""

from typing import Any


class GemfloatError(Exception):
    """Base class for errors raised by gemfloat."""


class MissingCredentialError(GemfloatError):
    """The API key environment variable is unset or empty."""

    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"{variable} is missing from your system environment!")


class ProcessAlreadyCompletedError(GemfloatError):
    """A process handle was resolved a second time."""


def format_error(error: Any) -> str | None:
    """Format known application errors into user-friendly messages.

    Returns None if the error type is not recognized.
    """
    if isinstance(error, MissingCredentialError):
        return str(error)
    if isinstance(error, ProcessAlreadyCompletedError):
        return f"Request finished twice: {error}"

    from ..core.config import ConfigError

    if isinstance(error, ConfigError):
        return f"Configuration is invalid. {error}"
    return None

