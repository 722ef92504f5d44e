"""Utility modules."""

from .error import (
    GemfloatError,
    MissingCredentialError,
    ProcessAlreadyCompletedError,
    format_error,
)
from .log import Log

__all__ = [
    "GemfloatError",
    "Log",
    "MissingCredentialError",
    "ProcessAlreadyCompletedError",
    "format_error",
]
