"""Request pipeline: payload, process runner, spinner, decoder and orchestrator."""

from .decoder import DecodedResult, decode
from .orchestrator import (
    CredentialProvider,
    EnvCredentialProvider,
    PendingRequest,
    RequestOrchestrator,
)
from .payload import RequestPayload, build_command
from .runner import ProcessHandle, ProcessResult, ProcessRunner
from .spinner import SpinnerController, SpinnerHandle

__all__ = [
    "CredentialProvider",
    "DecodedResult",
    "EnvCredentialProvider",
    "PendingRequest",
    "ProcessHandle",
    "ProcessResult",
    "ProcessRunner",
    "RequestOrchestrator",
    "RequestPayload",
    "SpinnerController",
    "SpinnerHandle",
    "build_command",
    "decode",
]
