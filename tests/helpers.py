"""Shared test helpers."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional, Sequence

from gemfloat.pipeline.runner import ProcessHandle, ProcessResult


def gemini_body(
    text: Optional[str] = "Hello from Gemini",
    *,
    finish_reason: Optional[str] = "STOP",
    model_version: Optional[str] = "gemini-2.0-flash",
    usage: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """A ``generateContent`` response body; None drops the field."""
    candidate: dict[str, Any] = {}
    if text is not None:
        candidate["content"] = {"parts": [{"text": text}], "role": "model"}
    if finish_reason is not None:
        candidate["finishReason"] = finish_reason
    body: dict[str, Any] = {"candidates": [candidate]}
    if model_version is not None:
        body["modelVersion"] = model_version
    body["usageMetadata"] = usage if usage is not None else {
        "promptTokenCount": 5,
        "candidatesTokenCount": 7,
        "totalTokenCount": 12,
    }
    return body


def pretty_lines(body: Any) -> list[str]:
    """Body as the non-empty lines curl would print."""
    return [line for line in json.dumps(body, indent=2).splitlines() if line]


class FakeCredentials:
    def __init__(self, key: Optional[str] = "test-key") -> None:
        self.key = key

    def api_key(self) -> Optional[str]:
        return self.key


class FakeRunner:
    """Records launches and resolves each one after ``delay`` seconds."""

    def __init__(self, result: Optional[ProcessResult] = None, delay: float = 0.0) -> None:
        self.result = result or ProcessResult(stdout=pretty_lines(gemini_body()))
        self.delay = delay
        self.calls: list[tuple[str, list[str], Optional[bytes]]] = []

    def start(
        self,
        program: str,
        args: Sequence[str] = (),
        stdin: Optional[bytes] = None,
        **_: Any,
    ) -> ProcessHandle:
        self.calls.append((program, list(args), stdin))
        handle = ProcessHandle(program)
        asyncio.get_running_loop().call_later(self.delay, handle.resolve, self.result)
        return handle
