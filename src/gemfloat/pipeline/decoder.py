"""Decoding of ``generateContent`` responses into display text and metadata.

``decode`` never raises: malformed output, API error bodies and empty
results all come back as a :class:`DecodedResult` carrying a diagnostic.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from ..util.log import Log

log = Log.create({"service": "decoder"})

NOT_AVAILABLE = "N/A"
NO_RESPONSE_TEXT = "No response text found."
DECODE_FAILED_PREFIX = "Failed to decode response: "
META_FAILED_PREFIX = "Error retrieving meta information. "


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="allow")


class Part(_Lenient):
    text: Optional[str] = None


class CandidateContent(_Lenient):
    parts: Optional[List[Part]] = None


class Candidate(_Lenient):
    content: Optional[CandidateContent] = None
    finishReason: Optional[Any] = None


class UsageMetadata(_Lenient):
    promptTokenCount: Optional[Any] = None
    candidatesTokenCount: Optional[Any] = None
    totalTokenCount: Optional[Any] = None


class GenerateContentResponse(_Lenient):
    candidates: Optional[List[Candidate]] = None
    modelVersion: Optional[Any] = None
    usageMetadata: Optional[UsageMetadata] = None


@dataclass(frozen=True)
class DecodedResult:
    response_text: str
    meta: str
    ok: bool = True


def _or_na(value: Any) -> str:
    return NOT_AVAILABLE if value is None else str(value)


def format_meta(response: GenerateContentResponse, candidate: Candidate) -> str:
    usage = response.usageMetadata or UsageMetadata()
    usage_info = (
        f"Prompt tokens: {_or_na(usage.promptTokenCount)}, "
        f"Candidate tokens: {_or_na(usage.candidatesTokenCount)}, "
        f"Total tokens: {_or_na(usage.totalTokenCount)}"
    )
    return (
        f"Finish Reason: {_or_na(candidate.finishReason)} | "
        f"Model Version: {_or_na(response.modelVersion)}\n"
        f"Usage: {usage_info}"
    )


def _first_text(candidate: Candidate) -> str:
    parts = candidate.content.parts if candidate.content else None
    if not parts or parts[0].text is None:
        return NO_RESPONSE_TEXT
    return parts[0].text


def _failure(raw: str, stderr_lines: Sequence[str]) -> DecodedResult:
    return DecodedResult(
        response_text=DECODE_FAILED_PREFIX + raw,
        meta=META_FAILED_PREFIX + "\n".join(stderr_lines),
        ok=False,
    )


def decode(stdout_lines: Sequence[str], stderr_lines: Sequence[str] = ()) -> DecodedResult:
    """Turn buffered process output into a :class:`DecodedResult`."""
    raw = "\n".join(stdout_lines)
    try:
        response = GenerateContentResponse.model_validate(json.loads(raw))
    except (ValueError, RecursionError) as e:
        log.warn("response is not a valid generateContent body", {"error": e, "bytes": len(raw)})
        return _failure(raw, stderr_lines)

    if not response.candidates:
        log.warn("response has no candidates", {"bytes": len(raw)})
        return _failure(raw, stderr_lines)

    candidate = response.candidates[0]
    return DecodedResult(response_text=_first_text(candidate), meta=format_meta(response, candidate))
