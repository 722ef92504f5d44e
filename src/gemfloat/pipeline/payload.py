"""Request payload for the ``generateContent`` endpoint and the curl invocation that sends it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field

from ..core.config_schema import Config


class TextPart(BaseModel):
    text: str

    model_config = ConfigDict(frozen=True)


class Content(BaseModel):
    parts: Tuple[TextPart, ...] = Field(..., min_length=1, max_length=1)

    model_config = ConfigDict(frozen=True)


class RequestPayload(BaseModel):
    """``{"contents": [{"parts": [{"text": ...}]}]}`` with exactly one text part."""

    contents: Tuple[Content, ...] = Field(..., min_length=1, max_length=1)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_text(cls, text: str) -> "RequestPayload":
        return cls(contents=(Content(parts=(TextPart(text=text),)),))

    @classmethod
    def from_json(cls, data: str | bytes) -> "RequestPayload":
        return cls.model_validate_json(data)

    @property
    def text(self) -> str:
        return self.contents[0].parts[0].text

    def to_json(self) -> str:
        return self.model_dump_json()


def endpoint(config: Config, api_key: str) -> str:
    """Full request URL including the ``key`` query parameter."""
    return (
        f"https://{config.api_host}/v1beta/models/{config.model}:generateContent"
        f"?key={quote(api_key, safe='')}"
    )


def redact(url: str) -> str:
    """Hide the API key in a URL built by :func:`endpoint`."""
    head, sep, _ = url.partition("?key=")
    return f"{head}{sep}***" if sep else url


@dataclass(frozen=True)
class CurlCommand:
    """Program, arguments and stdin for one request."""

    program: str
    args: List[str]
    stdin: bytes
    url: str

    @property
    def display(self) -> str:
        return f"{self.program} POST {redact(self.url)}"


def build_command(config: Config, api_key: str, payload: RequestPayload) -> CurlCommand:
    """curl posting the payload from stdin, silent apart from errors."""
    url = endpoint(config, api_key)
    args = [
        "-sS",
        url,
        "-H",
        "Content-Type: application/json",
        "-X",
        "POST",
        "--data-binary",
        "@-",
    ]
    return CurlCommand(program=config.curl, args=args, stdin=payload.to_json().encode("utf-8"), url=url)
