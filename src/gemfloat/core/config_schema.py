"""Configuration schema: Pydantic models for gemfloat config files."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_API_HOST = "generativelanguage.googleapis.com"
DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_API_KEY_ENV = "GEMINI_API_KEY"
SPINNER_FRAMES = ["-", "\\", "|", "/"]


class SpinnerConfig(BaseModel):
    """Loading animation settings."""
    interval_ms: int = Field(100, alias="intervalMs", gt=0)
    frames: List[str] = Field(default_factory=lambda: list(SPINNER_FRAMES))

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @field_validator("frames")
    @classmethod
    def _frames_not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("spinner frames cannot be empty")
        return value


class LayoutConfig(BaseModel):
    """Surface sizes as fractions of the host size."""
    loading_width: float = Field(0.5, alias="loadingWidth", gt=0, le=1)
    result_width: float = Field(0.8, alias="resultWidth", gt=0, le=1)
    result_height: float = Field(0.8, alias="resultHeight", gt=0, le=1)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: Optional[str] = None
    format: Optional[Literal["kv", "json", "pretty"]] = None
    console: Optional[bool] = None
    file: Optional[bool] = None
    dev_file: Optional[bool] = Field(None, alias="devFile")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class Config(BaseModel):
    """Main configuration schema."""
    schema_: Optional[str] = Field(None, alias="$schema")
    model: str = DEFAULT_MODEL
    api_host: str = Field(DEFAULT_API_HOST, alias="apiHost")
    api_key_env: str = Field(DEFAULT_API_KEY_ENV, alias="apiKeyEnv")
    curl: str = "curl"
    log_level: Optional[str] = Field(None, alias="logLevel")
    logging: Optional[LoggingConfig] = None
    spinner: SpinnerConfig = Field(default_factory=SpinnerConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)
