"""Application configuration management."""
from __future__ import annotations

import os
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .assembler import CITATION_COLUMN
from .logging import DEFAULT_LOG_LEVEL

DEFAULT_STYLE_URL = (
    "https://raw.githubusercontent.com/citation-style-language/styles/master/apa.csl"
)
DEFAULT_LOCALE_URL = (
    "https://raw.githubusercontent.com/citation-style-language/locales/master/locales-en-US.xml"
)
DEFAULT_SHEET_EXPORT_TEMPLATE = (
    "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv&gid=0"
)


class ConfigError(RuntimeError):
    """Raised when application configuration is invalid."""


class GeneratorConfig(BaseModel):
    """Validated configuration loaded from environment variables."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    style_url: str = Field(default=DEFAULT_STYLE_URL, description="Default CSL style location")
    locale_url: str = Field(default=DEFAULT_LOCALE_URL, description="CSL locale location")
    sheet_export_template: str = Field(
        default=DEFAULT_SHEET_EXPORT_TEMPLATE,
        description="CSV export endpoint with a {sheet_id} placeholder",
    )
    request_timeout: float = Field(
        default=15.0, gt=0, description="Timeout in seconds for remote fetches"
    )
    citation_column: str = Field(
        default=CITATION_COLUMN, min_length=1, description="Column appended to output rows"
    )
    user_agent: str = Field(default="apa-citation-generator/0.1", description="HTTP user agent")
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="Root log level")

    @field_validator("log_level")
    @classmethod
    def _normalise_log_level(cls, value: str) -> str:
        from logging import getLevelName

        candidate = value.upper()
        if isinstance(getLevelName(candidate), int):
            return candidate
        raise ValueError(f"Unsupported log level '{value}'")

    @field_validator("sheet_export_template")
    @classmethod
    def _require_placeholder(cls, value: str) -> str:
        if "{sheet_id}" not in value:
            raise ValueError("Sheet export template must contain '{sheet_id}'")
        return value

    @classmethod
    def from_env(cls) -> GeneratorConfig:
        """Load configuration from environment variables (respecting .env)."""
        load_dotenv()
        defaults = cls.model_fields
        raw: dict[str, Any] = {
            "style_url": os.getenv("APA_STYLE_URL", defaults["style_url"].default),
            "locale_url": os.getenv("APA_LOCALE_URL", defaults["locale_url"].default),
            "sheet_export_template": os.getenv(
                "APA_SHEET_EXPORT_TEMPLATE", defaults["sheet_export_template"].default
            ),
            "request_timeout": os.getenv(
                "APA_REQUEST_TIMEOUT", defaults["request_timeout"].default
            ),
            "citation_column": os.getenv(
                "APA_CITATION_COLUMN", defaults["citation_column"].default
            ),
            "user_agent": os.getenv("APA_USER_AGENT", defaults["user_agent"].default),
            "log_level": os.getenv("LOG_LEVEL", defaults["log_level"].default),
        }
        try:
            return cls(**raw)
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc
