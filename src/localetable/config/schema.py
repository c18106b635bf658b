"""
Pydantic models for localetable configuration.

Defines all configuration schemas using Pydantic v2 for validation,
defaults, and serialization.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class LoaderConfig(BaseModel):
    """Translation table loader configuration."""

    default_locale: str = Field(
        default="en-US",
        description="Locale that must be the first header column and serves as fallback.",
    )
    table: Path | None = Field(
        default=None,
        description="Path to the translation table (CSV).",
    )
    keys: Path | None = Field(
        default=None,
        description="Path to a YAML key registry (list of keys or key -> host ID mapping).",
    )

    @field_validator("default_locale")
    @classmethod
    def _non_blank_locale(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("default_locale cannot be blank")
        return v

    model_config = {"extra": "forbid"}


class LoggingConfig(BaseModel):
    """Logging system configuration."""

    level: Literal["debug", "info", "warning", "error"] = "warning"
    file: Path | None = None
    verbose: int = 0

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: object) -> object:
        """Accept 'WARN' / 'Warning' style spellings."""
        if isinstance(v, str):
            v = v.strip().lower()
            return "warning" if v == "warn" else v
        return v

    model_config = {"extra": "forbid"}


class AppConfig(BaseModel):
    """Complete application configuration.

    This is the root of the configuration tree. It combines all sections
    and is the entry point for validation.
    """

    loader: LoaderConfig = Field(default_factory=LoaderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"extra": "forbid"}
