"""Formatter configuration.

:class:`FormatOptions` is the render configuration handed to the layout
engine.  :class:`Settings` loads process-wide defaults from environment
variables with the ``SQLFMT_`` prefix and turns them into options.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_INDENT = "  "
DEFAULT_LINE_WIDTH = 80


class KeywordCase(str, Enum):
    PRESERVE = "preserve"
    UPPER = "upper"
    LOWER = "lower"


class FormatOptions(BaseModel):
    """Render configuration for the layout engine.

    Unrecognized values are rejected at construction with a
    ``pydantic.ValidationError``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    indent: str = Field(
        default=DEFAULT_INDENT,
        description="One indentation unit: one or more spaces, or a single tab.",
    )
    keyword_case: KeywordCase = KeywordCase.UPPER
    line_width: int = Field(
        default=DEFAULT_LINE_WIDTH,
        ge=20,
        le=1000,
        description="Width hint used to decide when to wrap; never changes token order.",
    )
    lines_between_queries: int = Field(default=1, ge=0, le=5)

    @field_validator("indent")
    @classmethod
    def _indent_unit(cls, v: str) -> str:
        if v == "\t" or (v and set(v) == {" "}):
            return v
        raise ValueError("indent must be one or more spaces or a single tab")


class Settings(BaseSettings):
    """Formatter defaults loaded from environment variables with SQLFMT_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="SQLFMT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    debug: bool = False
    structured_logging: bool = False

    dialect: str = "sql"
    indent_width: int = Field(default=2, ge=1, le=16)
    use_tabs: bool = False
    keyword_case: KeywordCase = KeywordCase.UPPER
    line_width: int = Field(default=DEFAULT_LINE_WIDTH, ge=20, le=1000)
    lines_between_queries: int = Field(default=1, ge=0, le=5)

    # Parser
    max_depth: int = Field(default=100, ge=1, le=150)

    def format_options(self) -> FormatOptions:
        """Build the render configuration these settings describe."""
        return FormatOptions(
            indent="\t" if self.use_tabs else " " * self.indent_width,
            keyword_case=self.keyword_case,
            line_width=self.line_width,
            lines_between_queries=self.lines_between_queries,
        )


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment, with optional overrides for testing."""
    settings = Settings(**overrides)  # type: ignore[arg-type]

    if settings.debug:
        logger.info("Loaded settings: dialect=%s, line_width=%d", settings.dialect, settings.line_width)

    return settings
