"""Shared fixtures for CLI tests.

Rich wraps long lines at the terminal width, which would split file
paths in diagnostics; tests swap in a wide stderr console so assertions
can match whole messages.
"""

from __future__ import annotations

import pytest
from rich.console import Console
from typer.testing import CliRunner

from format_engine.pipeline import reset_tokenizer_cache
from format_engine.telemetry.profiling import ProfileCollector


@pytest.fixture(autouse=True)
def _reset_state(monkeypatch: pytest.MonkeyPatch):
    """Fresh collector, tokenizer cache and environment for each test."""
    for name in (
        "SQLFMT_DIALECT",
        "SQLFMT_KEYWORD_CASE",
        "SQLFMT_LINE_WIDTH",
        "SQLFMT_INDENT_WIDTH",
        "SQLFMT_USE_TABS",
        "SQLFMT_DEBUG",
        "SQLFMT_STRUCTURED_LOGGING",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("cli.app.console", Console(stderr=True, width=400))
    ProfileCollector.reset()
    reset_tokenizer_cache()
    yield
    ProfileCollector.reset()
    reset_tokenizer_cache()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()
