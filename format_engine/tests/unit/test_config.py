"""Unit tests for format_engine.config."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from format_engine.config import (
    DEFAULT_INDENT,
    DEFAULT_LINE_WIDTH,
    FormatOptions,
    KeywordCase,
    Settings,
    load_settings,
)

# ---------------------------------------------------------------------------
# FormatOptions
# ---------------------------------------------------------------------------


class TestFormatOptionsDefaults:
    def test_defaults(self):
        options = FormatOptions()
        assert options.indent == DEFAULT_INDENT == "  "
        assert options.keyword_case is KeywordCase.UPPER
        assert options.line_width == DEFAULT_LINE_WIDTH == 80
        assert options.lines_between_queries == 1

    def test_frozen(self):
        options = FormatOptions()
        with pytest.raises(ValidationError):
            options.line_width = 100  # type: ignore[misc]


class TestFormatOptionsValidation:
    @pytest.mark.parametrize("indent", [" ", "    ", "\t"])
    def test_valid_indents(self, indent: str):
        assert FormatOptions(indent=indent).indent == indent

    @pytest.mark.parametrize("indent", ["", "\t\t", " \t", "ab", "--"])
    def test_invalid_indents(self, indent: str):
        with pytest.raises(ValidationError, match="indent"):
            FormatOptions(indent=indent)

    def test_keyword_case_from_string(self):
        assert FormatOptions(keyword_case="lower").keyword_case is KeywordCase.LOWER

    def test_unknown_keyword_case(self):
        with pytest.raises(ValidationError):
            FormatOptions(keyword_case="title")

    @pytest.mark.parametrize("width", [19, 0, -1, 1001])
    def test_line_width_bounds(self, width: int):
        with pytest.raises(ValidationError):
            FormatOptions(line_width=width)

    @pytest.mark.parametrize("lines", [-1, 6])
    def test_lines_between_queries_bounds(self, lines: int):
        with pytest.raises(ValidationError):
            FormatOptions(lines_between_queries=lines)

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            FormatOptions(uppercase=True)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettingsDefaults:
    def test_default_dialect(self):
        assert Settings().dialect == "sql"

    def test_default_debug(self):
        settings = Settings()
        assert settings.debug is False
        assert settings.structured_logging is False

    def test_default_max_depth(self):
        assert Settings().max_depth == 100

    def test_default_format_options(self):
        assert Settings().format_options() == FormatOptions()


class TestSettingsEnvOverrides:
    def test_env_var_overrides_dialect(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SQLFMT_DIALECT", "tsql")
        assert Settings().dialect == "tsql"

    def test_env_var_overrides_keyword_case(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SQLFMT_KEYWORD_CASE", "lower")
        assert Settings().keyword_case is KeywordCase.LOWER

    def test_env_var_overrides_line_width(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SQLFMT_LINE_WIDTH", "120")
        assert Settings().format_options().line_width == 120

    def test_env_var_use_tabs(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SQLFMT_USE_TABS", "true")
        assert Settings().format_options().indent == "\t"

    def test_invalid_env_value(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SQLFMT_MAX_DEPTH", "0")
        with pytest.raises(ValidationError):
            Settings()


class TestFormatOptionsFromSettings:
    def test_indent_width(self):
        assert Settings(indent_width=4).format_options().indent == "    "

    def test_tabs_win_over_width(self):
        assert Settings(indent_width=4, use_tabs=True).format_options().indent == "\t"

    def test_all_fields_carried(self):
        options = Settings(
            keyword_case=KeywordCase.PRESERVE,
            line_width=40,
            lines_between_queries=0,
        ).format_options()
        assert options.keyword_case is KeywordCase.PRESERVE
        assert options.line_width == 40
        assert options.lines_between_queries == 0


class TestLoadSettings:
    def test_overrides(self):
        settings = load_settings(dialect="mysql", line_width=100)
        assert settings.dialect == "mysql"
        assert settings.line_width == 100

    def test_debug_logs_summary(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level("INFO", logger="format_engine.config"):
            load_settings(debug=True)
        assert "Loaded settings" in caplog.text

    def test_invalid_override(self):
        with pytest.raises(ValidationError):
            load_settings(indent_width=0)
