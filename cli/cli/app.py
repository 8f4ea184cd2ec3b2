"""sqlfmt CLI application -- Typer-based front-end for the SQL formatter.

Formatted SQL goes to *stdout* (or back into the files with
``--in-place``); human-readable diagnostics go to *stderr* via Rich so
that the command composes cleanly in shell pipelines.

Exit codes: 0 on success, 1 on any error, 2 when ``--check`` finds input
that would be reformatted.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from format_engine.config import KeywordCase, load_settings
from format_engine.dialects import DIALECTS, DialectConfig
from format_engine.errors import ConfigurationError, SqlFormatError
from format_engine.pipeline import SqlFormatter
from format_engine.telemetry import ProfileCollector, configure_logging

logger = logging.getLogger(__name__)

EXIT_ERROR = 1
EXIT_CHECK_FAILED = 2

# ---------------------------------------------------------------------------
# App & global state
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="sqlfmt",
    help="sqlfmt - dialect-aware SQL formatter",
    no_args_is_help=True,
)
console = Console(stderr=True)

_json_output: bool = False


# ---------------------------------------------------------------------------
# Callback -- global options
# ---------------------------------------------------------------------------


@app.callback()
def _global_options(
    json_mode: bool = typer.Option(
        False,
        "--json/--no-json",
        help="Emit structured JSON to stdout instead of human-readable tables.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log pipeline stages at DEBUG level.",
        envvar="SQLFMT_DEBUG",
    ),
    log_json: bool = typer.Option(
        False,
        "--log-json",
        help="Write log records as single-line JSON.",
        envvar="SQLFMT_STRUCTURED_LOGGING",
    ),
) -> None:
    """Global options applied to every command."""
    global _json_output  # noqa: PLW0603
    _json_output = json_mode
    if debug or log_json:
        configure_logging(load_settings(debug=debug, structured_logging=log_json))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _fail(message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]")


def _as_file_text(formatted: str) -> str:
    """Formatter output as written to disk or stdout: one trailing newline."""
    return formatted + "\n" if formatted else ""


def _build_formatter(overrides: dict[str, Any]) -> SqlFormatter:
    settings = load_settings(**overrides)
    return SqlFormatter(
        settings.dialect,
        settings.format_options(),
        max_depth=settings.max_depth,
    )


def _display_profile() -> None:
    snapshot = ProfileCollector.get_instance().snapshot()
    if not snapshot:
        return
    table = Table(title="Pipeline timings", show_lines=False, expand=False)
    table.add_column("Operation", style="bold")
    table.add_column("Calls", justify="right")
    for heading in ("Total", "Mean", "p50", "p95", "Max"):
        table.add_column(f"{heading} (ms)", justify="right")
    for stats in snapshot:
        table.add_row(
            stats.operation,
            str(stats.calls),
            *(
                f"{value:.3f}"
                for value in (stats.total_ms, stats.mean_ms, stats.p50_ms, stats.p95_ms, stats.max_ms)
            ),
        )
    console.print(table)


# ---------------------------------------------------------------------------
# format
# ---------------------------------------------------------------------------


@app.command(name="format")
def format_command(
    paths: list[Path] | None = typer.Argument(
        None,
        help="SQL files to format. Reads stdin when omitted.",
        exists=True,
        dir_okay=False,
        resolve_path=True,
    ),
    dialect: str | None = typer.Option(
        None,
        "--dialect",
        "-d",
        help="SQL dialect (sql, tsql, mysql, postgresql).",
    ),
    indent_width: int | None = typer.Option(
        None,
        "--indent-width",
        help="Spaces per indentation level.",
    ),
    use_tabs: bool = typer.Option(
        False,
        "--tabs",
        help="Indent with a single tab instead of spaces.",
    ),
    keyword_case: KeywordCase | None = typer.Option(
        None,
        "--keyword-case",
        "-k",
        case_sensitive=False,
        help="Case of reserved words: preserve, upper or lower.",
    ),
    line_width: int | None = typer.Option(
        None,
        "--line-width",
        "-w",
        help="Width hint used to decide when to wrap.",
    ),
    lines_between_queries: int | None = typer.Option(
        None,
        "--lines-between-queries",
        help="Blank lines between statements.",
    ),
    check: bool = typer.Option(
        False,
        "--check",
        help="Do not write anything; exit 2 if any input would be reformatted.",
    ),
    in_place: bool = typer.Option(
        False,
        "--in-place",
        "-i",
        help="Rewrite the given files instead of printing to stdout.",
    ),
    profile: bool = typer.Option(
        False,
        "--profile",
        help="Print per-stage timings to stderr when done.",
    ),
) -> None:
    """Format SQL from files or stdin.

    Options not given on the command line fall back to ``SQLFMT_*``
    environment variables, then to the built-in defaults.

    Examples::

        sqlfmt format query.sql
        cat query.sql | sqlfmt format --dialect tsql
        sqlfmt format --check migrations/*.sql
        sqlfmt format -i -k lower --line-width 100 report.sql
    """
    overrides: dict[str, Any] = {
        name: value
        for name, value in (
            ("dialect", dialect),
            ("indent_width", indent_width),
            ("keyword_case", keyword_case),
            ("line_width", line_width),
            ("lines_between_queries", lines_between_queries),
        )
        if value is not None
    }
    if use_tabs:
        overrides["use_tabs"] = True

    try:
        formatter = _build_formatter(overrides)
    except (ValidationError, ConfigurationError) as exc:
        _fail(f"Invalid configuration: {exc}")
        raise typer.Exit(code=EXIT_ERROR) from exc

    if in_place and not paths:
        _fail("--in-place needs at least one file path.")
        raise typer.Exit(code=EXIT_ERROR)

    if not paths:
        _format_stdin(formatter, check=check)
    else:
        _format_files(formatter, paths, check=check, in_place=in_place)

    if profile:
        _display_profile()


def _format_stdin(formatter: SqlFormatter, *, check: bool) -> None:
    source = sys.stdin.read()
    try:
        result = _as_file_text(formatter.format(source))
    except SqlFormatError as exc:
        _fail(f"<stdin>: {exc}")
        raise typer.Exit(code=EXIT_ERROR) from exc

    if check:
        if result != source:
            console.print("[yellow]<stdin> would be reformatted[/yellow]")
            raise typer.Exit(code=EXIT_CHECK_FAILED)
        return
    sys.stdout.write(result)


def _format_files(
    formatter: SqlFormatter,
    paths: list[Path],
    *,
    check: bool,
    in_place: bool,
) -> None:
    failed: list[Path] = []
    changed: list[Path] = []

    for path in paths:
        try:
            source = path.read_text(encoding="utf-8")
            result = _as_file_text(formatter.format(source))
        except (OSError, UnicodeDecodeError, SqlFormatError) as exc:
            _fail(f"{path}: {exc}")
            logger.debug("Formatting failed for %s", path, extra={"source": {"path": str(path)}})
            failed.append(path)
            continue

        if result != source:
            changed.append(path)

        if check:
            if result != source:
                console.print(f"[yellow]would reformat[/yellow] {escape(str(path))}")
        elif in_place:
            if result != source:
                path.write_text(result, encoding="utf-8")
                console.print(f"[green]reformatted[/green] {escape(str(path))}")
        else:
            sys.stdout.write(result)

    if check or in_place:
        verb = "would be reformatted" if check else "reformatted"
        console.print(
            f"{len(changed)} file(s) {verb}, {len(paths) - len(changed) - len(failed)} unchanged"
            + (f", {len(failed)} failed" if failed else "")
        )

    if failed:
        raise typer.Exit(code=EXIT_ERROR)
    if check and changed:
        raise typer.Exit(code=EXIT_CHECK_FAILED)


# ---------------------------------------------------------------------------
# dialects
# ---------------------------------------------------------------------------


@app.command()
def dialects() -> None:
    """List the registered SQL dialects."""
    if _json_output:
        rows = [
            {
                "name": config.name,
                "identifier_quotes": list(config.ident_types),
                "string_quotes": [string_type.quote for string_type in config.string_types],
                "parameters": _parameter_styles(config),
                "line_comments": list(config.line_comment_types),
            }
            for config in sorted(DIALECTS.values(), key=lambda c: c.name)
        ]
        sys.stdout.write(json.dumps(rows, indent=2) + "\n")
        return

    table = Table(title=f"Dialects ({len(DIALECTS)})", show_lines=False, expand=False)
    table.add_column("Name", style="bold")
    table.add_column("Identifiers")
    table.add_column("Strings")
    table.add_column("Parameters")
    table.add_column("Comments")
    for config in sorted(DIALECTS.values(), key=lambda c: c.name):
        table.add_row(
            config.name,
            escape(" ".join(config.ident_types) or "-"),
            escape(" ".join(string_type.quote for string_type in config.string_types)),
            escape(" ".join(_parameter_styles(config)) or "-"),
            escape(" ".join(config.line_comment_types)),
        )
    console.print(table)


def _parameter_styles(config: DialectConfig) -> list[str]:
    styles = [f"{prefix}name" for prefix in config.named_param_types]
    styles += [f'{prefix}"name"' for prefix in config.quoted_param_types]
    styles += [f"{prefix}1" for prefix in config.indexed_param_types]
    if config.positional_params:
        styles.append("?")
    return styles
