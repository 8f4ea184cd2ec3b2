"""Unit tests for format_engine.layout -- line writer and formatter."""

from __future__ import annotations

import pytest

from format_engine.config import FormatOptions, KeywordCase
from format_engine.dialects import get_dialect
from format_engine.layout import Formatter, LineWriter
from format_engine.lexer.tokenizer import Tokenizer
from format_engine.parser import Parser, iter_tokens
from format_engine.pipeline import format_sql
from format_engine.telemetry.profiling import ProfileCollector


def _fmt(sql: str, dialect: str = "sql", **options) -> str:
    return format_sql(sql, dialect, FormatOptions(**options))


# ---------------------------------------------------------------------------
# LineWriter
# ---------------------------------------------------------------------------


class TestLineWriter:
    def test_words_separated_by_single_space(self):
        out = LineWriter("  ", 80)
        out.write("SELECT")
        out.write("a")
        out.write(",", space=False)
        assert out.getvalue() == "SELECT a,"

    def test_newline_indents(self):
        out = LineWriter("  ", 80)
        out.write("SELECT")
        out.newline(1)
        out.write("a")
        assert out.getvalue() == "SELECT\n  a"

    def test_newline_on_empty_line_only_changes_depth(self):
        out = LineWriter("  ", 80)
        out.newline(2)
        out.newline(1)
        out.write("x")
        assert out.getvalue() == "  x"

    def test_no_leading_space_on_fresh_line(self):
        out = LineWriter("\t", 80)
        out.newline(1)
        out.write("x", space=True)
        assert out.getvalue() == "\tx"

    def test_line_comment_forces_break_at_same_depth(self):
        out = LineWriter("  ", 80)
        out.newline(1)
        out.write("a")
        out.write_line_comment("-- note")
        assert out.ends_in_line_comment
        out.write("b")
        assert not out.ends_in_line_comment
        assert out.getvalue() == "  a -- note\n  b"

    def test_fits_counts_indent_and_space(self):
        out = LineWriter("    ", 10)
        out.newline(1)
        out.write("abc")
        assert out.fits("de")
        assert not out.fits("def")
        assert out.fits("def", space=False)

    def test_empty_writer(self):
        assert LineWriter("  ", 80).getvalue() == ""


# ---------------------------------------------------------------------------
# Clause layout
# ---------------------------------------------------------------------------


class TestClauseLayout:
    def test_each_clause_on_its_own_line(self):
        assert _fmt("select a, b from t where x = 1") == "SELECT a, b\nFROM t\nWHERE x = 1"

    def test_whitespace_is_normalized(self):
        assert _fmt("SELECT\n\n   a ,b\tFROM    t") == "SELECT a, b\nFROM t"

    def test_long_list_wraps_one_item_per_line(self):
        sql = "SELECT column_one, column_two, column_three, column_four, column_five, column_six FROM t"
        assert _fmt(sql) == (
            "SELECT\n"
            "  column_one,\n"
            "  column_two,\n"
            "  column_three,\n"
            "  column_four,\n"
            "  column_five,\n"
            "  column_six\n"
            "FROM t"
        )

    def test_tab_indent(self):
        assert _fmt("SELECT aaaaaaaaaa, bbbbbbbbbb", indent="\t", line_width=20) == (
            "SELECT\n\taaaaaaaaaa,\n\tbbbbbbbbbb"
        )

    def test_four_space_indent(self):
        assert _fmt("SELECT aaaaaaaaaa, bbbbbbbbbb", indent="    ", line_width=20) == (
            "SELECT\n    aaaaaaaaaa,\n    bbbbbbbbbb"
        )

    def test_join_clause(self):
        assert _fmt("select * from a join b on a.id = b.id") == "SELECT *\nFROM a\nJOIN b ON a.id = b.id"

    def test_binary_command_on_its_own_line(self):
        assert _fmt("select 1 union all select 2") == "SELECT 1\nUNION ALL\nSELECT 2"

    def test_between(self):
        assert _fmt("select * from t where age between 10 and 15") == (
            "SELECT *\nFROM t\nWHERE age BETWEEN 10 AND 15"
        )

    def test_limit_with_offset(self):
        assert _fmt("select a from t limit 5 , 10") == "SELECT a\nFROM t\nLIMIT 5, 10"

    def test_limit_count_only(self):
        assert _fmt("select a from t limit 10") == "SELECT a\nFROM t\nLIMIT 10"

    def test_greedy_wrap_of_long_condition(self):
        sql = "select a from t where aaaa = 1 and bbbb = 2 and cccc = 3 and dddd = 4"
        assert _fmt(sql, line_width=30) == (
            "SELECT a\n"
            "FROM t\n"
            "WHERE\n"
            "  aaaa = 1 AND bbbb = 2 AND\n"
            "  cccc = 3 AND dddd = 4"
        )


# ---------------------------------------------------------------------------
# Spacing
# ---------------------------------------------------------------------------


class TestSpacing:
    def test_member_access_is_glued(self):
        assert _fmt("select t . a , t.from from t") == "SELECT t.a, t.from\nFROM t"

    def test_function_call_is_glued(self):
        assert _fmt("select count ( * ) from t") == "SELECT COUNT(*)\nFROM t"

    def test_operators_are_spaced(self):
        assert _fmt("select a+b*2 from t") == "SELECT a + b * 2\nFROM t"

    def test_number_after_dot_keeps_space(self):
        assert _fmt("select t . 5") == "SELECT t. 5"

    def test_open_marker_follows_preceding_token(self):
        assert _fmt("select a from t where x = (1) and y in (2, 3)") == (
            "SELECT a\nFROM t\nWHERE x =(1) AND y IN(2, 3)"
        )

    def test_open_marker_after_comma_is_spaced(self):
        assert _fmt("select (1),(2)") == "SELECT (1), (2)"

    def test_cast_is_glued(self):
        assert _fmt("select x :: text, (a)::int, '1' :: int from t", "postgresql") == (
            "SELECT x::text, (a)::int, '1'::int\nFROM t"
        )


# ---------------------------------------------------------------------------
# Parentheses and CASE
# ---------------------------------------------------------------------------


class TestBlocks:
    def test_short_parenthesis_stays_inline(self):
        assert _fmt("select a from t where id in ( 1 , 2 )") == "SELECT a\nFROM t\nWHERE id IN(1, 2)"

    def test_long_parenthesis_opens_block(self):
        sql = "select a from t where id in (1000000, 2000000, 3000000, 4000000)"
        assert _fmt(sql, line_width=40) == (
            "SELECT a\n"
            "FROM t\n"
            "WHERE\n"
            "  id IN(\n"
            "    1000000,\n"
            "    2000000,\n"
            "    3000000,\n"
            "    4000000\n"
            "  )"
        )

    def test_subquery_always_opens_block(self):
        assert _fmt("select * from (select a from t) sub") == (
            "SELECT *\n"
            "FROM\n"
            "  (\n"
            "    SELECT a\n"
            "    FROM t\n"
            "  ) sub"
        )

    def test_case_expression(self):
        sql = "select case when a = 1 then 'one' else 'other' end as label from t"
        assert _fmt(sql) == (
            "SELECT\n"
            "  CASE\n"
            "    WHEN a = 1 THEN 'one'\n"
            "    ELSE 'other'\n"
            "  END AS label\n"
            "FROM t"
        )

    def test_case_with_operand(self):
        assert _fmt("select case kind when 1 then 'a' end") == (
            "SELECT\n  CASE kind\n    WHEN 1 THEN 'a'\n  END"
        )

    def test_empty_parentheses(self):
        assert _fmt("select now ( )") == "SELECT now()"


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


class TestComments:
    def test_line_comment_ends_line(self):
        assert _fmt("select a, -- note\n b from t") == "SELECT\n  a,\n  -- note\n  b\nFROM t"

    def test_semicolon_after_line_comment_on_new_line(self):
        assert _fmt("select 1 -- done\n;") == "SELECT\n  1 -- done\n;"

    def test_block_comment_stays_inline(self):
        assert _fmt("select /* first */ a from t") == "SELECT /* first */ a\nFROM t"

    def test_leading_comment(self):
        assert _fmt("-- header\nselect 1") == "-- header\nSELECT 1"


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------


class TestStatements:
    def test_empty_input(self):
        assert _fmt("") == ""

    def test_lone_semicolon(self):
        assert _fmt(";") == ";"

    def test_statements_separated_by_blank_line(self):
        assert _fmt("select 1; select 2;") == "SELECT 1;\n\nSELECT 2;"

    @pytest.mark.parametrize(("lines", "separator"), [(0, "\n"), (2, "\n\n\n")])
    def test_lines_between_queries(self, lines: int, separator: str):
        assert _fmt("select 1; select 2", lines_between_queries=lines) == f"SELECT 1;{separator}SELECT 2"

    def test_no_trailing_newline(self):
        assert not _fmt("select 1;\n\n").endswith("\n")

    def test_records_profile(self):
        _fmt("select 1")
        stats = ProfileCollector.get_instance().stats("sql.layout")
        assert stats is not None
        assert stats.calls == 1


# ---------------------------------------------------------------------------
# Keyword casing
# ---------------------------------------------------------------------------


class TestKeywordCase:
    def test_upper_is_default(self):
        assert _fmt("select count(*) from t") == "SELECT COUNT(*)\nFROM t"

    def test_lower(self):
        assert _fmt("SELECT Count(*) FROM t WHERE a AND b", keyword_case=KeywordCase.LOWER) == (
            "select count(*)\nfrom t\nwhere a and b"
        )

    def test_preserve_collapses_inner_whitespace(self):
        assert _fmt("Select A from T group   By A", keyword_case="preserve") == (
            "Select A\nfrom T\ngroup By A"
        )

    def test_identifiers_and_literals_untouched(self):
        assert _fmt("select MixedCase, 'Select' from \"Tbl\"", keyword_case="lower") == (
            "select MixedCase, 'Select'\nfrom \"Tbl\""
        )

    def test_show_uses_token_value_for_reserved(self):
        formatter = Formatter(FormatOptions(keyword_case=KeywordCase.UPPER))
        token = Tokenizer(get_dialect("sql")).tokenize("left   join")[0]
        assert formatter.show(token) == "LEFT JOIN"


# ---------------------------------------------------------------------------
# Idempotence and coverage
# ---------------------------------------------------------------------------


IDEMPOTENCE_CASES = [
    ("sql", "select a, b from t where x = 1 and y between 1 and 10 order by a desc limit 5, 10;"),
    ("sql", "SELECT column_one, column_two, column_three, column_four, column_five, column_six FROM t"),
    ("sql", "select * from (select a, count(*) from t group by a) s join u on s.a = u.a -- tail\n;"),
    ("sql", "select case when a = 1 then (select max(x) from y) else 0 end, t.from from t;;"),
    ("sql", "select a, -- one\n b /* two */, c\nfrom t union select 1, 2, 3"),
    ("sql", "with x as (select 1) select * from x where id in (1000000, 2000000, 3000000, 4000000, 5000000, 6000000, 7000000)"),
    ("tsql", "select top 10 [order id], N'x' from dbo.[orders] where id = @id and name = @\"nm\""),
    ("mysql", "# head\nselect `a`, @v := 1 from t limit 1, 2"),
    ("postgresql", "select arr[1], $1::int, $$ x $$ from t where j ->> 'k' = E'v'"),
]


class TestIdempotence:
    @pytest.mark.parametrize(("dialect", "sql"), IDEMPOTENCE_CASES)
    @pytest.mark.parametrize("width", [20, 80])
    def test_format_is_idempotent(self, dialect: str, sql: str, width: int):
        once = _fmt(sql, dialect, line_width=width)
        assert _fmt(once, dialect, line_width=width) == once

    @pytest.mark.parametrize(("dialect", "sql"), IDEMPOTENCE_CASES)
    def test_formatting_preserves_tokens(self, dialect: str, sql: str):
        config = get_dialect(dialect)
        tokenizer = Tokenizer(config)
        before = [(t.type, t.value) for t in tokenizer.tokenize(sql)]
        after = [(t.type, t.value) for t in tokenizer.tokenize(_fmt(sql, dialect))]
        assert after == before

    @pytest.mark.parametrize(("dialect", "sql"), IDEMPOTENCE_CASES)
    def test_every_token_in_tree(self, dialect: str, sql: str):
        config = get_dialect(dialect)
        tokens = Tokenizer(config).tokenize(sql)
        statements = Parser(config.paren_pairs).parse(tokens)
        assert [t for s in statements for t in iter_tokens(s)] == tokens
