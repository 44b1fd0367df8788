"""Tests for column types and DEFAULT expressions."""

from __future__ import annotations

import pytest

from schema_sql.core.exceptions import ParsingError
from schema_sql.core.models import (
    CallExpression,
    CustomType,
    PostgresType,
    TextExpression,
    VarExpression,
)


class TestSqlType:
    """Разбор типов колонок."""

    @pytest.mark.parametrize("text, expected", [
        ("UUID", PostgresType.UUID),
        ("uuid", PostgresType.UUID),
        ("TEXT", PostgresType.TEXT),
        ("Text", PostgresType.TEXT),
        ("INT", PostgresType.INT),
        ("INTEGER", PostgresType.INT),
        ("INT4", PostgresType.INT),
        ("BIGINT", PostgresType.BIGINT),
        ("INT8", PostgresType.BIGINT),
        ("BOOLEAN", PostgresType.BOOLEAN),
        ("bool", PostgresType.BOOLEAN),
        ("TIMESTAMP WITH TIME ZONE", PostgresType.TIMESTAMP_WITH_TIMEZONE),
        ("timestamp with time zone", PostgresType.TIMESTAMP_WITH_TIMEZONE),
        ("TIMESTAMPZ", PostgresType.TIMESTAMP_WITH_TIMEZONE),
        ("TIMESTAMPTZ", PostgresType.TIMESTAMP_WITH_TIMEZONE),
        ("REAL", PostgresType.REAL),
        ("FLOAT4", PostgresType.REAL),
        ("DOUBLE PRECISION", PostgresType.DOUBLE),
        ("FLOAT8", PostgresType.DOUBLE),
        ("DATE", PostgresType.DATE),
        ("BINARY", PostgresType.BINARY),
        ("TIME", PostgresType.TIME),
    ])
    def test_known_types(self, parser, text, expected):
        assert parser.parse_sql_type(text) == expected

    def test_bigint_is_not_int(self, parser):
        assert parser.parse_sql_type("BIGINT") == PostgresType.BIGINT

    def test_double_precision_with_extra_whitespace(self, parser):
        assert parser.parse_sql_type("DOUBLE \n /* c */ PRECISION") == PostgresType.DOUBLE

    def test_custom_type(self, parser):
        assert parser.parse_sql_type("MY_ENUM_TYPE") == CustomType("MY_ENUM_TYPE")

    @pytest.mark.parametrize("text", ["INTERVAL", "TEXTUAL", "uuid_list", "DATERANGE", "TIMESTAMP"])
    def test_keyword_prefix_is_custom_type(self, parser, text):
        assert parser.parse_sql_type(text) == CustomType(text)

    def test_bare_double_is_custom_type(self, parser):
        assert parser.parse_sql_type("DOUBLE") == CustomType("DOUBLE")

    def test_no_type_token(self, parser):
        with pytest.raises(ParsingError) as exc_info:
            parser.parse_sql_type("(")
        assert "custom type" in exc_info.value.expected

    def test_empty_input(self, parser):
        with pytest.raises(ParsingError) as exc_info:
            parser.parse_sql_type("")
        assert exc_info.value.found == "end of input"


class TestExpression:
    """Разбор выражений DEFAULT."""

    def test_variable(self, parser):
        assert parser.parse_expression("NULL") == VarExpression("NULL")

    def test_number_is_variable(self, parser):
        assert parser.parse_expression("0") == VarExpression("0")

    def test_quoted_identifier_variable(self, parser):
        assert parser.parse_expression('"Some Var"') == VarExpression("Some Var")

    def test_text(self, parser):
        assert parser.parse_expression("'hello'") == TextExpression("hello")

    def test_call_without_args(self, parser):
        assert parser.parse_expression("NOW()") == CallExpression("NOW", ())

    def test_call_with_space_before_paren(self, parser):
        assert parser.parse_expression("now ( )") == CallExpression("now", ())

    def test_call_with_args(self, parser):
        expr = parser.parse_expression("coalesce(a, 'b' , c)")
        assert expr == CallExpression("coalesce", (
            VarExpression("a"),
            TextExpression("b"),
            VarExpression("c"),
        ))

    def test_nested_calls(self, parser):
        expr = parser.parse_expression("f(g(h()), x)")
        assert expr == CallExpression("f", (
            CallExpression("g", (CallExpression("h", ()),)),
            VarExpression("x"),
        ))

    def test_trailing_whitespace_consumed(self, parser):
        assert parser.parse_expression("x   \n") == VarExpression("x")

    def test_unclosed_call(self, parser):
        with pytest.raises(ParsingError):
            parser.parse_expression("f(a")

    def test_nothing_matches(self, parser):
        with pytest.raises(ParsingError) as exc_info:
            parser.parse_expression(",")
        assert set(exc_info.value.expected) == {"identifier", "string literal"}
