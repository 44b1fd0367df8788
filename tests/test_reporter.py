"""Tests for AST export."""

from __future__ import annotations

import json

import pytest

from schema_sql.core.models import (
    CallExpression,
    Column,
    CustomType,
    PostgresType,
    TextExpression,
    VarExpression,
)
from schema_sql.reporter import Reporter, format_expression, format_type, to_plain


@pytest.fixture
def statements(parse, sample_schema):
    return parse(sample_schema)


class TestToPlain:

    def test_column(self):
        column = Column(
            name="id",
            column_type=PostgresType.UUID,
            default_value=CallExpression("uuid_generate_v4", ()),
            primary_key=True,
        )
        assert to_plain(column) == {
            "kind": "Column",
            "name": "id",
            "column_type": "UUID",
            "default_value": {"kind": "CallExpression", "function": "uuid_generate_v4", "args": []},
            "primary_key": True,
            "not_null": False,
            "is_unique": False,
        }

    def test_custom_type(self):
        assert to_plain(CustomType("mood")) == {"kind": "CustomType", "name": "mood"}


class TestFormatting:

    def test_format_type(self):
        assert format_type(PostgresType.DOUBLE) == "DOUBLE PRECISION"
        assert format_type(CustomType("mood")) == "mood"

    def test_format_expression(self):
        expr = CallExpression("f", (VarExpression("a"), TextExpression("it's")))
        assert format_expression(expr) == "f(a, 'it\\'s')"


class TestReporter:

    def test_json(self, statements):
        output = Reporter().export(statements, format="json", source="Schema.sql")
        report = json.loads(output)
        assert report["metadata"]["source"] == "Schema.sql"
        assert report["summary"]["total_statements"] == 6
        assert report["summary"]["by_kind"]["CreateTable"] == 2
        kinds = [s["kind"] for s in report["statements"]]
        assert kinds == [
            "Comment",
            "CreateExtension",
            "CreateEnumType",
            "CreateTable",
            "CreateTable",
            "AddConstraint",
        ]
        fk = report["statements"][5]["constraint"]
        assert fk["on_delete"] == "CASCADE"
        assert fk["reference_column"] == "id"

    def test_text(self, statements):
        output = Reporter().export(statements, format="text", source="Schema.sql")
        assert "Операторов: 6" in output
        assert "table users (3 columns)" in output
        assert "id UUID DEFAULT uuid_generate_v4() PRIMARY KEY NOT NULL" in output
        assert "constraint posts_ref_author on posts: author_id -> users.id ON DELETE CASCADE" in output

    def test_markdown(self, statements):
        output = Reporter().export(statements, format="markdown")
        assert output.startswith("# Схема")
        assert "## users" in output
        assert "| current_mood | mood |" in output

    def test_unknown_format(self, statements):
        with pytest.raises(ValueError, match="json, text, markdown"):
            Reporter().export(statements, format="html")

    def test_output_file(self, statements, tmp_path):
        out = tmp_path / "reports" / "schema.json"
        assert Reporter().export(statements, output_file=out) == ""
        assert json.loads(out.read_text(encoding="utf-8"))["summary"]["total_statements"] == 6
