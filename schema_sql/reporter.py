"""
reporter.py

Экспорт разобранной схемы (списка операторов AST) в json / text / markdown.

Важно:
- reporter НЕ генерирует SQL обратно, он только описывает AST;
- порядок операторов в отчёте совпадает с порядком в исходном файле.
"""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union
import json

from .core.constants import OUTPUT_FORMATS, VERSION
from .core.models import (
    AddConstraint,
    Column,
    ColumnType,
    Comment,
    CreateEnumType,
    CreateExtension,
    CreateTable,
    CustomType,
    Expression,
    CallExpression,
    ForeignKeyConstraint,
    Statement,
    TextExpression,
    VarExpression,
)


def to_plain(node: Any) -> Any:
    """
    AST -> JSON-совместимая структура.
    Dataclass-узлы получают поле "kind" с именем класса.
    """
    if isinstance(node, Enum):
        return node.value
    if is_dataclass(node) and not isinstance(node, type):
        out: Dict[str, Any] = {"kind": type(node).__name__}
        for f in fields(node):
            out[f.name] = to_plain(getattr(node, f.name))
        return out
    if isinstance(node, (list, tuple)):
        return [to_plain(x) for x in node]
    return node


def format_type(column_type: ColumnType) -> str:
    if isinstance(column_type, CustomType):
        return column_type.name
    return column_type.value


def format_expression(expression: Expression) -> str:
    if isinstance(expression, VarExpression):
        return expression.name
    if isinstance(expression, TextExpression):
        return "'" + expression.value.replace("'", "\\'") + "'"
    if isinstance(expression, CallExpression):
        args = ", ".join(format_expression(a) for a in expression.args)
        return f"{expression.function}({args})"
    raise TypeError(f"Unknown expression: {expression!r}")


class Reporter:
    """
    Построитель и экспортёр отчёта по разобранной схеме.

    Отчёт:
        {
          "metadata": {...},
          "summary": {"total_statements": N, "by_kind": {...}},
          "statements": [...]
        }
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.tool_name = self.config.get("tool_name", "PostgreSQL Schema Parser")
        self.version = self.config.get("version", VERSION)

    # ---------------------------------------------------------------------
    # 1) BUILD REPORT
    # ---------------------------------------------------------------------

    def build_report(self, statements: Sequence[Statement], *, source: Optional[str] = None) -> Dict[str, Any]:
        by_kind: Dict[str, int] = {}
        for s in statements:
            kind = type(s).__name__
            by_kind[kind] = by_kind.get(kind, 0) + 1

        return {
            "metadata": {
                "timestamp": datetime.now().isoformat(),
                "tool": self.tool_name,
                "version": self.version,
                "source": source,
            },
            "summary": {
                "total_statements": len(statements),
                "by_kind": by_kind,
            },
            "statements": [to_plain(s) for s in statements],
        }

    # ---------------------------------------------------------------------
    # 2) EXPORT
    # ---------------------------------------------------------------------

    def export(
            self,
            statements: Sequence[Statement],
            *,
            format: str = "json",
            source: Optional[str] = None,
            output_file: Optional[Union[str, Path]] = None
    ) -> str:
        """
        Экспорт отчёта в заданном формате.

        Args:
            statements: результат SQLParser.parse(...)
            format: json | text | markdown
            source: имя файла схемы для metadata
            output_file: если задан, сохраняет в файл и возвращает пустую строку

        Returns:
            строка отчёта (если output_file=None)
        """
        fmt = (format or "json").lower().strip()

        if fmt == "json":
            output = self._export_json(self.build_report(statements, source=source))
        elif fmt == "text":
            output = self._export_text(statements, source)
        elif fmt == "markdown":
            output = self._export_markdown(statements, source)
        else:
            available = ", ".join(OUTPUT_FORMATS.values())
            raise ValueError(f"Неподдерживаемый формат: {format}. Доступные: {available}")

        if output_file:
            path = Path(output_file)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(output, encoding="utf-8")
            return ""
        return output

    def _export_json(self, report: Dict[str, Any]) -> str:
        return json.dumps(report, indent=2, ensure_ascii=False)

    def _export_text(self, statements: Sequence[Statement], source: Optional[str]) -> str:
        out: List[str] = []
        out.append("=" * 70)
        out.append(f"СХЕМА: {source or 'N/A'}")
        out.append("=" * 70)
        out.append(f"Операторов: {len(statements)}")
        out.append("")

        for i, s in enumerate(statements, 1):
            out.append(f"{i}. {self._describe_statement(s)}")
            if isinstance(s, CreateTable):
                for c in s.columns:
                    out.append(f"     - {self._describe_column(c)}")

        return "\n".join(out)

    def _export_markdown(self, statements: Sequence[Statement], source: Optional[str]) -> str:
        out: List[str] = []
        out.append(f"# Схема `{source or 'N/A'}`")
        out.append("")
        out.append("| # | Оператор | Описание |")
        out.append("|---|----------|----------|")
        for i, s in enumerate(statements, 1):
            description = self._describe_statement(s).replace("|", "\\|")
            out.append(f"| {i} | {type(s).__name__} | {description} |")

        tables = [s for s in statements if isinstance(s, CreateTable)]
        for t in tables:
            out.append("")
            out.append(f"## {t.name}")
            out.append("")
            if not t.columns:
                out.append("_нет колонок_")
                continue
            out.append("| Колонка | Тип | DEFAULT | PK | NOT NULL | UNIQUE |")
            out.append("|---------|-----|---------|----|----------|--------|")
            for c in t.columns:
                default = format_expression(c.default_value) if c.default_value is not None else ""
                out.append(
                    f"| {c.name} | {format_type(c.column_type)} | {default} | "
                    f"{'✓' if c.primary_key else ''} | {'✓' if c.not_null else ''} | "
                    f"{'✓' if c.is_unique else ''} |"
                )

        return "\n".join(out)

    # ---------------------------------------------------------------------
    # HELPERS
    # ---------------------------------------------------------------------

    def _describe_statement(self, s: Statement) -> str:
        if isinstance(s, CreateExtension):
            return f"extension {s.name}"
        if isinstance(s, CreateTable):
            return f"table {s.name} ({len(s.columns)} columns)"
        if isinstance(s, CreateEnumType):
            return f"enum {s.name}: " + ", ".join(s.values)
        if isinstance(s, AddConstraint):
            return f"constraint {s.constraint_name} on {s.table_name}: {self._describe_constraint(s.constraint)}"
        if isinstance(s, Comment):
            return f"-- {s.content}"
        return type(s).__name__

    def _describe_constraint(self, constraint: Any) -> str:
        if isinstance(constraint, ForeignKeyConstraint):
            target = constraint.reference_table
            if constraint.reference_column:
                target += f".{constraint.reference_column}"
            text = f"{constraint.column_name} -> {target}"
            if constraint.on_delete is not None:
                text += f" ON DELETE {constraint.on_delete.value}"
            return text
        return type(constraint).__name__

    def _describe_column(self, c: Column) -> str:
        parts = [c.name, format_type(c.column_type)]
        if c.default_value is not None:
            parts.append(f"DEFAULT {format_expression(c.default_value)}")
        if c.primary_key:
            parts.append("PRIMARY KEY")
        if c.not_null:
            parts.append("NOT NULL")
        if c.is_unique:
            parts.append("UNIQUE")
        return " ".join(parts)
