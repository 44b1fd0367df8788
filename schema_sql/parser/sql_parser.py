"""
Основной парсер DDL-схемы.

Поддерживаемые операторы:
    CREATE EXTENSION [IF NOT EXISTS] "name";
    CREATE TABLE [public.]name (column, ...);
    CREATE TYPE name AS ENUM ('value', ...);
    ALTER TABLE name ADD CONSTRAINT name FOREIGN KEY (col) REFERENCES table [(col)] [ON DELETE ...];
    -- комментарий

Колонка:
    name type [DEFAULT expr] [PRIMARY KEY] [NOT NULL] [UNIQUE]
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from ..core.constants import DEFAULT_SOURCE_NAME, ON_DELETE_KEYWORDS
from ..core.models import (
    AddConstraint,
    Column,
    ColumnType,
    Comment,
    Constraint,
    CreateEnumType,
    CreateExtension,
    CreateTable,
    Expression,
    ForeignKeyConstraint,
    OnDelete,
    Statement,
)
from .expressions import parse_expression, parse_sql_type
from .tokenizer import Backtrack, Cut, Scanner

logger = logging.getLogger(__name__)


class SQLParser:
    """
    Парсер схемы. Экземпляр хранит только конфигурацию, состояние разбора
    живёт в Scanner, который создаётся на каждый вызов.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.source_name = self.config.get("source_name", DEFAULT_SOURCE_NAME)

        self._statements = (
            self._create_extension,
            self._create_table,
            self._create_enum_type,
            self._add_constraint,
            self._comment,
        )

    # ==========================================================
    # PUBLIC API
    # ==========================================================

    def parse(self, sql_text: str, source_name: Optional[str] = None) -> List[Statement]:
        """
        Разбирает весь текст схемы.

        Raises:
            SyntaxError: первая неустранимая ошибка; частичного результата нет.
        """
        scanner = Scanner(sql_text, source_name or self.source_name)
        statements = self._run(scanner, self._statements_until_end)

        logger.debug("Parsed %d statements from %s", len(statements), scanner.source_name)
        return statements

    def parse_expression(self, text: str, source_name: Optional[str] = None) -> Expression:
        """Разбирает одно выражение (весь текст целиком)."""
        return self._run(Scanner(text, source_name or self.source_name), self._whole, parse_expression)

    def parse_sql_type(self, text: str, source_name: Optional[str] = None) -> ColumnType:
        """Разбирает один тип колонки (весь текст целиком)."""
        return self._run(Scanner(text, source_name or self.source_name), self._whole, parse_sql_type)

    # ==========================================================
    # DRIVER
    # ==========================================================

    def _run(self, scanner: Scanner, parser: Callable[..., Any], *args) -> Any:
        try:
            scanner.skip_leading()
            return parser(scanner, *args)
        except (Backtrack, Cut):
            error = scanner.error()
            logger.debug("Syntax error: %s", error.message)
            raise error from None
        except RecursionError:
            # вложенность глубже стека интерпретатора
            scanner.record("less deeply nested expression")
            error = scanner.error()
            logger.debug("Nesting too deep: %s", error.message)
            raise error from None

    def _whole(self, scanner: Scanner, parser: Callable[[Scanner], Any]) -> Any:
        result = parser(scanner)
        if not scanner.at_end():
            scanner.fail("end of input")
        return result

    def _statements_until_end(self, scanner: Scanner) -> List[Statement]:
        statements: List[Statement] = []
        while not scanner.at_end():
            scanner.record("end of input")
            statement = scanner.choice(self._statements, scanner)
            logger.debug("Parsed %s", type(statement).__name__)
            statements.append(statement)
        return statements

    # ==========================================================
    # STATEMENTS
    # ==========================================================

    def _create_extension(self, scanner: Scanner) -> CreateExtension:
        scanner.keywords("CREATE", "EXTENSION")
        with scanner.commit():
            if_not_exists = scanner.optional(scanner.keywords, "IF", "NOT", "EXISTS") is not None
            name = scanner.quoted('"', "extension name")
            scanner.symbol(";")

        if not if_not_exists:
            logger.debug("CREATE EXTENSION %s without IF NOT EXISTS", name)
        # IF NOT EXISTS всегда фиксируется как True
        return CreateExtension(name=name, if_not_exists=True)

    def _create_table(self, scanner: Scanner) -> CreateTable:
        scanner.keywords("CREATE", "TABLE")
        with scanner.commit():
            scanner.optional(self._public_schema, scanner)
            name = scanner.identifier()
            columns = scanner.between("(", ")", scanner.sep_by, self._column, ",", scanner)
            scanner.symbol(";")

        return CreateTable(name=name, columns=tuple(columns))

    def _public_schema(self, scanner: Scanner) -> None:
        scanner.keyword("public")
        scanner.symbol(".")

    def _create_enum_type(self, scanner: Scanner) -> CreateEnumType:
        scanner.keywords("CREATE", "TYPE")
        with scanner.commit():
            name = scanner.identifier()
            scanner.keywords("AS", "ENUM")
            values = scanner.between("(", ")", scanner.sep_by, scanner.string_literal, ",")
            scanner.symbol(";")

        return CreateEnumType(name=name, values=tuple(values))

    def _add_constraint(self, scanner: Scanner) -> AddConstraint:
        scanner.keywords("ALTER", "TABLE")
        with scanner.commit():
            table_name = scanner.identifier()
            scanner.keywords("ADD", "CONSTRAINT")
            constraint_name = scanner.identifier()
            constraint = self._constraint(scanner)
            scanner.symbol(";")

        return AddConstraint(
            table_name=table_name,
            constraint_name=constraint_name,
            constraint=constraint,
        )

    def _comment(self, scanner: Scanner) -> Comment:
        scanner.symbol("--", lexeme=False, label="line comment")
        return Comment(content=scanner.rest_of_line())

    # ==========================================================
    # COLUMN
    # ==========================================================

    def _column(self, scanner: Scanner) -> Column:
        name = scanner.identifier()
        column_type = parse_sql_type(scanner)
        default_value = scanner.optional(self._default_value, scanner)
        primary_key = scanner.optional(scanner.keywords, "PRIMARY", "KEY") is not None
        not_null = scanner.optional(scanner.keywords, "NOT", "NULL") is not None
        is_unique = scanner.optional(scanner.keyword, "UNIQUE") is not None

        return Column(
            name=name,
            column_type=column_type,
            default_value=default_value,
            primary_key=primary_key,
            not_null=not_null,
            is_unique=is_unique,
        )

    def _default_value(self, scanner: Scanner) -> Expression:
        scanner.keyword("DEFAULT")
        return parse_expression(scanner)

    # ==========================================================
    # CONSTRAINTS
    # ==========================================================

    def _constraint(self, scanner: Scanner) -> Constraint:
        scanner.keywords("FOREIGN", "KEY")
        column_name = scanner.between("(", ")", scanner.identifier)
        scanner.keyword("REFERENCES")
        reference_table = scanner.identifier()
        reference_column = scanner.optional(scanner.between, "(", ")", scanner.identifier)
        on_delete = scanner.optional(self._on_delete, scanner)

        return ForeignKeyConstraint(
            column_name=column_name,
            reference_table=reference_table,
            reference_column=reference_column,
            on_delete=on_delete,
        )

    def _on_delete(self, scanner: Scanner) -> OnDelete:
        scanner.keywords("ON", "DELETE")
        for words, action in ON_DELETE_KEYWORDS:
            try:
                scanner.attempt(scanner.keywords, *words, ignore_case=False)
            except Backtrack:
                continue
            return action
        raise Backtrack(scanner.pos)
