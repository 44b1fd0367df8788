"""
AST схемы: операторы DDL, колонки, типы, выражения и ограничения.

Все узлы неизменяемы (frozen dataclass), последовательности хранятся
в кортежах. Дерево строится один раз при разборе и больше не меняется.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class PostgresType(Enum):
    """Известные типы колонок PostgreSQL."""
    UUID = "UUID"
    TEXT = "TEXT"
    INT = "INT"
    BIGINT = "BIGINT"
    BOOLEAN = "BOOLEAN"
    TIMESTAMP_WITH_TIMEZONE = "TIMESTAMP WITH TIME ZONE"
    REAL = "REAL"
    DOUBLE = "DOUBLE PRECISION"
    DATE = "DATE"
    BINARY = "BINARY"
    TIME = "TIME"


@dataclass(frozen=True)
class CustomType:
    """Любой нераспознанный тип (например, пользовательский ENUM)."""
    name: str


ColumnType = Union[PostgresType, CustomType]


class OnDelete(Enum):
    NO_ACTION = "NO ACTION"
    RESTRICT = "RESTRICT"
    SET_NULL = "SET NULL"
    CASCADE = "CASCADE"


# -------------------------
# EXPRESSIONS
# -------------------------

class Expression:
    """Базовый класс скалярного выражения (значение DEFAULT)."""


@dataclass(frozen=True)
class VarExpression(Expression):
    name: str


@dataclass(frozen=True)
class CallExpression(Expression):
    function: str
    args: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class TextExpression(Expression):
    value: str


# -------------------------
# CONSTRAINTS
# -------------------------

class Constraint:
    """Базовый класс ограничения из ALTER TABLE ... ADD CONSTRAINT."""


@dataclass(frozen=True)
class ForeignKeyConstraint(Constraint):
    column_name: str
    reference_table: str
    reference_column: Optional[str] = None
    on_delete: Optional[OnDelete] = None


# -------------------------
# COLUMNS
# -------------------------

@dataclass(frozen=True)
class Column:
    name: str
    column_type: ColumnType
    default_value: Optional[Expression] = None
    primary_key: bool = False
    not_null: bool = False
    is_unique: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Column name must not be empty")


# -------------------------
# STATEMENTS
# -------------------------

class Statement:
    """Базовый класс оператора верхнего уровня."""


@dataclass(frozen=True)
class CreateExtension(Statement):
    """CREATE EXTENSION [IF NOT EXISTS] "name";"""
    name: str
    if_not_exists: bool = True


@dataclass(frozen=True)
class CreateTable(Statement):
    """CREATE TABLE [public.]name (...);"""
    name: str
    columns: Tuple[Column, ...] = ()


@dataclass(frozen=True)
class CreateEnumType(Statement):
    """CREATE TYPE name AS ENUM ('a', 'b');"""
    name: str
    values: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AddConstraint(Statement):
    """ALTER TABLE table ADD CONSTRAINT name <constraint>;"""
    table_name: str
    constraint_name: str
    constraint: Constraint


@dataclass(frozen=True)
class Comment(Statement):
    """Строка `-- ...` верхнего уровня."""
    content: str
