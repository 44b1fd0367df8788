# schema_sql/core/__init__.py

from .models import (
    Statement,
    CreateExtension,
    CreateTable,
    CreateEnumType,
    AddConstraint,
    Comment,
    Column,
    PostgresType,
    CustomType,
    ColumnType,
    Expression,
    VarExpression,
    CallExpression,
    TextExpression,
    Constraint,
    ForeignKeyConstraint,
    OnDelete,
)

from .exceptions import (
    SchemaSQLError,
    ParsingError,
    SyntaxError,
    FileSystemError,
    SchemaFileNotFoundError,
    handle_exception,
)

__all__ = [
    # models
    "Statement",
    "CreateExtension",
    "CreateTable",
    "CreateEnumType",
    "AddConstraint",
    "Comment",
    "Column",
    "PostgresType",
    "CustomType",
    "ColumnType",
    "Expression",
    "VarExpression",
    "CallExpression",
    "TextExpression",
    "Constraint",
    "ForeignKeyConstraint",
    "OnDelete",

    # exceptions
    "SchemaSQLError",
    "ParsingError",
    "SyntaxError",
    "FileSystemError",
    "SchemaFileNotFoundError",
    "handle_exception",
]
