"""
Пользовательские исключения парсера DDL-схемы.
"""

from __future__ import annotations
from typing import Optional, Dict, Any, Sequence


class SchemaSQLError(Exception):
    """Базовое исключение пакета schema_sql."""

    def __init__(self, message: str, code: str = "UNKNOWN", details: Optional[dict] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "code": self.code,
            "details": self.details,
        }


class ParsingError(SchemaSQLError):
    """Ошибка парсинга SQL."""

    def __init__(self, message: str, sql_fragment: str = None, position: int = None):
        details: Dict[str, Any] = {}
        if sql_fragment:
            details["sql_fragment"] = sql_fragment
        if position is not None:
            details["position"] = position
        super().__init__(message, "PARSING_ERROR", details)


def _join_alternatives(labels: Sequence[str]) -> str:
    """"a", "b", or "c" в стиле сообщений комбинаторных парсеров."""
    labels = list(labels)
    if not labels:
        return ""
    if len(labels) == 1:
        return labels[0]
    if len(labels) == 2:
        return f"{labels[0]} or {labels[1]}"
    return ", ".join(labels[:-1]) + f", or {labels[-1]}"


class SyntaxError(ParsingError):
    """
    Синтаксическая ошибка в SQL.

    Единственный вид ошибки, который видит вызывающий код: позиция
    (строка/колонка/смещение), ожидаемые альтернативы и найденный токен.
    """

    def __init__(
        self,
        *,
        source_name: str,
        offset: int,
        line: int,
        column: int,
        expected: Sequence[str] = (),
        found: str = None,
        source_line: str = "",
        sql_fragment: str = None,
    ):
        self.source_name = source_name
        self.offset = offset
        self.line = line
        self.column = column
        self.expected = tuple(expected)
        self.found = found
        self.source_line = source_line

        parts = []
        if found:
            parts.append(f"unexpected {found}")
        if self.expected:
            parts.append(f"expecting {_join_alternatives(self.expected)}")
        message = f"{source_name}:{line}:{column}: " + ("; ".join(parts) or "syntax error")

        super().__init__(message, sql_fragment=sql_fragment, position=offset)
        self.code = "SYNTAX_ERROR"
        self.details.update({
            "source_name": source_name,
            "line": line,
            "column": column,
            "expected": list(self.expected),
        })
        if found:
            self.details["found"] = found

    def pretty(self) -> str:
        """
        Многострочный отчёт об ошибке:

            schema.sql:1:29:
              |
            1 | CREATE TABLE users (id UUID)
              |                             ^
            unexpected end of input
            expecting ";"
        """
        gutter = " " * len(str(self.line))
        out = [
            f"{self.source_name}:{self.line}:{self.column}:",
            f"{gutter} |",
            f"{self.line} | {self.source_line}",
            f"{gutter} | {' ' * (self.column - 1)}^",
        ]
        if self.found:
            out.append(f"unexpected {self.found}")
        if self.expected:
            out.append(f"expecting {_join_alternatives(self.expected)}")
        return "\n".join(out)


class FileSystemError(SchemaSQLError):
    """Ошибка файловой системы."""

    def __init__(self, message: str, file_path: str = None, operation: str = None):
        details: Dict[str, Any] = {}
        if file_path:
            details["file_path"] = file_path
        if operation:
            details["operation"] = operation
        super().__init__(message, "FILESYSTEM_ERROR", details)


# НЕ переопределяем встроенный FileNotFoundError, даём уникальное имя
class SchemaFileNotFoundError(FileSystemError):
    """Файл схемы не найден."""

    def __init__(self, file_path: str):
        super().__init__(f"Файл схемы не найден: {file_path}", file_path, "read")
        self.code = "FILE_NOT_FOUND"


def handle_exception(exception: Exception) -> dict:
    if isinstance(exception, SchemaSQLError):
        return exception.to_dict()
    return {
        "error": str(exception),
        "code": "UNKNOWN_ERROR",
        "details": {
            "exception_type": exception.__class__.__name__,
        },
    }
