"""
Слой выражений и типов: значения DEFAULT и типы колонок.
"""

from __future__ import annotations

from typing import List

from ..core.constants import TYPE_KEYWORDS
from ..core.models import (
    CallExpression,
    ColumnType,
    CustomType,
    Expression,
    TextExpression,
    VarExpression,
)
from .tokenizer import Backtrack, Scanner


def parse_sql_type(scanner: Scanner) -> ColumnType:
    """
    Тип колонки: известные ключевые слова в порядке TYPE_KEYWORDS,
    иначе CustomType из последовательности букв/цифр/`_`.
    """
    for postgres_type, spellings in TYPE_KEYWORDS:
        for words in spellings:
            try:
                scanner.attempt(scanner.keywords, *words)
            except Backtrack:
                continue
            return postgres_type

    return CustomType(scanner.word("custom type"))


def parse_expression(scanner: Scanner) -> Expression:
    """
    Вызов функции | переменная | текстовый литерал.

    Вызов разбирается без комбинаторов: один кадр стека на уровень
    вложенности `f(g(h()))`.
    """
    try:
        name = scanner.identifier()
    except Backtrack:
        return TextExpression(scanner.string_literal())

    if scanner.optional(scanner.symbol, "(") is None:
        return VarExpression(name)

    args: List[Expression] = []
    if scanner.optional(scanner.symbol, ")") is None:
        args.append(parse_expression(scanner))
        while scanner.optional(scanner.symbol, ",") is not None:
            args.append(parse_expression(scanner))
        scanner.symbol(")")

    return CallExpression(name, tuple(args))
