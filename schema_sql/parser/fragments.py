"""
Поиск фрагмента SQL (оператора) по смещению в тексте схемы.

Нужен для сообщений об ошибках: в details SyntaxError кладётся текст
оператора, внутри которого произошла ошибка. Разбиение на операторы
выполняет sqlparse, но только в окне между соседними `;` вокруг смещения.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import sqlparse
from sqlparse.exceptions import SQLParseError

_MAX_FRAGMENT_LENGTH = 200


def statement_spans(sql_text: str) -> List[Tuple[int, int, str]]:
    """
    Делит текст на операторы и возвращает (start, end, text) для каждого.
    sqlparse сохраняет исходный текст, поэтому смещения совпадают с sql_text.
    """
    spans: List[Tuple[int, int, str]] = []
    offset = 0
    for statement in sqlparse.parse(sql_text):
        text = str(statement)
        spans.append((offset, offset + len(text), text))
        offset += len(text)
    return spans


def _window(sql_text: str, offset: int) -> Tuple[int, str]:
    """Текст от `;` перед offset до ближайшей `;` после него (включительно)."""
    start = sql_text.rfind(";", 0, offset) + 1
    end = sql_text.find(";", offset)
    end = len(sql_text) if end < 0 else end + 1
    return start, sql_text[start:end]


def statement_fragment(sql_text: str, offset: int) -> Optional[str]:
    """Текст оператора, содержащего offset (обрезанный до разумной длины)."""
    if not sql_text or not sql_text.strip():
        return None

    start, window = _window(sql_text, offset)
    if not window.strip():
        # ошибка после последней `;`: показываем предыдущий оператор
        start, window = _window(sql_text, start - 1)

    fragment = window
    try:
        spans = statement_spans(window)
    except (SQLParseError, RecursionError):
        # слишком глубокая вложенность для sqlparse, берём окно как есть
        spans = []

    for span_start, span_end, text in spans:
        if span_start <= offset - start < span_end:
            fragment = text
            break

    fragment = fragment.strip()
    if len(fragment) > _MAX_FRAGMENT_LENGTH:
        fragment = fragment[:_MAX_FRAGMENT_LENGTH - 3] + "..."
    return fragment or None
