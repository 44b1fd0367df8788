"""
Лексический слой парсера DDL.

Scanner: курсор по исходному тексту с откатом (checkpoint/restore).
Каждый токен разбирается как лексема: после него пропускаются пробелы,
комментарии `// ...` и `/* ... */`.

Неудачи:
- Backtrack: альтернатива не подошла, курсор можно откатить;
- Cut: неудача после якорного ключевого слова, откат запрещён.

Scanner запоминает самую дальнюю точку неудачи и множество ожидаемых там
токенов, из них строится итоговая SyntaxError.
"""

from __future__ import annotations

import re
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, NoReturn, Optional, Sequence, Tuple, TypeVar

from ..core.constants import DEFAULT_SOURCE_NAME
from ..core.exceptions import SyntaxError
from .fragments import statement_fragment

T = TypeVar("T")

_WHITESPACE_RE = re.compile(r"\s+")
_HORIZONTAL_SPACE_RE = re.compile(r"[ \t]*")
_WORD_RE = re.compile(r"\w+")
_QUOTED_IDENTIFIER_RE = re.compile(r'"([^"]+)"')

_DECIMAL_RE = re.compile(r"[0-9]+")
_HEX_RE = re.compile(r"[0-9a-fA-F]+")
_OCTAL_RE = re.compile(r"[0-7]+")

_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    "'": "'",
    '"': '"',
}

_MAX_CODE_POINT = 0x10FFFF


class Backtrack(Exception):
    """Откатываемая неудача разбора."""

    def __init__(self, offset: int):
        super().__init__(offset)
        self.offset = offset


class Cut(Exception):
    """Неудача внутри уже выбранной альтернативы."""

    def __init__(self, offset: int):
        super().__init__(offset)
        self.offset = offset


def _is_word_char(ch: str) -> bool:
    return bool(_WORD_RE.fullmatch(ch))


class Scanner:
    """
    Курсор разбора одного текста.

    Создаётся заново на каждый разбор и не разделяется между потоками.
    """

    def __init__(self, source: str, source_name: str = DEFAULT_SOURCE_NAME):
        self.source = source
        self.source_name = source_name

        self.pos = 0
        # конец последнего токена (до пропуска пробелов после него)
        self.token_end = 0

        self._furthest = -1
        self._report_offset = 0
        self._expected: Dict[str, None] = {}

    # ==========================================================
    # STATE
    # ==========================================================

    def checkpoint(self) -> Tuple[int, int]:
        return self.pos, self.token_end

    def restore(self, state: Tuple[int, int]) -> None:
        self.pos, self.token_end = state

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    # ==========================================================
    # FAILURES
    # ==========================================================

    def record(self, label: Optional[str], offset: Optional[int] = None) -> None:
        """Запоминает ожидание `label` в точке offset (по умолчанию текущей)."""
        if offset is None:
            offset = self.pos

        if offset > self._furthest:
            self._furthest = offset
            # ошибку после пробелов показываем сразу за предыдущим токеном
            self._report_offset = self.token_end if offset == self.pos else offset
            self._expected = {}

        if offset == self._furthest and label:
            self._expected[label] = None

    def fail(self, label: Optional[str], offset: Optional[int] = None) -> NoReturn:
        self.record(label, offset)
        raise Backtrack(self.pos if offset is None else offset)

    def error(self) -> SyntaxError:
        """Строит SyntaxError по самой дальней точке неудачи."""
        if self._furthest < 0:
            offset = report = self.pos
        else:
            offset, report = self._furthest, self._report_offset

        line, column = self.line_col(report)
        return SyntaxError(
            source_name=self.source_name,
            offset=report,
            line=line,
            column=column,
            expected=list(self._expected),
            found=self.describe(offset),
            source_line=self.line_text(report),
            sql_fragment=statement_fragment(self.source, report),
        )

    def describe(self, offset: int) -> str:
        if offset >= len(self.source):
            return "end of input"
        ch = self.source[offset]
        if ch == "\n":
            return "newline"
        word = _WORD_RE.match(self.source, offset)
        if word:
            return f'"{word.group()}"'
        return f'"{ch}"'

    def line_col(self, offset: int) -> Tuple[int, int]:
        line = self.source.count("\n", 0, offset) + 1
        column = offset - (self.source.rfind("\n", 0, offset) + 1) + 1
        return line, column

    def line_text(self, offset: int) -> str:
        start = self.source.rfind("\n", 0, offset) + 1
        end = self.source.find("\n", offset)
        if end < 0:
            end = len(self.source)
        return self.source[start:end].rstrip("\r")

    # ==========================================================
    # WHITESPACE / COMMENTS
    # ==========================================================

    def skip(self) -> None:
        """Пропускает пробелы, `// ...` и `/* ... */`."""
        source, n = self.source, len(self.source)
        self.token_end = self.pos

        pos = self.pos
        while pos < n:
            match = _WHITESPACE_RE.match(source, pos)
            if match:
                pos = match.end()
            elif source.startswith("//", pos):
                newline = source.find("\n", pos)
                pos = n if newline < 0 else newline
            elif source.startswith("/*", pos):
                close = source.find("*/", pos + 2)
                if close < 0:
                    self.fail('"*/"', offset=n)
                pos = close + 2
            else:
                break

        self.pos = pos

    def skip_leading(self) -> None:
        self.skip()
        self.token_end = self.pos

    # ==========================================================
    # TOKENS
    # ==========================================================

    def _matches(self, text: str, ignore_case: bool) -> bool:
        end = self.pos + len(text)
        chunk = self.source[self.pos:end]

        if ignore_case:
            same = chunk.upper() == text.upper()
        else:
            same = chunk == text
        if not same:
            return False

        # ключевое слово не должно быть префиксом идентификатора
        if _is_word_char(text[-1]) and end < len(self.source) and _is_word_char(self.source[end]):
            return False
        return True

    def _advance(self, length: int, lexeme: bool = True) -> str:
        text = self.source[self.pos:self.pos + length]
        self.pos += length
        if lexeme:
            self.skip()
        return text

    def keyword(self, word: str, ignore_case: bool = True) -> str:
        if not self._matches(word, ignore_case):
            self.fail(f'"{word}"')
        return self._advance(len(word))

    def keywords(self, *words: str, ignore_case: bool = True) -> Tuple[str, ...]:
        return tuple(self.keyword(word, ignore_case) for word in words)

    def symbol(self, text: str, *, lexeme: bool = True, label: Optional[str] = None) -> str:
        if not self._matches(text, ignore_case=False):
            self.fail(label or f'"{text}"')
        return self._advance(len(text), lexeme)

    def word(self, label: str) -> str:
        """Максимальная последовательность букв, цифр и `_`."""
        match = _WORD_RE.match(self.source, self.pos)
        if not match:
            self.fail(label)
        return self._advance(match.end() - self.pos)

    def identifier(self) -> str:
        quoted = _QUOTED_IDENTIFIER_RE.match(self.source, self.pos)
        if quoted:
            self.pos = quoted.end()
            self.skip()
            return quoted.group(1)
        return self.word("identifier")

    def quoted(self, quote: str, label: str) -> str:
        """Текст в кавычках `quote` с обработкой escape-последовательностей."""
        source, n = self.source, len(self.source)
        if not source.startswith(quote, self.pos):
            self.fail(label)

        chars: List[str] = []
        pos = self.pos + 1
        while True:
            if pos >= n:
                self.fail(f'closing "{quote}"', offset=n)
            ch = source[pos]
            if ch == quote:
                break
            if ch == "\\":
                value, pos = self._escape(pos + 1)
                chars.append(value)
            else:
                chars.append(ch)
                pos += 1

        self.pos = pos + 1
        self.skip()
        return "".join(chars)

    def string_literal(self) -> str:
        return self.quoted("'", "string literal")

    def rest_of_line(self) -> str:
        """Содержимое до конца строки (без ведущих пробелов и `\\r`)."""
        start = _HORIZONTAL_SPACE_RE.match(self.source, self.pos).end()
        end = self.source.find("\n", start)
        if end < 0:
            end = len(self.source)

        self.pos = end
        content = self.source[start:end].rstrip("\r")
        self.skip()
        return content

    def _escape(self, pos: int) -> Tuple[str, int]:
        source = self.source
        if pos >= len(source):
            self.fail("escape code", offset=pos)

        ch = source[pos]
        if ch in _ESCAPES:
            return _ESCAPES[ch], pos + 1
        if ch == "&":
            return "", pos + 1

        if ch == "x":
            pattern, base, start = _HEX_RE, 16, pos + 1
        elif ch == "o":
            pattern, base, start = _OCTAL_RE, 8, pos + 1
        else:
            pattern, base, start = _DECIMAL_RE, 10, pos

        digits = pattern.match(source, start)
        if not digits:
            self.fail("escape code", offset=start)
        code = int(digits.group(), base)
        if code > _MAX_CODE_POINT:
            self.fail("escape code", offset=start)
        return chr(code), digits.end()

    # ==========================================================
    # COMBINATORS
    # ==========================================================

    def attempt(self, parser: Callable[..., T], *args, **kwargs) -> T:
        """Запускает parser; при Backtrack откатывает курсор и пробрасывает."""
        state = self.checkpoint()
        try:
            return parser(*args, **kwargs)
        except Backtrack:
            self.restore(state)
            raise

    def optional(self, parser: Callable[..., T], *args, **kwargs) -> Optional[T]:
        try:
            return self.attempt(parser, *args, **kwargs)
        except Backtrack:
            return None

    def choice(self, parsers: Sequence[Callable[..., T]], *args) -> T:
        """Первая успешная альтернатива; каждая пробуется с откатом."""
        for parser in parsers:
            try:
                return self.attempt(parser, *args)
            except Backtrack:
                continue
        raise Backtrack(self.pos)

    def between(self, open_: str, close: str, parser: Callable[..., T], *args) -> T:
        self.symbol(open_)
        result = parser(*args)
        self.symbol(close)
        return result

    def sep_by(self, parser: Callable[..., T], separator: str, *args) -> List[T]:
        """Ноль или больше элементов через separator."""
        try:
            items = [self.attempt(parser, *args)]
        except Backtrack:
            return []

        while self.optional(self.symbol, separator) is not None:
            items.append(parser(*args))
        return items

    @contextmanager
    def commit(self) -> Iterator[None]:
        """Внутри блока неудача больше не откатывается к другим альтернативам."""
        try:
            yield
        except Backtrack as exc:
            raise Cut(exc.offset) from exc
