"""Date/time pattern tokenizer.

Patterns use CLDR-style field letters. A run of the same letter is one
field; its length selects the width. Text in single quotes is literal and
``''`` is a literal quote. Any other ASCII letter is reserved and rejected
so that a typo never silently becomes literal output.

Supported fields:
    y, yy, yyyy     year (yy is two-digit and cannot be parsed)
    M, MM           month number; MMM abbreviated name; MMMM wide name
    d, dd           day of month
    E, EE, EEE      abbreviated weekday; EEEE wide weekday
    H, HH           hour 0-23
    h, hh           hour 1-12
    m, mm           minute
    s, ss           second
    S...            fraction of second, one digit per letter
    a               am/pm marker
    XXX, xxx        offset "+05:30" (XXX writes "Z" for zero)
    Z, xx           offset "+0530"
    VV              timezone id
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache

from placeless.errors import PatternError

QUOTE = "'"

# letter -> accepted run lengths
FIELD_WIDTHS: dict[str, frozenset[int]] = {
    "y": frozenset({1, 2, 4}),
    "M": frozenset({1, 2, 3, 4}),
    "d": frozenset({1, 2}),
    "E": frozenset({1, 2, 3, 4}),
    "H": frozenset({1, 2}),
    "h": frozenset({1, 2}),
    "m": frozenset({1, 2}),
    "s": frozenset({1, 2}),
    "S": frozenset(range(1, 10)),
    "a": frozenset({1}),
    "X": frozenset({3}),
    "x": frozenset({2, 3}),
    "Z": frozenset({1}),
    "V": frozenset({2}),
}

OFFSET_LETTERS = frozenset("XxZ")


class TokenKind(str, Enum):
    FIELD = "field"
    LITERAL = "literal"


@dataclass(frozen=True)
class Token:
    """One pattern element.

    Attributes:
        kind: FIELD or LITERAL
        value: The letter run for fields, the literal text otherwise
        position: Offset of the token in the pattern
    """

    kind: TokenKind
    value: str
    position: int

    @property
    def letter(self) -> str:
        return self.value[0]

    @property
    def width(self) -> int:
        return len(self.value)

    @property
    def is_field(self) -> bool:
        return self.kind is TokenKind.FIELD


@dataclass(frozen=True)
class Pattern:
    """A tokenized pattern."""

    source: str
    tokens: tuple[Token, ...]

    def fields(self) -> tuple[Token, ...]:
        return tuple(token for token in self.tokens if token.is_field)

    def has_field(self, letter: str) -> bool:
        return any(token.letter == letter for token in self.fields())


def _tokenize(pattern: str) -> list[Token]:
    tokens: list[Token] = []
    literal: list[str] = []
    literal_start = 0
    i = 0
    n = len(pattern)

    def flush_literal() -> None:
        if literal:
            tokens.append(Token(TokenKind.LITERAL, "".join(literal), literal_start))
            literal.clear()

    while i < n:
        ch = pattern[i]
        if ch == QUOTE:
            if i + 1 < n and pattern[i + 1] == QUOTE:
                if not literal:
                    literal_start = i
                literal.append(QUOTE)
                i += 2
                continue
            end = i + 1
            quoted: list[str] = []
            while True:
                if end >= n:
                    raise PatternError(pattern, i, "unterminated quoted literal")
                if pattern[end] == QUOTE:
                    if end + 1 < n and pattern[end + 1] == QUOTE:
                        quoted.append(QUOTE)
                        end += 2
                        continue
                    break
                quoted.append(pattern[end])
                end += 1
            if not literal:
                literal_start = i
            literal.extend(quoted)
            i = end + 1
        elif ch.isascii() and ch.isalpha():
            flush_literal()
            j = i
            while j < n and pattern[j] == ch:
                j += 1
            widths = FIELD_WIDTHS.get(ch)
            if widths is None:
                raise PatternError(pattern, i, f"reserved pattern letter {ch!r}")
            if j - i not in widths:
                raise PatternError(
                    pattern,
                    i,
                    f"field {ch!r} does not support width {j - i}",
                )
            tokens.append(Token(TokenKind.FIELD, pattern[i:j], i))
            i = j
        else:
            if not literal:
                literal_start = i
            literal.append(ch)
            i += 1

    flush_literal()
    return tokens


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> Pattern:
    """Tokenize a pattern.

    Raises:
        PatternError: For an empty pattern, a reserved letter, an unsupported
            width or an unterminated quote
    """
    if not isinstance(pattern, str) or not pattern:
        raise PatternError(str(pattern), 0, "empty pattern")
    return Pattern(pattern, tuple(_tokenize(pattern)))
