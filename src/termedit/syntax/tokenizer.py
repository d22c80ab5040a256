"""Flat lexical scanner used to color buffer lines."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List


class TokenClass(str, Enum):
    """Color classes a renderer maps to concrete styles."""

    COMMENT = "comment"
    STRING = "string"
    NUMBER = "number"
    KEYWORD = "keyword"
    TYPE = "type"
    PLAIN = "plain"


KEYWORDS: frozenset[str] = frozenset(
    {
        "as",
        "break",
        "const",
        "continue",
        "else",
        "enum",
        "false",
        "fn",
        "for",
        "if",
        "impl",
        "in",
        "let",
        "loop",
        "match",
        "mod",
        "mut",
        "pub",
        "return",
        "self",
        "static",
        "struct",
        "trait",
        "true",
        "use",
        "where",
        "while",
    }
)

TYPE_NAMES: frozenset[str] = frozenset(
    {
        "bool",
        "char",
        "f32",
        "f64",
        "i8",
        "i16",
        "i32",
        "i64",
        "i128",
        "isize",
        "u8",
        "u16",
        "u32",
        "u64",
        "u128",
        "usize",
        "str",
        "String",
        "Vec",
        "Option",
        "Result",
        "Box",
        "Self",
    }
)


@dataclass(frozen=True, slots=True)
class Token:
    text: str
    kind: TokenClass
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_word(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _classify_word(word: str) -> TokenClass:
    if word in KEYWORDS:
        return TokenClass.KEYWORD
    if word in TYPE_NAMES:
        return TokenClass.TYPE
    return TokenClass.PLAIN


def tokenize(line: str) -> tuple[Token, ...]:
    """Split ``line`` into classified tokens covering every character once."""

    tokens: List[Token] = []
    length = len(line)
    pos = 0
    while pos < length:
        ch = line[pos]
        if line.startswith("//", pos):
            end = length
            kind = TokenClass.COMMENT
        elif ch == '"':
            closing = line.find('"', pos + 1)
            end = length if closing == -1 else closing + 1
            kind = TokenClass.STRING
        elif _is_digit(ch):
            end = pos + 1
            while end < length and _is_digit(line[end]):
                end += 1
            kind = TokenClass.NUMBER
        elif _is_word(ch):
            end = pos + 1
            while end < length and _is_word(line[end]):
                end += 1
            kind = _classify_word(line[pos:end])
        else:
            end = pos + 1
            kind = TokenClass.PLAIN
        tokens.append(Token(text=line[pos:end], kind=kind, start=pos))
        pos = end
    return tuple(tokens)


def clip_tokens(tokens: Iterable[Token], start: int, width: int) -> tuple[Token, ...]:
    """Cut a token stream down to the column window ``[start, start + width)``."""

    if width <= 0:
        return ()
    stop = start + width
    clipped: List[Token] = []
    for token in tokens:
        if token.end <= start or token.start >= stop:
            continue
        lo = max(token.start, start)
        hi = min(token.end, stop)
        text = token.text[lo - token.start : hi - token.start]
        clipped.append(Token(text=text, kind=token.kind, start=lo))
    return tuple(clipped)


__all__ = [
    "KEYWORDS",
    "TYPE_NAMES",
    "Token",
    "TokenClass",
    "clip_tokens",
    "tokenize",
]
