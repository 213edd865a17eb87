"""
reckon - Lexer
Tokenizes a single reckon statement into a flat token stream.
"""

import re
from dataclasses import dataclass
from typing import List
from enum import Enum, auto
from .values import INT32_MAX


class TokenType(Enum):
    # Literals
    INTEGER    = auto()
    FLOAT      = auto()
    IDENTIFIER = auto()
    # Keywords
    LET        = auto()   # let
    # Operators
    PLUS       = auto()   # +
    MINUS      = auto()   # -
    STAR       = auto()   # *
    SLASH      = auto()   # /
    CARET      = auto()   # ^
    ASSIGN     = auto()   # =
    # Brackets
    LPAREN     = auto()   # (
    RPAREN     = auto()   # )


KEYWORDS = {"let": TokenType.LET}


@dataclass
class Token:
    type: TokenType
    value: str
    column: int = 0

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, column={self.column})"


class LexerError(Exception):
    def __init__(self, message: str, column: int):
        super().__init__(f"[LexerError] Col {column}: {message}")
        self.column = column


# Token specification: ordered list of (TokenType, regex) pairs
_TOKEN_SPEC = [
    (TokenType.FLOAT,      r'\d+\.\d*'),
    (TokenType.INTEGER,    r'\d+'),
    (TokenType.IDENTIFIER, r'[A-Za-z_][A-Za-z0-9_]*'),
    (TokenType.PLUS,       r'\+'),
    (TokenType.MINUS,      r'-'),
    (TokenType.STAR,       r'\*'),
    (TokenType.SLASH,      r'/'),
    (TokenType.CARET,      r'\^'),
    (TokenType.ASSIGN,     r'='),
    (TokenType.LPAREN,     r'\('),
    (TokenType.RPAREN,     r'\)'),
]

_MASTER_RE = re.compile(
    r'(?:' + '|'.join(f'(?P<T{i}>{spec[1]})' for i, spec in enumerate(_TOKEN_SPEC)) + r')',
    re.ASCII
)

_WHITESPACE_RE = re.compile(r'\s+')


def _fits_i32_magnitude(raw: str) -> bool:
    """True if a digit string is at most 2**31, the magnitude of the smallest int32."""
    digits = raw.lstrip('0')
    return len(digits) <= 10 and int(digits or '0') <= INT32_MAX + 1


def tokenize(source: str) -> List[Token]:
    """
    Convert one reckon statement into a list of Tokens.
    Raises LexerError on unrecognized characters and on integer
    literals that do not fit in 32 bits.
    """
    tokens: List[Token] = []
    pos = 0
    length = len(source)

    while pos < length:
        m = _WHITESPACE_RE.match(source, pos)
        if m:
            pos = m.end()
            continue

        m = _MASTER_RE.match(source, pos)
        if not m:
            raise LexerError(f"Unexpected character: {source[pos]!r}", pos + 1)

        raw = m.group(0)
        tok_type = None
        for i, (ttype, _) in enumerate(_TOKEN_SPEC):
            if m.group(f'T{i}') is not None:
                tok_type = ttype
                break

        if tok_type == TokenType.IDENTIFIER:
            tok_type = KEYWORDS.get(raw, TokenType.IDENTIFIER)
        elif tok_type == TokenType.INTEGER and not _fits_i32_magnitude(raw):
            shown = raw if len(raw) <= 20 else raw[:17] + "..."
            raise LexerError(f"Integer literal out of range: {shown}", pos + 1)

        tokens.append(Token(tok_type, raw, pos + 1))
        pos = m.end()

    return tokens
