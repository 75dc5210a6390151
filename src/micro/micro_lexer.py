"""
Lexical analyzer for the Micro language.

This module converts raw source text into a queue of classified tokens:

Classes:
    Cursor: Immutable scan position (index, line, column) into the source.
    Token: A single token with kind, lexeme, and source location.
    Lexer: Eagerly tokenizes a source string and serves the tokens through
        `next()` / `peek()`.

Features:
    - Whitespace is consumed (to keep positions right) but never queued
    - Identifiers are upper-cased; BEGIN, END, READ and WRITE become keywords
    - Recognizes integers, `,` `;` `(` `)` `:=` `+` `-`
    - Tracks line and column across both `\\n` and `\\r\\n` line endings
    - The first unrecognized character ends tokenization: an UNKNOWN token
      is queued, followed directly by EOF

Each token shape is read by an independent reader function that receives a
copy of the cursor and returns the token together with the advanced cursor, or
None when the shape does not start at that position. Only the winning reader's
cursor is committed, so a failed attempt never has to be rolled back.

Example:
    >>> lexer = Lexer()
    >>> lexer.load("begin x := 1; end")
    True
    >>> lexer.next()
    Token(KEYWORD, BEGIN)
    >>> lexer.peek()
    Token(IDENTIFIER, X)

Exports:
    - Cursor
    - Token
    - Lexer
    - tokenize
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable
from typing import Any

from micro.micro_constants import (
    ASSIGNMENT,
    ASSIGNMENT_OPERATOR,
    DIGITS,
    EOF,
    IDENTIFIER,
    INTEGER,
    KEYWORD,
    KEYWORDS,
    LETTERS,
    OP,
    OPERATORS,
    PARENS,
    SYMBOL,
    SYMBOLS,
    TOKEN_NAMES,
    UNKNOWN,
    WHITESPACE,
    WHITESPACE_CHARS,
)

logger = logging.getLogger(__name__)


class Cursor:
    """An immutable position in the source being scanned.

    Attributes:
        index (int): Offset of the next character to read.
        line (int): 1-based line of that character.
        column (int): 1-based column of that character.
    """

    __slots__ = ("index", "line", "column")

    def __init__(self, index: int = 0, line: int = 1, column: int = 1) -> None:
        object.__setattr__(self, "index", index)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "column", column)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Cursor is immutable, cannot set {name!r}")

    def advance(self, char: str) -> Cursor:
        """Returns the cursor positioned just after `char`.

        A newline moves to column 1 of the next line. A carriage return moves
        to column 1 of the same line, so `\\r\\n` counts as a single line break.
        """
        line, column = self.line, self.column
        if char == "\r":
            column = 0
        elif char == "\n":
            column = 0
            line += 1
        return Cursor(self.index + 1, line, column + 1)

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Cursor)
            and self.index == other.index
            and self.line == other.line
            and self.column == other.column
        )

    def __hash__(self) -> int:
        return hash((self.index, self.line, self.column))

    def __repr__(self) -> str:
        return f"Cursor({self.index}, {self.line}:{self.column})"


class Token:
    """An immutable lexical token of the Micro language.

    Attributes:
        kind (str): One of the kinds in `micro_constants` (e.g. 'IDENTIFIER', 'EOF').
        lexeme (str): The source text consumed by the token (upper-cased for
            identifiers and keywords).
        line (int): The 1-based line number of the token's first character.
        column (int): The 1-based column number of the token's first character.
    """

    __slots__ = ("kind", "lexeme", "line", "column")

    def __init__(self, kind: str, lexeme: str, line: int = 1, column: int = 1) -> None:
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "lexeme", lexeme)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "column", column)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable, cannot set {name!r}")

    @property
    def name(self) -> str:
        """The human-readable kind name used in error messages."""
        return TOKEN_NAMES[self.kind]

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.lexeme})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.kind == other.kind
            and self.lexeme == other.lexeme
            and self.line == other.line
            and self.column == other.column
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.lexeme, self.line, self.column))


Reading = tuple[Token, Cursor] | None


def _char(source: str, cursor: Cursor) -> str:
    """Returns the character at the cursor, or an empty string past the end."""
    return source[cursor.index] if cursor.index < len(source) else ""


def _token(kind: str, source: str, start: Cursor, end: Cursor) -> Reading:
    """Builds the reading for the text between two cursors.

    Args:
        kind (str): Kind of the token to build.
        source (str): The source being scanned.
        start (Cursor): Position of the token's first character.
        end (Cursor): Position just after the token's last character.

    Returns:
        Reading: The token and `end`, or None when nothing was consumed.
    """
    if end.index == start.index:
        return None
    return Token(kind, source[start.index : end.index], start.line, start.column), end


def read_whitespace(source: str, start: Cursor) -> Reading:
    """Reads a run of space, tab, newline, vertical tab, form feed or carriage
    return characters."""
    cursor = start
    while (ch := _char(source, cursor)) and ch in WHITESPACE_CHARS:
        cursor = cursor.advance(ch)
    return _token(WHITESPACE, source, start, cursor)


def read_identifier(source: str, start: Cursor) -> Reading:
    """Reads `[A-Za-z][A-Za-z0-9_]*`, upper-cased and classified as a keyword
    when it matches one of the reserved words."""
    cursor = start
    if _char(source, cursor) in LETTERS:
        cursor = cursor.advance(_char(source, cursor))
        while (ch := _char(source, cursor)) and (
            ch in LETTERS or ch in DIGITS or ch == "_"
        ):
            cursor = cursor.advance(ch)

    reading = _token(IDENTIFIER, source, start, cursor)
    if reading is None:
        return None
    word = reading[0].lexeme.upper()
    kind = KEYWORD if word in KEYWORDS else IDENTIFIER
    return Token(kind, word, start.line, start.column), cursor


def read_symbol(source: str, start: Cursor) -> Reading:
    """Reads a single `,` or `;`."""
    ch = _char(source, start)
    if ch and ch in SYMBOLS:
        return _token(SYMBOL, source, start, start.advance(ch))
    return None


def read_integer(source: str, start: Cursor) -> Reading:
    """Reads a run of ASCII digits."""
    cursor = start
    while (ch := _char(source, cursor)) and ch in DIGITS:
        cursor = cursor.advance(ch)
    return _token(INTEGER, source, start, cursor)


def read_paren(source: str, start: Cursor) -> Reading:
    """Reads a single `(` or `)`."""
    ch = _char(source, start)
    if ch and ch in PARENS:
        return _token(PARENS[ch], source, start, start.advance(ch))
    return None


def read_assignment(source: str, start: Cursor) -> Reading:
    """Reads `:=`. A `:` on its own is not an assignment."""
    # both characters are required, with nothing between them
    end = start.index + len(ASSIGNMENT_OPERATOR)
    if source[start.index : end] != ASSIGNMENT_OPERATOR:
        return None
    cursor = start
    for ch in ASSIGNMENT_OPERATOR:
        cursor = cursor.advance(ch)
    return _token(ASSIGNMENT, source, start, cursor)


def read_operator(source: str, start: Cursor) -> Reading:
    """Reads a single `+` or `-`."""
    ch = _char(source, start)
    if ch and ch in OPERATORS:
        return _token(OP, source, start, start.advance(ch))
    return None


# Priority order: the first reader that consumes anything wins.
READERS: tuple[Callable[[str, Cursor], Reading], ...] = (
    read_whitespace,
    read_identifier,
    read_symbol,
    read_integer,
    read_paren,
    read_assignment,
    read_operator,
)


class Lexer:
    """Lexical analyzer for the Micro language.

    `load()` tokenizes the whole source up front; the resulting queue always
    ends with exactly one EOF token. The recognizer then drains the queue with
    `next()` and looks ahead with `peek()`.

    Attributes:
        source (str): The most recently loaded source text.
        cursor (Cursor): The scan position of the tokenizer.
    """

    def __init__(self) -> None:
        self.source: str = ""
        self.cursor: Cursor = Cursor()
        self._tokens: deque[Token] | None = None

    def load(self, text: str) -> bool:
        """Resets the scan position and tokenizes `text` end to end.

        Args:
            text (str): The complete source program.

        Returns:
            bool: Always True; an in-memory string can always be loaded.
        """
        self.source = text
        self.cursor = Cursor()
        self._tokens = deque()

        while True:
            token = self.read_next_token()
            if token.kind != WHITESPACE:
                self._tokens.append(token)
            if token.kind == EOF:
                break

        logger.debug(
            "tokenized %d characters into %d tokens", len(text), len(self._tokens)
        )
        return True

    def load_file(self, path: str) -> bool:
        """Reads a UTF-8 source file and loads its contents.

        Bytes that are not valid UTF-8 are decoded as U+FFFD, which lexes as an
        UNKNOWN token at the position of the bad byte.

        Args:
            path (str): Path of the file to read.

        Returns:
            bool: False if the file is missing or unreadable, True otherwise.
        """
        try:
            # newline="" keeps \r\n intact so columns match the file on disk
            with open(path, encoding="utf-8", errors="replace", newline="") as f:
                text = f.read()
        except OSError as e:
            logger.debug("unable to load %s: %s", path, e)
            return False
        logger.debug("loaded %s (%d characters)", path, len(text))
        return self.load(text)

    def read_next_token(self) -> Token:
        """Scans one token at the cursor, whitespace included.

        Returns:
            Token: The next token; EOF once the source is exhausted or after an
            unrecognized character has been reported.
        """
        if self.cursor.index >= len(self.source):
            return Token(EOF, "", self.cursor.line, self.cursor.column)

        for reader in READERS:
            reading = reader(self.source, self.cursor)
            if reading is not None:
                token, self.cursor = reading
                return token

        # stop here: move past the end so only EOF follows
        cursor = self.cursor
        self.cursor = Cursor(len(self.source) + 1, cursor.line, cursor.column)
        return Token(UNKNOWN, self.source[cursor.index], cursor.line, cursor.column)

    def _queue(self) -> deque[Token]:
        """Returns the token queue.

        Raises:
            RuntimeError: If `load()` has not been called yet.
        """
        if self._tokens is None:
            raise RuntimeError("Lexer has no tokens: call load() first")
        return self._tokens

    def next(self) -> Token:
        """Removes and returns the front token.

        The trailing EOF token is never removed; once it is reached every call
        returns it again.
        """
        tokens = self._queue()
        if len(tokens) == 1:
            return tokens[0]
        return tokens.popleft()

    def peek(self) -> Token:
        """Returns the front token without removing it."""
        return self._queue()[0]

    def has_more_tokens(self) -> bool:
        """Returns True once loaded; the trailing EOF is never removed."""
        return bool(self._tokens)

    def tokens(self) -> list[Token]:
        """Returns a snapshot of the queued tokens without consuming them."""
        return list(self._queue())


def tokenize(text: str) -> list[Token]:
    """Tokenizes `text` and returns the full token queue, EOF included."""
    lexer = Lexer()
    lexer.load(text)
    return lexer.tokens()


__all__ = ["Cursor", "Lexer", "Token", "tokenize"]
