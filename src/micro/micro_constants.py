"""
Static lexical tables for the Micro language.

Token kinds are plain upper-case strings. `TOKEN_NAMES` maps each kind to the
human-readable name used when reporting syntax errors.

Exports:
    - KEYWORDS, SYMBOLS, OPERATORS, PARENS, ASSIGNMENT_OPERATOR
    - token kind constants (IDENTIFIER, KEYWORD, ...)
    - TOKEN_NAMES
    - LETTERS, DIGITS, WHITESPACE_CHARS
    - SOURCE_SUFFIX
"""

from types import MappingProxyType

IDENTIFIER = "IDENTIFIER"
KEYWORD = "KEYWORD"
INTEGER = "INTEGER"
WHITESPACE = "WHITESPACE"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
SYMBOL = "SYMBOL"
OP = "OP"
ASSIGNMENT = "ASSIGNMENT"
EOF = "EOF"
UNKNOWN = "UNKNOWN"

TOKEN_KINDS: tuple[str, ...] = (
    IDENTIFIER,
    KEYWORD,
    INTEGER,
    WHITESPACE,
    LPAREN,
    RPAREN,
    SYMBOL,
    OP,
    ASSIGNMENT,
    EOF,
    UNKNOWN,
)

TOKEN_NAMES = MappingProxyType(
    {
        IDENTIFIER: "IDENTIFIER",
        KEYWORD: "KEYWORD",
        INTEGER: "INTEGER",
        WHITESPACE: "WHITESPACE",
        LPAREN: "LPAREN",
        RPAREN: "RPAREN",
        SYMBOL: "SYMBOL",
        OP: "OPERATION",
        ASSIGNMENT: "ASSIGNMENT",
        EOF: "EOF",
        UNKNOWN: "UNRECOGNIZED TOKEN",
    }
)

KEYWORDS: tuple[str, ...] = ("BEGIN", "END", "READ", "WRITE")
SYMBOLS: tuple[str, ...] = (",", ";")
OPERATORS: tuple[str, ...] = ("+", "-")
PARENS = MappingProxyType({"(": LPAREN, ")": RPAREN})
ASSIGNMENT_OPERATOR = ":="

# ASCII only; str.isalpha() would accept any Unicode letter
LETTERS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz")
DIGITS = frozenset("0123456789")
# the C locale whitespace set; no Unicode spaces
WHITESPACE_CHARS = frozenset(" \t\n\v\f\r")

SOURCE_SUFFIX = ".micro"
