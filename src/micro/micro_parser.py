"""
Micro Language Recognizer

Checks that a Micro token stream forms a syntactically valid program.

The recognizer is a predictive recursive-descent walker with one token of
lookahead. It builds no syntax tree: `parse()` returns normally when the whole
program is accepted and raises `MicroSyntaxError` at the first token that does
not fit the grammar.

Grammar
-------
    program         := BEGIN statement_list END
    statement_list  := statement statement_list_tail
    statement       := READ "(" id_list ")" ";"
                     | WRITE "(" expr_list ")" ";"
                     | IDENTIFIER ":=" expr ";"
    id_list         := IDENTIFIER { "," IDENTIFIER }
    expr_list       := expr { "," expr }
    expr            := factor { ("+" | "-") factor }
    factor          := "(" expr ")" | IDENTIFIER | INTEGER

Each optional continuation is chosen by peeking at the next token, so a
continuation that is not taken leaves the token queue untouched. The
continuations are written as loops rather than right recursion, and nested
parentheses are tracked with a counter, so neither long programs nor deeply
parenthesized expressions exhaust the interpreter's recursion limit.

Tokens following the closing END are not examined.

Raises
------
MicroSyntaxError
    Carries the expected construct, the display name of the token actually
    found, and that token's line and column.
"""

from __future__ import annotations

import logging
from typing import NoReturn

from micro.micro_constants import (
    ASSIGNMENT,
    IDENTIFIER,
    INTEGER,
    KEYWORD,
    LPAREN,
    OP,
    RPAREN,
    SYMBOL,
)
from micro.micro_lexer import Lexer, Token

logger = logging.getLogger(__name__)

STATEMENT_KEYWORDS = ("READ", "WRITE")


class MicroSyntaxError(SyntaxError):
    """Raised at the first point where the token stream leaves the grammar.

    Attributes:
        expected (str): Human-readable name of the construct that was required.
        actual (str): Display name of the kind of token that was found.
        line (int): Line of the offending token.
        column (int): Column of the offending token.
    """

    def __init__(self, expected: str, actual: str, line: int, column: int) -> None:
        self.expected = expected
        self.actual = actual
        self.line = line
        self.column = column
        super().__init__(f"Expected {expected}, but found {actual} at {line}:{column}")

    @classmethod
    def at(cls, expected: str, token: Token) -> MicroSyntaxError:
        return cls(expected, token.name, token.line, token.column)


class Parser:
    """
    Micro Recognizer

    Walks the token queue of a loaded `Lexer`, one method per nonterminal.
    The parser owns no state besides the lexer reference; the queue is drained
    strictly forward.

    Attributes
    ----------
    lexer : Lexer
        A lexer whose `load()` has already been called.

    Methods
    -------
    parse() -> None
        Recognize a complete program.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer: Lexer = lexer

    def fail(self, expected: str, token: Token) -> NoReturn:
        raise MicroSyntaxError.at(expected, token)

    def expect(self, kind: str, expected: str) -> Token:
        """Consume the next token, which must be of `kind`."""
        tok = self.lexer.next()
        if tok.kind != kind:
            self.fail(expected, tok)
        return tok

    def expect_word(self, kind: str, lexeme: str, expected: str) -> Token:
        """Consume the next token, which must be exactly `lexeme` of `kind`."""
        tok = self.lexer.next()
        if tok.kind != kind or tok.lexeme != lexeme:
            self.fail(expected, tok)
        return tok

    def parse(self) -> None:
        """Recognize a full Micro program or raise `MicroSyntaxError`."""
        self.program()
        logger.debug("program accepted")

    def program(self) -> None:
        self.expect_word(KEYWORD, "BEGIN", "BEGIN")
        self.statement_list()
        self.expect_word(KEYWORD, "END", "END")

    def statement_list(self) -> None:
        self.statement()
        self.statement_list_tail()

    def starts_statement(self, tok: Token) -> bool:
        return tok.kind == IDENTIFIER or (
            tok.kind == KEYWORD and tok.lexeme in STATEMENT_KEYWORDS
        )

    def statement_list_tail(self) -> None:
        while self.starts_statement(self.lexer.peek()):
            self.statement()

    def statement(self) -> None:
        """Parse one of the three statement forms, each ending in `;`."""
        tok = self.lexer.next()
        logger.debug("statement %s at %d:%d", tok.lexeme, tok.line, tok.column)

        if tok.kind == KEYWORD:
            if tok.lexeme == "READ":
                self.expect(LPAREN, "left parenthesis")
                self.id_list()
                self.expect(RPAREN, "right parenthesis")
            elif tok.lexeme == "WRITE":
                self.expect(LPAREN, "left parenthesis")
                self.expr_list()
                self.expect(RPAREN, "right parenthesis")
            else:
                self.fail("READ/WRITE", tok)
        elif tok.kind == IDENTIFIER:
            self.expect(ASSIGNMENT, "assignment")
            self.expr()
        else:
            self.fail("READ/WRITE or IDENTIFIER", tok)

        self.expect_word(SYMBOL, ";", "semicolon")

    def is_comma(self, tok: Token) -> bool:
        return tok.kind == SYMBOL and tok.lexeme == ","

    def id_list(self) -> None:
        self.ident()
        self.id_list_tail()

    def id_list_tail(self) -> None:
        while self.is_comma(self.lexer.peek()):
            self.lexer.next()
            self.ident()

    def expr_list(self) -> None:
        self.expr()
        self.expr_list_tail()

    def expr_list_tail(self) -> None:
        while self.is_comma(self.lexer.peek()):
            self.lexer.next()
            self.expr()

    def expr(self) -> None:
        """Parse an expression without recursing into parentheses.

        Open parentheses are counted as factors consume them. After each
        factor, an operator continues the chain; otherwise one `)` is
        required per open parenthesis before the expression ends.
        """
        depth = 0
        while True:
            depth += self.factor()
            # a + b - c is accepted as a chain; no grouping is implied
            while self.lexer.peek().kind != OP:
                if depth == 0:
                    return
                self.expect(RPAREN, "RPAREN")
                depth -= 1
            self.op()

    def factor(self) -> int:
        """Consume a factor's leading `(` tokens and its identifier or integer.

        Returns:
            int: The number of parentheses opened, to be closed by `expr`.
        """
        opened = 0
        tok = self.lexer.next()
        while tok.kind == LPAREN:
            opened += 1
            tok = self.lexer.next()
        if tok.kind not in (IDENTIFIER, INTEGER):
            self.fail("INTEGER or IDENTIFIER", tok)
        return opened

    def op(self) -> None:
        self.expect(OP, "OPERATION")

    def ident(self) -> None:
        self.expect(IDENTIFIER, "IDENTIFIER")


def recognize(text: str) -> None:
    """Tokenize and recognize `text`, raising `MicroSyntaxError` on rejection."""
    lexer = Lexer()
    lexer.load(text)
    Parser(lexer).parse()


__all__ = ["MicroSyntaxError", "Parser", "recognize"]
