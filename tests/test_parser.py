import pytest
from hypothesis import given
from hypothesis import strategies as st
from hypothesis.strategies import composite

from micro.micro_lexer import Lexer
from micro.micro_parser import MicroSyntaxError, Parser, recognize


def loaded(source: str) -> Lexer:
    lexer = Lexer()
    lexer.load(source)
    return lexer


def rejection(source: str) -> tuple[str, str, int, int]:
    with pytest.raises(MicroSyntaxError) as e:
        recognize(source)
    err = e.value
    return err.expected, err.actual, err.line, err.column


@pytest.mark.parametrize(
    "source",
    [
        "BEGIN READ(X); WRITE(X); END",
        "BEGIN X := 1 + (2 - Y); END",
        "begin x := 1; end",
        "BEGIN READ(A, B, C); END",
        "BEGIN WRITE(1, A + B, (((C)))); END",
        "BEGIN X := A - B + C - 12; Y := X; END",
        "BEGIN\n  READ(X);\r\n  WRITE(X - 1);\nEND\n",
        "BEGIN X := ((A) + (B - (1))) - 2; END",
    ],
)
def test_accepts_valid_programs(source: str) -> None:
    recognize(source)


def test_accepts_fixture_program(valid_program: str) -> None:
    recognize(valid_program)


def test_tokens_after_end_are_ignored() -> None:
    recognize("BEGIN X := 1; END and then # garbage")


def test_missing_factor() -> None:
    assert rejection("BEGIN X := ; END") == ("INTEGER or IDENTIFIER", "SYMBOL", 1, 12)


def test_missing_comma_in_read() -> None:
    assert rejection("BEGIN READ(X Y); END") == (
        "right parenthesis",
        "IDENTIFIER",
        1,
        14,
    )


def test_empty_input() -> None:
    assert rejection("") == ("BEGIN", "EOF", 1, 1)


def test_missing_begin() -> None:
    assert rejection("X := 1;") == ("BEGIN", "IDENTIFIER", 1, 1)


def test_missing_end() -> None:
    assert rejection("BEGIN X := 1;") == ("END", "EOF", 1, 14)


def test_empty_statement_list() -> None:
    assert rejection("BEGIN END") == ("READ/WRITE", "KEYWORD", 1, 7)


def test_statement_cannot_start_with_symbol() -> None:
    assert rejection("BEGIN ; END") == ("READ/WRITE or IDENTIFIER", "SYMBOL", 1, 7)


def test_nested_begin() -> None:
    assert rejection("BEGIN BEGIN X := 1; END END") == ("READ/WRITE", "KEYWORD", 1, 7)


def test_missing_semicolon() -> None:
    assert rejection("BEGIN X := 1 END") == ("semicolon", "KEYWORD", 1, 14)


def test_comma_is_not_a_terminator() -> None:
    assert rejection("BEGIN X := 1, END") == ("semicolon", "SYMBOL", 1, 13)


def test_missing_assignment() -> None:
    assert rejection("BEGIN X 1; END") == ("assignment", "INTEGER", 1, 9)


def test_read_without_parenthesis() -> None:
    assert rejection("BEGIN READ X; END") == (
        "left parenthesis",
        "IDENTIFIER",
        1,
        12,
    )


def test_write_without_parenthesis() -> None:
    assert rejection("BEGIN WRITE 1; END") == ("left parenthesis", "INTEGER", 1, 13)


def test_read_requires_identifiers() -> None:
    assert rejection("BEGIN READ(X, 1); END") == ("IDENTIFIER", "INTEGER", 1, 15)
    assert rejection("BEGIN READ(); END") == ("IDENTIFIER", "RPAREN", 1, 12)


def test_write_trailing_comma() -> None:
    assert rejection("BEGIN WRITE(X, ); END") == (
        "INTEGER or IDENTIFIER",
        "RPAREN",
        1,
        16,
    )


def test_write_missing_comma() -> None:
    assert rejection("BEGIN WRITE(1 2); END") == (
        "right parenthesis",
        "INTEGER",
        1,
        15,
    )


def test_unclosed_parenthesized_factor() -> None:
    assert rejection("BEGIN X := (1 + 2; END") == ("RPAREN", "SYMBOL", 1, 18)


def test_dangling_operator() -> None:
    assert rejection("BEGIN X := 1 +; END") == (
        "INTEGER or IDENTIFIER",
        "SYMBOL",
        1,
        15,
    )


def test_keyword_is_not_a_factor() -> None:
    assert rejection("BEGIN X := READ; END") == (
        "INTEGER or IDENTIFIER",
        "KEYWORD",
        1,
        12,
    )


def test_unrecognized_character() -> None:
    assert rejection("BEGIN X := #; END") == (
        "INTEGER or IDENTIFIER",
        "UNRECOGNIZED TOKEN",
        1,
        12,
    )


def test_unrecognized_character_on_later_line() -> None:
    source = "BEGIN\n  READ(X);\n  WRITE(X) @;\nEND"
    assert rejection(source) == ("semicolon", "UNRECOGNIZED TOKEN", 3, 12)


def test_lone_colon_is_rejected_at_its_position() -> None:
    assert rejection("BEGIN X : 1; END") == ("assignment", "UNRECOGNIZED TOKEN", 1, 9)


def test_error_position_across_crlf() -> None:
    assert rejection("BEGIN\r\nX := 1\r\nEND") == ("semicolon", "KEYWORD", 3, 1)


def test_error_message_format() -> None:
    with pytest.raises(MicroSyntaxError) as e:
        recognize("BEGIN X := ; END")
    assert str(e.value) == "Expected INTEGER or IDENTIFIER, but found SYMBOL at 1:12"


def test_error_is_a_syntax_error() -> None:
    with pytest.raises(SyntaxError):
        recognize("")


def test_op_requires_operator() -> None:
    with pytest.raises(MicroSyntaxError) as e:
        Parser(loaded("X")).op()
    assert (e.value.expected, e.value.actual) == ("OPERATION", "IDENTIFIER")


def test_untaken_tail_leaves_queue_untouched() -> None:
    lexer = loaded("X, Y)")
    Parser(lexer).id_list()
    assert lexer.peek().kind == "RPAREN"

    lexer = loaded("1 + A - (B) ;")
    Parser(lexer).expr()
    assert lexer.peek().lexeme == ";"

    lexer = loaded("X := 1; END")
    Parser(lexer).statement_list()
    assert lexer.peek().lexeme == "END"


def test_long_program_is_accepted() -> None:
    body = "\n".join(f"X{i} := X{i} + {i};" for i in range(5000))
    recognize(f"BEGIN\n{body}\nEND")


def test_long_expression_is_accepted() -> None:
    expr = " + ".join(str(i) for i in range(5000))
    recognize(f"BEGIN WRITE({expr}); END")


def test_deeply_nested_parentheses_are_accepted() -> None:
    depth = 5000
    recognize("BEGIN X := " + "(" * depth + "1" + ")" * depth + "; END")


def test_deeply_nested_operands_are_accepted() -> None:
    expr = "(1 + " * 5000 + "2" + ")" * 5000
    recognize(f"BEGIN WRITE({expr}, A); END")


def test_deeply_nested_unclosed_parenthesis() -> None:
    source = "BEGIN X := " + "(" * 5000 + "1" + ")" * 4999 + "; END"
    assert rejection(source) == ("RPAREN", "SYMBOL", 1, 10012)


def test_extra_closing_parenthesis() -> None:
    assert rejection("BEGIN X := (1)); END") == ("semicolon", "RPAREN", 1, 15)


def test_non_ascii_space_is_rejected() -> None:
    assert rejection("BEGIN\u00a0X := 1; END") == (
        "READ/WRITE or IDENTIFIER",
        "UNRECOGNIZED TOKEN",
        1,
        6,
    )


def test_parse_stops_at_first_error() -> None:
    lexer = loaded("BEGIN X := ; Y := ; END")
    with pytest.raises(MicroSyntaxError) as e:
        Parser(lexer).parse()
    assert e.value.column == 12
    assert lexer.peek().lexeme == "Y"


# Property-based programs

names = st.sampled_from(["X", "y", "Total", "a_1", "COUNT2"])
integers = st.integers(min_value=0, max_value=10**6).map(str)
factors = st.one_of(names, integers)


def parenthesize(inner: st.SearchStrategy[list[str]]) -> st.SearchStrategy[list[str]]:
    return inner.map(lambda tokens: ["(", *tokens, ")"])


exprs = st.recursive(
    factors.map(lambda f: [f]),
    lambda inner: st.one_of(
        parenthesize(inner),
        st.tuples(inner, st.sampled_from(["+", "-"]), inner).map(
            lambda t: [*t[0], t[1], *t[2]]
        ),
    ),
    max_leaves=8,
)


def joined(items: list[list[str]]) -> list[str]:
    out: list[str] = []
    for i, item in enumerate(items):
        if i:
            out.append(",")
        out.extend(item)
    return out


@composite
def statements(draw: st.DrawFn) -> list[str]:
    form = draw(st.sampled_from(["read", "write", "assign"]))
    if form == "read":
        ids = draw(st.lists(names, min_size=1, max_size=4))
        return ["READ", "(", *joined([[i] for i in ids]), ")", ";"]
    if form == "write":
        items = draw(st.lists(exprs, min_size=1, max_size=3))
        return ["WRITE", "(", *joined(items), ")", ";"]
    return [draw(names), ":=", *draw(exprs), ";"]


@composite
def programs(draw: st.DrawFn) -> list[str]:
    body = draw(st.lists(statements(), min_size=1, max_size=5))
    return ["BEGIN", *[tok for stmt in body for tok in stmt], "END"]


gaps = st.sampled_from([" ", "  ", "\t", "\n", "\r\n", " \n\t "])


def outcome(source: str) -> tuple[str, str] | None:
    try:
        recognize(source)
    except MicroSyntaxError as e:
        return e.expected, e.actual
    return None


@given(programs())
def test_generated_programs_are_accepted(tokens: list[str]) -> None:
    recognize(" ".join(tokens))


@given(programs(), st.data())
def test_whitespace_does_not_change_outcome(
    tokens: list[str], data: st.DataObject
) -> None:
    # drop one token so that some programs are rejected as well
    cut = data.draw(st.integers(min_value=0, max_value=len(tokens)))
    tokens = tokens[:cut] + tokens[cut + 1 :]
    spaced = "".join(tok + data.draw(gaps) for tok in tokens)
    assert outcome(spaced) == outcome(" ".join(tokens))


@given(programs())
def test_case_does_not_change_outcome(tokens: list[str]) -> None:
    source = " ".join(tokens)
    assert outcome(source.lower()) == outcome(source.upper()) is None


@given(st.text())
def test_arbitrary_text_only_raises_syntax_errors(source: str) -> None:
    outcome(source)
