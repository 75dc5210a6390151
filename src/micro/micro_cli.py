"""
Micro CLI Entrypoint.

This module provides the command-line interface for checking Micro programs.

Features:
    - Read source from `.micro` files or inline strings.
    - Tokenize and recognize the program, reporting the first syntax error.
    - Optionally dump the token queue before recognition.

Example usage:
    micro hello.micro
    micro -s "BEGIN X := 1; END"
    micro hello.micro --tokens --verbose

Functions:
    run_micro(source: str, is_string: bool = False, show_tokens: bool = False) -> int:
        Loads and recognizes one program, printing the outcome.

    main(argv: list[str] | None = None) -> None:
        Parses CLI arguments and exits with the status of `run_micro`.
"""

import argparse
import logging
import sys

from micro.micro_constants import SOURCE_SUFFIX
from micro.micro_lexer import Lexer
from micro.micro_parser import MicroSyntaxError, Parser

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SYNTAX_ERROR = 1
EXIT_LOAD_ERROR = 2


def run_micro(source: str, is_string: bool = False, show_tokens: bool = False) -> int:
    """
    Load a Micro program and recognize it.

    Args:
        source (str): Path to a Micro source file, or the raw program with `is_string`.
        is_string (bool): If True, treats `source` as program text. Defaults to False.
        show_tokens (bool): If True, prints every queued token before recognition.

    Returns:
        int: 0 when the program is accepted, 1 on a syntax error, 2 when the
        file could not be loaded.

    Side Effects:
        Prints the load result and the recognition outcome to stdout.
    """
    lexer = Lexer()

    # 1. Load
    if is_string:
        name = "<string>"
        lexer.load(source)
    else:
        name = source
        if not source.endswith(SOURCE_SUFFIX):
            logger.warning("%s does not have a %s suffix", source, SOURCE_SUFFIX)
        if not lexer.load_file(source):
            print("Unable to load file.")
            return EXIT_LOAD_ERROR
    print("Successfully loaded file.")

    # 2. Optional token dump
    if show_tokens:
        for tok in lexer.tokens():
            print(f"{tok.line}:{tok.column}\t{tok.name}\t{tok.lexeme}")

    # 3. Recognize
    try:
        Parser(lexer).parse()
    except MicroSyntaxError as e:
        print(e)
        return EXIT_SYNTAX_ERROR

    print(f"Successfully compiled {name}.")
    return EXIT_OK


def main(argv: list[str] | None = None) -> None:
    """
    Entry point for the Micro CLI.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw program instead of a file path.
        - `-t`, `--tokens`: Print the token queue before recognizing.
        - `-v`, `--verbose`: Log debug records to stderr.
    """
    parser = argparse.ArgumentParser(
        prog="micro", description="Check the syntax of a Micro program."
    )
    parser.add_argument("source", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-t", "--tokens", action="store_true", help="Print tokens before recognizing"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr"
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    sys.exit(
        run_micro(source=args.source, is_string=args.string, show_tokens=args.tokens)
    )


if __name__ == "__main__":
    main()
