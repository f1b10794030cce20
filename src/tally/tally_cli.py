"""
TALLY CLI Entrypoint.

This module provides the command-line interface for the TALLY front end.

Features:
    - Read source from `.tally` files or inline strings.
    - Lex and parse into a Program, then print it as an indented tree or JSON.
    - Optionally print the token list instead of the tree.
    - Output to console or file.
    - Launch an interactive REPL with optional verbosity.

Example usage:
    tally prog.tally
    tally -s "x = 1 + 2 * 3"
    tally -s "x = (5 == 5) && (3 > 2)" --json -o ast.json
    tally -s "y = 2 ** 3" --tokens
    tally --repl --verbose

Exit status:
    0 on success, 1 on a lexical or syntax error, 2 on bad arguments.
"""

import argparse
import json
import sys

from tally.tally_ast import dump
from tally.tally_constants import DEFAULT_MAX_TOKENS, SOURCE_SUFFIX
from tally.tally_lexer import Token, tokenize
from tally.tally_parser import Parser


def format_tokens(tokens: list[Token]) -> str:
    return "\n".join(f"{tok.line}:{tok.col}\t{tok!r}" for tok in tokens)


def run_tally(
    source: str,
    is_string: bool = False,
    out: str | None = None,
    pretty: bool = False,
    show_tokens: bool = False,
    as_json: bool = False,
    max_tokens: int | None = DEFAULT_MAX_TOKENS,
) -> str:
    """
    Run the TALLY front end: lex, parse, and render the result.

    Args:
        source (str): TALLY source code or path to a `.tally` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        out (str | None): Optional path to write the rendered output. If None, prints to stdout.
        pretty (bool): If True, prints banners around the output.
        show_tokens (bool): If True, renders the token list instead of the AST.
        as_json (bool): If True, renders the AST as JSON.
        max_tokens (int | None): Token bound passed to the lexer.

    Returns:
        str: The rendered output.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.tally'.
        LexError: If the source cannot be tokenized.
        ParseError: If the tokens do not form a valid program.
    """
    if not is_string and not source.endswith(SOURCE_SUFFIX):
        raise ValueError(f"Only {SOURCE_SUFFIX} files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lexing
    tokens = tokenize(source, max_tokens=max_tokens)

    # 3. Parsing (skipped when only tokens are requested)
    if show_tokens:
        title = "Tokens"
        text = format_tokens(tokens)
    else:
        program = Parser(tokens).parse()
        title = "Program"
        text = json.dumps(program.to_dict(), indent=2) if as_json else dump(program)

    # 4. Output result
    if pretty:
        banner = "=" * 20
        print(f"{banner}\n{title}\n{banner}\n{text}\n{banner}\n")
    elif not out:
        print(text)

    # 5. Optional write to file
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        if pretty:
            print(f"(wrote to {out})")

    return text


def main() -> None:
    """
    Entry point for the TALLY CLI.

    Launches the REPL if no arguments are passed or `--repl` is specified;
    otherwise runs the front end on the given file or string. Lexical and syntax
    errors are reported on stderr and end the process with status 1.
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from tally.tally_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="tally")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token list instead of the AST"
    )
    parser.add_argument("--json", action="store_true", help="Print the AST as JSON")
    parser.add_argument(
        "--max-tokens",
        type=int,
        default=DEFAULT_MAX_TOKENS,
        metavar="N",
        help=f"Reject input with more than N tokens (default: {DEFAULT_MAX_TOKENS})",
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from tally.tally_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    try:
        run_tally(
            source=args.source,
            is_string=args.string,
            out=args.out,
            pretty=args.pretty,
            show_tokens=args.tokens,
            as_json=args.json,
            max_tokens=args.max_tokens,
        )
    except (SyntaxError, ValueError, OSError) as e:
        print(f"[error] >>> {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
