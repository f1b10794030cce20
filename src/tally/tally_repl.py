"""
Interactive prompt for the TALLY front end.

Each non-empty line is tokenized and parsed on its own; the resulting program is
printed as an indented tree, or the error is printed and the prompt continues.

Commands:
    exit, quit      leave the REPL (EOF and Ctrl-C do the same)
    verbose-mode    toggle echoing the token list before each tree
    # ...           comment lines are ignored
"""

from tally.tally_ast import dump
from tally.tally_lexer import tokenize
from tally.tally_parser import Parser


def handle_line(src: str, verbose: bool = False) -> None:
    tokens = tokenize(src)
    if verbose:
        print(f"[tokens] >>> {tokens}")
    program = Parser(tokens).parse()
    print(dump(program))


def start_repl(verbose: bool = False) -> None:
    print("Tally REPL. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            line = input(">>> ")
        except (EOFError, KeyboardInterrupt):
            print("\nExiting Tally REPL.")
            return

        src = line.strip()
        if src in ("exit", "quit"):
            print("Exiting Tally REPL.")
            return
        if not src or src.startswith("#"):
            continue
        if src.lower() == "verbose-mode":
            verbose = not verbose
            print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
            continue

        try:
            handle_line(src, verbose=verbose)
        except SyntaxError as e:
            print(f"[error] >>> {e}")
