"""
reckon - Command Line Interface

Usage:
    reckon                      interactive session on stdin
    reckon statements.rk        run every line of a file in one session
    reckon [--debug] [--emit-ast] [--prompt TEXT]
"""

import sys
import argparse


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="reckon",
        description="reckon — arithmetic expressions with let-bound variables",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="File of statements, one per line (default: read stdin interactively)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print interpreter phase info to stderr",
    )
    parser.add_argument(
        "--emit-ast",
        action="store_true",
        dest="emit_ast",
        help="Print each statement's parsed AST as JSON instead of evaluating it",
    )
    parser.add_argument(
        "--prompt",
        default="> ",
        help="Prompt shown before each interactive statement (default: '> ')",
    )

    args = parser.parse_args(argv)

    from .interpreter import Session

    session = Session(debug=args.debug)

    if args.input:
        try:
            with open(args.input, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except FileNotFoundError:
            print(f"[reckon] Error: Input file not found: {args.input!r}", file=sys.stderr)
            sys.exit(1)
        failures = run_lines(session, lines, emit_ast=args.emit_ast)
        if failures:
            sys.exit(1)
        return

    interactive = sys.stdin.isatty()
    while True:
        if interactive:
            print(args.prompt, end="", flush=True)
        line = sys.stdin.readline()
        if not line:
            break
        run_lines(session, [line], emit_ast=args.emit_ast)


def run_lines(session, lines, emit_ast=False) -> int:
    """Run each line as a statement; report errors and keep going. Returns the failure count."""
    from .interpreter import InterpreterError

    failures = 0
    for line in lines:
        statement = line.strip()
        if not statement:
            continue
        try:
            output = session.execute(statement, emit_ast=emit_ast)
        except InterpreterError as e:
            failures += 1
            print(f"{statement}: {e}", file=sys.stderr)
            continue
        if output is not None:
            print(output)
    return failures


if __name__ == "__main__":
    main()
