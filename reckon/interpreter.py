"""
reckon - Interpreter Orchestrator
Runs lexing, parsing and evaluation for one statement at a time.
"""

import json
import sys
from enum import Enum
from typing import Optional, Union
from .lexer import tokenize, LexerError
from .parser import Parser, ParseError
from .evaluator import Evaluator, EvaluationError
from .environment import Environment
from .values import Value


class InterpreterError(Exception):
    """Unified statement failure wrapper."""
    pass


def interpret_source(
    source: str,
    environment: Environment,
    emit_ast: bool = False,
    debug: bool = False,
) -> Union[Value, str, None]:
    """
    Run one reckon statement against an environment.

    Parameters
    ----------
    source      : text of a single statement
    environment : bindings read and written by the statement
    emit_ast    : if True, return a JSON representation of the AST instead of evaluating
    debug       : print each phase summary to stderr

    Returns
    -------
    The statement's Value (Unit for assignments), None for a blank
    statement, or the JSON AST text if emit_ast=True

    Raises
    ------
    InterpreterError on any phase failure; the environment is unchanged
    """

    def log(msg):
        if debug:
            print(f"[reckon] {msg}", file=sys.stderr)

    # ── Phase 1: Lexical Analysis ─────────────────────────────────────────────
    log("Phase 1: Lexical analysis")
    try:
        tokens = tokenize(source)
    except LexerError as e:
        raise InterpreterError(str(e)) from e

    log(f"  {len(tokens)} tokens produced")

    # ── Phase 2: Parsing ──────────────────────────────────────────────────────
    log("Phase 2: Parsing")
    try:
        ast = Parser(tokens).parse()
    except ParseError as e:
        raise InterpreterError(str(e)) from e

    if ast is None:
        log("  empty statement")
        return None

    log(f"  root is {type(ast).__name__}")

    if emit_ast:
        return ast_to_json(ast)

    # ── Phase 3: Evaluation ───────────────────────────────────────────────────
    log("Phase 3: Evaluation")
    try:
        result = Evaluator(environment).evaluate(ast)
    except EvaluationError as e:
        raise InterpreterError(str(e)) from e

    log(f"  result is {type(result).__name__}")
    return result


class Session:
    """One environment plus the statements run against it."""

    def __init__(self, debug: bool = False):
        self.environment = Environment()
        self.debug = debug

    def execute(self, source: str, emit_ast: bool = False) -> Optional[str]:
        """Run a statement and return the text to print, if any."""
        result = interpret_source(
            source, self.environment, emit_ast=emit_ast, debug=self.debug
        )
        if result is None:
            return None
        text = str(result)
        return text or None


# ── AST serialization (for --emit-ast) ────────────────────────────────────────

def ast_to_json(node) -> str:
    return json.dumps(_node_to_dict(node), indent=2)


def _node_to_dict(node):
    if node is None:
        return None
    if isinstance(node, Enum):
        return node.name
    if not hasattr(node, '__dataclass_fields__'):
        return node  # primitive
    d = {"_type": type(node).__name__}
    for field_name in node.__dataclass_fields__:
        val = getattr(node, field_name)
        d[field_name] = _node_to_dict(val)
    return d
