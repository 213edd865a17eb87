from .lexer import tokenize, Token, TokenType, LexerError
from .parser import parse, Parser, ParseError
from .evaluator import evaluate, Evaluator, EvaluationError
from .environment import Environment
from .values import Integer, Float, Unit, UNIT
from .interpreter import interpret_source, Session, InterpreterError
