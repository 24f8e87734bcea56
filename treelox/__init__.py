"""A tree-walking interpreter for the Lox scripting language."""
import logging

from treelox.errors import LoxError, LoxRuntimeError, ParseError
from treelox.interpreter import Interpreter
from treelox.lox import Lox
from treelox.parser import Parser
from treelox.printer import AstPrinter
from treelox.resolver import Resolver
from treelox.scanner import Scanner
from treelox.syntax import Expr, Stmt
from treelox.tokens import Token, TokenType

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "AstPrinter",
    "Expr",
    "Interpreter",
    "Lox",
    "LoxError",
    "LoxRuntimeError",
    "ParseError",
    "Parser",
    "Resolver",
    "Scanner",
    "Stmt",
    "Token",
    "TokenType",
]
