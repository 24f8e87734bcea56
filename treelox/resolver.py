import enum
import logging

from treelox.reporting import defaults
from treelox.syntax import Expr, Stmt

logger = logging.getLogger(__name__)


class FunctionType(enum.Enum):
    NONE = enum.auto()
    FUNCTION = enum.auto()
    INITIALIZER = enum.auto()
    METHOD = enum.auto()


class ClassType(enum.Enum):
    NONE = enum.auto()
    CLASS = enum.auto()
    SUBCLASS = enum.auto()


class Resolver:
    """Static pass recording how many scopes out each local lives.

    Each scope maps a name to whether its initializer has finished
    (``False`` while declared, ``True`` once defined). Globals are not
    tracked; a reference found in no scope is left for the interpreter
    to look up dynamically.
    """

    def __init__(self, interpreter, reporter=None):
        self.interpreter = interpreter
        self.reporter = reporter or defaults.error_reporter
        self.scopes = []
        self.current_function = FunctionType.NONE
        self.current_class = ClassType.NONE

    def resolve(self, node):
        if isinstance(node, (list, tuple)):
            for statement in node:
                self.resolve(statement)
            return
        if isinstance(node, Stmt):
            self.resolve_stmt(node)
        else:
            self.resolve_expr(node)

    def resolve_stmt(self, stmt):
        match stmt:
            case Stmt.Block(statements):
                self.begin_scope()
                self.resolve(statements)
                self.end_scope()
            case Stmt.Class():
                self.resolve_class(stmt)
            case Stmt.Expression(expression) | Stmt.Print(expression):
                self.resolve(expression)
            case Stmt.Function(name):
                self.declare(name)
                self.define(name)
                self.resolve_function(stmt, FunctionType.FUNCTION)
            case Stmt.If(condition, then_branch, else_branch):
                self.resolve(condition)
                self.resolve(then_branch)
                if else_branch is not None:
                    self.resolve(else_branch)
            case Stmt.Return(keyword, value):
                if self.current_function == FunctionType.NONE:
                    self.reporter.token_error(
                        keyword, "Can't return from top-level code.")
                if value is not None:
                    if self.current_function == FunctionType.INITIALIZER:
                        self.reporter.token_error(
                            keyword, "Can't return from an initialiser.")
                    self.resolve(value)
            case Stmt.Var(name, initializer):
                self.declare(name)
                if initializer is not None:
                    self.resolve(initializer)
                self.define(name)
            case Stmt.While(condition, body):
                self.resolve(condition)
                self.resolve(body)
            case _:
                raise TypeError(f"Unknown statement {stmt!r}")

    def resolve_expr(self, expr):
        match expr:
            case Expr.Assign(name, value):
                self.resolve(value)
                self.resolve_local(expr, name)
            case Expr.Binary(left, _, right) | Expr.Logical(left, _, right):
                self.resolve(left)
                self.resolve(right)
            case Expr.Call(callee, _, arguments):
                self.resolve(callee)
                self.resolve(arguments)
            case Expr.Conditional(condition, then_branch, else_branch):
                self.resolve(condition)
                self.resolve(then_branch)
                self.resolve(else_branch)
            case Expr.Get(obj, _):
                self.resolve(obj)
            case Expr.Grouping(expression):
                self.resolve(expression)
            case Expr.Literal():
                pass
            case Expr.Set(obj, _, value):
                self.resolve(value)
                self.resolve(obj)
            case Expr.Super(keyword, _):
                if self.current_class == ClassType.NONE:
                    self.reporter.token_error(
                        keyword, "Can't use 'super' outside of a class.")
                elif self.current_class != ClassType.SUBCLASS:
                    self.reporter.token_error(
                        keyword, "Can't use 'super' in a class with no superclass.")
                self.resolve_local(expr, keyword)
            case Expr.This(keyword):
                if self.current_class == ClassType.NONE:
                    self.reporter.token_error(
                        keyword, "Can't use 'this' outside of a class.")
                    return
                self.resolve_local(expr, keyword)
            case Expr.Unary(_, right):
                self.resolve(right)
            case Expr.Variable(name):
                if self.scopes and self.scopes[-1].get(name.lexeme) is False:
                    self.reporter.token_error(
                        name, "Can't read local variable in its own initialiser.")
                self.resolve_local(expr, name)
            case _:
                raise TypeError(f"Unknown expression {expr!r}")

    def resolve_class(self, stmt):
        enclosing_class = self.current_class
        self.current_class = ClassType.CLASS

        self.declare(stmt.name)
        self.define(stmt.name)

        if stmt.superclass is not None:
            if stmt.name.lexeme == stmt.superclass.name.lexeme:
                self.reporter.token_error(
                    stmt.superclass.name, "A class can't inherit from itself.")
            self.current_class = ClassType.SUBCLASS
            self.resolve(stmt.superclass)

            self.begin_scope()
            self.scopes[-1]["super"] = True

        self.begin_scope()
        self.scopes[-1]["this"] = True

        for method in stmt.methods:
            kind = FunctionType.METHOD
            if method.name.lexeme == "init":
                kind = FunctionType.INITIALIZER
            self.resolve_function(method, kind)

        self.end_scope()

        if stmt.superclass is not None:
            self.end_scope()

        self.current_class = enclosing_class

    def resolve_function(self, function, kind):
        enclosing = self.current_function
        self.current_function = kind
        self.begin_scope()
        for param in function.params:
            self.declare(param)
            self.define(param)
        self.resolve(function.body)
        self.end_scope()
        self.current_function = enclosing

    def begin_scope(self):
        self.scopes.append({})

    def end_scope(self):
        self.scopes.pop()

    def declare(self, name):
        if not self.scopes:
            return
        scope = self.scopes[-1]
        if name.lexeme in scope:
            self.reporter.token_error(
                name, "Already a variable with this name in this scope.")
        scope[name.lexeme] = False

    def define(self, name):
        if self.scopes:
            self.scopes[-1][name.lexeme] = True

    def resolve_local(self, expr, name):
        for depth, scope in enumerate(reversed(self.scopes)):
            if name.lexeme in scope:
                self.interpreter.resolve(expr, depth)
                return
        logger.debug("'%s' on line %d left global", name.lexeme, name.line)
