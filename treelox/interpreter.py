import logging
import math

from treelox.errors import LoxRuntimeError
from treelox.reporting import defaults
from treelox.runtime import (
    Environment,
    LoxCallable,
    LoxClass,
    LoxFunction,
    LoxInstance,
    NativeFunction,
    clock,
)
from treelox.syntax import Expr, Stmt
from treelox.tokens import TokenType

logger = logging.getLogger(__name__)

# Integral numbers below this print as plain digits, above it in exponent form.
MAX_PLAIN_INTEGER = 1e21


def is_number(value):
    return isinstance(value, float)


def kind_of(value):
    """The Lox-level name of a value's type, for diagnostics."""
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, LoxClass):
        return "class"
    if isinstance(value, LoxCallable):
        return "function"
    if isinstance(value, LoxInstance):
        return "instance"
    return type(value).__name__


def is_truthy(value):
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left, right):
    if left is None or right is None:
        return left is right
    if type(left) is not type(right):
        return False
    if is_number(left) and math.isnan(left) and math.isnan(right):
        return True
    return left == right


def stringify(value):
    match value:
        case None:
            return "nil"
        case bool():
            return "true" if value else "false"
        case float():
            if math.isnan(value):
                return "NaN"
            if math.isinf(value):
                return "Infinity" if value > 0 else "-Infinity"
            if value.is_integer() and abs(value) < MAX_PLAIN_INTEGER:
                return format(value, ".0f")
            return str(value)
        case _:
            return str(value)


def divide(left, right):
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


class Interpreter:
    class Return:
        """Completion of a statement that executed ``return``."""

        __slots__ = ("value",)

        def __init__(self, value):
            self.value = value

    def __init__(self, reporter=None, sink=None):
        self.reporter = reporter or defaults.runtime_error_reporter
        self.sink = sink or defaults.output_sink
        self.globals = Environment()
        self.environment = self.globals
        self.locals = {}

        self.globals.define("clock", NativeFunction("clock", 0, clock))

    def interpret(self, statements):
        try:
            for statement in statements:
                if self.execute(statement) is not None:
                    # The resolver rejects top-level returns.
                    break
        except LoxRuntimeError as error:
            logger.debug("runtime error on line %d: %s",
                         error.token.line, error.message)
            self.reporter.error(error)

    def resolve(self, expr, depth):
        self.locals[expr] = depth

    def execute_block(self, statements, environment):
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                if (completion := self.execute(statement)) is not None:
                    return completion
            return None
        finally:
            self.environment = previous

    def execute(self, stmt):
        match stmt:
            case Stmt.Block(statements):
                return self.execute_block(statements, Environment(self.environment))
            case Stmt.Class():
                self.execute_class(stmt)
            case Stmt.Expression(expression):
                self.evaluate(expression)
            case Stmt.Function(name):
                function = LoxFunction(stmt, self.environment)
                self.environment.define(name.lexeme, function)
            case Stmt.If(condition, then_branch, else_branch):
                if is_truthy(self.evaluate(condition)):
                    return self.execute(then_branch)
                if else_branch is not None:
                    return self.execute(else_branch)
            case Stmt.Print(expression):
                self.sink.emit(stringify(self.evaluate(expression)))
            case Stmt.Return(_, value):
                if value is not None:
                    return Interpreter.Return(self.evaluate(value))
                return Interpreter.Return(None)
            case Stmt.Var(name, initializer):
                value = None
                if initializer is not None:
                    value = self.evaluate(initializer)
                self.environment.define(name.lexeme, value)
            case Stmt.While(condition, body):
                while is_truthy(self.evaluate(condition)):
                    if (completion := self.execute(body)) is not None:
                        return completion
            case _:
                raise TypeError(f"Unknown statement {stmt!r}")
        return None

    def execute_class(self, stmt):
        superclass = None
        if stmt.superclass is not None:
            superclass = self.evaluate(stmt.superclass)
            if not isinstance(superclass, LoxClass):
                raise LoxRuntimeError(
                    stmt.superclass.name, "Superclass must be a class.")

        self.environment.define(stmt.name.lexeme, None)

        if superclass is not None:
            self.environment = Environment(self.environment)
            self.environment.define("super", superclass)

        methods = {
            method.name.lexeme: LoxFunction(
                method, self.environment, method.name.lexeme == "init")
            for method in stmt.methods}

        klass = LoxClass(stmt.name.lexeme, superclass, methods)

        if superclass is not None:
            self.environment = self.environment.enclosing

        self.environment.assign(stmt.name, klass)

    def evaluate(self, expr):
        match expr:
            case Expr.Assign(name, value_expr):
                value = self.evaluate(value_expr)
                if (distance := self.locals.get(expr)) is not None:
                    self.environment.assign_at(distance, name.lexeme, value)
                else:
                    self.globals.assign(name, value)
                return value
            case Expr.Binary(left, operator, right):
                return self.evaluate_binary(
                    operator, self.evaluate(left), self.evaluate(right))
            case Expr.Call():
                return self.evaluate_call(expr)
            case Expr.Conditional(condition, then_branch, else_branch):
                if is_truthy(self.evaluate(condition)):
                    return self.evaluate(then_branch)
                return self.evaluate(else_branch)
            case Expr.Get(obj, name):
                instance = self.evaluate(obj)
                if isinstance(instance, LoxInstance):
                    return instance.get(name)
                raise LoxRuntimeError(name, "Only instances can have properties.")
            case Expr.Grouping(expression):
                return self.evaluate(expression)
            case Expr.Literal(value):
                return value
            case Expr.Logical(left, operator, right):
                left_value = self.evaluate(left)
                if operator.type == TokenType.OR:
                    if is_truthy(left_value):
                        return left_value
                elif not is_truthy(left_value):
                    return left_value
                return self.evaluate(right)
            case Expr.Set(obj, name, value_expr):
                instance = self.evaluate(obj)
                if not isinstance(instance, LoxInstance):
                    raise LoxRuntimeError(name, "Only instances can have fields.")
                value = self.evaluate(value_expr)
                instance.set(name, value)
                return value
            case Expr.Super(_, method_name):
                return self.evaluate_super(expr, method_name)
            case Expr.This(keyword):
                return self.lookup_variable(keyword, expr)
            case Expr.Unary(operator, right):
                return self.evaluate_unary(operator, self.evaluate(right))
            case Expr.Variable(name):
                return self.lookup_variable(name, expr)
            case _:
                raise TypeError(f"Unknown expression {expr!r}")

    def evaluate_binary(self, operator, left, right):
        match operator.type:
            case TokenType.BANG_EQUAL:
                return not is_equal(left, right)
            case TokenType.EQUAL_EQUAL:
                return is_equal(left, right)
            case TokenType.PLUS:
                if is_number(left) and is_number(right):
                    return left + right
                if isinstance(left, str) and isinstance(right, str):
                    return left + right
                raise LoxRuntimeError(
                    operator,
                    "Operands must be two numbers or two strings. "
                    f"Left is {kind_of(left)}, right is {kind_of(right)}.")

        self.check_number_operands(operator, left, right)
        match operator.type:
            case TokenType.GREATER:
                return left > right
            case TokenType.GREATER_EQUAL:
                return left >= right
            case TokenType.LESS:
                return left < right
            case TokenType.LESS_EQUAL:
                return left <= right
            case TokenType.MINUS:
                return left - right
            case TokenType.SLASH:
                return divide(left, right)
            case TokenType.STAR:
                return left * right
        raise TypeError(f"Unknown binary operator {operator.lexeme!r}")

    def evaluate_unary(self, operator, right):
        match operator.type:
            case TokenType.BANG:
                return not is_truthy(right)
            case TokenType.MINUS:
                self.check_number_operand(operator, right)
                return -right
        raise TypeError(f"Unknown unary operator {operator.lexeme!r}")

    def evaluate_call(self, expr):
        callee = self.evaluate(expr.callee)
        arguments = [self.evaluate(argument) for argument in expr.arguments]

        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(
                expr.paren, "Can only call functions and classes.")
        if len(arguments) != callee.arity():
            raise LoxRuntimeError(
                expr.paren, f"Expected {callee.arity()} arguments but got {len(arguments)}.")
        return callee.call(self, arguments)

    def evaluate_super(self, expr, method_name):
        distance = self.locals[expr]
        superclass = self.environment.get_at(distance, "super")
        # 'this' is always bound one scope inside 'super'.
        instance = self.environment.get_at(distance - 1, "this")

        method = superclass.find_method(method_name.lexeme)
        if method is None:
            raise LoxRuntimeError(
                method_name, f"Undefined property '{method_name.lexeme}'.")
        return method.bind(instance)

    def lookup_variable(self, name, expr):
        if (distance := self.locals.get(expr)) is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)

    def check_number_operand(self, operator, operand):
        if not is_number(operand):
            raise LoxRuntimeError(operator, "Operand must be a number.")

    def check_number_operands(self, operator, left, right):
        if not (is_number(left) and is_number(right)):
            raise LoxRuntimeError(operator, "Operands must be numbers.")
