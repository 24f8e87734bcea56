from treelox.interpreter import stringify
from treelox.syntax import Expr


class AstPrinter:
    """Renders an expression tree in fully parenthesised prefix form.

    ``1 + 2 * 3`` prints as ``(+ 1 (* 2 3))``; a conditional prints as
    ``(?: condition then else)``.
    """

    def print(self, expr):
        if expr is None:
            return None
        match expr:
            case Expr.Assign(name, value):
                return self.parenthesize("=", name.lexeme, value)
            case Expr.Binary(left, operator, right) | Expr.Logical(left, operator, right):
                return self.parenthesize(operator.lexeme, left, right)
            case Expr.Call(callee, _, arguments):
                return self.parenthesize("call", callee, *arguments)
            case Expr.Conditional(condition, then_branch, else_branch):
                return self.parenthesize("?:", condition, then_branch, else_branch)
            case Expr.Get(obj, name):
                return self.parenthesize(".", obj, name.lexeme)
            case Expr.Grouping(expression):
                return self.parenthesize("group", expression)
            case Expr.Literal(value):
                return self.literal(value)
            case Expr.Set(obj, name, value):
                return self.parenthesize("=", obj, name.lexeme, value)
            case Expr.Super(_, method):
                return self.parenthesize("super", method.lexeme)
            case Expr.This():
                return "this"
            case Expr.Unary(operator, right):
                return self.parenthesize(operator.lexeme, right)
            case Expr.Variable(name):
                return name.lexeme
            case _:
                raise TypeError(f"Unknown expression {expr!r}")

    def parenthesize(self, name, *parts):
        rendered = [part if isinstance(part, str) else self.print(part) for part in parts]
        return f"({' '.join([name, *rendered])})"

    def literal(self, value):
        return stringify(value)
