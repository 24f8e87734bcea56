import logging

from treelox.errors import ParseError
from treelox.reporting import defaults
from treelox.syntax import Expr, Stmt
from treelox.tokens import TokenType

logger = logging.getLogger(__name__)

MAX_ARGUMENTS = 255


class Parser:
    Error = ParseError

    STATEMENT_STARTS = {
        TokenType.CLASS,
        TokenType.FUN,
        TokenType.VAR,
        TokenType.FOR,
        TokenType.IF,
        TokenType.WHILE,
        TokenType.PRINT,
        TokenType.RETURN,
    }

    def __init__(self, tokens, reporter=None):
        self.tokens = tokens
        self.reporter = reporter or defaults.error_reporter
        self.current = 0

    def parse(self):
        statements = []
        while not self.at_end():
            if (statement := self.declaration()) is not None:
                statements.append(statement)
        logger.debug("parsed %d top-level statements", len(statements))
        return statements

    def parse_expression(self):
        """Parse a lone expression, returning None after a syntax error."""
        try:
            expr = self.expression()
            if not self.at_end():
                raise self.error(self.peek(), "Expected end of expression.")
            return expr
        except Parser.Error:
            return None

    def declaration(self):
        try:
            if self.match(TokenType.CLASS):
                return self.class_declaration()
            if self.match(TokenType.FUN):
                return self.function("function")
            if self.match(TokenType.VAR):
                return self.var_declaration()
            return self.statement()
        except Parser.Error:
            self.synchronize()
            return None

    def class_declaration(self):
        name = self.consume(TokenType.IDENTIFIER, "Expected class name.")

        superclass = None
        if self.match(TokenType.LESS):
            superclass = Expr.Variable(self.consume(
                TokenType.IDENTIFIER, "Expected superclass name."))

        self.consume(TokenType.LEFT_BRACE, "Expected '{' before class body.")

        methods = []
        while not self.at_end() and not self.check(TokenType.RIGHT_BRACE):
            methods.append(self.function("method"))

        self.consume(TokenType.RIGHT_BRACE, "Expected '}' after class body.")
        return Stmt.Class(name, superclass, methods)

    def function(self, kind):
        name = self.consume(TokenType.IDENTIFIER, f"Expected {kind} name.")
        self.consume(TokenType.LEFT_PAREN, f"Expected '(' after {kind} name.")

        params = []
        if not self.check(TokenType.RIGHT_PAREN):
            params.append(self.consume(
                TokenType.IDENTIFIER, "Expected parameter name."))
            while self.match(TokenType.COMMA):
                if len(params) >= MAX_ARGUMENTS:
                    self.error(
                        self.peek(), f"Can't have more than {MAX_ARGUMENTS} parameters.")
                params.append(self.consume(
                    TokenType.IDENTIFIER, "Expected parameter name."))

        self.consume(TokenType.RIGHT_PAREN, "Expected ')' after parameters.")
        self.consume(TokenType.LEFT_BRACE, f"Expected '{{' before {kind} body.")
        return Stmt.Function(name, params, self.block())

    def statement(self):
        if self.match(TokenType.FOR):
            return self.for_statement()
        if self.match(TokenType.IF):
            return self.if_statement()
        if self.match(TokenType.PRINT):
            return self.print_statement()
        if keyword := self.match(TokenType.RETURN):
            return self.return_statement(keyword)
        if self.match(TokenType.WHILE):
            return self.while_statement()
        if self.match(TokenType.LEFT_BRACE):
            return Stmt.Block(self.block())
        return self.expression_statement()

    def block(self):
        statements = []
        while not self.check(TokenType.RIGHT_BRACE) and not self.at_end():
            if (statement := self.declaration()) is not None:
                statements.append(statement)
        self.consume(TokenType.RIGHT_BRACE, "Expected '}' after block.")
        return statements

    def for_statement(self):
        self.consume(TokenType.LEFT_PAREN, "Expected '(' after 'for'.")

        if self.match(TokenType.SEMICOLON):
            initializer = None
        elif self.match(TokenType.VAR):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self.check(TokenType.SEMICOLON):
            condition = self.expression()
        self.consume(TokenType.SEMICOLON, "Expected ';' after loop condition.")

        increment = None
        if not self.check(TokenType.RIGHT_PAREN):
            increment = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expected ')' after for clauses.")

        body = self.statement()

        # for (init; cond; incr) body  =>  { init; while (cond) { body; incr; } }
        if increment is not None:
            body = Stmt.Block([body, Stmt.Expression(increment)])
        if condition is None:
            condition = Expr.Literal(True)
        body = Stmt.While(condition, body)
        if initializer is not None:
            body = Stmt.Block([initializer, body])
        return body

    def if_statement(self):
        self.consume(TokenType.LEFT_PAREN, "Expected '(' after 'if'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expected ')' after if condition.")
        then_branch = self.statement()
        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.statement()
        return Stmt.If(condition, then_branch, else_branch)

    def expression_statement(self):
        expression = self.expression()
        self.consume(TokenType.SEMICOLON, "Expected ';' after expression.")
        return Stmt.Expression(expression)

    def print_statement(self):
        expression = self.expression()
        self.consume(TokenType.SEMICOLON, "Expected ';' after value.")
        return Stmt.Print(expression)

    def return_statement(self, keyword):
        value = None
        if not self.check(TokenType.SEMICOLON):
            value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expected ';' after return value.")
        return Stmt.Return(keyword, value)

    def var_declaration(self):
        name = self.consume(TokenType.IDENTIFIER, "Expected variable name.")
        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()
        self.consume(TokenType.SEMICOLON, "Expected ';' after variable declaration.")
        return Stmt.Var(name, initializer)

    def while_statement(self):
        self.consume(TokenType.LEFT_PAREN, "Expected '(' after 'while'.")
        condition = self.expression()
        self.consume(TokenType.RIGHT_PAREN, "Expected ')' after condition.")
        body = self.statement()
        return Stmt.While(condition, body)

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.logic_or()
        if equals := self.match(TokenType.EQUAL):
            value = self.assignment()
            match expr:
                case Expr.Variable(name):
                    return Expr.Assign(name, value)
                case Expr.Get(obj, name):
                    return Expr.Set(obj, name, value)
            self.error(equals, "Invalid assignment target.")
        return expr

    def logic_or(self):
        expr = self.logic_and()
        while operator := self.match(TokenType.OR):
            expr = Expr.Logical(expr, operator, self.logic_and())
        return expr

    def logic_and(self):
        expr = self.ternary()
        while operator := self.match(TokenType.AND):
            expr = Expr.Logical(expr, operator, self.ternary())
        return expr

    def ternary(self):
        expr = self.equality()
        if self.match(TokenType.QUESTION):
            then_branch = self.expression()
            self.consume(TokenType.COLON, "Expected ':' in conditional expression.")
            else_branch = self.expression()
            expr = Expr.Conditional(expr, then_branch, else_branch)
        return expr

    def equality(self):
        expr = self.comparison()
        while operator := self.match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
            expr = Expr.Binary(expr, operator, self.comparison())
        return expr

    def comparison(self):
        expr = self.term()
        while operator := self.match(TokenType.GREATER, TokenType.GREATER_EQUAL,
                                     TokenType.LESS, TokenType.LESS_EQUAL):
            expr = Expr.Binary(expr, operator, self.term())
        return expr

    def term(self):
        expr = self.factor()
        while operator := self.match(TokenType.MINUS, TokenType.PLUS):
            expr = Expr.Binary(expr, operator, self.factor())
        return expr

    def factor(self):
        expr = self.unary()
        while operator := self.match(TokenType.SLASH, TokenType.STAR):
            expr = Expr.Binary(expr, operator, self.unary())
        return expr

    def unary(self):
        if operator := self.match(TokenType.BANG, TokenType.MINUS):
            return Expr.Unary(operator, self.unary())
        return self.call()

    def call(self):
        expr = self.primary()
        while True:
            if self.match(TokenType.LEFT_PAREN):
                expr = self.finish_call(expr)
            elif self.match(TokenType.DOT):
                name = self.consume(
                    TokenType.IDENTIFIER, "Expected property name after '.'.")
                expr = Expr.Get(expr, name)
            else:
                break
        return expr

    def finish_call(self, callee):
        arguments = []
        if not self.check(TokenType.RIGHT_PAREN):
            arguments.append(self.expression())
            while self.match(TokenType.COMMA):
                if len(arguments) >= MAX_ARGUMENTS:
                    self.error(
                        self.peek(), f"Can't have more than {MAX_ARGUMENTS} arguments.")
                arguments.append(self.expression())
        paren = self.consume(TokenType.RIGHT_PAREN, "Expected ')' after arguments.")
        return Expr.Call(callee, paren, arguments)

    def primary(self):
        if self.match(TokenType.FALSE):
            return Expr.Literal(False)
        if self.match(TokenType.TRUE):
            return Expr.Literal(True)
        if self.match(TokenType.NIL):
            return Expr.Literal(None)
        if token := self.match(TokenType.NUMBER, TokenType.STRING):
            return Expr.Literal(token.literal)
        if keyword := self.match(TokenType.SUPER):
            self.consume(TokenType.DOT, "Expected '.' after 'super'.")
            method = self.consume(
                TokenType.IDENTIFIER, "Expected superclass method name.")
            return Expr.Super(keyword, method)
        if keyword := self.match(TokenType.THIS):
            return Expr.This(keyword)
        if token := self.match(TokenType.IDENTIFIER):
            return Expr.Variable(token)
        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expected ')' after expression.")
            return Expr.Grouping(expr)
        raise self.error(self.peek(), "Expected expression.")

    def synchronize(self):
        self.advance()
        while not self.at_end():
            if self.previous().type == TokenType.SEMICOLON:
                return
            if self.peek().type in Parser.STATEMENT_STARTS:
                return
            self.advance()

    def consume(self, token_type, message):
        if token := self.match(token_type):
            return token
        raise self.error(self.peek(), message)

    def match(self, *token_types):
        if self.peek().type in token_types:
            return self.advance()
        return None

    def check(self, token_type):
        return self.peek().type == token_type

    def advance(self):
        token = self.peek()
        if not self.at_end():
            self.current += 1
        return token

    def at_end(self):
        return self.peek().type == TokenType.EOF

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]

    def error(self, token, message):
        self.reporter.token_error(token, message)
        return Parser.Error(message)


def parse(tokens, reporter=None):
    return Parser(tokens, reporter).parse()
