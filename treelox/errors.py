class LoxError(Exception):
    """Base class for errors raised by the interpreter pipeline."""


class ParseError(LoxError):
    """Unwinds the parser to the nearest declaration after a syntax error.

    The diagnostic itself has already been reported when this is raised.
    """


class LoxRuntimeError(LoxError):
    def __init__(self, token, message):
        super().__init__(message)
        self.token = token
        self.message = message
