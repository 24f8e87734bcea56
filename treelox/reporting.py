"""Diagnostic and output sinks.

The scanner, parser and resolver report compile errors to an
``ErrorReporter``; the interpreter delivers runtime errors to a
``RuntimeErrorReporter`` and printed values to an ``OutputSink``. The
three are kept apart so a host can tell "does not compile" from
"compiles but fails at runtime".
"""
import sys
from collections import namedtuple

from treelox.tokens import TokenType


class ErrorReporter:
    def __init__(self):
        self.had_error = False

    def error(self, line, message):
        self.had_error = True
        self.report(line, "", message)

    def token_error(self, token, message):
        self.had_error = True
        if token.type == TokenType.EOF:
            self.report(token.line, " at end", message)
        else:
            self.report(token.line, f" at '{token.lexeme}'", message)

    def report(self, line, where, message):
        raise NotImplementedError()

    def clear(self):
        self.had_error = False


class RuntimeErrorReporter:
    def __init__(self):
        self.had_runtime_error = False

    def error(self, error):
        self.had_runtime_error = True
        self.report(error.message, error.token.line)

    def report(self, message, line):
        raise NotImplementedError()

    def clear(self):
        self.had_runtime_error = False


class OutputSink:
    def emit(self, text):
        raise NotImplementedError()


class ConsoleErrorReporter(ErrorReporter):
    def __init__(self, stream=None):
        super().__init__()
        self.stream = stream

    def report(self, line, where, message):
        print(f"[line {line}] Error{where}: {message}",
              file=self.stream or sys.stderr)


class ConsoleRuntimeErrorReporter(RuntimeErrorReporter):
    def __init__(self, stream=None):
        super().__init__()
        self.stream = stream

    def report(self, message, line):
        print(f"{message}\n[line {line}]", file=self.stream or sys.stderr)


class ConsoleSink(OutputSink):
    def __init__(self, stream=None):
        self.stream = stream

    def emit(self, text):
        print(text, file=self.stream or sys.stdout)


ErrorEvent = namedtuple("ErrorEvent", ["line", "where", "message"])
RuntimeErrorEvent = namedtuple("RuntimeErrorEvent", ["message", "line"])


class CollectingErrorReporter(ErrorReporter):
    """Keeps every compile error so callers can inspect them afterwards."""

    def __init__(self):
        super().__init__()
        self.events = []

    @property
    def messages(self):
        return [event.message for event in self.events]

    def report(self, line, where, message):
        self.events.append(ErrorEvent(line, where, message))


class CollectingRuntimeErrorReporter(RuntimeErrorReporter):
    def __init__(self):
        super().__init__()
        self.events = []

    @property
    def messages(self):
        return [event.message for event in self.events]

    def report(self, message, line):
        self.events.append(RuntimeErrorEvent(message, line))


class CollectingSink(OutputSink):
    def __init__(self):
        self.messages = []

    def emit(self, text):
        self.messages.append(text)


class MultiSink(OutputSink):
    def __init__(self, *sinks):
        self.sinks = sinks

    def emit(self, text):
        for sink in self.sinks:
            sink.emit(text)


class _Defaults:
    """Process-wide console sinks used when a component gets none.

    Shared by every run in the process, so concurrent runs should be
    given their own reporters instead.
    """

    def __init__(self):
        self.error_reporter = ConsoleErrorReporter()
        self.runtime_error_reporter = ConsoleRuntimeErrorReporter()
        self.output_sink = ConsoleSink()


defaults = _Defaults()
