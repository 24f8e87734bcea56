import pytest

from treelox.interpreter import Interpreter
from treelox.lox import Lox
from treelox.parser import Parser
from treelox.reporting import (
    CollectingErrorReporter,
    CollectingRuntimeErrorReporter,
    CollectingSink,
)
from treelox.resolver import Resolver
from treelox.scanner import Scanner


@pytest.fixture
def reporter():
    return CollectingErrorReporter()


@pytest.fixture
def runtime_reporter():
    return CollectingRuntimeErrorReporter()


@pytest.fixture
def sink():
    return CollectingSink()


@pytest.fixture
def lox(reporter, runtime_reporter, sink):
    return Lox(reporter, runtime_reporter, sink)


@pytest.fixture
def run(lox, sink):
    """Run a script and return the printed lines."""
    def run(source):
        lox.run(source)
        return sink.messages
    return run


@pytest.fixture
def parse(reporter):
    def parse(source):
        return Parser(Scanner(source, reporter).scan_tokens(), reporter).parse()
    return parse


@pytest.fixture
def resolve(parse, reporter, runtime_reporter, sink):
    """Parse and resolve a script, returning the interpreter holding the distances."""
    def resolve(source):
        statements = parse(source)
        assert not reporter.had_error, reporter.events
        interpreter = Interpreter(runtime_reporter, sink)
        Resolver(interpreter, reporter).resolve(statements)
        return interpreter, statements
    return resolve
