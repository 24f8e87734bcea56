import logging
import sys

from treelox.interpreter import Interpreter
from treelox.parser import Parser
from treelox.printer import AstPrinter
from treelox.reporting import defaults
from treelox.resolver import Resolver
from treelox.scanner import Scanner

logger = logging.getLogger(__name__)

EX_OK = 0
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


class Lox:
    """Runs source text through scanner, parser, resolver and interpreter.

    A single ``Lox`` keeps one interpreter, so globals defined by one
    ``run`` are visible to the next (which is what the prompt relies on).
    Give each independent run its own ``Lox`` and its own reporters.
    """

    def __init__(self, reporter=None, runtime_reporter=None, sink=None):
        self.reporter = reporter or defaults.error_reporter
        self.runtime_reporter = runtime_reporter or defaults.runtime_error_reporter
        self.sink = sink or defaults.output_sink
        self.interpreter = Interpreter(self.runtime_reporter, self.sink)

    @property
    def had_error(self):
        return self.reporter.had_error

    @property
    def had_runtime_error(self):
        return self.runtime_reporter.had_runtime_error

    def run(self, source):
        tokens = Scanner(source, self.reporter).scan_tokens()
        statements = Parser(tokens, self.reporter).parse()

        if self.had_error:
            logger.debug("syntax errors, not resolving")
            return

        Resolver(self.interpreter, self.reporter).resolve(statements)

        if self.had_error:
            logger.debug("resolution errors, not executing")
            return

        self.interpreter.interpret(statements)

    def exit_code(self):
        if self.had_error:
            return EX_DATAERR
        if self.had_runtime_error:
            return EX_SOFTWARE
        return EX_OK

    def run_file(self, filename):
        with open(filename, "r", encoding="utf-8") as file:
            source = file.read()
        logger.debug("running %s", filename)
        self.run(source)
        return self.exit_code()

    def run_prompt(self, stdin=None, stdout=None):
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout
        while True:
            print("> ", end="", file=stdout, flush=True)
            line = stdin.readline()
            if not line:
                print(file=stdout)
                break
            self.run(line)
            self.reporter.clear()
            self.runtime_reporter.clear()

    def dump_tokens(self, source):
        for token in Scanner(source, self.reporter).scan_tokens():
            self.sink.emit(str(token))

    def dump_ast(self, source):
        tokens = Scanner(source, self.reporter).scan_tokens()
        expr = Parser(tokens, self.reporter).parse_expression()
        if expr is not None and not self.had_error:
            self.sink.emit(AstPrinter().print(expr))
