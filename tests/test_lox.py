import io

from treelox.lox import EX_DATAERR, EX_OK, EX_SOFTWARE, Lox
from treelox.reporting import (
    CollectingRuntimeErrorReporter,
    CollectingSink,
    ConsoleErrorReporter,
    ConsoleRuntimeErrorReporter,
    ErrorReporter,
    MultiSink,
)


def test_syntax_error_stops_before_resolution(run, reporter, sink):
    run("print 1;\nprint ;\nreturn 2;")
    assert reporter.events == [(2, " at ';'", "Expected expression.")]
    assert sink.messages == []


def test_globals_survive_between_runs(lox, sink):
    lox.run("var a = 1;")
    lox.run("print a + 1;")
    assert sink.messages == ["2"]


def test_exit_codes(lox, reporter, runtime_reporter):
    lox.run("print 1;")
    assert lox.exit_code() == EX_OK
    lox.run("-nil;")
    assert lox.exit_code() == EX_SOFTWARE
    runtime_reporter.clear()
    lox.run("print (;")
    assert lox.exit_code() == EX_DATAERR
    reporter.clear()
    assert lox.exit_code() == EX_OK


def test_run_file(tmp_path, lox, sink):
    script = tmp_path / "hello.lox"
    script.write_text("print \"héllo\";\n", encoding="utf-8")
    assert lox.run_file(script) == EX_OK
    assert sink.messages == ["héllo"]


def test_prompt_keeps_state_and_clears_errors(lox, sink, reporter):
    stdin = io.StringIO("var a = 1;\nprint a +;\nprint a;\n")
    stdout = io.StringIO()
    lox.run_prompt(stdin, stdout)
    assert sink.messages == ["1"]
    assert reporter.messages == ["Expected expression."]
    assert not reporter.had_error
    assert stdout.getvalue() == "> > > > \n"


def test_dump_tokens(lox, sink):
    lox.dump_tokens("var x;")
    assert sink.messages == ["VAR var None", "IDENTIFIER x None", "SEMICOLON ; None", "EOF  None"]


def test_dump_ast(lox, sink):
    lox.dump_ast("1 + 2 * 3")
    assert sink.messages == ["(+ 1 (* 2 3))"]


def test_console_reporters(capsys):
    reporter = ConsoleErrorReporter()
    runtime_reporter = ConsoleRuntimeErrorReporter()
    lox = Lox(reporter, runtime_reporter, CollectingSink())

    lox.run("print 1 +;")
    assert capsys.readouterr().err == "[line 1] Error at ';': Expected expression.\n"
    reporter.clear()

    lox.run("\n\"a\" + 1;")
    assert capsys.readouterr().err == (
        "Operands must be two numbers or two strings. Left is string, right is number.\n"
        "[line 2]\n")
    assert runtime_reporter.had_runtime_error


def test_multi_sink_fans_out(reporter, runtime_reporter):
    first, second = CollectingSink(), CollectingSink()
    Lox(reporter, runtime_reporter, MultiSink(first, second)).run("print 1; print 2;")
    assert first.messages == second.messages == ["1", "2"]


def test_error_flag_is_latched_by_the_base_reporter():
    class SilentReporter(ErrorReporter):
        def report(self, line, where, message):
            pass

    reporter = SilentReporter()
    Lox(reporter, CollectingRuntimeErrorReporter(), CollectingSink()).run("print ;")
    assert reporter.had_error
    reporter.clear()
    reporter.error(3, "Unexpected character.")
    assert reporter.had_error
