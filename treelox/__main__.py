import argparse
import logging
import sys

from treelox.lox import EX_NOINPUT, EX_OK, Lox
from treelox.reporting import (
    ConsoleErrorReporter,
    ConsoleRuntimeErrorReporter,
    ConsoleSink,
)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="treelox", description="Run Lox scripts")
    parser.add_argument("script", nargs="?",
                        help="script to run; starts a prompt when omitted")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--tokens", action="store_true",
                      help="print the token stream instead of running")
    mode.add_argument("--ast", action="store_true",
                      help="print the parenthesised tree of a single expression")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log pipeline stages to stderr")
    return parser


def read_source(args):
    if args.script is None:
        return sys.stdin.read()
    with open(args.script, "r", encoding="utf-8") as file:
        return file.read()


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, stream=sys.stderr,
                            format="%(name)s: %(message)s")

    lox = Lox(ConsoleErrorReporter(), ConsoleRuntimeErrorReporter(), ConsoleSink())
    try:
        if args.tokens or args.ast:
            source = read_source(args)
            if args.tokens:
                lox.dump_tokens(source)
            else:
                lox.dump_ast(source)
            return lox.exit_code()
        if args.script is not None:
            return lox.run_file(args.script)
    except OSError as error:
        print(f"treelox: cannot read {args.script}: {error.strerror}",
              file=sys.stderr)
        return EX_NOINPUT

    lox.run_prompt()
    return EX_OK


if __name__ == "__main__":
    sys.exit(main())
