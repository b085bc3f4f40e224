import argparse
import logging
import sys

from .ast_nodes import dump
from .codegen import compile_expr, format_bytecode
from .diagnostics import format_error, format_number
from .errors import ArithError, EvalError
from .evaluator import evaluate
from .filemode import run_file_mode
from .lexer import tokenize, print_tokens
from .parser import parse
from .shell import Shell

EMIT_MODES = ("value", "tokens", "ast", "bytecode")


def build_arg_parser():
    parser = argparse.ArgumentParser(
        prog="arith",
        description="A simple command-line arithmetic interpreter.",
        epilog="With neither --file nor --expr the interactive REPL starts.",
    )
    parser.add_argument("-d", "--debug", action="count", default=0,
                        help="turn debugging output on (repeat for more)")
    parser.add_argument("-f", "--file", dest="files", action="append", default=[], metavar="FILE",
                        help="file to evaluate line by line (may be repeated)")
    parser.add_argument("-e", "--expr", help="evaluate a single expression")
    parser.add_argument("--emit", choices=EMIT_MODES, default="value",
                        help="with --expr, print this pipeline stage instead of the value")
    parser.add_argument("--no-color", dest="color", action="store_false",
                        help="disable coloured diagnostics")
    return parser


def setup_logging(verbosity):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def emit(text, mode, color=True):
    """Prints `text` as evaluated by the pipeline up to `mode`. Returns the exit status."""
    if mode == "value":
        result = evaluate(text)
        if not result.ok:
            print(format_error(result.error, color=color), file=sys.stderr)
            return 1
        print(f"= {format_number(result.value)}")
        return 0

    try:
        tokens = tokenize(text)
        if mode == "tokens":
            print_tokens(tokens)
            return 0
        ast = parse(tokens)
        if mode == "ast":
            print(dump(ast))
            return 0
        print(format_bytecode(compile_expr(ast)))
        return 0
    except ArithError as e:
        print(format_error(EvalError(e, text), color=color), file=sys.stderr)
        return 1


def main(argv=None):
    args = build_arg_parser().parse_args(argv)
    setup_logging(args.debug)

    if args.expr is not None:
        return emit(args.expr, args.emit, color=args.color)

    if args.files:
        return run_file_mode(args.files, color=args.color)

    Shell(color=args.color).cmdloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
