import io
import os
import tempfile
from contextlib import redirect_stderr, redirect_stdout
from unittest import TestCase, main as run_tests

from arith.main import build_arg_parser, main


def run_cli(*argv):
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        status = main(list(argv))
    return status, out.getvalue(), err.getvalue()


class TestArguments(TestCase):
    def test_defaults(self) -> None:
        args = build_arg_parser().parse_args([])
        self.assertEqual(([], None, "value", 0, True), (args.files, args.expr, args.emit, args.debug, args.color))

    def test_repeated_flags(self) -> None:
        args = build_arg_parser().parse_args(["-dd", "-f", "a", "-f", "b", "--no-color"])
        self.assertEqual((2, ["a", "b"], False), (args.debug, args.files, args.color))


class TestExpressionMode(TestCase):
    def test_value(self) -> None:
        self.assertEqual((0, "= 7\n", ""), run_cli("-e", "1 + 2 * 3"))

    def test_error_exit_status(self) -> None:
        status, out, err = run_cli("--no-color", "-e", "1/0")
        self.assertEqual(1, status)
        self.assertEqual("", out)
        self.assertIn("error: Division by zero [executor]", err)

    def test_emit_tokens(self) -> None:
        status, out, _ = run_cli("-e", "2*3", "--emit", "tokens")
        self.assertEqual(0, status)
        self.assertIn("STAR", out)
        self.assertIn("EOF", out)

    def test_emit_ast(self) -> None:
        _, out, _ = run_cli("-e", "-2", "--emit", "ast")
        self.assertEqual("UnaryOp -\n  Number 2.0\n", out)

    def test_emit_bytecode(self) -> None:
        _, out, _ = run_cli("-e", "1 + 2", "--emit", "bytecode")
        self.assertEqual("0000  push 1.0\n0001  push 2.0\n0002  add\n", out)

    def test_emit_reports_stage_errors(self) -> None:
        status, _, err = run_cli("--no-color", "-e", "1 +", "--emit", "ast")
        self.assertEqual(1, status)
        self.assertIn("Unexpected end of input", err)


class TestFileMode(TestCase):
    def test_file_flag(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "one.arith")
            with open(path, "w", encoding="utf-8") as f:
                f.write("3(5)\n")
            status, out, _ = run_cli("-f", path)
        self.assertEqual(0, status)
        self.assertIn("3(5) [1]: 15", out)


if __name__ == '__main__':
    run_tests()
