from unittest import TestCase, main

from arith.errors import EvalError, Position
from arith.evaluator import LogicalLine, evaluate, evaluate_lines, join_logical_lines


class TestEvaluate(TestCase):
    def assertValue(self, expected: float, source: str) -> None:
        result = evaluate(source)
        self.assertTrue(result.ok, f"{source!r} failed: {result.error}")
        self.assertEqual(expected, result.value, source)

    def test_precedence_and_associativity(self) -> None:
        self.assertValue(7, "1 + 2 * 3")
        self.assertValue(-5, "2 - 3 - 4")
        self.assertValue(1, "8 / 4 / 2")

    def test_parentheses(self) -> None:
        self.assertValue(9, "(1 + 2) * 3")
        self.assertValue(0, "()")

    def test_implicit_multiplication(self) -> None:
        self.assertValue(15, "3(5)")
        self.assertValue(12, "(2+1)(4)")
        self.assertValue(7, "1 + 2(3)")

    def test_unary_operators(self) -> None:
        self.assertValue(-5, "-5")
        self.assertValue(-5, "-(2+3)")
        self.assertValue(5, "+5")
        self.assertValue(5, "--5")
        self.assertValue(-6, "2 * -3")

    def test_scientific_notation(self) -> None:
        self.assertValue(0.00001, "1e-5")
        self.assertValue(2500.0, "2.5E+3")

    def test_comments_and_newlines(self) -> None:
        self.assertValue(3, "1 + ; first operand\n2")

    def test_long_expressions(self) -> None:
        self.assertValue(5000, " + ".join(["1"] * 5000))
        self.assertValue(1, "1" + "(1)" * 5000)
        self.assertValue(-5, "-" * 5001 + "5")
        self.assertValue(1, "(" * 200 + "1" + ")" * 200)

    def test_too_deep_nesting_is_an_error_result(self) -> None:
        result = evaluate("(" * 201 + "1" + ")" * 201)
        self.assertFalse(result.ok)
        self.assertEqual("NestingTooDeep", result.error.kind)

    def test_deterministic(self) -> None:
        def outcome(result):
            if result.ok:
                return result.value
            return result.error.kind, result.error.pos

        for source in ("0.1 + 0.2", "1/0", "1 + )"):
            self.assertEqual(outcome(evaluate(source)), outcome(evaluate(source)), source)


class TestEvaluateErrors(TestCase):
    def test_division_by_zero(self) -> None:
        result = evaluate("1/0")
        self.assertFalse(result.ok)
        self.assertIsNone(result.value)
        self.assertEqual("DivisionByZero", result.error.kind)
        self.assertEqual("executor", result.error.stage)
        self.assertEqual(Position(1, 2), result.error.pos)

    def test_parser_stage_reported(self) -> None:
        result = evaluate("1 + )")
        self.assertEqual("parser", result.error.stage)
        self.assertEqual("UnexpectedToken", result.error.kind)
        self.assertEqual(Position(1, 5), result.error.pos)

    def test_tokenizer_stage_reported(self) -> None:
        result = evaluate("1 $ 2")
        self.assertEqual("tokenizer", result.error.stage)
        self.assertEqual("UnexpectedChar", result.error.kind)
        self.assertEqual(Position(1, 3), result.error.pos)

    def test_trailing_garbage_rejected(self) -> None:
        result = evaluate("1 + 2) 3")
        self.assertFalse(result.ok, "Should not silently return a value")
        self.assertEqual("UnexpectedToken", result.error.kind)

    def test_error_keeps_cause_and_source(self) -> None:
        result = evaluate("2 *", line=4)
        self.assertIsInstance(result.error, EvalError)
        self.assertEqual("UnexpectedEndOfInput", type(result.error.cause).__name__)
        self.assertEqual("2 *", result.error.source)
        self.assertEqual(4, result.error.line)

    def test_error_line_is_absolute(self) -> None:
        result = evaluate("1 +\n)", line=10)
        self.assertEqual(11, result.error.line)

    def test_unwrap(self) -> None:
        self.assertEqual(3.0, evaluate("1 + 2").unwrap())
        with self.assertRaises(EvalError):
            evaluate("1/0").unwrap()


class TestLogicalLines(TestCase):
    def test_continuations_comments_and_blanks(self) -> None:
        text = "1 + \\\n2\n\n; only comment\n3 * 4 ; trailing\n"
        self.assertEqual(
            [LogicalLine("1 + 2", 1), LogicalLine("3 * 4 ; trailing", 5)],
            join_logical_lines(text)
        )

    def test_comment_after_backslash(self) -> None:
        self.assertEqual([LogicalLine("1 + 2", 1)], join_logical_lines("1 + \\ ; more\n2"))

    def test_dangling_continuation_kept(self) -> None:
        self.assertEqual([LogicalLine("1 +", 1)], join_logical_lines("1 + \\"))

    def test_evaluate_lines_keeps_going(self) -> None:
        results = evaluate_lines("1 + 2\n1/0\n2 * \\\n  (3 + 4)\n")
        self.assertEqual([True, False, True], [r.ok for r in results])
        self.assertEqual(3.0, results[0].value)
        self.assertEqual(14.0, results[2].value)
        self.assertEqual([1, 2, 3], [r.line for r in results])
        self.assertEqual("2 * (3 + 4)", results[2].source)


if __name__ == '__main__':
    main()
