"""Interactive mode for the arith interpreter. Uses cmd as backend."""

import cmd
import logging
import time

from .diagnostics import format_error, format_number
from .evaluator import evaluate

log = logging.getLogger(__name__)

BENCH_EXPR = ("1 + 2 * (3 - 4) / -5 + (6 * 7) - 8 / 9 + 10 * (11 + 12) - (13 * 14) / 15 + 16 "
              "- 17 * 18 / (19 + 20) - 21 + 22 * 23 / 24 - 25 + 26 * (27 - 28) / 29 + 30")
BENCH_ITERATIONS = 1000

HELP = ("Enter an arithmetic expression using numbers, + - * / and parentheses.\n"
        "End a line with \\ to continue it on the next one; ';' starts a comment.\n\n"
        "Commands:\n"
        "  :q, :quit, :exit      leave the interpreter\n"
        "  :h, :help             show this text\n"
        "  :bench                time a long expression\n"
        "  :save [name], :w      save this session's expressions to <name>.arith\n"
        "  :wq [name]            save, then quit")


def save_path(name: str) -> str:
    """Appends the .arith extension unless it is already there (once)."""
    while name.endswith(".arith.arith"):
        name = name[:-len(".arith")]
    if not name.endswith(".arith"):
        name += ".arith"
    return name


class Shell(cmd.Cmd):
    """Arithmetic interpreter shell."""
    intro = "arith REPL - enter expressions. Use \\ for line-continuation. :q to quit."
    prompt = ">> "
    secondary_prompt = "... "  # used for line continuations
    _tmp_prompt = ">> "        # also used for prompt swapping in line continuations

    def __init__(self, *args, color=True, **kwargs):
        super().__init__(*args, **kwargs)
        self.color = color
        self.history = []
        self._tmp_line = ""

    def _print(self, text=""):
        self.stdout.write(text + "\n")

    def parseline(self, line):
        """Hands every line to default; cmd's `?` and `!` shortcuts are not used."""
        line = line.strip()
        if line == "EOF":
            return "EOF", "", line
        return None, None, line

    def default(self, line):
        """Evaluates an expression, or runs a ':' command at the start of a statement."""
        stripped = line.strip()
        if not self._tmp_line and stripped.startswith(":"):
            return self.run_command(stripped)

        code = stripped.split(";", 1)[0].rstrip()
        if code.endswith("\\"):
            self._tmp_line += code[:-1].strip() + " "
            self.prompt = self.secondary_prompt
            return False

        statement = self._tmp_line + stripped
        self._tmp_line = ""
        self.prompt = self._tmp_prompt
        self.eval_and_print(statement)
        return False

    def eval_and_print(self, statement):
        if not statement.split(";", 1)[0].strip():
            return
        self.history.append(statement)
        result = evaluate(statement)
        if result.ok:
            self._print(f"= {format_number(result.value)}")
        else:
            self._print(format_error(result.error, color=self.color))

    def run_command(self, command):
        name, _, arg = command.partition(" ")
        arg = arg.strip()

        if name in (":q", ":quit", ":exit"):
            return True
        if name in (":h", ":help"):
            self._print(HELP)
            return False
        if name == ":bench":
            self.bench()
            return False
        if name in (":save", ":w", ":wq"):
            self.save(arg or "history")
            return name == ":wq"

        self._print(f"Unknown command '{name}'. Type :help for the list of commands.")
        return False

    def bench(self):
        start = time.perf_counter()
        for _ in range(BENCH_ITERATIONS):
            evaluate(BENCH_EXPR)
        elapsed = time.perf_counter() - start

        self._print(f"Benchmarking {BENCH_EXPR}:")
        self._print(f"  Iterations: {BENCH_ITERATIONS}")
        self._print(f"  Total time: {elapsed:.6f}s")
        self._print(f"  Average time per evaluation: {elapsed / BENCH_ITERATIONS * 1e6:.2f}us")

    def save(self, name):
        path = save_path(name)
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write("".join(line + "\n" for line in self.history))
        except OSError as e:
            log.error("Error saving output: %s", e)
            return
        self._print(f"Output saved to {path}")

    def emptyline(self):
        """Do not repeat previous command on empty line; an empty line ends a continuation."""
        if self._tmp_line:
            return self.default("")
        return False

    def do_EOF(self, arg):
        """Exits interpreter, evaluating any pending continuation first."""
        if self._tmp_line.strip():
            self.eval_and_print(self._tmp_line.strip())
            self._tmp_line = ""
        self._print()
        return True
