from __future__ import annotations
import logging
from typing import List

from .codegen import Instr, PushConst, Add, Sub, Mul, Div, Negate
from .errors import ExecError, DivisionByZero, StackUnderflow, ExcessValues

log = logging.getLogger(__name__)


class StackMachine:
    """Runs bytecode against a single operand stack.

    The stack lives only for the duration of one execute() call.
    """

    def execute(self, code: List[Instr]) -> float:
        stack: List[float] = []

        for instr in code:
            if isinstance(instr, PushConst):
                stack.append(instr.value)

            elif isinstance(instr, (Add, Sub, Mul, Div)):
                if len(stack) < 2:
                    raise StackUnderflow(instr.opcode, instr.pos)
                right = stack.pop()
                left = stack.pop()
                stack.append(self.binary(instr, left, right))

            elif isinstance(instr, Negate):
                if not stack:
                    raise StackUnderflow(instr.opcode, instr.pos)
                stack.append(-stack.pop())

            else:
                raise ExecError(f"Unknown instruction {instr!r}", getattr(instr, "pos", None))

        if not stack:
            raise StackUnderflow("end of program")
        if len(stack) > 1:
            raise ExcessValues(len(stack))

        log.debug("result %r", stack[0])
        return stack[0]

    @staticmethod
    def binary(instr: Instr, left: float, right: float) -> float:
        if isinstance(instr, Add):
            return left + right
        if isinstance(instr, Sub):
            return left - right
        if isinstance(instr, Mul):
            return left * right
        if right == 0:
            raise DivisionByZero(instr.pos)
        return left / right


def execute(code: List[Instr]) -> float:
    return StackMachine().execute(code)
