"""
Pending operation for RetroCalc
An operator waiting for its right-hand value
"""
from typing import Optional

import arithmetic
from arithmetic import Operator
from calc_value import CalcValue


class Command:
    def __init__(self, operator: Operator, left_value: CalcValue):
        self.operator = operator
        self.left_value = left_value
        self.repeating = False

    @property
    def operator_symbol(self) -> str:
        return self.operator.symbol

    @property
    def can_repeat(self) -> bool:
        """Only += and *= repeat, and only on plain numbers."""
        return self.left_value.can_repeat_commands and self.operator.is_repeatable

    def needs_right_operand(self, right: CalcValue) -> bool:
        """True when ``=`` with this right value has nothing to compute (a no-op, not an error)."""
        return not right.contains_value and not self.can_repeat

    def execute(self, right: CalcValue, substitute_left: bool = True) -> Optional[CalcValue]:
        """Run ``left operator right``.

        An empty right value on a repeatable command is replaced by the left
        value, so ``3 + =`` is ``3 + 3``, and the command is marked repeating.
        A right value with content is used as given, which keeps later
        repeats anchored to the original left value. Returns None on failure
        and leaves the command as it was.
        """
        operand = right
        repeat = False
        if not right.contains_value and self.can_repeat and substitute_left:
            operand = self.left_value
            repeat = True
        result = arithmetic.apply(self.operator, self.left_value, operand)
        if result is not None and repeat:
            self.repeating = True
        return result

    def with_left_value(self, left_value: CalcValue) -> "Command":
        return Command(self.operator, left_value)

    def __repr__(self):
        return f"{self.left_value.display_string()} {self.operator_symbol}"
