"""
Unit Tests for Command (pending operation)
"""

from datetime import time

from arithmetic import Operator
from calc_value import CalcValue
from command import Command


class TestCommand:
    """Tests for executing a pending operator."""

    def test_execute_when_right_value_typed_then_computes(self, config):
        # Arrange
        command = Command(Operator.ADD, CalcValue.with_number(3, config))

        # Act
        result = command.execute(CalcValue.with_number(4, config))

        # Assert
        assert result.display_string() == "7"
        assert command.repeating is False

    def test_execute_when_run_again_with_result_then_anchored_to_first_left(self, config):
        """Re-running with the result keeps the original left value: 3 + 7, not 7 + 7."""
        command = Command(Operator.ADD, CalcValue.with_number(3, config))
        first = command.execute(CalcValue.with_number(4, config))

        second = command.execute(first)

        assert second.display_string() == "10"

    def test_execute_when_right_empty_and_repeatable_then_uses_left_twice(self, config):
        command = Command(Operator.ADD, CalcValue.with_number(3, config))

        result = command.execute(CalcValue(config))

        assert result.display_string() == "6"
        assert command.repeating is True

    def test_execute_when_right_empty_multiply_then_squares(self, config):
        command = Command(Operator.MULTIPLY, CalcValue.with_number(5, config))
        assert command.execute(CalcValue(config)).display_string() == "25"

    def test_needs_right_operand_when_subtract_and_right_empty_then_true(self, config):
        command = Command(Operator.SUBTRACT, CalcValue.with_number(3, config))
        assert command.needs_right_operand(CalcValue(config)) is True

    def test_can_repeat_when_left_is_time_then_false(self, config):
        command = Command(Operator.ADD, CalcValue.with_seconds(3600, config))
        assert command.can_repeat is False
        assert command.needs_right_operand(CalcValue(config)) is True

    def test_execute_when_undefined_then_none_and_command_unchanged(self, config):
        left = CalcValue.with_time(time(9, 0, 0), config)
        command = Command(Operator.ADD, left)

        assert command.execute(CalcValue.with_number(2, config)) is None
        assert command.left_value is left
        assert command.operator is Operator.ADD
        assert command.repeating is False

    def test_with_left_value_when_swapped_then_same_operator(self, config):
        command = Command(Operator.SUBTRACT, CalcValue.with_number(3, config))
        swapped = command.with_left_value(CalcValue.with_number(9, config))
        assert swapped.operator is Operator.SUBTRACT
        assert swapped.left_value.display_string() == "9"
        assert swapped.operator_symbol == "-"
