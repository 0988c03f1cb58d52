"""
Calculator Session for RetroCalc
Sequences keypad presses into value edits, pending operations and memory
"""
import logging
from datetime import date, datetime
from enum import Enum
from typing import Callable, Iterable, Optional

from arithmetic import Operator
from calc_value import CalcValue, ValueKind
from command import Command
from config import CalcConfig, get_default_config

logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    INPUT_REJECTED = "input_rejected"
    OPERATION_UNDEFINED = "operation_undefined"
    MODE_TRANSITION_REFUSED = "mode_transition_refused"


class Session:
    """One calculator: the value being typed, a pending command, memory.

    Every press returns True or False. False means nothing changed and the
    caller should show the error blink; ``last_error`` says which kind.
    """

    def __init__(self, config: Optional[CalcConfig] = None, memory_store=None,
                 clock: Optional[Callable[[], datetime]] = None):
        self.config = config or get_default_config()
        self.memory_store = memory_store
        self.clock = clock or datetime.now

        self.current = CalcValue(self.config)
        self.command: Optional[Command] = None
        self.reset_snapshot = CalcValue(self.config)
        self.memory = self._load_memory()
        self.calculation_executed = False
        self.last_error: Optional[ErrorKind] = None

        # What the display shows when it isn't the current value
        self._display_value: Optional[CalcValue] = None
        self._display_text: Optional[str] = None

    def _load_memory(self) -> CalcValue:
        if self.memory_store is None:
            return CalcValue(self.config)
        record = self.memory_store.load_memory()
        if record is None:
            return CalcValue(self.config)
        try:
            return CalcValue.from_record(record, self.config)
        except ValueError as e:
            logger.warning("Ignoring stored memory value: %s", e)
            return CalcValue(self.config)

    # ── Bookkeeping ────────────────────────────────────────────────────────────

    def _result(self, success: bool, error: ErrorKind = ErrorKind.INPUT_REJECTED) -> bool:
        if success:
            self.last_error = None
        else:
            self.last_error = error
            logger.debug("press refused (%s) on %r", error.value, self.current)
        return success

    def _show_current(self):
        self._display_value = None
        self._display_text = None

    def _show_value(self, value: CalcValue):
        self._display_value = value
        self._display_text = None

    def _start_new_entry(self):
        """After '=' the next digit starts a fresh value and drops the command."""
        if self.calculation_executed:
            self.command = None
            self.calculation_executed = False
            self.current = CalcValue(self.config)

    def _edit(self, press: Callable[[], bool]) -> bool:
        if press():
            self._show_current()
            return self._result(True)
        return self._result(False, ErrorKind.INPUT_REJECTED)

    def _mode_key(self, press: Callable[[], bool], target_kinds: Iterable[ValueKind]) -> bool:
        kind_before = self.current.kind
        if press():
            if self.calculation_executed and self.current.kind is not kind_before:
                # Turning a result into a time or date keeps editing it
                self.calculation_executed = False
                self.command = None
            self._show_current()
            return self._result(True)
        if kind_before in target_kinds:
            return self._result(False, ErrorKind.INPUT_REJECTED)
        return self._result(False, ErrorKind.MODE_TRANSITION_REFUSED)

    # ── Observable state ───────────────────────────────────────────────────────

    def displayed_value(self) -> CalcValue:
        return self._display_value if self._display_value is not None else self.current

    def display_string(self) -> str:
        if self._display_text is not None:
            return self._display_text
        return self.displayed_value().display_string()

    def is_time_of_day(self) -> bool:
        return self._display_text is None and self.displayed_value().is_time_of_day

    def is_pm(self) -> bool:
        return self.is_time_of_day() and self.displayed_value().is_pm

    def contains_value(self) -> bool:
        return self.current.contains_value

    def operator_symbol(self) -> Optional[str]:
        return self.command.operator_symbol if self.command is not None else None

    # ── Digit entry ────────────────────────────────────────────────────────────

    def number_pressed(self, digit: int) -> bool:
        """Add a digit to the current value"""
        if not isinstance(digit, int) or not 0 <= digit <= 9:
            return self._result(False)
        self._start_new_entry()
        return self._edit(lambda: self.current.number_pressed(digit))

    def decimal_pressed(self) -> bool:
        """Add the decimal separator (hundredths for elapsed time)"""
        self._start_new_entry()
        return self._edit(self.current.decimal_pressed)

    def plus_minus_pressed(self) -> bool:
        return self._edit(self.current.plus_minus_pressed)

    # ── Mode keys ──────────────────────────────────────────────────────────────

    def colon_pressed(self) -> bool:
        return self._mode_key(self.current.colon_pressed,
                              (ValueKind.ELAPSED_TIME, ValueKind.TIME_OF_DAY))

    def slash_pressed(self) -> bool:
        return self._mode_key(self.current.slash_pressed, (ValueKind.DATE,))

    def time_pressed(self) -> bool:
        return self._mode_key(lambda: self.current.time_pressed(self.clock()),
                              (ValueKind.TIME_OF_DAY,))

    def am_pm_pressed(self) -> bool:
        return self._mode_key(lambda: self.current.am_pm_pressed(self.clock()),
                              (ValueKind.TIME_OF_DAY,))

    def time_to_decimal_pressed(self) -> bool:
        kind_before = self.current.kind
        if self.current.time_to_decimal_pressed():
            self._show_current()
            return self._result(True)
        if kind_before is ValueKind.ELAPSED_TIME:
            return self._result(False, ErrorKind.INPUT_REJECTED)
        return self._result(False, ErrorKind.MODE_TRANSITION_REFUSED)

    def decimal_to_time_pressed(self) -> bool:
        kind_before = self.current.kind
        if self.current.decimal_to_time_pressed():
            self._show_current()
            return self._result(True)
        if kind_before is ValueKind.DECIMAL:
            return self._result(False, ErrorKind.OPERATION_UNDEFINED)
        return self._result(False, ErrorKind.MODE_TRANSITION_REFUSED)

    def current_time_pressed(self, now: Optional[datetime] = None) -> bool:
        """Show the clock; it keeps ticking until something is typed."""
        self.current = CalcValue.with_time(now or self.clock(), self.config, current=True)
        if self.calculation_executed:
            self.command = None
            self.calculation_executed = False
        self._show_current()
        return self._result(True)

    def current_date_pressed(self, today: Optional[date] = None) -> bool:
        self.reset_snapshot = self.current
        self.current = CalcValue.with_date(today or self.clock().date(), self.config)
        if self.calculation_executed:
            self.command = None
            self.calculation_executed = False
        self._show_current()
        return self._result(True)

    def refresh_clock(self, now: Optional[datetime] = None) -> bool:
        """Redisplay the live clock. Returns True when the display changed."""
        if self._display_text is not None or self._display_value is not None:
            return False
        return self.current.refresh_current_time(now or self.clock())

    def day_of_week_pressed(self) -> bool:
        result = self.current.day_of_week_pressed()
        if result is None:
            return self._result(False)
        label, weekday = result
        # The value is numeric like any other result; '=' shows it.
        self.calculation_executed = True
        self.current = weekday
        self._display_value = None
        self._display_text = label
        return self._result(True)

    # ── Operators ──────────────────────────────────────────────────────────────

    def operator_pressed(self, operator: Operator) -> bool:
        """Start a command, or run the pending one first"""
        if not self.current.validate():
            return self._result(False, ErrorKind.INPUT_REJECTED)
        if not self.current.validate_command(operator):
            return self._result(False, ErrorKind.OPERATION_UNDEFINED)

        # An unexecuted command with no new number just changes operator.
        if self.command is not None and not self.calculation_executed:
            if not self.current.contains_value:
                if not self.command.left_value.validate_command(operator):
                    return self._result(False, ErrorKind.OPERATION_UNDEFINED)
                self.command.operator = operator
                return self._result(True)
            if not self._execute_command():
                return self._result(False, ErrorKind.OPERATION_UNDEFINED)

        self.command = Command(operator, self.current)
        self.current = CalcValue(self.config)
        self.calculation_executed = False
        self._show_value(self.command.left_value)
        return self._result(True)

    def _execute_command(self) -> bool:
        command = self.command
        # A command needs a right value unless it's repeatable: *=, +=
        if command.needs_right_operand(self.current):
            return True
        # Only the first run may stand the left value in for an empty right one.
        answer = command.execute(self.current, substitute_left=not self.calculation_executed)
        if answer is None:
            return False
        self.reset_snapshot = self.current
        self.current = answer
        self.calculation_executed = True
        if not command.repeating:
            self.command = None
        self._show_current()
        return True

    def equals_pressed(self) -> bool:
        if not self.current.validate():
            return self._result(False, ErrorKind.INPUT_REJECTED)
        if self.command is None:
            self.current.canonicalize_display_string()
            self._show_current()
            return self._result(True)
        return self._result(self._execute_command(), ErrorKind.OPERATION_UNDEFINED)

    def percent_pressed(self) -> bool:
        """left % right -> left * right / 100, replacing the right value"""
        if self.command is None or not self.current.contains_value:
            return self._result(False, ErrorKind.INPUT_REJECTED)
        # Percent only works on plain numbers
        result = self.command.left_value.apply_percent(self.current)
        if result is None:
            return self._result(False, ErrorKind.INPUT_REJECTED)
        self.current = result
        self._show_current()
        return self._result(True)

    def swap_pressed(self) -> bool:
        """Exchange the pending left value and the typed right value"""
        if self.command is None or not self.current.contains_value:
            return self._result(False, ErrorKind.INPUT_REJECTED)
        if not self.current.validate():
            return self._result(False, ErrorKind.INPUT_REJECTED)
        if not self.current.validate_command(self.command.operator):
            return self._result(False, ErrorKind.OPERATION_UNDEFINED)
        left = self.command.left_value
        self.command = self.command.with_left_value(self.current)
        self.current = left
        self._show_current()
        return self._result(True)

    # ── Clear / reset ──────────────────────────────────────────────────────────

    def clear_pressed(self) -> bool:
        """Clear the right value, or the whole calculation if there is none"""
        if self.command is not None:
            if self.current.contains_value:
                # Keep the command; re-show the left value.
                self.current = CalcValue(self.config)
                self._show_value(self.command.left_value)
                return self._result(True)
            self.command = None
        self.current = CalcValue(self.config)
        self.calculation_executed = False
        self._show_current()
        return self._result(True)

    def reset_pressed(self) -> bool:
        """Bring back the value that was replaced by the last result"""
        self.current = self.reset_snapshot.copy()
        self._show_current()
        return self._result(True)

    # ── Memory ─────────────────────────────────────────────────────────────────

    def memory_recall_pressed(self) -> bool:
        """Recall memory value (MR)"""
        self.current = self.memory.copy()
        self._show_current()
        return self._result(True)

    def memory_store_pressed(self) -> bool:
        """Store the current value, finishing any pending calculation first"""
        # Can't store partial values.
        if not self.current.validate():
            return self._result(False, ErrorKind.INPUT_REJECTED)
        if self.command is not None and not self.calculation_executed:
            if not self._execute_command():
                return self._result(False, ErrorKind.OPERATION_UNDEFINED)
        self.memory = self.current.copy()
        if self.memory_store is not None:
            self.memory_store.save_memory(self.memory.to_record())
        self._show_current()
        return self._result(True)
