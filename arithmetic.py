"""
Arithmetic dispatch for RetroCalc
Which operand kinds combine under + - × ÷, and what each combination produces
"""
import logging
import math
from datetime import timedelta
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from calc_value import (
    BaseValue,
    CalcValue,
    DateValue,
    DecimalValue,
    ElapsedTimeValue,
    TimeOfDayValue,
    ValueKind,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
)

logger = logging.getLogger(__name__)


class Operator(Enum):
    DIVIDE = "÷"
    MULTIPLY = "×"
    SUBTRACT = "-"
    ADD = "+"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def is_scaling(self) -> bool:
        """Multiply and divide only make sense for numbers and durations."""
        return self in (Operator.MULTIPLY, Operator.DIVIDE)

    @property
    def is_repeatable(self) -> bool:
        return self in (Operator.ADD, Operator.MULTIPLY)


# ── Result builders ────────────────────────────────────────────────────────────

def _decimal(number: float, config) -> Optional[BaseValue]:
    if not math.isfinite(number):
        return None
    value = DecimalValue.from_number(number, config)
    if not value.fits_display:
        logger.debug("%s does not fit in %d digits", value.buffer, config.max_digits)
        return None
    return value


def _elapsed(seconds: float, config) -> Optional[BaseValue]:
    return ElapsedTimeValue.from_seconds(seconds, config)


def _shift_time_of_day(tod: TimeOfDayValue, seconds: float) -> Optional[BaseValue]:
    start = tod.datetime_value
    if start is None or not math.isfinite(seconds):
        return None
    # Only the clock face survives, so whole days can go.
    return TimeOfDayValue.from_time(start + timedelta(seconds=seconds % SECONDS_PER_DAY), tod.config)


def _shift_date(day: DateValue, days: Optional[int]) -> Optional[BaseValue]:
    start = day.date_value
    if start is None or days is None:
        return None
    try:
        return DateValue.from_date(start + timedelta(days=days), day.config)
    except OverflowError:
        return None


# ── Decimal on the left ────────────────────────────────────────────────────────

def _decimal_add_decimal(left, right):
    return _decimal(left.double_value + right.double_value, left.config)


def _decimal_subtract_decimal(left, right):
    return _decimal(left.double_value - right.double_value, left.config)


def _decimal_multiply_decimal(left, right):
    return _decimal(left.double_value * right.double_value, left.config)


def _decimal_divide_decimal(left, right):
    if right.double_value == 0:
        return None
    return _decimal(left.double_value / right.double_value, left.config)


# Decimal and elapsed time meet in seconds for + and -, in hours for × and ÷

def _add_seconds(left, right):
    return _elapsed(left.time_interval_value + right.time_interval_value, left.config)


def _subtract_seconds(left, right):
    return _elapsed(left.time_interval_value - right.time_interval_value, left.config)


def _multiply_hours(left, right):
    return _elapsed(left.double_value * right.double_value * SECONDS_PER_HOUR, left.config)


def _divide_hours(left, right):
    if right.double_value == 0:
        return None
    return _elapsed(left.double_value / right.double_value * SECONDS_PER_HOUR, left.config)


def _decimal_add_time_of_day(left, right):
    return _shift_time_of_day(right, left.time_interval_value)


# ── Time of day on the left ────────────────────────────────────────────────────

def _time_of_day_add_elapsed(left, right):
    return _shift_time_of_day(left, right.time_interval_value)


def _time_of_day_subtract_elapsed(left, right):
    return _shift_time_of_day(left, -right.time_interval_value)


def _time_of_day_subtract_time_of_day(left, right):
    # Duration is end - start
    end = left.seconds_of_day
    start = right.seconds_of_day
    if end is None or start is None or end < start:
        return None
    return _elapsed(end - start, left.config)


# ── Date on the left ───────────────────────────────────────────────────────────

def _date_add_days(left, right):
    return _shift_date(left, right.int_value)


def _date_subtract_days(left, right):
    days = right.int_value
    return _shift_date(left, -days if days is not None else None)


def _date_subtract_date(left, right):
    end = left.date_value
    start = right.date_value
    if end is None or start is None or end < start:
        return None
    return _decimal((end - start).days, left.config)


D = ValueKind.DECIMAL
E = ValueKind.ELAPSED_TIME
T = ValueKind.TIME_OF_DAY
A = ValueKind.DATE

# Anything not listed here is undefined.
DISPATCH: Dict[Tuple[ValueKind, ValueKind, Operator], Callable] = {
    (D, D, Operator.ADD): _decimal_add_decimal,
    (D, D, Operator.SUBTRACT): _decimal_subtract_decimal,
    (D, D, Operator.MULTIPLY): _decimal_multiply_decimal,
    (D, D, Operator.DIVIDE): _decimal_divide_decimal,

    (D, E, Operator.ADD): _add_seconds,
    (D, E, Operator.SUBTRACT): _subtract_seconds,
    (D, E, Operator.MULTIPLY): _multiply_hours,
    (D, E, Operator.DIVIDE): _divide_hours,

    (D, T, Operator.ADD): _decimal_add_time_of_day,

    (E, D, Operator.ADD): _add_seconds,
    (E, D, Operator.SUBTRACT): _subtract_seconds,
    (E, D, Operator.MULTIPLY): _multiply_hours,
    (E, D, Operator.DIVIDE): _divide_hours,

    (E, E, Operator.ADD): _add_seconds,
    (E, E, Operator.SUBTRACT): _subtract_seconds,

    (T, E, Operator.ADD): _time_of_day_add_elapsed,
    (T, E, Operator.SUBTRACT): _time_of_day_subtract_elapsed,
    (T, T, Operator.SUBTRACT): _time_of_day_subtract_time_of_day,

    (A, D, Operator.ADD): _date_add_days,
    (A, D, Operator.SUBTRACT): _date_subtract_days,
    (A, A, Operator.SUBTRACT): _date_subtract_date,
}


def is_defined(operator: Operator, left_kind: ValueKind, right_kind: ValueKind) -> bool:
    return (left_kind, right_kind, operator) in DISPATCH


def apply(operator: Operator, left: CalcValue, right: CalcValue) -> Optional[CalcValue]:
    """Compute ``left operator right``; None when the combination is undefined or out of range."""
    handler = DISPATCH.get((left.kind, right.kind, operator))
    if handler is None:
        logger.debug("no %s for %s and %s", operator.symbol, left.kind.value, right.kind.value)
        return None
    result = handler(left.value, right.value)
    if result is None:
        logger.debug("%r %s %r has no result", left, operator.symbol, right)
        return None
    return CalcValue(left.config, result)


def add(left: CalcValue, right: CalcValue) -> Optional[CalcValue]:
    return apply(Operator.ADD, left, right)


def subtract(left: CalcValue, right: CalcValue) -> Optional[CalcValue]:
    return apply(Operator.SUBTRACT, left, right)


def multiply(left: CalcValue, right: CalcValue) -> Optional[CalcValue]:
    return apply(Operator.MULTIPLY, left, right)


def divide(left: CalcValue, right: CalcValue) -> Optional[CalcValue]:
    return apply(Operator.DIVIDE, left, right)
