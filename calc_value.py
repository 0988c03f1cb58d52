"""
Value model for RetroCalc
A single display register that is a Decimal, an Elapsed Time, a Time of Day or a Date
"""
import calendar
import copy
import logging
import math
import re
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import List, Optional, Tuple

from config import CalcConfig, get_default_config

logger = logging.getLogger(__name__)

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400

# Times of day are pinned to this day so they can go through datetime math.
REFERENCE_DATE = date(2001, 1, 1)


class ValueKind(Enum):
    DECIMAL = "decimal"
    ELAPSED_TIME = "elapsed_time"
    TIME_OF_DAY = "time_of_day"
    DATE = "date"


def _segment_int(segment: str) -> int:
    """Integer value of a typed segment; an empty segment reads as zero."""
    return int(segment) if segment.isdigit() else 0


def _push_digit(segment: str, digit: str, width: int = 2) -> str:
    """Append a digit to a fixed-width segment, pushing extras off the front."""
    text = segment + digit
    if len(text) > width:
        text = text[-width:]
    return text


def _utc_timestamp(moment: datetime) -> float:
    return float(calendar.timegm(moment.timetuple()))


class BaseValue:
    """Behaviour shared by every variant. Each press returns True or False.

    A press that returns False leaves the buffer and flags exactly as they were.
    """

    kind: ValueKind = None
    can_repeat_commands = False
    allows_percent = False
    supports_scaling = True
    is_time_of_day = False

    def __init__(self, config: CalcConfig, buffer: str = "0"):
        self.config = config
        self.buffer = buffer
        self.contains_value = buffer != "0"
        self.is_modified = False

    @property
    def is_pm(self) -> bool:
        return False

    @property
    def is_current_time(self) -> bool:
        return False

    def _mark_modified(self):
        self.contains_value = True
        self.is_modified = True

    def validate(self) -> bool:
        return True

    def validate_command(self, operator) -> bool:
        """Can this value be the left side of ``operator``?"""
        return self.supports_scaling or not operator.is_scaling

    def number_pressed(self, digit: int) -> bool:
        new_digit = str(digit)
        if self.buffer == "0":
            self.buffer = new_digit
        else:
            new_buffer = self._appended(new_digit)
            if new_buffer is None:
                return False
            self.buffer = new_buffer
        self._mark_modified()
        return True

    def _appended(self, digit: str) -> Optional[str]:
        return self.buffer + digit

    def decimal_pressed(self) -> bool:
        return False

    def colon_pressed(self) -> bool:
        return False

    def slash_pressed(self) -> bool:
        return False

    def plus_minus_pressed(self) -> bool:
        return False

    def am_pm_pressed(self) -> bool:
        return False

    def day_of_week_pressed(self) -> Optional[Tuple[str, int]]:
        return None

    def apply_percent(self, other: "BaseValue") -> Optional["BaseValue"]:
        return None

    def canonicalize_display_string(self):
        pass

    def copy(self) -> "BaseValue":
        return copy.copy(self)

    def to_record(self) -> dict:
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}({self.buffer!r})"


class DecimalValue(BaseValue):
    """Plain number. Also the universal operand: hours for times, days for dates."""

    kind = ValueKind.DECIMAL
    can_repeat_commands = True
    allows_percent = True

    def __init__(self, config: CalcConfig, buffer: str = "0"):
        super().__init__(config, buffer)
        self.contains_decimal_point = config.decimal_separator in buffer

    @classmethod
    def from_number(cls, number: float, config: CalcConfig) -> "DecimalValue":
        value = cls(config)
        value.set_number(number)
        value.contains_value = True
        return value

    @property
    def double_value(self) -> float:
        text = self.buffer.replace(self.config.decimal_separator, ".")
        try:
            return float(text)
        except ValueError:
            return 0.0

    @property
    def int_value(self) -> Optional[int]:
        number = self.double_value
        if number.is_integer():
            return int(number)
        return None

    @property
    def time_interval_value(self) -> float:
        # Decimal hours to seconds
        return self.double_value * SECONDS_PER_HOUR

    def set_number(self, number: float):
        """Render a number into the buffer, five fraction digits at most.

        Fraction digits are dropped to keep the whole number on the display;
        a whole part wider than the display is left for the caller to refuse.
        """
        number = float(number)
        if number.is_integer():
            text = str(int(number))
        else:
            whole_digits = len(str(int(abs(number))))
            places = max(0, min(5, self.config.max_digits - whole_digits))
            text = f"{number:.{places}f}"
            if "." in text:
                text = text.rstrip("0").rstrip(".")
        if text in ("-0", ""):
            text = "0"
        self.contains_decimal_point = "." in text
        self.buffer = text.replace(".", self.config.decimal_separator)

    # A decimal can become elapsed time, even with fractions,
    # as long as the hours still fit the display.
    @property
    def can_become_elapsed_time(self) -> bool:
        number = self.double_value
        return 0 <= number and int(number) < self.config.max_hours

    @property
    def can_become_time_of_day(self) -> bool:
        hour = self.int_value
        return not self.contains_decimal_point and hour is not None and 0 <= hour < 24

    @property
    def can_become_date(self) -> bool:
        number = self.int_value
        if self.contains_decimal_point or number is None:
            return False
        return DateValue.field_in_range(self.config.date_field_order[0], str(number))

    @property
    def digit_count(self) -> int:
        # The decimal point and sign take no digit slot.
        return sum(ch.isdigit() for ch in self.buffer)

    @property
    def fits_display(self) -> bool:
        return self.digit_count <= self.config.max_digits

    def _appended(self, digit):
        if self.digit_count >= self.config.max_digits:
            return None
        return self.buffer + digit

    def decimal_pressed(self):
        sep = self.config.decimal_separator
        if sep in self.buffer:
            return False
        self.buffer += sep
        self.contains_decimal_point = True
        self._mark_modified()
        return True

    def plus_minus_pressed(self):
        self.set_number(-self.double_value)
        self._mark_modified()
        return True

    def apply_percent(self, other):
        if not other.allows_percent:
            return None
        return DecimalValue.from_number(self.double_value * other.double_value / 100, self.config)

    def canonicalize_display_string(self):
        # "5." is still being typed; once committed it reads "5"
        if self.buffer.endswith(self.config.decimal_separator):
            self.buffer = self.buffer[:-1] or "0"
            self.contains_decimal_point = False

    def to_record(self):
        return {"kind": self.kind.value, "value": self.double_value}


class TimeDateValue(BaseValue):
    """Segmented values: fields split by a separator, checked as they are entered."""

    def _segments(self) -> List[str]:
        raise NotImplementedError

    def _validate_last_segment(self) -> bool:
        return True

    def _replace_last_segment(self, segments: List[str], new_last: str) -> str:
        return self.buffer[: len(self.buffer) - len(segments[-1])] + new_last

    def _append_separator(self, sep: str, pad_zeros: bool = True) -> bool:
        segments = self._segments()
        buffer = self.buffer
        if sep in buffer:
            # Two separators already, or the segment is out of range.
            if len(segments) >= 3 or not self._validate_last_segment():
                return False
            if pad_zeros:
                last = segments[-1]
                if len(last) == 0:
                    buffer += "00"
                elif len(last) == 1:
                    buffer = self._replace_last_segment(segments, "0" + last)
        elif not buffer:
            buffer = "0"
        self.buffer = buffer + sep
        self._mark_modified()
        return True


class TimeValue(TimeDateValue):
    """H, H:MM or H:MM:SS."""

    def __init__(self, config, buffer="0"):
        super().__init__(config, buffer)
        self.contains_decimal_point = False

    def _separators(self) -> str:
        return self.config.time_separator

    def _segments(self):
        pattern = "[" + re.escape(self._separators()) + "]"
        return re.split(pattern, self.buffer)

    def _validate_last_segment(self):
        segments = self._segments()
        if len(segments) in (2, 3):
            return _segment_int(segments[-1]) < 60
        return True

    def validate(self):
        # Earlier segments were validated as they were entered.
        return self._validate_last_segment()

    def _appended_hour(self, digit: str) -> Optional[str]:
        return self.buffer + digit

    def _appended(self, digit):
        segments = self._segments()
        if len(segments) == 1:
            return self._appended_hour(digit)
        return self._replace_last_segment(segments, _push_digit(segments[-1], digit))

    def colon_pressed(self):
        return self._append_separator(self.config.time_separator, pad_zeros=True)


class ElapsedTimeValue(TimeValue):
    """A duration: H:MM:SS with unbounded hours, or M:SS.CC once hundredths are used."""

    kind = ValueKind.ELAPSED_TIME

    @classmethod
    def from_seconds(cls, seconds: float, config: CalcConfig) -> Optional["ElapsedTimeValue"]:
        """Build a duration, or None when it is negative or the hours overflow the display."""
        if not math.isfinite(seconds) or seconds < 0:
            return None
        hundredths = int(round(seconds * 100))
        h, rest = divmod(hundredths, SECONDS_PER_HOUR * 100)
        if h >= config.max_hours:
            logger.debug("elapsed time of %s hours overflows the display", h)
            return None
        m, rest = divmod(rest, SECONDS_PER_MINUTE * 100)
        s, c = divmod(rest, 100)
        value = cls(config)
        value.contains_decimal_point = h == 0 and c > 0
        value.buffer = value._format(h, m, s, c)
        value.contains_value = True
        return value

    @classmethod
    def from_hours(cls, hours: float, config: CalcConfig) -> Optional["ElapsedTimeValue"]:
        return cls.from_seconds(hours * SECONDS_PER_HOUR, config)

    @property
    def can_become_time_of_day(self) -> bool:
        return not self.contains_decimal_point

    def _separators(self):
        if self.contains_decimal_point:
            return self.config.time_separator + self.config.decimal_separator
        return self.config.time_separator

    def time_components(self) -> List[int]:
        segments = self._segments()
        comps = [_segment_int(seg) for seg in segments[:3]]
        return comps + [0] * (3 - len(comps))

    @property
    def time_interval_value(self) -> float:
        a, b, c = self.time_components()
        if self.contains_decimal_point:
            return a * SECONDS_PER_MINUTE + b + c / 100
        return a * SECONDS_PER_HOUR + b * SECONDS_PER_MINUTE + c

    @property
    def double_value(self) -> float:
        # Elapsed time does its decimal math in hours
        return self.time_interval_value / SECONDS_PER_HOUR

    def _validate_last_segment(self):
        if not self.contains_decimal_point:
            return super()._validate_last_segment()
        # m:s.c - minutes have no upper bound
        segments = self._segments()
        if len(segments) == 2:
            return _segment_int(segments[1]) < 60
        if len(segments) == 3:
            return _segment_int(segments[2]) < 100
        return True

    def _appended_hour(self, digit):
        new_buffer = self.buffer + digit
        if _segment_int(new_buffer) >= self.config.max_hours:
            return None
        return new_buffer

    def colon_pressed(self):
        if self.contains_decimal_point:
            return False
        return super().colon_pressed()

    def decimal_pressed(self):
        """Switch to m:s.c. There is no h:m:s.c format."""
        if self.contains_decimal_point:
            return False
        segments = self._segments()
        if len(segments) == 3:
            return False
        buffer = self.buffer
        if len(segments) == 2:
            if not self._validate_last_segment():
                return False
            if len(segments[1]) == 1:
                buffer = self._replace_last_segment(segments, "0" + segments[1])
        self.buffer = buffer + self.config.decimal_separator
        self.contains_decimal_point = True
        self._mark_modified()
        return True

    def _format(self, h: int, m: int, s: int, c: int) -> str:
        ts = self.config.time_separator
        if self.contains_decimal_point:
            # Hundredths only ever show with zero hours; minutes are unbounded.
            return f"{m}{ts}{s:02d}{self.config.decimal_separator}{c:02d}"
        if s > 0:
            return f"{h}{ts}{m:02d}{ts}{s:02d}"
        if m > 0:
            return f"{h}{ts}{m:02d}"
        return str(h)

    def canonicalize_display_string(self):
        a, b, c = self.time_components()
        if self.contains_decimal_point:
            self.buffer = self._format(0, a, b, c)
        else:
            self.buffer = self._format(a, b, c, 0)

    def to_record(self):
        return {"kind": self.kind.value, "value": self.time_interval_value}


class TimeOfDayValue(TimeValue):
    """Clock-face time with an AM/PM flag; the hour wraps at 12 or 24."""

    kind = ValueKind.TIME_OF_DAY
    supports_scaling = False
    is_time_of_day = True

    def __init__(self, config, buffer="0", is_pm=False):
        super().__init__(config, buffer)
        self._is_pm = is_pm
        self._is_current_time = False

    @classmethod
    def from_time(cls, moment, config: CalcConfig, current: bool = False) -> "TimeOfDayValue":
        """Full H:MM:SS value for a ``datetime.time`` or ``datetime``."""
        value = cls(config)
        value._set_time(moment.hour, moment.minute, moment.second)
        value.contains_value = True
        value._is_current_time = current
        return value

    @classmethod
    def from_decimal(cls, decimal: DecimalValue) -> "TimeOfDayValue":
        hour = decimal.int_value
        value = cls(decimal.config, str(hour), is_pm=hour >= 12)
        value.contains_value = decimal.contains_value
        value.is_modified = decimal.is_modified
        value.canonicalize_display_string()
        return value

    @classmethod
    def from_elapsed(cls, elapsed: ElapsedTimeValue) -> "TimeOfDayValue":
        # Durations longer than a day just wrap
        segments = elapsed._segments()
        hour = _segment_int(segments[0]) % 24
        segments[0] = str(hour)
        value = cls(elapsed.config, elapsed.config.time_separator.join(segments), is_pm=hour >= 12)
        value.contains_value = True
        value.is_modified = elapsed.is_modified
        value.canonicalize_display_string()
        return value

    @property
    def is_pm(self):
        return self._is_pm

    @property
    def is_current_time(self):
        return self._is_current_time

    def _mark_modified(self):
        super()._mark_modified()
        self._is_current_time = False

    def _hour_limit(self) -> int:
        return 23 if self.config.uses_24_hour_clock else 12

    def _appended_hour(self, digit):
        new_buffer = self.buffer + digit
        if _segment_int(new_buffer) > self._hour_limit():
            return None
        return new_buffer

    def am_pm_pressed(self):
        if self.config.uses_24_hour_clock:
            return False
        self._is_pm = not self._is_pm
        self._mark_modified()
        return True

    def _hour24(self, segment: str) -> int:
        hour = _segment_int(segment)
        if self.config.uses_24_hour_clock:
            return hour % 24
        # 12 AM is midnight, 12 PM is noon
        return hour % 12 + (12 if self._is_pm else 0)

    @property
    def seconds_of_day(self) -> Optional[int]:
        if not self.validate():
            return None
        segments = self._segments()
        h = self._hour24(segments[0])
        m = _segment_int(segments[1]) if len(segments) > 1 else 0
        s = _segment_int(segments[2]) if len(segments) > 2 else 0
        return h * SECONDS_PER_HOUR + m * SECONDS_PER_MINUTE + s

    @property
    def datetime_value(self) -> Optional[datetime]:
        seconds = self.seconds_of_day
        if seconds is None:
            return None
        return datetime.combine(REFERENCE_DATE, time()) + timedelta(seconds=seconds)

    def _format(self, hour24: int, m: int, s: int, fields: int = 3) -> str:
        ts = self.config.time_separator
        if self.config.uses_24_hour_clock:
            hh = f"{hour24:02d}"
        else:
            hh = str(hour24 % 12 or 12)
        if fields >= 3:
            return f"{hh}{ts}{m:02d}{ts}{s:02d}"
        if fields == 2:
            return f"{hh}{ts}{m:02d}"
        return hh

    def _set_time(self, hour: int, minute: int, second: int):
        self._is_pm = hour >= 12
        self.buffer = self._format(hour, minute, second)

    def refresh(self, now) -> bool:
        """Re-render a live clock value; anything typed since stops the refresh."""
        if not self._is_current_time:
            return False
        self._set_time(now.hour, now.minute, now.second)
        return True

    def canonicalize_display_string(self):
        seconds = self.seconds_of_day
        if seconds is None:
            return
        fields = len(self._segments())
        h, rest = divmod(seconds, SECONDS_PER_HOUR)
        m, s = divmod(rest, SECONDS_PER_MINUTE)
        self.buffer = self._format(h, m, s, fields)

    def to_record(self):
        return {"kind": self.kind.value, "value": _utc_timestamp(self.datetime_value)}


class DateValue(TimeDateValue):
    """Up to three fields in the configured order; valid once it names a real day."""

    kind = ValueKind.DATE
    supports_scaling = False

    @classmethod
    def from_date(cls, day: date, config: CalcConfig) -> "DateValue":
        value = cls(config, cls.format_date(day, config))
        value.contains_value = True
        return value

    @staticmethod
    def format_date(day: date, config: CalcConfig) -> str:
        fields = {"M": f"{day.month:02d}", "D": f"{day.day:02d}", "Y": f"{day.year:04d}"}
        return config.date_separator.join(fields[code] for code in config.date_field_order)

    @staticmethod
    def field_in_range(code: str, text: str) -> bool:
        """Bounds for one date field by its role: month, day or year."""
        if not text.isdigit():
            return False
        number = int(text)
        if code == "M":
            return 1 <= number <= 12
        if code == "D":
            return 1 <= number <= 31
        return number < 10000

    def _segments(self):
        return self.buffer.split(self.config.date_separator)

    def _full_year(self, text: str) -> int:
        year = int(text)
        if len(text) <= 2:
            year += 2000 if year < self.config.two_digit_year_pivot else 1900
        return year

    @property
    def date_value(self) -> Optional[date]:
        segments = self._segments()
        if len(segments) != 3 or not all(seg.isdigit() for seg in segments):
            return None
        fields = dict(zip(self.config.date_field_order, segments))
        try:
            return date(self._full_year(fields["Y"]), int(fields["M"]), int(fields["D"]))
        except ValueError:
            return None

    def validate(self):
        # If it makes a date, it's good.
        return self.date_value is not None

    def _validate_last_segment(self):
        segments = self._segments()
        index = len(segments) - 1
        if index > 2:
            return False
        return self.field_in_range(self.config.date_field_order[index], segments[-1])

    def _appended(self, digit):
        # Field widths are 2-2-4 with the year wherever the locale puts it.
        # A fifth year digit is far more likely a mistake to push off than a real year.
        segments = self._segments()
        index = min(len(segments), 3) - 1
        width = self.config.date_field_width(index)
        return self._replace_last_segment(segments, _push_digit(segments[-1], digit, width))

    def slash_pressed(self):
        return self._append_separator(self.config.date_separator, pad_zeros=True)

    def day_of_week_pressed(self):
        day = self.date_value
        if day is None:
            return None
        # Python counts from Monday; the labels count from Sunday
        sunday_based = (day.weekday() + 1) % 7
        label = self.config.weekday_symbols[sunday_based]
        index = (sunday_based - (self.config.first_weekday - 1)) % 7
        return label, index

    def canonicalize_display_string(self):
        day = self.date_value
        if day is not None:
            self.buffer = self.format_date(day, self.config)

    def to_record(self):
        return {"kind": self.kind.value,
                "value": _utc_timestamp(datetime.combine(self.date_value, time()))}


class CalcValue:
    """The calculator's display register.

    Holds one variant and swaps it for another when a separator or mode key
    turns a Decimal into a time or a date. Conversions only go forward:
    Decimal -> ElapsedTime -> TimeOfDay, Decimal -> Date.
    """

    def __init__(self, config: Optional[CalcConfig] = None, value: Optional[BaseValue] = None):
        self.config = config or get_default_config()
        self.value = value if value is not None else DecimalValue(self.config)

    @classmethod
    def with_number(cls, number: float, config: Optional[CalcConfig] = None) -> "CalcValue":
        config = config or get_default_config()
        return cls(config, DecimalValue.from_number(number, config))

    @classmethod
    def with_time(cls, moment, config: Optional[CalcConfig] = None, current: bool = False) -> "CalcValue":
        config = config or get_default_config()
        return cls(config, TimeOfDayValue.from_time(moment, config, current=current))

    @classmethod
    def with_date(cls, day: date, config: Optional[CalcConfig] = None) -> "CalcValue":
        config = config or get_default_config()
        return cls(config, DateValue.from_date(day, config))

    @classmethod
    def with_seconds(cls, seconds: float, config: Optional[CalcConfig] = None) -> Optional["CalcValue"]:
        config = config or get_default_config()
        elapsed = ElapsedTimeValue.from_seconds(seconds, config)
        if elapsed is None:
            return None
        return cls(config, elapsed)

    @classmethod
    def parse(cls, text: str, config: Optional[CalcConfig] = None) -> Optional["CalcValue"]:
        """Replay ``text`` as key presses on a fresh value; None if any key is refused."""
        value = cls(config)
        keys = {
            value.config.decimal_separator: value.decimal_pressed,
            value.config.time_separator: value.colon_pressed,
            value.config.date_separator: value.slash_pressed,
        }
        for ch in text:
            if ch.isdigit():
                ok = value.number_pressed(int(ch))
            elif ch in keys:
                ok = keys[ch]()
            else:
                ok = False
            if not ok:
                return None
        return value

    # ── Observable state ───────────────────────────────────────────────────────

    @property
    def kind(self) -> ValueKind:
        return self.value.kind

    def display_string(self) -> str:
        return self.value.buffer

    @property
    def contains_value(self) -> bool:
        return self.value.contains_value

    @property
    def is_modified(self) -> bool:
        return self.value.is_modified

    @property
    def is_time_of_day(self) -> bool:
        return self.value.is_time_of_day

    @property
    def is_pm(self) -> bool:
        return self.value.is_pm

    @property
    def is_current_time(self) -> bool:
        return self.value.is_current_time

    @property
    def can_repeat_commands(self) -> bool:
        return self.value.can_repeat_commands

    # ── Validation ─────────────────────────────────────────────────────────────

    def validate(self) -> bool:
        return self.value.validate()

    def validate_command(self, operator) -> bool:
        return self.value.validate_command(operator)

    # ── Key presses ────────────────────────────────────────────────────────────

    def _attempt(self, press) -> bool:
        """Run a press; put the old variant back if it fails half way."""
        snapshot = self.value.copy()
        if press():
            return True
        self.value = snapshot
        return False

    def number_pressed(self, digit: int) -> bool:
        if not isinstance(digit, int) or not 0 <= digit <= 9:
            return False
        return self._attempt(lambda: self.value.number_pressed(digit))

    def decimal_pressed(self) -> bool:
        return self._attempt(self.value.decimal_pressed)

    def plus_minus_pressed(self) -> bool:
        return self._attempt(self.value.plus_minus_pressed)

    def colon_pressed(self) -> bool:
        """Typing a colon turns a Decimal into elapsed time."""
        return self._attempt(self._colon)

    def _colon(self):
        value = self.value
        if value.kind is ValueKind.DECIMAL:
            if not value.can_become_elapsed_time:
                return False
            hours = value.int_value
            if hours is None:
                # The fraction already implies the colon; don't add one.
                elapsed = ElapsedTimeValue.from_seconds(value.time_interval_value, self.config)
                if elapsed is None:
                    return False
                elapsed.is_modified = True
                self.value = elapsed
                return True
            # Integers become the hours segment
            elapsed = ElapsedTimeValue(self.config, str(hours))
            elapsed.contains_value = True
            self.value = elapsed
        return self.value.colon_pressed()

    def slash_pressed(self) -> bool:
        """Typing a slash turns an integer Decimal into a date."""
        return self._attempt(self._slash)

    def _slash(self):
        value = self.value
        if value.kind is ValueKind.DECIMAL:
            if not value.can_become_date:
                return False
            day = DateValue(self.config, str(value.int_value))
            day.contains_value = True
            self.value = day
        return self.value.slash_pressed()

    def make_time_of_day(self, now: Optional[datetime] = None) -> bool:
        return self._attempt(lambda: self._make_time_of_day(now))

    def _make_time_of_day(self, now):
        value = self.value
        if value.kind is ValueKind.TIME_OF_DAY:
            return True
        if value.kind is ValueKind.DECIMAL:
            if not value.contains_value:
                self.value = TimeOfDayValue.from_time(now or datetime.now(), self.config)
                return True
            if not value.can_become_time_of_day:
                return False
            self.value = TimeOfDayValue.from_decimal(value)
            return True
        if value.kind is ValueKind.ELAPSED_TIME:
            if not value.can_become_time_of_day:
                return False
            self.value = TimeOfDayValue.from_elapsed(value)
            return True
        return False

    def time_pressed(self, now: Optional[datetime] = None) -> bool:
        """The Time key: convert to time of day; a typed Decimal also gets its colon."""
        return self._attempt(lambda: self._time(now))

    def _time(self, now):
        if self.value.kind is ValueKind.DECIMAL:
            needs_colon = self.value.contains_value
            if not self._make_time_of_day(now):
                return False
            if needs_colon:
                return self.value.colon_pressed()
            return True
        return self._make_time_of_day(now)

    def am_pm_pressed(self, now: Optional[datetime] = None) -> bool:
        """AM/PM toggle; an empty Decimal first becomes the time at ``now``."""
        return self._attempt(lambda: self._make_time_of_day(now) and self.value.am_pm_pressed())

    def time_to_decimal_pressed(self) -> bool:
        """Elapsed time to decimal hours."""
        if self.value.kind is not ValueKind.ELAPSED_TIME or not self.value.validate():
            return False
        self.value = DecimalValue.from_number(self.value.double_value, self.config)
        return True

    def decimal_to_time_pressed(self) -> bool:
        """Decimal hours to elapsed time."""
        if self.value.kind is not ValueKind.DECIMAL:
            return False
        elapsed = ElapsedTimeValue.from_hours(self.value.double_value, self.config)
        if elapsed is None:
            return False
        self.value = elapsed
        return True

    def day_of_week_pressed(self) -> Optional[Tuple[str, "CalcValue"]]:
        result = self.value.day_of_week_pressed()
        if result is None:
            return None
        label, index = result
        return label, CalcValue.with_number(index, self.config)

    def apply_percent(self, other: "CalcValue") -> Optional["CalcValue"]:
        result = self.value.apply_percent(other.value)
        if result is None:
            return None
        return CalcValue(self.config, result)

    def canonicalize_display_string(self):
        self.value.canonicalize_display_string()

    def refresh_current_time(self, now: datetime) -> bool:
        if self.value.kind is not ValueKind.TIME_OF_DAY:
            return False
        return self.value.refresh(now)

    # ── Copy & memory record ───────────────────────────────────────────────────

    def copy(self) -> "CalcValue":
        return CalcValue(self.config, self.value.copy())

    def to_record(self) -> dict:
        """Snapshot for the memory store: ``{"kind": ..., "value": float}``."""
        return self.value.to_record()

    @classmethod
    def from_record(cls, record: dict, config: Optional[CalcConfig] = None) -> "CalcValue":
        config = config or get_default_config()
        try:
            kind = ValueKind(record["kind"])
            number = float(record["value"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"not a memory record: {record!r}") from e

        if kind is ValueKind.DECIMAL:
            return cls.with_number(number, config)
        if kind is ValueKind.ELAPSED_TIME:
            value = cls.with_seconds(number, config)
            if value is None:
                raise ValueError(f"elapsed time out of range: {number}")
            return value
        moment = datetime.fromtimestamp(number, tz=timezone.utc)
        if kind is ValueKind.TIME_OF_DAY:
            return cls.with_time(moment.time(), config)
        return cls.with_date(moment.date(), config)

    def __repr__(self):
        return f"CalcValue({self.value!r})"
