"""
RetroCalc Configuration Settings
"""
import os
from dataclasses import dataclass, field
from typing import Tuple

# Application Settings
APP_NAME = "RetroCalc"
VERSION = "1.0.0"

# Display Settings (portrait keypad, roughly phone-shaped)
WINDOW_WIDTH = 320
WINDOW_HEIGHT = 520
DISPLAY_FONT = ("Consolas", 26, "bold")   # LED/segmented-style font
OPERATOR_FONT = ("Consolas", 14, "bold")
BUTTON_FONT = ("Segoe UI", 12)
LABEL_FONT = ("Segoe UI", 9)

# ── LED Palette ────────────────────────────────────────────────────────────────

# Red LEDs on a black bezel, like the HP-01 watch
LED_PALETTE = {
    "bg":           "#101010",
    "display_bg":   "#000000",
    "led_on":       "#FF2A1A",   # lit segment
    "led_off":      "#000000",   # blink "off" phase blends into the display
    "btn_bg":       "#2A2A2A",
    "btn_fg":       "#E0E0E0",
    "operator_fg":  "#FFB000",
    "mode_fg":      "#7FB8FF",
    "danger_bg":    "#8A1E1E",
    "equals_bg":    "#3C3C3C",
}

# Blink feedback (milliseconds). Single slow blink = accepted, fast double = error.
BLINK_MS = 100
DOUBLE_BLINK_MS = 50
CLOCK_REFRESH_MS = 1000

# ── Calculator limits ──────────────────────────────────────────────────────────

# Small watch has 10 digits on screen; a date is limited to MM/DD/YYYY.
MAX_DIGITS = 10
# Largest elapsed time that still fits the H:MM:SS display.
MAX_HOURS = 10000

# Locale defaults (the host application supplies the real ones)
DEFAULT_TIME_SEPARATOR = ":"
DEFAULT_DATE_SEPARATOR = "/"
DEFAULT_DECIMAL_SEPARATOR = "."
DEFAULT_DATE_FIELD_ORDER = ("M", "D", "Y")
SHORT_FORM_DATE_SEPARATOR = "-"   # 7-segment displays have no '/'

# Sunday first, matching Calendar weekday numbering (1 = Sunday)
WEEKDAY_SYMBOLS = ("SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT")

# Two-digit years below the pivot land in 2000-2099, the rest in 1900-1999
TWO_DIGIT_YEAR_PIVOT = 70

# Database Settings
DB_PATH = os.path.join(os.path.dirname(__file__), "retrocalc.db")


@dataclass(frozen=True)
class CalcConfig:
    """Locale-derived settings every value is parsed and formatted with.

    Built once by the host (or the tests) and passed into the Session;
    values keep a reference to it so nothing reads process-wide state.
    """

    time_separator: str = DEFAULT_TIME_SEPARATOR
    date_separator: str = DEFAULT_DATE_SEPARATOR
    decimal_separator: str = DEFAULT_DECIMAL_SEPARATOR
    date_field_order: Tuple[str, ...] = DEFAULT_DATE_FIELD_ORDER
    uses_24_hour_clock: bool = False
    first_weekday: int = 1
    weekday_symbols: Tuple[str, ...] = field(default=WEEKDAY_SYMBOLS)
    max_digits: int = MAX_DIGITS
    max_hours: int = MAX_HOURS
    two_digit_year_pivot: int = TWO_DIGIT_YEAR_PIVOT

    def __post_init__(self):
        seps = (self.time_separator, self.date_separator, self.decimal_separator)
        for sep in seps:
            if len(sep) != 1 or sep.isdigit():
                raise ValueError(f"separator must be a single non-digit character: {sep!r}")
        if len(set(seps)) != 3:
            raise ValueError("time, date and decimal separators must differ")
        if sorted(self.date_field_order) != ["D", "M", "Y"]:
            raise ValueError(f"date_field_order must be a permutation of M, D, Y: {self.date_field_order!r}")
        if not 1 <= self.first_weekday <= 7:
            raise ValueError("first_weekday must be between 1 (Sunday) and 7 (Saturday)")
        if len(self.weekday_symbols) != 7:
            raise ValueError("weekday_symbols needs seven entries, Sunday first")
        if self.max_digits <= 0 or self.max_hours <= 0:
            raise ValueError("max_digits and max_hours must be positive")

    @classmethod
    def short_form(cls, **overrides) -> "CalcConfig":
        """Watch preset: 7-segment friendly separators, no locale lookups."""
        settings = {
            "time_separator": DEFAULT_TIME_SEPARATOR,
            "date_separator": SHORT_FORM_DATE_SEPARATOR,
            "decimal_separator": DEFAULT_DECIMAL_SEPARATOR,
        }
        settings.update(overrides)
        return cls(**settings)

    def date_field_width(self, index: int) -> int:
        """Max digits for the date segment at ``index`` (years get four)."""
        return 4 if self.date_field_order[index] == "Y" else 2


def get_default_config() -> CalcConfig:
    """Return the configuration used when the host supplies nothing."""
    return CalcConfig()
