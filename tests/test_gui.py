"""
Tests for the keypad window and the application entry point

The window tests need a Tk display and are skipped without one.
"""

from types import SimpleNamespace

import pytest

tk = pytest.importorskip("tkinter")

import retrocalc  # noqa: E402
from config import CalcConfig  # noqa: E402
from gui import KEYPAD_ROWS, RetroCalcGUI, button_text  # noqa: E402


@pytest.fixture
def app(session):
    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("no display available for Tk")
    root.withdraw()
    gui = RetroCalcGUI(root, session)
    yield gui
    root.destroy()


def key(char, keysym=None):
    return SimpleNamespace(char=char, keysym=keysym or char)


class TestKeypadLayout:
    """Tests that need no display."""

    def test_button_text_when_short_form_then_dash_for_dates(self):
        assert button_text("SLASH", CalcConfig.short_form()) == "-"
        assert button_text("COLON", CalcConfig.short_form()) == ":"

    def test_button_text_when_plain_key_then_label_unchanged(self, config):
        assert button_text("MR", config) == "MR"

    def test_keypad_rows_when_counted_then_every_digit_once(self):
        keys = [k for row in KEYPAD_ROWS for k in row]
        assert sorted(k for k in keys if k.isdigit()) == list("0123456789")
        assert len(keys) == len(set(keys))


class TestRetroCalcGUI:
    """Tests for the window, driven through its click handler."""

    def test_calculator_button_click_when_sum_typed_then_display_shows_result(self, app):
        for button in ["1", "+", "2", "="]:
            app.calculator_button_click(button)
        assert app.display.cget("text") == "3"
        assert app.operator_label.cget("text") == ""

    def test_calculator_button_click_when_operator_then_operator_label_lit(self, app):
        app.calculator_button_click("7")
        app.calculator_button_click("×")
        assert app.operator_label.cget("text") == "×"

    def test_calculator_button_click_when_time_of_day_then_am_pm_label(self, app):
        app.calculator_button_click("NOW")
        assert app.display.cget("text") == "9:30:00"
        assert app.ampm_label.cget("text") == "AM"

    def test_calculator_button_click_when_day_key_then_weekday_shown(self, app):
        app.calculator_button_click("DATE")
        app.calculator_button_click("DAY")
        assert app.display.cget("text") == "MON"

    def test_on_key_press_when_separators_typed_then_date_entered(self, app):
        for char in "1/10/2024":
            app.on_key_press(key(char))
        app.on_key_press(key("\r", "Return"))
        assert app.display.cget("text") == "01/10/2024"

    def test_on_key_press_when_escape_then_cleared(self, app):
        app.on_key_press(key("5"))
        app.on_key_press(key("\x1b", "Escape"))
        assert app.display.cget("text") == "0"


class TestEntryPoint:
    """Tests for command line settings."""

    def test_build_config_when_switches_given_then_applied(self):
        args = retrocalc.parse_args(["--24", "--date-order", "dmy"])
        cfg = retrocalc.build_config(args)
        assert cfg.uses_24_hour_clock is True
        assert cfg.date_field_order == ("D", "M", "Y")

    def test_build_config_when_short_form_then_watch_separators(self):
        cfg = retrocalc.build_config(retrocalc.parse_args(["--short-form"]))
        assert cfg.date_separator == "-"

    def test_main_when_bad_date_order_then_exit_code_two(self, tmp_path):
        assert retrocalc.main(["--date-order", "MMY", "--db", str(tmp_path / "x.db")]) == 2
