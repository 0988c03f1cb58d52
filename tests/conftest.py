import pytest
from datetime import datetime

from arithmetic import Operator
from config import CalcConfig
from database import Database
from session import Session

# Monday 15 January 2024, 9:30:00 AM
FIXED_NOW = datetime(2024, 1, 15, 9, 30, 0)


# Common test fixtures
@pytest.fixture
def config():
    """Default locale: 12-hour clock, MM/DD/YYYY."""
    return CalcConfig()


@pytest.fixture
def config_24h():
    return CalcConfig(uses_24_hour_clock=True)


@pytest.fixture
def dmy_config():
    """Day-first dates, DD/MM/YYYY."""
    return CalcConfig(date_field_order=("D", "M", "Y"))


@pytest.fixture
def session(config):
    """Session with a clock that never moves."""
    return Session(config, clock=lambda: FIXED_NOW)


@pytest.fixture
def tmp_db(tmp_path):
    """Database in a throwaway file."""
    return Database(str(tmp_path / "retrocalc_test.db"))


@pytest.fixture
def press():
    """Type a string of keys into a session; returns the last press result.

    Digits and the session's separators type themselves, ``+ - * ÷`` are the
    operators, ``=`` ``%`` ``C`` are equals, percent and clear, ``T`` is the
    Time key. Spaces are ignored.
    """
    def _press(session, keys):
        cfg = session.config
        actions = {
            cfg.decimal_separator: session.decimal_pressed,
            cfg.time_separator: session.colon_pressed,
            cfg.date_separator: session.slash_pressed,
            "+": lambda: session.operator_pressed(Operator.ADD),
            "-": lambda: session.operator_pressed(Operator.SUBTRACT),
            "*": lambda: session.operator_pressed(Operator.MULTIPLY),
            "÷": lambda: session.operator_pressed(Operator.DIVIDE),
            "=": session.equals_pressed,
            "%": session.percent_pressed,
            "T": session.time_pressed,
            "C": session.clear_pressed,
        }
        result = None
        for key in keys:
            if key == " ":
                continue
            if key.isdigit():
                result = session.number_pressed(int(key))
            else:
                result = actions[key]()
        return result
    return _press
