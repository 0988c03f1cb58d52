"""
Unit Tests for CalcConfig

Locale settings are validated once, when the config is built.
"""

import dataclasses

import pytest

import config as settings
from config import CalcConfig, get_default_config


class TestCalcConfig:
    """Tests for the CalcConfig dataclass."""

    # ─────────────────────────────────────────────────────────────────────────
    # Constructor Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_init_when_defaults_then_us_locale(self):
        """The default config is the US layout on a 12-hour clock."""
        cfg = CalcConfig()
        assert cfg.time_separator == ":"
        assert cfg.date_separator == "/"
        assert cfg.decimal_separator == "."
        assert cfg.date_field_order == ("M", "D", "Y")
        assert cfg.uses_24_hour_clock is False
        assert cfg.max_hours == settings.MAX_HOURS

    def test_init_when_separators_collide_then_raises_error(self):
        with pytest.raises(ValueError, match="must differ"):
            CalcConfig(time_separator="/")

    def test_init_when_separator_is_digit_then_raises_error(self):
        with pytest.raises(ValueError, match="single non-digit"):
            CalcConfig(decimal_separator="0")

    def test_init_when_separator_too_long_then_raises_error(self):
        with pytest.raises(ValueError, match="single non-digit"):
            CalcConfig(date_separator="//")

    def test_init_when_field_order_not_permutation_then_raises_error(self):
        with pytest.raises(ValueError, match="permutation"):
            CalcConfig(date_field_order=("M", "M", "Y"))

    @pytest.mark.parametrize("first_weekday", [0, 8])
    def test_init_when_first_weekday_out_of_range_then_raises_error(self, first_weekday):
        with pytest.raises(ValueError, match="first_weekday"):
            CalcConfig(first_weekday=first_weekday)

    def test_init_when_six_weekday_symbols_then_raises_error(self):
        with pytest.raises(ValueError, match="seven"):
            CalcConfig(weekday_symbols=("A", "B", "C", "D", "E", "F"))

    def test_init_when_zero_max_hours_then_raises_error(self):
        with pytest.raises(ValueError, match="positive"):
            CalcConfig(max_hours=0)

    def test_config_when_assigned_then_frozen(self):
        """Values keep a reference to their config, so it can't change under them."""
        cfg = CalcConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.time_separator = "."

    # ─────────────────────────────────────────────────────────────────────────
    # Preset Tests
    # ─────────────────────────────────────────────────────────────────────────

    def test_short_form_when_built_then_uses_dash_for_dates(self):
        cfg = CalcConfig.short_form()
        assert cfg.date_separator == "-"
        assert cfg.time_separator == ":"

    def test_short_form_when_overridden_then_keeps_override(self):
        cfg = CalcConfig.short_form(uses_24_hour_clock=True)
        assert cfg.uses_24_hour_clock is True
        assert cfg.date_separator == "-"

    def test_date_field_width_when_year_then_four(self, dmy_config):
        assert dmy_config.date_field_width(0) == 2
        assert dmy_config.date_field_width(1) == 2
        assert dmy_config.date_field_width(2) == 4

    def test_get_default_config_when_called_then_equal_to_plain_config(self):
        assert get_default_config() == CalcConfig()
