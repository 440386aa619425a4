"""Tests for RSI settings parsing."""

import math

import pytest
from pydantic import ValidationError

from app.schemas.indicators import RsiSettings, parse_rsi_settings


class TestParseRsiSettings:
    """Tests for parse_rsi_settings."""

    def test_defaults(self):
        settings = parse_rsi_settings()

        assert settings.period == 14
        assert settings.smoothing == 14
        assert settings.overbought == 70
        assert settings.oversold == 30

    def test_valid_values_kept(self):
        settings = parse_rsi_settings(period=21, overbought=80, oversold=20, smoothing=7)
        assert settings == RsiSettings(period=21, overbought=80, oversold=20, smoothing=7)

    def test_query_strings_accepted(self):
        settings = parse_rsi_settings(period="9", overbought="75.5", oversold=" 25 ", smoothing="3")

        assert settings.period == 9
        assert settings.overbought == 75.5
        assert settings.oversold == 25.0
        assert settings.smoothing == 3

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 14),
            ("", 14),
            ("abc", 14),
            (math.nan, 14),
            (math.inf, 14),
            (-5, 14),
            (0, 14),
            (1, 14),
            (1.9, 14),
            (2, 2),
            (2.7, 2),
            (50, 50),
            (75, 50),
            (10**400, 14),
        ],
    )
    def test_period(self, raw, expected):
        assert parse_rsi_settings(period=raw).period == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [(None, 14), (0, 14), (0.5, 14), (1, 1), (1.5, 1), (49.9, 49), (60, 50), ("x", 14)],
    )
    def test_smoothing(self, raw, expected):
        assert parse_rsi_settings(smoothing=raw).smoothing == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [(None, 70), (0, 70), (100, 70), (-3, 70), (150, 70), (math.nan, 70), (85.5, 85.5), ("80", 80)],
    )
    def test_overbought(self, raw, expected):
        assert parse_rsi_settings(overbought=raw).overbought == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [(None, 30), (0, 30), (100, 30), (math.inf, 30), (12.5, 12.5), ("15", 15)],
    )
    def test_oversold(self, raw, expected):
        assert parse_rsi_settings(oversold=raw).oversold == expected

    def test_booleans_fall_back(self):
        settings = parse_rsi_settings(period=True, smoothing=True)
        assert settings.period == 14
        assert settings.smoothing == 14

    def test_fields_fall_back_independently(self):
        settings = parse_rsi_settings(period="bad", overbought=65, oversold=-1, smoothing=5)

        assert settings.period == 14
        assert settings.overbought == 65
        assert settings.oversold == 30
        assert settings.smoothing == 5

    @pytest.mark.parametrize(
        "raw",
        [
            {},
            {"period": 2.7, "smoothing": 60, "overbought": 99.9, "oversold": 0.1},
            {"period": "abc", "smoothing": None, "overbought": math.nan, "oversold": 45},
            {"period": 1e9, "smoothing": -1, "overbought": "70", "oversold": "30"},
        ],
    )
    def test_idempotent(self, raw):
        once = parse_rsi_settings(**raw)
        twice = parse_rsi_settings(**once.model_dump())
        assert twice == once

    def test_settings_are_frozen(self):
        settings = parse_rsi_settings()
        with pytest.raises(ValidationError):
            settings.period = 5
