"""Tests for display unit conversion."""

import pytest

from weatherdash.forecast.units import (
    PressureUnit,
    TemperatureUnit,
    WindSpeedUnit,
    convert_pressure,
    convert_temperature,
    convert_wind_speed,
    round_half_up,
)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, expected",
        [(2.5, 3), (3.5, 4), (2.4, 2), (-2.5, -2), (-2.6, -3), (0.0, 0)],
    )
    def test_values(self, value: float, expected: int):
        assert round_half_up(value) == expected


class TestConvertTemperature:
    def test_celsius_passthrough(self):
        assert convert_temperature(21.6, TemperatureUnit.CELSIUS) == 22

    def test_fahrenheit(self):
        assert convert_temperature(0, TemperatureUnit.FAHRENHEIT) == 32
        assert convert_temperature(100, TemperatureUnit.FAHRENHEIT) == 212
        assert convert_temperature(22, TemperatureUnit.FAHRENHEIT) == 72

    def test_fahrenheit_negative(self):
        assert convert_temperature(-40, TemperatureUnit.FAHRENHEIT) == -40


class TestConvertWindAndPressure:
    def test_wind_kmh(self):
        assert convert_wind_speed(10.0, WindSpeedUnit.KILOMETERS_PER_HOUR) == 36.0

    def test_wind_mph(self):
        assert convert_wind_speed(10.0, WindSpeedUnit.MILES_PER_HOUR) == 22.4

    def test_pressure_hpa(self):
        assert convert_pressure(1013, PressureUnit.HECTOPASCAL) == 1013.0

    def test_pressure_inhg(self):
        assert convert_pressure(1013, PressureUnit.INCHES_OF_MERCURY) == 29.91
