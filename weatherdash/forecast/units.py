"""Unit conversion for display preferences.

Provider values arrive in metric units (Celsius, m/s, hPa).
"""

import math
from enum import StrEnum


class TemperatureUnit(StrEnum):
    CELSIUS = "C"
    FAHRENHEIT = "F"


class WindSpeedUnit(StrEnum):
    METERS_PER_SECOND = "ms"
    KILOMETERS_PER_HOUR = "kmh"
    MILES_PER_HOUR = "mph"


class PressureUnit(StrEnum):
    HECTOPASCAL = "hPa"
    INCHES_OF_MERCURY = "inHg"
    MILLIMETERS_OF_MERCURY = "mmHg"


_WIND_FACTORS = {
    WindSpeedUnit.METERS_PER_SECOND: 1.0,
    WindSpeedUnit.KILOMETERS_PER_HOUR: 3.6,
    WindSpeedUnit.MILES_PER_HOUR: 2.236936,
}

_PRESSURE_FACTORS = {
    PressureUnit.HECTOPASCAL: 1.0,
    PressureUnit.INCHES_OF_MERCURY: 0.02953,
    PressureUnit.MILLIMETERS_OF_MERCURY: 0.750062,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from negative infinity.

    Python's round() uses banker's rounding, which would turn 2.5 into 2.
    """
    return math.floor(value + 0.5)


def celsius_to_fahrenheit(temp_c: float) -> float:
    return temp_c * 9 / 5 + 32


def convert_temperature(temp_c: float, unit: TemperatureUnit) -> int:
    """Convert a Celsius reading for display, rounded to a whole degree."""
    if unit == TemperatureUnit.FAHRENHEIT:
        return round_half_up(celsius_to_fahrenheit(temp_c))
    return round_half_up(temp_c)


def convert_wind_speed(speed_ms: float, unit: WindSpeedUnit) -> float:
    return round(speed_ms * _WIND_FACTORS[unit], 1)


def convert_pressure(pressure_hpa: float, unit: PressureUnit) -> float:
    if unit == PressureUnit.HECTOPASCAL:
        return float(round_half_up(pressure_hpa))
    return round(pressure_hpa * _PRESSURE_FACTORS[unit], 2)
