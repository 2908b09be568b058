"""Weather data models: provider samples and their aggregated forms."""

from dataclasses import dataclass
from enum import StrEnum


class AlertType(StrEnum):
    WARNING = "warning"
    WATCH = "watch"
    ADVISORY = "advisory"
    INFO = "info"


class AlertSeverity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EXTREME = "extreme"


@dataclass(frozen=True)
class RawSample:
    """One three-hour forecast tick as returned by the provider."""

    dt: int  # epoch seconds
    temp: float
    temp_min: float
    temp_max: float
    pressure: int
    humidity: int
    wind_speed: float
    clouds: int  # percent
    pop: float  # precipitation probability, 0-1
    weather_code: int
    description: str
    icon: str = ""


@dataclass(frozen=True)
class CurrentConditions:
    location: str
    country: str
    temperature: int
    feels_like: int
    description: str
    humidity: int
    wind_speed: float
    visibility_km: float
    pressure: int
    weather_code: str
    icon: str
    # Unrounded Celsius; None when only the rounded value is known.
    raw_temperature: float | None = None
    raw_feels_like: float | None = None


@dataclass(frozen=True)
class DailySummary:
    date: str  # YYYY-MM-DD
    day_name: str
    high: int
    low: int
    description: str
    weather_code: str
    icon: str
    raw_high: float | None = None
    raw_low: float | None = None


@dataclass(frozen=True)
class HourlyEntry:
    time: str
    temp: int
    description: str
    icon: str
    weather_code: str
    precipitation: int  # percent
    pressure: int
    wind_speed: float
    clouds: int
    humidity: int
    raw_temp: float | None = None


@dataclass(frozen=True)
class RawAlert:
    event: str
    description: str
    start: int
    end: int
    sender_name: str = ""


@dataclass(frozen=True)
class AlertEntry:
    id: str
    type: AlertType
    severity: AlertSeverity
    title: str
    description: str
    start_time: str
    end_time: str
