"""Pydantic v2 configuration schema with strict validation."""

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import BaseModel, Field, field_validator

from weatherdash.forecast.units import PressureUnit, TemperatureUnit, WindSpeedUnit
from weatherdash.ingest.openweather_client import (
    GEOCODING_URL,
    ONECALL_URL,
    OPENWEATHER_BASE_URL,
)


class ProviderConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api_key: str = ""
    base_url: str = OPENWEATHER_BASE_URL
    onecall_url: str = ONECALL_URL
    geo_url: str = GEOCODING_URL
    timeout_seconds: float = Field(default=30.0, gt=0.0)


class ForecastConfig(BaseModel):
    model_config = {"extra": "forbid"}

    days: int = Field(default=5, ge=1, le=5)
    hourly_limit: int = Field(default=40, ge=1, le=40)


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    temperature_unit: TemperatureUnit = TemperatureUnit.CELSIUS
    wind_speed_unit: WindSpeedUnit = WindSpeedUnit.METERS_PER_SECOND
    pressure_unit: PressureUnit = PressureUnit.HECTOPASCAL
    timezone: str | None = None  # IANA name; None uses the machine's zone

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, v: str | None) -> str | None:
        if v is None:
            return v
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown time zone: {v}") from e
        return v


class GeolocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    timeout_seconds: float = Field(default=10.0, gt=0.0)


class LocationConfig(BaseModel):
    model_config = {"extra": "forbid"}

    id: str
    name: str
    country: str
    description: str = ""
    image: str = ""
    lat: float = Field(ge=-90.0, le=90.0)
    lon: float = Field(ge=-180.0, le=180.0)
    featured: bool = False


class DashboardConfig(BaseModel):
    model_config = {"extra": "forbid"}

    provider: ProviderConfig = ProviderConfig()
    forecast: ForecastConfig = ForecastConfig()
    display: DisplayConfig = DisplayConfig()
    geolocation: GeolocationConfig = GeolocationConfig()
    locations: list[LocationConfig] = []
