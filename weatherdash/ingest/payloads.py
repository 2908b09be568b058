"""Schemas for OpenWeatherMap response payloads and their decoders.

Each decoder validates the raw JSON and converts it into domain models.
A shape mismatch raises ProviderError instead of leaking KeyErrors.
"""

from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from weatherdash.forecast.units import round_half_up
from weatherdash.ingest.errors import ProviderError
from weatherdash.models.location import GeocodingResult
from weatherdash.models.weather import CurrentConditions, RawAlert, RawSample

DEFAULT_VISIBILITY_KM = 10.0
# 9999-12-31T00:00:00Z; later stamps overflow datetime in eastern zones.
MAX_EPOCH_SECONDS = 253402214400

EpochSeconds = Annotated[int, Field(ge=0, le=MAX_EPOCH_SECONDS)]

T = TypeVar("T")


class ConditionPayload(BaseModel):
    id: int
    main: str = ""
    description: str
    icon: str = ""


class MainPayload(BaseModel):
    temp: float
    feels_like: float | None = None
    temp_min: float | None = None
    temp_max: float | None = None
    pressure: int
    humidity: int


class WindPayload(BaseModel):
    speed: float = 0.0


class CloudsPayload(BaseModel):
    all: int = 0


class SysPayload(BaseModel):
    country: str = ""


class CurrentWeatherPayload(BaseModel):
    name: str
    main: MainPayload
    weather: list[ConditionPayload] = Field(min_length=1)
    wind: WindPayload = WindPayload()
    visibility: int | None = None
    sys: SysPayload = SysPayload()


class ForecastItemPayload(BaseModel):
    dt: EpochSeconds
    main: MainPayload
    weather: list[ConditionPayload] = Field(min_length=1)
    wind: WindPayload = WindPayload()
    clouds: CloudsPayload = CloudsPayload()
    pop: float | None = None


class ForecastPayload(BaseModel):
    items: list[ForecastItemPayload] = Field(default=[], alias="list")


class AlertPayload(BaseModel):
    event: str
    start: EpochSeconds
    end: EpochSeconds
    description: str = ""
    sender_name: str = ""


class OneCallAlertsPayload(BaseModel):
    alerts: list[AlertPayload] | None = None


class GeocodingPayload(BaseModel):
    name: str
    lat: float
    lon: float
    country: str = ""
    state: str | None = None


_current_adapter = TypeAdapter(CurrentWeatherPayload)
_forecast_adapter = TypeAdapter(ForecastPayload)
_alerts_adapter = TypeAdapter(OneCallAlertsPayload)
_geocoding_adapter = TypeAdapter(list[GeocodingPayload])


def _validate(adapter: TypeAdapter[T], data: Any, kind: str) -> T:
    try:
        return adapter.validate_python(data)
    except ValidationError as e:
        raise ProviderError(
            f"Malformed {kind} response: {e.error_count()} invalid field(s)"
        ) from e


def decode_current_weather(data: Any) -> CurrentConditions:
    p = _validate(_current_adapter, data, "current weather")
    condition = p.weather[0]
    feels_like = p.main.feels_like if p.main.feels_like is not None else p.main.temp
    return CurrentConditions(
        location=p.name,
        country=p.sys.country,
        temperature=round_half_up(p.main.temp),
        feels_like=round_half_up(feels_like),
        description=condition.description,
        humidity=p.main.humidity,
        wind_speed=p.wind.speed,
        visibility_km=p.visibility / 1000 if p.visibility else DEFAULT_VISIBILITY_KM,
        pressure=p.main.pressure,
        weather_code=str(condition.id),
        icon=condition.icon,
        raw_temperature=p.main.temp,
        raw_feels_like=feels_like,
    )


def decode_forecast(data: Any) -> list[RawSample]:
    p = _validate(_forecast_adapter, data, "forecast")
    samples = []
    for item in p.items:
        condition = item.weather[0]
        main = item.main
        samples.append(
            RawSample(
                dt=item.dt,
                temp=main.temp,
                temp_min=main.temp_min if main.temp_min is not None else main.temp,
                temp_max=main.temp_max if main.temp_max is not None else main.temp,
                pressure=main.pressure,
                humidity=main.humidity,
                wind_speed=item.wind.speed,
                clouds=item.clouds.all,
                pop=item.pop or 0.0,
                weather_code=condition.id,
                description=condition.description,
                icon=condition.icon,
            )
        )
    return samples


def decode_alerts(data: Any) -> list[RawAlert]:
    p = _validate(_alerts_adapter, data, "alerts")
    return [
        RawAlert(
            event=a.event,
            description=a.description,
            start=a.start,
            end=a.end,
            sender_name=a.sender_name,
        )
        for a in p.alerts or []
    ]


def decode_geocoding(data: Any) -> list[GeocodingResult]:
    results = _validate(_geocoding_adapter, data, "geocoding")
    return [
        GeocodingResult(
            name=r.name, country=r.country, lat=r.lat, lon=r.lon, state=r.state
        )
        for r in results
    ]
