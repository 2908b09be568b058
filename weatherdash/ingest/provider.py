"""Provider contract consumed by the weather session."""

from typing import Protocol

from weatherdash.models.weather import CurrentConditions, RawAlert, RawSample


class WeatherProvider(Protocol):
    async def get_current_weather_by_name(self, name: str) -> CurrentConditions: ...

    async def get_current_weather_by_coords(
        self, lat: float, lon: float
    ) -> CurrentConditions: ...

    async def get_forecast_by_name(self, name: str) -> list[RawSample]: ...

    async def get_forecast_by_coords(self, lat: float, lon: float) -> list[RawSample]: ...

    async def get_alerts_by_coords(self, lat: float, lon: float) -> list[RawAlert]: ...
