"""OpenWeatherMap API client: weather, forecast, alerts and geocoding.

No retries: a failed call surfaces as ProviderError and the user
re-triggers the fetch.
"""

import logging
from typing import Any

import httpx

from weatherdash.ingest.errors import ProviderError
from weatherdash.ingest.payloads import (
    decode_alerts,
    decode_current_weather,
    decode_forecast,
    decode_geocoding,
)
from weatherdash.models.location import GeocodingResult
from weatherdash.models.weather import CurrentConditions, RawAlert, RawSample

logger = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
ONECALL_URL = "https://api.openweathermap.org/data/3.0/onecall"
GEOCODING_URL = "https://api.openweathermap.org/geo/1.0"
DEFAULT_USER_AGENT = "weatherdash/0.1.0"


class OpenWeatherClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_BASE_URL,
        onecall_url: str = ONECALL_URL,
        geo_url: str = GEOCODING_URL,
        timeout: float = 30.0,
        units: str = "metric",
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.onecall_url = onecall_url
        self.geo_url = geo_url
        self.timeout = timeout
        self.units = units

    async def _request(self, url: str, params: dict[str, Any]) -> Any:
        """GET a provider endpoint and return its JSON body.

        Non-2xx responses raise ProviderError carrying the provider's own
        message when the body has one.
        """
        query = {**params, "appid": self.api_key}
        headers = {"User-Agent": DEFAULT_USER_AGENT}
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url, params=query, headers=headers)
        except httpx.RequestError as e:
            logger.error("OpenWeather request to %s failed: %s", url, e)
            raise ProviderError(f"API request failed: {e}") from e

        if resp.is_error:
            message = _error_message(resp)
            logger.warning(
                "OpenWeather %s returned %d: %s", url, resp.status_code, message
            )
            raise ProviderError(message, status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError as e:
            raise ProviderError("API returned a non-JSON response") from e

    async def get_current_weather_by_name(self, name: str) -> CurrentConditions:
        data = await self._request(
            f"{self.base_url}/weather", {"q": name, "units": self.units}
        )
        return decode_current_weather(data)

    async def get_current_weather_by_coords(
        self, lat: float, lon: float
    ) -> CurrentConditions:
        data = await self._request(
            f"{self.base_url}/weather", {"lat": lat, "lon": lon, "units": self.units}
        )
        return decode_current_weather(data)

    async def get_forecast_by_name(self, name: str) -> list[RawSample]:
        data = await self._request(
            f"{self.base_url}/forecast", {"q": name, "units": self.units}
        )
        return decode_forecast(data)

    async def get_forecast_by_coords(self, lat: float, lon: float) -> list[RawSample]:
        data = await self._request(
            f"{self.base_url}/forecast", {"lat": lat, "lon": lon, "units": self.units}
        )
        return decode_forecast(data)

    async def get_alerts_by_coords(self, lat: float, lon: float) -> list[RawAlert]:
        """Fetch active alerts from the One Call endpoint.

        A response without an 'alerts' key means no active alerts.
        """
        data = await self._request(
            self.onecall_url,
            {"lat": lat, "lon": lon, "exclude": "current,minutely,hourly,daily"},
        )
        return decode_alerts(data)

    async def geocode(self, query: str, limit: int = 5) -> list[GeocodingResult]:
        if not query.strip():
            return []
        data = await self._request(
            f"{self.geo_url}/direct", {"q": query, "limit": limit}
        )
        return decode_geocoding(data)

    async def reverse_geocode(
        self, lat: float, lon: float, limit: int = 1
    ) -> list[GeocodingResult]:
        data = await self._request(
            f"{self.geo_url}/reverse", {"lat": lat, "lon": lon, "limit": limit}
        )
        return decode_geocoding(data)


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"API request failed: {resp.status_code}"
