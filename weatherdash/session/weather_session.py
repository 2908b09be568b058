"""Weather session: one location view's fetch cycle and its state machine.

States: idle -> loading -> (ready | error), and ready|error -> loading on a
new query. Each fetch cycle runs the current-weather, forecast and alerts
calls concurrently and replaces the whole snapshot on success. Any failure
fails the cycle, alerts included, and keeps the previous snapshot as is.

Overlapping searches are guarded by a sequence number: only the latest
issued cycle may apply its outcome, so a slow earlier response can never
overwrite a newer one.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from enum import StrEnum

from weatherdash.alerts.classifier import build_alert_entries
from weatherdash.forecast.aggregator import (
    DEFAULT_FORECAST_DAYS,
    DEFAULT_HOURLY_LIMIT,
    HourlyByDay,
    aggregate_forecast,
)
from weatherdash.forecast.query import (
    CoordinateQuery,
    classify_query,
    coordinate_query_text,
)
from weatherdash.ingest.errors import ProviderError
from weatherdash.ingest.provider import WeatherProvider
from weatherdash.models.common import utc_now
from weatherdash.models.weather import (
    AlertEntry,
    CurrentConditions,
    DailySummary,
    RawAlert,
)
from weatherdash.session.geolocation import (
    DEFAULT_GEOLOCATION_TIMEOUT,
    GeolocationError,
    Geolocator,
    locate,
)

logger = logging.getLogger(__name__)


class SessionStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class WeatherSnapshot:
    query: str
    current: CurrentConditions
    forecast: list[DailySummary] = field(default_factory=list)
    hourly: HourlyByDay = field(default_factory=dict)
    alerts: list[AlertEntry] = field(default_factory=list)
    fetched_at: datetime | None = None


async def _no_alerts() -> list[RawAlert]:
    return []


class WeatherSession:
    def __init__(
        self,
        provider: WeatherProvider,
        tz: tzinfo | None = None,
        forecast_days: int = DEFAULT_FORECAST_DAYS,
        hourly_limit: int = DEFAULT_HOURLY_LIMIT,
        geolocation_timeout: float = DEFAULT_GEOLOCATION_TIMEOUT,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.provider = provider
        self.tz = tz
        self.forecast_days = forecast_days
        self.hourly_limit = hourly_limit
        self.geolocation_timeout = geolocation_timeout
        self.clock = clock
        self.status = SessionStatus.IDLE
        self.error: str | None = None
        self.query: str | None = None
        self.snapshot: WeatherSnapshot | None = None
        self._seq = 0
        self._fetch_count = 0

    @property
    def loading(self) -> bool:
        return self.status == SessionStatus.LOADING

    @property
    def fetch_count(self) -> int:
        """Number of fetch cycles started over the session's lifetime."""
        return self._fetch_count

    async def search_location(self, query: str) -> SessionStatus:
        """Fetch weather for a query unless it is already loading or loaded.

        The transition to loading happens before the first suspension point,
        so a caller scheduling this coroutine sees it on the next loop turn.
        """
        if query == self.query and self.status in (
            SessionStatus.LOADING,
            SessionStatus.READY,
        ):
            logger.debug("Query %r unchanged (%s), not refetching", query, self.status)
            return self.status
        return await self._run_cycle(query)

    async def refresh(self) -> SessionStatus:
        """Manually re-run the current query."""
        if self.query is None:
            return self.status
        return await self._run_cycle(self.query)

    async def use_current_location(
        self,
        geolocator: Geolocator | None,
        timeout: float | None = None,
    ) -> SessionStatus:
        """Search by the device position.

        Geolocation failures go straight to error without any provider call.
        """
        self._seq += 1
        seq = self._seq
        self.query = None
        self.status = SessionStatus.LOADING
        self.error = None

        try:
            lat, lon = await locate(
                geolocator,
                timeout if timeout is not None else self.geolocation_timeout,
            )
        except GeolocationError as e:
            if seq == self._seq:
                logger.warning("Geolocation failed: %s", e.kind)
                self.status = SessionStatus.ERROR
                self.error = e.message
            return self.status

        if seq != self._seq:
            return self.status
        return await self._run_cycle(coordinate_query_text(lat, lon))

    async def _run_cycle(self, query: str) -> SessionStatus:
        self._seq += 1
        seq = self._seq
        self._fetch_count += 1
        self.query = query
        self.status = SessionStatus.LOADING
        self.error = None

        try:
            snapshot = await self._fetch(query)
        except ProviderError as e:
            if seq != self._seq:
                logger.info("Dropping failure of superseded query %r", query)
                return self.status
            logger.warning("Fetch cycle for %r failed: %s", query, e.message)
            self.status = SessionStatus.ERROR
            self.error = e.message
            return self.status
        except Exception as e:
            if seq != self._seq:
                return self.status
            logger.exception("Fetch cycle for %r failed unexpectedly", query)
            self.status = SessionStatus.ERROR
            self.error = f"Failed to load weather data: {e}"
            return self.status

        if seq != self._seq:
            logger.info("Dropping stale result for superseded query %r", query)
            return self.status

        self.snapshot = snapshot
        self.status = SessionStatus.READY
        logger.info(
            "Loaded %r: %d forecast days, %d alerts",
            query, len(snapshot.forecast), len(snapshot.alerts),
        )
        return self.status

    async def _fetch(self, query: str) -> WeatherSnapshot:
        route = classify_query(query)
        calls: tuple[Awaitable, Awaitable, Awaitable]
        if isinstance(route, CoordinateQuery):
            calls = (
                self.provider.get_current_weather_by_coords(route.lat, route.lon),
                self.provider.get_forecast_by_coords(route.lat, route.lon),
                self.provider.get_alerts_by_coords(route.lat, route.lon),
            )
        else:
            calls = (
                self.provider.get_current_weather_by_name(route.name),
                self.provider.get_forecast_by_name(route.name),
                _no_alerts(),
            )

        # Join only after every call settles; the first failure in call
        # order fails the cycle.
        results = await asyncio.gather(*calls, return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result
        current, samples, raw_alerts = results

        now = self.clock()
        forecast = aggregate_forecast(
            samples, now, self.tz, self.forecast_days, self.hourly_limit
        )
        return WeatherSnapshot(
            query=query,
            current=current,
            forecast=forecast.daily,
            hourly=forecast.hourly,
            alerts=build_alert_entries(raw_alerts, self.tz),
            fetched_at=now,
        )
