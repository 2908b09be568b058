"""Application context: explicitly owned config, location store and provider.

Opened once at application start and passed to whatever needs it, so no
module holds location state of its own.
"""

import logging
import sqlite3
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo

from weatherdash.config.schema import DashboardConfig, LocationConfig
from weatherdash.ingest.openweather_client import OpenWeatherClient
from weatherdash.models.common import utc_now_iso
from weatherdash.models.location import Location
from weatherdash.session.weather_session import WeatherSession
from weatherdash.storage.database import connect, run_migrations
from weatherdash.storage.location_repo import LocationRepository

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    config: DashboardConfig
    conn: sqlite3.Connection
    locations: LocationRepository
    provider: OpenWeatherClient

    @property
    def tz(self) -> tzinfo | None:
        name = self.config.display.timezone
        return ZoneInfo(name) if name else None

    def new_session(self) -> WeatherSession:
        return WeatherSession(
            self.provider,
            tz=self.tz,
            forecast_days=self.config.forecast.days,
            hourly_limit=self.config.forecast.hourly_limit,
            geolocation_timeout=self.config.geolocation.timeout_seconds,
        )

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "AppContext":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def open_context(config: DashboardConfig, db_path: str | Path) -> AppContext:
    """Connect the store, migrate, seed built-in locations and build the provider."""
    conn = connect(db_path)
    run_migrations(conn)
    repo = LocationRepository(conn)
    repo.seed(seed_location(c) for c in config.locations)

    if not config.provider.api_key:
        logger.warning("No OpenWeatherMap API key configured; provider calls will fail")

    provider = OpenWeatherClient(
        api_key=config.provider.api_key,
        base_url=config.provider.base_url,
        onecall_url=config.provider.onecall_url,
        geo_url=config.provider.geo_url,
        timeout=config.provider.timeout_seconds,
    )
    return AppContext(config=config, conn=conn, locations=repo, provider=provider)


def seed_location(c: LocationConfig) -> Location:
    return Location(
        id=c.id,
        name=c.name,
        country=c.country,
        description=c.description,
        image=c.image,
        lat=c.lat,
        lon=c.lon,
        featured=c.featured,
        is_custom=False,
        created_at=utc_now_iso(),
    )
