"""Shared test fixtures."""

import asyncio
import sqlite3
from dataclasses import replace
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
import yaml

from weatherdash.config.defaults import DEFAULT_LOCATIONS
from weatherdash.config.schema import DashboardConfig
from weatherdash.ingest.errors import ProviderError
from weatherdash.models.weather import CurrentConditions, RawAlert, RawSample
from weatherdash.storage.database import connect, run_migrations

THREE_HOURS = timedelta(hours=3)

CURRENT = CurrentConditions(
    location="Tokyo",
    country="JP",
    temperature=22,
    feels_like=24,
    description="clear sky",
    humidity=65,
    wind_speed=3.5,
    visibility_km=10.0,
    pressure=1013,
    weather_code="800",
    icon="01d",
)


def _sample(
    moment: datetime,
    temp_min: float = 10.0,
    temp_max: float = 15.0,
    temp: float | None = None,
    description: str = "clear sky",
    weather_code: int = 800,
    pop: float = 0.0,
) -> RawSample:
    return RawSample(
        dt=int(moment.timestamp()),
        temp=temp if temp is not None else (temp_min + temp_max) / 2,
        temp_min=temp_min,
        temp_max=temp_max,
        pressure=1012,
        humidity=70,
        wind_speed=4.2,
        clouds=20,
        pop=pop,
        weather_code=weather_code,
        description=description,
        icon="01d",
    )


class FakeProvider:
    """In-memory provider recording calls.

    `fail` maps a call kind ("current", "forecast", "alerts") to the error it
    raises; `gates` maps a query name to an event the call waits on.
    """

    def __init__(
        self,
        samples: list[RawSample] | None = None,
        alerts: list[RawAlert] | None = None,
    ):
        self.samples = samples or []
        self.alerts = alerts or []
        self.calls: list[tuple] = []
        self.fail: dict[str, ProviderError] = {}
        self.gates: dict[str, asyncio.Event] = {}

    async def _respond(self, kind: str, key: str, call: tuple, value):
        self.calls.append(call)
        gate = self.gates.get(key)
        if gate is not None:
            await gate.wait()
        if kind in self.fail:
            raise self.fail[kind]
        return value

    async def get_current_weather_by_name(self, name: str) -> CurrentConditions:
        return await self._respond(
            "current", name, ("current_by_name", name), replace(CURRENT, location=name)
        )

    async def get_current_weather_by_coords(self, lat: float, lon: float) -> CurrentConditions:
        return await self._respond(
            "current", f"{lat},{lon}", ("current_by_coords", lat, lon), CURRENT
        )

    async def get_forecast_by_name(self, name: str) -> list[RawSample]:
        return await self._respond(
            "forecast", name, ("forecast_by_name", name), list(self.samples)
        )

    async def get_forecast_by_coords(self, lat: float, lon: float) -> list[RawSample]:
        return await self._respond(
            "forecast", f"{lat},{lon}", ("forecast_by_coords", lat, lon), list(self.samples)
        )

    async def get_alerts_by_coords(self, lat: float, lon: float) -> list[RawAlert]:
        return await self._respond(
            "alerts", f"{lat},{lon}", ("alerts_by_coords", lat, lon), list(self.alerts)
        )


@pytest.fixture
def now() -> datetime:
    """Noon UTC on Tuesday 2026-02-10."""
    return datetime(2026, 2, 10, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def make_sample():
    return _sample


@pytest.fixture
def five_day_feed() -> list[RawSample]:
    """40 three-hour samples from 2026-02-10 03:00 UTC (six calendar days)."""
    start = datetime(2026, 2, 10, 3, 0, 0, tzinfo=UTC)
    return [
        _sample(start + THREE_HOURS * i, temp_min=5.0 + i % 8, temp_max=8.0 + i % 8)
        for i in range(40)
    ]


@pytest.fixture
def fake_provider(five_day_feed: list[RawSample]) -> FakeProvider:
    return FakeProvider(samples=five_day_feed)


@pytest.fixture
def db(tmp_path: Path) -> sqlite3.Connection:
    conn = connect(tmp_path / "test.db")
    run_migrations(conn)
    return conn


@pytest.fixture
def default_config() -> DashboardConfig:
    return DashboardConfig(locations=DEFAULT_LOCATIONS)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "display": {"temperature_unit": "C"},
        "forecast": {"days": 5},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
