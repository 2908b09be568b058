"""Forecast aggregation: three-hour samples into daily and hourly views."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, tzinfo

from weatherdash.forecast.units import round_half_up
from weatherdash.models.common import day_key, hour_label, to_local
from weatherdash.models.weather import DailySummary, HourlyEntry, RawSample

logger = logging.getLogger(__name__)

DEFAULT_FORECAST_DAYS = 5
# The provider's 5 day / 3 hour feed holds 40 samples.
DEFAULT_HOURLY_LIMIT = 40

HourlyByDay = dict[str, list[HourlyEntry]]


@dataclass(frozen=True)
class ForecastResult:
    daily: list[DailySummary] = field(default_factory=list)
    hourly: HourlyByDay = field(default_factory=dict)


@dataclass
class _DayAccumulator:
    """Running high/low for one day, kept in raw units until output."""

    date: str
    day_name: str
    high: float
    low: float
    description: str
    weather_code: str
    icon: str

    def widen(self, sample: RawSample) -> None:
        self.high = max(self.high, sample.temp_max)
        self.low = min(self.low, sample.temp_min)

    def summary(self) -> DailySummary:
        return DailySummary(
            date=self.date,
            day_name=self.day_name,
            high=round_half_up(self.high),
            low=round_half_up(self.low),
            description=self.description,
            weather_code=self.weather_code,
            icon=self.icon,
            raw_high=self.high,
            raw_low=self.low,
        )


def build_daily_summaries(
    samples: Sequence[RawSample],
    tz: tzinfo | None = None,
    days: int = DEFAULT_FORECAST_DAYS,
) -> list[DailySummary]:
    """Collapse samples into one summary per calendar day.

    The first day-key (today) is dropped and the next `days` keys are
    returned in chronological order. Samples are expected in ascending
    timestamp order; they are not re-sorted.
    """
    by_day: dict[str, _DayAccumulator] = {}

    for sample in samples:
        moment = to_local(sample.dt, tz)
        key = day_key(moment)
        acc = by_day.get(key)
        if acc is None:
            by_day[key] = _DayAccumulator(
                date=key,
                day_name=moment.strftime("%A"),
                high=sample.temp_max,
                low=sample.temp_min,
                description=sample.description,
                weather_code=str(sample.weather_code),
                icon=sample.icon,
            )
        else:
            acc.widen(sample)

    accumulators = list(by_day.values())
    return [acc.summary() for acc in accumulators[1 : days + 1]]


def build_hourly_buckets(
    samples: Sequence[RawSample],
    now: datetime,
    tz: tzinfo | None = None,
    limit: int = DEFAULT_HOURLY_LIMIT,
) -> HourlyByDay:
    """Group samples by day for the hourly view.

    Today's samples earlier than `now` are dropped; future days keep all
    their samples.
    """
    today = day_key(now.astimezone(tz))
    now_ts = now.timestamp()
    buckets: HourlyByDay = {}

    for sample in samples[:limit]:
        moment = to_local(sample.dt, tz)
        key = day_key(moment)
        if key == today and sample.dt < now_ts:
            continue

        buckets.setdefault(key, []).append(
            HourlyEntry(
                time=hour_label(moment),
                temp=round_half_up(sample.temp),
                description=sample.description,
                icon=sample.icon,
                weather_code=str(sample.weather_code),
                precipitation=round_half_up(sample.pop * 100),
                pressure=sample.pressure,
                wind_speed=sample.wind_speed,
                clouds=sample.clouds,
                humidity=sample.humidity,
                raw_temp=sample.temp,
            )
        )

    return buckets


def aggregate_forecast(
    samples: Sequence[RawSample],
    now: datetime,
    tz: tzinfo | None = None,
    days: int = DEFAULT_FORECAST_DAYS,
    hourly_limit: int = DEFAULT_HOURLY_LIMIT,
) -> ForecastResult:
    """Build the daily list and hourly map from one forecast feed.

    An empty feed is a valid "no data" result, not an error.
    """
    if not samples:
        return ForecastResult()

    result = ForecastResult(
        daily=build_daily_summaries(samples, tz, days),
        hourly=build_hourly_buckets(samples, now, tz, hourly_limit),
    )
    logger.debug(
        "Aggregated %d samples into %d days, %d hourly buckets",
        len(samples), len(result.daily), len(result.hourly),
    )
    return result
