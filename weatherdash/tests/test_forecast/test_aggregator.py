"""Tests for forecast aggregation into daily summaries and hourly buckets."""

from datetime import UTC, datetime, timedelta, timezone

from weatherdash.forecast.aggregator import (
    aggregate_forecast,
    build_daily_summaries,
    build_hourly_buckets,
)

THREE_HOURS = timedelta(hours=3)


class TestAggregateForecast:
    def test_empty_feed(self, now: datetime):
        result = aggregate_forecast([], now, UTC)
        assert result.daily == []
        assert result.hourly == {}

    def test_five_day_feed(self, five_day_feed, now: datetime):
        result = aggregate_forecast(five_day_feed, now, UTC)
        assert [d.date for d in result.daily] == [
            "2026-02-11",
            "2026-02-12",
            "2026-02-13",
            "2026-02-14",
            "2026-02-15",
        ]
        assert list(result.hourly) == [
            "2026-02-10",
            "2026-02-11",
            "2026-02-12",
            "2026-02-13",
            "2026-02-14",
            "2026-02-15",
        ]

    def test_rerun_is_idempotent(self, five_day_feed, now: datetime):
        first = aggregate_forecast(five_day_feed, now, UTC)
        second = aggregate_forecast(five_day_feed, now, UTC)
        assert first == second


class TestDailySummaries:
    def test_today_dropped(self, five_day_feed):
        daily = build_daily_summaries(five_day_feed, UTC)
        # six distinct days in the feed, today excluded
        assert len(daily) == 5
        assert all(d.date != "2026-02-10" for d in daily)

    def test_only_today_gives_no_days(self, make_sample, now: datetime):
        samples = [make_sample(now + THREE_HOURS * i) for i in range(3)]
        assert build_daily_summaries(samples, UTC) == []

    def test_high_low_widened(self, five_day_feed):
        daily = build_daily_summaries(five_day_feed, UTC)
        wednesday = daily[0]
        assert wednesday.date == "2026-02-11"
        assert wednesday.day_name == "Wednesday"
        assert wednesday.high == 15
        assert wednesday.low == 5

    def test_high_never_below_low(self, five_day_feed):
        for day in build_daily_summaries(five_day_feed, UTC):
            assert day.high >= day.low

    def test_first_description_wins(self, make_sample):
        day0 = datetime(2026, 2, 10, 21, 0, tzinfo=UTC)
        day1 = datetime(2026, 2, 11, 0, 0, tzinfo=UTC)
        samples = [
            make_sample(day0),
            make_sample(day1, description="light rain", weather_code=500),
            make_sample(day1 + THREE_HOURS, description="overcast clouds", weather_code=804),
            make_sample(day1 + THREE_HOURS * 2, description="snow", weather_code=601),
        ]
        daily = build_daily_summaries(samples, UTC)
        assert len(daily) == 1
        assert daily[0].description == "light rain"
        assert daily[0].weather_code == "500"

    def test_rounding_only_at_output(self, make_sample):
        day0 = datetime(2026, 2, 10, 21, 0, tzinfo=UTC)
        day1 = datetime(2026, 2, 11, 0, 0, tzinfo=UTC)
        samples = [
            make_sample(day0),
            make_sample(day1, temp_min=-2.5, temp_max=2.4),
            make_sample(day1 + THREE_HOURS, temp_min=-2.2, temp_max=2.5),
        ]
        day = build_daily_summaries(samples, UTC)[0]
        # half-up: 2.5 -> 3, -2.5 -> -2
        assert day.high == 3
        assert day.low == -2
        assert day.raw_high == 2.5
        assert day.raw_low == -2.5

    def test_days_limit(self, make_sample):
        start = datetime(2026, 2, 10, 0, 0, tzinfo=UTC)
        samples = [make_sample(start + timedelta(days=i)) for i in range(8)]
        daily = build_daily_summaries(samples, UTC, days=5)
        assert [d.date for d in daily] == [
            "2026-02-11",
            "2026-02-12",
            "2026-02-13",
            "2026-02-14",
            "2026-02-15",
        ]

    def test_day_key_follows_time_zone(self, make_sample):
        # 23:00 UTC on the 10th is already the 11th in Tokyo
        tokyo = timezone(timedelta(hours=9))
        samples = [
            make_sample(datetime(2026, 2, 10, 12, 0, tzinfo=UTC)),
            make_sample(datetime(2026, 2, 10, 23, 0, tzinfo=UTC)),
        ]
        assert [d.date for d in build_daily_summaries(samples, UTC)] == []
        assert [d.date for d in build_daily_summaries(samples, tokyo)] == ["2026-02-11"]


class TestHourlyBuckets:
    def test_past_hours_of_today_dropped(self, five_day_feed, now: datetime):
        hourly = build_hourly_buckets(five_day_feed, now, UTC)
        assert [h.time for h in hourly["2026-02-10"]] == ["12 PM", "3 PM", "6 PM", "9 PM"]

    def test_future_days_keep_all_samples(self, five_day_feed, now: datetime):
        hourly = build_hourly_buckets(five_day_feed, now, UTC)
        for date in ("2026-02-11", "2026-02-12", "2026-02-13", "2026-02-14"):
            assert len(hourly[date]) == 8
        assert hourly["2026-02-11"][0].time == "12 AM"
        assert len(hourly["2026-02-15"]) == 1

    def test_today_fully_past_has_no_bucket(self, make_sample):
        now = datetime(2026, 2, 10, 23, 30, tzinfo=UTC)
        samples = [
            make_sample(datetime(2026, 2, 10, 21, 0, tzinfo=UTC)),
            make_sample(datetime(2026, 2, 11, 0, 0, tzinfo=UTC)),
        ]
        hourly = build_hourly_buckets(samples, now, UTC)
        assert list(hourly) == ["2026-02-11"]

    def test_entry_fields(self, make_sample, now: datetime):
        sample = make_sample(
            datetime(2026, 2, 11, 15, 0, tzinfo=UTC),
            temp=7.5,
            pop=0.125,
            description="light rain",
            weather_code=500,
        )
        entry = build_hourly_buckets([sample], now, UTC)["2026-02-11"][0]
        assert entry.time == "3 PM"
        assert entry.temp == 8
        assert entry.raw_temp == 7.5
        assert entry.precipitation == 13
        assert entry.description == "light rain"
        assert entry.weather_code == "500"
        assert entry.pressure == 1012
        assert entry.humidity == 70
        assert entry.clouds == 20
        assert entry.wind_speed == 4.2

    def test_limit_applies_to_samples(self, make_sample, now: datetime):
        start = datetime(2026, 2, 11, 0, 0, tzinfo=UTC)
        samples = [make_sample(start + THREE_HOURS * i) for i in range(48)]
        hourly = build_hourly_buckets(samples, now, UTC, limit=40)
        assert sum(len(v) for v in hourly.values()) == 40

    def test_ascending_order(self, five_day_feed, now: datetime):
        hourly = build_hourly_buckets(five_day_feed, now, UTC)
        assert list(hourly) == sorted(hourly)
