"""Plain-text formatters for weather snapshots and location lists."""

from weatherdash.config.schema import DisplayConfig
from weatherdash.forecast.units import (
    convert_pressure,
    convert_temperature,
    convert_wind_speed,
)
from weatherdash.models.location import GeocodingResult, Location
from weatherdash.session.weather_session import WeatherSnapshot

_WIND_LABELS = {"ms": "m/s", "kmh": "km/h", "mph": "mph"}


def format_snapshot_text(s: WeatherSnapshot, display: DisplayConfig) -> str:
    """Current conditions, daily forecast, hourly table and alerts."""
    unit = display.temperature_unit
    wind_label = _WIND_LABELS[display.wind_speed_unit.value]

    def temp(raw: float | None, rounded: int) -> str:
        value = raw if raw is not None else rounded
        return f"{convert_temperature(value, unit)}°{unit}"

    c = s.current
    lines = [
        f"=== {c.location}, {c.country} ===",
        f"{temp(c.raw_temperature, c.temperature)} "
        f"(feels like {temp(c.raw_feels_like, c.feels_like)}) | {c.description}",
        f"Humidity: {c.humidity}% | "
        f"Wind: {convert_wind_speed(c.wind_speed, display.wind_speed_unit)} {wind_label} | "
        f"Pressure: {convert_pressure(c.pressure, display.pressure_unit)} "
        f"{display.pressure_unit} | Visibility: {c.visibility_km:.1f} km",
    ]

    lines.append("")
    lines.append("Forecast:")
    if not s.forecast:
        lines.append("  No forecast data")
    for day in s.forecast:
        lines.append(
            f"  {day.day_name:<9} {day.date}  "
            f"{temp(day.raw_high, day.high):>6} / "
            f"{temp(day.raw_low, day.low):<6} {day.description}"
        )

    lines.append("")
    lines.append("Hourly:")
    if not s.hourly:
        lines.append("  No hourly data")
    for date, entries in s.hourly.items():
        lines.append(f"  {date}")
        for h in entries:
            lines.append(
                f"    {h.time:>5}  {temp(h.raw_temp, h.temp):>6}  {h.precipitation:>3}% rain  "
                f"{h.description}"
            )

    lines.append("")
    if s.alerts:
        lines.append(f"Alerts ({len(s.alerts)}):")
        for a in s.alerts:
            lines.append(
                f"  [{a.severity.upper()}] {a.type}: {a.title} "
                f"({a.start_time} - {a.end_time})"
            )
    else:
        lines.append("Alerts: none")
    return "\n".join(lines)


def format_locations_text(locations: list[Location]) -> str:
    if not locations:
        return "No locations"
    lines = []
    for loc in locations:
        flags = []
        if loc.featured:
            flags.append("featured")
        if loc.is_custom:
            flags.append("custom")
        flag_str = f" [{', '.join(flags)}]" if flags else ""
        lines.append(
            f"{loc.id}: {loc.name}, {loc.country} "
            f"({loc.lat:.2f}°, {loc.lon:.2f}°){flag_str}"
        )
    return "\n".join(lines)


def format_geocoding_text(results: list[GeocodingResult]) -> str:
    if not results:
        return "No matches"
    lines = []
    for i, r in enumerate(results, start=1):
        region = f"{r.state}, " if r.state else ""
        lines.append(f"{i}. {r.name}, {region}{r.country} • {r.lat:.2f}, {r.lon:.2f}")
    return "\n".join(lines)
