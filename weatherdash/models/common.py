"""Common time helpers shared across models."""

from datetime import UTC, datetime, tzinfo


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def to_local(epoch_seconds: int | float, tz: tzinfo | None = None) -> datetime:
    """Convert an epoch timestamp to an aware datetime.

    With no tz the local machine time zone is used.
    """
    if tz is None:
        return datetime.fromtimestamp(epoch_seconds).astimezone()
    return datetime.fromtimestamp(epoch_seconds, tz)


def day_key(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%d")


def hour_label(moment: datetime) -> str:
    """12-hour clock label like '3 PM'."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour} {suffix}"


def datetime_label(moment: datetime) -> str:
    """Local date-time label like '10/19/2026, 3:05:00 PM'."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return (
        f"{moment.month}/{moment.day}/{moment.year}, "
        f"{hour}:{moment.minute:02d}:{moment.second:02d} {suffix}"
    )
