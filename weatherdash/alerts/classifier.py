"""Severe-weather alert classification.

Severity and type are independent: each has its own ordered rule list,
evaluated case-insensitively against the event title, first match wins.
"""

from collections.abc import Sequence
from datetime import tzinfo

from weatherdash.models.common import datetime_label, to_local
from weatherdash.models.weather import (
    AlertEntry,
    AlertSeverity,
    AlertType,
    RawAlert,
)

SEVERITY_RULES: list[tuple[AlertSeverity, tuple[str, ...]]] = [
    (AlertSeverity.EXTREME, ("extreme", "severe", "tornado", "hurricane")),
    (AlertSeverity.HIGH, ("warning", "storm", "flood")),
    (AlertSeverity.MEDIUM, ("watch", "advisory")),
]

TYPE_RULES: list[tuple[AlertType, tuple[str, ...]]] = [
    (AlertType.WARNING, ("warning",)),
    (AlertType.WATCH, ("watch",)),
    (AlertType.ADVISORY, ("advisory",)),
]


def determine_severity(event: str) -> AlertSeverity:
    text = event.lower()
    for severity, keywords in SEVERITY_RULES:
        if any(k in text for k in keywords):
            return severity
    return AlertSeverity.LOW


def determine_alert_type(event: str) -> AlertType:
    text = event.lower()
    for alert_type, keywords in TYPE_RULES:
        if any(k in text for k in keywords):
            return alert_type
    return AlertType.INFO


def classify(event: str) -> tuple[AlertSeverity, AlertType]:
    """Map an event title to (severity, type). Never fails."""
    return determine_severity(event), determine_alert_type(event)


def build_alert_entries(
    raw_alerts: Sequence[RawAlert], tz: tzinfo | None = None
) -> list[AlertEntry]:
    """Turn one batch of provider alerts into display entries.

    Ids are "<start>-<index>", unique only within the batch.
    """
    entries = []
    for i, alert in enumerate(raw_alerts):
        severity, alert_type = classify(alert.event)
        entries.append(
            AlertEntry(
                id=f"{alert.start}-{i}",
                type=alert_type,
                severity=severity,
                title=alert.event,
                description=alert.description,
                start_time=datetime_label(to_local(alert.start, tz)),
                end_time=datetime_label(to_local(alert.end, tz)),
            )
        )
    return entries
