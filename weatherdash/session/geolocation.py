"""Device geolocation contract and its user-facing failure messages."""

import asyncio
import logging
from enum import StrEnum
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_GEOLOCATION_TIMEOUT = 10.0


class GeolocationErrorKind(StrEnum):
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"
    UNSUPPORTED = "unsupported"


GEOLOCATION_MESSAGES: dict[GeolocationErrorKind, str] = {
    GeolocationErrorKind.PERMISSION_DENIED: (
        "Location access denied. Please enable location permissions or search manually."
    ),
    GeolocationErrorKind.POSITION_UNAVAILABLE: (
        "Location information unavailable. Please search manually."
    ),
    GeolocationErrorKind.TIMEOUT: (
        "Location request timed out. Please try again or search manually."
    ),
    GeolocationErrorKind.UNSUPPORTED: "Geolocation is not supported",
}


class GeolocationError(Exception):
    def __init__(self, kind: GeolocationErrorKind):
        self.kind = kind
        self.message = GEOLOCATION_MESSAGES[kind]
        super().__init__(self.message)


class Geolocator(Protocol):
    async def current_position(self) -> tuple[float, float]:
        """Return (lat, lon) or raise GeolocationError."""
        ...


async def locate(
    geolocator: Geolocator | None, timeout: float = DEFAULT_GEOLOCATION_TIMEOUT
) -> tuple[float, float]:
    """Resolve the device position.

    A slow lookup maps to TIMEOUT and any other geolocator fault to
    POSITION_UNAVAILABLE, so callers only ever see GeolocationError.
    """
    if geolocator is None:
        raise GeolocationError(GeolocationErrorKind.UNSUPPORTED)
    try:
        return await asyncio.wait_for(geolocator.current_position(), timeout)
    except TimeoutError as e:
        raise GeolocationError(GeolocationErrorKind.TIMEOUT) from e
    except GeolocationError:
        raise
    except Exception as e:
        logger.warning("Geolocator failed: %s", e)
        raise GeolocationError(GeolocationErrorKind.POSITION_UNAVAILABLE) from e
