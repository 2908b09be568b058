"""Saved location and geocoding models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    id: str
    name: str
    country: str
    description: str
    image: str
    lat: float
    lon: float
    featured: bool
    is_custom: bool
    created_at: str


@dataclass(frozen=True)
class NewLocation:
    """User-submitted location, before the repository assigns identity."""

    name: str
    country: str
    lat: float
    lon: float
    description: str = ""


@dataclass(frozen=True)
class GeocodingResult:
    name: str
    country: str
    lat: float
    lon: float
    state: str | None = None
