"""Location query dispatch: literal coordinates vs. place names."""

import re
from dataclasses import dataclass

# Strict: no whitespace, no surrounding text.
COORDINATE_PATTERN = re.compile(r"(-?\d+\.?\d*),(-?\d+\.?\d*)", re.ASCII)


@dataclass(frozen=True)
class CoordinateQuery:
    lat: float
    lon: float


@dataclass(frozen=True)
class NameQuery:
    name: str


LocationQuery = CoordinateQuery | NameQuery


def classify_query(text: str) -> LocationQuery:
    """Decide whether a search string is a 'lat,lon' pair or a place name.

    Anything that does not fully match the coordinate pattern falls through
    to the name route, e.g. "35.6762, 139.6503" (space after the comma).
    """
    match = COORDINATE_PATTERN.fullmatch(text)
    if match is None:
        return NameQuery(name=text)
    return CoordinateQuery(lat=float(match.group(1)), lon=float(match.group(2)))


def coordinate_query_text(lat: float, lon: float) -> str:
    """Build a query string that classifies as coordinates."""
    return f"{lat:.6f},{lon:.6f}"
