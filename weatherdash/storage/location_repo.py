"""Repository for saved locations: built-in seeds and user-added custom ones."""

import logging
import sqlite3
import uuid
from collections.abc import Iterable
from urllib.parse import quote

from weatherdash.models.common import utc_now_iso
from weatherdash.models.location import GeocodingResult, Location, NewLocation

logger = logging.getLogger(__name__)

IMAGE_URL_TEMPLATE = "https://source.unsplash.com/featured/800x600/?{name},weather"


class LocationRepository:
    """CRUD over the locations table.

    Read failures are logged and come back as empty results; only custom
    locations can be deleted.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def list_all(self) -> list[Location]:
        """Featured first, then oldest first."""
        return self._select(
            "SELECT * FROM locations ORDER BY featured DESC, created_at ASC, rowid ASC"
        )

    def list_featured(self) -> list[Location]:
        return self._select(
            "SELECT * FROM locations WHERE featured = 1 "
            "ORDER BY created_at ASC, rowid ASC"
        )

    def list_custom(self) -> list[Location]:
        """Newest first."""
        return self._select(
            "SELECT * FROM locations WHERE is_custom = 1 "
            "ORDER BY created_at DESC, rowid DESC"
        )

    def get_by_id(self, location_id: str) -> Location | None:
        rows = self._select("SELECT * FROM locations WHERE id = ?", (location_id,))
        return rows[0] if rows else None

    def insert(self, new: NewLocation) -> Location | None:
        """Persist a user-submitted location as custom and non-featured."""
        if not new.name.strip() or not new.country.strip():
            logger.warning("Rejected location with empty name or country: %r", new)
            return None
        if not (-90.0 <= new.lat <= 90.0 and -180.0 <= new.lon <= 180.0):
            logger.warning(
                "Rejected location %s with out-of-range coordinates %s,%s",
                new.name, new.lat, new.lon,
            )
            return None

        location = Location(
            id=str(uuid.uuid4()),
            name=new.name,
            country=new.country,
            description=new.description or f"{new.name}, {new.country}",
            image=IMAGE_URL_TEMPLATE.format(name=quote(new.name, safe="")),
            lat=new.lat,
            lon=new.lon,
            featured=False,
            is_custom=True,
            created_at=utc_now_iso(),
        )
        try:
            self._insert_row(location)
            self.conn.commit()
        except sqlite3.Error:
            logger.exception("Error adding location %s", new.name)
            return None
        logger.info("Added custom location %s (%s)", location.name, location.id)
        return location

    def delete_by_id(self, location_id: str) -> bool:
        """Delete a custom location. Built-in locations are never deleted."""
        try:
            cursor = self.conn.execute(
                "DELETE FROM locations WHERE id = ? AND is_custom = 1",
                (location_id,),
            )
            self.conn.commit()
        except sqlite3.Error:
            logger.exception("Error deleting location %s", location_id)
            return False
        if cursor.rowcount == 0:
            logger.warning("No custom location %s to delete", location_id)
            return False
        return True

    def seed(self, locations: Iterable[Location]) -> int:
        """Insert built-in locations that are not stored yet. Returns the count added."""
        added = 0
        for location in locations:
            cursor = self._insert_row(location, ignore_existing=True)
            added += cursor.rowcount
        self.conn.commit()
        if added:
            logger.info("Seeded %d built-in locations", added)
        return added

    def _insert_row(
        self, location: Location, ignore_existing: bool = False
    ) -> sqlite3.Cursor:
        verb = "INSERT OR IGNORE" if ignore_existing else "INSERT"
        return self.conn.execute(
            f"{verb} INTO locations "
            "(id, name, country, description, image, lat, lon, featured, is_custom, created_at) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                location.id,
                location.name,
                location.country,
                location.description,
                location.image,
                location.lat,
                location.lon,
                int(location.featured),
                int(location.is_custom),
                location.created_at,
            ),
        )

    def _select(self, sql: str, params: tuple = ()) -> list[Location]:
        try:
            rows = self.conn.execute(sql, params).fetchall()
        except sqlite3.Error:
            logger.exception("Error fetching locations")
            return []
        return [_row_to_location(r) for r in rows]


def _row_to_location(row: sqlite3.Row) -> Location:
    return Location(
        id=row["id"],
        name=row["name"],
        country=row["country"],
        description=row["description"],
        image=row["image"],
        lat=row["lat"],
        lon=row["lon"],
        featured=bool(row["featured"]),
        is_custom=bool(row["is_custom"]),
        created_at=row["created_at"],
    )


def new_location_from_geocoding(result: GeocodingResult) -> NewLocation:
    """Build a submission from a geocoding hit, described as 'name, state, country'."""
    parts = [result.name]
    if result.state:
        parts.append(result.state)
    parts.append(result.country)
    return NewLocation(
        name=result.name,
        country=result.country,
        lat=result.lat,
        lon=result.lon,
        description=", ".join(parts),
    )
