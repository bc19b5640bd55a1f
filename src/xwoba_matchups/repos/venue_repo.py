import sqlite3

from xwoba_matchups.domain.venue import Venue


class SqliteVenueRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def upsert(self, venue: Venue) -> int:
        self._conn.execute(
            """INSERT INTO venue (id, name, city, state, roof_type, latitude, longitude)
               VALUES (?, ?, ?, ?, ?, ?, ?)
               ON CONFLICT(id) DO UPDATE SET
                   name=excluded.name,
                   city=COALESCE(excluded.city, venue.city),
                   state=COALESCE(excluded.state, venue.state),
                   roof_type=COALESCE(excluded.roof_type, venue.roof_type),
                   latitude=COALESCE(excluded.latitude, venue.latitude),
                   longitude=COALESCE(excluded.longitude, venue.longitude)""",
            (venue.id, venue.name, venue.city, venue.state, venue.roof_type, venue.latitude, venue.longitude),
        )
        return venue.id

    def get_by_id(self, venue_id: int) -> Venue | None:
        row = self._conn.execute("SELECT * FROM venue WHERE id = ?", (venue_id,)).fetchone()
        return self._row_to_venue(row) if row else None

    @staticmethod
    def _row_to_venue(row: sqlite3.Row) -> Venue:
        return Venue(
            id=row["id"],
            name=row["name"],
            city=row["city"],
            state=row["state"],
            roof_type=row["roof_type"],
            latitude=row["latitude"],
            longitude=row["longitude"],
        )
