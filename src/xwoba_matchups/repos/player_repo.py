import sqlite3
from collections.abc import Iterable

from xwoba_matchups.domain.player import Player, Team
from xwoba_matchups.repos._batching import DEFAULT_CHUNK_SIZE, id_chunks, placeholders


class SqlitePlayerRepo:
    def __init__(self, conn: sqlite3.Connection, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self._conn = conn
        self._chunk_size = chunk_size

    def upsert(self, player: Player) -> int:
        self._conn.execute(
            """INSERT INTO player (mlbam_id, full_name, bats, throws, team_id)
               VALUES (?, ?, ?, ?, ?)
               ON CONFLICT(mlbam_id) DO UPDATE SET
                   full_name=COALESCE(excluded.full_name, player.full_name),
                   bats=COALESCE(excluded.bats, player.bats),
                   throws=COALESCE(excluded.throws, player.throws),
                   team_id=COALESCE(excluded.team_id, player.team_id)""",
            (player.mlbam_id, player.full_name, player.bats, player.throws, player.team_id),
        )
        return player.mlbam_id

    def get_by_mlbam_ids(self, mlbam_ids: Iterable[int]) -> list[Player]:
        players: list[Player] = []
        for chunk in id_chunks(mlbam_ids, self._chunk_size):
            rows = self._conn.execute(
                f"SELECT * FROM player WHERE mlbam_id IN ({placeholders(len(chunk))})",
                chunk,
            ).fetchall()
            players.extend(self._row_to_player(row) for row in rows)
        return players

    @staticmethod
    def _row_to_player(row: sqlite3.Row) -> Player:
        return Player(
            mlbam_id=row["mlbam_id"],
            full_name=row["full_name"],
            bats=row["bats"],
            throws=row["throws"],
            team_id=row["team_id"],
        )


class SqliteTeamRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def upsert(self, team: Team) -> int:
        self._conn.execute(
            """INSERT INTO team (id, name, abbreviation, venue_id)
               VALUES (?, ?, ?, ?)
               ON CONFLICT(id) DO UPDATE SET
                   name=excluded.name,
                   abbreviation=COALESCE(excluded.abbreviation, team.abbreviation),
                   venue_id=COALESCE(excluded.venue_id, team.venue_id)""",
            (team.id, team.name, team.abbreviation, team.venue_id),
        )
        return team.id

    def get_by_id(self, team_id: int) -> Team | None:
        row = self._conn.execute("SELECT * FROM team WHERE id = ?", (team_id,)).fetchone()
        return self._row_to_team(row) if row else None

    @staticmethod
    def _row_to_team(row: sqlite3.Row) -> Team:
        return Team(
            id=row["id"],
            name=row["name"],
            abbreviation=row["abbreviation"],
            venue_id=row["venue_id"],
        )
