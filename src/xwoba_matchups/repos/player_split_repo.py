import sqlite3
from collections.abc import Iterable

from xwoba_matchups.domain.player_split import COUNT_FIELDS, RATE_FIELDS, PlayerSplit, Role
from xwoba_matchups.repos._batching import DEFAULT_CHUNK_SIZE, id_chunks, placeholders

_KEY_COLUMNS = ("player_id", "season", "role", "vs_handedness")
_VALUE_COLUMNS = ("player_name", *COUNT_FIELDS, *RATE_FIELDS)
_ALL_COLUMNS = (*_KEY_COLUMNS, *_VALUE_COLUMNS)

_UPSERT_SQL = (
    f"INSERT INTO player_split ({', '.join(_ALL_COLUMNS)}) "
    f"VALUES ({placeholders(len(_ALL_COLUMNS))}) "
    f"ON CONFLICT({', '.join(_KEY_COLUMNS)}) DO UPDATE SET "
    + ", ".join(f"{col}=excluded.{col}" for col in _VALUE_COLUMNS)
)


class SqlitePlayerSplitRepo:
    def __init__(self, conn: sqlite3.Connection, *, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        self._conn = conn
        self._chunk_size = chunk_size

    def upsert(self, split: PlayerSplit) -> tuple[int, int, str, str]:
        self._conn.execute(_UPSERT_SQL, tuple(getattr(split, col) for col in _ALL_COLUMNS))
        return (split.player_id, split.season, split.role, split.vs_handedness)

    def get_for_players(self, player_ids: Iterable[int], season: int) -> list[PlayerSplit]:
        """Return every split row for *player_ids* in *season*, reading ids in bounded chunks."""
        splits: list[PlayerSplit] = []
        for chunk in id_chunks(player_ids, self._chunk_size):
            rows = self._conn.execute(
                f"SELECT * FROM player_split WHERE season = ? AND player_id IN ({placeholders(len(chunk))})",
                (season, *chunk),
            ).fetchall()
            splits.extend(self._row_to_split(row) for row in rows)
        return splits

    def get_by_seasons(self, seasons: Iterable[int]) -> list[PlayerSplit]:
        season_list = list(seasons)
        if not season_list:
            return []
        rows = self._conn.execute(
            f"SELECT * FROM player_split WHERE season IN ({placeholders(len(season_list))})"
            " ORDER BY player_id, role, vs_handedness, season",
            season_list,
        ).fetchall()
        return [self._row_to_split(row) for row in rows]

    @staticmethod
    def _row_to_split(row: sqlite3.Row) -> PlayerSplit:
        values = {col: row[col] for col in _ALL_COLUMNS}
        values["role"] = Role(values["role"])
        return PlayerSplit(**values)
