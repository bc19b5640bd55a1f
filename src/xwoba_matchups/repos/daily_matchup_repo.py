import logging
import sqlite3
from collections.abc import Sequence
from dataclasses import fields

from xwoba_matchups.domain.matchup import DailyMatchup
from xwoba_matchups.repos._batching import placeholders

logger = logging.getLogger(__name__)

_KEY_COLUMNS = ("game_date", "game_pk", "batter_id", "pitcher_id")
_COLUMNS = tuple(f.name for f in fields(DailyMatchup) if f.name != "id")
_VALUE_COLUMNS = tuple(col for col in _COLUMNS if col not in _KEY_COLUMNS)

_UPSERT_SQL = (
    f"INSERT INTO daily_matchup ({', '.join(_COLUMNS)}) "
    f"VALUES ({placeholders(len(_COLUMNS))}) "
    f"ON CONFLICT({', '.join(_KEY_COLUMNS)}) DO UPDATE SET "
    + ", ".join(f"{col}=excluded.{col}" for col in _VALUE_COLUMNS)
)


class SqliteDailyMatchupRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def upsert_many(
        self,
        matchups: Sequence[DailyMatchup],
        *,
        prune_date: str | None = None,
        prune_game_pks: Sequence[int] = (),
    ) -> int:
        """Write *matchups* in a single transaction and return the number of rows pruned.

        When *prune_date* is given, rows for that date and *prune_game_pks* whose
        (batter, pitcher) pair is not in *matchups* are deleted in the same
        transaction. Any failure rolls back the whole batch and re-raises.
        """
        pruned = 0
        try:
            self._conn.executemany(_UPSERT_SQL, [self._params(m) for m in matchups])
            if prune_date is not None:
                pruned = self._delete_stale(prune_date, prune_game_pks, matchups)
            self._conn.commit()
        except sqlite3.Error:
            self._conn.rollback()
            raise
        logger.debug("Upserted %d daily_matchup rows, pruned %d", len(matchups), pruned)
        return pruned

    def _delete_stale(self, game_date: str, game_pks: Sequence[int], keep: Sequence[DailyMatchup]) -> int:
        if not game_pks:
            return 0
        keep_keys = {(m.game_pk, m.batter_id, m.pitcher_id) for m in keep}
        rows = self._conn.execute(
            f"SELECT id, game_pk, batter_id, pitcher_id FROM daily_matchup"
            f" WHERE game_date = ? AND game_pk IN ({placeholders(len(game_pks))})",
            (game_date, *game_pks),
        ).fetchall()
        stale_ids = [
            (row["id"],) for row in rows if (row["game_pk"], row["batter_id"], row["pitcher_id"]) not in keep_keys
        ]
        self._conn.executemany("DELETE FROM daily_matchup WHERE id = ?", stale_ids)
        return len(stale_ids)

    def get_by_date(self, game_date: str) -> list[DailyMatchup]:
        rows = self._conn.execute(
            "SELECT * FROM daily_matchup WHERE game_date = ? ORDER BY game_pk, batter_id, pitcher_id",
            (game_date,),
        ).fetchall()
        return [self._row_to_matchup(row) for row in rows]

    def get_top_by_date(self, game_date: str, limit: int) -> list[DailyMatchup]:
        rows = self._conn.execute(
            "SELECT * FROM daily_matchup WHERE game_date = ? ORDER BY avg_xwoba DESC, batter_id LIMIT ?",
            (game_date, limit),
        ).fetchall()
        return [self._row_to_matchup(row) for row in rows]

    @staticmethod
    def _params(matchup: DailyMatchup) -> tuple[object, ...]:
        return tuple(getattr(matchup, col) for col in _COLUMNS)

    @staticmethod
    def _row_to_matchup(row: sqlite3.Row) -> DailyMatchup:
        return DailyMatchup(id=row["id"], **{col: row[col] for col in _COLUMNS})
