import sqlite3

import pytest

from xwoba_matchups.repos.daily_matchup_repo import SqliteDailyMatchupRepo
from tests.helpers import make_matchup


class TestSqliteDailyMatchupRepo:
    def test_upsert_many_and_get_by_date(self, conn: sqlite3.Connection) -> None:
        repo = SqliteDailyMatchupRepo(conn)
        repo.upsert_many([make_matchup(batter_id=1), make_matchup(batter_id=2)])
        rows = repo.get_by_date("2025-05-12")
        assert [r.batter_id for r in rows] == [1, 2]
        assert rows[0].id is not None

    def test_rerun_is_idempotent(self, conn: sqlite3.Connection) -> None:
        repo = SqliteDailyMatchupRepo(conn)
        batch = [make_matchup(batter_id=pid) for pid in range(1, 10)]
        repo.upsert_many(batch)
        first = {(r.batter_id, r.avg_xwoba) for r in repo.get_by_date("2025-05-12")}
        repo.upsert_many(batch)
        second = {(r.batter_id, r.avg_xwoba) for r in repo.get_by_date("2025-05-12")}
        assert first == second
        assert len(repo.get_by_date("2025-05-12")) == 9

    def test_changed_input_replaces_row(self, conn: sqlite3.Connection) -> None:
        repo = SqliteDailyMatchupRepo(conn)
        repo.upsert_many([make_matchup(lineup_position=None, avg_xwoba=0.300)])
        repo.upsert_many([make_matchup(lineup_position=4, avg_xwoba=0.310)])
        rows = repo.get_by_date("2025-05-12")
        assert len(rows) == 1
        assert rows[0].lineup_position == 4
        assert rows[0].avg_xwoba == 0.310

    def test_doubleheader_rows_are_distinct(self, conn: sqlite3.Connection) -> None:
        repo = SqliteDailyMatchupRepo(conn)
        repo.upsert_many([make_matchup(game_pk=1), make_matchup(game_pk=2)])
        assert len(repo.get_by_date("2025-05-12")) == 2

    def test_failed_batch_leaves_storage_unchanged(self, conn: sqlite3.Connection) -> None:
        repo = SqliteDailyMatchupRepo(conn)
        repo.upsert_many([make_matchup(batter_id=1, avg_xwoba=0.300)])
        bad_batch = [make_matchup(batter_id=1, avg_xwoba=0.400), make_matchup(batter_id=2, avg_xwoba=None)]
        with pytest.raises(sqlite3.IntegrityError):
            repo.upsert_many(bad_batch)
        rows = repo.get_by_date("2025-05-12")
        assert [(r.batter_id, r.avg_xwoba) for r in rows] == [(1, 0.300)]

    def test_stale_rows_kept_by_default(self, conn: sqlite3.Connection) -> None:
        repo = SqliteDailyMatchupRepo(conn)
        repo.upsert_many([make_matchup(pitcher_id=900), make_matchup(batter_id=2, pitcher_id=900)])
        pruned = repo.upsert_many([make_matchup(pitcher_id=950)])
        assert pruned == 0
        assert len(repo.get_by_date("2025-05-12")) == 3

    def test_prune_removes_only_stale_rows_for_run_games(self, conn: sqlite3.Connection) -> None:
        repo = SqliteDailyMatchupRepo(conn)
        repo.upsert_many(
            [
                make_matchup(batter_id=1, pitcher_id=900),
                make_matchup(batter_id=2, pitcher_id=900),
                make_matchup(game_pk=888, batter_id=3, pitcher_id=800),
                make_matchup(game_date="2025-05-11", batter_id=1, pitcher_id=900),
            ]
        )
        pruned = repo.upsert_many(
            [make_matchup(batter_id=1, pitcher_id=950)],
            prune_date="2025-05-12",
            prune_game_pks=[777001],
        )
        assert pruned == 2
        remaining = {(r.game_pk, r.batter_id, r.pitcher_id) for r in repo.get_by_date("2025-05-12")}
        assert remaining == {(777001, 1, 950), (888, 3, 800)}
        assert len(repo.get_by_date("2025-05-11")) == 1

    def test_get_top_by_date(self, conn: sqlite3.Connection) -> None:
        repo = SqliteDailyMatchupRepo(conn)
        repo.upsert_many([make_matchup(batter_id=pid, avg_xwoba=0.300 + pid / 1000) for pid in range(1, 6)])
        top = repo.get_top_by_date("2025-05-12", 2)
        assert [m.batter_id for m in top] == [5, 4]
