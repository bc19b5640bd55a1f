import sqlite3

from xwoba_matchups.domain.player_split import Role
from xwoba_matchups.repos.player_split_repo import SqlitePlayerSplitRepo
from tests.helpers import make_split, split_count, stored_split


class TestSqlitePlayerSplitRepo:
    def test_upsert_and_get(self, conn: sqlite3.Connection) -> None:
        repo = SqlitePlayerSplitRepo(conn)
        split = make_split(player_id=10, role=Role.PITCHER, vs_handedness="L", season=2024, max_exit_velocity=112.3)
        repo.upsert(split)
        assert stored_split(conn, 10, 2024, Role.PITCHER, "L") == split

    def test_role_round_trips_as_enum(self, conn: sqlite3.Connection) -> None:
        repo = SqlitePlayerSplitRepo(conn)
        repo.upsert(make_split(player_id=10, role=Role.PITCHER))
        fetched = stored_split(conn, 10, 0, Role.PITCHER, "R")
        assert fetched is not None
        assert fetched.role is Role.PITCHER

    def test_upsert_idempotency(self, conn: sqlite3.Connection) -> None:
        repo = SqlitePlayerSplitRepo(conn)
        repo.upsert(make_split(player_id=10, xwoba=0.300))
        repo.upsert(make_split(player_id=10, xwoba=0.350))
        assert split_count(conn) == 1
        fetched = stored_split(conn, 10, 0, Role.BATTER, "R")
        assert fetched is not None
        assert fetched.xwoba == 0.350

    def test_key_includes_role_and_hand(self, conn: sqlite3.Connection) -> None:
        repo = SqlitePlayerSplitRepo(conn)
        for role in Role:
            for hand in ("L", "R"):
                repo.upsert(make_split(player_id=10, role=role, vs_handedness=hand))
        assert split_count(conn) == 4

    def test_get_for_players_filters_season(self, conn: sqlite3.Connection) -> None:
        repo = SqlitePlayerSplitRepo(conn)
        repo.upsert(make_split(player_id=10, season=0))
        repo.upsert(make_split(player_id=10, season=2024))
        splits = repo.get_for_players([10], season=0)
        assert [s.season for s in splits] == [0]

    def test_get_for_players_reads_past_first_chunk(self, conn: sqlite3.Connection) -> None:
        repo = SqlitePlayerSplitRepo(conn, chunk_size=100)
        for pid in range(1, 231):
            repo.upsert(make_split(player_id=pid))
        splits = repo.get_for_players(range(1, 231), season=0)
        assert len(splits) == 230
        assert {s.player_id for s in splits} == set(range(1, 231))

    def test_get_by_seasons(self, conn: sqlite3.Connection) -> None:
        repo = SqlitePlayerSplitRepo(conn)
        for season in (2022, 2023, 2024, 2025):
            repo.upsert(make_split(player_id=10, season=season))
        splits = repo.get_by_seasons([2025, 2024, 2023])
        assert sorted(s.season for s in splits) == [2023, 2024, 2025]

    def test_get_by_seasons_empty(self, conn: sqlite3.Connection) -> None:
        assert SqlitePlayerSplitRepo(conn).get_by_seasons([]) == []

    def test_nullable_metrics_round_trip(self, conn: sqlite3.Connection) -> None:
        repo = SqlitePlayerSplitRepo(conn)
        repo.upsert(make_split(player_id=10, xwoba=None, hrs=None))
        fetched = stored_split(conn, 10, 0, Role.BATTER, "R")
        assert fetched is not None
        assert fetched.xwoba is None
        assert fetched.hrs is None
