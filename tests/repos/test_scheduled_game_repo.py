import sqlite3

from xwoba_matchups.domain.game import ScheduledGame
from xwoba_matchups.repos.scheduled_game_repo import SqliteScheduledGameRepo


def _make_game(**overrides: object) -> ScheduledGame:
    defaults: dict[str, object] = {
        "game_pk": 777001,
        "official_date": "2025-05-12",
        "home_team_id": 147,
        "away_team_id": 111,
        "game_datetime_utc": "2025-05-12T23:05:00Z",
        "detailed_state": "Scheduled",
        "venue_id": 3313,
        "home_probable_pitcher_id": 900,
        "away_probable_pitcher_id": 901,
    }
    defaults.update(overrides)
    return ScheduledGame(**defaults)  # type: ignore[arg-type]


class TestSqliteScheduledGameRepo:
    def test_upsert_and_get(self, conn: sqlite3.Connection) -> None:
        repo = SqliteScheduledGameRepo(conn)
        game = _make_game(home_batting_order=tuple(range(1, 10)))
        repo.upsert(game)
        assert repo.get_by_date("2025-05-12") == [game]

    def test_unpublished_order_stays_none(self, conn: sqlite3.Connection) -> None:
        repo = SqliteScheduledGameRepo(conn)
        repo.upsert(_make_game())
        [game] = repo.get_by_date("2025-05-12")
        assert game.home_batting_order is None
        assert game.away_batting_order is None

    def test_refresh_overwrites_instead_of_duplicating(self, conn: sqlite3.Connection) -> None:
        repo = SqliteScheduledGameRepo(conn)
        repo.upsert(_make_game())
        repo.upsert(_make_game(detailed_state="Pre-Game", away_batting_order=(11, 12, 13), home_probable_pitcher_id=950))
        games = repo.get_by_date("2025-05-12")
        assert len(games) == 1
        assert games[0].detailed_state == "Pre-Game"
        assert games[0].away_batting_order == (11, 12, 13)
        assert games[0].home_probable_pitcher_id == 950

    def test_get_by_date_orders_by_start_time(self, conn: sqlite3.Connection) -> None:
        repo = SqliteScheduledGameRepo(conn)
        repo.upsert(_make_game(game_pk=3, game_datetime_utc="2025-05-13T02:10:00Z"))
        repo.upsert(_make_game(game_pk=1, game_datetime_utc="2025-05-12T17:05:00Z"))
        repo.upsert(_make_game(game_pk=2, game_datetime_utc="2025-05-12T23:05:00Z"))
        repo.upsert(_make_game(game_pk=4, official_date="2025-05-13"))
        assert [g.game_pk for g in repo.get_by_date("2025-05-12")] == [1, 2, 3]
