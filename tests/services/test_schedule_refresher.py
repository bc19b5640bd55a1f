import datetime
import sqlite3

import httpx

from xwoba_matchups.ingest.mlb_schedule_source import MLBScheduleSource
from xwoba_matchups.repos.load_log_repo import SqliteLoadLogRepo
from xwoba_matchups.repos.player_repo import SqlitePlayerRepo, SqliteTeamRepo
from xwoba_matchups.repos.scheduled_game_repo import SqliteScheduledGameRepo
from xwoba_matchups.repos.venue_repo import SqliteVenueRepo
from xwoba_matchups.services.schedule_refresher import ScheduleRefresher
from tests.fakes.mlb import NO_WAIT_RETRY, RoutingTransport, failing, json_response, schedule_game, schedule_payload
from tests.helpers import load_logs, seed_player, stored_player


def _by_date(request: httpx.Request) -> httpx.Response:
    day = request.url.params["startDate"]
    if day == "2025-05-13":
        return failing(503)(request)
    pk = int(day.replace("-", ""))
    return json_response(schedule_payload(schedule_game(game_pk=pk, official_date=day), date=day))


def _refresher(conn: sqlite3.Connection, transport: RoutingTransport) -> ScheduleRefresher:
    return ScheduleRefresher(
        MLBScheduleSource(httpx.Client(transport=transport), retry=NO_WAIT_RETRY),
        SqliteScheduledGameRepo(conn),
        SqliteTeamRepo(conn),
        SqliteVenueRepo(conn),
        SqliteLoadLogRepo(conn),
        conn=conn,
        player_repo=SqlitePlayerRepo(conn),
    )


class TestScheduleRefresher:
    def test_one_load_per_day(self, conn: sqlite3.Connection) -> None:
        transport = RoutingTransport({"/schedule": _by_date})
        report = _refresher(conn, transport).refresh(datetime.date(2025, 5, 11), days=2)
        assert report.start_date == "2025-05-11"
        assert report.games_written == 2
        assert report.failed_dates == ()
        assert [r.url.params["startDate"] for r in transport.requests] == ["2025-05-11", "2025-05-12"]
        games = SqliteScheduledGameRepo(conn).get_by_date("2025-05-12")
        assert [g.game_pk for g in games] == [20250512]

    def test_stores_teams_and_venue(self, conn: sqlite3.Connection) -> None:
        transport = RoutingTransport({"/schedule": _by_date})
        _refresher(conn, transport).refresh(datetime.date(2025, 5, 12), days=1)
        yankees = SqliteTeamRepo(conn).get_by_id(147)
        assert yankees is not None
        assert (yankees.abbreviation, yankees.venue_id) == ("NYY", 3313)
        venue = SqliteVenueRepo(conn).get_by_id(3313)
        assert venue is not None
        assert venue.city == "Bronx"

    def test_failed_day_is_reported_and_others_continue(self, conn: sqlite3.Connection) -> None:
        transport = RoutingTransport({"/schedule": _by_date})
        report = _refresher(conn, transport).refresh(datetime.date(2025, 5, 12), days=3)
        assert report.failed_dates == ("2025-05-13",)
        assert report.games_written == 2
        statuses = [log["status"] for log in load_logs(conn, "scheduled_game")]
        assert sorted(statuses) == ["error", "success", "success"]

    def test_refresh_is_idempotent(self, conn: sqlite3.Connection) -> None:
        transport = RoutingTransport({"/schedule": _by_date})
        refresher = _refresher(conn, transport)
        refresher.refresh(datetime.date(2025, 5, 12), days=1)
        refresher.refresh(datetime.date(2025, 5, 12), days=1)
        assert len(SqliteScheduledGameRepo(conn).get_by_date("2025-05-12")) == 1

    def test_stores_probable_pitchers_without_clobbering_handedness(self, conn: sqlite3.Connection) -> None:
        seed_player(conn, 900, bats="R", throws="R", full_name="Old Name")
        transport = RoutingTransport({"/schedule": _by_date})
        _refresher(conn, transport).refresh(datetime.date(2025, 5, 12), days=1)
        home = stored_player(conn, 900)
        assert home is not None
        assert (home.full_name, home.throws, home.team_id) == ("Home Starter", "R", 147)
        away = stored_player(conn, 901)
        assert away is not None
        assert away.full_name == "Away Starter"
        assert away.throws is None
