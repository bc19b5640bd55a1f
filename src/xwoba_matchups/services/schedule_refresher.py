import datetime
import logging
import sqlite3
from typing import Any

from xwoba_matchups.domain.matchup import ScheduleRefreshReport
from xwoba_matchups.domain.result import Err, Ok
from xwoba_matchups.ingest.column_maps import (
    schedule_row_to_game,
    schedule_row_to_probable_pitchers,
    schedule_row_to_teams,
    schedule_row_to_venue,
)
from xwoba_matchups.ingest.date_utils import date_range
from xwoba_matchups.ingest.loader import Loader
from xwoba_matchups.ingest.protocols import DataSource
from xwoba_matchups.repos.protocols import LoadLogRepo, PlayerRepo, ScheduledGameRepo, TeamRepo, VenueRepo

logger = logging.getLogger(__name__)


class ScheduleRefresher:
    """Upsert the hydrated schedule for a run of days, one load per day.

    Teams, venues and probable pitchers seen in the payload are stored as
    reference data in the same transaction as the day's games. A day that
    fails is logged and skipped.
    """

    def __init__(
        self,
        source: DataSource,
        game_repo: ScheduledGameRepo,
        team_repo: TeamRepo,
        venue_repo: VenueRepo,
        load_log_repo: LoadLogRepo,
        *,
        conn: sqlite3.Connection,
        player_repo: PlayerRepo | None = None,
    ) -> None:
        self._source = source
        self._game_repo = game_repo
        self._team_repo = team_repo
        self._venue_repo = venue_repo
        self._load_log_repo = load_log_repo
        self._conn = conn
        self._player_repo = player_repo

    def _store_reference_data(self, row: dict[str, Any]) -> None:
        venue = schedule_row_to_venue(row)
        if venue is not None:
            self._venue_repo.upsert(venue)
        for team in schedule_row_to_teams(row):
            self._team_repo.upsert(team)
        if self._player_repo is not None:
            for pitcher in schedule_row_to_probable_pitchers(row):
                self._player_repo.upsert(pitcher)

    def refresh(self, start: datetime.date, days: int = 8) -> ScheduleRefreshReport:
        loader = Loader(
            self._source,
            self._game_repo,
            self._load_log_repo,
            schedule_row_to_game,
            "scheduled_game",
            conn=self._conn,
            row_hook=self._store_reference_data,
        )
        games_written = 0
        failed: list[str] = []
        for day in date_range(start, days):
            iso = day.isoformat()
            match loader.load(start_date=iso, end_date=iso):
                case Ok(log):
                    games_written += log.rows_loaded
                case Err(e):
                    logger.warning("Schedule refresh for %s failed: %s", iso, e.message)
                    failed.append(iso)
        logger.info("Refreshed %d games across %d days (%d failed)", games_written, days, len(failed))
        return ScheduleRefreshReport(
            start_date=start.isoformat(),
            days=days,
            games_written=games_written,
            failed_dates=tuple(failed),
        )
