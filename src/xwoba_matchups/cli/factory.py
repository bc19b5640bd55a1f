import functools
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager

import httpx

from xwoba_matchups.config import Settings
from xwoba_matchups.db.connection import create_connection
from xwoba_matchups.ingest.mlb_api import default_client
from xwoba_matchups.ingest.mlb_boxscore_source import MLBBoxscoreSource
from xwoba_matchups.ingest.mlb_people_source import MLBPeopleSource
from xwoba_matchups.ingest.mlb_roster_source import MLBActiveRosterSource
from xwoba_matchups.ingest.mlb_schedule_source import MLBScheduleSource
from xwoba_matchups.repos.daily_matchup_repo import SqliteDailyMatchupRepo
from xwoba_matchups.repos.load_log_repo import SqliteLoadLogRepo
from xwoba_matchups.repos.player_repo import SqlitePlayerRepo, SqliteTeamRepo
from xwoba_matchups.repos.player_split_repo import SqlitePlayerSplitRepo
from xwoba_matchups.repos.scheduled_game_repo import SqliteScheduledGameRepo
from xwoba_matchups.repos.venue_repo import SqliteVenueRepo
from xwoba_matchups.services.handedness import HandednessResolver
from xwoba_matchups.services.matchup_pipeline import MatchupPipeline
from xwoba_matchups.services.matchup_report import MatchupReportService
from xwoba_matchups.services.schedule_refresher import ScheduleRefresher
from xwoba_matchups.services.schedule_resolver import ScheduleResolver
from xwoba_matchups.services.weighted_splits import WeightedSplitService


class _RepoContainer:
    def __init__(self, conn: sqlite3.Connection, settings: Settings) -> None:
        self._conn = conn
        self._settings = settings

    @property
    def conn(self) -> sqlite3.Connection:
        return self._conn

    @property
    def settings(self) -> Settings:
        return self._settings

    @functools.cached_property
    def player_repo(self) -> SqlitePlayerRepo:
        return SqlitePlayerRepo(self._conn, chunk_size=self._settings.chunk_size)

    @functools.cached_property
    def team_repo(self) -> SqliteTeamRepo:
        return SqliteTeamRepo(self._conn)

    @functools.cached_property
    def venue_repo(self) -> SqliteVenueRepo:
        return SqliteVenueRepo(self._conn)

    @functools.cached_property
    def split_repo(self) -> SqlitePlayerSplitRepo:
        return SqlitePlayerSplitRepo(self._conn, chunk_size=self._settings.chunk_size)

    @functools.cached_property
    def game_repo(self) -> SqliteScheduledGameRepo:
        return SqliteScheduledGameRepo(self._conn)

    @functools.cached_property
    def matchup_repo(self) -> SqliteDailyMatchupRepo:
        return SqliteDailyMatchupRepo(self._conn)

    @functools.cached_property
    def log_repo(self) -> SqliteLoadLogRepo:
        return SqliteLoadLogRepo(self._conn)


class IngestContainer(_RepoContainer):
    """DI container for the ingest command group."""

    def __init__(self, conn: sqlite3.Connection, settings: Settings, client: httpx.Client) -> None:
        super().__init__(conn, settings)
        self._client = client

    @functools.cached_property
    def schedule_source(self) -> MLBScheduleSource:
        return MLBScheduleSource(self._client, base_url=self._settings.mlb_base_url)

    @functools.cached_property
    def schedule_refresher(self) -> ScheduleRefresher:
        return ScheduleRefresher(
            self.schedule_source,
            self.game_repo,
            self.team_repo,
            self.venue_repo,
            self.log_repo,
            conn=self._conn,
            player_repo=self.player_repo,
        )


class ComputeContainer(_RepoContainer):
    """DI container for the compute command group."""

    def __init__(self, conn: sqlite3.Connection, settings: Settings, client: httpx.Client) -> None:
        super().__init__(conn, settings)
        self._client = client

    @functools.cached_property
    def resolver(self) -> ScheduleResolver:
        base_url = self._settings.mlb_base_url
        return ScheduleResolver(
            MLBScheduleSource(self._client, base_url=base_url),
            MLBActiveRosterSource(self._client, base_url=base_url),
            MLBBoxscoreSource(self._client, base_url=base_url),
        )

    @functools.cached_property
    def handedness_resolver(self) -> HandednessResolver:
        return HandednessResolver(
            self.player_repo,
            MLBPeopleSource(self._client, base_url=self._settings.mlb_base_url),
            chunk_size=self._settings.chunk_size,
        )

    def matchup_pipeline(self, *, prune_stale: bool | None = None) -> MatchupPipeline:
        return MatchupPipeline(
            self.resolver,
            self.handedness_resolver,
            self.split_repo,
            self.matchup_repo,
            self.log_repo,
            split_season=self._settings.split_season,
            strict_secondary=self._settings.strict_secondary,
            prune_stale=self._settings.prune_stale if prune_stale is None else prune_stale,
        )

    @functools.cached_property
    def weighted_split_service(self) -> WeightedSplitService:
        return WeightedSplitService(self.split_repo, self._settings.season_weights)


class ReportContainer(_RepoContainer):
    """DI container for the report command group."""

    @functools.cached_property
    def report_service(self) -> MatchupReportService:
        return MatchupReportService(
            self.game_repo,
            self.matchup_repo,
            self.team_repo,
            self.venue_repo,
            self.player_repo,
        )


@contextmanager
def build_ingest_container(settings: Settings) -> Iterator[IngestContainer]:
    """Composition-root context manager for ingest commands."""
    conn = create_connection(settings.db_path)
    client = default_client(settings.mlb_timeout)
    try:
        yield IngestContainer(conn, settings, client)
    finally:
        client.close()
        conn.close()


@contextmanager
def build_compute_container(settings: Settings) -> Iterator[ComputeContainer]:
    """Composition-root context manager for compute commands."""
    conn = create_connection(settings.db_path)
    client = default_client(settings.mlb_timeout)
    try:
        yield ComputeContainer(conn, settings, client)
    finally:
        client.close()
        conn.close()


@contextmanager
def build_report_container(settings: Settings) -> Iterator[ReportContainer]:
    """Composition-root context manager for report commands."""
    conn = create_connection(settings.db_path)
    try:
        yield ReportContainer(conn, settings)
    finally:
        conn.close()
