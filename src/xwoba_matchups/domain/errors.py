from dataclasses import dataclass


@dataclass(frozen=True)
class MatchupsError:
    message: str


@dataclass(frozen=True)
class IngestError(MatchupsError):
    source_type: str
    source_detail: str
    target_table: str


@dataclass(frozen=True)
class ScheduleFetchError(MatchupsError):
    game_date: str


@dataclass(frozen=True)
class MatchupWriteError(MatchupsError):
    game_date: str
    rows_attempted: int
