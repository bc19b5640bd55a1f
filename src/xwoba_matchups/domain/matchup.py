from dataclasses import dataclass
from enum import StrEnum

from xwoba_matchups.domain.game import PlayerRef
from xwoba_matchups.domain.venue import Venue


@dataclass(frozen=True)
class MatchupPair:
    game_pk: int
    game_date: str
    home_team_id: int
    away_team_id: int
    home_team: str
    away_team: str
    batter: PlayerRef
    batter_team_id: int
    batter_team: str
    pitcher: PlayerRef
    pitcher_team_id: int
    pitcher_team: str
    lineup_position: int | None = None

    @property
    def batter_is_home(self) -> bool:
        return self.batter_team_id == self.home_team_id


@dataclass(frozen=True)
class DailyMatchup:
    game_date: str
    game_pk: int
    home_team_id: int
    away_team_id: int
    home_team: str
    away_team: str
    batter_id: int
    batter_name: str | None
    batter_team_id: int
    batter_team: str
    pitcher_id: int
    pitcher_name: str | None
    pitcher_team_id: int
    pitcher_team: str
    lineup_position: int | None
    batter_hand: str
    batter_side: str
    pitcher_hand: str
    avg_xwoba: float
    avg_launch_angle: float
    avg_barrels_per_pa: float
    avg_hard_hit_pct: float
    avg_exit_velocity: float
    avg_k_percent: float | None = None
    avg_bb_percent: float | None = None
    avg_iso: float | None = None
    avg_swing_miss_percent: float | None = None
    avg_hr_per_pa: float | None = None
    id: int | None = None

    @property
    def batter_is_home(self) -> bool:
        return self.batter_team_id == self.home_team_id


class SkipReason(StrEnum):
    MISSING_HANDEDNESS = "missing_handedness"
    MISSING_SPLIT = "missing_split"
    NULL_METRIC = "null_metric"
    NON_POSITIVE_PA = "non_positive_pa"


@dataclass(frozen=True)
class PairSkip:
    game_pk: int
    batter_id: int
    pitcher_id: int
    reason: SkipReason
    detail: str


@dataclass(frozen=True)
class MatchupRunReport:
    game_date: str
    games_resolved: int
    pairs_generated: int
    rows_written: int
    rows_pruned: int = 0
    skips: tuple[PairSkip, ...] = ()

    def skip_counts(self) -> dict[SkipReason, int]:
        counts: dict[SkipReason, int] = {}
        for skip in self.skips:
            counts[skip.reason] = counts.get(skip.reason, 0) + 1
        return counts


@dataclass(frozen=True)
class ScheduleRefreshReport:
    start_date: str
    days: int
    games_written: int
    failed_dates: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProbablePitcher:
    player_id: int
    full_name: str | None = None
    throws: str | None = None


@dataclass(frozen=True)
class GameMatchups:
    """A scheduled game with its precomputed matchups, ready for display."""

    game_pk: int
    official_date: str
    game_datetime_utc: str | None
    detailed_state: str | None
    home_team_id: int
    away_team_id: int
    home_team: str
    away_team: str
    venue: Venue | None = None
    home_pitcher: ProbablePitcher | None = None
    away_pitcher: ProbablePitcher | None = None
    away_batters: tuple[DailyMatchup, ...] = ()
    home_batters: tuple[DailyMatchup, ...] = ()
