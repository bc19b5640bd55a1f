from dataclasses import dataclass


@dataclass(frozen=True)
class ScheduledGame:
    game_pk: int
    official_date: str
    home_team_id: int
    away_team_id: int
    game_datetime_utc: str | None = None
    detailed_state: str | None = None
    venue_id: int | None = None
    home_batting_order: tuple[int, ...] | None = None
    away_batting_order: tuple[int, ...] | None = None
    home_probable_pitcher_id: int | None = None
    away_probable_pitcher_id: int | None = None


@dataclass(frozen=True)
class PlayerRef:
    player_id: int
    full_name: str | None = None


@dataclass(frozen=True)
class TeamSide:
    """One club in a resolved game.

    ``batting_order`` is ``None`` when no lineup has been published yet.
    ``probable_pitcher`` is this club's own starter, who faces the other side's batters.
    """

    team_id: int
    label: str
    probable_pitcher: PlayerRef | None = None
    batting_order: tuple[PlayerRef, ...] | None = None
    roster: tuple[PlayerRef, ...] = ()


@dataclass(frozen=True)
class ResolvedGame:
    game_pk: int
    game_date: str
    home: TeamSide
    away: TeamSide
