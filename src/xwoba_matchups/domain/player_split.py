from dataclasses import dataclass
from enum import StrEnum


class Role(StrEnum):
    BATTER = "batter"
    PITCHER = "pitcher"


COMPOSITE_SEASON = 0

RATE_FIELDS: tuple[str, ...] = (
    "ba",
    "obp",
    "slg",
    "woba",
    "xwoba",
    "xba",
    "xobp",
    "xslg",
    "iso",
    "babip",
    "barrels_per_pa",
    "hard_hit_pct",
    "avg_exit_velocity",
    "max_exit_velocity",
    "avg_launch_angle",
    "groundball_pct",
    "line_drive_pct",
    "flyball_pct",
    "k_percent",
    "bb_percent",
    "swing_miss_percent",
)

COUNT_FIELDS: tuple[str, ...] = ("pa", "ab", "barrels", "hrs")


@dataclass(frozen=True)
class PlayerSplit:
    """Statcast split line for one player in one role against one pitching or batting hand.

    ``season`` 0 holds the recency- and volume-weighted composite across recent seasons.
    Percentages are stored as fractions (0.25, not 25).
    """

    player_id: int
    season: int
    role: Role
    vs_handedness: str
    player_name: str | None = None
    pa: int | None = None
    ab: int | None = None
    ba: float | None = None
    obp: float | None = None
    slg: float | None = None
    woba: float | None = None
    xwoba: float | None = None
    xba: float | None = None
    xobp: float | None = None
    xslg: float | None = None
    iso: float | None = None
    babip: float | None = None
    barrels: int | None = None
    barrels_per_pa: float | None = None
    hard_hit_pct: float | None = None
    avg_exit_velocity: float | None = None
    max_exit_velocity: float | None = None
    avg_launch_angle: float | None = None
    groundball_pct: float | None = None
    line_drive_pct: float | None = None
    flyball_pct: float | None = None
    hrs: int | None = None
    k_percent: float | None = None
    bb_percent: float | None = None
    swing_miss_percent: float | None = None
