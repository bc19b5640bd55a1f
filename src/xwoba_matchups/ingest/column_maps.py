import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

from xwoba_matchups.domain.game import ScheduledGame
from xwoba_matchups.domain.player import Player, Team
from xwoba_matchups.domain.player_split import PlayerSplit, Role
from xwoba_matchups.domain.venue import Venue

_SAVANT_FILENAME = re.compile(r"savant_stats_(\d{4})_(batter|pitcher)_vs_([RL])H\.csv$")

# Savant header -> split field; values in these columns are percentages (23.4 -> 0.234).
_SAVANT_PERCENT_COLUMNS: dict[str, str] = {
    "barrels_per_pa_percent": "barrels_per_pa",
    "hardhit_percent": "hard_hit_pct",
    "gb_percent": "groundball_pct",
    "ld_percent": "line_drive_pct",
    "fb_percent": "flyball_pct",
    "k_percent": "k_percent",
    "bb_percent": "bb_percent",
    "swing_miss_percent": "swing_miss_percent",
}

_SAVANT_FLOAT_COLUMNS: dict[str, str] = {
    "ba": "ba",
    "obp": "obp",
    "slg": "slg",
    "woba": "woba",
    "xwoba": "xwoba",
    "xba": "xba",
    "xobp": "xobp",
    "xslg": "xslg",
    "iso": "iso",
    "babip": "babip",
    "launch_speed": "avg_exit_velocity",
    "max_launch_speed": "max_exit_velocity",
    "launch_angle": "avg_launch_angle",
}

_SAVANT_INT_COLUMNS: dict[str, str] = {
    "pa": "pa",
    "ab": "ab",
    "barrels_total": "barrels",
    "hrs": "hrs",
}


def _to_optional_int(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return None
        return int(float(value))
    return int(value)


def _to_optional_float(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if value == "":
            return None
    return float(value)


def _to_optional_str(value: Any) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def parse_savant_filename(path: str | Path) -> tuple[int, Role, str] | None:
    """Extract (season, role, opposing hand) from a Savant export file name."""
    match = _SAVANT_FILENAME.search(Path(path).name)
    if match is None:
        return None
    return int(match.group(1)), Role(match.group(2)), match.group(3)


def make_savant_split_mapper(season: int, role: Role, vs_handedness: str) -> Callable[[dict[str, Any]], PlayerSplit | None]:
    def mapper(row: dict[str, Any]) -> PlayerSplit | None:
        player_id = _to_optional_int(row.get("player_id"))
        if player_id is None:
            return None
        values: dict[str, Any] = {
            "player_name": _to_optional_str(row.get("last_name, first_name") or row.get("player_name")),
        }
        for column, field in _SAVANT_INT_COLUMNS.items():
            values[field] = _to_optional_int(row.get(column))
        for column, field in _SAVANT_FLOAT_COLUMNS.items():
            values[field] = _to_optional_float(row.get(column))
        for column, field in _SAVANT_PERCENT_COLUMNS.items():
            pct = _to_optional_float(row.get(column))
            values[field] = pct / 100 if pct is not None else None
        return PlayerSplit(player_id=player_id, season=season, role=role, vs_handedness=vs_handedness, **values)

    return mapper


def schedule_row_to_game(row: dict[str, Any]) -> ScheduledGame | None:
    game_pk = _to_optional_int(row.get("game_pk"))
    home_team_id = _to_optional_int(row.get("home_team_id"))
    away_team_id = _to_optional_int(row.get("away_team_id"))
    official_date = _to_optional_str(row.get("official_date"))
    if game_pk is None or home_team_id is None or away_team_id is None or official_date is None:
        return None

    def order(side: str) -> tuple[int, ...] | None:
        lineup = row.get(f"{side}_lineup")
        return tuple(p["id"] for p in lineup) if lineup else None

    return ScheduledGame(
        game_pk=game_pk,
        official_date=official_date,
        home_team_id=home_team_id,
        away_team_id=away_team_id,
        game_datetime_utc=_to_optional_str(row.get("game_datetime_utc")),
        detailed_state=_to_optional_str(row.get("detailed_state")),
        venue_id=_to_optional_int(row.get("venue_id")),
        home_batting_order=order("home"),
        away_batting_order=order("away"),
        home_probable_pitcher_id=_to_optional_int(row.get("home_probable_pitcher_id")),
        away_probable_pitcher_id=_to_optional_int(row.get("away_probable_pitcher_id")),
    )


def schedule_row_to_teams(row: dict[str, Any]) -> list[Team]:
    teams: list[Team] = []
    venue_id = _to_optional_int(row.get("venue_id"))
    for side in ("home", "away"):
        team_id = _to_optional_int(row.get(f"{side}_team_id"))
        name = _to_optional_str(row.get(f"{side}_team_name"))
        if team_id is None or name is None:
            continue
        teams.append(
            Team(
                id=team_id,
                name=name,
                abbreviation=_to_optional_str(row.get(f"{side}_team_abbreviation")),
                venue_id=venue_id if side == "home" else None,
            )
        )
    return teams


def schedule_row_to_probable_pitchers(row: dict[str, Any]) -> list[Player]:
    pitchers: list[Player] = []
    for side in ("home", "away"):
        pitcher_id = _to_optional_int(row.get(f"{side}_probable_pitcher_id"))
        if pitcher_id is None:
            continue
        pitchers.append(
            Player(
                mlbam_id=pitcher_id,
                full_name=_to_optional_str(row.get(f"{side}_probable_pitcher_name")),
                team_id=_to_optional_int(row.get(f"{side}_team_id")),
            )
        )
    return pitchers

def schedule_row_to_venue(row: dict[str, Any]) -> Venue | None:
    venue_id = _to_optional_int(row.get("venue_id"))
    name = _to_optional_str(row.get("venue_name"))
    if venue_id is None or name is None:
        return None
    return Venue(
        id=venue_id,
        name=name,
        city=_to_optional_str(row.get("venue_city")),
        state=_to_optional_str(row.get("venue_state")),
        roof_type=_to_optional_str(row.get("venue_roof_type")),
        latitude=_to_optional_float(row.get("venue_latitude")),
        longitude=_to_optional_float(row.get("venue_longitude")),
    )


def people_row_to_player(row: dict[str, Any]) -> Player | None:
    mlbam_id = _to_optional_int(row.get("mlbam_id"))
    if mlbam_id is None:
        return None
    bats = _to_optional_str(row.get("bats"))
    throws = _to_optional_str(row.get("throws"))
    return Player(
        mlbam_id=mlbam_id,
        full_name=_to_optional_str(row.get("full_name")),
        bats=bats if bats in ("L", "R", "S") else None,
        throws=throws if throws in ("L", "R") else None,
        team_id=_to_optional_int(row.get("team_id")),
    )
