import sqlite3
from typing import Any

from xwoba_matchups.domain.game import PlayerRef, ResolvedGame, TeamSide
from xwoba_matchups.domain.matchup import DailyMatchup, MatchupPair
from xwoba_matchups.domain.player import Player
from xwoba_matchups.domain.player_split import PlayerSplit, Role
from xwoba_matchups.repos.player_repo import SqlitePlayerRepo
from xwoba_matchups.repos.player_split_repo import SqlitePlayerSplitRepo


def make_split(
    player_id: int = 1,
    role: Role = Role.BATTER,
    vs_handedness: str = "R",
    season: int = 0,
    **overrides: Any,
) -> PlayerSplit:
    """A split row with every metric the averaging step needs."""
    values: dict[str, Any] = {
        "player_name": f"Player {player_id}",
        "pa": 400,
        "ab": 360,
        "xwoba": 0.320,
        "avg_launch_angle": 12.0,
        "barrels_per_pa": 0.06,
        "hard_hit_pct": 0.40,
        "avg_exit_velocity": 89.0,
        "k_percent": 0.22,
        "bb_percent": 0.08,
        "iso": 0.170,
        "swing_miss_percent": 0.25,
        "hrs": 12,
    }
    values.update(overrides)
    return PlayerSplit(player_id=player_id, season=season, role=role, vs_handedness=vs_handedness, **values)


def seed_player(
    conn: sqlite3.Connection,
    mlbam_id: int,
    *,
    bats: str | None = "R",
    throws: str | None = "R",
    full_name: str | None = None,
) -> int:
    repo = SqlitePlayerRepo(conn)
    repo.upsert(Player(mlbam_id=mlbam_id, full_name=full_name or f"Player {mlbam_id}", bats=bats, throws=throws))
    conn.commit()
    return mlbam_id


def stored_player(conn: sqlite3.Connection, mlbam_id: int) -> Player | None:
    found = SqlitePlayerRepo(conn).get_by_mlbam_ids([mlbam_id])
    return found[0] if found else None


def seed_splits(conn: sqlite3.Connection, *splits: PlayerSplit) -> None:
    repo = SqlitePlayerSplitRepo(conn)
    for split in splits:
        repo.upsert(split)
    conn.commit()


def refs(*ids: int) -> tuple[PlayerRef, ...]:
    return tuple(PlayerRef(player_id=pid, full_name=f"Player {pid}") for pid in ids)


def make_game(
    *,
    game_pk: int = 777001,
    game_date: str = "2025-05-12",
    home_order: tuple[PlayerRef, ...] | None = None,
    away_order: tuple[PlayerRef, ...] | None = None,
    home_roster: tuple[PlayerRef, ...] = (),
    away_roster: tuple[PlayerRef, ...] = (),
    home_pitcher: int | None = 900,
    away_pitcher: int | None = 901,
) -> ResolvedGame:
    return ResolvedGame(
        game_pk=game_pk,
        game_date=game_date,
        home=TeamSide(
            team_id=147,
            label="NYY",
            probable_pitcher=PlayerRef(home_pitcher, f"Pitcher {home_pitcher}") if home_pitcher else None,
            batting_order=home_order,
            roster=home_roster,
        ),
        away=TeamSide(
            team_id=111,
            label="BOS",
            probable_pitcher=PlayerRef(away_pitcher, f"Pitcher {away_pitcher}") if away_pitcher else None,
            batting_order=away_order,
            roster=away_roster,
        ),
    )


def make_pair(batter_id: int = 1, pitcher_id: int = 900, lineup_position: int | None = 1) -> MatchupPair:
    return MatchupPair(
        game_pk=777001,
        game_date="2025-05-12",
        home_team_id=147,
        away_team_id=111,
        home_team="NYY",
        away_team="BOS",
        batter=PlayerRef(batter_id, f"Batter {batter_id}"),
        batter_team_id=111,
        batter_team="BOS",
        pitcher=PlayerRef(pitcher_id, f"Pitcher {pitcher_id}"),
        pitcher_team_id=147,
        pitcher_team="NYY",
        lineup_position=lineup_position,
    )


def make_matchup(**overrides: Any) -> DailyMatchup:
    values: dict[str, Any] = {
        "game_date": "2025-05-12",
        "game_pk": 777001,
        "home_team_id": 147,
        "away_team_id": 111,
        "home_team": "NYY",
        "away_team": "BOS",
        "batter_id": 1,
        "batter_name": "Batter 1",
        "batter_team_id": 111,
        "batter_team": "BOS",
        "pitcher_id": 900,
        "pitcher_name": "Pitcher 900",
        "pitcher_team_id": 147,
        "pitcher_team": "NYY",
        "lineup_position": 1,
        "batter_hand": "L",
        "batter_side": "L",
        "pitcher_hand": "R",
        "avg_xwoba": 0.341,
        "avg_launch_angle": 12.5,
        "avg_barrels_per_pa": 0.07,
        "avg_hard_hit_pct": 0.42,
        "avg_exit_velocity": 90.1,
        "avg_k_percent": 0.21,
        "avg_bb_percent": 0.09,
        "avg_iso": 0.180,
        "avg_swing_miss_percent": 0.24,
        "avg_hr_per_pa": 0.03,
    }
    values.update(overrides)
    return DailyMatchup(**values)


def load_logs(conn: sqlite3.Connection, target_table: str) -> list[sqlite3.Row]:
    return conn.execute("SELECT * FROM load_log WHERE target_table = ? ORDER BY id", (target_table,)).fetchall()


def stored_split(conn: sqlite3.Connection, player_id: int, season: int, role: Role, vs_handedness: str) -> PlayerSplit | None:
    for split in SqlitePlayerSplitRepo(conn).get_for_players([player_id], season):
        if (split.role, split.vs_handedness) == (role, vs_handedness):
            return split
    return None


def split_count(conn: sqlite3.Connection, season: int | None = None) -> int:
    if season is None:
        return conn.execute("SELECT COUNT(*) FROM player_split").fetchone()[0]
    return conn.execute("SELECT COUNT(*) FROM player_split WHERE season = ?", (season,)).fetchone()[0]
