import json
import sqlite3

from xwoba_matchups.domain.game import ScheduledGame


def _encode_order(order: tuple[int, ...] | None) -> str | None:
    return json.dumps(list(order)) if order is not None else None


def _decode_order(raw: str | None) -> tuple[int, ...] | None:
    return tuple(json.loads(raw)) if raw is not None else None


class SqliteScheduledGameRepo:
    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def upsert(self, game: ScheduledGame) -> int:
        self._conn.execute(
            """INSERT INTO scheduled_game
                   (game_pk, official_date, game_datetime_utc, detailed_state,
                    home_team_id, away_team_id, venue_id,
                    home_batting_order, away_batting_order,
                    home_probable_pitcher_id, away_probable_pitcher_id)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
               ON CONFLICT(game_pk) DO UPDATE SET
                   official_date=excluded.official_date,
                   game_datetime_utc=excluded.game_datetime_utc,
                   detailed_state=excluded.detailed_state,
                   home_team_id=excluded.home_team_id,
                   away_team_id=excluded.away_team_id,
                   venue_id=excluded.venue_id,
                   home_batting_order=excluded.home_batting_order,
                   away_batting_order=excluded.away_batting_order,
                   home_probable_pitcher_id=excluded.home_probable_pitcher_id,
                   away_probable_pitcher_id=excluded.away_probable_pitcher_id""",
            (
                game.game_pk,
                game.official_date,
                game.game_datetime_utc,
                game.detailed_state,
                game.home_team_id,
                game.away_team_id,
                game.venue_id,
                _encode_order(game.home_batting_order),
                _encode_order(game.away_batting_order),
                game.home_probable_pitcher_id,
                game.away_probable_pitcher_id,
            ),
        )
        return game.game_pk

    def get_by_date(self, official_date: str) -> list[ScheduledGame]:
        rows = self._conn.execute(
            "SELECT * FROM scheduled_game WHERE official_date = ? ORDER BY game_datetime_utc, game_pk",
            (official_date,),
        ).fetchall()
        return [self._row_to_game(row) for row in rows]

    @staticmethod
    def _row_to_game(row: sqlite3.Row) -> ScheduledGame:
        return ScheduledGame(
            game_pk=row["game_pk"],
            official_date=row["official_date"],
            game_datetime_utc=row["game_datetime_utc"],
            detailed_state=row["detailed_state"],
            home_team_id=row["home_team_id"],
            away_team_id=row["away_team_id"],
            venue_id=row["venue_id"],
            home_batting_order=_decode_order(row["home_batting_order"]),
            away_batting_order=_decode_order(row["away_batting_order"]),
            home_probable_pitcher_id=row["home_probable_pitcher_id"],
            away_probable_pitcher_id=row["away_probable_pitcher_id"],
        )
