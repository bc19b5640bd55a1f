import logging
from typing import Any

from xwoba_matchups.ingest.mlb_api import MLBApiSource

logger = logging.getLogger(__name__)

_HYDRATE = "probablePitcher,lineups,team,venue(location,fieldInfo)"


def _lineup(players: list[dict[str, Any]] | None) -> list[dict[str, Any]] | None:
    if not players:
        return None
    return [{"id": p["id"], "full_name": p.get("fullName")} for p in players if p.get("id") is not None]


def _flatten_game(game: dict[str, Any]) -> dict[str, Any]:
    teams = game.get("teams", {})
    venue = game.get("venue") or {}
    location = venue.get("location") or {}
    coordinates = location.get("defaultCoordinates") or {}
    lineups = game.get("lineups") or {}

    row: dict[str, Any] = {
        "game_pk": game.get("gamePk"),
        "official_date": game.get("officialDate"),
        "game_datetime_utc": game.get("gameDate"),
        "detailed_state": (game.get("status") or {}).get("detailedState"),
        "venue_id": venue.get("id"),
        "venue_name": venue.get("name"),
        "venue_city": location.get("city"),
        "venue_state": location.get("stateAbbrev") or location.get("state"),
        "venue_roof_type": (venue.get("fieldInfo") or {}).get("roofType"),
        "venue_latitude": coordinates.get("latitude"),
        "venue_longitude": coordinates.get("longitude"),
        "home_lineup": _lineup(lineups.get("homePlayers")),
        "away_lineup": _lineup(lineups.get("awayPlayers")),
    }
    for side in ("home", "away"):
        entry = teams.get(side) or {}
        team = entry.get("team") or {}
        pitcher = entry.get("probablePitcher") or {}
        row[f"{side}_team_id"] = team.get("id")
        row[f"{side}_team_name"] = team.get("name")
        row[f"{side}_team_abbreviation"] = team.get("abbreviation")
        row[f"{side}_probable_pitcher_id"] = pitcher.get("id")
        row[f"{side}_probable_pitcher_name"] = pitcher.get("fullName")
    return row


class MLBScheduleSource(MLBApiSource):
    """Daily MLB schedule hydrated with probable pitchers, posted lineups, teams and venues.

    ``fetch(start_date=..., end_date=...)`` returns one flat dict per game; lineups
    are lists of ``{"id", "full_name"}`` or ``None`` when not yet posted.
    """

    _source_detail = "schedule"

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        start_date: str = params["start_date"]
        end_date: str = params.get("end_date", start_date)
        data = self._get_json(
            "schedule",
            {"sportId": 1, "startDate": start_date, "endDate": end_date, "hydrate": _HYDRATE},
        )
        rows = [_flatten_game(game) for day in data.get("dates", []) for game in day.get("games", [])]
        logger.info("Fetched %d scheduled games for %s..%s", len(rows), start_date, end_date)
        return rows
