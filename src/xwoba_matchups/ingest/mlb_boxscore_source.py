import logging
from typing import Any

from xwoba_matchups.ingest.mlb_api import MLBApiSource

logger = logging.getLogger(__name__)


class MLBBoxscoreSource(MLBApiSource):
    """Batting orders from a game's live boxscore, one row per side that has one."""

    _source_detail = "boxscore"

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        game_pk: int = params["game_pk"]
        data = self._get_json(f"game/{game_pk}/boxscore")

        rows: list[dict[str, Any]] = []
        for side in ("home", "away"):
            team = (data.get("teams") or {}).get(side) or {}
            order = team.get("battingOrder") or []
            if not order:
                continue
            players = team.get("players") or {}
            lineup = [
                {"id": pid, "full_name": ((players.get(f"ID{pid}") or {}).get("person") or {}).get("fullName")}
                for pid in order
            ]
            rows.append({"side": side, "lineup": lineup})
        logger.debug("Boxscore for game %d has %d batting orders", game_pk, len(rows))
        return rows
