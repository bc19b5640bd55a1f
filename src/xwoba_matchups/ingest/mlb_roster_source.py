import logging
from typing import Any

from xwoba_matchups.ingest.mlb_api import MLBApiSource

logger = logging.getLogger(__name__)


class MLBActiveRosterSource(MLBApiSource):
    _source_detail = "active_roster"

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        team_id: int = params["team_id"]
        query: dict[str, Any] = {"rosterType": "active"}
        if params.get("date") is not None:
            query["date"] = params["date"]
        data = self._get_json(f"teams/{team_id}/roster", query)

        rows: list[dict[str, Any]] = []
        for entry in data.get("roster", []):
            person = entry.get("person") or {}
            if person.get("id") is None:
                continue
            rows.append(
                {
                    "mlbam_id": person["id"],
                    "full_name": person.get("fullName"),
                    "team_id": team_id,
                    "position": (entry.get("position") or {}).get("abbreviation"),
                }
            )
        logger.debug("Fetched %d active roster players for team %d", len(rows), team_id)
        return rows
