import logging
from typing import Any

from xwoba_matchups.ingest.mlb_api import MLBApiSource
from xwoba_matchups.repos._batching import DEFAULT_CHUNK_SIZE, id_chunks

logger = logging.getLogger(__name__)


class MLBPeopleSource(MLBApiSource):
    """Player bio lookups (name, bat side, pitch hand), requested in bounded id chunks."""

    _source_detail = "people"

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        person_ids: list[int] = list(params["person_ids"])
        chunk_size: int = params.get("chunk_size", DEFAULT_CHUNK_SIZE)

        rows: list[dict[str, Any]] = []
        for chunk in id_chunks(person_ids, chunk_size):
            data = self._get_json("people", {"personIds": ",".join(str(pid) for pid in chunk)})
            for person in data.get("people", []):
                rows.append(
                    {
                        "mlbam_id": person["id"],
                        "full_name": person.get("fullName"),
                        "bats": (person.get("batSide") or {}).get("code"),
                        "throws": (person.get("pitchHand") or {}).get("code"),
                        "team_id": (person.get("currentTeam") or {}).get("id"),
                    }
                )
        logger.debug("Fetched %d people for %d requested ids", len(rows), len(person_ids))
        return rows
