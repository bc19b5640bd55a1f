import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Protocol

from xwoba_matchups.domain.player import Player
from xwoba_matchups.ingest.column_maps import people_row_to_player
from xwoba_matchups.repos._batching import DEFAULT_CHUNK_SIZE
from xwoba_matchups.repos.protocols import PlayerRepo

logger = logging.getLogger(__name__)


class PeopleLookup(Protocol):
    def fetch(self, **params: Any) -> list[dict[str, Any]]: ...


@dataclass(frozen=True)
class Handedness:
    bats: str | None = None
    throws: str | None = None


def effective_batting_side(bats: str, pitcher_throws: str) -> str:
    """Side of the plate a batter hits from against a pitcher throwing with *pitcher_throws*.

    Switch hitters bat left against right-handers and right against left-handers.
    """
    if pitcher_throws not in ("L", "R"):
        raise ValueError(f"unknown pitching hand {pitcher_throws!r}")
    if bats in ("L", "R"):
        return bats
    if bats == "S":
        return "L" if pitcher_throws == "R" else "R"
    raise ValueError(f"unknown batting side {bats!r}")


class HandednessResolver:
    """Look up bat side and throwing hand, preferring the local player table.

    Players the table does not know (or knows without handedness) are fetched from
    the people endpoint and remembered for the life of the resolver. Nothing is
    written back; the player table is only filled by schedule ingest. Lookup
    failures leave those players unresolved and callers skip the affected pairs.
    """

    def __init__(
        self,
        player_repo: PlayerRepo,
        people_source: PeopleLookup | None = None,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._player_repo = player_repo
        self._people_source = people_source
        self._chunk_size = chunk_size
        self._fetched: dict[int, Player] = {}

    def resolve(self, player_ids: Iterable[int]) -> dict[int, Handedness]:
        wanted = list(dict.fromkeys(player_ids))
        known = {p.mlbam_id: p for p in self._player_repo.get_by_mlbam_ids(wanted)}
        for pid in wanted:
            if pid in self._fetched:
                known[pid] = self._merge(known.get(pid), self._fetched[pid])
        missing = [pid for pid in wanted if not self._is_complete(known.get(pid))]
        if missing and self._people_source is not None:
            for player in self._fetch_people(missing):
                self._fetched[player.mlbam_id] = player
                known[player.mlbam_id] = self._merge(known.get(player.mlbam_id), player)

        resolved = {pid: Handedness(bats=known[pid].bats, throws=known[pid].throws) for pid in wanted if pid in known}
        logger.debug("Resolved handedness for %d of %d players", len(resolved), len(wanted))
        return resolved

    @staticmethod
    def _is_complete(player: Player | None) -> bool:
        return player is not None and player.bats is not None and player.throws is not None

    @staticmethod
    def _merge(existing: Player | None, fetched: Player) -> Player:
        if existing is None:
            return fetched
        return Player(
            mlbam_id=fetched.mlbam_id,
            full_name=fetched.full_name or existing.full_name,
            bats=fetched.bats or existing.bats,
            throws=fetched.throws or existing.throws,
            team_id=fetched.team_id or existing.team_id,
        )

    def _fetch_people(self, player_ids: list[int]) -> list[Player]:
        assert self._people_source is not None
        try:
            rows = self._people_source.fetch(person_ids=player_ids, chunk_size=self._chunk_size)
        except Exception as exc:
            logger.warning("Handedness lookup failed for %d players: %s", len(player_ids), exc)
            return []

        players = [p for p in (people_row_to_player(row) for row in rows) if p is not None]
        logger.info("Fetched handedness for %d of %d unknown players", len(players), len(player_ids))
        return players
