import logging
from typing import Any

import httpx

from xwoba_matchups.domain.game import PlayerRef, ResolvedGame, TeamSide
from xwoba_matchups.exceptions import ScheduleUnavailableError
from xwoba_matchups.ingest.column_maps import schedule_row_to_game
from xwoba_matchups.ingest.protocols import DataSource
from xwoba_matchups.services.pair_generator import FULL_LINEUP

logger = logging.getLogger(__name__)

_SIDES = ("home", "away")


def _refs(players: list[dict[str, Any]] | None) -> tuple[PlayerRef, ...] | None:
    if not players:
        return None
    return tuple(PlayerRef(player_id=p["id"], full_name=p.get("full_name")) for p in players)


def _needs_roster(order: tuple[PlayerRef, ...] | None) -> bool:
    return order is None or len(order) < FULL_LINEUP


class ScheduleResolver:
    """Resolve a date's games into both sides' probable starters, posted orders and active rosters.

    The schedule itself is required: if it cannot be fetched the whole run fails with
    ``ScheduleUnavailableError``. Boxscore and roster lookups are best effort and a
    failure only narrows what the affected game can offer.
    """

    def __init__(
        self,
        schedule_source: DataSource,
        roster_source: DataSource,
        boxscore_source: DataSource | None = None,
    ) -> None:
        self._schedule_source = schedule_source
        self._roster_source = roster_source
        self._boxscore_source = boxscore_source

    def resolve(self, game_date: str) -> list[ResolvedGame]:
        try:
            rows = self._schedule_source.fetch(start_date=game_date, end_date=game_date)
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Schedule fetch for %s failed: %s", game_date, exc)
            raise ScheduleUnavailableError(game_date, exc) from exc

        roster_cache: dict[int, tuple[PlayerRef, ...]] = {}
        games: list[ResolvedGame] = []
        for row in rows:
            if schedule_row_to_game(row) is None:
                logger.warning("Skipping schedule entry without game or team ids: %s", row.get("game_pk"))
                continue
            games.append(self._resolve_game(row, game_date, roster_cache))
        logger.info("Resolved %d games for %s", len(games), game_date)
        return games

    def _resolve_game(
        self,
        row: dict[str, Any],
        game_date: str,
        roster_cache: dict[int, tuple[PlayerRef, ...]],
    ) -> ResolvedGame:
        game_pk: int = row["game_pk"]
        orders = {side: _refs(row.get(f"{side}_lineup")) for side in _SIDES}
        if any(order is None for order in orders.values()):
            for side, order in self._boxscore_orders(game_pk).items():
                if orders[side] is None:
                    orders[side] = order

        sides: dict[str, TeamSide] = {}
        for side in _SIDES:
            team_id: int = row[f"{side}_team_id"]
            pitcher_id = row.get(f"{side}_probable_pitcher_id")
            order = orders[side]
            roster = self._roster(team_id, game_date, roster_cache) if _needs_roster(order) else ()
            sides[side] = TeamSide(
                team_id=team_id,
                label=row.get(f"{side}_team_abbreviation") or row.get(f"{side}_team_name") or str(team_id),
                probable_pitcher=(
                    PlayerRef(player_id=pitcher_id, full_name=row.get(f"{side}_probable_pitcher_name"))
                    if pitcher_id is not None
                    else None
                ),
                batting_order=order,
                roster=roster,
            )
        return ResolvedGame(game_pk=game_pk, game_date=game_date, home=sides["home"], away=sides["away"])

    def _boxscore_orders(self, game_pk: int) -> dict[str, tuple[PlayerRef, ...]]:
        if self._boxscore_source is None:
            return {}
        try:
            rows = self._boxscore_source.fetch(game_pk=game_pk)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Boxscore for game %d unavailable, falling back to rosters: %s", game_pk, exc)
            return {}
        orders: dict[str, tuple[PlayerRef, ...]] = {}
        for row in rows:
            refs = _refs(row.get("lineup"))
            if refs is not None:
                orders[row["side"]] = refs
        return orders

    def _roster(
        self,
        team_id: int,
        game_date: str,
        cache: dict[int, tuple[PlayerRef, ...]],
    ) -> tuple[PlayerRef, ...]:
        if team_id in cache:
            return cache[team_id]
        try:
            rows = self._roster_source.fetch(team_id=team_id, date=game_date)
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Active roster for team %d unavailable: %s", team_id, exc)
            rows = []
        roster = tuple(PlayerRef(player_id=r["mlbam_id"], full_name=r.get("full_name")) for r in rows)
        cache[team_id] = roster
        return roster
