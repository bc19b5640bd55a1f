import logging

from xwoba_matchups.domain.game import PlayerRef, ResolvedGame, TeamSide
from xwoba_matchups.domain.matchup import MatchupPair

logger = logging.getLogger(__name__)

FULL_LINEUP = 9


def _batters_for(side: TeamSide) -> list[tuple[PlayerRef, int | None]]:
    """Batters a side will send up, with 1-based lineup positions where known.

    A complete posted order is used as-is. A short order is topped up from the
    active roster with unknown positions, and with no order the whole active
    roster is used.
    """
    batters: list[tuple[PlayerRef, int | None]] = []
    seen: set[int] = set()
    order = side.batting_order or ()
    for position, player in enumerate(order, start=1):
        if player.player_id in seen:
            continue
        seen.add(player.player_id)
        batters.append((player, position))
    if len(order) >= FULL_LINEUP:
        return batters

    for player in side.roster:
        if player.player_id in seen:
            continue
        seen.add(player.player_id)
        batters.append((player, None))
    return batters


def _pairs_for_side(game: ResolvedGame, batting: TeamSide, pitching: TeamSide) -> list[MatchupPair]:
    pitcher = pitching.probable_pitcher
    if pitcher is None:
        logger.info(
            "No probable pitcher for %s in game %d, skipping %s batters",
            pitching.label,
            game.game_pk,
            batting.label,
        )
        return []

    pairs = [
        MatchupPair(
            game_pk=game.game_pk,
            game_date=game.game_date,
            home_team_id=game.home.team_id,
            away_team_id=game.away.team_id,
            home_team=game.home.label,
            away_team=game.away.label,
            batter=batter,
            batter_team_id=batting.team_id,
            batter_team=batting.label,
            pitcher=pitcher,
            pitcher_team_id=pitching.team_id,
            pitcher_team=pitching.label,
            lineup_position=position,
        )
        for batter, position in _batters_for(batting)
    ]
    pairs.sort(key=lambda p: (p.lineup_position is None, p.lineup_position or 0, p.batter.player_id))
    return pairs


def generate_pairs(game: ResolvedGame) -> list[MatchupPair]:
    """One pair per batter in *game*: home batters face the away starter and vice versa."""
    pairs = _pairs_for_side(game, game.home, game.away) + _pairs_for_side(game, game.away, game.home)
    logger.debug("Generated %d pairs for game %d", len(pairs), game.game_pk)
    return pairs
