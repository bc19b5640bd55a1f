import logging
from collections import defaultdict
from collections.abc import Iterable

from xwoba_matchups.domain.game import ScheduledGame
from xwoba_matchups.domain.matchup import DailyMatchup, GameMatchups, ProbablePitcher
from xwoba_matchups.domain.player import Player
from xwoba_matchups.repos.protocols import DailyMatchupRepo, PlayerRepo, ScheduledGameRepo, TeamRepo, VenueRepo

logger = logging.getLogger(__name__)


def display_order(matchups: Iterable[DailyMatchup]) -> list[DailyMatchup]:
    """Lineup position ascending with unknown positions last, then xwOBA descending."""
    return sorted(
        matchups,
        key=lambda m: (m.lineup_position is None, m.lineup_position or 0, -m.avg_xwoba, m.batter_id),
    )


class MatchupReportService:
    def __init__(
        self,
        game_repo: ScheduledGameRepo,
        matchup_repo: DailyMatchupRepo,
        team_repo: TeamRepo,
        venue_repo: VenueRepo,
        player_repo: PlayerRepo,
    ) -> None:
        self._game_repo = game_repo
        self._matchup_repo = matchup_repo
        self._team_repo = team_repo
        self._venue_repo = venue_repo
        self._player_repo = player_repo

    def games_for_date(self, game_date: str) -> list[GameMatchups]:
        """Games scheduled on *game_date* in start-time order, each with its two matchup lists.

        Games that have stored matchups but were never written to the schedule
        table are appended after the scheduled ones.
        """
        games = self._game_repo.get_by_date(game_date)
        by_game: dict[int, list[DailyMatchup]] = defaultdict(list)
        for matchup in self._matchup_repo.get_by_date(game_date):
            by_game[matchup.game_pk].append(matchup)

        pitcher_ids = [pid for g in games for pid in (g.home_probable_pitcher_id, g.away_probable_pitcher_id) if pid]
        pitchers = {p.mlbam_id: p for p in self._player_repo.get_by_mlbam_ids(pitcher_ids)}

        result = [self._build(game, by_game.pop(game.game_pk, []), pitchers) for game in games]
        for game_pk in sorted(by_game):
            result.append(self._build_from_matchups(game_date, game_pk, by_game[game_pk]))
        logger.debug("Report for %s: %d games", game_date, len(result))
        return result

    def top_matchups(self, game_date: str, limit: int = 25) -> list[DailyMatchup]:
        return self._matchup_repo.get_top_by_date(game_date, limit)

    def _label(self, team_id: int, fallback: str | None) -> str:
        team = self._team_repo.get_by_id(team_id)
        if team is not None:
            return team.label
        return fallback or str(team_id)

    def _pitcher(
        self,
        pitcher_id: int | None,
        pitchers: dict[int, Player],
        matchups: list[DailyMatchup],
    ) -> ProbablePitcher | None:
        if pitcher_id is None:
            return None
        player = pitchers.get(pitcher_id)
        seen = next((m for m in matchups if m.pitcher_id == pitcher_id), None)
        return ProbablePitcher(
            player_id=pitcher_id,
            full_name=(player.full_name if player else None) or (seen.pitcher_name if seen else None),
            throws=(player.throws if player else None) or (seen.pitcher_hand if seen else None),
        )

    def _build(self, game: ScheduledGame, matchups: list[DailyMatchup], pitchers: dict[int, Player]) -> GameMatchups:
        sample = matchups[0] if matchups else None
        return GameMatchups(
            game_pk=game.game_pk,
            official_date=game.official_date,
            game_datetime_utc=game.game_datetime_utc,
            detailed_state=game.detailed_state,
            home_team_id=game.home_team_id,
            away_team_id=game.away_team_id,
            home_team=self._label(game.home_team_id, sample.home_team if sample else None),
            away_team=self._label(game.away_team_id, sample.away_team if sample else None),
            venue=self._venue_repo.get_by_id(game.venue_id) if game.venue_id is not None else None,
            home_pitcher=self._pitcher(game.home_probable_pitcher_id, pitchers, matchups),
            away_pitcher=self._pitcher(game.away_probable_pitcher_id, pitchers, matchups),
            away_batters=tuple(display_order(m for m in matchups if not m.batter_is_home)),
            home_batters=tuple(display_order(m for m in matchups if m.batter_is_home)),
        )

    def _build_from_matchups(self, game_date: str, game_pk: int, matchups: list[DailyMatchup]) -> GameMatchups:
        sample = matchups[0]
        away_batters = display_order(m for m in matchups if not m.batter_is_home)
        home_batters = display_order(m for m in matchups if m.batter_is_home)
        home_pitcher = away_batters[0] if away_batters else None
        away_pitcher = home_batters[0] if home_batters else None
        return GameMatchups(
            game_pk=game_pk,
            official_date=game_date,
            game_datetime_utc=None,
            detailed_state=None,
            home_team_id=sample.home_team_id,
            away_team_id=sample.away_team_id,
            home_team=self._label(sample.home_team_id, sample.home_team),
            away_team=self._label(sample.away_team_id, sample.away_team),
            home_pitcher=(
                ProbablePitcher(home_pitcher.pitcher_id, home_pitcher.pitcher_name, home_pitcher.pitcher_hand)
                if home_pitcher
                else None
            ),
            away_pitcher=(
                ProbablePitcher(away_pitcher.pitcher_id, away_pitcher.pitcher_name, away_pitcher.pitcher_hand)
                if away_pitcher
                else None
            ),
            away_batters=tuple(away_batters),
            home_batters=tuple(home_batters),
        )
