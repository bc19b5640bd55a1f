import logging
import sqlite3
import time
from datetime import datetime, timezone

from xwoba_matchups.domain.errors import MatchupsError, MatchupWriteError, ScheduleFetchError
from xwoba_matchups.domain.load_log import LoadLog, LoadStatus
from xwoba_matchups.domain.matchup import DailyMatchup, MatchupPair, MatchupRunReport, PairSkip
from xwoba_matchups.domain.result import Err, Ok, Result
from xwoba_matchups.exceptions import ScheduleUnavailableError
from xwoba_matchups.repos.protocols import DailyMatchupRepo, LoadLogRepo, PlayerSplitRepo
from xwoba_matchups.services.handedness import HandednessResolver
from xwoba_matchups.services.pair_generator import generate_pairs
from xwoba_matchups.services.schedule_resolver import ScheduleResolver
from xwoba_matchups.services.split_averager import SplitAverager, SplitIndex

logger = logging.getLogger(__name__)

_TARGET_TABLE = "daily_matchup"


class MatchupPipeline:
    """Compute and store every batter-vs-probable-starter matchup for one date."""

    def __init__(
        self,
        resolver: ScheduleResolver,
        handedness: HandednessResolver,
        split_repo: PlayerSplitRepo,
        matchup_repo: DailyMatchupRepo,
        load_log_repo: LoadLogRepo | None = None,
        *,
        split_season: int = 0,
        strict_secondary: bool = True,
        prune_stale: bool = False,
    ) -> None:
        self._resolver = resolver
        self._handedness = handedness
        self._split_repo = split_repo
        self._matchup_repo = matchup_repo
        self._load_log_repo = load_log_repo
        self._split_season = split_season
        self._strict_secondary = strict_secondary
        self._prune_stale = prune_stale

    def run(self, game_date: str) -> Result[MatchupRunReport, MatchupsError]:
        started_at = datetime.now(timezone.utc).isoformat()
        t0 = time.perf_counter()
        logger.info("Computing matchups for %s", game_date)

        try:
            games = self._resolver.resolve(game_date)
        except ScheduleUnavailableError as exc:
            self._log_run(started_at, 0, str(exc))
            return Err(ScheduleFetchError(message=str(exc), game_date=game_date))

        pairs: list[MatchupPair] = [pair for game in games for pair in generate_pairs(game)]
        player_ids = {p.batter.player_id for p in pairs} | {p.pitcher.player_id for p in pairs}
        handedness = self._handedness.resolve(sorted(player_ids))
        index = SplitIndex(self._split_repo.get_for_players(sorted(player_ids), self._split_season))
        logger.debug("Loaded %d season-%d split rows for %d players", len(index), self._split_season, len(player_ids))

        averager = SplitAverager(index, strict_secondary=self._strict_secondary)
        matchups: list[DailyMatchup] = []
        skips: list[PairSkip] = []
        for pair in pairs:
            match averager.average(pair, handedness):
                case Ok(matchup):
                    matchups.append(matchup)
                case Err(skip):
                    skips.append(skip)

        try:
            pruned = self._matchup_repo.upsert_many(
                matchups,
                prune_date=game_date if self._prune_stale else None,
                prune_game_pks=[g.game_pk for g in games],
            )
        except sqlite3.Error as exc:
            logger.error("Writing %d matchups for %s failed: %s", len(matchups), game_date, exc)
            self._log_run(started_at, 0, str(exc))
            return Err(MatchupWriteError(message=str(exc), game_date=game_date, rows_attempted=len(matchups)))

        report = MatchupRunReport(
            game_date=game_date,
            games_resolved=len(games),
            pairs_generated=len(pairs),
            rows_written=len(matchups),
            rows_pruned=pruned,
            skips=tuple(skips),
        )
        self._log_run(started_at, len(matchups), None)
        logger.info(
            "Matchups for %s: %d games, %d pairs, %d written, %d skipped, %d pruned in %.1fs",
            game_date,
            report.games_resolved,
            report.pairs_generated,
            report.rows_written,
            len(skips),
            pruned,
            time.perf_counter() - t0,
        )
        return Ok(report)

    def _log_run(self, started_at: str, rows: int, error: str | None) -> None:
        if self._load_log_repo is None:
            return
        self._load_log_repo.insert(
            LoadLog(
                source_type="pipeline",
                source_detail="compute_matchups",
                target_table=_TARGET_TABLE,
                rows_loaded=rows,
                started_at=started_at,
                finished_at=datetime.now(timezone.utc).isoformat(),
                status=LoadStatus.ERROR if error is not None else LoadStatus.SUCCESS,
                error_message=error,
            )
        )
