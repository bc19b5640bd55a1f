import logging
from collections.abc import Iterable

from xwoba_matchups.domain.matchup import DailyMatchup, MatchupPair, PairSkip, SkipReason
from xwoba_matchups.domain.player_split import PlayerSplit, Role
from xwoba_matchups.domain.result import Err, Ok, Result
from xwoba_matchups.services.handedness import Handedness, effective_batting_side

logger = logging.getLogger(__name__)

# split field -> DailyMatchup field
CORE_METRICS: dict[str, str] = {
    "xwoba": "avg_xwoba",
    "avg_launch_angle": "avg_launch_angle",
    "barrels_per_pa": "avg_barrels_per_pa",
    "hard_hit_pct": "avg_hard_hit_pct",
    "avg_exit_velocity": "avg_exit_velocity",
}

SECONDARY_METRICS: dict[str, str] = {
    "k_percent": "avg_k_percent",
    "bb_percent": "avg_bb_percent",
    "iso": "avg_iso",
    "swing_miss_percent": "avg_swing_miss_percent",
}


class SplitIndex:
    """Split rows keyed by (player, role, opposing hand) for one season."""

    def __init__(self, splits: Iterable[PlayerSplit]) -> None:
        self._by_key: dict[tuple[int, Role, str], PlayerSplit] = {
            (s.player_id, s.role, s.vs_handedness): s for s in splits
        }

    def __len__(self) -> int:
        return len(self._by_key)

    def get(self, player_id: int, role: Role, vs_handedness: str) -> PlayerSplit | None:
        return self._by_key.get((player_id, role, vs_handedness))


def _describe(pair: MatchupPair) -> str:
    return (
        f"batter {pair.batter.full_name or '?'} ({pair.batter.player_id}) vs "
        f"pitcher {pair.pitcher.full_name or '?'} ({pair.pitcher.player_id})"
    )


def _hr_per_pa(split: PlayerSplit) -> float | None:
    if split.hrs is None or not split.pa:
        return None
    return split.hrs / split.pa


class SplitAverager:
    """Combine a pair's pitcher and batter split rows into one averaged matchup.

    The pitcher row is the one against the batter's effective side (switch hitters
    resolved against the pitcher's hand); the batter row is the one against the
    pitcher's actual hand. A pair is dropped unless both rows exist, every
    required metric is present on both, and both have positive plate appearances.
    With ``strict_secondary`` the secondary metrics and home runs are required
    too; otherwise they are averaged only when both sides have them.
    """

    def __init__(self, index: SplitIndex, *, strict_secondary: bool = True) -> None:
        self._index = index
        self._strict_secondary = strict_secondary

    def average(self, pair: MatchupPair, handedness: dict[int, Handedness]) -> Result[DailyMatchup, PairSkip]:
        batter_hand = handedness.get(pair.batter.player_id, Handedness()).bats
        pitcher_hand = handedness.get(pair.pitcher.player_id, Handedness()).throws
        if batter_hand is None or pitcher_hand is None:
            missing = []
            if batter_hand is None:
                missing.append("batter bat side")
            if pitcher_hand is None:
                missing.append("pitcher throwing hand")
            return self._skip(pair, SkipReason.MISSING_HANDEDNESS, f"{' and '.join(missing)} unknown")

        batter_side = effective_batting_side(batter_hand, pitcher_hand)
        pitcher_split = self._index.get(pair.pitcher.player_id, Role.PITCHER, batter_side)
        batter_split = self._index.get(pair.batter.player_id, Role.BATTER, pitcher_hand)
        if pitcher_split is None or batter_split is None:
            missing = []
            if pitcher_split is None:
                missing.append(f"pitcher split vs {batter_side}")
            if batter_split is None:
                missing.append(f"batter split vs {pitcher_hand}")
            return self._skip(pair, SkipReason.MISSING_SPLIT, ", ".join(missing) + " not found")

        required = list(CORE_METRICS)
        if self._strict_secondary:
            required += [*SECONDARY_METRICS, "hrs"]
        for role, split in (("pitcher", pitcher_split), ("batter", batter_split)):
            nulls = [name for name in required if getattr(split, name) is None]
            if nulls:
                return self._skip(pair, SkipReason.NULL_METRIC, f"{role} split missing {', '.join(nulls)}")
            if split.pa is None or split.pa <= 0:
                return self._skip(pair, SkipReason.NON_POSITIVE_PA, f"{role} split has pa={split.pa}")

        averages: dict[str, float | None] = {
            out: (getattr(pitcher_split, name) + getattr(batter_split, name)) / 2
            for name, out in CORE_METRICS.items()
        }
        for name, out in SECONDARY_METRICS.items():
            p, b = getattr(pitcher_split, name), getattr(batter_split, name)
            averages[out] = (p + b) / 2 if p is not None and b is not None else None
        p_rate, b_rate = _hr_per_pa(pitcher_split), _hr_per_pa(batter_split)
        averages["avg_hr_per_pa"] = (p_rate + b_rate) / 2 if p_rate is not None and b_rate is not None else None

        return Ok(
            DailyMatchup(
                game_date=pair.game_date,
                game_pk=pair.game_pk,
                home_team_id=pair.home_team_id,
                away_team_id=pair.away_team_id,
                home_team=pair.home_team,
                away_team=pair.away_team,
                batter_id=pair.batter.player_id,
                batter_name=pair.batter.full_name or batter_split.player_name,
                batter_team_id=pair.batter_team_id,
                batter_team=pair.batter_team,
                pitcher_id=pair.pitcher.player_id,
                pitcher_name=pair.pitcher.full_name or pitcher_split.player_name,
                pitcher_team_id=pair.pitcher_team_id,
                pitcher_team=pair.pitcher_team,
                lineup_position=pair.lineup_position,
                batter_hand=batter_hand,
                batter_side=batter_side,
                pitcher_hand=pitcher_hand,
                **averages,  # type: ignore[arg-type]
            )
        )

    @staticmethod
    def _skip(pair: MatchupPair, reason: SkipReason, detail: str) -> Err[PairSkip]:
        logger.warning("Skipping %s in game %d: %s", _describe(pair), pair.game_pk, detail)
        return Err(
            PairSkip(
                game_pk=pair.game_pk,
                batter_id=pair.batter.player_id,
                pitcher_id=pair.pitcher.player_id,
                reason=reason,
                detail=detail,
            )
        )
