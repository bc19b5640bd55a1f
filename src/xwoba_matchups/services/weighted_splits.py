import logging
from collections import defaultdict
from collections.abc import Mapping, Sequence

from xwoba_matchups.domain.player_split import COMPOSITE_SEASON, COUNT_FIELDS, RATE_FIELDS, PlayerSplit, Role
from xwoba_matchups.repos.protocols import PlayerSplitRepo

logger = logging.getLogger(__name__)


def weighted_composite(splits: Sequence[PlayerSplit], season_weights: Mapping[int, float]) -> PlayerSplit | None:
    """Blend one player's per-season rows (same role and hand) into a season-0 row.

    Each season counts with weight ``recency_weight * pa``; rate stats are the
    weighted mean over seasons where they are present. Counts are summed over
    the same seasons as ``pa`` and left ``None`` if any of those seasons lacks
    them. Returns ``None`` when no season carries positive weight.
    """
    usable = [s for s in splits if s.season in season_weights and s.pa is not None and s.pa > 0]
    if not usable:
        return None
    first = usable[0]
    if any((s.player_id, s.role, s.vs_handedness) != (first.player_id, first.role, first.vs_handedness) for s in usable):
        raise ValueError("weighted_composite expects rows for a single player, role and hand")

    values: dict[str, object] = {}
    for name in RATE_FIELDS:
        weight_sum = 0.0
        value_sum = 0.0
        for split in usable:
            value = getattr(split, name)
            if value is None:
                continue
            weight = season_weights[split.season] * split.pa  # type: ignore[operator]
            weight_sum += weight
            value_sum += weight * value
        values[name] = value_sum / weight_sum if weight_sum > 0 else None
    # every count covers the same seasons as pa, or is unknown
    for name in COUNT_FIELDS:
        counts = [getattr(s, name) for s in usable]
        values[name] = None if None in counts else sum(counts)

    latest = max(usable, key=lambda s: s.season)
    return PlayerSplit(
        player_id=first.player_id,
        season=COMPOSITE_SEASON,
        role=first.role,
        vs_handedness=first.vs_handedness,
        player_name=latest.player_name,
        **values,  # type: ignore[arg-type]
    )


class WeightedSplitService:
    def __init__(self, split_repo: PlayerSplitRepo, season_weights: Mapping[int, float]) -> None:
        if not season_weights:
            raise ValueError("at least one season weight is required")
        self._split_repo = split_repo
        self._season_weights = dict(season_weights)

    def compute(self) -> list[PlayerSplit]:
        groups: dict[tuple[int, Role, str], list[PlayerSplit]] = defaultdict(list)
        for split in self._split_repo.get_by_seasons(self._season_weights):
            groups[(split.player_id, split.role, split.vs_handedness)].append(split)

        composites = [c for c in (weighted_composite(rows, self._season_weights) for rows in groups.values()) if c]
        logger.info("Built %d composite splits from %d player/role/hand groups", len(composites), len(groups))
        return composites

    def compute_and_persist(self) -> int:
        composites = self.compute()
        for split in composites:
            self._split_repo.upsert(split)
        return len(composites)
