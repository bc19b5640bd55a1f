from collections.abc import Iterable, Sequence
from typing import Any

from xwoba_matchups.domain.load_log import LoadLog
from xwoba_matchups.domain.matchup import DailyMatchup
from xwoba_matchups.domain.player import Player
from xwoba_matchups.domain.player_split import PlayerSplit


class FakePlayerRepo:
    def __init__(self, players: list[Player] | None = None) -> None:
        self._players = {p.mlbam_id: p for p in players or []}
        self.upserted: list[Player] = []

    def upsert(self, player: Player) -> int:
        self.upserted.append(player)
        self._players[player.mlbam_id] = player
        return player.mlbam_id

    def get_by_mlbam_ids(self, mlbam_ids: Iterable[int]) -> list[Player]:
        return [self._players[pid] for pid in mlbam_ids if pid in self._players]


class FakePlayerSplitRepo:
    def __init__(self, splits: list[PlayerSplit] | None = None) -> None:
        self._splits = list(splits or [])
        self.upserted: list[PlayerSplit] = []

    def upsert(self, split: PlayerSplit) -> tuple[int, int, str, str]:
        self.upserted.append(split)
        return (split.player_id, split.season, split.role, split.vs_handedness)

    def get_for_players(self, player_ids: Iterable[int], season: int) -> list[PlayerSplit]:
        wanted = set(player_ids)
        return [s for s in self._splits if s.player_id in wanted and s.season == season]

    def get_by_seasons(self, seasons: Iterable[int]) -> list[PlayerSplit]:
        wanted = set(seasons)
        return [s for s in self._splits if s.season in wanted]


class FakeDailyMatchupRepo:
    def __init__(self, *, error: Exception | None = None) -> None:
        self.rows: dict[tuple[str, int, int, int], DailyMatchup] = {}
        self._error = error

    def upsert_many(
        self,
        matchups: Sequence[DailyMatchup],
        *,
        prune_date: str | None = None,
        prune_game_pks: Sequence[int] = (),
    ) -> int:
        if self._error is not None:
            raise self._error
        for m in matchups:
            self.rows[(m.game_date, m.game_pk, m.batter_id, m.pitcher_id)] = m
        return 0

    def get_by_date(self, game_date: str) -> list[DailyMatchup]:
        return [m for key, m in sorted(self.rows.items()) if key[0] == game_date]

    def get_top_by_date(self, game_date: str, limit: int) -> list[DailyMatchup]:
        return sorted(self.get_by_date(game_date), key=lambda m: -m.avg_xwoba)[:limit]


class FakeLoadLogRepo:
    def __init__(self) -> None:
        self.logs: list[LoadLog] = []

    def insert(self, log: LoadLog) -> int:
        self.logs.append(log)
        return len(self.logs)


class FakeSource:
    """DataSource returning canned rows, or raising, and recording fetch params."""

    def __init__(
        self,
        rows: list[dict[str, Any]] | None = None,
        *,
        error: Exception | None = None,
        source_type: str = "test",
        source_detail: str = "fake",
    ) -> None:
        self._rows = rows or []
        self._error = error
        self._source_type = source_type
        self._source_detail = source_detail
        self.calls: list[dict[str, Any]] = []

    @property
    def source_type(self) -> str:
        return self._source_type

    @property
    def source_detail(self) -> str:
        return self._source_detail

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        self.calls.append(params)
        if self._error is not None:
            raise self._error
        return list(self._rows)
