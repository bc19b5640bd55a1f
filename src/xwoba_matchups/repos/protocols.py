from collections.abc import Iterable, Sequence
from typing import Protocol

from xwoba_matchups.domain.game import ScheduledGame
from xwoba_matchups.domain.load_log import LoadLog
from xwoba_matchups.domain.matchup import DailyMatchup
from xwoba_matchups.domain.player import Player, Team
from xwoba_matchups.domain.player_split import PlayerSplit
from xwoba_matchups.domain.venue import Venue


class PlayerRepo(Protocol):
    def upsert(self, player: Player) -> int: ...

    def get_by_mlbam_ids(self, mlbam_ids: Iterable[int]) -> list[Player]: ...


class TeamRepo(Protocol):
    def upsert(self, team: Team) -> int: ...

    def get_by_id(self, team_id: int) -> Team | None: ...


class VenueRepo(Protocol):
    def upsert(self, venue: Venue) -> int: ...

    def get_by_id(self, venue_id: int) -> Venue | None: ...


class PlayerSplitRepo(Protocol):
    def upsert(self, split: PlayerSplit) -> tuple[int, int, str, str]: ...

    def get_for_players(self, player_ids: Iterable[int], season: int) -> list[PlayerSplit]: ...

    def get_by_seasons(self, seasons: Iterable[int]) -> list[PlayerSplit]: ...


class ScheduledGameRepo(Protocol):
    def upsert(self, game: ScheduledGame) -> int: ...

    def get_by_date(self, official_date: str) -> list[ScheduledGame]: ...


class DailyMatchupRepo(Protocol):
    def upsert_many(
        self,
        matchups: Sequence[DailyMatchup],
        *,
        prune_date: str | None = None,
        prune_game_pks: Sequence[int] = (),
    ) -> int: ...

    def get_by_date(self, game_date: str) -> list[DailyMatchup]: ...

    def get_top_by_date(self, game_date: str, limit: int) -> list[DailyMatchup]: ...


class LoadLogRepo(Protocol):
    def insert(self, log: LoadLog) -> int: ...
