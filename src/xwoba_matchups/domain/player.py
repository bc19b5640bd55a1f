from dataclasses import dataclass


@dataclass(frozen=True)
class Player:
    mlbam_id: int
    full_name: str | None = None
    bats: str | None = None
    throws: str | None = None
    team_id: int | None = None


@dataclass(frozen=True)
class Team:
    id: int
    name: str
    abbreviation: str | None = None
    venue_id: int | None = None

    @property
    def label(self) -> str:
        return self.abbreviation or self.name
