from dataclasses import dataclass


@dataclass(frozen=True)
class Venue:
    id: int
    name: str
    city: str | None = None
    state: str | None = None
    roof_type: str | None = None
    latitude: float | None = None
    longitude: float | None = None
