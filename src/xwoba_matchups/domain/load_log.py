from dataclasses import dataclass
from enum import StrEnum


class LoadStatus(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class LoadLog:
    """One audit row per ingest or compute run, successful or not."""

    source_type: str
    source_detail: str
    target_table: str
    rows_loaded: int
    started_at: str
    finished_at: str
    status: LoadStatus
    id: int | None = None
    error_message: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == LoadStatus.SUCCESS
