import logging
import sqlite3
import time
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Protocol

from xwoba_matchups.domain.errors import IngestError
from xwoba_matchups.domain.load_log import LoadLog, LoadStatus
from xwoba_matchups.domain.result import Err, Ok, Result
from xwoba_matchups.ingest.protocols import DataSource
from xwoba_matchups.repos.protocols import LoadLogRepo

logger = logging.getLogger(__name__)


class UpsertRepo(Protocol):
    def upsert(self, entity: Any) -> Any: ...


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class Loader:
    """Fetch rows from a source, map them to domain objects and upsert them in one transaction.

    Rows the mapper returns ``None`` for are skipped, and any exception while
    writing rolls back the whole batch. Every run, successful or not, leaves a
    ``load_log`` row behind. ``row_hook`` sees each raw row before mapping and
    shares the transaction, which lets a caller store reference data (teams,
    venues) carried alongside the main entity.
    """

    def __init__(
        self,
        source: DataSource,
        repo: UpsertRepo,
        load_log_repo: LoadLogRepo,
        row_mapper: Callable[[dict[str, Any]], Any | None],
        target_table: str,
        *,
        conn: sqlite3.Connection,
        row_hook: Callable[[dict[str, Any]], None] | None = None,
    ) -> None:
        self._source = source
        self._repo = repo
        self._load_log_repo = load_log_repo
        self._row_mapper = row_mapper
        self._target_table = target_table
        self._conn = conn
        self._row_hook = row_hook

    def load(self, **fetch_params: Any) -> Result[LoadLog, IngestError]:
        started_at = _now()
        t0 = time.perf_counter()
        detail = self._source.source_detail
        logger.info("Loading %s from %s", self._target_table, detail)

        try:
            rows = self._source.fetch(**fetch_params)
        except Exception as exc:
            logger.error("Fetch from %s failed: %s", detail, exc)
            return self._fail(started_at, exc)

        try:
            written = self._write(rows)
        except Exception as exc:
            self._conn.rollback()
            logger.error("Writing %s from %s failed, rolled back: %s", self._target_table, detail, exc)
            return self._fail(started_at, exc)

        log = self._record(started_at, LoadStatus.SUCCESS, written)
        logger.info(
            "Loaded %d of %d rows into %s in %.1fs",
            written,
            len(rows),
            self._target_table,
            time.perf_counter() - t0,
        )
        return Ok(log)

    def _write(self, rows: list[dict[str, Any]]) -> int:
        written = 0
        for row in rows:
            if self._row_hook is not None:
                self._row_hook(row)
            entity = self._row_mapper(row)
            if entity is None:
                continue
            self._repo.upsert(entity)
            written += 1
        self._conn.commit()
        return written

    def _record(self, started_at: str, status: LoadStatus, rows_loaded: int, error: str | None = None) -> LoadLog:
        log = LoadLog(
            source_type=self._source.source_type,
            source_detail=self._source.source_detail,
            target_table=self._target_table,
            rows_loaded=rows_loaded,
            started_at=started_at,
            finished_at=_now(),
            status=status,
            error_message=error,
        )
        self._load_log_repo.insert(log)
        return log

    def _fail(self, started_at: str, exc: Exception) -> Err[IngestError]:
        self._record(started_at, LoadStatus.ERROR, 0, str(exc))
        return Err(
            IngestError(
                message=str(exc),
                source_type=self._source.source_type,
                source_detail=self._source.source_detail,
                target_table=self._target_table,
            )
        )
