import sqlite3

from xwoba_matchups.domain.load_log import LoadLog

_COLUMNS = (
    "source_type",
    "source_detail",
    "target_table",
    "rows_loaded",
    "started_at",
    "finished_at",
    "status",
    "error_message",
)

_INSERT_SQL = f"INSERT INTO load_log ({', '.join(_COLUMNS)}) VALUES ({', '.join('?' for _ in _COLUMNS)})"


class SqliteLoadLogRepo:
    """Audit trail of loads and compute runs. Inserts commit immediately so a
    failed run's log row survives the rollback of its data."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def insert(self, log: LoadLog) -> int:
        cursor = self._conn.execute(_INSERT_SQL, tuple(getattr(log, column) for column in _COLUMNS))
        self._conn.commit()
        return cursor.lastrowid  # type: ignore[return-value]
