import logging
import sqlite3
from pathlib import Path

logger = logging.getLogger(__name__)

_MIGRATIONS_DIR = Path(__file__).parent / "migrations"
_IN_MEMORY = ":memory:"


def create_connection(
    path: str | Path,
    *,
    check_same_thread: bool = True,
    migrations_dir: Path | None = None,
) -> sqlite3.Connection:
    """Open the matchup database, creating its directory and applying pending migrations.

    File databases run in WAL mode so report commands can read while a compute
    run is writing.
    """
    in_memory = str(path) == _IN_MEMORY
    if not in_memory:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path), check_same_thread=check_same_thread)
    conn.row_factory = sqlite3.Row
    if not in_memory:
        conn.execute("PRAGMA journal_mode=WAL")
    migrate(conn, migrations_dir if migrations_dir is not None else _MIGRATIONS_DIR)
    return conn


def get_schema_version(conn: sqlite3.Connection) -> int:
    """Return the current schema version, or 0 if no migrations have run."""
    try:
        row = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    except sqlite3.OperationalError:
        return 0
    return row[0] if row and row[0] is not None else 0


def _numbered_files(migrations_dir: Path) -> list[tuple[int, Path]]:
    numbered: dict[int, Path] = {}
    for sql_file in migrations_dir.glob("*.sql"):
        version = int(sql_file.stem.split("_", 1)[0])
        if version in numbered:
            raise ValueError(f"duplicate migration version {version}: {numbered[version].name}, {sql_file.name}")
        numbered[version] = sql_file
    return sorted(numbered.items())


def _apply(conn: sqlite3.Connection, version: int, sql_file: Path) -> None:
    statements = [s.strip() for s in sql_file.read_text().split(";") if s.strip()]
    # DDL only joins the transaction under manual control
    saved_isolation = conn.isolation_level
    conn.isolation_level = None
    try:
        conn.execute("BEGIN")
        for statement in statements:
            conn.execute(statement)
        conn.execute("INSERT INTO schema_version (version) VALUES (?)", (version,))
        conn.execute("COMMIT")
    except Exception:
        conn.execute("ROLLBACK")
        logger.error("Migration %s failed, rolled back", sql_file.name)
        raise
    finally:
        conn.isolation_level = saved_isolation


def migrate(conn: sqlite3.Connection, migrations_dir: Path) -> int:
    """Apply numbered ``NNN_name.sql`` files newer than the stored version; return the new version."""
    conn.execute(
        "CREATE TABLE IF NOT EXISTS schema_version ("
        "    version INTEGER PRIMARY KEY,"
        "    applied_at TEXT NOT NULL DEFAULT (datetime('now'))"
        ")"
    )
    current = get_schema_version(conn)
    for version, sql_file in _numbered_files(migrations_dir):
        if version <= current:
            continue
        _apply(conn, version, sql_file)
        logger.debug("Applied migration %s", sql_file.name)
        current = version
    return current
