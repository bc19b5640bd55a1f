import csv
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from xwoba_matchups.ingest._csv_helpers import nullify_empty_strings, strip_bom

logger = logging.getLogger(__name__)


class CsvSource:
    """Rows of a CSV export with Savant's null placeholders mapped to ``None``.

    When ``required_columns`` is given, a file whose header lacks any of them is
    rejected before a single row is returned.
    """

    def __init__(self, path: str | Path, *, required_columns: Sequence[str] = ()) -> None:
        self._path = Path(path)
        self._required_columns = tuple(required_columns)

    @property
    def source_type(self) -> str:
        return "csv"

    @property
    def source_detail(self) -> str:
        return str(self._path)

    def fetch(self, **params: Any) -> list[dict[str, Any]]:
        encoding = params.get("encoding", "utf-8-sig")
        delimiter = params.get("delimiter", ",")
        logger.debug("Reading CSV %s (%s)", self._path, encoding)
        with self._path.open(encoding=encoding, newline="") as f:
            reader = csv.DictReader(f, delimiter=delimiter)
            header = [strip_bom(name) for name in reader.fieldnames or []]
            missing = [name for name in self._required_columns if name not in header]
            if missing:
                raise ValueError(f"{self._path.name} is missing column(s): {', '.join(missing)}")
            rows = [nullify_empty_strings(row) for row in reader]
        logger.debug("Read %d rows from %s", len(rows), self._path)
        return rows
