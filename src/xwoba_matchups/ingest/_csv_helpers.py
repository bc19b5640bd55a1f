from typing import Any

_NULL_TOKENS = frozenset({"", "--", "null"})


def strip_bom(text: str) -> str:
    """Strip UTF-8 BOM from the start of text (Baseball Savant CSVs include it)."""
    return text.removeprefix("\ufeff")


def nullify_empty_strings(row: dict[str, Any]) -> dict[str, Any]:
    """Replace Savant's blank, ``--`` and ``null`` placeholders with ``None``."""
    cleaned: dict[str, Any] = {}
    for key, value in row.items():
        if key is None:
            continue
        if isinstance(value, str) and value.strip().lower() in _NULL_TOKENS:
            value = None
        cleaned[strip_bom(key)] = value
    return cleaned
