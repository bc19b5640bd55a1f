from collections.abc import Iterable, Iterator
from itertools import batched

DEFAULT_CHUNK_SIZE = 100


def id_chunks(ids: Iterable[int], size: int = DEFAULT_CHUNK_SIZE) -> Iterator[tuple[int, ...]]:
    """Yield de-duplicated ids in bounded chunks so no IN clause exceeds *size* parameters."""
    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    yield from batched(dict.fromkeys(ids), size)


def placeholders(count: int) -> str:
    return ",".join("?" * count)
