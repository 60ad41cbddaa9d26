"""
pg_trgm compatible trigram distance for stores that lack the extension.

PostgreSQL ranks search candidates with ``a <-> b`` from ``pg_trgm``. SQLite
connections get an equivalent ``trigram_distance(a, b)`` SQL function so the
same query shape works in local setups and tests.
"""
import re
from typing import Optional

TRIGRAM_DISTANCE_FN = "trigram_distance"

_WORD = re.compile(r"[^\W_]+", re.UNICODE)


def trigrams(text: str) -> frozenset[str]:
    grams: set[str] = set()
    for word in _WORD.findall(text.lower()):
        padded = f"  {word} "
        grams.update(padded[i:i + 3] for i in range(len(padded) - 2))
    return frozenset(grams)


def similarity(a: str, b: str) -> float:
    left, right = trigrams(a), trigrams(b)
    union = left | right
    if not union:
        return 0.0
    return len(left & right) / len(union)


def distance(a: Optional[str], b: Optional[str]) -> Optional[float]:
    # NULL in, NULL out, like the SQL operator.
    if a is None or b is None:
        return None
    return 1.0 - similarity(a, b)


def register_sqlite_functions(dbapi_connection) -> None:
    dbapi_connection.create_function(TRIGRAM_DISTANCE_FN, 2, distance)
