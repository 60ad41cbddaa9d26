"""
Opaque keyset cursor for user listings.

A token names the last row of a page by its sort key ``(created_at, id)``.
Wire form: URL-safe base64 (no padding) of ``"{version}&{epoch_micros}&{id}"``.
The id goes last so it may itself contain ``&``.
"""
import base64
import binascii
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from catalog.core.errors import InvalidToken

V1 = "1"
SUPPORTED_VERSIONS = frozenset({V1})
_FIELD_SEPARATOR = "&"
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MICROS_RE = re.compile(r"-?[0-9]+")


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_micros(value: datetime) -> int:
    return (as_utc(value) - _EPOCH) // timedelta(microseconds=1)


def _from_micros(micros: int) -> datetime:
    return _EPOCH + timedelta(microseconds=micros)


@dataclass(frozen=True, slots=True)
class PaginateToken:
    created_at: datetime
    id: str
    version: str = V1

    def __str__(self) -> str:
        return encode(self.created_at, self.id)


def encode(created_at: datetime, id_: str) -> str:
    raw = _FIELD_SEPARATOR.join((V1, str(_to_micros(created_at)), str(id_)))
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")


def decode(token: str) -> PaginateToken:
    if not token:
        raise InvalidToken("Pagination token is empty")

    padded = token + "=" * (-len(token) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded.encode("ascii")).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise InvalidToken("Pagination token is not valid base64") from e

    version, _, rest = raw.partition(_FIELD_SEPARATOR)
    if version not in SUPPORTED_VERSIONS:
        raise InvalidToken(f"Unsupported pagination token version: {version!r}")

    ts_text, sep, id_ = rest.partition(_FIELD_SEPARATOR)
    if not sep or not id_:
        raise InvalidToken("Pagination token is malformed")

    if not _MICROS_RE.fullmatch(ts_text):
        raise InvalidToken("Pagination token carries an invalid timestamp")
    try:
        created_at = _from_micros(int(ts_text))
    except (ValueError, OverflowError) as e:
        raise InvalidToken("Pagination token carries an invalid timestamp") from e

    return PaginateToken(created_at=created_at, id=id_, version=version)
