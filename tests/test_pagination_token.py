import base64
from datetime import datetime, timezone

import pytest

from catalog.core.errors import InvalidToken
from catalog.v1_0.repositories import pagination_token
from catalog.v1_0.repositories.pagination_token import PaginateToken


def _raw(text: str) -> str:
    return base64.urlsafe_b64encode(text.encode("utf-8")).decode("ascii").rstrip("=")


def test_encode_decode_preserves_key() -> None:
    created_at = datetime(2024, 3, 9, 17, 45, 12, 123456, tzinfo=timezone.utc)

    token = pagination_token.encode(created_at, "oidc~test_user_1")
    decoded = pagination_token.decode(token)

    assert decoded == PaginateToken(created_at=created_at, id="oidc~test_user_1")
    assert str(decoded) == token


def test_token_is_url_safe() -> None:
    token = pagination_token.encode(datetime.now(timezone.utc), "oidc~?&/+ü")
    assert "=" not in token
    assert "+" not in token and "/" not in token
    assert pagination_token.decode(token).id == "oidc~?&/+ü"


def test_naive_timestamps_are_read_as_utc() -> None:
    naive = datetime(2024, 1, 1, 8, 30)
    decoded = pagination_token.decode(pagination_token.encode(naive, "oidc~a"))
    assert decoded.created_at == naive.replace(tzinfo=timezone.utc)


def test_wire_format_is_versioned() -> None:
    token = pagination_token.encode(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc), "oidc~a")
    assert base64.urlsafe_b64decode(token + "==").decode() == "1&1000000&oidc~a"


@pytest.mark.parametrize(
    "token",
    [
        "",
        "%%%%",
        _raw("2&1000000&oidc~a"),
        _raw("v1&1000000&oidc~a"),
        _raw("1&1000000"),
        _raw("1&1000000&"),
        _raw("1&yesterday&oidc~a"),
        _raw("1& 1_000 &oidc~a"),
        _raw("1&+5&oidc~a"),
        _raw("1&\u0661\u0662&oidc~a"),
        _raw("1&99999999999999999999999&oidc~a"),
        base64.urlsafe_b64encode(b"\xff\xfe&1&x").decode(),
    ],
)
def test_decode_rejects_bad_tokens(token: str) -> None:
    with pytest.raises(InvalidToken):
        pagination_token.decode(token)
