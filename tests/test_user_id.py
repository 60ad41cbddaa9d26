import pytest

from catalog.v1_0.entities import UserId


def test_parse_and_format() -> None:
    user_id = UserId.parse("oidc~d223d88c-85b6-4859-b5c5-27f3825e47f6")
    assert user_id.idp == "oidc"
    assert user_id.subject == "d223d88c-85b6-4859-b5c5-27f3825e47f6"
    assert str(user_id) == "oidc~d223d88c-85b6-4859-b5c5-27f3825e47f6"


def test_subject_may_contain_separator() -> None:
    user_id = UserId.parse("kubernetes~system:serviceaccount~ns")
    assert user_id == UserId.kubernetes("system:serviceaccount~ns")


@pytest.mark.parametrize(
    "raw",
    [
        "no-prefix",
        "github~someone",
        "oidc~",
        "oidc~" + "x" * 129,
        "oidc~tab\tinside",
    ],
)
def test_parse_rejects_invalid_ids(raw: str) -> None:
    with pytest.raises(ValueError):
        UserId.parse(raw)


def test_ids_are_hashable_and_ordered() -> None:
    ids = {UserId.oidc("b"), UserId.oidc("a"), UserId.oidc("a")}
    assert sorted(ids) == [UserId.oidc("a"), UserId.oidc("b")]
