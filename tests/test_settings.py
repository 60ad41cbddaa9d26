import pytest
from pydantic import ValidationError

from catalog.core.settings import Settings
from catalog.v1_0.entities import PaginationPolicy


def _settings(**overrides) -> Settings:
    values = {"DATABASE_URL": "postgresql://catalog:secret@db:5432/catalog"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_defaults() -> None:
    s = _settings()
    assert s.PAGINATION_SIZE_DEFAULT == 100
    assert s.PAGINATION_SIZE_MAX == 1000
    assert s.DATABASE_URL.get_secret_value().startswith("postgresql://")
    assert set(Settings.model_fields) == {
        "DEBUG",
        "LOG_LEVEL",
        "DATABASE_URL",
        "DATABASE_SSL",
        "PAGINATION_SIZE_DEFAULT",
        "PAGINATION_SIZE_MAX",
    }


def test_database_url_is_required() -> None:
    with pytest.raises(ValidationError):
        _settings(DATABASE_URL="")


@pytest.mark.parametrize(
    "overrides",
    [
        {"PAGINATION_SIZE_DEFAULT": 0},
        {"PAGINATION_SIZE_MAX": -1},
        {"PAGINATION_SIZE_DEFAULT": 500, "PAGINATION_SIZE_MAX": 100},
    ],
)
def test_invalid_page_sizes(overrides) -> None:
    with pytest.raises(ValidationError):
        _settings(**overrides)


def test_log_level_is_normalized() -> None:
    assert _settings(LOG_LEVEL=" debug ").LOG_LEVEL == "DEBUG"


@pytest.mark.parametrize(
    "requested,expected",
    [(None, 20), (1, 1), (35, 35), (500, 50), (0, 1), (-3, 1)],
)
def test_pagination_policy_resolves_page_size(requested, expected) -> None:
    assert PaginationPolicy(default_size=20, max_size=50).page_size(requested) == expected
