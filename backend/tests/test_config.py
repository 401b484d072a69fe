import pytest

from orders_api.config import Settings, StoreConfig
from orders_api.services.exceptions import ConfigurationError


def make_settings(**values):
    return Settings(_env_file=None, **values)


def test_store_config(settings):
    assert settings.store_config() == StoreConfig(
        token="test-token",
        owner="acme",
        repo="storefront",
        branch="main",
        path="data/store-data.json",
        api_url="https://api.github.test",
        timeout=30.0,
    )


@pytest.mark.parametrize("branch", ["", "   "])
def test_blank_branch_defaults_to_main(branch):
    assert make_settings(github_branch=branch).github_branch == "main"


def test_branch_is_trimmed():
    assert make_settings(github_branch=" release ").github_branch == "release"


def test_branch_from_environment(monkeypatch):
    monkeypatch.setenv("GITHUB_BRANCH", "orders")
    monkeypatch.setenv("GITHUB_REPO", "shop")

    settings = Settings(_env_file=None)

    assert settings.github_branch == "orders"
    assert settings.github_repo == "shop"


@pytest.mark.parametrize(
    ("values", "missing"),
    [
        ({}, ["GITHUB_TOKEN", "GITHUB_OWNER", "GITHUB_REPO"]),
        ({"github_token": "t", "github_owner": "o"}, ["GITHUB_REPO"]),
        ({"github_token": "t", "github_repo": "r"}, ["GITHUB_OWNER"]),
    ],
)
def test_missing_store_settings(values, missing):
    values = {"github_token": "", "github_owner": "", "github_repo": "", **values}
    settings = make_settings(**values)

    assert settings.missing_store_settings == missing
    with pytest.raises(ConfigurationError) as exc_info:
        settings.store_config()
    assert exc_info.value.missing == missing


def test_api_url_trailing_slash(settings):
    settings.github_api_url = "https://github.example/api/v3/"

    assert settings.store_config().api_url == "https://github.example/api/v3"
