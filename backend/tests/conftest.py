"""Shared fixtures: an in-memory GitHub contents API and a wired test client."""

import base64
import json
from collections.abc import Callable, Iterator
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from orders_api.api.dependencies import get_clock, get_settings, get_store_factory
from orders_api.config import Settings, StoreConfig
from orders_api.main import app
from orders_api.services.external.github import GitHubContentsService

FIXED_MILLIS = 1_700_000_000_000


class FakeContentsApi:
    """Serves one file the way the GitHub contents API does.

    The blob sha changes on every successful write and a PUT carrying any
    other sha is answered with 409, like GitHub does for a stale sha.
    """

    def __init__(self, document: Any = None, *, status_code: int = 200):
        self.document: Any = {"orders": []} if document is None else document
        self.version = 0
        self.status_code = status_code
        self.requests: list[httpx.Request] = []
        self.after_get: Callable[[], None] | None = None

    @property
    def sha(self) -> str:
        return f"blob-{self.version}"

    @property
    def gets(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "GET"]

    @property
    def puts(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == "PUT"]

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def commit(self, document: Any) -> None:
        """Change the file as another writer would."""
        self.document = document
        self.version += 1

    def encoded(self) -> str:
        text = json.dumps(self.document, indent=2)
        # GitHub wraps base64 content at 60 characters
        raw = base64.b64encode(text.encode("utf-8")).decode("ascii")
        return "\n".join(raw[i : i + 60] for i in range(0, len(raw), 60))

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"message": "Not Found"})

        if request.method == "GET":
            response = httpx.Response(200, json={"type": "file", "content": self.encoded(), "sha": self.sha})
            if self.after_get:
                self.after_get()
            return response

        if request.method == "PUT":
            body = json.loads(request.content)
            if body.get("sha") != self.sha:
                return httpx.Response(
                    409,
                    json={"message": f"data/store-data.json does not match {self.sha}"},
                )
            self.commit(json.loads(base64.b64decode(body["content"]).decode("utf-8")))
            return httpx.Response(
                200,
                json={"content": {"sha": self.sha}, "commit": {"sha": f"commit-{self.version}"}},
            )

        return httpx.Response(405)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        github_token="test-token",
        github_owner="acme",
        github_repo="storefront",
        github_branch="main",
        github_api_url="https://api.github.test",
        store_data_path="data/store-data.json",
    )


@pytest.fixture
def store_config(settings: Settings) -> StoreConfig:
    return settings.store_config()


@pytest.fixture
def contents_api() -> FakeContentsApi:
    return FakeContentsApi()


@pytest.fixture
def store(store_config: StoreConfig, contents_api: FakeContentsApi) -> GitHubContentsService:
    return GitHubContentsService(store_config, transport=contents_api.transport)


@pytest.fixture
def fixed_clock() -> Callable[[], int]:
    return lambda: FIXED_MILLIS


@pytest.fixture
def client(
    settings: Settings,
    contents_api: FakeContentsApi,
    fixed_clock: Callable[[], int],
) -> Iterator[TestClient]:
    def store_factory(config: StoreConfig) -> GitHubContentsService:
        return GitHubContentsService(config, transport=contents_api.transport)

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_store_factory] = lambda: store_factory
    app.dependency_overrides[get_clock] = lambda: fixed_clock
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
