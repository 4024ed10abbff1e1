"""Shared test fixtures for omniresolve."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest
import requests

from omniresolve.config import ResolverSettings
from omniresolve.models.options import ResolverOptions

ENDPOINT = "https://artifactory.test"


class FakeExecutor:
    """In-memory ``RequestExecutor`` that records every call.

    ``builds`` is returned by the build-listing GET.  ``artifacts`` maps
    ``(repo, version)`` to the raw search results for that AQL lookup.
    ``error`` (if set) is raised by every call instead.
    """

    def __init__(
        self,
        *,
        builds: dict[str, Any] | None = None,
        artifacts: dict[tuple[str, str], list[dict[str, Any]]] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.builds = builds
        self.artifacts = artifacts or {}
        self.error = error
        self.calls: list[tuple[str, str, str | None, dict[str, str] | None]] = []
        self.closed = False

    def get(self, path: str) -> Any | None:
        self.calls.append(("GET", path, None, None))
        if self.error is not None:
            raise self.error
        return self.builds

    def post(
        self,
        path: str,
        body: str,
        headers: dict[str, str] | None = None,
    ) -> Any | None:
        self.calls.append(("POST", path, body, headers))
        if self.error is not None:
            raise self.error
        criteria = parse_criteria(body)
        key = (criteria["repo"], criteria["@omnibus.version"])
        return {"results": self.artifacts.get(key, [])}

    def close(self) -> None:
        self.closed = True

    @property
    def queried_versions(self) -> list[str]:
        return [
            parse_criteria(body)["@omnibus.version"]
            for method, _, body, _ in self.calls
            if method == "POST" and body is not None
        ]


def parse_criteria(body: str) -> dict[str, str]:
    """Decode the ``$and`` list of an encoded items query into {field: value}."""
    start = body.index("items.find(") + len("items.find(")
    end = body.index(").include(") if ").include(" in body else body.rindex(")")
    decoded = json.loads(body[start:end])
    criteria: dict[str, str] = {}
    for clause in decoded["$and"]:
        ((field, condition),) = clause.items()
        criteria[field] = condition["$eq"]
    return criteria


def make_http_error(status: int, text: str = "") -> requests.HTTPError:
    """Build a ``requests.HTTPError`` carrying a real response object."""
    response = requests.Response()
    response.status_code = status
    response._content = text.encode("utf-8")
    response.url = f"{ENDPOINT}/api/search/aql"
    return requests.HTTPError(f"{status} Client Error", response=response)


@pytest.fixture(autouse=True)
def _isolate_artifactory_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ARTIFACTORY_* variables from the host out of the tests."""
    for name in (
        "ARTIFACTORY_ENDPOINT",
        "ARTIFACTORY_USERNAME",
        "ARTIFACTORY_PASSWORD",
        "ARTIFACTORY_TIMEOUT_SECONDS",
        "ARTIFACTORY_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> ResolverSettings:
    """Settings pointing at a fake endpoint, with credentials."""
    return ResolverSettings(endpoint=ENDPOINT, username="reader", password="s3cret")


@pytest.fixture
def fake_executor() -> type[FakeExecutor]:
    """The FakeExecutor class, for building per-test executors."""
    return FakeExecutor


@pytest.fixture
def http_error() -> Callable[..., requests.HTTPError]:
    """Factory fixture: ``http_error(status, text)``."""
    return make_http_error


@pytest.fixture
def make_options() -> Callable[..., ResolverOptions]:
    """Factory fixture: build ResolverOptions with sensible defaults."""

    def _factory(**overrides: Any) -> ResolverOptions:
        defaults: dict[str, Any] = {
            "product_name": "chef",
            "channel": "unstable",
            "product_version": "12.6.0+20160111212038",
        }
        defaults.update(overrides)
        return ResolverOptions(**defaults)

    return _factory


@pytest.fixture
def make_result() -> Callable[..., dict[str, Any]]:
    """Factory fixture: one raw AQL search result with omnibus properties."""

    def _factory(
        *,
        version: str = "12.6.0+20160111212038",
        platform: str = "ubuntu",
        platform_version: str = "14.04",
        architecture: str = "x86_64",
        repo: str = "omnibus-unstable-local",
        name: str | None = None,
    ) -> dict[str, Any]:
        filename = name or f"chef_{version}-1_{platform}{platform_version}_{architecture}.deb"
        return {
            "repo": repo,
            "path": f"com/getchef/chef/{version}/{platform}/{platform_version}",
            "name": filename,
            "properties": [
                {"key": "omnibus.md5", "value": f"md5-{platform}-{architecture}"},
                {"key": "omnibus.sha256", "value": f"sha-{platform}-{architecture}"},
                {"key": "omnibus.version", "value": version},
                {"key": "omnibus.platform", "value": platform},
                {"key": "omnibus.platform_version", "value": platform_version},
                {"key": "omnibus.architecture", "value": architecture},
                {"key": "omnibus.project", "value": "chef"},
            ],
        }

    return _factory
