"""Artifact resolver — locates published omnibus packages in Artifactory.

Two lookup paths:

1. **Direct** — one AQL query for ``product_name`` at a concrete version in
   the channel's repository (``omnibus-<channel>-local``).
2. **Latest** — list the product's builds through the build REST API,
   newest first, and run the direct lookup for each build's version until
   one yields artifacts in the requested channel.

The build API is used for discovery because read-only users may list
builds but are not allowed to run AQL against them.

Results are optionally narrowed by a platform triple.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any, TypeVar

import requests

from omniresolve.bridge.http import ArtifactoryClient, RequestExecutor
from omniresolve.config import ResolverSettings
from omniresolve.core.aql import encode_items_query
from omniresolve.models.artifacts import ArtifactInfo
from omniresolve.models.builds import BuildList
from omniresolve.models.options import ResolverOptions
from omniresolve.models.query import ItemsQuery

logger = logging.getLogger(__name__)

T = TypeVar("T")

BUILDS_PATH = "/api/build/{product_name}"
SEARCH_PATH = "/api/search/aql"

_BAD_CREDENTIALS_RE = re.compile(r"Bad credentials", re.IGNORECASE)


class ArtifactoryError(RuntimeError):
    """Base class for resolver errors."""


class ArtifactoryConnectionError(ArtifactoryError, ConnectionError):
    """Raised when the Artifactory endpoint cannot be reached."""


class AuthenticationError(ArtifactoryError):
    """Raised when Artifactory rejects the configured credentials."""


class NoArtifactsError(ArtifactoryError):
    """Raised when nothing can be found for the requested product."""


class AmbiguousArtifactsError(ArtifactoryError):
    """Raised when a single artifact was required but several matched."""


def map_properties(properties: Iterable[Mapping[str, Any]] | None) -> dict[str, Any]:
    """Flatten ``[{"key": k, "value": v}, ...]`` into ``{k: v}``.

    Later duplicates win.  ``None`` yields an empty mapping.
    """
    if properties is None:
        return {}
    return {prop["key"]: prop.get("value") for prop in properties}


def download_uri(endpoint: str, result: Mapping[str, Any]) -> str:
    """``<endpoint>/<repo>/<path>/<name>`` for a raw search result.

    All trailing slashes are stripped from ``endpoint``, not just one.
    """
    return "/".join(
        [endpoint.rstrip("/"), result["repo"], result["path"], result["name"]]
    )


class ArtifactResolver:
    """Resolves ``ResolverOptions`` into ``ArtifactInfo`` records.

    Parameters
    ----------
    options:
        What to resolve.
    settings:
        Endpoint and credentials.  Defaults to a fresh ``ResolverSettings``
        (read from ``ARTIFACTORY_*`` environment variables).
    executor:
        Request executor to use instead of an ``ArtifactoryClient`` built
        from ``settings``.

    The executor and endpoint are fixed for the lifetime of the instance.
    Use one resolver per thread.  A client the resolver builds itself is
    closed by ``close()`` or on leaving a ``with`` block; an injected
    executor is left to its owner.
    """

    def __init__(
        self,
        options: ResolverOptions,
        *,
        settings: ResolverSettings | None = None,
        executor: RequestExecutor | None = None,
    ) -> None:
        self._options = options
        self._settings = settings or ResolverSettings()
        self._endpoint = self._settings.base_url
        # Only a client built here is closed by close().
        self._owned_client: ArtifactoryClient | None = None
        if executor is None:
            executor = self._owned_client = ArtifactoryClient(self._settings)
        self._executor: RequestExecutor = executor

    @property
    def options(self) -> ResolverOptions:
        return self._options

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def close(self) -> None:
        """Close the HTTP client if this resolver created it."""
        if self._owned_client is not None:
            self._owned_client.close()
            self._owned_client = None

    def __enter__(self) -> ArtifactResolver:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(self) -> ArtifactInfo | list[ArtifactInfo]:
        """Find artifacts for the configured options.

        Returns
        -------
        ArtifactInfo
            When exactly one artifact remains after platform filtering.
        list[ArtifactInfo]
            Otherwise (possibly empty).
        """
        artifacts = self.resolve_all()
        return artifacts[0] if len(artifacts) == 1 else artifacts

    def resolve_all(self) -> list[ArtifactInfo]:
        """Like ``resolve()`` but always returns a list."""
        if self._options.latest_version:
            artifacts = self.latest_artifacts()
        else:
            artifacts = self.artifacts_for_version(self._options.product_version)

        platform_filter = self._options.platform_filter
        if platform_filter is not None:
            matching = [a for a in artifacts if a.matches_platform(*platform_filter)]
            if artifacts and not matching:
                logger.warning(
                    "No %s artifact matches platform %s/%s/%s (%d candidates).",
                    self._options.product_name,
                    *platform_filter,
                    len(artifacts),
                )
            artifacts = matching

        return artifacts

    def resolve_one(self) -> ArtifactInfo:
        """Return exactly one artifact.

        Raises
        ------
        NoArtifactsError
            Nothing matched.
        AmbiguousArtifactsError
            More than one artifact matched; narrow with a platform filter.
        """
        artifacts = self.resolve_all()
        if not artifacts:
            raise NoArtifactsError(
                f"No artifacts found for {self._options.product_name} "
                f"{self._options.product_version} in channel {self._options.channel}."
            )
        if len(artifacts) > 1:
            candidates = ", ".join(
                f"{a.platform}/{a.platform_version}/{a.architecture}" for a in artifacts
            )
            raise AmbiguousArtifactsError(
                f"{len(artifacts)} artifacts found for {self._options.product_name} "
                f"{self._options.product_version}: {candidates}. "
                "Specify platform, platform_version and architecture."
            )
        return artifacts[0]

    def latest_artifacts(self) -> list[ArtifactInfo]:
        """Artifacts of the newest build that has any in this channel.

        Raises ``NoArtifactsError`` if the product has no builds at all.
        Returns an empty list if builds exist but none is in the channel.
        """
        product_name = self._options.product_name
        raw = self._request(
            lambda: self._executor.get(BUILDS_PATH.format(product_name=product_name))
        )
        builds = BuildList.model_validate(raw) if raw is not None else None

        if builds is None or not builds.builds:
            raise NoArtifactsError(
                f"Can not find any builds for {product_name} in {self._endpoint}."
            )

        # Every build is checked against the channel; for a stable channel
        # this can mean many queries before a match.
        for build in builds.newest_first():
            artifacts = self.artifacts_for_version(build.version)
            if artifacts:
                logger.info(
                    "Resolved latest %s in %s to %s (%d artifacts).",
                    product_name,
                    self._options.channel,
                    build.version,
                    len(artifacts),
                )
                return artifacts

        logger.info(
            "None of the %d %s builds has artifacts in %s.",
            len(builds.builds),
            product_name,
            self._options.repository,
        )
        return []

    def artifacts_for_version(self, version: str) -> list[ArtifactInfo]:
        """Artifacts of ``product_name`` at ``version`` in this channel."""
        query = ItemsQuery.for_artifacts(
            repo=self._options.repository,
            project=self._options.product_name,
            version=version,
        )
        results = self.query(query)
        logger.debug(
            "%s %s in %s: %d results.",
            self._options.product_name,
            version,
            self._options.repository,
            len(results),
        )
        return [self.create_artifact(result) for result in results]

    def query(self, items_query: ItemsQuery) -> list[dict[str, Any]]:
        """Run an items query and return its raw ``results``."""
        body = encode_items_query(items_query)
        response = self._request(
            lambda: self._executor.post(
                SEARCH_PATH, body, {"Content-Type": "text/plain"}
            )
        )
        if not response:
            return []
        return list(response.get("results") or [])

    def create_artifact(self, result: Mapping[str, Any]) -> ArtifactInfo:
        """Normalize one raw search result."""
        return ArtifactInfo.from_properties(
            map_properties(result.get("properties")),
            url=download_uri(self._endpoint, result),
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _request(self, call: Callable[[], T]) -> T:
        """Run ``call`` translating unreachable-host and bad-credential errors.

        Everything else propagates unchanged.
        """
        try:
            return call()
        except (requests.exceptions.ConnectTimeout, requests.exceptions.ConnectionError) as exc:
            raise ArtifactoryConnectionError(
                f"Artifactory endpoint '{self._endpoint}' is unreachable. Check that "
                "the endpoint is correct and there is an open network connection to it."
            ) from exc
        except requests.exceptions.HTTPError as exc:
            if _is_bad_credentials(exc):
                raise AuthenticationError(
                    "Artifactory server denied credentials. Verify ARTIFACTORY_USERNAME "
                    "and ARTIFACTORY_PASSWORD environment variables are configured properly."
                ) from exc
            raise


def _is_bad_credentials(exc: requests.exceptions.HTTPError) -> bool:
    response = exc.response
    if response is None or response.status_code != 401:
        return False
    return bool(
        _BAD_CREDENTIALS_RE.search(response.text or "")
        or _BAD_CREDENTIALS_RE.search(str(exc))
    )
