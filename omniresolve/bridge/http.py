"""HTTP bridge — ``requests``-backed executor for Artifactory calls.

The resolver only needs two verbs, described by ``RequestExecutor``.
``ArtifactoryClient`` implements them over a ``requests.Session``:

* basic auth when a username/password pair is configured,
* the configured timeout on every request,
* ``raise_for_status()`` on every response, so HTTP failures surface as
  ``requests.HTTPError`` with the response attached,
* JSON decoding, where an empty body decodes to ``None``.

Error translation is the resolver's job; this module lets ``requests``
exceptions through untouched.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

import requests

from omniresolve import __version__
from omniresolve.config import ResolverSettings

logger = logging.getLogger(__name__)


@runtime_checkable
class RequestExecutor(Protocol):
    """What the resolver needs from an HTTP client."""

    def get(self, path: str) -> Any | None: ...

    def post(
        self,
        path: str,
        body: str,
        headers: dict[str, str] | None = None,
    ) -> Any | None: ...


class ArtifactoryClient:
    """Synchronous Artifactory REST client.

    Parameters
    ----------
    settings:
        Endpoint, credentials and timeout.  Read once here.
    session:
        Optional pre-built ``requests.Session`` (e.g. with custom adapters
        mounted).  A new session is created when omitted.
    """

    def __init__(
        self,
        settings: ResolverSettings,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = settings.base_url
        self._timeout = settings.timeout_seconds
        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = f"omniresolve/{__version__}"
        if settings.has_credentials:
            self._session.auth = (settings.username, settings.password)

    @property
    def base_url(self) -> str:
        return self._base_url

    def url_for(self, path: str) -> str:
        """Absolute URL for an API path such as ``/api/search/aql``."""
        return f"{self._base_url}/{path.lstrip('/')}"

    def get(self, path: str) -> Any | None:
        return self._request("GET", path)

    def post(
        self,
        path: str,
        body: str,
        headers: dict[str, str] | None = None,
    ) -> Any | None:
        return self._request("POST", path, data=body.encode("utf-8"), headers=headers)

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> ArtifactoryClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any | None:
        url = self.url_for(path)
        logger.debug("%s %s", method, url)
        response = self._session.request(method, url, timeout=self._timeout, **kwargs)
        response.raise_for_status()
        if not response.content or not response.content.strip():
            return None
        return response.json()
