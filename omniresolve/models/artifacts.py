"""Artifact descriptor model (immutable)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

# Property vocabulary published with every omnibus package.
PROPERTY_MD5 = "omnibus.md5"
PROPERTY_SHA256 = "omnibus.sha256"
PROPERTY_VERSION = "omnibus.version"
PROPERTY_PLATFORM = "omnibus.platform"
PROPERTY_PLATFORM_VERSION = "omnibus.platform_version"
PROPERTY_ARCHITECTURE = "omnibus.architecture"


class ArtifactInfo(BaseModel):
    """One published package for a single platform/architecture.

    A pure projection of the repository's item properties plus the
    download URL derived from the item's location.
    """

    model_config = ConfigDict(frozen=True)

    md5: str | None = None
    sha256: str | None = None
    version: str | None = None
    platform: str | None = None
    platform_version: str | None = None
    architecture: str | None = None
    url: str

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any], url: str) -> ArtifactInfo:
        """Build an artifact from a flattened property map."""
        return cls(
            md5=properties.get(PROPERTY_MD5),
            sha256=properties.get(PROPERTY_SHA256),
            version=properties.get(PROPERTY_VERSION),
            platform=properties.get(PROPERTY_PLATFORM),
            platform_version=properties.get(PROPERTY_PLATFORM_VERSION),
            architecture=properties.get(PROPERTY_ARCHITECTURE),
            url=url,
        )

    @property
    def filename(self) -> str:
        """Last path segment of the download URL."""
        return self.url.rsplit("/", 1)[-1]

    def matches_platform(
        self,
        platform: str | None,
        platform_version: str | None,
        architecture: str | None,
    ) -> bool:
        """Return True if all three platform fields match exactly."""
        return (
            self.platform == platform
            and self.platform_version == platform_version
            and self.architecture == architecture
        )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump()
