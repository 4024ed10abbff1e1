"""omniresolve: locate published omnibus packages in Artifactory.

Given a product, release channel, version (or ``latest``) and an optional
platform triple, returns the matching artifacts with their checksums and
download URLs.
"""

__version__ = "0.1.0"
__description__ = "Resolve omnibus build artifacts from an Artifactory repository"

from omniresolve.config import ResolverSettings
from omniresolve.core.resolver import (
    AmbiguousArtifactsError,
    ArtifactoryConnectionError,
    ArtifactoryError,
    ArtifactResolver,
    AuthenticationError,
    NoArtifactsError,
)
from omniresolve.models import ArtifactInfo, ResolverOptions

__all__ = [
    "ArtifactResolver",
    "ArtifactInfo",
    "ResolverOptions",
    "ResolverSettings",
    "ArtifactoryError",
    "ArtifactoryConnectionError",
    "AuthenticationError",
    "NoArtifactsError",
    "AmbiguousArtifactsError",
    "__version__",
]
