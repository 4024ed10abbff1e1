"""Frozen Pydantic records for artifacts, resolution options, builds and AQL queries."""

from omniresolve.models.artifacts import ArtifactInfo
from omniresolve.models.builds import BuildEntry, BuildList
from omniresolve.models.options import LATEST, ResolverOptions
from omniresolve.models.query import Criterion, ItemsQuery

__all__ = [
    # artifacts
    "ArtifactInfo",
    # options
    "LATEST",
    "ResolverOptions",
    # builds
    "BuildEntry",
    "BuildList",
    # query
    "Criterion",
    "ItemsQuery",
]
