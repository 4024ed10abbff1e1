"""Structured AQL item queries.

Queries are plain data; ``omniresolve.core.aql`` turns them into the
text sent to the search endpoint.  Values never get spliced into the
query string directly.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, field_validator

OPERATORS: frozenset[str] = frozenset(
    {"$eq", "$ne", "$match", "$nmatch", "$gt", "$gte", "$lt", "$lte"}
)

# "@" marks a property field (e.g. "@omnibus.version").
_FIELD_RE = re.compile(r"^@?[A-Za-z0-9_.\-]+$")

DEFAULT_INCLUDE: tuple[str, ...] = ("repo", "path", "name", "property")


class Criterion(BaseModel):
    """A single ``field operator value`` condition."""

    model_config = ConfigDict(frozen=True)

    field: str
    value: str
    operator: str = "$eq"

    @field_validator("field")
    @classmethod
    def _check_field(cls, value: str) -> str:
        if not _FIELD_RE.match(value):
            raise ValueError(f"invalid AQL field name: {value!r}")
        return value

    @field_validator("operator")
    @classmethod
    def _check_operator(cls, value: str) -> str:
        if value not in OPERATORS:
            raise ValueError(
                f"unsupported AQL operator {value!r}; expected one of {sorted(OPERATORS)}"
            )
        return value


class ItemsQuery(BaseModel):
    """An ``items.find(...)`` query: all criteria must hold."""

    model_config = ConfigDict(frozen=True)

    criteria: tuple[Criterion, ...]
    include: tuple[str, ...] = DEFAULT_INCLUDE

    @field_validator("criteria")
    @classmethod
    def _at_least_one(cls, value: tuple[Criterion, ...]) -> tuple[Criterion, ...]:
        if not value:
            raise ValueError("an items query needs at least one criterion")
        return value

    @field_validator("include")
    @classmethod
    def _check_include(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for name in value:
            if not _FIELD_RE.match(name):
                raise ValueError(f"invalid AQL include field: {name!r}")
        return value

    @classmethod
    def for_artifacts(cls, repo: str, project: str, version: str) -> ItemsQuery:
        """Packages of ``project`` at ``version`` stored in ``repo``."""
        return cls(
            criteria=(
                Criterion(field="repo", value=repo),
                Criterion(field="@omnibus.project", value=project),
                Criterion(field="@omnibus.version", value=version),
            )
        )
