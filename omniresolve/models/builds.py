"""Build history as returned by the build-listing endpoint.

Output looks like::

    {
      "buildsNumbers": [
        {"uri": "/12.5.1+20151213083009", "started": "2015-12-13T08:40:19.238+0000"},
        {"uri": "/12.6.0+20160111212038", "started": "2016-01-12T00:25:35.762+0000"}
      ]
    }
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class BuildEntry(BaseModel):
    """One build publication event."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    uri: str
    started: str = ""

    @property
    def version(self) -> str:
        return self.uri.removeprefix("/")


class BuildList(BaseModel):
    """All known builds of one product."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    builds: list[BuildEntry] = Field(default_factory=list, alias="buildsNumbers")

    def newest_first(self) -> list[BuildEntry]:
        """Builds ordered by ``started``, most recent first.

        The timestamps are fixed-width ISO-8601 strings, so they are
        compared lexically.
        """
        return list(reversed(sorted(self.builds, key=lambda b: b.started)))
