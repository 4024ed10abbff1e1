"""Resolution options — what to look for, supplied by the caller."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

LATEST = "latest"


class ResolverOptions(BaseModel):
    """Product, channel, version selector and optional platform filter.

    ``product_version`` is either a concrete version string or ``"latest"``
    (case-insensitive).  The platform filter only applies when ``platform``
    is set; ``platform_version`` and ``architecture`` are then compared
    as given, ``None`` included.
    """

    model_config = ConfigDict(frozen=True)

    product_name: str
    channel: str
    product_version: str = LATEST
    platform: str | None = None
    platform_version: str | None = None
    architecture: str | None = None

    @field_validator("product_name", "channel", "product_version")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @property
    def latest_version(self) -> bool:
        """Whether the newest published version should be resolved."""
        return self.product_version.lower() == LATEST

    @property
    def repository(self) -> str:
        """Repository holding this channel's packages."""
        return f"omnibus-{self.channel}-local"

    @property
    def platform_filter(self) -> tuple[str, str | None, str | None] | None:
        """The (platform, platform_version, architecture) triple, if filtering.

        An empty ``platform`` string counts as unset: no filtering.
        """
        if not self.platform:
            return None
        return (self.platform, self.platform_version, self.architecture)
