"""Repository descriptor model."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProviderKind(str, Enum):
    """Where a repository is hosted."""
    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"
    DIRECT = "direct"  # Full URL embedded in the repository string


DEFAULT_ORIGINS: dict[ProviderKind, str] = {
    ProviderKind.GITHUB: "github.com",
    ProviderKind.GITLAB: "gitlab.com",
    ProviderKind.BITBUCKET: "bitbucket.org",
}

DEFAULT_CHECKOUT = "master"


class RepositoryDescriptor(BaseModel):
    """Structured form of a repository string such as ``gitlab:owner/name#v1``.

    Provider-hosted repositories carry ``owner`` and ``name``; direct targets
    carry only ``url``.
    """

    model_config = ConfigDict(frozen=True)

    kind: ProviderKind
    origin: str | None = Field(default=None, description="Provider hostname")
    owner: str | None = None
    name: str | None = None
    checkout: str = Field(default=DEFAULT_CHECKOUT, min_length=1)
    url: str | None = Field(default=None, description="Complete target for direct repositories")

    @model_validator(mode="after")
    def _check_target(self) -> "RepositoryDescriptor":
        if self.kind == ProviderKind.DIRECT:
            if not self.url:
                raise ValueError("direct repositories require a url")
            if self.owner or self.name:
                raise ValueError("direct repositories cannot have owner/name")
        else:
            if not (self.owner and self.name):
                raise ValueError(f"{self.kind.value} repositories require owner and name")
            if self.url:
                raise ValueError("only direct repositories carry a url")
        return self

    @property
    def is_direct(self) -> bool:
        return self.kind == ProviderKind.DIRECT
