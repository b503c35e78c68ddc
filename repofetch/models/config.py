"""Download configuration model."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, NamedTuple

import yaml
from pydantic import BaseModel, ConfigDict, Field

SHALLOW_REFS = frozenset({"master", "main"})


class ArchiveEntry(NamedTuple):
    """An extracted file or directory, relative to the extraction root."""

    path: str  # POSIX separators
    is_directory: bool


EntryFilter = Callable[[ArchiveEntry], bool]


class DownloadConfiguration(BaseModel):
    """Caller-supplied options for a single fetch."""

    model_config = ConfigDict(extra="forbid")

    clone: bool = Field(default=False, description="Use git clone instead of an archive download")
    headers: dict[str, str] = Field(
        default_factory=dict, description="Extra HTTP headers for the archive request"
    )
    shallow: bool | None = Field(
        default=None, description="Force or forbid --depth 1 (default: only for master/main)"
    )
    strip: int = Field(default=1, ge=0, description="Leading path components to strip")
    filter: EntryFilter | None = Field(
        default=None, description="Predicate deciding which extracted entries are kept"
    )
    timeout: float | None = Field(default=30.0, description="HTTP timeout in seconds")

    def is_shallow(self, checkout: str) -> bool:
        """Resolve the shallow-clone setting for ``checkout``."""
        if self.shallow is not None:
            return self.shallow
        return checkout in SHALLOW_REFS

    @property
    def needs_staging(self) -> bool:
        """Whether extraction must go through a temp directory."""
        return self.strip > 0 or self.filter is not None

    @classmethod
    def from_yaml(cls, path: Path) -> "DownloadConfiguration":
        """Load options from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)
