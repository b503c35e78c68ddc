"""Base fetch strategy interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from repofetch.models.config import DownloadConfiguration


class FetchStrategy(ABC):
    """Abstract base class for the ways a repository can be materialized."""

    name: str = "base"

    @abstractmethod
    async def fetch(
        self,
        url: str,
        dest: Path,
        checkout: str,
        config: DownloadConfiguration,
    ) -> None:
        """Populate ``dest`` with the contents found at ``url``."""
        ...

    async def close(self) -> None:
        """Release any resources held by the strategy."""
