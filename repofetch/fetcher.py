"""Single entry point tying parsing, URL resolution and strategies together."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import httpx

from repofetch.models.config import DownloadConfiguration
from repofetch.parser import parse
from repofetch.sources.archive import ArchiveStrategy
from repofetch.sources.base import FetchStrategy
from repofetch.sources.git import GitCloneStrategy, ProcessRunner
from repofetch.urls import resolve_url

logger = logging.getLogger(__name__)


def get_strategy(
    config: DownloadConfiguration,
    runner: ProcessRunner | None = None,
    client: httpx.AsyncClient | None = None,
) -> FetchStrategy:
    """Pick the strategy selected by ``config.clone``."""
    if config.clone:
        return GitCloneStrategy(runner)
    return ArchiveStrategy(client)


async def fetch_repository(
    spec: str,
    dest: str | Path,
    config: DownloadConfiguration | dict[str, Any] | None = None,
    *,
    runner: ProcessRunner | None = None,
    client: httpx.AsyncClient | None = None,
) -> None:
    """Download repository ``spec`` into ``dest``.

    Args:
        spec: Repository string, e.g. ``owner/name#branch`` or ``direct:<url>``
        dest: Target directory
        config: Download options (model or plain dict)
        runner: Process runner used for git (clone mode)
        client: HTTP client used for the archive (archive mode)

    Raises:
        RepoFetchError: any failure; partial writes to ``dest`` are kept.
    """
    if config is None:
        config = DownloadConfiguration()
    elif not isinstance(config, DownloadConfiguration):
        config = DownloadConfiguration.model_validate(config)

    descriptor = parse(spec)
    url = descriptor.url or resolve_url(descriptor, config.clone)
    logger.info(f"Resolved {spec!r} to {url}")

    strategy = get_strategy(config, runner=runner, client=client)
    try:
        await strategy.fetch(url, Path(dest), descriptor.checkout, config)
    finally:
        await strategy.close()
