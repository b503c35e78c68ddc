"""Archive strategy for ZIP downloads.

Downloads a repository snapshot as a ZIP and extracts it into the
destination, collapsing the single wrapping folder providers put around
their archives and applying the optional entry filter.
"""

from __future__ import annotations

import asyncio
import io
import logging
import os
import tempfile
import zipfile
from pathlib import Path
from typing import TYPE_CHECKING, Iterator

import httpx

from repofetch.cleanup import remove_tree
from repofetch.errors import FetchFailed
from repofetch.models.config import ArchiveEntry
from repofetch.sources.base import FetchStrategy

if TYPE_CHECKING:
    from repofetch.models.config import DownloadConfiguration, EntryFilter

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"accept": "application/zip"}
STAGING_PREFIX = ".repofetch-"


def walk_tree(root: Path) -> Iterator[ArchiveEntry]:
    """Yield every entry below ``root``, parents before their children.

    Directory listings are read lazily, so files of a directory that has
    already been yielded may be moved away before its subdirectories are
    visited.
    """

    def _walk(directory: Path, prefix: str) -> Iterator[ArchiveEntry]:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
        for entry in entries:
            relative = f"{prefix}{entry.name}"
            is_dir = entry.is_dir(follow_symlinks=False)
            yield ArchiveEntry(relative, is_dir)
            if is_dir:
                yield from _walk(Path(entry.path), f"{relative}/")

    return _walk(root, "")


def find_root(staging: Path, strip: int) -> Path:
    """Pick the directory whose contents end up in the destination.

    With ``strip > 0`` a lone top-level directory is collapsed. This happens
    at most once, whatever the value of ``strip``.
    """
    if strip <= 0:
        return staging
    children = list(staging.iterdir())
    if len(children) == 1 and children[0].is_dir():
        logger.info(f"Collapsing archive root {children[0].name!r}")
        return children[0]
    return staging


def move_entries(root: Path, dest: Path, entry_filter: EntryFilter | None = None) -> int:
    """Move the tree under ``root`` into ``dest``, honouring ``entry_filter``.

    Rejected entries are skipped individually; the children of a rejected
    directory are still offered to the filter. Returns the number of files
    moved.
    """
    moved = 0
    for entry in walk_tree(root):
        if entry_filter is not None and not entry_filter(entry):
            logger.debug(f"Skipping {entry.path}")
            continue
        target = dest.joinpath(*entry.path.split("/"))
        if entry.is_directory:
            target.mkdir(parents=True, exist_ok=True)
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        os.replace(root.joinpath(*entry.path.split("/")), target)
        moved += 1
        logger.debug(f"Moved {entry.path}")
    return moved


class ArchiveStrategy(FetchStrategy):
    """Fetch a repository by downloading and extracting a ZIP archive."""

    name = "archive"

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self._client = client
        self._owns_client = client is None

    def client(self, timeout: float | None) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if we created it."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def fetch(
        self,
        url: str,
        dest: Path,
        checkout: str,
        config: DownloadConfiguration,
    ) -> None:
        await self.download(url, dest, config)

    async def download(self, url: str, dest: Path, config: DownloadConfiguration) -> None:
        """Download the archive at ``url`` and extract it into ``dest``.

        Raises:
            FetchFailed: on a non-2xx response, transport error or unreadable archive
            CleanupFailed: if the staging directory could not be removed
        """
        response = await self._get(url, config)
        try:
            archive = zipfile.ZipFile(io.BytesIO(response.content))
        except zipfile.BadZipFile as e:
            raise FetchFailed(url, response.status_code, "response is not a ZIP archive") from e

        with archive:
            if not config.needs_staging:
                logger.info(f"Extracting {len(archive.namelist())} entries into {dest}")
                dest.mkdir(parents=True, exist_ok=True)
                await asyncio.to_thread(archive.extractall, dest)
                return
            await self._extract_staged(archive, dest, config)

    async def _get(self, url: str, config: DownloadConfiguration) -> httpx.Response:
        headers = httpx.Headers(DEFAULT_HEADERS)
        headers.update(config.headers)

        logger.info(f"Downloading {url}")
        try:
            response = await self.client(config.timeout).get(url, headers=headers)
        except httpx.HTTPError as e:
            raise FetchFailed(url, None, str(e)) from e

        if not response.is_success:
            raise FetchFailed(url, response.status_code, response.reason_phrase)
        return response

    async def _extract_staged(
        self,
        archive: zipfile.ZipFile,
        dest: Path,
        config: DownloadConfiguration,
    ) -> None:
        """Extract through a temp directory next to ``dest``, then move."""
        dest = dest.absolute()
        dest.parent.mkdir(parents=True, exist_ok=True)
        staging = Path(tempfile.mkdtemp(prefix=STAGING_PREFIX, dir=dest.parent))

        try:
            await asyncio.to_thread(archive.extractall, staging)
            root = find_root(staging, config.strip)
            dest.mkdir(parents=True, exist_ok=True)
            moved = await asyncio.to_thread(move_entries, root, dest, config.filter)
            logger.info(f"Extracted {moved} files into {dest}")
        finally:
            await remove_tree(staging)
