"""Git clone strategy.

Clones with the ``git`` executable and strips the ``.git`` directory, leaving
a plain data-only copy of the repository.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from repofetch.cleanup import remove_tree
from repofetch.errors import CheckoutFailed, CloneFailed
from repofetch.models.config import SHALLOW_REFS
from repofetch.sources.base import FetchStrategy

if TYPE_CHECKING:
    from repofetch.models.config import DownloadConfiguration

logger = logging.getLogger(__name__)

GIT_DIR = ".git"


class ProcessRunner(Protocol):
    """Runs a command to completion and reports its exit status."""

    async def run(self, command: str, args: list[str], cwd: Path | None = None) -> int:
        ...


class SubprocessRunner:
    """Run commands as child processes sharing our stdin/stdout/stderr."""

    async def run(self, command: str, args: list[str], cwd: Path | None = None) -> int:
        process = await asyncio.create_subprocess_exec(command, *args, cwd=cwd)
        return await process.wait()


class GitCloneStrategy(FetchStrategy):
    """Fetch a repository with ``git clone`` (and ``git checkout`` for refs)."""

    name = "git"

    def __init__(self, runner: ProcessRunner | None = None, executable: str = "git") -> None:
        self.runner: ProcessRunner = runner or SubprocessRunner()
        self.executable = executable

    async def fetch(
        self,
        url: str,
        dest: Path,
        checkout: str,
        config: DownloadConfiguration,
    ) -> None:
        await self.clone(url, dest, checkout, config)

    async def clone(
        self,
        url: str,
        dest: Path,
        checkout: str,
        config: DownloadConfiguration,
    ) -> None:
        """Clone ``url`` into ``dest`` and check out ``checkout``.

        The clone is shallow when ``config.shallow`` says so, or by default
        when ``checkout`` is master/main. Forcing a shallow clone of an older
        ref makes the checkout step fail; that is left to git to report.

        Raises:
            CloneFailed: if git clone exits non-zero or git is missing
            CheckoutFailed: if git checkout exits non-zero
            CleanupFailed: if the .git directory could not be removed
        """
        args = ["clone"]
        if config.is_shallow(checkout):
            args.extend(["--depth", "1"])
        args.extend([url, str(dest)])

        logger.info(f"Cloning {url} into {dest}")
        returncode = await self._run(args)
        if returncode != 0:
            raise CloneFailed(url, returncode)

        if checkout not in SHALLOW_REFS:
            logger.info(f"Checking out {checkout}")
            returncode = await self._run(["checkout", checkout], cwd=dest)
            if returncode != 0:
                raise CheckoutFailed(checkout, returncode)

        await remove_tree(dest / GIT_DIR)

    async def _run(self, args: list[str], cwd: Path | None = None) -> int | None:
        try:
            return await self.runner.run(self.executable, args, cwd=cwd)
        except FileNotFoundError:
            logger.error(f"{self.executable!r} executable not found")
            return None
