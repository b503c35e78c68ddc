"""Directory removal with retry on transient filesystem contention.

Right after a clone or extraction, virus scanners, indexers or handles that
were just closed can briefly lock a directory. Those errors are retried with
a linearly growing delay; anything else fails immediately.
"""

from __future__ import annotations

import asyncio
import errno
import logging
import shutil
from pathlib import Path

from repofetch.errors import CleanupFailed

logger = logging.getLogger(__name__)

# errno values treated as "try again shortly"
TRANSIENT_ERRNOS: frozenset[int] = frozenset({errno.EBUSY, errno.EPERM})


def is_transient(error: OSError) -> bool:
    """Check if a removal error is worth retrying."""
    return error.errno in TRANSIENT_ERRNOS


async def remove_tree(
    path: Path | str,
    max_attempts: int = 3,
    base_delay_ms: int = 100,
) -> None:
    """Recursively delete ``path``. A missing path counts as success.

    Args:
        path: Directory (or file) to remove
        max_attempts: Total attempts for transient errors
        base_delay_ms: Delay before retry N is ``base_delay_ms * N``

    Raises:
        CleanupFailed: on a non-transient error, or when all attempts failed.
    """
    path = Path(path)
    max_attempts = max(max_attempts, 1)
    for attempt in range(1, max_attempts + 1):
        try:
            await asyncio.to_thread(_remove, path)
            return
        except FileNotFoundError:
            return
        except OSError as e:
            if not is_transient(e) or attempt >= max_attempts:
                raise CleanupFailed(path) from e
            delay = base_delay_ms * attempt / 1000
            logger.warning(
                f"Removing {path} failed ({e}), retrying in {delay:.2f}s "
                f"(attempt {attempt}/{max_attempts})"
            )
            await asyncio.sleep(delay)


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()
