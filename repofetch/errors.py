"""Exceptions raised by the fetch pipeline.

Every failure derives from RepoFetchError so callers (and the CLI) can catch
one type. Each subclass carries the context needed to diagnose it: the
specification string, URL, exit status or path.
"""

from __future__ import annotations

from pathlib import Path


class RepoFetchError(Exception):
    """Base exception for repofetch."""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidSpecification(RepoFetchError, ValueError):
    """Repository string matches no known grammar."""

    code = "INVALID_SPECIFICATION"

    def __init__(self, spec: str) -> None:
        super().__init__(f"Invalid repository string: {spec!r}")
        self.spec = spec


class FetchFailed(RepoFetchError):
    """Archive download returned a non-success response or unusable body."""

    code = "FETCH_FAILED"

    def __init__(self, url: str, status: int | None = None, reason: str | None = None) -> None:
        detail = f"HTTP {status}" if status is not None else "no response"
        if reason:
            detail = f"{detail}: {reason}"
        super().__init__(f"Failed to download {url} ({detail})")
        self.url = url
        self.status = status


class CloneFailed(RepoFetchError):
    """git clone exited non-zero."""

    code = "CLONE_FAILED"

    def __init__(self, url: str, returncode: int | None) -> None:
        super().__init__(f"git clone of {url} failed (exit status {returncode})")
        self.url = url
        self.returncode = returncode


class CheckoutFailed(RepoFetchError):
    """git checkout of the requested ref exited non-zero."""

    code = "CHECKOUT_FAILED"

    def __init__(self, ref: str, returncode: int | None) -> None:
        super().__init__(f"git checkout of {ref!r} failed (exit status {returncode})")
        self.ref = ref
        self.returncode = returncode


class CleanupFailed(RepoFetchError):
    """A directory could not be removed.

    Raised after the repository contents were already written, so the
    destination holds usable data; only metadata or temp removal failed.
    """

    code = "CLEANUP_FAILED"

    def __init__(self, path: Path | str) -> None:
        super().__init__(f"Failed to remove {path}")
        self.path = Path(path)
