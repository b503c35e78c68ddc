"""Strategies for materializing a repository on disk."""

from repofetch.sources.archive import ArchiveStrategy, walk_tree
from repofetch.sources.base import FetchStrategy
from repofetch.sources.git import GitCloneStrategy, ProcessRunner, SubprocessRunner

__all__ = [
    "FetchStrategy",
    "ArchiveStrategy",
    "GitCloneStrategy",
    "ProcessRunner",
    "SubprocessRunner",
    "walk_tree",
]
