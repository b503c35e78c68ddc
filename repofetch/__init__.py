"""repofetch - Download git repositories as plain directories, by archive or clone."""

from repofetch.cleanup import remove_tree
from repofetch.errors import (
    CheckoutFailed,
    CleanupFailed,
    CloneFailed,
    FetchFailed,
    InvalidSpecification,
    RepoFetchError,
)
from repofetch.fetcher import fetch_repository
from repofetch.models import (
    ArchiveEntry,
    DownloadConfiguration,
    ProviderKind,
    RepositoryDescriptor,
)
from repofetch.parser import parse
from repofetch.urls import resolve_url

__version__ = "0.1.0"
__all__ = [
    "fetch_repository",
    "parse",
    "resolve_url",
    "remove_tree",
    "ArchiveEntry",
    "DownloadConfiguration",
    "ProviderKind",
    "RepositoryDescriptor",
    "RepoFetchError",
    "InvalidSpecification",
    "FetchFailed",
    "CloneFailed",
    "CheckoutFailed",
    "CleanupFailed",
]
