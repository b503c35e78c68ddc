"""Data models for repofetch."""

from repofetch.models.config import (
    SHALLOW_REFS,
    ArchiveEntry,
    DownloadConfiguration,
    EntryFilter,
)
from repofetch.models.descriptor import (
    DEFAULT_CHECKOUT,
    DEFAULT_ORIGINS,
    ProviderKind,
    RepositoryDescriptor,
)

__all__ = [
    # Descriptor
    "ProviderKind",
    "RepositoryDescriptor",
    "DEFAULT_CHECKOUT",
    "DEFAULT_ORIGINS",
    # Download options
    "ArchiveEntry",
    "DownloadConfiguration",
    "EntryFilter",
    "SHALLOW_REFS",
]
