"""Build clone and archive URLs from repository descriptors."""

from __future__ import annotations

import re

from repofetch.models.descriptor import ProviderKind, RepositoryDescriptor

_PROTOCOL_RE = re.compile(r"^(f|ht)tps?://", re.IGNORECASE)
_SSH_RE = re.compile(r"^git@", re.IGNORECASE)


def add_protocol(origin: str) -> str:
    """Prefix ``https://`` unless the origin already has a scheme or is SSH."""
    if not _PROTOCOL_RE.match(origin) and not _SSH_RE.match(origin):
        origin = f"https://{origin}"
    return origin


def resolve_url(descriptor: RepositoryDescriptor, for_clone: bool) -> str:
    """Return the git or zip URL for ``descriptor``.

    Direct descriptors return their URL unchanged, whatever the mode.
    """
    if descriptor.kind == ProviderKind.DIRECT:
        return descriptor.url  # type: ignore[return-value]

    origin = add_protocol(descriptor.origin or "")
    # SSH hosts are separated from the path by a colon
    origin += ":" if _SSH_RE.match(origin) else "/"
    repo = f"{origin}{descriptor.owner}/{descriptor.name}"

    if for_clone:
        return f"{repo}.git"

    checkout = descriptor.checkout
    if descriptor.kind == ProviderKind.GITLAB:
        return f"{repo}/repository/archive.zip?ref={checkout}"
    if descriptor.kind == ProviderKind.BITBUCKET:
        return f"{repo}/get/{checkout}.zip"
    return f"{repo}/archive/{checkout}.zip"
