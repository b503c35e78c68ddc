"""Parse repository strings into descriptors.

Accepted forms::

    owner/name
    owner/name#ref
    gitlab:owner/name
    bitbucket:my.host.org:owner/name#v2
    direct:https://example.com/archive.zip#ref
    https://example.com/archive.zip
"""

from __future__ import annotations

import re

from repofetch.errors import InvalidSpecification
from repofetch.models.descriptor import (
    DEFAULT_CHECKOUT,
    DEFAULT_ORIGINS,
    ProviderKind,
    RepositoryDescriptor,
)

_DIRECT_RE = re.compile(r"^direct:([^#]+)(?:#(.+))?$")
# Owners never contain ':', which keeps scheme://host/path URLs out of this form
_HOSTED_RE = re.compile(
    r"^(?:(github|gitlab|bitbucket):)?(?:(.+):)?([^/:]+)/([^#]+)(?:#(.+))?$"
)
_URL_RE = re.compile(r"^(https?|git):")
# scheme://host[:port]/path is always a direct target, even when it looks like origin:owner/name
_SCHEME_URL_RE = re.compile(r"^(https?|git)://", re.IGNORECASE)


def parse(spec: str) -> RepositoryDescriptor:
    """Turn a repository string into a RepositoryDescriptor.

    Raises:
        InvalidSpecification: if the string matches no known form and does
            not look like a URL.
    """
    match = _DIRECT_RE.match(spec)
    if match:
        return RepositoryDescriptor(
            kind=ProviderKind.DIRECT,
            url=match.group(1),
            checkout=match.group(2) or DEFAULT_CHECKOUT,
        )

    if _SCHEME_URL_RE.match(spec):
        return RepositoryDescriptor(kind=ProviderKind.DIRECT, url=spec)

    match = _HOSTED_RE.match(spec)
    if match:
        provider, origin, owner, name, checkout = match.groups()
        kind = ProviderKind(provider or ProviderKind.GITHUB.value)
        return RepositoryDescriptor(
            kind=kind,
            origin=origin or DEFAULT_ORIGINS[kind],
            owner=owner,
            name=name,
            checkout=checkout or DEFAULT_CHECKOUT,
        )

    # Bare URLs that don't fit owner/name are taken as direct targets
    if _URL_RE.match(spec):
        return RepositoryDescriptor(kind=ProviderKind.DIRECT, url=spec)

    raise InvalidSpecification(spec)
