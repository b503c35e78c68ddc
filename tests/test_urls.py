"""Tests for URL resolution."""

from __future__ import annotations

import pytest

from repofetch.models.descriptor import ProviderKind, RepositoryDescriptor
from repofetch.parser import parse
from repofetch.urls import add_protocol, resolve_url


class TestAddProtocol:
    """Tests for origin normalization."""

    @pytest.mark.parametrize(
        "origin,expected",
        [
            ("github.com", "https://github.com"),
            ("http://my.host", "http://my.host"),
            ("https://my.host", "https://my.host"),
            ("HTTPS://my.host", "HTTPS://my.host"),
            ("ftp://my.host", "ftp://my.host"),
            ("ftps://my.host", "ftps://my.host"),
            ("git@github.com", "git@github.com"),
        ],
    )
    def test_add_protocol(self, origin: str, expected: str) -> None:
        assert add_protocol(origin) == expected


class TestResolveUrl:
    """Tests for clone and archive URLs."""

    def test_github_archive(self) -> None:
        url = resolve_url(parse("flippidippi/download-git-repo-fixture"), for_clone=False)
        assert url == "https://github.com/flippidippi/download-git-repo-fixture/archive/master.zip"

    def test_github_archive_branch(self) -> None:
        url = resolve_url(parse("flippidippi/download-git-repo-fixture#my-branch"), for_clone=False)
        assert url == "https://github.com/flippidippi/download-git-repo-fixture/archive/my-branch.zip"

    def test_gitlab_archive(self) -> None:
        url = resolve_url(parse("gitlab:owner/name#v1"), for_clone=False)
        assert url == "https://gitlab.com/owner/name/repository/archive.zip?ref=v1"

    def test_bitbucket_archive(self) -> None:
        url = resolve_url(parse("bitbucket:owner/name"), for_clone=False)
        assert url == "https://bitbucket.org/owner/name/get/master.zip"

    @pytest.mark.parametrize(
        "spec,expected",
        [
            ("owner/name", "https://github.com/owner/name.git"),
            ("gitlab:owner/name#dev", "https://gitlab.com/owner/name.git"),
            ("bitbucket:owner/name", "https://bitbucket.org/owner/name.git"),
            ("gitlab:http://git.local:owner/name", "http://git.local/owner/name.git"),
        ],
    )
    def test_clone_urls(self, spec: str, expected: str) -> None:
        assert resolve_url(parse(spec), for_clone=True) == expected

    def test_ssh_origin_uses_colon(self) -> None:
        descriptor = parse("github:git@github.com:owner/name")

        assert resolve_url(descriptor, for_clone=True) == "git@github.com:owner/name.git"
        assert resolve_url(descriptor, for_clone=False) == "git@github.com:owner/name/archive/master.zip"

    def test_direct_returned_verbatim(self) -> None:
        descriptor = parse("direct:https://example.com/archive.zip#ignored")

        assert resolve_url(descriptor, for_clone=False) == "https://example.com/archive.zip"
        assert resolve_url(descriptor, for_clone=True) == "https://example.com/archive.zip"

    def test_resolve_is_pure(self) -> None:
        descriptor = RepositoryDescriptor(
            kind=ProviderKind.GITLAB, origin="gitlab.com", owner="o", name="n", checkout="v2"
        )

        first = resolve_url(descriptor, False)
        assert resolve_url(descriptor, False) == first
        assert resolve_url(descriptor, True) == resolve_url(descriptor, True)
        assert descriptor.checkout == "v2"
