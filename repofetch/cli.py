"""CLI commands for repofetch."""

from __future__ import annotations

import asyncio
import logging
from fnmatch import fnmatch
from pathlib import Path

import click
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from repofetch.errors import RepoFetchError
from repofetch.fetcher import fetch_repository
from repofetch.models.config import ArchiveEntry, DownloadConfiguration, EntryFilter
from repofetch.parser import parse
from repofetch.urls import resolve_url

console = Console(stderr=True)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def parse_headers(values: tuple[str, ...]) -> dict[str, str]:
    """Parse ``Name: value`` pairs given on the command line."""
    headers: dict[str, str] = {}
    for value in values:
        name, sep, content = value.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected 'Name: value', got {value!r}", param_hint="--header")
        headers[name.strip()] = content.strip()
    return headers


def include_filter(patterns: tuple[str, ...]) -> EntryFilter:
    """Keep files matching any glob pattern; directories always pass."""

    def _filter(entry: ArchiveEntry) -> bool:
        if entry.is_directory:
            return True
        name = entry.path.rsplit("/", 1)[-1]
        return any(fnmatch(entry.path, p) or fnmatch(name, p) for p in patterns)

    return _filter


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool) -> None:
    """repofetch - Download git repositories as plain directories."""
    setup_logging(verbose)


@main.command()
@click.argument("spec")
@click.argument("dest", type=click.Path(path_type=Path))
@click.option("--config", "config_file", type=click.Path(exists=True, path_type=Path),
              default=None, help="YAML file with download options")
@click.option("--clone/--no-clone", default=None, help="Use git clone instead of a ZIP download")
@click.option("--shallow/--no-shallow", default=None, help="Force or forbid a shallow clone")
@click.option("--strip", type=click.IntRange(min=0), default=None, help="Leading path components to strip")
@click.option("--header", "-H", "headers", multiple=True, help="Extra HTTP header, 'Name: value'")
@click.option("--include", "-i", "includes", multiple=True, help="Glob of files to keep (archive only)")
@click.option("--timeout", type=float, default=None, help="HTTP timeout in seconds")
def fetch(
    spec: str,
    dest: Path,
    config_file: Path | None,
    clone: bool | None,
    shallow: bool | None,
    strip: int | None,
    headers: tuple[str, ...],
    includes: tuple[str, ...],
    timeout: float | None,
) -> None:
    """Download repository SPEC into DEST."""
    try:
        config = DownloadConfiguration.from_yaml(config_file) if config_file else DownloadConfiguration()
    except (ValidationError, yaml.YAMLError) as e:
        console.print(f"[red]Invalid config file {config_file}: {escape(str(e))}[/red]")
        raise SystemExit(1) from e

    overrides: dict = {}
    if clone is not None:
        overrides["clone"] = clone
    if shallow is not None:
        overrides["shallow"] = shallow
    if strip is not None:
        overrides["strip"] = strip
    if timeout is not None:
        overrides["timeout"] = timeout
    if headers:
        overrides["headers"] = {**config.headers, **parse_headers(headers)}
    if includes:
        overrides["filter"] = include_filter(includes)
    config = config.model_copy(update=overrides)

    try:
        if config.clone:
            # git writes its own progress to the inherited terminal
            asyncio.run(fetch_repository(spec, dest, config))
        else:
            with console.status(f"Fetching {spec}..."):
                asyncio.run(fetch_repository(spec, dest, config))
    except RepoFetchError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1) from e

    click.echo(str(dest))


@main.command()
@click.argument("spec")
@click.option("--clone", is_flag=True, help="Show the git URL instead of the archive URL")
def resolve(spec: str, clone: bool) -> None:
    """Print the URL SPEC would be fetched from."""
    try:
        descriptor = parse(spec)
    except RepoFetchError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1) from e

    click.echo(descriptor.url or resolve_url(descriptor, clone))


if __name__ == "__main__":
    main()
