"""trdup CLI: find and pause torrents duplicated by a collection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import typer
from rich.console import Console
from rich.logging import RichHandler

from trdup.analyze import classify_items, explain_group, filter_by_suffix
from trdup.export import export_json, text_report
from trdup.model import FileEntry, Item, MatchConfig, ScanResult, SourceError
from trdup.source import TransmissionSource

app = typer.Typer(name="trdup", help="Find torrents already covered by a collection")
console = Console(stderr=True)

_DEFAULTS = MatchConfig()


@dataclass(slots=True)
class Settings:
    host: str
    port: int
    https: bool
    username: str
    password: str
    suffixes: list[str]
    config: MatchConfig
    manifests: dict[int, list[FileEntry]] = field(default_factory=dict)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", "--host", envvar="TRDUP_HOST", help="Server address"),
    port: int = typer.Option(9091, "--port", envvar="TRDUP_PORT", min=1, max=65535),
    https: bool = typer.Option(False, "--https/--http", envvar="TRDUP_HTTPS"),
    username: str = typer.Option("", "--username", "-u", envvar="TRDUP_USERNAME"),
    password: str = typer.Option("", "--password", envvar="TRDUP_PASSWORD"),
    suffix: str = typer.Option(
        "",
        "--suffix",
        envvar="TRDUP_SUFFIX",
        help="Only consider torrents whose name ends with one of these (';'-separated)",
    ),
    tolerance: int = typer.Option(
        _DEFAULTS.size_tolerance_bytes,
        "--tolerance",
        min=0,
        help="Bytes two sizes may differ by and still count as equal",
    ),
    match_ratio: float = typer.Option(
        _DEFAULTS.match_ratio,
        "--match-ratio",
        min=0.0,
        max=1.0,
        help="Share of an episode's files that must be found in the collection",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Connection and matching settings shared by every command."""
    _setup_logging(verbose)
    ctx.obj = Settings(
        host=host,
        port=port,
        https=https,
        username=username,
        password=password,
        suffixes=[s.strip() for s in suffix.split(";") if s.strip()],
        config=MatchConfig(size_tolerance_bytes=tolerance, match_ratio=match_ratio),
    )


def _connect(settings: Settings) -> TransmissionSource:
    try:
        return TransmissionSource.connect(
            settings.host,
            settings.port,
            https=settings.https,
            username=settings.username,
            password=settings.password,
        )
    except SourceError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _list_items(source: TransmissionSource, settings: Settings) -> list[Item]:
    try:
        items = source.list_items()
    except SourceError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not settings.suffixes:
        console.print(f"No name filter, considering all {len(items)} torrent(s)")
        return items
    filtered = filter_by_suffix(items, settings.suffixes)
    joined = ", ".join(settings.suffixes)
    console.print(f"Found {len(filtered)} torrent(s) ending with {joined}")
    return filtered


def _scan(settings: Settings) -> tuple[TransmissionSource, ScanResult]:
    """Common helper: connect, list, filter and classify."""
    source = _connect(settings)
    items = _list_items(source, settings)

    def _fetch(item_id: int) -> list[FileEntry]:
        files = source.get_file_manifest(item_id)
        settings.manifests[item_id] = files
        return files

    with console.status("[bold]Comparing file lists…"):
        result = classify_items(items, _fetch, settings.config)
    return source, result


def _list_files(settings: Settings):
    return lambda item: settings.manifests.get(item.id)


@app.command()
def scan(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a text report"),
    output: str = typer.Option(None, "-o", "--output", help="Output JSON file path"),
    pretty: bool = typer.Option(True, "--pretty/--compact"),
):
    """Report collections and the episodes they duplicate."""
    settings: Settings = ctx.obj
    _, result = _scan(settings)
    if as_json or output:
        json_str = export_json(result, path=output, pretty=pretty)
        if output:
            console.print(f"[green]Wrote:[/green] {output}")
        else:
            typer.echo(json_str)
        return
    typer.echo(text_report(result, _list_files(settings)))


@app.command()
def pause(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Pause without asking"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be paused"),
):
    """Pause duplicate episodes; collections are never paused."""
    settings: Settings = ctx.obj
    source, result = _scan(settings)
    typer.echo(text_report(result, _list_files(settings)))

    ids = result.actionable_ids()
    if not ids:
        console.print("[yellow]No duplicate episodes to pause.[/yellow]")
        return
    if dry_run:
        console.print(f"Would pause {len(ids)} torrent(s): {', '.join(map(str, ids))}")
        return
    if not yes and not typer.confirm(f"Pause {len(ids)} episode torrent(s)?"):
        console.print("Cancelled")
        return

    outcome = source.pause_items(ids)
    console.print(
        f"[green]Paused {len(outcome.succeeded)} episode(s)[/green], "
        f"failed {len(outcome.failed)}"
    )
    if outcome.failed:
        console.print(f"[red]Failed:[/red] {', '.join(map(str, outcome.failed))}")
        raise typer.Exit(1)


@app.command()
def explain(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Torrent name to explain"),
):
    """Explain how the torrents sharing one name were classified."""
    settings: Settings = ctx.obj
    _, result = _scan(settings)
    group = result.groups.get(name)
    if group is None:
        console.print(f"[red]No duplicate group named:[/red] {name}")
        raise typer.Exit(1)
    typer.echo(explain_group(group))


if __name__ == "__main__":
    app()
