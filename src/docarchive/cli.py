"""Command line interface for DocArchive."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from docarchive.config import DEFAULT_PASSWORD, DEFAULT_USERNAME, AppConfig
from docarchive.errors import ArchiveScanError, ConfigurationError
from docarchive.index.indexer import ArchiveIndex
from docarchive.web.app import create_app


console = Console()
app = typer.Typer(help="DocArchive - browse a categorised PDF archive over HTTP")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _resolve_archive(archive: Optional[Path]) -> Path:
    try:
        root = AppConfig(archive_root=archive).resolve_archive_root(Path.cwd())
    except ConfigurationError as exc:
        raise typer.BadParameter(exc.message) from exc
    if not root.is_dir():
        raise typer.BadParameter(f"Archive directory not found: {root}")
    return root


def _format_size(size: int) -> str:
    value = float(size)
    for unit in ("B", "KB", "MB"):
        if value < 1024:
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


@app.command()
def serve(
    archive: Path = typer.Option(None, "--archive", help="Path to the document archive"),
    host: str = typer.Option(AppConfig().host, help="Host interface"),
    port: int = typer.Option(AppConfig().port, help="Server port"),
    username: str = typer.Option(
        DEFAULT_USERNAME, envvar="DOCARCHIVE_USERNAME", help="Basic auth user name"
    ),
    password: str = typer.Option(
        DEFAULT_PASSWORD, envvar="DOCARCHIVE_PASSWORD", help="Basic auth password"
    ),
    thumbnail_dpi: int = typer.Option(AppConfig().thumbnail_dpi, help="Thumbnail render resolution"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Start the archive web server."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter("uvicorn is not installed") from exc

    _setup_logging(verbose)
    root = _resolve_archive(archive)
    config = AppConfig(
        archive_root=root,
        host=host,
        port=port,
        username=username,
        password=password,
        thumbnail_dpi=thumbnail_dpi,
    )

    console.print(f"Archive path = [bold]{root}[/bold]")
    console.print(f"Listening on http://{host}:{port}")
    uvicorn.run(
        create_app(config),
        host=host,
        port=port,
        reload=False,
        log_level="debug" if verbose else "info",
    )


@app.command("list")
def list_documents(
    archive: Path = typer.Option(None, "--archive", help="Path to the document archive"),
    limit: int = typer.Option(0, help="Show at most this many documents (0 = all)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """List archived documents, most recent first."""
    _setup_logging(verbose)
    index = ArchiveIndex(_resolve_archive(archive))
    try:
        records, stats = index.scan_documents()
    except ArchiveScanError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(code=1)

    if not records:
        console.print("[yellow]No documents found.[/yellow]")
    else:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Date")
        table.add_column("Document")
        table.add_column("Pages", justify="right")
        table.add_column("Size", justify="right")
        shown = records[:limit] if limit > 0 else records
        for record in shown:
            table.add_row(
                record.file_date.strftime("%Y-%m-%d %H:%M:%S"),
                record.name,
                str(record.pages),
                _format_size(record.size),
            )
        console.print(table)

    console.print(f"Listed: {stats.listed}, failed: {stats.failed}")
    for path in stats.failed_files:
        console.print(f"[yellow]Could not parse {path}[/yellow]")


@app.command()
def categories(
    archive: Path = typer.Option(None, "--archive", help="Path to the document archive"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show each category with its number of documents."""
    _setup_logging(verbose)
    index = ArchiveIndex(_resolve_archive(archive))
    try:
        infos = index.list_categories()
    except ArchiveScanError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(code=1)

    if not infos:
        console.print("[yellow]No categories found.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Category")
    table.add_column("Documents", justify="right")
    for info in infos:
        table.add_row(info.name, str(info.elements))
    console.print(table)
