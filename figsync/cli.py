"""CLI entry point for figsync."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from figsync.config import FigsyncConfig, load_config
from figsync.config.loader import DEFAULT_CONFIG_TEMPLATE
from figsync.document import list_documents, parse_references
from figsync.figma import create_client
from figsync.log import setup_logging
from figsync.sync import FigmaSync, SyncReport, write_github_output

app = typer.Typer(
    name="figsync",
    help="Keep Figma screenshots and specs in your docs up to date.",
)

config_app = typer.Typer(help="Manage figsync configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: FigsyncConfig | None = None


def _get_config() -> FigsyncConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to figsync.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    setup_logging(_config.log_level, _config.log_format)


def _resolve_root(root: str | None, cfg: FigsyncConfig) -> Path:
    path = Path(root or cfg.scan.directory)
    if not path.is_dir():
        rprint(f"[red]Error:[/red] not a directory: {path}")
        raise typer.Exit(1)
    return path


def _display_report(report: SyncReport) -> None:
    """Display the sync outcome as a Rich table plus problem lists."""
    table = Table(title=f"Synced frames ({len(report.frames)})")
    table.add_column("Document", style="cyan")
    table.add_column("Frame", style="green")
    table.add_column("Screenshot", style="magenta")
    for f in report.frames:
        table.add_row(f.document, f"{f.file_id}/{f.node_id}", f.screenshot)
    if report.frames:
        rprint(table)

    for u in report.unresolved:
        rprint(f"[yellow]Unresolved:[/yellow] {u.document}: {u.file_id}/{u.node_id}")
    for e in report.errors:
        where = f" ({e.frame})" if e.frame else ""
        rprint(f"[red]Error:[/red] {e.file}{where}: {escape(e.error)}")

    rprint(
        f"\n[bold]{report.documents_scanned}[/bold] documents scanned, "
        f"[bold]{report.documents_updated}[/bold] updated "
        f"in {report.duration:.1f}s"
    )
    if report.changes_detected:
        rprint(f"[green]Updated {len(report.frames)} frame(s)[/green]")
    else:
        rprint("[dim]No frames needed updating[/dim]")


@app.command()
def sync(
    root: str | None = typer.Argument(None, help="Directory to scan (default: scan.directory)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Fetch and render without writing"),
    strict: bool = typer.Option(False, "--strict", help="Exit 1 if any frame failed"),
) -> None:
    """Fetch referenced Figma frames and update screenshots and specs."""
    cfg = _get_config()
    root_path = _resolve_root(root, cfg)

    try:
        client = create_client(cfg.figma)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    async def _run() -> SyncReport:
        async with client:
            return await FigmaSync(client, cfg).run(root_path, dry_run=dry_run)

    rprint(f"[bold]Syncing[/bold] {root_path} ({cfg.scan.pattern})...")
    if dry_run:
        rprint("[yellow](dry run: nothing will be written)[/yellow]")
    report = asyncio.run(_run())

    _display_report(report)
    if not dry_run:
        write_github_output(report)
    if strict and report.errors:
        raise typer.Exit(1)


@app.command()
def scan(
    root: str | None = typer.Argument(None, help="Directory to scan (default: scan.directory)"),
) -> None:
    """List documents and the Figma frames they reference. No network access."""
    cfg = _get_config()
    root_path = _resolve_root(root, cfg)

    found = 0
    tree = Tree(f"[bold]{root_path}[/bold]")
    for path in list_documents(root_path, cfg.scan.pattern, cfg.scan.exclude):
        try:
            refs = parse_references(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            rprint(f"[yellow]Skipped[/yellow] {path}: {escape(str(e))}")
            continue
        if not refs:
            continue
        found += 1
        branch = tree.add(f"[cyan]{path}[/cyan]")
        for ref in refs:
            branch.add(f"[green]{ref}[/green]")

    if not found:
        rprint("[yellow]No documents with figma-frame comments found.[/yellow]")
        rprint("Add a comment such as [bold]<!-- figma-frame: FILE_ID/NODE_ID -->[/bold]")
        return
    rprint(tree)
    rprint(f"\nFound {found} document(s) with Figma references")


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    path: str = typer.Option("figsync.yaml", "--path", help="Where to write the config"),
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create a default figsync.yaml."""
    target = Path(path)
    if target.exists() and not force:
        rprint(f"[yellow]{target} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
