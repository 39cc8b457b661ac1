"""CLI interface for search-index."""

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from search_index.admin import (
    IndexStatus,
    Services,
    activate,
    index_status,
    manual_rebuild,
    save_settings,
)
from search_index.config import load_config, merge_cli_overrides
from search_index.index.models import BuildReport, WriteResult
from search_index.index.trigger import ContentEvent, ContentEventKind
from search_index.settings.models import STRIP_REGEX_OPTION, ContentMode

app = typer.Typer(
    name="search-index",
    help="Rebuild JSON search documents for published content.",
)

console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from search_index import __version__

        console.print(f"search-index {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a .search-index.toml file."),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Base directory for the search/ artifacts."),
    ] = None,
    content: Annotated[
        Optional[Path],
        typer.Option("--content", help="Path to the content store JSON file."),
    ] = None,
    settings: Annotated[
        Optional[Path],
        typer.Option("--settings", help="Path to the settings store JSON file."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Show log output."),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Search Index - derived JSON documents for published content."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
    cfg = merge_cli_overrides(
        load_config(config),
        output_directory=output,
        content_path=content,
        settings_path=settings,
    )
    ctx.obj = Services(cfg)


def _services(ctx: typer.Context) -> Services:
    return ctx.obj


def _result_cell(result: WriteResult | None) -> str:
    if result is None:
        return "-"
    if not result.ok:
        return f"[red]failed[/red] ({escape(result.error)})"
    if result.action == "delete":
        return "[yellow]removed[/yellow]"
    return f"[green]written[/green] ({result.bytes_written} bytes)"


def _print_report(report: BuildReport) -> None:
    table = Table(title="Search index rebuild")
    table.add_column("Artifact")
    table.add_column("Result")
    table.add_column("Entries", justify="right")
    if report.index is not None:
        table.add_row(str(report.index.path), _result_cell(report.index), str(report.item_count))
    if report.resource_tags is not None:
        entries = (
            f"{report.resource_post_count} posts / {report.author_count} authors"
            if report.resource_tags.action == "write"
            else "-"
        )
        table.add_row(str(report.resource_tags.path), _result_cell(report.resource_tags), entries)
    console.print(table)
    console.print(f"Generated at {report.generated_at}")


def _print_status(status: IndexStatus) -> None:
    table = Table(title="Index status", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    rows: list[tuple[str, Any]] = [
        ("Path", status.index.path),
        ("Status", "[green]Exists[/green]" if status.index.exists else "[red]Missing[/red]"),
        ("Size", f"{status.index.size:,} bytes" if status.index.exists else "-"),
        ("Last modified", status.index.modified or "-"),
        ("Version", status.index.version or "-"),
        ("Generated at", status.index.generated_at or "-"),
        ("Items", status.index.count if status.index.count is not None else "-"),
        ("Resource tag export", "Enabled" if status.resource_export_enabled else "Disabled"),
    ]
    if status.resource_tags is not None:
        res = status.resource_tags
        rows.extend([
            ("Resource dataset path", res.path),
            ("Resource dataset status", "[green]Exists[/green]" if res.exists else "[red]Missing[/red]"),
            ("Resource dataset size", f"{res.size:,} bytes" if res.exists else "-"),
            ("Resource dataset generated at", res.generated_at or "-"),
            ("Resource dataset posts", res.count if res.count is not None else "-"),
        ])
    for label, value in rows:
        table.add_row(label, str(value))
    console.print(table)


@app.command()
def rebuild(ctx: typer.Context) -> None:
    """Rebuild every search document now."""
    services = _services(ctx)
    report = manual_rebuild(services.assembler)
    _print_report(report)
    if not report.ok:
        raise typer.Exit(1)


@app.command()
def status(ctx: typer.Context) -> None:
    """Show the state of the emitted documents."""
    services = _services(ctx)
    _print_status(index_status(services.assembler, services.settings))


@app.command()
def configure(
    ctx: typer.Context,
    mode: Annotated[
        Optional[str],
        typer.Option("--mode", "-m", help="Content mode: excerpt or full."),
    ] = None,
    truncate: Annotated[
        Optional[int],
        typer.Option("--truncate", "-t", help="Truncate content to N words (0 = no limit)."),
    ] = None,
    strip_regex: Annotated[
        Optional[str],
        typer.Option("--strip-regex", help="Pattern deleted before markup stripping."),
    ] = None,
    resource_tags: Annotated[
        Optional[bool],
        typer.Option("--resource-tags/--no-resource-tags", help="Export resource-tags.json."),
    ] = None,
) -> None:
    """Save index settings and rebuild."""
    services = _services(ctx)
    store = services.settings
    if mode is not None and mode not in (ContentMode.EXCERPT, ContentMode.FULL):
        console.print(f"[red]Error:[/red] Unknown content mode: {escape(mode)}")
        console.print("Use 'excerpt' or 'full'.")
        raise typer.Exit(1)

    current = store.snapshot()
    report = save_settings(
        store,
        services.assembler,
        mode=mode if mode is not None else current.content_mode,
        truncate_words=truncate if truncate is not None else current.truncate_words,
        strip_regex=strip_regex if strip_regex is not None else current.strip_regex,
        resource_tags=resource_tags if resource_tags is not None else current.resource_tags_enabled,
    )
    if strip_regex and store.get(STRIP_REGEX_OPTION) == "":
        console.print(f"[yellow]Invalid strip regex ignored:[/yellow] {escape(strip_regex)}")
    console.print("[green]Settings saved.[/green]")
    _print_report(report)


@app.command(name="activate")
def activate_cmd(ctx: typer.Context) -> None:
    """Seed default settings and run the first build."""
    services = _services(ctx)
    report = activate(services.settings, services.assembler)
    _print_report(report)


@app.command(name="set-option")
def set_option(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Option name.")],
    value: Annotated[str, typer.Argument(help="Option value (JSON or plain string).")],
) -> None:
    """Store a setting and notify the rebuild trigger."""
    services = _services(ctx)
    try:
        parsed: Any = json.loads(value)
    except json.JSONDecodeError:
        parsed = value
    changed = services.settings.set(key, parsed)
    if changed and services.trigger.on_settings_changed(key):
        console.print(f"[green]Updated {key}; search index rebuilt.[/green]")
    else:
        console.print(f"Updated {key}.")


@app.command(name="set-status")
def set_status(
    ctx: typer.Context,
    post_id: Annotated[int, typer.Argument(help="Content item id.")],
    new_status: Annotated[str, typer.Argument(help="New status, e.g. publish, draft, trash.")],
) -> None:
    """Change an item's status and fire the matching content events."""
    services = _services(ctx)
    item = services.content.get(post_id)
    if item is None:
        console.print(f"[red]Error:[/red] No content item with id {post_id}")
        raise typer.Exit(1)
    old_status = services.content.update_status(post_id, new_status)

    trigger = services.trigger
    rebuilt = trigger.on_status_changed(new_status, old_status, item.type)
    if not rebuilt:
        rebuilt = trigger.on_content_saved(
            ContentEvent(
                kind=ContentEventKind.SAVED,
                post_id=post_id,
                post_type=item.type,
                status=new_status,
            )
        )
    console.print(f"Item {post_id}: {old_status} -> {new_status}")
    if rebuilt:
        console.print("[green]Search index rebuilt.[/green]")


@app.command()
def delete(
    ctx: typer.Context,
    post_id: Annotated[int, typer.Argument(help="Content item id.")],
) -> None:
    """Permanently delete an item and fire the delete event."""
    services = _services(ctx)
    removed = services.content.delete(post_id)
    if removed is None:
        console.print(f"[yellow]No content item with id {post_id}.[/yellow]")
        raise typer.Exit(0)
    rebuilt = services.trigger.on_content_deleted(
        ContentEvent(kind=ContentEventKind.DELETED, post_id=post_id, post_type=removed.type)
    )
    console.print(f"Deleted item {post_id}.")
    if rebuilt:
        console.print("[green]Search index rebuilt.[/green]")


if __name__ == "__main__":
    app()
