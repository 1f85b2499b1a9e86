"""
Rendering functions for monotag output.

This module handles all pretty-printing and table formatting.
Services return RunResults, this module makes them human-readable.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from rich.markup import escape
from typing import List, Optional

from .domain.operation import RunResult, TagOutcome

console = Console(stderr=True)


def status_label(outcome: TagOutcome) -> str:
    """Plain-text status for one outcome."""
    if outcome.created:
        return "Created"
    if outcome.failed:
        return f"Failed: {outcome.reason}"
    return f"Skipped: {outcome.reason}"


def _status_markup(outcome: TagOutcome) -> str:
    if outcome.created:
        return "[green]✓ Created[/green]"
    if outcome.failed:
        return f"[red]✗ {escape(outcome.reason)}[/red]"
    return f"[yellow]Skipped: {escape(outcome.reason)}[/yellow]"


def build_summary_table(result: RunResult, title: Optional[str] = None) -> Table:
    """Build the metric/value summary table for a run."""
    mode = "DRY RUN " if result.dry_run else ""
    table = Table(title=title or f"{mode}Tag Creation Summary", show_header=True, box=box.ROUNDED)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    created_label = "Tags Analyzed" if result.dry_run else "Tags Created"
    table.add_row("Total Projects", str(result.project_count))
    table.add_row(created_label, f"[green]{result.total_count}[/green]")
    table.add_row("Project Tags", str(len(result.project_tags)))
    table.add_row("Global Tags", str(len(result.global_tags)))
    table.add_row("Skipped Tags", f"[yellow]{result.skipped_count}[/yellow]")
    if result.failed:
        table.add_row("Failed Tags", f"[red]{len(result.failed)}[/red]")
    table.add_row("Mode", "Dry Run" if result.dry_run else "Live")
    return table


def build_tag_table(tags: List[TagOutcome]) -> Table:
    """Build the detailed per-tag table."""
    table = Table(
        title="Tag Details",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )

    table.add_column("Tag", style="cyan")
    table.add_column("Type")
    table.add_column("Project")
    table.add_column("Version", style="dim")
    table.add_column("Status")

    for tag in tags:
        table.add_row(
            escape(tag.tag_name),
            tag.scope,
            escape(tag.project_name),
            escape(tag.version),
            _status_markup(tag),
        )

    return table


def render_run_result(result: RunResult, out: Optional[Console] = None) -> None:
    """
    Render a run as a summary table plus a detailed tag table.

    Args:
        result: Completed run
        out: Console to print to (defaults to stderr)
    """
    out = out or console

    out.print(build_summary_table(result))

    if not result.tags:
        out.print("[yellow]No tags to create.[/yellow]")
        return

    out.print(build_tag_table(result.tags))

    if result.dry_run:
        out.print("\n[bold yellow]Dry Run Mode[/bold yellow] - no tags were actually created.")
    elif result.total_count > 0:
        out.print(f"\n[bold green]✓[/bold green] Created {result.total_count} tags")
