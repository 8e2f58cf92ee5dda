"""
Utility functions for the File Organizer.

Includes:
- Console helpers (rich)
- Outcome line formatting
- JSON report writer
"""

import json
from pathlib import Path
from typing import Any
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree
from rich.panel import Panel

# Global console instances
console = Console()
err_console = Console(stderr=True)

def print_header(title: str, subtitle: str = ""):
    """Print a styled header."""
    console.print(Panel(f"[bold blue]{escape(title)}[/bold blue]\n[italic]{escape(subtitle)}[/italic]", expand=False))

def print_summary_table(report, sample_size: int = 10):
    """Print the counters of a run and a sample of what happened."""
    table = Table(title="Dry-Run Summary" if report.dry_run else "Run Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="magenta")

    table.add_row("Moved", str(report.moved))
    table.add_row("Copied", str(report.copied))
    table.add_row("Skipped", str(report.skipped))
    if report.pruned:
        table.add_row("Pruned folders", str(len(report.pruned)))

    console.print(table)

    failures = report.failures
    if failures:
        tree = Tree("[bold red]Failures[/bold red]")
        for outcome in failures[:sample_size]:
            tree.add(f"[yellow]{escape(str(outcome.source))}[/yellow]: {escape(outcome.error.message)}")
        if len(failures) > sample_size:
            tree.add(f"[italic]... and {len(failures) - sample_size} more[/italic]")
        console.print(tree)

def print_error(msg: str):
    err_console.print(f"[bold red]ERROR:[/bold red] {escape(msg)}")

def print_warning(msg: str):
    console.print(f"[bold yellow]WARNING:[/bold yellow] {escape(msg)}")

def print_success(msg: str):
    console.print(f"[bold green]SUCCESS:[/bold green] {escape(msg)}")


def format_outcome(outcome) -> str | None:
    """
    Render one outcome as a plain console line.

    Returns None for outcomes that produce no line.
    """
    status = outcome.status
    if status in ("would_move", "would_copy"):
        return f"Would {outcome.action} {outcome.source} -> {outcome.destination}"
    if status in ("moved", "copied"):
        return f"{status.capitalize()} {outcome.source} -> {outcome.destination}"
    if status in ("skipped", "would_skip"):
        if outcome.reason == "exists":
            return f"Exists, skipping: {outcome.destination}"
        return f"Skipping {outcome.source} ({outcome.reason})"
    if status == "failed":
        return f"Error processing {outcome.source}: {outcome.error.message}"
    return None


def save_json(data: Any, path: Path) -> None:
    """
    Save data to a JSON file with pretty formatting.

    Args:
        data: The data to serialize.
        path: The output file path.
    """
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    print(f"[INFO] Saved: {path}")
