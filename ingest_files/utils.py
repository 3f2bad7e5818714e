"""
Utility functions for the file ingest tool.

Includes:
- JSON save/load helpers
- UI helpers
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
    console.print(Panel(f"[bold blue]{title}[/bold blue]\n[italic]{escape(subtitle)}[/italic]", expand=False))

def print_report(report, files_dir: Path):
    """
    Print the outcome of an ingest run.

    Args:
        report: IngestReport returned by the merge.
        files_dir: Input directory, shown in the summary line.
    """
    console.print(f"[bold green]✔[/bold green] Processed {report.processed} files in {escape(str(files_dir))}")

    table = Table(title="Ingest Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="magenta")

    table.add_row("Added", str(len(report.created)))
    table.add_row("Skipped", str(len(report.skipped)))
    table.add_row("Warnings", str(len(report.warnings)))

    console.print(table)

    if report.created:
        tree = Tree("[bold green]Added to the index[/bold green]")
        for item in report.created:
            tree.add(f"[yellow]{escape(item.file)}[/yellow] -> [blue]{escape(' / '.join(item.path))}[/blue]")
        console.print(tree)

    if report.skipped:
        tree = Tree("[bold cyan]Skipped[/bold cyan]")
        for item in report.skipped:
            tree.add(f"{escape(item.file)} ({item.reason})")
        console.print(tree)

    if report.warnings:
        tree = Tree("[bold yellow]Warnings[/bold yellow]")
        for item in report.warnings:
            tree.add(f"{escape(item.file)} ({item.reason})")
        console.print(tree)

def print_error(msg: str):
    err_console.print(f"[bold red]ERROR:[/bold red] {escape(msg)}")

def print_warning(msg: str):
    console.print(f"[bold yellow]WARNING:[/bold yellow] {escape(msg)}")

def print_success(msg: str):
    console.print(f"[bold green]SUCCESS:[/bold green] {escape(msg)}")


def save_json(data: Any, path: Path) -> None:
    """
    Save data to a JSON file with pretty formatting.

    Args:
        data: The data to serialize.
        path: The output file path.
    """
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write('\n')
    print(f"[INFO] Saved: {path}")


def load_json(path: Path) -> Any:
    """
    Load data from a JSON file.

    Args:
        path: The input file path.

    Returns:
        The deserialized data.
    """
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)
