"""
Utility functions for FileSense.

Includes:
- Logging setup
- Console output helpers
- JSON save/load helpers
- Human-readable file sizes
"""

import json
import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

# Global console instance
console = Console()


def setup_logging(level: str | int = "INFO") -> None:
    """Send log records through rich."""
    if isinstance(level, str):
        level = level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def print_header(title: str, subtitle: str = ""):
    """Print a styled header."""
    console.print(Panel(f"[bold blue]{title}[/bold blue]\n[italic]{subtitle}[/italic]", expand=False))


def print_error(msg: str):
    console.print(f"[bold red]ERROR:[/bold red] {msg}")


def print_warning(msg: str):
    console.print(f"[bold yellow]WARNING:[/bold yellow] {msg}")


def print_success(msg: str):
    console.print(f"[bold green]SUCCESS:[/bold green] {msg}")


def format_file_size(size: int) -> str:
    """
    Format a byte count the way the analysis view shows it.

    Examples:
        >>> format_file_size(0)
        '0 Bytes'
        >>> format_file_size(1536)
        '1.5 KB'
    """
    if size <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    value = float(size)
    i = 0
    while value >= 1024 and i < len(units) - 1:
        value /= 1024
        i += 1
    text = str(round(value, 2)).rstrip("0").rstrip(".")
    return f"{text} {units[i]}"


def print_analysis_table(analysis):
    """Print categories with file counts and sizes."""
    table = Table(title=f"Analysis Results ({analysis.total_files} files)")
    table.add_column("Category", style="cyan")
    table.add_column("Files", style="magenta", justify="right")
    table.add_column("Size", style="green", justify="right")

    for category, files in analysis.categories.items():
        if not files:
            continue
        table.add_row(category.value, str(len(files)), format_file_size(analysis.total_size(category)))

    console.print(table)


def save_json(data: Any, path: Path) -> None:
    """
    Save data to a JSON file with pretty formatting.

    Args:
        data: The data to serialize.
        path: The output file path.
    """
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    logging.getLogger(__name__).info("Saved: %s", path)


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
