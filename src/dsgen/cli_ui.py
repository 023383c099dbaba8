"""
Rich output helpers for the dsgen CLI.
"""

from collections.abc import Mapping

from rich import box
from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

console = Console()

STYLES = {
    "title": Style(color="bright_cyan", bold=True),
    "subtitle": Style(color="bright_black"),
    "muted": Style(color="bright_black"),
}


def print_header(title: str, subtitle: str = "") -> None:
    """Print a styled header."""
    console.print()
    console.print(Text(title, style=STYLES["title"]))
    if subtitle:
        console.print(Text(subtitle, style=STYLES["subtitle"]))
    console.print()


def display_clauses_table(clauses: Mapping[str, Mapping[str, str]]) -> None:
    """Show parsed header clauses, one row per attribute."""
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Clause", style="cyan")
    table.add_column("Key")
    table.add_column("Value", style=STYLES["muted"])

    for name, attributes in clauses.items():
        if not attributes:
            table.add_row(name, "", "")
            continue
        for i, (key, value) in enumerate(attributes.items()):
            table.add_row(name if i == 0 else "", key, value)

    console.print(table)
