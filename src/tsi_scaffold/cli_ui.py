"""
Rich output helpers for the tsi-scaffold CLI.
"""

from pathlib import Path

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.style import Style
from rich.table import Table
from rich.text import Text

console = Console()

# Style definitions
STYLES = {
    "title": Style(color="bright_cyan", bold=True),
    "subtitle": Style(color="bright_black"),
    "success": Style(color="green", bold=True),
    "error": Style(color="red", bold=True),
    "warning": Style(color="yellow"),
    "info": Style(color="cyan"),
    "muted": Style(color="bright_black"),
}


def print_header(title: str, subtitle: str = "") -> None:
    """Print a styled header."""
    console.print()
    console.print(Text(title, style=STYLES["title"]))
    if subtitle:
        console.print(Text(subtitle, style=STYLES["subtitle"]))
    console.print()


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(Text(f"✓ {message}", style=STYLES["success"]))


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(Text(f"✗ {message}", style=STYLES["error"]))


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(Text(f"⚠ {message}", style=STYLES["warning"]))


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(Text(f"ℹ {message}", style=STYLES["info"]))


def print_step(message: str) -> None:
    """Print a progress line."""
    console.print(Text(message, style=STYLES["muted"]))


def display_files_table(files: list[Path], root: Path, title: str = "Files") -> None:
    """Display created files relative to root."""
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold cyan", title=title)
    table.add_column("#", style="dim", width=4)
    table.add_column("Path", style="white")

    for i, path in enumerate(sorted(files), 1):
        try:
            shown = path.relative_to(root)
        except ValueError:
            shown = path
        table.add_row(str(i), str(shown))

    console.print(table)


def create_panel(content: str, title: str = "", style: str = "cyan") -> Panel:
    """Create a styled panel."""
    return Panel(
        content,
        title=title,
        title_align="left",
        border_style=style,
        padding=(1, 2),
    )
