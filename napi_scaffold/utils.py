"""Shared helpers for napi-scaffold.

Provides the Rich console used for all user-facing output, a handful of
coloured message helpers, and the npm package-name conversions used when
rendering templates.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# Package name helpers
# ---------------------------------------------------------------------------


def package_name_to_crate_name(name: str) -> str:
    """Convert an npm package name to a Cargo crate name.

    Leading ``@`` characters are dropped and scope separators become hyphens.

    Examples::

        package_name_to_crate_name("@napi-rs/canvas") -> "napi-rs-canvas"
        package_name_to_crate_name("my-addon")        -> "my-addon"
    """
    return name.lstrip("@").replace("/", "-")


def package_name_to_binary_name(name: str) -> str:
    """Return the last ``/``-separated segment of an npm package name.

    Examples::

        package_name_to_binary_name("@napi-rs/canvas") -> "canvas"
    """
    return name.split("/")[-1]


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
