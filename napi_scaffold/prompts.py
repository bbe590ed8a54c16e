"""Interactive prompts used when the CLI is not given a name or targets."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from .utils import console, print_warning


def ask_package_name(default: str) -> str:
    """Ask for the npm package name, offering *default* (the project path)."""
    return Prompt.ask(
        "Package name (The name filed in your package.json)",
        default=default,
        console=console,
    )


def select_targets(
    available: Sequence[str],
    defaults: Sequence[str] = (),
) -> list[str]:
    """Let the user pick one or more triples out of *available*.

    Triples are listed in a numbered table with the defaults marked.  The
    answer is a comma- or space-separated list of numbers; an empty answer
    keeps the defaults.  The question is repeated until the selection is
    valid and non-empty.

    Returns:
        The chosen triples in catalogue order.
    """
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Target")
    table.add_column("Default", justify="center")
    for index, target in enumerate(available, start=1):
        table.add_row(str(index), target, "*" if target in defaults else "")
    console.print(table)

    default_answer = ",".join(
        str(index) for index, target in enumerate(available, start=1) if target in defaults
    )

    while True:
        answer = Prompt.ask(
            "Choose target(s) you want to support (numbers separated by commas)",
            default=default_answer,
            console=console,
        )
        indices = _parse_selection(answer, len(available))
        if indices is None:
            print_warning(f"Invalid selection: {escape(repr(answer))}")
            continue
        if not indices:
            print_warning("Select at least one target.")
            continue
        return [available[i] for i in sorted(indices)]


def _parse_selection(answer: str, count: int) -> Optional[set[int]]:
    """Turn ``"1, 3 4"`` into zero-based indices, or ``None`` if invalid."""
    indices: set[int] = set()
    for token in answer.replace(",", " ").split():
        if not token.isdigit():
            return None
        number = int(token)
        if number < 1 or number > count:
            return None
        indices.add(number - 1)
    return indices
