# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""
Command-line tools for inspecting and checking wirebox registry files.
"""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

console = Console()


def display_table(headers: list[str], rows: list[list[str]], title: str | None = None) -> None:
    """Display tabular data in the console.

    Args:
        headers: List of column headers
        rows: List of rows, where each row is a list of strings
        title: Optional table title
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")
    for header in headers:
        table.add_column(header, overflow="fold")
    for row in rows:
        table.add_row(*row)
    console.print(table)
