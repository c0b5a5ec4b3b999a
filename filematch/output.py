"""Console output for the filematch CLI."""

import json
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .utils import format_size


class OutputFormatter:
    """Writes CLI output as plain text, tables or JSON.

    Informational messages go to stdout and are dropped in quiet mode.
    Errors always go to stderr.
    """

    def __init__(self, json_output: bool = False, quiet: bool = False):
        """Initialize output formatter.

        Args:
            json_output: Whether results are printed as JSON
            quiet: Suppress non-essential output
        """
        self.json_output = json_output
        self.quiet = quiet
        self.console = Console(highlight=False, soft_wrap=True)
        self.err_console = Console(stderr=True, highlight=False, soft_wrap=True)

    def print(self, message: str) -> None:
        """Print a result line (never suppressed)."""
        self.console.print(message, markup=False)

    def info(self, message: str) -> None:
        if not self.quiet:
            self.console.print(message, markup=False)

    def error(self, message: str) -> None:
        self.err_console.print(f"[red]Error:[/red] {escape(message)}")

    def format_size(self, size_bytes: int) -> str:
        return format_size(size_bytes)

    def output_json(self, data: Any) -> None:
        """Print data as indented JSON."""
        self.console.print_json(json.dumps(data))

    def output_table(
        self,
        rows: list[dict[str, Any]],
        columns: list[str],
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        """Print rows as a table.

        Args:
            rows: One dictionary per row
            columns: Keys to show, in order
            headers: Column titles by key (defaults to the key)
        """
        headers = headers or {}
        table = Table(show_header=True, header_style="bold", box=None)
        for column in columns:
            table.add_column(headers.get(column, column))
        for row in rows:
            table.add_row(*(Text(str(row.get(column, ""))) for column in columns))
        self.console.print(table)
