"""Output formatting for jobby CLI."""

import json
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table


@dataclass
class OutputContext:
    """Renders command results as rich text or JSON."""

    console: Console
    json_mode: bool = False

    def print_json(self, data: dict[str, Any]) -> None:
        print(json.dumps(data, indent=2, default=str))

    def table(self, title: str, rows: dict[str, Any]) -> None:
        """Print key/value rows, or the rows as a JSON object."""
        if self.json_mode:
            self.print_json(rows)
            return
        table = Table(title=title, show_header=False)
        table.add_column("key", style="bold")
        table.add_column("value")
        for key, value in rows.items():
            table.add_row(key, "-" if value is None else escape(str(value)))
        self.console.print(table)

    def error(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print error in appropriate format."""
        if self.json_mode:
            self.print_json({"error": message, **(data or {})})
        else:
            self.console.print(f"[red]Error: {escape(message)}[/red]")

    def success(self, message: str, data: dict[str, Any] | None = None) -> None:
        """Print success message in appropriate format."""
        if self.json_mode:
            self.print_json({"success": message, **(data or {})})
        else:
            self.console.print(f"[green]{escape(message)}[/green]")
