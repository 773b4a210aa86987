"""JSON formatter for CLI output."""

from pydantic import BaseModel
from rich.console import Console


def format_json(console: Console, result: BaseModel) -> None:
    """Format and display a tool result as JSON."""
    console.print_json(result.model_dump_json(indent=2))
