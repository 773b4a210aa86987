"""CLI output formatters."""

from recontools.cli.formatters.table import format_result
from recontools.cli.formatters.json_fmt import format_json

__all__ = ["format_result", "format_json"]
