"""Main CLI application using Typer."""

import asyncio
from typing import Annotated, Optional

import typer
from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from recontools.version import __version__
from recontools.core.config import get_settings
from recontools.core.exceptions import ReconError
from recontools.core.logging import setup_logging
from recontools.models import ScanOptions
from recontools.tools import Tool, run_tool

app = typer.Typer(
    name="recon",
    help="ReconTools - passive web reconnaissance",
    no_args_is_help=True,
)

console = Console()

TargetArg = Annotated[str, typer.Argument(help="Target URL or hostname")]
JsonOpt = Annotated[bool, typer.Option("--json", "-j", help="Output raw JSON")]


def version_callback(value: bool) -> None:
    if value:
        console.print(f"ReconTools version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """ReconTools - passive reconnaissance of public web targets."""
    setup_logging()


def _run(tool: Tool, target: str, as_json: bool, options: ScanOptions | None = None) -> None:
    """Run one tool and display its result."""
    with console.status(f"[bold green]Running {tool.value}...[/bold green]"):
        try:
            result = asyncio.run(run_tool(tool, target, options))
        except ReconError as e:
            console.print(f"[red]{e.message}[/red]")
            raise typer.Exit(1) from None

    _display_result(result, as_json)


def _display_result(result: BaseModel, as_json: bool) -> None:
    """Display a tool result."""
    from recontools.cli.formatters import format_json, format_result

    if as_json:
        format_json(console, result)
    else:
        format_result(console, result)


@app.command()
def cms(target: TargetArg, as_json: JsonOpt = False) -> None:
    """
    Detect the CMS behind a web page.

    Examples:
        recon cms example.com
        recon cms https://blog.example.com --json
    """
    _run(Tool.CMS, target, as_json)


@app.command()
def tech(target: TargetArg, as_json: JsonOpt = False) -> None:
    """Detect web technologies used by a page."""
    _run(Tool.TECH, target, as_json)


@app.command()
def headers(target: TargetArg, as_json: JsonOpt = False) -> None:
    """Analyze HTTP response headers."""
    _run(Tool.HEADERS, target, as_json)


@app.command()
def dns(
    target: TargetArg,
    record_types: Annotated[
        Optional[str],
        typer.Option("--types", "-t", help="Record types, e.g. A,MX,TXT"),
    ] = None,
    as_json: JsonOpt = False,
) -> None:
    """Look up DNS records over DNS-over-HTTPS."""
    options = None
    if record_types:
        options = ScanOptions(
            record_types=[t.strip().upper() for t in record_types.split(",") if t.strip()]
        )
    _run(Tool.DNS, target, as_json, options)


@app.command()
def subdomains(
    target: TargetArg,
    wordlist: Annotated[
        Optional[str],
        typer.Option("--wordlist", "-w", help="Comma-separated subdomain names to probe"),
    ] = None,
    batch_size: Annotated[
        Optional[int],
        typer.Option("--batch-size", "-b", help="Names resolved concurrently per batch"),
    ] = None,
    delay_ms: Annotated[
        Optional[int],
        typer.Option("--delay", "-d", help="Pause between batches in milliseconds"),
    ] = None,
    as_json: JsonOpt = False,
) -> None:
    """
    Probe common subdomains of a host.

    Examples:
        recon subdomains example.com
        recon subdomains example.com --wordlist www,api,mail --delay 0
    """
    options = ScanOptions(
        subdomains=[w.strip() for w in wordlist.split(",") if w.strip()] if wordlist else None,
        batch_size=batch_size,
        batch_delay_ms=delay_ms,
    )
    _run(Tool.SUBDOMAINS, target, as_json, options)


@app.command()
def robots(target: TargetArg, as_json: JsonOpt = False) -> None:
    """Parse the site's robots.txt."""
    _run(Tool.ROBOTS, target, as_json)


@app.command()
def emails(target: TargetArg, as_json: JsonOpt = False) -> None:
    """Find email addresses published on a page."""
    _run(Tool.EMAILS, target, as_json)


@app.command()
def ssl(
    target: TargetArg,
    max_polls: Annotated[
        Optional[int],
        typer.Option("--max-polls", help="Give up after this many status polls"),
    ] = None,
    as_json: JsonOpt = False,
) -> None:
    """Grade the host's SSL/TLS configuration (may take minutes)."""
    _run(Tool.SSL, target, as_json, ScanOptions(max_polls=max_polls))


@app.command()
def config() -> None:
    """Show current configuration settings."""
    settings = get_settings()

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("HTTP Timeout", f"{settings.http_timeout}s")
    table.add_row("User-Agent", settings.user_agent)
    table.add_row("Use Relays", "Yes" if settings.use_relays else "No")
    table.add_row("Relays", "\n".join(settings.relay_endpoints) or "[dim]none[/dim]")
    table.add_row("DoH Endpoint", settings.doh_endpoint)
    table.add_row("DNS Record Types", ", ".join(settings.dns_record_types))
    table.add_row("Subdomain Batch Size", str(settings.subdomain_batch_size))
    table.add_row("Subdomain Batch Delay", f"{settings.subdomain_batch_delay_ms}ms")
    table.add_row("Subdomain Wordlist", f"{len(settings.subdomain_wordlist)} names")
    table.add_row("TLS Grader", settings.tls_grader_endpoint)
    table.add_row("TLS Poll Interval", f"{settings.tls_poll_interval}s")
    table.add_row("TLS Max Polls", str(settings.tls_max_polls))
    table.add_row("CMS Confidence Floor", str(settings.cms_confidence_floor))
    table.add_row(
        "Signatures File",
        str(settings.signatures_path) if settings.signatures_path else "[dim]bundled[/dim]",
    )
    table.add_row("API Host", settings.api_host)
    table.add_row("API Port", str(settings.api_port))
    table.add_row("Log Level", settings.log_level)
    table.add_row("Log Format", settings.log_format)

    console.print(table)


@app.command()
def serve(
    host: Annotated[
        Optional[str],
        typer.Option("--host", "-h", help="Host to bind to"),
    ] = None,
    port: Annotated[
        Optional[int],
        typer.Option("--port", "-p", help="Port to bind to"),
    ] = None,
    reload: Annotated[
        bool,
        typer.Option("--reload", "-r", help="Enable auto-reload for development"),
    ] = False,
) -> None:
    """Start the REST API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    console.print(
        Panel(
            f"[bold blue]Starting API Server[/bold blue]\n"
            f"Host: [green]{host}[/green]\n"
            f"Port: [green]{port}[/green]\n"
            f"Docs: [cyan]http://{host}:{port}/docs[/cyan]",
            title="API Server",
        )
    )

    uvicorn.run(
        "recontools.api.app:app",
        host=host,
        port=port,
        reload=reload,
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
