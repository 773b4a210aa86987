"""Table formatter for CLI output."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from recontools.models import (
    DetectionResult,
    DNSLookupResult,
    EmailResult,
    HeaderResult,
    RobotsResult,
    SubdomainScanResult,
    TechDetectionResult,
    TLSResult,
)


def _format_date(date_value: Any) -> str:
    """Safely format a date value to string."""
    if date_value is None:
        return "N/A"
    if isinstance(date_value, datetime):
        return str(date_value.date())
    return str(date_value)


def _truncate(value: str, limit: int = 60) -> str:
    return value[:limit] + "..." if len(value) > limit else value


def _confidence_style(confidence: int) -> str:
    if confidence >= 50:
        return f"[green]{confidence}%[/green]"
    if confidence >= 20:
        return f"[yellow]{confidence}%[/yellow]"
    return f"[dim]{confidence}%[/dim]"


def format_result(console: Console, result: BaseModel) -> None:
    """Format and display a tool result as tables."""
    formatters = {
        DetectionResult: _format_cms_results,
        TechDetectionResult: _format_tech_results,
        HeaderResult: _format_headers_results,
        DNSLookupResult: _format_dns_results,
        SubdomainScanResult: _format_subdomain_results,
        RobotsResult: _format_robots_results,
        EmailResult: _format_email_results,
        TLSResult: _format_ssl_results,
    }
    formatter = formatters.get(type(result))
    if formatter is None:
        console.print_json(result.model_dump_json())
        return
    formatter(console, result)


def _format_cms_results(console: Console, cms: DetectionResult) -> None:
    """Format CMS detection results."""
    if not cms.detected:
        console.print(
            Panel(
                f"Target: [cyan]{cms.url}[/cyan]\n[yellow]No CMS detected[/yellow]",
                title="CMS Detection",
            )
        )
        return

    version = f" {cms.version}" if cms.version else ""
    console.print(
        Panel(
            f"Target: [cyan]{cms.url}[/cyan]\n"
            f"CMS: [bold green]{cms.candidate_name}{version}[/bold green]\n"
            f"Confidence: {_confidence_style(cms.confidence)}",
            title="CMS Detection",
        )
    )

    table = Table(title="Evidence", show_header=True)
    table.add_column("Source", style="cyan")
    table.add_column("Pattern", style="green")
    for item in cms.evidence:
        table.add_row(item.field.value, _truncate(item.pattern))
    console.print(table)


def _format_tech_results(console: Console, tech: TechDetectionResult) -> None:
    """Format technology detection results."""
    if not tech.total:
        console.print(f"[yellow]No technologies detected on {tech.url}[/yellow]")
        return

    table = Table(title=f"Web Technologies ({tech.total} found)", show_header=True)
    table.add_column("Technology", style="cyan")
    table.add_column("Category", style="green")
    table.add_column("Confidence")
    table.add_column("Evidence")

    for category, matches in tech.technologies_by_category.items():
        for match in matches:
            table.add_row(
                match.name,
                category,
                _confidence_style(match.confidence),
                _truncate(", ".join(item.label for item in match.evidence)),
            )

    console.print(table)


def _format_headers_results(console: Console, headers: HeaderResult) -> None:
    """Format HTTP header analysis results."""
    table = Table(title="HTTP Security Headers", show_header=True)
    table.add_column("Header", style="cyan")
    table.add_column("Status")

    for name, present in headers.security_headers.items():
        table.add_row(
            name,
            "[green]Present[/green]" if present else "[red]Missing[/red]",
        )
    console.print(table)

    for category, values in headers.categories.items():
        if not values:
            continue
        cat_table = Table(title=f"{category.title()} Headers", show_header=True)
        cat_table.add_column("Header", style="cyan")
        cat_table.add_column("Value", style="green")
        for name, value in values.items():
            cat_table.add_row(name, _truncate(value))
        console.print(cat_table)


def _format_dns_results(console: Console, dns: DNSLookupResult) -> None:
    """Format DNS results."""
    if not dns.records:
        console.print(f"[yellow]No DNS records found for {dns.domain}[/yellow]")
        return

    table = Table(title="DNS Records", show_header=True)
    table.add_column("Type", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Value")
    table.add_column("TTL")

    for record_type, records in dns.records.items():
        for record in records:
            table.add_row(record_type, record.name, _truncate(record.data), str(record.ttl))

    console.print(table)


def _format_subdomain_results(console: Console, subdomains: SubdomainScanResult) -> None:
    """Format subdomain probe results."""
    if not subdomains.total:
        console.print(f"[yellow]No subdomains found for {subdomains.domain}[/yellow]")
        return

    table = Table(title=f"Subdomains ({subdomains.total} found)", show_header=True)
    table.add_column("Subdomain", style="cyan")
    table.add_column("Records", style="green")

    for sub in subdomains.subdomains:
        records = ", ".join(
            f"{record.type_name or record.type} {record.data}" for record in sub.records[:3]
        )
        if len(sub.records) > 3:
            records += f" (+{len(sub.records) - 3} more)"
        table.add_row(sub.name, records)

    console.print(table)


def _format_robots_results(console: Console, robots: RobotsResult) -> None:
    """Format robots.txt results."""
    if not robots.rules and not robots.sitemaps:
        console.print(f"[yellow]No rules found in {robots.url}[/yellow]")
        return

    table = Table(title="robots.txt Rules", show_header=True)
    table.add_column("User-agent", style="cyan")
    table.add_column("Type")
    table.add_column("Path", style="green")

    for rule in robots.rules:
        rule_type = "[red]Disallow[/red]" if rule.type == "disallow" else "[green]Allow[/green]"
        table.add_row(rule.user_agent, rule_type, rule.path or "(empty)")
    console.print(table)

    if robots.crawl_delay is not None:
        console.print(f"Crawl-delay: {robots.crawl_delay}")
    if robots.sitemaps:
        console.print(f"\n[bold]Sitemaps ({len(robots.sitemaps)}):[/bold]")
        for sitemap in robots.sitemaps:
            console.print(f"  - {sitemap}")


def _format_email_results(console: Console, email: EmailResult) -> None:
    """Format email discovery results."""
    if not email.total:
        console.print(f"[yellow]No email addresses found on {email.url}[/yellow]")
        return

    console.print(f"\n[bold]Email Addresses ({email.total}):[/bold]")
    for address in email.emails:
        console.print(f"  - [cyan]{address}[/cyan]")


def _format_ssl_results(console: Console, ssl: TLSResult) -> None:
    """Format SSL/TLS scan results."""
    table = Table(title="SSL/TLS Configuration", show_header=True)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    grade = ssl.grade or "N/A"
    grade_style = {
        "A+": "[bold green]A+[/bold green]",
        "A": "[green]A[/green]",
        "B": "[blue]B[/blue]",
        "C": "[yellow]C[/yellow]",
        "D": "[orange1]D[/orange1]",
        "F": "[red]F[/red]",
        "T": "[red]T (Trust issues)[/red]",
    }.get(grade, grade)
    table.add_row("Host", ssl.hostname)
    table.add_row("Grade", grade_style)

    if ssl.protocols:
        table.add_row(
            "Protocols",
            ", ".join(f"{p.name} {p.version}" for p in ssl.protocols),
        )

    for cert in ssl.certificates[:1]:
        table.add_row("Subject", cert.subject or "N/A")
        table.add_row("Issuer", cert.issuer or "N/A")
        table.add_row("Expires", _format_date(cert.valid_to))
        if cert.key_strength:
            table.add_row("Key Strength", f"{cert.key_strength} bits")

    console.print(table)

    vulns = ssl.vulnerabilities.model_dump()
    flagged = [name for name, vulnerable in vulns.items() if vulnerable]
    if flagged:
        console.print(f"\n[bold]SSL Vulnerabilities ({len(flagged)}):[/bold]")
        for name in flagged:
            console.print(f"  [red]VULNERABLE[/red]: {name}")
    else:
        console.print("[green]No known TLS vulnerabilities flagged[/green]")
