# ABOUTME: Rich table utilities for inspection summaries and logging status
# ABOUTME: Verdict, run summary and logging configuration tables for the console

from typing import Any

from rich.box import ROUNDED, SIMPLE
from rich.console import Console
from rich.markup import escape
from rich.table import Table

VERDICT_STYLES = {
    "safe": "[bold green]✅ safe[/bold green]",
    "broken": "[bold red]💥 broken[/bold red]",
    "wrong_provenance": "[bold yellow]🏷️ wrong provenance[/bold yellow]",
    "unresolved_type": "[yellow]❓ unresolved type[/yellow]",
    "resolution_failed": "[red]🌐 resolution failed[/red]",
    "malformed_markup": "[red]📄 malformed markup[/red]",
}


def _fields_table(title: str, fields: dict[str, str], key_style: str, box_style=ROUNDED) -> Table:
    """Two-column Field/Value table with a green left-justified title."""
    table = Table(
        title=f"[bold green]{title}[/bold green]",
        box=box_style,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
    )
    table.add_column("Field", style=key_style)
    table.add_column("Value", style="white")
    for key, value in fields.items():
        table.add_row(key, value)
    return table


def describe_verdict(verdict: Any) -> str:
    """One-line explanation of a failing verdict."""
    if verdict.kind == "broken":
        return f"{verdict.reason} at {verdict.offending_id}"
    if verdict.kind == "wrong_provenance":
        return f"publishReference {verdict.provenance_tag!r}"
    if verdict.kind == "unresolved_type":
        return f"type {verdict.actual_type!r}"
    if verdict.kind in ("resolution_failed", "malformed_markup"):
        return verdict.cause
    return ""


def create_verdicts_table(verdicts: dict[str, Any]) -> Table:
    """Create a table with one row per seed id.

    Args:
        verdicts: Verdict per seed id

    Returns:
        Striped verdict table
    """
    table = Table(
        title="[bold cyan]🔎 Verdicts[/bold cyan]",
        box=ROUNDED,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        row_styles=["", "dim"],
        expand=True,
    )
    table.add_column("Seed", style="cyan")
    table.add_column("Verdict", style="white")
    table.add_column("Failing ID", style="magenta")
    table.add_column("Detail", style="dim white")

    for seed_id, verdict in verdicts.items():
        table.add_row(
            escape(seed_id),
            VERDICT_STYLES.get(verdict.kind, verdict.kind),
            "" if verdict.is_safe else escape(verdict.failing_id),
            escape(describe_verdict(verdict)),
        )

    return table


def create_inspection_summary_table(report: Any, broken_file: str | None) -> Table:
    """Counts per verdict kind plus where the report went (None in print-only mode)."""
    fields = {
        "🌱 Seeds": str(len(report.verdicts)),
        "🧭 Content Resolved": str(len(report.encountered_ids)),
    }
    for kind, count in sorted(report.counts().items()):
        fields[VERDICT_STYLES.get(kind, kind)] = str(count)
    fields["📝 Report"] = escape(broken_file) if broken_file else "Not written (print-only)"

    return _fields_table("📊 Inspection Summary", fields, key_style="cyan", box_style=SIMPLE)


def create_logging_status_table(status: dict[str, Any]) -> Table:
    """Create a logging configuration status table from ``get_logging_status()``."""
    fields = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    labels = {"main": "📝 Main Log", "json": "📊 JSON Log", "errors": "🚨 Error Log"}
    for key, label in labels.items():
        if status["log_files"][key]:
            fields[label] = status["log_files"][key]

    return _fields_table("🔍 Logging Configuration", fields, key_style="blue")


def print_rich_table(console: Console, table: Table) -> None:
    """Print a table surrounded by blank lines."""
    console.print()
    console.print(table)
    console.print()
