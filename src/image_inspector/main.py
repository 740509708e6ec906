# ABOUTME: Main CLI application entry point using asyncclick for native async support
# ABOUTME: Provides the inspect command that audits seed content ids for broken image sets

from pathlib import Path

import asyncclick as click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from image_inspector.config import Config, get_config
from image_inspector.content.models import Verdict
from image_inspector.content.resolver import DocumentStoreResolver
from image_inspector.core.driver import InspectionReport, VerificationDriver
from image_inspector.core.files import SeedFileError, load_seed_ids, write_broken_report
from image_inspector.utils.logging import (
    LoggingMode,
    configure_logging,
    create_smart_progress,
    get_logging_status,
    with_inspection_context,
)
from image_inspector.utils.rich_tables import (
    create_inspection_summary_table,
    create_logging_status_table,
    create_verdicts_table,
    describe_verdict,
    print_rich_table,
)

console = Console()


def _print_verdict(seed_id: str, verdict: Verdict) -> None:
    """Print the one-line outcome for a seed."""
    if verdict.is_safe:
        console.print(f"[green]safe:[/green] {escape(seed_id)}")
        return

    label = verdict.kind.replace("_", " ")
    detail = escape(describe_verdict(verdict))
    if verdict.failing_id == seed_id:
        console.print(f"[red]{label}:[/red] {escape(seed_id)} ({detail})")
    else:
        console.print(f"[red]{label}:[/red] {escape(verdict.failing_id)} from {escape(seed_id)} ({detail})")


def _resolve_inspect_config(
    auth: str | None,
    print_only: bool,
    doc_store_url: str | None,
    delay: int | None,
    uuid_file: str | None,
    broken_file: str | None,
    provenance_marker: str | None,
) -> Config:
    """Overlay command line options on the environment configuration."""
    overrides = {
        "auth": auth,
        "doc_store_url": doc_store_url,
        "delay_ms": delay,
        "uuid_file": Path(uuid_file) if uuid_file else None,
        "broken_file": Path(broken_file) if broken_file else None,
        "provenance_marker": provenance_marker,
    }
    if print_only:
        overrides["print_only"] = True
    return get_config().model_copy(update={key: value for key, value in overrides.items() if value is not None})


@click.command()
@click.option("--auth", default=None, help="Base64 encoded basic auth for the delivery cluster")
@click.option(
    "--printOnly", "--printonly", "print_only", is_flag=True, help="Skip provenance/structural checks, list content"
)
@click.option("--docStoreURL", "--docstoreurl", "doc_store_url", default=None, help="Document store content URL")
@click.option("--delay", type=click.IntRange(min=0), default=None, help="Milliseconds between seed ids")
@click.option("--uuidfile", "uuid_file", default=None, help="JSON array of seed content ids")
@click.option("--brokenfile", "broken_file", default=None, help="Output file for failing ids")
@click.option("--provenance-marker", default=None, help="Substring every publishReference must contain")
@click.pass_context
async def inspect(
    ctx,
    auth: str | None,
    print_only: bool,
    doc_store_url: str | None,
    delay: int | None,
    uuid_file: str | None,
    broken_file: str | None,
    provenance_marker: str | None,
):
    """
    🔎 Inspect seed content for broken image sets.

    Resolves every seed id against the document store, walks article bodies
    and image set members, and writes the failing ids to the broken file.
    """
    config = _resolve_inspect_config(
        auth, print_only, doc_store_url, delay, uuid_file, broken_file, provenance_marker
    )

    if not config.auth:
        console.print("[red]parameter auth not provided. terminating...[/red]")
        ctx.exit(1)

    try:
        seed_ids = load_seed_ids(config.uuid_file)
    except SeedFileError as e:
        raise click.ClickException(str(e)) from e

    await _inspect_async(config, seed_ids, ctx.obj["json_output"])


async def _inspect_async(config: Config, seed_ids: list[str], json_output: bool) -> InspectionReport:
    """Run the inspection with optional UI display."""
    with with_inspection_context("image_inspection", seeds=len(seed_ids), print_only=config.print_only) as logger:
        logger.info("Starting inspection", doc_store_url=config.doc_store_url)

        if not json_output:
            console.print(
                Panel.fit(
                    f"🔎 [bold cyan]Image Inspector[/bold cyan]\nInspecting {len(seed_ids)} seed id(s)",
                    border_style="magenta",
                )
            )

        broken_file = None
        async with DocumentStoreResolver(config) as resolver:
            driver = VerificationDriver(resolver, config)
            try:
                if json_output:
                    await driver.run(seed_ids)
                else:
                    progress, _, tracker = create_smart_progress(console, "🔎 Resolving content...")

                    def _on_verdict(seed_id: str, verdict: Verdict) -> None:
                        _print_verdict(seed_id, verdict)
                        tracker.update(f"🔎 {len(driver.report.verdicts)}/{len(seed_ids)} seed ids verified")

                    driver.on_verdict = _on_verdict
                    with progress:
                        await driver.run(seed_ids)
            finally:
                # Interrupted runs still keep the failures found so far
                if not config.print_only:
                    broken_file = str(write_broken_report(config.broken_file, driver.report.broken_ids))
                    logger.info("Broken report written", path=broken_file, broken=len(driver.report.broken_ids))

        report = driver.report
        if not json_output:
            if config.print_only:
                for content_id in dict.fromkeys(report.encountered_ids):
                    console.print(escape(content_id))
            print_rich_table(console, create_verdicts_table(report.verdicts))
            print_rich_table(console, create_inspection_summary_table(report, broken_file))
            console.print("[bold green]Finished![/bold green]")

        return report


def _initialize_logging(json_output: bool, log_level: str | None = None, log_file: str | None = None) -> None:
    """Initialize logging configuration."""
    config = get_config()
    mode = LoggingMode.PRODUCTION if json_output else LoggingMode.INTERACTIVE

    # Use config defaults when CLI parameters are not provided
    final_log_level = log_level or config.log_level
    final_log_file = log_file or (str(config.log_file) if config.log_file else None)

    configure_logging(mode=mode, log_level=final_log_level, log_file=final_log_file)


@click.command(name="logging-status")
def logging_status():
    """
    📊 Show current logging configuration and status.
    """
    status = get_logging_status()
    logging_table = create_logging_status_table(status)
    print_rich_table(console, logging_table)


@click.group(invoke_without_command=True)
@click.option("--json", is_flag=True, help="Output structured JSON logs instead of rich interface")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Logging level (DEBUG, INFO, WARNING, ERROR)",
)
@click.option("--log-file", help="Custom log file path")
@click.pass_context
def app(ctx, json: bool, log_level: str | None, log_file: str | None):
    """
    🔎 Image Inspector - audit document store content for broken image sets

    Finds image sets that reference themselves, reference loops, and content
    published outside the expected pipeline.
    """
    # Store global options in context for commands to access
    ctx.ensure_object(dict)
    ctx.obj["json_output"] = json

    # Initialize logging once here instead of in each command
    _initialize_logging(json, log_level, log_file)

    # Show help if no command provided
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# Add commands to the main group
app.add_command(inspect)
app.add_command(logging_status)


if __name__ == "__main__":
    app()
