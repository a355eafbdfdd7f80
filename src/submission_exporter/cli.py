"""
Command Line Interface for the Submission Exporter.

Browse form submissions collected from client WordPress sites, export them to
CSV, render consent forms to PDF and trigger syncs.
"""
import sys
import logging
from typing import Optional

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.logging import RichHandler

from . import __version__
from .config import load_config
from .loaders.api_client import APIRequestError
from .models.core import Form
from .pipeline import SubmissionExportService
from .processors.consent_fields import get_company_name
from .processors.display import format_relative_date, format_sync_result, plugin_label, preview_value
from .processors.name_splitter import split_name
from .processors.schema_inferencer import COMPOUND_NAME_KEY


# Initialize rich console
console = Console()

DATE_FORMATS = ["%Y-%m-%d"]


def setup_cli_logging(verbose: bool = False, log_file: Optional[str] = None):
    """Setup logging for CLI with rich formatting."""
    level = logging.DEBUG if verbose else logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)]
    )

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        file_handler.setFormatter(formatter)
        logging.getLogger().addHandler(file_handler)


def get_service(ctx: click.Context) -> SubmissionExportService:
    """Build the export service lazily from the group options."""
    obj = ctx.ensure_object(dict)
    if "service" not in obj:
        try:
            config = load_config(
                obj.get("config_path"),
                api_url=obj.get("api_url"),
                api_token=obj.get("token"),
                output_dir=obj.get("output_dir"),
                log_dir=obj.get("log_dir")
            )
        except (FileNotFoundError, ValueError) as e:
            console.print(f"[red]Configuration error:[/red] {e}")
            sys.exit(1)
        service = SubmissionExportService(config)
        # Written to log_dir when the command finishes
        ctx.find_root().call_on_close(service.write_error_report)
        obj["service"] = service
    return obj["service"]


def fail(prefix: str, error: Exception):
    console.print(f"[red]{prefix}:[/red] {error}")
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", type=click.Path(exists=True), help="Path to YAML configuration file")
@click.option("--api-url", envvar="SUBMISSION_API_URL", help="Dashboard API base URL")
@click.option("--token", envvar="SUBMISSION_API_TOKEN", help="API bearer token (or set SUBMISSION_API_TOKEN)")
@click.option("--output-dir", "-o", type=click.Path(), help="Directory for exported files")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file (optional)")
@click.option("--log-dir", envvar="SUBMISSION_LOG_DIR", type=click.Path(), help="Directory for the JSON error report (optional)")
@click.pass_context
def cli(ctx, config_path, api_url, token, output_dir, verbose, log_file, log_dir):
    """Submission Exporter CLI - review and export WordPress form submissions."""
    setup_cli_logging(verbose, log_file)
    ctx.ensure_object(dict).update({
        "config_path": config_path,
        "api_url": api_url,
        "token": token,
        "output_dir": output_dir,
        "log_dir": log_dir,
    })


@cli.command()
@click.argument("client_id")
@click.pass_context
def forms(ctx, client_id: str):
    """List the forms of a client."""
    service = get_service(ctx)
    try:
        client_forms = service.api_client.fetch_forms(client_id)
    except APIRequestError as e:
        fail("Failed to load forms", e)

    if not client_forms:
        console.print("No forms found for this client.")
        return

    table = Table(title=f"Forms for client {client_id}")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Plugin", style="magenta")
    for form in client_forms:
        table.add_row(form.id, form.name, plugin_label(form.plugin))
    console.print(table)


@cli.command()
@click.argument("form_id")
@click.option("--start", "start_date", type=click.DateTime(formats=DATE_FORMATS), help="First day to include (YYYY-MM-DD)")
@click.option("--end", "end_date", type=click.DateTime(formats=DATE_FORMATS), help="Last day to include (YYYY-MM-DD)")
@click.pass_context
def submissions(ctx, form_id: str, start_date, end_date):
    """Show a form's submissions as a table."""
    service = get_service(ctx)
    try:
        loaded = service.load_submissions(form_id)
    except APIRequestError as e:
        fail("Failed to load submissions", e)

    view = service.build_view(loaded, start_date, end_date)
    if not view.filtered:
        console.print("No submissions found")
        return

    table = Table(title=f"Submissions ({len(view.filtered)} of {len(view.submissions)})")
    # The trailing row-action column has no meaning in a terminal
    for column in view.schema.csv_headers:
        table.add_column(column, overflow="fold")

    for sub in view.filtered:
        row = []
        if view.schema.has_compound_name:
            name = split_name(sub.get(COMPOUND_NAME_KEY))
            row.extend([name.first, name.last])
        row.extend(preview_value(sub.get(key)) for key in view.schema.data_keys)
        row.append(format_relative_date(sub.submitted_at))
        table.add_row(*row)

    console.print(table)


@cli.command("export-csv")
@click.argument("form_id")
@click.option("--form-name", help="Form name used for the file name (default: submissions)")
@click.option("--start", "start_date", type=click.DateTime(formats=DATE_FORMATS), help="First day to include (YYYY-MM-DD)")
@click.option("--end", "end_date", type=click.DateTime(formats=DATE_FORMATS), help="Last day to include (YYYY-MM-DD)")
@click.option("--output-dir", "-o", type=click.Path(), help="Directory for the CSV file (default: configured output_dir)")
@click.pass_context
def export_csv(ctx, form_id: str, form_name: Optional[str], start_date, end_date, output_dir: Optional[str]):
    """Export a form's submissions to CSV."""
    service = get_service(ctx)
    try:
        path = service.export_csv(Form(id=form_id, name=form_name or ""), start_date, end_date, output_dir=output_dir)
    except APIRequestError as e:
        fail("Failed to load submissions", e)

    if path is None:
        console.print("[yellow]No submissions to download[/yellow]")
        return

    console.print(f"[green]✓ CSV exported:[/green] {path}")


@cli.group()
def consent():
    """Client consent form submissions."""
    pass


@consent.command("list")
@click.pass_context
def consent_list(ctx):
    """List consent form submissions."""
    service = get_service(ctx)
    try:
        consent_submissions = service.load_consent_submissions()
    except APIRequestError as e:
        fail("Failed to load consent form submissions", e)

    if not consent_submissions:
        console.print("No submissions found. Sync the consent form site to populate.")
        return

    table = Table(title=f"Consent form submissions ({len(consent_submissions)} total)")
    table.add_column("ID", style="cyan")
    table.add_column("Company Name", style="green")
    table.add_column("Submitted", style="yellow")
    for sub in consent_submissions:
        table.add_row(sub.id, get_company_name(sub.submission_data), format_relative_date(sub.submitted_at))
    console.print(table)


@consent.command("pdf")
@click.argument("submission_id")
@click.option("--wordpress-url", help="Client WordPress URL used to resolve signature images")
@click.option("--output-dir", "-o", type=click.Path(), help="Directory for the PDF (default: configured output_dir)")
@click.pass_context
def consent_pdf(ctx, submission_id: str, wordpress_url: Optional[str], output_dir: Optional[str]):
    """Render a consent form submission to PDF."""
    service = get_service(ctx)
    try:
        submission = service.find_consent_submission(submission_id)
    except APIRequestError as e:
        fail("Failed to load consent form submissions", e)

    if submission is None:
        console.print(f"[red]Consent submission not found:[/red] {submission_id}")
        sys.exit(1)

    report = service.export_consent_pdf(submission, wordpress_url=wordpress_url, output_dir=output_dir)

    console.print(f"[green]✓ PDF exported:[/green] {report.path} ({report.page_count} pages)")
    if report.missing_signatures:
        console.print(
            f"[yellow]Signature image unavailable for:[/yellow] {', '.join(report.missing_signatures)}"
        )


@cli.command()
@click.argument("client_id")
@click.pass_context
def sync(ctx, client_id: str):
    """Sync new submissions from a client's WordPress site."""
    service = get_service(ctx)

    with console.status("Syncing..."):
        result = service.sync_client(client_id)

    if result.is_error:
        console.print(f"[red]{format_sync_result(result)}[/red]")
        sys.exit(1)

    console.print(Panel.fit(format_sync_result(result), border_style="green"))


@cli.command()
def version():
    """Show version information."""
    console.print(f"[blue]Submission Exporter v{__version__}[/blue]")


def main():
    """Main entry point for the CLI."""
    try:
        cli()
    except Exception as e:
        console.print(f"[red]Unexpected error:[/red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
