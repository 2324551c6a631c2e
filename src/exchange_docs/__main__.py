"""CLI entry point for exchange-docs."""

import logging
import re
import sys
from dataclasses import asdict
from datetime import date
from pathlib import Path

import click
import yaml

from .adapters.images import HttpxLogoLoader
from .adapters.metadata import PikePdfAdapter
from .adapters.rendering import ReportLabRenderer, StaticCapability
from .adapters.source import DataFile, load_data_file
from .adapters.storage import FilesystemAdapter
from .config import Settings, load_settings
from .domain.layout import LayoutEngine
from .domain.models import (
    DocumentKind,
    GenerationOptions,
    GenerationResult,
    OutputFormat,
    ReceiptRequest,
    ReportRequest,
    TransactionRecord,
)
from .domain.serializer import OutputSerializer
from .domain.services import DocumentService
from .domain.summary import compare_periods, filter_by_period, previous_period, summarize
from .domain.validation import ValidationTarget, validate
from .exceptions import DataFileError, ValidationError

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
FORMAT_CHOICES = [f.value for f in OutputFormat]


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_period(period: str) -> tuple[date, date]:
    """Parse YYYY-MM-DD..YYYY-MM-DD into (start, end), both inclusive."""
    if ".." not in period:
        raise click.BadParameter("Period must be YYYY-MM-DD..YYYY-MM-DD")
    start, end = period.split("..", 1)
    if not DATE_PATTERN.match(start) or not DATE_PATTERN.match(end):
        raise click.BadParameter("Period must be YYYY-MM-DD..YYYY-MM-DD")
    try:
        start_date, end_date = date.fromisoformat(start), date.fromisoformat(end)
    except ValueError as e:
        raise click.BadParameter(str(e)) from None
    if start_date > end_date:
        raise click.BadParameter("Start date must not be after end date")
    return start_date, end_date


def create_document_service(
    settings: Settings, output_dir: Path | None = None
) -> DocumentService:
    """Wire adapters into a document service."""
    renderer = ReportLabRenderer(supports_tables=settings.rendering.tables)
    serializer = OutputSerializer(
        renderer=renderer,
        metadata=PikePdfAdapter(),
        storage=FilesystemAdapter(output_dir or settings.paths.output),
    )
    layout = LayoutEngine(
        logo_loader=HttpxLogoLoader(timeout=settings.logo.timeout),
        table_support=renderer.supports_tables,
        received_currency=settings.locale.received_currency,
        delivered_currency=settings.locale.delivered_currency,
        locale=settings.locale.locale,
    )
    return DocumentService(
        capability=StaticCapability(
            rich=settings.rendering.rich, basic=settings.rendering.basic
        ),
        layout=layout,
        serializer=serializer,
        report_name=settings.documents.report_name,
        receipt_name=settings.documents.receipt_name,
    )


def check_transactions(transactions: list[TransactionRecord]) -> None:
    """Raise ValidationError if any record cannot be aggregated."""
    errors = []
    for transaction in transactions:
        result = validate(transaction, ValidationTarget.TRANSACTION)
        errors.extend(f"transaction {transaction.id}: {e}" for e in result.errors)
    if errors:
        raise ValidationError(errors)


def build_report_request(
    data: DataFile, start: date, end: date, compare: bool = False
) -> ReportRequest:
    """Select the period's transactions, with prior-period totals if asked."""
    previous = None
    if compare:
        prev_start, prev_end = previous_period(start, end)
        earlier = filter_by_period(data.transactions, prev_start, prev_end)
        check_transactions(earlier)
        previous = summarize(earlier)
        logger.debug(f"Comparing with {prev_start.isoformat()}..{prev_end.isoformat()}")

    return ReportRequest(
        start_date=start,
        end_date=end,
        company_info=data.company,
        transactions=filter_by_period(data.transactions, start, end),
        previous_summary=previous,
    )


def _load_data(settings: Settings, path: Path) -> DataFile:
    try:
        return load_data_file(path, default_country=settings.locale.default_country)
    except DataFileError as e:
        raise click.ClickException(str(e)) from None


def _report_request(data: DataFile, period: str, compare: bool) -> ReportRequest:
    start, end = parse_period(period)
    try:
        return build_report_request(data, start, end, compare)
    except (TypeError, ValueError) as e:
        raise click.ClickException(f"Invalid transaction date: {e}") from None
    except ValidationError as e:
        raise click.ClickException(f"Invalid transactions: {e}") from None


def _echo_result(result: GenerationResult) -> None:
    for warning in result.warnings:
        click.echo(f"warning: {warning}", err=True)

    if not result.success:
        click.echo(f"Error: {result.error_message}", err=True)
        sys.exit(1)

    click.echo(f"content_type: {result.content_type}")
    click.echo(f"filename: {result.filename}")
    if result.degraded:
        click.echo("degraded: true")
    if result.saved_path:
        click.echo(f"output: {result.saved_path}")


def _options(
    settings: Settings, modern: bool | None, validation: bool, **overrides
) -> GenerationOptions:
    return GenerationOptions(
        auto_download=True,
        modern_design=settings.documents.modern_design if modern is None else modern,
        enable_validation=settings.documents.enable_validation and validation,
        **overrides,
    )


def generation_options(func):
    """Options shared by the document commands."""
    decorators = [
        click.option("-o", "--output", type=click.Path(path_type=Path),
                     help="Output directory (default from config)"),
        click.option("--filename", help="Override the generated file name"),
        click.option("--format", "output_format", type=click.Choice(FORMAT_CHOICES),
                     default=OutputFormat.RAW_BYTES.value, show_default=True,
                     help="Artifact envelope"),
        click.option("--no-validation", "validation", is_flag=True, flag_value=False,
                     default=True, help="Skip pre-generation validation"),
        click.option("--force-client-side", is_flag=True,
                     help="Attempt a full render even without rich rendering"),
        click.option("--modern/--classic", default=None, help="Visual theme"),
    ]
    for decorator in decorators:
        func = decorator(func)
    return func


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option("-c", "--config", type=click.Path(exists=True), help="Config file path")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """exchange-docs - receipts and financial reports as PDF."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = Path(config) if config else None


@cli.command()
@click.argument("data_file", type=click.Path(exists=True, path_type=Path))
@click.option("--period", required=True, help="YYYY-MM-DD..YYYY-MM-DD")
@click.option("--compare", is_flag=True, help="Compare with the previous period")
@generation_options
@click.pass_context
def report(
    ctx: click.Context,
    data_file: Path,
    period: str,
    compare: bool,
    modern: bool | None,
    force_client_side: bool,
    validation: bool,
    output_format: str,
    filename: str | None,
    output: Path | None,
) -> None:
    """Generate a financial report for a period."""
    settings = load_settings(ctx.obj["config_path"])
    data = _load_data(settings, data_file)
    request = _report_request(data, period, compare)

    service = create_document_service(settings, output)
    options = _options(
        settings,
        modern=modern,
        validation=validation,
        force_client_side=force_client_side,
        output_format=OutputFormat(output_format),
        filename=filename,
    )
    _echo_result(service.generate(DocumentKind.FINANCIAL_REPORT, request, options))


@cli.command()
@click.argument("data_file", type=click.Path(exists=True, path_type=Path))
@click.argument("receipt_id")
@generation_options
@click.pass_context
def receipt(
    ctx: click.Context,
    data_file: Path,
    receipt_id: str,
    modern: bool | None,
    force_client_side: bool,
    validation: bool,
    output_format: str,
    filename: str | None,
    output: Path | None,
) -> None:
    """Generate the receipt of one transaction."""
    settings = load_settings(ctx.obj["config_path"])
    data = _load_data(settings, data_file)

    transaction = data.find_receipt(receipt_id)
    if transaction is None:
        raise click.ClickException(f"No transaction with receipt id {receipt_id}")

    request = ReceiptRequest(
        company_info=data.company,
        client=transaction.client,
        transaction=transaction,
    )
    service = create_document_service(settings, output)
    options = _options(
        settings,
        modern=modern,
        validation=validation,
        force_client_side=force_client_side,
        output_format=OutputFormat(output_format),
        filename=filename,
    )
    _echo_result(service.generate(DocumentKind.RECEIPT, request, options))


@cli.command()
@click.argument("data_file", type=click.Path(exists=True, path_type=Path))
@click.option("--period", required=True, help="YYYY-MM-DD..YYYY-MM-DD")
@click.option("--compare", is_flag=True, help="Compare with the previous period")
@click.pass_context
def summary(ctx: click.Context, data_file: Path, period: str, compare: bool) -> None:
    """Print period totals as YAML."""
    settings = load_settings(ctx.obj["config_path"])
    data = _load_data(settings, data_file)
    request = _report_request(data, period, compare)
    try:
        check_transactions(request.transactions)
    except ValidationError as e:
        raise click.ClickException(f"Invalid transactions: {e}") from None

    totals = summarize(request.transactions)
    output = {
        "period": {
            "start_date": request.start_date.isoformat(),
            "end_date": request.end_date.isoformat(),
        },
        "summary": asdict(totals),
    }
    if request.previous_summary is not None:
        output["comparison"] = [
            asdict(c) for c in compare_periods(totals, request.previous_summary)
        ]

    click.echo(yaml.dump(output, default_flow_style=False, allow_unicode=True, sort_keys=False))


@cli.command(name="validate")
@click.argument("data_file", type=click.Path(exists=True, path_type=Path))
@click.option("--period", help="YYYY-MM-DD..YYYY-MM-DD (default: all transactions)")
@click.pass_context
def validate_command(ctx: click.Context, data_file: Path, period: str | None) -> None:
    """Validate a data file as report input."""
    settings = load_settings(ctx.obj["config_path"])
    data = _load_data(settings, data_file)

    if period:
        request = _report_request(data, period, compare=False)
        payload = request
    else:
        # Without a period every transaction is checked
        payload = {
            "start_date": "0001-01-01",
            "end_date": "9999-12-31",
            "company_info": data.company,
            "transactions": data.transactions,
        }

    result = validate(payload, ValidationTarget.REPORT)
    for warning in result.warnings:
        click.echo(f"warning: {warning}")
    for error in result.errors:
        click.echo(f"error: {error}", err=True)

    if not result.is_valid:
        click.echo(f"\n{len(result.errors)} errors, {len(result.warnings)} warnings", err=True)
        sys.exit(1)
    click.echo(f"OK ({len(data.transactions)} transactions, {len(result.warnings)} warnings)")


if __name__ == "__main__":
    cli()
