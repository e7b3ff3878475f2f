#!/usr/bin/env python3
"""
Inventory Report Parser CLI
Parses inventory report PDFs or extracted text into structured JSON.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from .models import ParseResult
from .parser import InventoryReportParser, LegacyInventoryReportParser
from .pdf_extractor import PDFExtractionError, extract_report_text
from .upload import ReportUploadError, prepare_upload

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

console = Console(stderr=True)


def read_report_text(path: Path) -> str:
    """Read report text from a PDF or a plain text file."""
    if path.suffix.lower() == '.pdf':
        return extract_report_text(str(path))
    return path.read_text(encoding='utf-8')


def print_summary(result: ParseResult):
    """Print a short table describing the parse result."""
    table = Table(title=f"{result.store_name} ({result.store_code})")
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Report date", result.report_date)
    table.add_row("Items", str(len(result.items)))
    table.add_row("Total quantity", str(result.total_quantity))
    table.add_row("Total cost", str(result.total_cost))
    table.add_row("Unrecognized lines", str(result.unmatched_lines))
    table.add_row("Duplicate lines", str(result.duplicate_lines))
    console.print(table)


@click.group()
@click.version_option(package_name="inventory-report-parser")
def cli():
    """Pharmacy inventory report parser."""


@cli.command()
@click.argument('report_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Output JSON file path')
@click.option('--legacy', is_flag=True, help='Use the legacy parser (trusts the GRAND TOTAL line)')
@click.option('--expect-store', metavar='CODE', help='Fail unless the report belongs to this store code')
@click.option('--summary', is_flag=True, help='Print a summary table to stderr')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def parse(report_path: Path, output: Optional[str], legacy: bool,
          expect_store: Optional[str], summary: bool, verbose: bool):
    """Parse an inventory report PDF or text file and emit JSON."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        text = read_report_text(report_path)
    except PDFExtractionError as e:
        raise click.ClickException(str(e))

    if legacy:
        result = LegacyInventoryReportParser().parse_report(text)
    else:
        result = InventoryReportParser().parse_report(text)

    if not result.items:
        raise click.ClickException("No inventory items found in the report. Please check the PDF format.")

    if expect_store:
        try:
            prepare_upload(result, {expect_store: expect_store})
        except ReportUploadError as e:
            raise click.ClickException(str(e))

    if summary:
        print_summary(result)

    json_str = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    if output:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(json_str)
        logger.info(f"✅ Results saved to: {output}")
    else:
        click.echo(json_str)


def main():
    """Main CLI entry point."""
    cli()


if __name__ == '__main__':
    main()
