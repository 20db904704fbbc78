"""Command-line interface for energy audits."""

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import demo
from .audit import AuditResult, run_audit
from .collectors import csv_file
from .config import ConfigError, load_site
from .reports.html import render_report_html
from .reports.report_data import report_filename, report_to_dict

console = Console()


def site_options(f):
    """Shared options for site metadata."""
    f = click.option("--site-config", type=click.Path(exists=True), help="Path to site.yaml")(f)
    f = click.option("--period", help="Free-text period label for the report")(f)
    f = click.option("--name", help="Site name")(f)
    f = click.option("--area", type=float, help="Floor area in m²")(f)
    return f


def resolve_site(area, name, period, site_config):
    try:
        return load_site(
            config_path=Path(site_config) if site_config else None,
            name=name,
            area_m2=area,
            period=period,
        )
    except ConfigError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


def load_csv(path: str):
    try:
        return csv_file.load_readings(Path(path))
    except csv_file.CsvImportError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


def print_result(result: AuditResult, as_json: bool) -> None:
    """Print KPI and recommendation tables, or the report as JSON."""
    if as_json:
        print(json.dumps(report_to_dict(result.report), indent=2, ensure_ascii=False))
        return

    report = result.report
    console.print(f"[bold]{escape(report.title)}[/bold]")
    console.print(f"[dim]{escape(report.period_line)} · {escape(report.area_line)}[/dim]")

    if not result.has_data:
        console.print("[yellow]No valid readings found[/yellow]")

    table = Table(title="KPIs")
    table.add_column(report.kpi_header[0], style="cyan")
    table.add_column(report.kpi_header[1], justify="right")
    for row in report.kpi_rows:
        table.add_row(row.label, str(row.value))
    console.print(table)

    if report.recommendation_rows:
        recs = Table(title="Recomendaciones")
        recs.add_column(report.recommendation_header[0], justify="right", style="cyan")
        recs.add_column(report.recommendation_header[1])
        for rank, text in report.recommendation_rows:
            recs.add_row(str(rank), text)
        console.print(recs)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose):
    """Energy audit - KPIs and recommendations from consumption exports."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


@cli.command()
@click.argument("csv_path", type=click.Path(exists=True))
@site_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def analyze(csv_path, area, name, period, site_config, as_json):
    """Analyze a CSV export (columns: datetime, load_kwh[, pv_kwh, price_eur_per_kwh])."""
    site = resolve_site(area, name, period, site_config)
    readings = load_csv(csv_path)
    print_result(run_audit(readings, site), as_json)


@cli.command("demo")
@click.option("--seed", type=int, help="Random seed for reproducible data")
@site_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def demo_cmd(seed, area, name, period, site_config, as_json):
    """Analyze a synthetic 48-hour dataset."""
    site = resolve_site(area, name, period, site_config)
    readings = demo.synthetic_readings(seed=seed)
    print_result(run_audit(readings, site), as_json)


@cli.command("demo-csv")
@click.argument("output", type=click.Path(dir_okay=False))
@click.option("--seed", type=int, help="Random seed for reproducible data")
def demo_csv(output, seed):
    """Write the synthetic 48-hour dataset as a CSV file."""
    count = csv_file.write_readings(demo.synthetic_readings(seed=seed), Path(output))
    console.print(f"[green]Wrote {count} readings to {output}[/green]")


@cli.command()
@click.argument("csv_path", required=False, type=click.Path(exists=True))
@click.option("--demo", "use_demo", is_flag=True, help="Use the synthetic dataset")
@click.option("--seed", type=int, help="Random seed for --demo")
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output HTML path")
@site_options
def report(csv_path, use_demo, seed, output, area, name, period, site_config):
    """Write an HTML report with charts, KPIs and recommendations."""
    if not csv_path and not use_demo:
        console.print("[red]Please specify a CSV file or --demo[/red]")
        sys.exit(1)

    site = resolve_site(area, name, period, site_config)
    readings = demo.synthetic_readings(seed=seed) if use_demo else load_csv(csv_path)
    result = run_audit(readings, site)

    output_path = Path(output) if output else Path(report_filename(site, "html"))
    output_path.write_text(render_report_html(result.report), encoding="utf-8")

    if not result.has_data:
        console.print("[yellow]No valid readings found - report has no charts[/yellow]")
    console.print(f"[green]Report written to {output_path}[/green]")


if __name__ == "__main__":
    cli()
