# sales_dashboard/cli.py
import logging
import os

import click
from dotenv import load_dotenv

from sales_dashboard.config import load_config
from sales_dashboard.core.aggregation import format_currency
from sales_dashboard.dashboard import ViewState, build_dashboard
from sales_dashboard.loaders import get_loader
from sales_dashboard.outputs import get_output
from sales_dashboard.provider import DataProvider


def configure_logging():
    logging.basicConfig(
        level=os.getenv("SALES_DASHBOARD_LOG_LEVEL", "INFO").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.command()
@click.option(
    '--source', 'source',
    default=None,
    help='URL or local .json/.csv file with the transaction catalog (default: from config)'
)
@click.option(
    '--config', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Path to config.yaml'
)
@click.option(
    '--env-file', 'env_file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='Optional .env file (log level, proxy settings)'
)
@click.option(
    '--month', 'month',
    default=None,
    type=click.IntRange(1, 12),
    help='Calendar month (1-12) for the chart and sales stats'
)
@click.option(
    '--search', 'search',
    default='',
    help='Filter the listing by title, description or price'
)
@click.option(
    '--page', 'page',
    default=1,
    type=click.IntRange(min=1),
    help='Listing page to show'
)
@click.option(
    '--output', 'output_format',
    default=None,
    type=click.Choice(['csv', 'excel', 'html']),
    help='Also write a report: csv, excel, or html'
)
def main(source, config_path, env_file, month, search, page, output_format):
    """
    Fetch the transaction catalog once, print one page of the listing, the
    price-range histogram and the sales stats for the selected month.
    Without --month the chart and stats stay empty; the listing shows all months.
    """
    if env_file:
        load_dotenv(env_file)
    configure_logging()

    cfg = load_config(config_path)
    source = source or cfg['source']

    provider = DataProvider(get_loader(source, cfg), source)
    status = provider.load()
    if status.error:
        raise click.ClickException(status.error)

    view = ViewState(search=search, month=month, page=page, page_size=int(cfg['page_size']))
    dashboard = build_dashboard(provider.transactions, view, cfg['price_thresholds'])

    click.echo(f"{'ID':>4}  {'Title':<40} {'Price':>10}  {'Category':<20} Sold")
    if not dashboard.rows:
        click.echo("No transactions found")
    for tx in dashboard.rows:
        price = f"$ {tx.price_text}" if tx.price is not None else "-"
        click.echo(
            f"{tx.id:>4}  {tx.title[:40]:<40} {price:>10}  {tx.category[:20]:<20} "
            f"{'Sold' if tx.sold else 'Not Sold'}"
        )
    click.echo(f"Page {dashboard.page} of {dashboard.total_pages} ({dashboard.total_matches} match(es))")

    click.echo(f"\nBar Chart Stats - {dashboard.chart_title}")
    for bucket in dashboard.price_ranges:
        click.echo(f"{bucket.label:>8} | {'#' * bucket.count} {bucket.count}")

    summary = dashboard.summary
    click.echo("\nSales Stats")
    click.echo(f"Total Sale: {format_currency(summary.total_sale)}")
    click.echo(f"Total Items Sold: {summary.total_sold}")
    click.echo(f"Total Items Not Sold: {summary.total_not_sold}")

    if output_format:
        outputter = get_output(output_format, cfg)
        outputter.append(provider.transactions, month=month)
