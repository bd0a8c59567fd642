"""CLI main entry point for RMV transit search."""

import logging
import sys
from datetime import datetime as dt_module
from pathlib import Path
from typing import NoReturn

import click
from rich.console import Console

from .. import __version__
from ..core import (
    ConnectionsQuery,
    NetworkError,
    ParseError,
    Product,
    QueryStatus,
    TransitClient,
    ValidationError,
    check_connections_query,
    get_dialect,
    parse_connection_details,
    parse_connections,
    parse_departures,
)
from ..core.config import ClientSettings
from .formatters import (
    format_connection_detailed,
    format_connections_table,
    format_departures_table,
    format_json,
    format_stations_table,
)

console = Console()
error_console = Console(stderr=True)

PRODUCT_NAMES = [p.name.lower() for p in Product if p != Product.UNKNOWN]


def _client(timeout: int | None) -> TransitClient:
    settings = ClientSettings()
    if timeout is not None:
        settings = settings.model_copy(update={"timeout": timeout})
    return TransitClient(settings=settings)


def _fail(error: Exception, verbose: bool) -> NoReturn:
    if isinstance(error, ValidationError):
        error_console.print(f"[red]Error:[/red] {error}")
    elif isinstance(error, NetworkError):
        error_console.print(f"[red]Network error:[/red] {error}")
    elif isinstance(error, ParseError):
        error_console.print(
            f"[red]Data format error:[/red] {error}\n"
            "The provider's page format has changed and needs maintenance."
        )
    else:
        error_console.print(f"[red]Unexpected error:[/red] {error}")
    if verbose:
        error_console.print_exception()
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """RMV Transit Search - Departures and connections from the RMV journey planner."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command()
@click.argument("station_id")
@click.option("--max", "-n", "max_departures", default=0, help="Maximum departures")
@click.option(
    "--product",
    "-p",
    "product_names",
    multiple=True,
    type=click.Choice(PRODUCT_NAMES),
    help="Only show these transport modes (repeatable)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.option("--timeout", "-t", type=int, default=None, help="Request timeout in seconds")
@click.pass_context
def departures(
    ctx: click.Context,
    station_id: str,
    max_departures: int,
    product_names: tuple[str, ...],
    output_format: str,
    timeout: int | None,
) -> None:
    """Show the departure board of a station.

    Examples:
        rmv-transit departures 3000010
        rmv-transit departures 3000010 --product suburban_rail -n 5
    """
    products = {Product[name.upper()] for name in product_names} or None
    try:
        with console.status(f"[bold green]Fetching departures for {station_id}..."):
            result = _client(timeout).query_departures(
                station_id, products=products, max_departures=max_departures
            )
    except Exception as e:
        _fail(e, ctx.obj["verbose"])

    if output_format == "json":
        click.echo(format_json(result))
    else:
        format_departures_table(result)


@cli.command()
@click.argument("from_name")
@click.argument("to_name")
@click.option("--via", help="Travel via this stop")
@click.option(
    "--datetime",
    "-d",
    "datetime_str",
    help="Date and time (YYYY-MM-DD HH:MM format), default now",
    type=str,
)
@click.option("--arrival", is_flag=True, help="Arrive by the given time")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.option("--timeout", "-t", type=int, default=None, help="Request timeout in seconds")
@click.pass_context
def connections(
    ctx: click.Context,
    from_name: str,
    to_name: str,
    via: str | None,
    datetime_str: str | None,
    arrival: bool,
    output_format: str,
    timeout: int | None,
) -> None:
    """Search connections between two places.

    Examples:
        rmv-transit connections "Frankfurt Hauptbahnhof" "Wiesbaden Hauptbahnhof"
        rmv-transit connections "Darmstadt" "Hanau" --datetime "2014-03-01 08:00"
    """
    when = dt_module.now()
    if datetime_str:
        try:
            when = dt_module.strptime(datetime_str, "%Y-%m-%d %H:%M")
        except ValueError:
            error_console.print("[red]Invalid datetime format. Use YYYY-MM-DD HH:MM[/red]")
            sys.exit(1)

    try:
        query = ConnectionsQuery(
            from_name=from_name,
            via_name=via,
            to_name=to_name,
            when=when,
            departure=not arrival,
        )
        with console.status(f"[bold green]Searching connections {query}..."):
            result = _client(timeout).search_connections(query)
    except Exception as e:
        _fail(e, ctx.obj["verbose"])

    if output_format == "json":
        click.echo(format_json(result))
    else:
        format_connections_table(result)
    if result.status != QueryStatus.OK:
        sys.exit(1)


@cli.command()
@click.argument("link")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["detailed", "json"]),
    default="detailed",
    help="Output format",
)
@click.option("--timeout", "-t", type=int, default=None, help="Request timeout in seconds")
@click.pass_context
def details(
    ctx: click.Context, link: str, output_format: str, timeout: int | None
) -> None:
    """Show the legs of a connection, given its link from a connections listing."""
    try:
        result = _client(timeout).get_connection_details(link)
    except Exception as e:
        _fail(e, ctx.obj["verbose"])

    if output_format == "json":
        click.echo(format_json(result))
    else:
        format_connection_detailed(result)


@cli.group()
def stations() -> None:
    """Station lookup commands."""
    pass


@stations.command("autocomplete")
@click.argument("text")
@click.pass_context
def autocomplete(ctx: click.Context, text: str) -> None:
    """List station names matching a partial name."""
    try:
        names = _client(None).autocomplete_stations(text)
    except Exception as e:
        _fail(e, ctx.obj["verbose"])

    if not names:
        error_console.print("[yellow]No stations found[/yellow]")
        return
    for name in names:
        console.print(name)


@stations.command("nearby")
@click.argument("lat", type=float)
@click.argument("lon", type=float)
@click.option("--max", "-n", "max_stations", default=0, help="Maximum stations")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "json"]),
    default="table",
    help="Output format",
)
@click.pass_context
def nearby(
    ctx: click.Context, lat: float, lon: float, max_stations: int, output_format: str
) -> None:
    """List the stations around a coordinate."""
    try:
        found = _client(None).nearby_stations(lat, lon, max_stations)
    except Exception as e:
        _fail(e, ctx.obj["verbose"])

    if output_format == "json":
        click.echo(format_json(found))
    else:
        format_stations_table(found)


@cli.command("parse")
@click.argument(
    "kind", type=click.Choice(["departures", "connections", "details", "check"])
)
@click.argument("page_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--network", default=None, help="Network id of the page's dialect")
@click.pass_context
def parse_page(
    ctx: click.Context, kind: str, page_file: str, network: str | None
) -> None:
    """Parse a saved result page and print it as JSON.

    Examples:
        rmv-transit parse departures board.html
        rmv-transit parse check query.html
    """
    try:
        dialect = get_dialect(network or ClientSettings().network)
        page = Path(page_file).read_text(encoding="utf-8")
        if kind == "departures":
            result = parse_departures(page, dialect, page_file)
        elif kind == "connections":
            result = parse_connections(page, dialect, page_file)
        elif kind == "details":
            result = parse_connection_details(page, dialect, page_file)
        else:
            result = check_connections_query(page, dialect, page_file)
    except Exception as e:
        _fail(e, ctx.obj["verbose"])

    click.echo(format_json(result))


@cli.group()
def config() -> None:
    """Configuration management."""
    pass


@config.command("show")
def show_config() -> None:
    """Show current configuration (set RMV_TRANSIT_* variables to change it)."""
    settings = ClientSettings()
    console.print("[bold]Current Configuration:[/bold]")
    console.print(f"• Network: {settings.network}")
    console.print(f"• Timeout: {settings.timeout} seconds")
    console.print(f"• Attempts per request: {settings.max_attempts}")
    console.print(f"• User agent: {settings.user_agent}")


if __name__ == "__main__":
    cli()
