"""Output formatters for CLI display."""

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..core.models import (
    CheckConnectionsResult,
    ConnectionDetailsResult,
    DeparturesStatus,
    Footway,
    Line,
    QueryConnectionsResult,
    QueryDeparturesResult,
    QueryStatus,
    Station,
)

console = Console()

# Rich wraps a table title to the table width
TITLE_WIDTH = 64

STATUS_MESSAGES = {
    QueryStatus.TOO_CLOSE: "Origin and destination are the same or too close.",
    QueryStatus.NO_CONNECTIONS: "No connections found.",
}


def _line_text(line: Line | None) -> str:
    if line is None:
        return "-"
    if line.style is None:
        return line.label
    return f"[{line.style.foreground} on {line.style.background}] {line.label} [/]"


def format_departures_table(result: QueryDeparturesResult) -> None:
    """Display a departure board as a rich table."""
    if result.status == DeparturesStatus.NO_INFO:
        console.print("[yellow]No departure information available.[/yellow]")
        return

    table = Table(
        title=f"Departures: {result.location} ({result.current_time:%d.%m.%Y %H:%M})",
        show_header=True,
        header_style="bold magenta",
        min_width=TITLE_WIDTH,
    )
    table.add_column("Time", style="cyan", no_wrap=True)
    table.add_column("Line")
    table.add_column("Destination", style="green")
    table.add_column("Platform", style="blue")

    for departure in result.departures:
        table.add_row(
            f"{departure.time:%H:%M}",
            _line_text(departure.line),
            departure.destination,
            departure.position or "-",
        )

    console.print(table)
    if not result.departures:
        console.print("[dim]No departures listed[/dim]")


def format_candidates(check: CheckConnectionsResult) -> None:
    """Display the candidate names of an ambiguous query."""
    console.print("[yellow]The query is ambiguous. Please choose:[/yellow]")
    for title, names in (
        ("From", check.from_candidates),
        ("Via", check.via_candidates),
        ("To", check.to_candidates),
    ):
        if names is None:
            continue
        console.print(f"\n[bold]{title}:[/bold]")
        for name in names:
            console.print(f"  • {name}")


def format_connections_table(result: QueryConnectionsResult) -> None:
    """Display a list of connections as a rich table."""
    if result.status == QueryStatus.AMBIGUOUS and result.ambiguity is not None:
        format_candidates(result.ambiguity)
        return
    if result.status != QueryStatus.OK:
        message = STATUS_MESSAGES.get(result.status, result.status.value)
        console.print(f"[yellow]{message}[/yellow]")
        return

    table = Table(
        title=f"Connections: {result.from_name} → {result.to_name}",
        show_header=True,
        header_style="bold magenta",
        min_width=TITLE_WIDTH,
    )
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Departure", style="cyan")
    table.add_column("Arrival", style="cyan")
    table.add_column("Line")

    for idx, connection in enumerate(result.connections, 1):
        first = connection.legs[0] if connection.legs else None
        line = None
        if first is not None and not isinstance(first, Footway):
            line = first.line
        table.add_row(
            str(idx),
            _time_text(connection.departure_time),
            _time_text(connection.arrival_time),
            _line_text(line),
        )

    console.print(table)
    if result.link_earlier or result.link_later:
        console.print(f"[dim]Earlier: {result.link_earlier or '-'}[/dim]")
        console.print(f"[dim]Later: {result.link_later or '-'}[/dim]")


def format_connection_detailed(details: ConnectionDetailsResult) -> None:
    """Display the legs of one connection."""
    connection = details.connection

    summary_text = f"""[bold]From:[/bold] {connection.from_name}
[bold]To:[/bold] {connection.to_name}
[bold]Date:[/bold] {details.current_date:%d.%m.%Y}
[bold]Departure:[/bold] {_time_text(connection.departure_time)}
[bold]Arrival:[/bold] {_time_text(connection.arrival_time)}"""
    console.print(Panel(summary_text, title="Connection Summary", border_style="blue"))

    for i, leg in enumerate(connection.legs, 1):
        if isinstance(leg, Footway):
            leg_text = f"""[cyan]{leg.departure}[/cyan] → [cyan]{leg.arrival}[/cyan]
[bold]Walk:[/bold] {leg.min} min"""
        else:
            leg_text = f"""[cyan]{leg.departure}[/cyan] → [cyan]{leg.arrival}[/cyan]
[bold]Line:[/bold] {_line_text(leg.line)} → {leg.destination or '-'}
[bold]Time:[/bold] {leg.departure_time:%H:%M} → {leg.arrival_time:%H:%M}"""
            if leg.departure_position or leg.arrival_position:
                leg_text += (
                    f"\n[bold]Platform:[/bold] {leg.departure_position or '-'}"
                    f" → {leg.arrival_position or '-'}"
                )
        console.print(Panel(leg_text, title=f"Leg {i}", border_style="green"))


def format_stations_table(stations: list[Station]) -> None:
    """Display stations as a table."""
    table = Table(title="Stations", show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Distance", style="green")

    for station in stations:
        distance = f"{station.distance} m" if station.distance is not None else "-"
        table.add_row(str(station.id), station.name, distance)

    console.print(table)


def format_json(data: BaseModel | list[Any]) -> str:
    """Format a result model (or a list of them) as JSON."""
    if isinstance(data, BaseModel):
        payload = data.model_dump(mode="json")
    else:
        payload = [
            item.model_dump(mode="json") if isinstance(item, BaseModel) else item
            for item in data
        ]
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _time_text(value: datetime | None) -> str:
    return f"{value:%H:%M}" if value is not None else "-"
