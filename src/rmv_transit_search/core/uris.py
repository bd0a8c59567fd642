"""Query URIs for the pages the parsers read."""

from datetime import datetime
from urllib.parse import quote_plus

from .dialects import Dialect
from .exceptions import ValidationError
from .models import ConnectionsQuery


def _query_string(params: list[tuple[str, str]]) -> str:
    return "&".join(f"{name}={quote_plus(value)}" for name, value in params)


def connections_query_uri(query: ConnectionsQuery, dialect: Dialect) -> str:
    """Build the URI of a connections search.

    Raises:
        ValidationError: If origin or destination is empty
    """
    if not query.from_name or not query.from_name.strip():
        raise ValidationError("Departure station name cannot be empty")
    if not query.to_name or not query.to_name.strip():
        raise ValidationError("Destination station name cannot be empty")

    p = dialect.parameters
    params = [
        (p.initial_selection, "0"),
        (p.search_forward, "1" if query.departure else "0"),
        (p.date, query.when.strftime(p.date_format)),
        (p.time, query.when.strftime(p.time_format)),
        (p.from_name, query.from_name),
        (p.from_type, p.any_type),
        (p.to_name, query.to_name),
        (p.to_type, p.any_type),
    ]
    if query.via_name:
        params += [(p.via_name, query.via_name), (p.via_type, p.any_type)]
    params.append(("start", "Suchen"))

    return f"{dialect.query_uri}?{_query_string(params)}"


def departures_query_uri(
    station_id: int | str,
    dialect: Dialect,
    max_departures: int = 0,
    now: datetime | None = None,
) -> str:
    """Build the URI of the departure board of a station, starting now."""
    p = dialect.parameters
    now = now or datetime.now()
    params = [
        ("input", str(station_id)),
        ("boardType", "dep"),
        ("maxJourneys", str(max_departures or p.default_max_departures)),
        ("time", now.strftime(p.time_format)),
        ("date", now.strftime(p.date_format)),
        ("start", "yes"),
    ]
    return f"{dialect.board_uri}?{_query_string(params)}"


def autocomplete_uri(text: str, dialect: Dialect) -> str:
    """Build the URI listing the stations matching a partial name."""
    if not text or not text.strip():
        raise ValidationError("Station name cannot be empty")
    return f"{dialect.board_uri}?input={quote_plus(text)}"


def nearby_stations_uri(lat: float, lon: float, dialect: Dialect) -> str:
    """Build the URI listing the stations around a coordinate."""
    return f"{dialect.board_uri}?input={lat}%20{lon}"
