"""Assembly of connections from connection list and detail pages."""

import logging
from datetime import datetime

from .dialects import Dialect
from .exceptions import ParseError
from .extract import clean_field, excerpt, extract_blocks, match_page, resolve_entities
from .lines import normalize_line
from .models import (
    Connection,
    ConnectionDetailsResult,
    Footway,
    Leg,
    QueryConnectionsResult,
    Trip,
)
from .timeparse import (
    align_to_previous,
    ensure_not_before,
    join_date_time,
    parse_date,
    parse_time,
    roll_forward_past,
)

logger = logging.getLogger(__name__)


def parse_connections(
    page: str, dialect: Dialect, source: str | None = None
) -> QueryConnectionsResult:
    """Parse a page listing the connections found for a query.

    The page states a single date. Entries are listed chronologically, so each
    departure is moved to whichever day keeps it close to the previous one.

    Args:
        page: Page text
        dialect: Dialect of the page
        source: URI of the page, for error messages

    Returns:
        Connections with one summary trip each, plus the links to earlier and
        later connections

    Raises:
        ParseError: If the page header or any entry cannot be parsed
    """
    head = match_page(page, dialect.patterns.connections_head)
    if head is None:
        raise ParseError(
            f"connections page {source} has no recognizable header",
            excerpt(page),
            source,
        )

    from_name = clean_field(head.group("from_name")) or ""
    to_name = clean_field(head.group("to_name")) or ""
    current_date = parse_date(head.group("date"))
    threshold = dialect.rollover_threshold

    connections: list[Connection] = []
    for match in extract_blocks(page, dialect.patterns.connections, source):
        departure_time = join_date_time(
            current_date, parse_time(match.group("departure"))
        )
        if connections and connections[-1].departure_time is not None:
            departure_time = align_to_previous(
                departure_time, connections[-1].departure_time, threshold
            )
        arrival_time = ensure_not_before(
            join_date_time(departure_time.date(), parse_time(match.group("arrival"))),
            departure_time,
        )

        label = clean_field(match.group("line"))
        line = None
        if label is not None and not label.endswith(dialect.transfer_marker):
            line = normalize_line(label, dialect, source)

        trip = Trip(
            line=line,
            departure=from_name,
            departure_time=departure_time,
            arrival=to_name,
            arrival_time=arrival_time,
        )
        connections.append(
            Connection(
                link=resolve_entities(match.group("link")),
                from_name=from_name,
                to_name=to_name,
                departure_time=departure_time,
                arrival_time=arrival_time,
                legs=[trip],
            )
        )

    logger.debug(f"Parsed {len(connections)} connections from {source}")
    return QueryConnectionsResult(
        from_name=from_name,
        to_name=to_name,
        current_date=current_date,
        link_earlier=resolve_entities(head.group("earlier")),
        link_later=resolve_entities(head.group("later")),
        connections=connections,
    )


def parse_connection_details(
    page: str, dialect: Dialect, source: str | None = None
) -> ConnectionDetailsResult:
    """Parse the detail page of a single connection into its legs.

    Each block names the place it arrives at; where a leg departs from is
    the arrival of the leg before it, starting at the first departure named
    in the page header. Consecutive walks are merged into one footway.

    Raises:
        ParseError: If the page header or any block cannot be parsed
    """
    head = match_page(page, dialect.patterns.connection_details_head)
    if head is None:
        raise ParseError(
            f"connection details page {source} has no recognizable header",
            excerpt(page),
            source,
        )

    first_departure = _text(head.group("first_departure"))
    current_date = parse_date(head.group("date"))
    threshold = dialect.rollover_threshold

    legs: list[Leg] = []
    last_arrival: str | None = None
    first_departure_time: datetime | None = None
    last_arrival_time: datetime | None = None

    for match in extract_blocks(page, dialect.patterns.connection_details, source):
        departure = last_arrival if last_arrival is not None else first_departure
        arrival = _text(match.group("arrival"))
        last_arrival = arrival

        minutes = match.group("min")
        if minutes is None:
            departure_time = join_date_time(
                current_date, parse_time(match.group("departure_time"))
            )
            if last_arrival_time is not None:
                departure_time = roll_forward_past(
                    departure_time, last_arrival_time, threshold
                )
            arrival_time = ensure_not_before(
                join_date_time(
                    departure_time.date(), parse_time(match.group("arrival_time"))
                ),
                departure_time,
            )
            legs.append(
                Trip(
                    line=normalize_line(_text(match.group("line")), dialect, source),
                    destination=clean_field(match.group("destination")),
                    departure=departure,
                    departure_time=departure_time,
                    departure_position=clean_field(match.group("departure_position")),
                    arrival=arrival,
                    arrival_time=arrival_time,
                    arrival_position=clean_field(match.group("arrival_position")),
                )
            )
            if first_departure_time is None:
                first_departure_time = departure_time
            last_arrival_time = arrival_time
        else:
            previous = legs[-1] if legs else None
            if isinstance(previous, Footway):
                legs[-1] = Footway(
                    min=previous.min + int(minutes),
                    departure=previous.departure,
                    arrival=arrival,
                )
            else:
                legs.append(
                    Footway(min=int(minutes), departure=departure, arrival=arrival)
                )

    logger.debug(f"Parsed {len(legs)} legs from {source}")
    connection = Connection(
        link=source,
        from_name=first_departure,
        to_name=last_arrival if last_arrival is not None else first_departure,
        departure_time=first_departure_time,
        arrival_time=last_arrival_time,
        legs=legs,
    )
    return ConnectionDetailsResult(current_date=current_date, connection=connection)


def _text(value: str | None) -> str:
    return (resolve_entities(value) or "").strip()
