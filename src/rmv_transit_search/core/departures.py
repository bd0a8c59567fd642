"""Departure board parsing."""

import logging
from collections.abc import Collection

from .dialects import Dialect
from .exceptions import ParseError
from .extract import (
    clean_field,
    excerpt,
    extract_blocks,
    match_page,
    resolve_entities,
)
from .lines import normalize_line
from .models import Departure, Product, QueryDeparturesResult
from .timeparse import join_date_time, parse_date, parse_time, roll_forward_past

logger = logging.getLogger(__name__)


def parse_departures(
    page: str,
    dialect: Dialect,
    source: str | None = None,
    products: Collection[Product] | None = None,
    max_departures: int = 0,
) -> QueryDeparturesResult:
    """Parse a departure board page.

    Args:
        page: Page text
        dialect: Dialect of the page
        source: URI of the page, for error messages
        products: If given, only departures of these transport modes are kept;
            departures without a line are dropped as well
        max_departures: Stop after this many departures, 0 for no limit

    Returns:
        The board, or a NO_INFO result if the page says no departures are
        available

    Raises:
        ParseError: If the page has neither a board header nor a notice that
            no departures are available, or a departure row cannot be parsed
    """
    head = match_page(page, dialect.patterns.departures_head)
    if head is None:
        if dialect.patterns.departures_no_info.search(page) is not None:
            logger.info(f"No departure information on {source}")
            return QueryDeparturesResult.no_info()
        logger.warning(f"Departure board {source} has no recognizable header")
        raise ParseError(
            f"departure board {source} has no recognizable header",
            excerpt(page),
            source,
        )

    location = clean_field(head.group("location"))
    current_time = join_date_time(
        parse_date(head.group("date")), parse_time(head.group("time"))
    )

    departures: list[Departure] = []
    for match in extract_blocks(page, dialect.patterns.departures, source):
        line = normalize_line(
            resolve_entities(match.group("line")) or "", dialect, source
        )
        departure = Departure(
            time=roll_forward_past(
                join_date_time(current_time.date(), parse_time(match.group("time"))),
                current_time,
                dialect.rollover_threshold,
            ),
            line=line,
            destination=clean_field(match.group("destination")) or "",
            position=clean_field(match.group("position")),
        )

        if products is not None and (line is None or line.product not in products):
            continue
        if departure not in departures:
            departures.append(departure)
        if max_departures and len(departures) >= max_departures:
            break

    return QueryDeparturesResult(
        location=location, current_time=current_time, departures=departures
    )
