"""Station name autocompletion and nearby station lists."""

import logging

from .dialects import Dialect
from .extract import clean_field, extract_single_or_many
from .models import Station

logger = logging.getLogger(__name__)


def parse_autocomplete(page: str, dialect: Dialect) -> list[str]:
    """Extract the station names suggested for a partial name.

    A name that resolves unambiguously is answered with a board form holding
    the station in a hidden field; otherwise the page lists links.
    """
    patterns = dialect.patterns
    names: list[str] = []
    for match in extract_single_or_many(
        page, patterns.autocomplete_single, patterns.autocomplete_many
    ):
        name = clean_field(match.group("name"))
        if name:
            names.append(name)
    return names


def parse_nearby_stations(
    page: str, dialect: Dialect, max_stations: int = 0
) -> list[Station]:
    """Extract the stations listed around a coordinate, nearest first.

    Args:
        page: Page text
        dialect: Dialect of the page
        max_stations: Maximum number of stations to return, 0 for all
    """
    stations = [
        Station(
            id=int(match.group("id")),
            name=clean_field(match.group("name")) or "",
            distance=int(match.group("distance")),
        )
        for match in dialect.patterns.nearby_stations.finditer(page)
    ]
    logger.debug(f"Found {len(stations)} nearby stations")

    if max_stations == 0 or max_stations >= len(stations):
        return stations
    return stations[:max_stations]
