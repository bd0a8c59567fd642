"""Transit client: fetches pages and hands them to the parsers."""

import logging
from collections.abc import Collection

from .ambiguity import check_connections_query
from .config import ClientSettings
from .connections import parse_connection_details, parse_connections
from .departures import parse_departures
from .dialects import Dialect, get_dialect
from .fetcher import HttpPageFetcher, PageFetcher
from .models import (
    CheckConnectionsResult,
    ConnectionDetailsResult,
    ConnectionsQuery,
    Product,
    QueryConnectionsResult,
    QueryDeparturesResult,
    QueryStatus,
    Station,
)
from .stations import parse_autocomplete, parse_nearby_stations
from .uris import (
    autocomplete_uri,
    connections_query_uri,
    departures_query_uri,
    nearby_stations_uri,
)

logger = logging.getLogger(__name__)


class TransitClient:
    """Queries one transit network's result pages."""

    def __init__(
        self,
        dialect: Dialect | None = None,
        fetcher: PageFetcher | None = None,
        settings: ClientSettings | None = None,
    ):
        """Initialize the client.

        Args:
            dialect: Dialect of the network, by default the one named in settings
            fetcher: Page fetcher, by default HTTP configured from settings
            settings: Client settings, by default read from the environment
        """
        self.settings = settings or ClientSettings()
        self.dialect = dialect or get_dialect(self.settings.network)
        self.fetcher = fetcher or HttpPageFetcher(
            timeout=self.settings.timeout,
            user_agent=self.settings.user_agent,
            max_attempts=self.settings.max_attempts,
        )

    def autocomplete_stations(self, text: str) -> list[str]:
        """Suggest station names for a partial name."""
        page = self.fetcher.fetch(autocomplete_uri(text, self.dialect))
        return parse_autocomplete(page, self.dialect)

    def nearby_stations(
        self, lat: float, lon: float, max_stations: int = 0
    ) -> list[Station]:
        """List the stations around a coordinate."""
        page = self.fetcher.fetch(nearby_stations_uri(lat, lon, self.dialect))
        return parse_nearby_stations(page, self.dialect, max_stations)

    def connections_query_uri(self, query: ConnectionsQuery) -> str:
        return connections_query_uri(query, self.dialect)

    def check_connections_query(self, uri: str) -> CheckConnectionsResult:
        """Check whether a connections query is ambiguous or unanswerable."""
        page = self.fetcher.fetch(uri)
        return check_connections_query(page, self.dialect, uri)

    def query_connections(self, uri: str) -> QueryConnectionsResult:
        """Parse the connections listed at a query or continuation URI."""
        page = self.fetcher.fetch(uri)
        return parse_connections(page, self.dialect, uri)

    def search_connections(self, query: ConnectionsQuery) -> QueryConnectionsResult:
        """Search connections, resolving the query and the listing in one fetch.

        Returns:
            The connections found, or a result whose status tells why there are
            none (ambiguous names, origin and destination too close, nothing
            found)

        Raises:
            ValidationError: If origin or destination is empty
            NetworkError: If the page cannot be fetched
            ParseError: If the page format is not understood
        """
        uri = self.connections_query_uri(query)
        logger.info(f"Searching connections {query}")
        page = self.fetcher.fetch(uri)

        check = check_connections_query(page, self.dialect, uri)
        if check.status != QueryStatus.OK:
            logger.info(f"Query {query} not answered: {check.status.value}")
            return QueryConnectionsResult.from_check(check)

        return parse_connections(page, self.dialect, uri)

    def get_connection_details(self, link: str) -> ConnectionDetailsResult:
        """Fetch and parse the detail page of a connection."""
        page = self.fetcher.fetch(link)
        return parse_connection_details(page, self.dialect, link)

    def query_departures(
        self,
        station_id: int | str,
        products: Collection[Product] | None = None,
        max_departures: int = 0,
    ) -> QueryDeparturesResult:
        """Fetch and parse the departure board of a station."""
        uri = departures_query_uri(station_id, self.dialect, max_departures)
        page = self.fetcher.fetch(uri)
        return parse_departures(
            page,
            self.dialect,
            uri,
            products=products,
            max_departures=max_departures,
        )
