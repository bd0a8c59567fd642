"""Core page parsing and query resolution."""

from .ambiguity import check_connections_query
from .client import TransitClient
from .connections import parse_connection_details, parse_connections
from .departures import parse_departures
from .dialects import RMV, Dialect, get_dialect
from .exceptions import (
    BlockParseError,
    LineFormatError,
    NetworkError,
    ParseError,
    TransitSearchError,
    UnknownRoleError,
    ValidationError,
)
from .lines import normalize_line
from .models import (
    CheckConnectionsResult,
    Connection,
    ConnectionDetailsResult,
    ConnectionsQuery,
    Departure,
    DeparturesStatus,
    Footway,
    Line,
    Product,
    QueryConnectionsResult,
    QueryDeparturesResult,
    QueryStatus,
    Station,
    Trip,
)
from .stations import parse_autocomplete, parse_nearby_stations

__all__ = [
    "RMV",
    "BlockParseError",
    "CheckConnectionsResult",
    "Connection",
    "ConnectionDetailsResult",
    "ConnectionsQuery",
    "Departure",
    "DeparturesStatus",
    "Dialect",
    "Footway",
    "Line",
    "LineFormatError",
    "NetworkError",
    "ParseError",
    "Product",
    "QueryConnectionsResult",
    "QueryDeparturesResult",
    "QueryStatus",
    "Station",
    "TransitClient",
    "TransitSearchError",
    "Trip",
    "UnknownRoleError",
    "ValidationError",
    "check_connections_query",
    "get_dialect",
    "normalize_line",
    "parse_autocomplete",
    "parse_connection_details",
    "parse_connections",
    "parse_departures",
    "parse_nearby_stations",
]
