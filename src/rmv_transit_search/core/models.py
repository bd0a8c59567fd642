"""Data models for RMV transit search."""

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Product(str, Enum):
    """Transport mode of a line, valued by its one-letter code."""

    INTERCITY = "I"
    REGIONAL = "R"
    SUBURBAN_RAIL = "S"
    UNDERGROUND = "U"
    TRAM = "T"
    BUS = "B"
    CALL_BUS = "P"
    FERRY = "F"
    UNKNOWN = "?"

    @property
    def code(self) -> str:
        return self.value


class LineStyle(BaseModel):
    """Display colours of a line badge."""

    model_config = ConfigDict(frozen=True)

    background: str = Field(..., description="Background colour as #rrggbb")
    foreground: str = Field(..., description="Foreground colour as #rrggbb")
    border: str | None = Field(None, description="Optional border colour")


class Line(BaseModel):
    """A normalized transit line such as S5, RE10 or ICE123."""

    model_config = ConfigDict(frozen=True)

    product: Product = Field(..., description="Transport mode")
    label: str = Field(..., description="Display label, e.g. 'S5'")
    style: LineStyle | None = Field(None, description="Badge colours")

    @property
    def code(self) -> str:
        """Canonical line code: product code followed by the label."""
        return self.product.code + self.label

    def __str__(self) -> str:
        return self.label


class Station(BaseModel):
    """Represents a station or stop."""

    model_config = ConfigDict(frozen=True)

    id: int | str = Field(..., description="Operator-scoped station id")
    name: str = Field(..., description="Display name")
    lat: float | None = Field(None, description="Latitude")
    lon: float | None = Field(None, description="Longitude")
    distance: int | None = Field(
        None, description="Distance from the queried point in metres"
    )

    def __str__(self) -> str:
        return self.name


class Departure(BaseModel):
    """A single row of a departure board.

    Two departures are equal when time, line and destination agree; the
    platform does not take part, so repeated rows collapse into one.
    """

    model_config = ConfigDict(frozen=True)

    time: datetime = Field(..., description="Departure time")
    line: Line | None = Field(None, description="Line, None if unlabeled")
    destination: str = Field(..., description="Destination name")
    position: str | None = Field(None, description="Platform")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Departure):
            return NotImplemented
        return (self.time, self.line, self.destination) == (
            other.time,
            other.line,
            other.destination,
        )

    def __hash__(self) -> int:
        return hash((self.time, self.line, self.destination))

    def __str__(self) -> str:
        line = self.line.label if self.line else "-"
        return f"{self.time:%H:%M} {line} → {self.destination}"


class Trip(BaseModel):
    """A connection leg travelled on a vehicle."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["trip"] = "trip"
    line: Line | None = Field(None, description="Line, None for summary legs")
    destination: str | None = Field(None, description="Direction of the vehicle")
    departure: str | None = Field(None, description="Departure stop name")
    departure_time: datetime = Field(..., description="Departure time")
    departure_position: str | None = Field(None, description="Departure platform")
    arrival: str | None = Field(None, description="Arrival stop name")
    arrival_time: datetime = Field(..., description="Arrival time")
    arrival_position: str | None = Field(None, description="Arrival platform")

    @model_validator(mode="after")
    def _check_chronology(self) -> "Trip":
        if self.arrival_time < self.departure_time:
            raise ValueError(
                f"arrival {self.arrival_time} before departure {self.departure_time}"
            )
        return self

    def __str__(self) -> str:
        line = self.line.label if self.line else "?"
        return f"{self.departure} → {self.arrival} ({line})"


class Footway(BaseModel):
    """A connection leg walked on foot."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["footway"] = "footway"
    min: int = Field(..., description="Walking time in minutes")
    departure: str = Field(..., description="Where the walk starts")
    arrival: str = Field(..., description="Where the walk ends")

    def __str__(self) -> str:
        return f"{self.departure} → {self.arrival} ({self.min} min walk)"


Leg = Annotated[Trip | Footway, Field(discriminator="kind")]


class Connection(BaseModel):
    """Represents a complete connection between two places."""

    model_config = ConfigDict(frozen=True)

    link: str | None = Field(None, description="URI of the connection detail page")
    from_name: str = Field(..., description="Origin name")
    to_name: str = Field(..., description="Destination name")
    departure_time: datetime | None = Field(None, description="First departure")
    arrival_time: datetime | None = Field(None, description="Last arrival")
    legs: list[Leg] = Field(default_factory=list, description="Ordered legs")

    def __str__(self) -> str:
        if self.departure_time and self.arrival_time:
            return (
                f"{self.from_name} → {self.to_name} "
                f"({self.departure_time:%H:%M}-{self.arrival_time:%H:%M})"
            )
        return f"{self.from_name} → {self.to_name}"


class QueryStatus(str, Enum):
    """Outcome of a connections query."""

    OK = "ok"
    AMBIGUOUS = "ambiguous"
    TOO_CLOSE = "too_close"
    NO_CONNECTIONS = "no_connections"


class CheckConnectionsResult(BaseModel):
    """Result of inspecting a connections query page for ambiguity."""

    status: QueryStatus = Field(..., description="Outcome of the check")
    from_candidates: list[str] | None = Field(
        None, description="Candidate names for the origin"
    )
    via_candidates: list[str] | None = Field(
        None, description="Candidate names for the via stop"
    )
    to_candidates: list[str] | None = Field(
        None, description="Candidate names for the destination"
    )


class QueryConnectionsResult(BaseModel):
    """Connections found for a query, or the reason none were listed."""

    status: QueryStatus = Field(QueryStatus.OK, description="Outcome of the query")
    ambiguity: CheckConnectionsResult | None = Field(
        None, description="Candidates when the query was ambiguous"
    )
    from_name: str | None = Field(None, description="Resolved origin name")
    to_name: str | None = Field(None, description="Resolved destination name")
    current_date: date | None = Field(None, description="Date the page refers to")
    link_earlier: str | None = Field(None, description="URI of earlier connections")
    link_later: str | None = Field(None, description="URI of later connections")
    connections: list[Connection] = Field(default_factory=list)

    @classmethod
    def from_check(cls, check: CheckConnectionsResult) -> "QueryConnectionsResult":
        """Build the result of a query that did not list any connections."""
        return cls(
            status=check.status,
            ambiguity=check if check.status == QueryStatus.AMBIGUOUS else None,
        )


class ConnectionDetailsResult(BaseModel):
    """A single connection assembled from its detail page."""

    current_date: date = Field(..., description="Date the page refers to")
    connection: Connection


class DeparturesStatus(str, Enum):
    """Outcome of a departure board query."""

    OK = "ok"
    NO_INFO = "no_info"


class QueryDeparturesResult(BaseModel):
    """A departure board."""

    status: DeparturesStatus = Field(DeparturesStatus.OK)
    location: str | None = Field(None, description="Station display name")
    current_time: datetime | None = Field(None, description="Board reference time")
    departures: list[Departure] = Field(default_factory=list)

    @classmethod
    def no_info(cls) -> "QueryDeparturesResult":
        return cls(status=DeparturesStatus.NO_INFO)


class ConnectionsQuery(BaseModel):
    """Request model for a connections search."""

    from_name: str = Field(..., description="Origin name")
    via_name: str | None = Field(None, description="Optional via stop")
    to_name: str = Field(..., description="Destination name")
    when: datetime = Field(..., description="Departure or arrival date and time")
    departure: bool = Field(
        True, description="True to depart at 'when', False to arrive by it"
    )

    def __str__(self) -> str:
        via = f" via {self.via_name}" if self.via_name else ""
        return f"{self.from_name} → {self.to_name}{via}"
