"""Provider dialects: the patterns and token tables of one operator's pages."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from types import MappingProxyType

from .exceptions import ValidationError
from .extract import BlockPattern
from .lines import LINE_STYLES, LineRule
from .models import LineStyle, Product
from .timeparse import DAY_ROLLOVER_THRESHOLD

ROLE_FROM = "from"
ROLE_VIA = "via"
ROLE_TO = "to"


@dataclass(frozen=True)
class DialectPatterns:
    """Every regular expression needed to read one provider's pages."""

    autocomplete_single: re.Pattern[str]
    autocomplete_many: re.Pattern[str]
    nearby_stations: re.Pattern[str]
    check_error: re.Pattern[str]
    ambiguity_section: re.Pattern[str]
    ambiguity_candidate: re.Pattern[str]
    connections_head: re.Pattern[str]
    connections: BlockPattern
    connection_details_head: re.Pattern[str]
    connection_details: BlockPattern
    departures_head: re.Pattern[str]
    departures_no_info: re.Pattern[str]
    departures: BlockPattern


@dataclass(frozen=True)
class QueryParameters:
    """Parameter names of the connections and departures query endpoints."""

    initial_selection: str = "REQ0HafasInitialSelection"
    search_forward: str = "REQ0HafasSearchForw"
    date: str = "REQ0JourneyDate"
    time: str = "REQ0JourneyTime"
    from_name: str = "REQ0JourneyStopsS0G"
    from_type: str = "REQ0JourneyStopsS0A"
    to_name: str = "REQ0JourneyStopsZ0G"
    to_type: str = "REQ0JourneyStopsZ0A"
    via_name: str = "REQ0JourneyStops1.0G"
    via_type: str = "REQ0JourneyStops1.0A"
    any_type: str = "255"
    date_format: str = "%d.%m.%y"
    time_format: str = "%H:%M"
    default_max_departures: int = 12


@dataclass(frozen=True)
class Dialect:
    """Configuration of the parsing engine for one transit operator."""

    network_id: str
    aliases: tuple[str, ...]
    query_uri: str
    board_uri: str
    patterns: DialectPatterns
    line_rules: tuple[LineRule, ...]
    role_tags: Mapping[str, str]
    parameters: QueryParameters = field(default_factory=QueryParameters)
    rollover_threshold: timedelta = DAY_ROLLOVER_THRESHOLD
    # Trailing text of a connection summary that counts transfers, not a line
    transfer_marker: str = "Um."
    strict_lines: bool = True
    line_styles: Mapping[Product, LineStyle] = field(default_factory=lambda: LINE_STYLES)


_RMV_QUERY = r"https?://www\.rmv\.de/auskunft/bin/jp/query\.exe/dox"
_RMV_BOARD = r"/auskunft/bin/jp/stboard\.exe/dox"

RMV_PATTERNS = DialectPatterns(
    autocomplete_single=re.compile(
        r'.*<input type="hidden" name="input" value="(?P<name>.+?)#\d+?" />.*',
        re.DOTALL,
    ),
    autocomplete_many=re.compile(
        r'<a href="' + _RMV_BOARD + r'[^"]*">\s*(?P<name>.*?)\s*</a>', re.DOTALL
    ),
    nearby_stations=re.compile(
        r'<a href="' + _RMV_BOARD + r'[^"]*?input=(?P<id>\d+)[^"]*">\n'
        r"(?P<name>.+?)\s*\((?P<distance>\d+) m/[A-Z]+\)\n</a>",
        re.DOTALL,
    ),
    check_error=re.compile(
        r"(?:(?P<too_close>mehrfach vorhanden oder identisch)"
        r"|(?P<no_connections>keine Verbindung gefunden werden))",
        re.IGNORECASE,
    ),
    ambiguity_section=re.compile(
        r"(?:Geben Sie einen (?P<role>\w+) an.*?)?"
        r"Bitte w(?:&#228;|&auml;|ä)hlen Sie aus der Liste",
        re.DOTALL,
    ),
    ambiguity_candidate=re.compile(
        r'<span class="tplight">.*?<a href="' + _RMV_QUERY + r'[^"]*">'
        r"\s*(?P<name>.*?)\s*</a>.*?</span>",
        re.DOTALL,
    ),
    connections_head=re.compile(
        r".*Von: <b>(?P<from_name>.*?)</b>.*?"
        r"Nach: <b>(?P<to_name>.*?)</b>.*?"
        r"Datum: .., (?P<date>\d+\.\d+\.\d+).*?"
        r'(?:<a href="(?P<earlier>' + _RMV_QUERY + r'[^"]*?REQ0HafasScrollDir=2)">'
        r"Fr(?:&#252;|&uuml;|ü)her.*?)?"
        r'(?:<a href="(?P<later>' + _RMV_QUERY + r'[^"]*?REQ0HafasScrollDir=1)">'
        r"Sp(?:&#228;|&auml;|ä)ter.*?)?",
        re.DOTALL,
    ),
    connections=BlockPattern(
        coarse=re.compile(r'<p class="con[LD]">(.+?)</p>', re.DOTALL),
        fine=re.compile(
            r'.*?<a href="(?P<link>' + _RMV_QUERY + r'[^"]*)">'
            r"(?P<departure>\d+:\d+)-(?P<arrival>\d+:\d+)</a>"
            r"(?:(?:&nbsp;|\xa0)(?P<line>.+?))?",
            re.DOTALL,
        ),
    ),
    connection_details_head=re.compile(
        r'.*?<p class="details">\n?'
        r"- <b>(?P<first_departure>.*?)</b> -.*?"
        r"Abfahrt: (?P<date>\d+\.\d+\.\d+)<br />\n?"
        r"Dauer: (?P<duration>\d+:\d+)<br />.*",
        re.DOTALL,
    ),
    connection_details=BlockPattern(
        coarse=re.compile(r"/b> -\n?(.*?- <b>.*?)<", re.DOTALL),
        fine=re.compile(
            r"<br />\n?"
            r"(?:(?P<line>.*?) nach (?P<destination>.*?)\n?"
            r"<br />\n?"
            r"ab (?P<departure_time>\d+:\d+)\n?"
            r"(?P<departure_position>.*?)\s*\n?"
            r"<br />\n?"
            r"an (?P<arrival_time>\d+:\d+)\n?"
            r"(?P<arrival_position>.*?)\s*\n?"
            r"<br />\n?"
            r'|<a href=".*?">\n?'
            r"Fussweg\s*\n?"
            r"</a>\n?"
            r"(?P<min>\d+) Min\.<br />\n?)"
            r"- <b>(?P<arrival>.*?)",
            re.DOTALL,
        ),
    ),
    departures_head=re.compile(
        r'.*<p class="qs">.*?'
        r"<b>(?P<location>.*?)</b><br />.*?"
        r"Abfahrt (?P<time>\d+:\d+).*?"
        r"Uhr, (?P<date>\d+\.\d+\.\d+).*?"
        r"</p>.*",
        re.DOTALL,
    ),
    # Board answered without departures, e.g. outside operating hours
    departures_no_info=re.compile(
        r"keine (?:Abfahrten|Abfahrtsinformationen|Informationen)"
        r"|Haltestelle .{0,80}? nicht (?:gefunden|bekannt)",
        re.IGNORECASE | re.DOTALL,
    ),
    departures=BlockPattern(
        coarse=re.compile(r'<p class="sq">(.+?)</p>', re.DOTALL),
        fine=re.compile(
            r".*?<b>\s*(?P<line>.*?)\s*</b>.*?"
            r"(?:&gt;|>){2}\n?"
            r"(?P<destination>.*?)\n?"
            r"<br />.*?"
            r"<b>(?P<time>\d+:\d+)</b>.*?"
            r"(?:Gl\. (?P<position>\d+)<br />.*?)?",
            re.DOTALL,
        ),
    ),
)

RMV_LINE_RULES = (
    LineRule("ICE", Product.INTERCITY, "ICE"),  # InterCityExpress
    LineRule("IC", Product.INTERCITY, "IC"),
    LineRule("EC", Product.INTERCITY, "EC"),  # EuroCity
    LineRule("EN", Product.INTERCITY, "EN"),  # EuroNight
    LineRule("CNL", Product.INTERCITY, "CNL"),  # CityNightLine
    LineRule("RB", Product.REGIONAL, "RB"),  # RegionalBahn
    LineRule("RE", Product.REGIONAL, "RE"),  # RegionalExpress
    LineRule("SE", Product.REGIONAL, "SE"),  # StadtExpress
    LineRule("R", Product.REGIONAL),
    LineRule("S", Product.SUBURBAN_RAIL, "S"),
    LineRule("U", Product.UNDERGROUND, "U"),
    LineRule("Tram", Product.TRAM),
    LineRule("RT", Product.TRAM, "RT"),  # RegioTram
    LineRule("Bus", Product.BUS, prefix=True),
    LineRule("AST", Product.CALL_BUS, "AST", prefix=True),  # Anruf-Sammel-Taxi
    LineRule("ALT", Product.CALL_BUS, "ALT", prefix=True),  # Anruf-Linien-Taxi
    LineRule("LTaxi", Product.CALL_BUS, "LTaxi"),
)

RMV = Dialect(
    network_id="mobil.rmv.de",
    aliases=("www.rmv.de",),
    query_uri="http://www.rmv.de/auskunft/bin/jp/query.exe/dox",
    board_uri="http://www.rmv.de/auskunft/bin/jp/stboard.exe/dox",
    patterns=RMV_PATTERNS,
    line_rules=RMV_LINE_RULES,
    role_tags=MappingProxyType({"Startort": ROLE_FROM, "Zielort": ROLE_TO}),
)

DIALECTS: Mapping[str, Dialect] = MappingProxyType(
    {
        network_id: dialect
        for dialect in (RMV,)
        for network_id in (dialect.network_id, *dialect.aliases)
    }
)


def get_dialect(network_id: str) -> Dialect:
    """Look up a dialect by network id or one of its aliases.

    Raises:
        ValidationError: If no dialect serves the network
    """
    try:
        return DIALECTS[network_id]
    except KeyError:
        raise ValidationError(f"Unknown network: {network_id}") from None
