"""Test configuration and fixtures."""

import pytest

from rmv_transit_search.core.dialects import RMV

QUERY_URI = "http://www.rmv.de/auskunft/bin/jp/query.exe/dox"


@pytest.fixture
def dialect():
    """The RMV dialect."""
    return RMV


@pytest.fixture
def departures_page():
    """Build an RMV departure board page.

    Rows are (line, destination, time, platform) tuples; platform may be None.
    """

    def build(rows, location="Frankfurt (Main) Konstablerwache", time="08:00", date="01.03.14"):
        parts = [
            "<html><body>",
            '<p class="qs">',
            f"<b>{location}</b><br />",
            f"Abfahrt {time} Uhr, {date}<br />",
            "</p>",
        ]
        for line, destination, dep_time, platform in rows:
            parts += [
                '<p class="sq">',
                f"<b>{line}</b>",
                "&gt;&gt;",
                destination,
                "<br />",
                f"<b>{dep_time}</b>",
            ]
            if platform is not None:
                parts.append(f"Gl. {platform}<br />")
            parts.append("</p>")
        parts.append("</body></html>")
        return "\n".join(parts)

    return build


@pytest.fixture
def connections_page():
    """Build an RMV connections list page.

    Entries are (departure, arrival, line) tuples; line may be None.
    """

    def build(entries, date="01.03.14", earlier=True, later=True):
        parts = [
            "<html><body>",
            "<p>Von: <b>Frankfurt (Main) Hauptbahnhof</b><br />",
            "Nach: <b>Wiesbaden Hauptbahnhof</b><br />",
            f"Datum: Sa, {date}<br />",
            "</p>",
        ]
        if earlier:
            parts.append(
                f'<a href="{QUERY_URI}?ld=1&amp;seqnr=2&amp;REQ0HafasScrollDir=2">'
                "Fr&#252;her</a>"
            )
        for index, (departure, arrival, line) in enumerate(entries):
            css = "conL" if index % 2 == 0 else "conD"
            suffix = f"&nbsp;{line}" if line is not None else ""
            parts.append(
                f'<p class="{css}"><a href="{QUERY_URI}?ld=1&amp;seqnr=2&amp;'
                f'ident=c{index}&amp;details=1">{departure}-{arrival}</a>{suffix}</p>'
            )
        if later:
            parts.append(
                f'<a href="{QUERY_URI}?ld=1&amp;seqnr=2&amp;REQ0HafasScrollDir=1">'
                "Sp&#228;ter</a>"
            )
        parts.append("</body></html>")
        return "\n".join(parts)

    return build


@pytest.fixture
def connection_details_page():
    """RMV detail page of a connection: a train, two walks and a bus."""
    return f"""<html><body>
<p class="details">
- <b>Frankfurt (Main) Hauptbahnhof</b> -<br />
S 5 nach Friedrichsdorf (Taunus)<br />
ab 08:15 Gl. 103<br />
an 08:31 Gl. 2<br />
- <b>Bad Homburg</b> -<br />
<a href="{QUERY_URI}?map=1">Fussweg</a>
3 Min.<br />
- <b>Bad Homburg Bahnhof/ZOB</b> -<br />
<a href="{QUERY_URI}?map=2">Fussweg</a>
4 Min.<br />
- <b>Bad Homburg Kurhaus</b> -<br />
Bus 1 nach Oberursel Bahnhof<br />
ab 08:45<br />
an 09:02<br />
- <b>Oberursel Bahnhof</b> -
</p>
<p>
Abfahrt: 01.03.14<br />
Dauer: 0:47<br />
</p>
</body></html>"""


@pytest.fixture
def overnight_details_page():
    """RMV detail page of a connection running past midnight."""
    return """<html><body>
<p class="details">
- <b>Frankfurt (Main) Hauptbahnhof</b> -<br />
RE 30 nach Kassel Hauptbahnhof<br />
ab 23:40 Gl. 11<br />
an 23:58 Gl. 1<br />
- <b>Friedberg (Hessen)</b> -<br />
Bus FB-30 nach Bad Nauheim<br />
ab 00:05<br />
an 00:20<br />
- <b>Bad Nauheim</b> -
</p>
<p>
Abfahrt: 01.03.14<br />
Dauer: 0:40<br />
</p>
</body></html>"""


@pytest.fixture
def ambiguous_page():
    """RMV query page asking to choose origin and destination."""
    return f"""<html><body>
<p>Geben Sie einen Startort an.<br />
Bitte w&#228;hlen Sie aus der Liste:</p>
<span class="tplight"><a href="{QUERY_URI}?ld=1&amp;s=1">Frankfurt (Main) Hauptbahnhof</a></span><br />
<span class="tplight"><a href="{QUERY_URI}?ld=1&amp;s=2">Frankfurt (Main) S&#252;dbahnhof</a></span><br />
<span class="tplight"><a href="{QUERY_URI}?ld=1&amp;s=1">
Frankfurt (Main) Hauptbahnhof
</a></span><br />
<p>Geben Sie einen Zielort an.<br />
Bitte w&#228;hlen Sie aus der Liste:</p>
<span class="tplight"><a href="{QUERY_URI}?ld=1&amp;z=1">Wiesbaden Hauptbahnhof</a></span><br />
</body></html>"""
