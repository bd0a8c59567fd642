"""Reconstruction of full timestamps from the bare dates and times on a page."""

import logging
from datetime import date, datetime, time, timedelta

from .exceptions import ParseError

logger = logging.getLogger(__name__)

# Pages only show clock times. A time that lands further than this from its
# reference is taken to belong to the neighbouring day.
DAY_ROLLOVER_THRESHOLD = timedelta(hours=12)

ONE_DAY = timedelta(days=1)


def parse_date(text: str) -> date:
    """Parse a date like ``01.03.14`` or ``01.03.2014``.

    Raises:
        ParseError: If the text is not a dotted day.month.year date
    """
    value = text.strip()
    for fmt in ("%d.%m.%y", "%d.%m.%Y"):
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    raise ParseError(f"cannot parse date '{text}'", text)


def parse_time(text: str) -> time:
    """Parse a clock time like ``8:15`` or ``23:50``."""
    try:
        return datetime.strptime(text.strip(), "%H:%M").time()
    except ValueError as e:
        raise ParseError(f"cannot parse time '{text}'", text) from e


def join_date_time(day: date, clock: time) -> datetime:
    return datetime.combine(day, clock)


def roll_forward_past(
    candidate: datetime,
    reference: datetime,
    threshold: timedelta = DAY_ROLLOVER_THRESHOLD,
) -> datetime:
    """Move ``candidate`` to the next day if it lies too far before ``reference``.

    Used for departure boards: a board generated at 23:50 lists 00:10 for
    the following day, while a board generated at 00:10 that shows 23:50
    means the same day.
    """
    if candidate - reference < -threshold:
        logger.debug(f"Rolling {candidate} forward past reference {reference}")
        return candidate + ONE_DAY
    return candidate


def align_to_previous(
    candidate: datetime,
    previous: datetime,
    threshold: timedelta = DAY_ROLLOVER_THRESHOLD,
) -> datetime:
    """Shift ``candidate`` by one day towards ``previous`` if they are too far apart.

    Used for connection lists, where successive entries are chronological
    but the page only states one date for all of them.
    """
    diff = candidate - previous
    if diff > threshold:
        logger.debug(f"Rolling {candidate} back towards {previous}")
        return candidate - ONE_DAY
    if diff < -threshold:
        logger.debug(f"Rolling {candidate} forward towards {previous}")
        return candidate + ONE_DAY
    return candidate


def ensure_not_before(candidate: datetime, reference: datetime) -> datetime:
    """Advance ``candidate`` by one day if it is earlier than ``reference``.

    An arrival before its own departure means the leg runs past midnight.
    """
    if candidate < reference:
        return candidate + ONE_DAY
    return candidate
