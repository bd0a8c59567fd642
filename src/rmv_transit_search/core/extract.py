"""Two-stage regex extraction of records from result pages.

A page is first cut into blocks with a coarse pattern, whose first group is
the raw text of one record. Every block must then match a fine pattern in
full. A block that the coarse pattern finds but the fine pattern rejects means
the page format has drifted, so it is reported as a BlockParseError instead of
being skipped.
"""

import html
import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from .exceptions import BlockParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockPattern:
    """A coarse pattern isolating records and a fine pattern decomposing one."""

    coarse: re.Pattern[str]
    fine: re.Pattern[str]


def resolve_entities(text: str | None) -> str | None:
    """Decode HTML entities (``&#228;``, ``&amp;``, ``&nbsp;``) in a captured field."""
    if text is None:
        return None
    return html.unescape(text).replace("\xa0", " ")


def clean_field(text: str | None) -> str | None:
    """Entity-decode and strip a field, mapping empty text to None."""
    value = resolve_entities(text)
    if value is None:
        return None
    value = value.strip()
    return value or None


def match_page(page: str, pattern: re.Pattern[str]) -> re.Match[str] | None:
    """Match a whole-page pattern such as a header."""
    return pattern.fullmatch(page)


def extract_blocks(
    page: str,
    pattern: BlockPattern,
    source: str | None = None,
) -> Iterator[re.Match[str]]:
    """Yield the fine match of every block on the page, top to bottom.

    Args:
        page: Page text
        pattern: Coarse and fine pattern pair
        source: URI or other identifier of the page, for error messages

    Yields:
        One fine match per coarse block, in page order

    Raises:
        BlockParseError: If a block does not match the fine pattern in full
    """
    count = 0
    for coarse in pattern.coarse.finditer(page):
        block = coarse.group(1)
        fine = pattern.fine.fullmatch(block)
        if fine is None:
            logger.warning(f"Block {count + 1} on {source} does not match: {block!r}")
            raise BlockParseError(block, source)
        count += 1
        yield fine
    logger.debug(f"Extracted {count} blocks from {source}")


def extract_single_or_many(
    page: str,
    single: re.Pattern[str],
    many: re.Pattern[str],
) -> list[re.Match[str]]:
    """Return the single inline result if the page has one, else every listed match.

    Some pages resolve a query to exactly one result and only state it inline
    (e.g. in a hidden form field); those bypass the list scan.
    """
    match = single.fullmatch(page)
    if match is not None:
        return [match]
    return list(many.finditer(page))


def excerpt(page: str, limit: int = 500) -> str:
    """Shorten page text for inclusion in an error."""
    page = page.strip()
    if len(page) <= limit:
        return page
    return page[:limit] + "..."
