"""Detection of ambiguous or unanswerable connection queries."""

import logging

from .dialects import ROLE_FROM, ROLE_TO, ROLE_VIA, Dialect
from .exceptions import UnknownRoleError
from .extract import clean_field
from .models import CheckConnectionsResult, QueryStatus

logger = logging.getLogger(__name__)


def check_connections_query(
    page: str, dialect: Dialect, source: str | None = None
) -> CheckConnectionsResult:
    """Inspect the page a connections query returned.

    The backend answers an unresolvable query with an error message and an
    ambiguous one with a "please choose from the list" section per role. Each
    section may be tagged with the role it is asking for; untagged sections
    ask for the via stop.

    Args:
        page: Page text
        dialect: Dialect of the page
        source: Query URI, for error messages

    Returns:
        TOO_CLOSE or NO_CONNECTIONS on an error message, AMBIGUOUS with
        candidate names per role, or OK if the query was resolved

    Raises:
        UnknownRoleError: If a section is tagged with an unknown role
    """
    patterns = dialect.patterns

    error = patterns.check_error.search(page)
    if error is not None:
        if error.group("too_close") is not None:
            return CheckConnectionsResult(status=QueryStatus.TOO_CLOSE)
        if error.group("no_connections") is not None:
            return CheckConnectionsResult(status=QueryStatus.NO_CONNECTIONS)

    candidates: dict[str, list[str]] = {}
    sections = list(patterns.ambiguity_section.finditer(page))
    for index, section in enumerate(sections):
        tag = section.group("role")
        if tag is None:
            role = ROLE_VIA
        elif tag in dialect.role_tags:
            role = dialect.role_tags[tag]
        else:
            raise UnknownRoleError(f"unknown role '{tag}' on {source}", tag, source)

        end = sections[index + 1].start() if index + 1 < len(sections) else len(page)
        names: list[str] = []
        for match in patterns.ambiguity_candidate.finditer(page, section.end(), end):
            name = clean_field(match.group("name"))
            if name and name not in names:
                names.append(name)
        candidates[role] = names
        logger.debug(f"{len(names)} candidates for {role} on {source}")

    if not any(candidates.values()):
        return CheckConnectionsResult(status=QueryStatus.OK)

    return CheckConnectionsResult(
        status=QueryStatus.AMBIGUOUS,
        from_candidates=candidates.get(ROLE_FROM),
        via_candidates=candidates.get(ROLE_VIA),
        to_candidates=candidates.get(ROLE_TO),
    )
