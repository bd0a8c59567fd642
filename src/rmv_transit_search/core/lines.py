"""Normalization of raw line labels like 'S 5' or 'ICE 123'."""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from .exceptions import LineFormatError
from .models import Line, LineStyle, Product

if TYPE_CHECKING:
    from .dialects import Dialect

logger = logging.getLogger(__name__)

LINE_STYLES: Mapping[Product, LineStyle] = MappingProxyType(
    {
        Product.INTERCITY: LineStyle(
            background="#ffffff", foreground="#ff0000", border="#ff0000"
        ),
        Product.REGIONAL: LineStyle(background="#888888", foreground="#ffffff"),
        Product.SUBURBAN_RAIL: LineStyle(background="#006e34", foreground="#ffffff"),
        Product.UNDERGROUND: LineStyle(background="#003090", foreground="#ffffff"),
        Product.TRAM: LineStyle(background="#cc0000", foreground="#ffffff"),
        Product.BUS: LineStyle(background="#993399", foreground="#ffffff"),
        Product.CALL_BUS: LineStyle(background="#993399", foreground="#ffffff"),
        Product.FERRY: LineStyle(background="#0000ff", foreground="#ffffff"),
    }
)

# Leading mode token, then the number and suffix, e.g. "RE 10", "BusX-17"
LINE_PATTERN = re.compile(r"([A-Za-zÄÖÜäöüß]+)[\s-]*(.*)", re.DOTALL)


@dataclass(frozen=True)
class LineRule:
    """Maps a mode token of a dialect to a product.

    ``label_prefix`` is written in front of the number in the display label.
    Prefix rules (``prefix=True``) match every token starting with ``token``
    and keep the rest of the token as a sub-type, e.g. ``BusX`` -> ``X``.
    """

    token: str
    product: Product
    label_prefix: str = ""
    prefix: bool = False

    def matches(self, token: str) -> bool:
        if self.prefix:
            return token.startswith(self.token)
        return token == self.token

    def label(self, token: str, number: str) -> str:
        subtype = token[len(self.token) :] if self.prefix else ""
        return self.label_prefix + subtype + number


def find_rule(token: str, rules: tuple[LineRule, ...]) -> LineRule | None:
    """Find the rule for a mode token; exact rules win over prefix rules."""
    for rule in rules:
        if not rule.prefix and rule.matches(token):
            return rule
    for rule in rules:
        if rule.prefix and rule.matches(token):
            return rule
    return None


def normalize_line(
    label: str, dialect: "Dialect", source: str | None = None
) -> Line | None:
    """Turn a raw line label into a Line.

    Args:
        label: Label as printed on the page, possibly empty
        dialect: Dialect providing the token table and colours
        source: URI of the page the label comes from, for error messages

    Returns:
        The normalized line, or None for an empty label

    Raises:
        LineFormatError: If the mode token is unknown and the dialect is strict
    """
    label = label.strip()
    if not label:
        return None

    match = LINE_PATTERN.fullmatch(label)
    if match is None:
        return _unknown_line(
            label, dialect, f"cannot normalize line {label} on {source}", source
        )

    token = match.group(1)
    number = re.sub(r"\s+", "", match.group(2))

    rule = find_rule(token, dialect.line_rules)
    if rule is None:
        return _unknown_line(
            label,
            dialect,
            f"cannot normalize type {token} number {number} line {label} on {source}",
            source,
        )

    return Line(
        product=rule.product,
        label=rule.label(token, number),
        style=dialect.line_styles.get(rule.product),
    )


def _unknown_line(
    label: str, dialect: "Dialect", message: str, source: str | None
) -> Line:
    if dialect.strict_lines:
        logger.warning(f"{dialect.network_id}: {message}")
        raise LineFormatError(message, label, source)
    return Line(product=Product.UNKNOWN, label=re.sub(r"\s+", "", label))
