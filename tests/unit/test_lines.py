"""Unit tests for line normalization."""

from dataclasses import replace

import pytest

from rmv_transit_search.core.dialects import RMV
from rmv_transit_search.core.exceptions import LineFormatError, ParseError
from rmv_transit_search.core.lines import LINE_STYLES, LineRule, find_rule, normalize_line
from rmv_transit_search.core.models import Line, LineStyle, Product


class TestNormalizeLine:
    """Test normalize_line with the RMV token table."""

    @pytest.mark.parametrize(
        "label,product,expected",
        [
            ("S 5", Product.SUBURBAN_RAIL, "S5"),
            ("U 4", Product.UNDERGROUND, "U4"),
            ("ICE 123", Product.INTERCITY, "ICE123"),
            ("IC 2024", Product.INTERCITY, "IC2024"),
            ("RE 10", Product.REGIONAL, "RE10"),
            ("RB 15", Product.REGIONAL, "RB15"),
            ("R 7", Product.REGIONAL, "7"),
            ("Tram 12", Product.TRAM, "12"),
            ("RT 1", Product.TRAM, "RT1"),
            ("Bus 30", Product.BUS, "30"),
            ("BusX 17", Product.BUS, "X17"),
            ("AST 5", Product.CALL_BUS, "AST5"),
            ("LTaxi 3", Product.CALL_BUS, "LTaxi3"),
        ],
    )
    def test_known_tokens(self, label, product, expected):
        """Test that every known mode token maps to its product and label."""
        line = normalize_line(label, RMV)
        assert line is not None
        assert line.product == product
        assert line.label == expected

    def test_whitespace_insensitive(self):
        """Test that whitespace inside the label does not matter."""
        assert normalize_line("S  5 ", RMV) == normalize_line("S5", RMV)
        assert normalize_line("RE 1 0", RMV) == normalize_line("RE10", RMV)

    @pytest.mark.parametrize("label", ["S 5", "U 4", "RE 10", "ICE 123", "AST 5"])
    def test_idempotent_on_own_labels(self, label):
        """Test that a normalized label normalizes to itself."""
        line = normalize_line(label, RMV)
        assert normalize_line(line.label, RMV) == line

    def test_empty_label(self):
        """Test that an empty label means no line."""
        assert normalize_line("", RMV) is None
        assert normalize_line("   ", RMV) is None

    def test_unknown_token_raises(self):
        """Test that an unknown mode token is a format error."""
        with pytest.raises(LineFormatError, match="XX") as exc_info:
            normalize_line("XX12", RMV, "board.html")
        assert exc_info.value.excerpt == "XX12"
        assert exc_info.value.source == "board.html"
        assert "on board.html" in str(exc_info.value)
        assert isinstance(exc_info.value, ParseError)

    def test_label_without_token_raises(self):
        """Test that a bare number is rejected."""
        with pytest.raises(LineFormatError):
            normalize_line("12", RMV)

    def test_lenient_dialect_maps_unknown(self):
        """Test that a non-strict dialect keeps unknown labels as UNKNOWN."""
        lenient = replace(RMV, strict_lines=False)
        line = normalize_line("XX 12", lenient)
        assert line == Line(product=Product.UNKNOWN, label="XX12")
        assert line.style is None

    def test_style_from_dialect(self):
        """Test that lines carry the colours of their product."""
        line = normalize_line("S 5", RMV)
        assert line.style == LINE_STYLES[Product.SUBURBAN_RAIL]
        assert line.code == "SS5"

    def test_dialect_style_override(self):
        """Test that a dialect can supply its own colour table."""
        style = LineStyle(background="#000000", foreground="#ffffff")
        dialect = replace(RMV, line_styles={Product.SUBURBAN_RAIL: style})
        assert normalize_line("S 5", dialect).style == style
        assert normalize_line("U 4", dialect).style is None


class TestLineRules:
    """Test rule lookup."""

    def test_exact_rule_wins_over_prefix(self):
        """Test that exact tokens are preferred to prefix rules."""
        rules = (
            LineRule("Bus", Product.BUS, prefix=True),
            LineRule("BusX", Product.CALL_BUS),
        )
        assert find_rule("BusX", rules).product == Product.CALL_BUS
        assert find_rule("BusY", rules).product == Product.BUS

    def test_no_rule(self):
        """Test that an unmatched token finds nothing."""
        assert find_rule("Zug", RMV.line_rules) is None

    def test_ice_is_not_ic(self):
        """Test that ICE does not fall back to the IC rule."""
        assert find_rule("ICE", RMV.line_rules).label_prefix == "ICE"

    def test_styles_are_read_only(self):
        """Test that the shared colour table cannot be modified."""
        with pytest.raises(TypeError):
            LINE_STYLES[Product.BUS] = LineStyle(background="#000", foreground="#fff")
