"""Unit tests for dialect lookup and client settings."""

from dataclasses import FrozenInstanceError

import pytest

from rmv_transit_search.core.config import ClientSettings
from rmv_transit_search.core.dialects import (
    DIALECTS,
    RMV,
    RMV_LINE_RULES,
    RMV_PATTERNS,
    Dialect,
    get_dialect,
)
from rmv_transit_search.core.exceptions import ValidationError
from rmv_transit_search.core.lines import LINE_STYLES


class TestDialects:
    """Test the dialect registry."""

    def test_lookup_by_id_and_alias(self):
        """Test that a dialect is found under its id and aliases."""
        assert get_dialect("mobil.rmv.de") is RMV
        assert get_dialect("www.rmv.de") is RMV

    def test_unknown_network(self):
        """Test that an unknown network id is rejected."""
        with pytest.raises(ValidationError, match="Unknown network: example.org"):
            get_dialect("example.org")

    def test_dialect_is_immutable(self):
        """Test that dialects cannot be modified."""
        with pytest.raises(FrozenInstanceError):
            RMV.strict_lines = False
        with pytest.raises(TypeError):
            DIALECTS["example.org"] = RMV

    def test_new_dialect_defaults(self):
        """Test that a dialect built with defaults shares the colour table."""
        dialect = Dialect(
            network_id="test.rmv.de",
            aliases=(),
            query_uri="http://test.rmv.de/query.exe/dox",
            board_uri="http://test.rmv.de/stboard.exe/dox",
            patterns=RMV_PATTERNS,
            line_rules=RMV_LINE_RULES,
            role_tags={},
        )

        assert dialect.line_styles is LINE_STYLES
        assert dialect.strict_lines is True
        assert dialect.transfer_marker == "Um."

    def test_role_tags(self):
        """Test the RMV section tags."""
        assert RMV.role_tags == {"Startort": "from", "Zielort": "to"}


class TestClientSettings:
    """Test ClientSettings."""

    def test_defaults(self, monkeypatch):
        """Test the default settings."""
        for name in ("NETWORK", "TIMEOUT", "MAX_ATTEMPTS", "USER_AGENT"):
            monkeypatch.delenv(f"RMV_TRANSIT_{name}", raising=False)

        settings = ClientSettings(_env_file=None)

        assert settings.network == "mobil.rmv.de"
        assert settings.timeout == 30
        assert settings.max_attempts == 3

    def test_environment(self, monkeypatch):
        """Test overriding settings from the environment."""
        monkeypatch.setenv("RMV_TRANSIT_TIMEOUT", "10")
        monkeypatch.setenv("RMV_TRANSIT_NETWORK", "www.rmv.de")

        settings = ClientSettings(_env_file=None)

        assert settings.timeout == 10
        assert settings.network == "www.rmv.de"
