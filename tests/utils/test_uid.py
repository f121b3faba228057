"""Tests for uid module."""

import re

from easysearch_core.utils import uid


# UUID v4 pattern: xxxxxxxx-xxxx-4xxx-yxxx-xxxxxxxxxxxx
UUID_PATTERN = re.compile(
    r'^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$',
    re.IGNORECASE
)


class TestGenerateUuid:
    """Tests for generate_uuid function."""

    def test_returns_valid_uuid_v4_format(self):
        """Should match UUID v4 pattern."""
        result = uid.generate_uuid()
        assert isinstance(result, str)
        assert UUID_PATTERN.match(result) is not None

    def test_returns_unique_values(self):
        """Multiple calls should return different values."""
        results = [uid.generate_uuid() for _ in range(100)]
        assert len(set(results)) == 100


class TestGenerateTokenId:
    """Tests for generate_token_id function."""

    def test_compact_hex(self):
        result = uid.generate_token_id()
        assert re.fullmatch(r"[0-9a-f]{32}", result)

    def test_returns_unique_values(self):
        results = [uid.generate_token_id() for _ in range(100)]
        assert len(set(results)) == 100
