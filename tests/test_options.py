"""Tests for KEY=value option parsing."""

import pytest
from mdlv3000.reader.options import parse_id_list, parse_options


class TestParseOptions:
    """Test parse_options."""

    def test_empty(self):
        """No options yields an empty mapping."""
        assert parse_options("") == {}
        assert parse_options("   ") == {}

    def test_simple_values(self):
        """Single-token values."""
        assert parse_options("CHG=-1 MASS=13") == {"CHG": "-1", "MASS": "13"}

    def test_parenthesized_list(self):
        """Parenthesized values keep their spaces and lose the parentheses."""
        options = parse_options("ATOMS=(3 1 2 3) XBONDS=(1 4)")
        assert options == {"ATOMS": "3 1 2 3", "XBONDS": "1 4"}

    def test_order_preserved(self):
        """Keys come back in order of appearance."""
        options = parse_options("LABEL=Ph ATOMS=(1 2) CHG=1")
        assert list(options) == ["LABEL", "ATOMS", "CHG"]

    def test_duplicate_key_last_wins(self):
        """A repeated key keeps its last value."""
        assert parse_options("CHG=1 CHG=2") == {"CHG": "2"}

    def test_unclosed_parenthesis(self):
        """A parenthesis without a closing one is read as a token."""
        assert parse_options("ATOMS=(3 CHG=1") == {"ATOMS": "(3", "CHG": "1"}

    def test_quoted_value(self):
        """Quoted values may contain spaces."""
        assert parse_options('LABEL="Boc Gly" CHG=1') == {"LABEL": "Boc Gly", "CHG": "1"}

    def test_trailing_garbage(self):
        """Parsing stops quietly at text that is not KEY=value."""
        assert parse_options("CHG=1 garbage MASS=2") == {"CHG": "1"}

    def test_garbage_only(self):
        """Leading garbage yields nothing."""
        assert parse_options("=1 CHG=2") == {}

    def test_empty_value(self):
        """A key followed by whitespace has an empty value."""
        assert parse_options("LABEL= CHG=1") == {"LABEL": "", "CHG": "1"}

    def test_underscore_key(self):
        """Keys may contain underscores and digits."""
        assert parse_options("KEY_2=x") == {"KEY_2": "x"}


class TestParseIdList:
    """Test parse_id_list."""

    def test_count_prefix_dropped(self):
        """The leading count is not part of the data."""
        assert parse_id_list("3 1 2 3") == [1, 2, 3]

    def test_count_only(self):
        """A zero-length list."""
        assert parse_id_list("0") == []

    @pytest.mark.parametrize("value", ["", "x 1 2", "2 1 b"])
    def test_invalid(self, value):
        """Non-integer entries raise ValueError."""
        with pytest.raises(ValueError):
            parse_id_list(value)
