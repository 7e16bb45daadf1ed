"""Tests for percent-encoding helpers."""
import pytest

from twapi.core.utils.encoding import PercentEncoder, to_pairs, parse_query


class TestPercentEncoder:
    """Test suite for PercentEncoder."""

    @pytest.mark.parametrize("value", [
        "abcXYZ",
        "0123456789",
        "-._~",
    ])
    def test_unreserved_untouched(self, value):
        """Test unreserved characters pass through."""
        assert PercentEncoder.encode(value) == value

    @pytest.mark.parametrize("value,expected", [
        (" ", "%20"),
        ("+", "%2B"),
        ("/", "%2F"),
        ("*", "%2A"),
        ("!", "%21"),
        ("&=", "%26%3D"),
        ("%", "%25"),
    ])
    def test_reserved_escaped(self, value, expected):
        """Test reserved characters are escaped with uppercase hex."""
        assert PercentEncoder.encode(value) == expected

    def test_utf8_multibyte(self):
        """Test non-ASCII characters escape every UTF-8 byte."""
        assert PercentEncoder.encode("é") == "%C3%A9"
        assert PercentEncoder.encode("☃") == "%E2%98%83"

    def test_bytes_input(self):
        """Test bytes are encoded byte by byte."""
        assert PercentEncoder.encode(b"a b\xff") == "a%20b%FF"

    def test_empty(self):
        """Test empty string."""
        assert PercentEncoder.encode("") == ""


class TestToPairs:
    """Test suite for to_pairs."""

    def test_none(self):
        """Test None yields no pairs."""
        assert to_pairs(None) == []

    def test_mapping(self):
        """Test mappings become pairs."""
        assert to_pairs({'a': 1, 'b': 'x'}) == [('a', '1'), ('b', 'x')]

    def test_sequence_keeps_duplicates(self):
        """Test repeated names and order are kept."""
        assert to_pairs([('a', '2'), ('a', '1')]) == [('a', '2'), ('a', '1')]


class TestParseQuery:
    """Test suite for parse_query."""

    def test_parse_bytes(self):
        """Test form body is parsed."""
        fields = parse_query(b"oauth_token=abc&oauth_token_secret=d%2Fe&oauth_callback_confirmed=true")

        assert fields == {
            'oauth_token': 'abc',
            'oauth_token_secret': 'd/e',
            'oauth_callback_confirmed': 'true',
        }

    def test_blank_values_kept(self):
        """Test blank values are kept."""
        assert parse_query("a=&b=1") == {'a': '', 'b': '1'}
