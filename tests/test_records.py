# Tests for records.py
# Created: 2026-10-19

import pytest

from coaclient.errors import RecordError
from coaclient.records import (
    CONFIG_HEADER,
    decode_token,
    encode_token,
    check_field,
    format_row,
    is_config_header,
    is_token_header,
    join_scopes,
    parse_row,
    split_scopes,
)


class TestScopes:
    def test_join(self):
        assert join_scopes(["read", "write"]) == "read+write"

    def test_split(self):
        assert split_scopes("read+write") == ["read", "write"]

    def test_split_empty(self):
        assert split_scopes("") == []


class TestTokenEncoding:
    def test_encoded_value_has_no_separator(self):
        encoded = encode_token("a,b,,c")
        assert "," not in encoded
        assert decode_token(encoded) == "a,b,,c"

    def test_known_value(self):
        assert encode_token("r1") == "cjE="

    def test_non_ascii(self):
        assert decode_token(encode_token("tøken✓")) == "tøken✓"

    def test_invalid_base64(self):
        with pytest.raises(RecordError):
            decode_token("not base64!")


class TestRows:
    def test_format_row(self):
        assert format_row(("a", "b", "c"), ",") == "a,b,c\n"

    def test_parse_row_strips_newline(self):
        assert parse_row("a,b,c\r\n", ",", 3) == ["a", "b", "c"]

    def test_parse_row_keeps_separator_in_last_field(self):
        assert parse_row("a,b,c,d", ",", 3) == ["a", "b", "c,d"]

    def test_parse_row_empty_trailing_field(self):
        assert parse_row("a,b,", ",", 3) == ["a", "b", ""]

    def test_parse_row_too_short(self):
        with pytest.raises(RecordError, match="Expected 4 fields"):
            parse_row("a,b", ",", 4)

    def test_header_detection(self):
        assert is_config_header(list(CONFIG_HEADER))
        assert not is_config_header(["work", "id-1", "s", ""])
        assert is_token_header(["refreshToken", "accessToken", "expiresIn"])
        assert not is_token_header(["cjE=", "YTE=", "3600"])

    def test_check_field_accepts_plain_value(self):
        check_field("Client name", "work", ",")

    @pytest.mark.parametrize("value", ["a,b", "a\nb", "a\rb"])
    def test_check_field_rejects_row_breaking_value(self, value):
        with pytest.raises(RecordError, match="Client name must not contain"):
            check_field("Client name", value, ",")
