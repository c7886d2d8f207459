"""Line-oriented delimited records shared by the config and token stores.

Created: 2026-10-19

Config file::

    clientAppName,clientId,clientSecret,scope
    work,id-1,secret-1,read+write

Token file::

    refreshToken,accessToken,expiresIn
    cjE=,YTE=,3600

Token values are Base64 encoded. This is transport encoding only and gives
no confidentiality; it keeps separator characters inside a token from
breaking the row.
"""

from __future__ import annotations

import base64
import binascii
from collections.abc import Iterable

from coaclient.errors import RecordError

CLIENT_APP_NAME = "clientAppName"
CLIENT_ID_KEY = "clientId"
CLIENT_SECRET_KEY = "clientSecret"
SCOPE_KEY = "scope"
CONFIG_HEADER = (CLIENT_APP_NAME, CLIENT_ID_KEY, CLIENT_SECRET_KEY, SCOPE_KEY)

REFRESH_TOKEN_KEY = "refreshToken"
ACCESS_TOKEN_KEY = "accessToken"
EXPIRES_IN_KEY = "expiresIn"
TOKEN_HEADER = (REFRESH_TOKEN_KEY, ACCESS_TOKEN_KEY, EXPIRES_IN_KEY)

SCOPE_SEPARATOR = "+"


def join_scopes(scopes: Iterable[str]) -> str:
    """Join scope names into a single field."""
    return SCOPE_SEPARATOR.join(scopes)


def split_scopes(value: str) -> list[str]:
    if not value:
        return []
    return value.split(SCOPE_SEPARATOR)


def encode_token(value: str) -> str:
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def decode_token(value: str) -> str:
    try:
        return base64.b64decode(value.encode("ascii"), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError) as e:
        raise RecordError(f"Invalid encoded token field: {e}") from e


def check_field(label: str, value: str, separator: str) -> None:
    """Raise RecordError if ``value`` would split or break a row."""
    if separator in value or "\n" in value or "\r" in value:
        raise RecordError(f"{label} must not contain {separator!r} or line breaks")


def format_row(fields: Iterable[str], separator: str) -> str:
    """Serialize fields into one newline-terminated line."""
    return separator.join(fields) + "\n"


def parse_row(line: str, separator: str, width: int) -> list[str]:
    """Split a line into exactly ``width`` fields.

    The last field keeps any separators it contains. Raises RecordError if
    the line has fewer than ``width`` fields.
    """
    fields = line.rstrip("\r\n").split(separator, width - 1)
    if len(fields) < width:
        raise RecordError(f"Expected {width} fields, got {len(fields)}: {line.rstrip()!r}")
    return fields


def is_config_header(fields: list[str]) -> bool:
    return bool(fields) and fields[0] == CLIENT_APP_NAME


def is_token_header(fields: list[str]) -> bool:
    return bool(fields) and fields[0] == REFRESH_TOKEN_KEY
