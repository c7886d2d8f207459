# Token Store - per-client token files at ~/.coursera/<name>_aout2.csv.
# Created: 2026-10-19

from __future__ import annotations

import logging
import os
import stat
from pathlib import Path

from coaclient.config import Settings, get_settings
from coaclient.errors import RecordError
from coaclient.models import AuthTokens, StoreResult
from coaclient.records import (
    TOKEN_HEADER,
    decode_token,
    encode_token,
    format_row,
    is_token_header,
    parse_row,
)

logger = logging.getLogger(__name__)


class TokenStore:
    """File-based token store, one file per client application.

    Each file holds a header line and a single data line. Saving replaces
    the whole file. Files are chmod 0600 (owner-only read/write).
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    def path_for(self, client_name: str) -> Path:
        return self.settings.token_path(client_name)

    def save_auth_tokens(self, client_name: str, tokens: AuthTokens) -> StoreResult[Path]:
        """Replace the token file for ``client_name``. Never raises."""
        sep = self.settings.separator
        try:
            path = self.path_for(client_name)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.unlink(missing_ok=True)
            with open(path, "w", encoding="utf-8", newline="") as f:
                f.write(format_row(TOKEN_HEADER, sep))
                f.write(
                    format_row(
                        (
                            encode_token(tokens.refresh_token),
                            encode_token(tokens.access_token),
                            tokens.expires_in,
                        ),
                        sep,
                    )
                )
            os.chmod(path, stat.S_IRUSR | stat.S_IWUSR)
        except (OSError, ValueError) as e:
            logger.error("Error while saving authentication tokens to file: %s", e)
            return StoreResult.failure(str(e))

        logger.info("Saved auth tokens for %s", client_name)
        return StoreResult.success(path)

    def lookup(self, client_name: str) -> StoreResult[AuthTokens]:
        """Load the cached tokens for ``client_name``.

        Only the first data line is read; anything after it is ignored.
        """
        try:
            path = self.path_for(client_name)
        except ValueError as e:
            logger.error("%s", e)
            return StoreResult.failure(str(e))

        if not path.exists():
            logger.error(
                "File with %s tokens not found in path: %s. Please try to generate auth tokens.",
                client_name,
                path,
            )
            return StoreResult.missing(f"No token file for {client_name}")

        sep = self.settings.separator
        try:
            with open(path, encoding="utf-8", newline="") as f:
                for line in f:
                    if not line.strip():
                        continue
                    fields = parse_row(line, sep, len(TOKEN_HEADER))
                    if is_token_header(fields):
                        continue
                    return StoreResult.success(
                        AuthTokens(
                            refresh_token=decode_token(fields[0]),
                            access_token=decode_token(fields[1]),
                            expires_in=fields[2],
                        )
                    )
        except OSError as e:
            logger.error("Error while read tokens file: %s", e)
            return StoreResult.failure(str(e))
        except RecordError as e:
            logger.error("Corrupted tokens file %s: %s", path, e)
            return StoreResult.failure(str(e))

        logger.error("Tokens file %s has no token line", path)
        return StoreResult.missing(f"Token file for {client_name} is empty")

    def get_auth_tokens(self, client_name: str) -> AuthTokens | None:
        """Load tokens for a client. Returns None if not found or unreadable."""
        return self.lookup(client_name).value

    def delete(self, client_name: str) -> bool:
        """Delete the token file for a client. Returns True if deleted."""
        try:
            path = self.path_for(client_name)
        except ValueError as e:
            logger.warning("Not deleting tokens: %s", e)
            return False
        if path.exists():
            path.unlink()
            logger.info("Deleted auth tokens for %s", client_name)
            return True
        return False

    def list_clients(self) -> list[str]:
        """List client names that have a token file."""
        suffix = self.settings.token_file_suffix
        storage_dir = self.settings.storage_dir
        if not storage_dir.is_dir():
            return []
        return sorted(
            f.name[: -len(suffix)]
            for f in storage_dir.glob(f"*{suffix}")
            if f.is_file() and len(f.name) > len(suffix)
        )
