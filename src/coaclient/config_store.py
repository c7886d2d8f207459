"""Config store: registered OAuth2 client applications in ~/.coursera/coaclient.csv.

Created: 2026-10-19

The store keeps no in-memory state; every call rescans the file. The
duplicate-name check and the delete rewrite are separate read and write
passes with no locking, so two processes running at once can lose or
duplicate records. Run one command at a time.

Secrets are stored in plain text. The file is chmod 0600.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from coaclient.config import Settings, get_settings
from coaclient.errors import CreateClientAppError, RecordError
from coaclient.models import ClientConfig, StoreResult, StoreStatus
from coaclient.records import (
    CLIENT_APP_NAME,
    CONFIG_HEADER,
    check_field,
    format_row,
    is_config_header,
    join_scopes,
    parse_row,
)
from coaclient.token_store import TokenStore

logger = logging.getLogger(__name__)


class ConfigStore:
    """Append-only file of client registrations, rewritten only on delete."""

    def __init__(self, settings: Settings | None = None, token_store: TokenStore | None = None):
        self.settings = settings or get_settings()
        self.token_store = token_store or TokenStore(self.settings)

    @property
    def path(self) -> Path:
        return self.settings.config_path

    # =========================================================================
    # File I/O Helpers
    # =========================================================================

    def _iter_configs(self) -> Iterator[ClientConfig]:
        """Yield every record in file order. Raises OSError if unreadable."""
        sep = self.settings.separator
        with open(self.path, encoding="utf-8", newline="") as f:
            for lineno, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    fields = parse_row(line, sep, len(CONFIG_HEADER))
                except RecordError as e:
                    logger.warning("Skipping line %d of %s: %s", lineno, self.path, e)
                    continue
                if is_config_header(fields):
                    continue
                yield ClientConfig(*fields)

    def _find(self, match: Callable[[ClientConfig], bool]) -> StoreResult[ClientConfig]:
        try:
            for config in self._iter_configs():
                if match(config):
                    return StoreResult.success(config)
        except FileNotFoundError:
            return StoreResult.missing(f"Config file not found: {self.path}")
        except OSError as e:
            return StoreResult.failure(str(e))
        return StoreResult.missing()

    def _check_new_record(self, name: str, client_id: str, secret: str, scopes: str) -> None:
        if name == CLIENT_APP_NAME:
            raise CreateClientAppError(f"{CLIENT_APP_NAME} is reserved for the header row")
        try:
            self.settings.token_path(name)
            sep = self.settings.separator
            check_field("Client name", name, sep)
            check_field("Client id", client_id, sep)
            check_field("Client secret", secret, sep)
            check_field("Scopes", scopes, sep)
        except (ValueError, RecordError) as e:
            raise CreateClientAppError(str(e)) from e

    def _log_unreadable(self, result: StoreResult) -> None:
        if result.error is None:
            return
        logger.error(
            "Error while read config file in path: %s (%s). "
            "Please add application before start generating tokens",
            self.path,
            result.error,
        )

    # =========================================================================
    # Operations
    # =========================================================================

    def write_client_config(
        self,
        name: str,
        client_id: str,
        secret: str,
        scopes: Iterable[str] | str,
    ) -> ClientConfig:
        """Register a new client application.

        Args:
            name: Unique client name.
            client_id: OAuth2 client id.
            secret: OAuth2 client secret.
            scopes: Scope names, or an already joined scope field.

        Returns:
            The stored ClientConfig.

        Raises:
            CreateClientAppError: The name is taken or reserved, a field
                contains the separator or a line break, or the record could
                not be written.
        """
        scope_field = scopes if isinstance(scopes, str) else join_scopes(scopes)
        self._check_new_record(name, client_id, secret, scope_field)

        existing = self._find(lambda c: c.name == name)
        if existing.ok:
            raise CreateClientAppError(f"A client with name: {name} already exists")
        if existing.status is StoreStatus.IO_ERROR:
            raise CreateClientAppError(f"Error reading client config file: {existing.error}")

        config = ClientConfig(name, client_id, secret, scope_field)
        sep = self.settings.separator

        try:
            self.settings.storage_dir.mkdir(parents=True, exist_ok=True)
            is_new_file = not self.path.exists()
            with open(self.path, "a", encoding="utf-8", newline="") as f:
                if is_new_file:
                    f.write(format_row(CONFIG_HEADER, sep))
                f.write(format_row((name, client_id, secret, scope_field), sep))
            if is_new_file:
                os.chmod(self.path, stat.S_IRUSR | stat.S_IWUSR)
        except OSError as e:
            raise CreateClientAppError(f"Error write new client config to file: {e}") from e

        logger.info("Client %s registered", name)
        return config

    def lookup(self, identifier: str) -> StoreResult[ClientConfig]:
        """Find the first record whose name or client id equals ``identifier``."""
        result = self._find(lambda c: identifier in (c.name, c.client_id))
        if not result.ok:
            self._log_unreadable(result)
        return result

    def get_client_config_by_name_or_id(self, identifier: str) -> ClientConfig | None:
        return self.lookup(identifier).value

    def read_all(self) -> StoreResult[list[ClientConfig]]:
        """All records in file order."""
        try:
            configs = list(self._iter_configs())
        except FileNotFoundError:
            result: StoreResult[list[ClientConfig]] = StoreResult.missing(
                f"Config file not found: {self.path}"
            )
            self._log_unreadable(result)
            return result
        except OSError as e:
            result = StoreResult.failure(str(e))
            self._log_unreadable(result)
            return result
        return StoreResult.success(configs)

    def get_client_configs(self) -> list[ClientConfig]:
        return self.read_all().value or []

    def delete_client_config(self, name: str) -> StoreResult[bool]:
        """Remove the record named ``name`` and its token file. Never raises.

        Only rows whose name column equals ``name`` are removed; every other
        line, the header included, is written back unchanged.

        Returns:
            StoreResult whose value is True if a config line was removed.
        """
        sep = self.settings.separator
        removed = False
        try:
            with open(self.path, encoding="utf-8", newline="") as f:
                lines = f.readlines()

            kept = []
            for line in lines:
                first = line.rstrip("\r\n").split(sep, 1)[0]
                if first == name and first != CLIENT_APP_NAME:
                    removed = True
                    continue
                kept.append(line)

            if removed:
                temp_path = self.path.with_name(self.path.name + ".tmp")
                try:
                    with open(temp_path, "w", encoding="utf-8", newline="") as f:
                        f.writelines(kept)
                    os.chmod(temp_path, stat.S_IRUSR | stat.S_IWUSR)
                    temp_path.replace(self.path)
                finally:
                    temp_path.unlink(missing_ok=True)

            self.token_store.delete(name)
        except FileNotFoundError:
            logger.error("Error while delete %s config: no config file at %s", name, self.path)
            return StoreResult.missing(f"Config file not found: {self.path}")
        except OSError as e:
            logger.error("Error while delete %s config in file: %s", name, e)
            return StoreResult.failure(str(e))

        if removed:
            logger.info("Client %s successfully deleted.", name)
        else:
            logger.info("Client %s not registered, nothing to delete", name)
        return StoreResult.success(removed)
