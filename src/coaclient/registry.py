# Client Registry - single entry point over the config and token stores.
# Created: 2026-10-19

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from coaclient.config import Settings, get_settings
from coaclient.config_store import ConfigStore
from coaclient.models import AuthTokens, ClientConfig, StoreResult
from coaclient.token_store import TokenStore

logger = logging.getLogger(__name__)


class ClientRegistry:
    """Interface used by the CLI and OAuth layers.

    Registration must happen before tokens can be saved for a client;
    deleting a client also removes its cached tokens.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.tokens = TokenStore(self.settings)
        self.configs = ConfigStore(self.settings, token_store=self.tokens)

    def register(
        self, name: str, client_id: str, secret: str, scopes: Iterable[str] | str
    ) -> ClientConfig:
        """Register a client. Raises CreateClientAppError on a duplicate name."""
        return self.configs.write_client_config(name, client_id, secret, scopes)

    def find_client(self, identifier: str) -> ClientConfig | None:
        return self.configs.get_client_config_by_name_or_id(identifier)

    def list_clients(self) -> list[ClientConfig]:
        return self.configs.get_client_configs()

    def delete_client(self, name: str) -> StoreResult[bool]:
        return self.configs.delete_client_config(name)

    def save_tokens(self, name: str, tokens: AuthTokens) -> StoreResult[Path]:
        return self.tokens.save_auth_tokens(name, tokens)

    def load_tokens(self, name: str) -> AuthTokens | None:
        return self.tokens.get_auth_tokens(name)

    def orphan_token_files(self) -> list[str]:
        """Client names with a token file but no config record."""
        registered = {c.name for c in self.list_clients()}
        orphans = [name for name in self.tokens.list_clients() if name not in registered]
        if orphans:
            logger.warning("Token files without a registered client: %s", ", ".join(orphans))
        return orphans
