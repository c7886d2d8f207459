"""coaclient - local store for OAuth2 client registrations and cached tokens."""

from coaclient.config import Settings, get_settings
from coaclient.config_store import ConfigStore
from coaclient.errors import CreateClientAppError, RecordError, StoreError
from coaclient.models import AuthTokens, ClientConfig, StoreResult, StoreStatus
from coaclient.registry import ClientRegistry
from coaclient.token_store import TokenStore

__all__ = [
    "AuthTokens",
    "ClientConfig",
    "ClientRegistry",
    "ConfigStore",
    "CreateClientAppError",
    "RecordError",
    "Settings",
    "StoreError",
    "StoreResult",
    "StoreStatus",
    "TokenStore",
    "get_settings",
]
