# Data models - client registrations, token pairs and typed store results.
# Created: 2026-10-19

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from coaclient.records import split_scopes

T = TypeVar("T")


@dataclass(frozen=True)
class ClientConfig:
    """One registered OAuth2 client application."""

    name: str
    client_id: str
    client_secret: str = field(repr=False)
    scopes: str = ""  # scope names joined with "+"

    @property
    def scope_list(self) -> list[str]:
        return split_scopes(self.scopes)


@dataclass(frozen=True)
class AuthTokens:
    """Cached token pair for a client. ``expires_in`` is stored as issued."""

    refresh_token: str = field(repr=False)
    access_token: str = field(repr=False)
    expires_in: str = ""


class StoreStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"  # nothing stored yet
    IO_ERROR = "io_error"  # storage failed


@dataclass
class StoreResult(Generic[T]):
    """Outcome of a store operation.

    Distinguishes "nothing there" from "storage broke" so callers do not
    have to read logs to tell them apart.
    """

    status: StoreStatus
    value: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is StoreStatus.OK

    @property
    def not_found(self) -> bool:
        return self.status is StoreStatus.NOT_FOUND

    @classmethod
    def success(cls, value: T | None = None) -> StoreResult[T]:
        return cls(StoreStatus.OK, value=value)

    @classmethod
    def missing(cls, error: str | None = None) -> StoreResult[T]:
        return cls(StoreStatus.NOT_FOUND, error=error)

    @classmethod
    def failure(cls, error: str) -> StoreResult[T]:
        return cls(StoreStatus.IO_ERROR, error=error)
