# Store errors - exceptions raised by the config and token stores.
# Created: 2026-10-19


class StoreError(Exception):
    """Base exception for store errors."""


class CreateClientAppError(StoreError):
    """A client application could not be registered.

    Raised for a duplicate client name or for an I/O failure while
    appending the new record. The message is meant to be shown to the user.
    """


class RecordError(StoreError):
    """A stored row could not be decoded."""
