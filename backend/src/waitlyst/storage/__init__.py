"""Persistence for the waitlist: backends, the store and exports."""

from waitlyst.storage.backends import (
    InMemoryBackend,
    JsonFileBackend,
    KeyValueBackend,
    SqlBackend,
    create_backend,
)
from waitlyst.storage.models import WaitlistEntry
from waitlyst.storage.repository import WaitlistStore, build_store, normalize_email

__all__ = [
    "InMemoryBackend",
    "JsonFileBackend",
    "KeyValueBackend",
    "SqlBackend",
    "WaitlistEntry",
    "WaitlistStore",
    "build_store",
    "create_backend",
    "normalize_email",
]
