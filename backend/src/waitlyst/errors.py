"""Exception hierarchy shared by the waitlist modules."""


class WaitlistError(Exception):
    """Base class for errors surfaced to waitlist users."""
    pass


class StorageError(WaitlistError):
    """Persisted slots could not be read or written."""
    pass
