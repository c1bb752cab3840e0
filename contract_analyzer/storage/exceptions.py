class StorageError(Exception):
    """Base exception for document storage errors."""


class StorageReadError(StorageError):
    """Raised when stored bytes cannot be read for a location."""


class InvalidLocationError(StorageError):
    """Raised when a location resolves outside the storage root."""
