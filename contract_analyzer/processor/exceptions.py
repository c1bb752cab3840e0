class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class DocumentNotFoundError(ProcessorError):
    """Raised when a document cannot be found in the database."""


class PersistenceError(ProcessorError):
    """Raised when a document state write fails."""


class StaleDocumentError(PersistenceError):
    """Raised when a conditional write finds the document in an unexpected status."""
