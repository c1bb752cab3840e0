class ExtractionError(Exception):
    """Raised when a document's text cannot be obtained."""


class UnsupportedContentTypeError(ExtractionError):
    """Raised when no extractor is registered for a content type."""
