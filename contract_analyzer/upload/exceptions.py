class UploadValidationError(Exception):
    """Raised when an upload request is missing fields or violates type/size limits."""
