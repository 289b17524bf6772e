class ExtractionError(Exception):
    """Base exception for document extraction failures."""


class UnreadableImageError(ExtractionError):
    """Raised when an uploaded image cannot be decoded."""
