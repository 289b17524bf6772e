class OfficeExtractionError(Exception):
    """Raised when an office document cannot be read."""
