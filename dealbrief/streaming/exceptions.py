class StreamParseError(Exception):
    """Raised when a completed generation stream cannot be parsed as JSON."""
