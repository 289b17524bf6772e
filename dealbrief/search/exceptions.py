class SearchError(Exception):
    """Raised when a cognitive search cannot be run."""


class SearchValidationError(SearchError):
    """Raised when the parsed search response fails domain validation."""
