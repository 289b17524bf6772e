class GenerationError(Exception):
    """Raised when the generation stream fails."""


class GenerationNetworkError(GenerationError):
    """Raised when the generation provider call fails due to network/infrastructure issues."""
