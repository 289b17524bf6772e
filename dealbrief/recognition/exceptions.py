class RecognitionError(Exception):
    """Raised when text recognition for an image fails."""


class RecognitionNetworkError(RecognitionError):
    """Raised when the recognition provider call fails due to network/infrastructure issues."""
