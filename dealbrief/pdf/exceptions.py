class PdfExtractionError(Exception):
    """Raised when a PDF cannot be read, extracted or rendered."""
