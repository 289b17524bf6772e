from abc import ABC, abstractmethod

from dealbrief.imaging.models import PageImage


class BasePdfExtractor(ABC):
    """Contract for all PDF text extraction and rendering adapters."""

    @abstractmethod
    def page_texts(self, pdf_bytes: bytes) -> list[str]:
        """Extract the embedded text layer page by page.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            One string per page in physical page order. Each page's text
            fragments are joined with single spaces.

        Raises:
            PdfExtractionError: if the PDF cannot be opened or read.
        """

    @abstractmethod
    def render_page(self, pdf_bytes: bytes, page_number: int, scale: float) -> PageImage:
        """Rasterise one page.

        Args:
            pdf_bytes: Raw PDF file content.
            page_number: 1-based page index.
            scale: Multiplier over the native page coordinate space.

        Raises:
            PdfExtractionError: if the page cannot be rendered.
        """
