import io

import pdfplumber

from dealbrief.imaging.models import PageImage
from dealbrief.pdf.base import BasePdfExtractor
from dealbrief.pdf.exceptions import PdfExtractionError

_POINTS_PER_INCH = 72


class PdfPlumberAdapter(BasePdfExtractor):
    """Extracts and renders PDF pages using pdfplumber."""

    def page_texts(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return [
                    " ".join(word["text"] for word in page.extract_words())
                    for page in pdf.pages
                ]
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber extraction failed: {exc}") from exc

    def render_page(self, pdf_bytes: bytes, page_number: int, scale: float) -> PageImage:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                if not 1 <= page_number <= len(pdf.pages):
                    raise PdfExtractionError(
                        f"Page {page_number} out of range (1..{len(pdf.pages)})"
                    )
                page = pdf.pages[page_number - 1]
                rendered = page.to_image(resolution=_POINTS_PER_INCH * scale)
                return PageImage.from_pil(rendered.original)
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber rendering failed: {exc}") from exc
