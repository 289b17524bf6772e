import pymupdf
from PIL import Image

from dealbrief.imaging.models import PageImage
from dealbrief.pdf.base import BasePdfExtractor
from dealbrief.pdf.exceptions import PdfExtractionError


class PyMuPdfAdapter(BasePdfExtractor):
    """Extracts and renders PDF pages using PyMuPDF."""

    def page_texts(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return [
                    " ".join(word[4] for word in page.get_text("words"))
                    for page in doc
                ]
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc

    def render_page(self, pdf_bytes: bytes, page_number: int, scale: float) -> PageImage:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                if not 1 <= page_number <= doc.page_count:
                    raise PdfExtractionError(
                        f"Page {page_number} out of range (1..{doc.page_count})"
                    )
                page = doc.load_page(page_number - 1)
                pix = page.get_pixmap(matrix=pymupdf.Matrix(scale, scale), alpha=False)
                image = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
            return PageImage.from_pil(image)
        except PdfExtractionError:
            raise
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf rendering failed: {exc}") from exc
