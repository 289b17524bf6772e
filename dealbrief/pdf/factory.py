from typing import ClassVar

from dealbrief.config.settings import Settings
from dealbrief.logging.logger import Log
from dealbrief.pdf.base import BasePdfExtractor
from dealbrief.pdf.pdfplumber_adapter import PdfPlumberAdapter
from dealbrief.pdf.pymupdf_adapter import PyMuPdfAdapter


class PdfExtractorFactory:
    """Selects the PDF text and rendering engine named by ``pdf_engine``."""

    ENGINES: ClassVar[dict[str, type[BasePdfExtractor]]] = {
        "pymupdf": PyMuPdfAdapter,
        "pdfplumber": PdfPlumberAdapter,
    }

    @classmethod
    def supported(cls) -> list[str]:
        return sorted(cls.ENGINES)

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.strip().lower()
        if engine not in cls.ENGINES:
            raise ValueError(
                f"Unsupported pdf_engine '{settings.pdf_engine}' (PDF_ENGINE); "
                f"expected one of {cls.supported()}"
            )
        Log.debug(f"Using PDF engine '{engine}'")
        return cls.ENGINES[engine]()
