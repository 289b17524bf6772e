"""Best-available plain text for an uploaded file.

Dispatch, first match wins:
1. PDF (by MIME type or ``.pdf`` name) -> embedded text layer, falling back
   to page-by-page recognition when the layer is too sparse.
2. ``image/*`` -> recognition of the preprocessed image.
3. ``.docx`` -> office-document helper.
4. Anything else -> UTF-8 decode.
"""

import asyncio
from collections.abc import Callable
from enum import Enum
from typing import TypeVar

from dealbrief.extraction.decision import (
    MIN_CHARS_PER_PAGE,
    needs_recognition,
    progress_percent,
)
from dealbrief.extraction.events import ExtractionObserver, NullObserver
from dealbrief.extraction.exceptions import UnreadableImageError
from dealbrief.imaging.models import PageImage
from dealbrief.imaging.preprocessor import ImagePreprocessor
from dealbrief.ingestion.models import UploadedDocument
from dealbrief.logging.logger import Log
from dealbrief.office.docx_extractor import DocxTextExtractor
from dealbrief.pdf.base import BasePdfExtractor
from dealbrief.recognition.base import BaseRecognitionClient

PDF_MIME_TYPES = frozenset({"application/pdf", "application/x-pdf"})
RECOGNITION_MIME_TYPE = "image/png"
DEFAULT_RENDER_SCALE = 4.0

T = TypeVar("T")


class ExtractionRoute(str, Enum):
    PDF = "pdf"
    IMAGE = "image"
    DOCX = "docx"
    TEXT = "text"


def route(name: str, mime_type: str) -> ExtractionRoute:
    """Pick the extraction path for a file."""
    lowered_name = name.lower()
    lowered_mime = (mime_type or "").lower()
    if lowered_mime in PDF_MIME_TYPES or lowered_name.endswith(".pdf"):
        return ExtractionRoute.PDF
    if lowered_mime.startswith("image/"):
        return ExtractionRoute.IMAGE
    if lowered_name.endswith(".docx"):
        return ExtractionRoute.DOCX
    return ExtractionRoute.TEXT


class DocumentExtractor:
    """Extracts text from one document at a time.

    Failures propagate to the caller; the ingestion orchestrator decides what
    a failure means for the document.
    """

    def __init__(
        self,
        *,
        pdf_extractor: BasePdfExtractor,
        recognition_client: BaseRecognitionClient,
        preprocessor: ImagePreprocessor | None = None,
        docx_extractor: DocxTextExtractor | None = None,
        render_scale: float = DEFAULT_RENDER_SCALE,
        min_chars_per_page: int = MIN_CHARS_PER_PAGE,
        offload: bool = True,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._recognition = recognition_client
        self._preprocessor = preprocessor or ImagePreprocessor()
        self._docx_extractor = docx_extractor or DocxTextExtractor()
        self._render_scale = render_scale
        self._min_chars_per_page = min_chars_per_page
        self._offload = offload

    async def extract(
        self,
        document: UploadedDocument,
        observer: ExtractionObserver | None = None,
    ) -> str:
        observer = observer or NullObserver()
        path = route(document.name, document.mime_type)
        Log.debug(f"Routing {document.name} ({document.mime_type or 'unknown'}) to {path.value}")

        if path is ExtractionRoute.PDF:
            return await self._extract_pdf(document.name, document.content, observer)
        if path is ExtractionRoute.IMAGE:
            return await self._extract_image(document.name, document.content, observer)
        if path is ExtractionRoute.DOCX:
            return await self._run_sync(self._docx_extractor.extract, document.content)
        return document.content.decode("utf-8-sig", errors="replace")

    async def _extract_pdf(
        self,
        name: str,
        content: bytes,
        observer: ExtractionObserver,
    ) -> str:
        pages = await self._run_sync(self._pdf_extractor.page_texts, content)
        embedded = "\n".join(pages)
        page_count = len(pages)

        if not needs_recognition(embedded, page_count, self._min_chars_per_page):
            Log.info(f"Using embedded text layer of {name}: {len(embedded)} chars, {page_count} pages")
            return embedded

        Log.info(
            f"Embedded text layer of {name} too sparse "
            f"({len(embedded)} chars over {page_count} pages), running recognition"
        )
        observer.on_recognition_active(name, True)
        try:
            parts: list[str] = []
            for page_number in range(1, page_count + 1):
                image_bytes = await self._run_sync(self._render_for_recognition, content, page_number)
                page_text = await self._recognition.recognize(image_bytes, RECOGNITION_MIME_TYPE)
                parts.append(f"--- PAGE {page_number} ---\n{page_text}\n\n")
                observer.on_progress(name, progress_percent(page_number, page_count))
                Log.debug(f"Recognized page {page_number}/{page_count} of {name}: {len(page_text)} chars")
            return "".join(parts)
        finally:
            observer.on_progress(name, 0)
            observer.on_recognition_active(name, False)

    async def _extract_image(
        self,
        name: str,
        content: bytes,
        observer: ExtractionObserver,
    ) -> str:
        observer.on_recognition_active(name, True)
        try:
            image_bytes = await self._run_sync(self._prepare_upload, content)
            text = await self._recognition.recognize(image_bytes, RECOGNITION_MIME_TYPE)
            Log.info(f"Recognized image {name}: {len(text)} chars")
            return text
        finally:
            observer.on_recognition_active(name, False)

    def _render_for_recognition(self, content: bytes, page_number: int) -> bytes:
        image = self._pdf_extractor.render_page(content, page_number, self._render_scale)
        self._preprocessor.preprocess(image)
        return image.to_png_bytes()

    def _prepare_upload(self, content: bytes) -> bytes:
        try:
            image = PageImage.from_bytes(content)
        except (OSError, ValueError) as exc:
            raise UnreadableImageError(f"Cannot decode image: {exc}") from exc
        self._preprocessor.preprocess(image)
        return image.to_png_bytes()

    async def _run_sync(self, func: Callable[..., T], *args: object) -> T:
        if self._offload:
            return await asyncio.to_thread(func, *args)
        return func(*args)
