from unittest.mock import AsyncMock, MagicMock

import numpy as np
import pytest

from dealbrief.extraction.events import EventKind, QueueObserver
from dealbrief.extraction.exceptions import UnreadableImageError
from dealbrief.extraction.extractor import DocumentExtractor, ExtractionRoute, route
from dealbrief.imaging.models import PageImage
from dealbrief.ingestion.models import UploadedDocument
from dealbrief.office.docx_extractor import DocxTextExtractor
from dealbrief.pdf.base import BasePdfExtractor
from dealbrief.recognition.exceptions import RecognitionNetworkError


def _make_extractor(
    page_texts: list[str] | None = None,
    recognized: list[str] | None = None,
) -> tuple[DocumentExtractor, MagicMock, AsyncMock]:
    pdf_extractor = MagicMock(spec=BasePdfExtractor)
    pdf_extractor.page_texts.return_value = page_texts or []
    pdf_extractor.render_page.side_effect = lambda *_: PageImage(
        width=4, height=4, pixels=np.full((4, 4, 4), 255, dtype=np.uint8)
    )
    recognition = AsyncMock()
    recognition.recognize.side_effect = recognized or ["text"] * 10
    extractor = DocumentExtractor(
        pdf_extractor=pdf_extractor,
        recognition_client=recognition,
        offload=False,
    )
    return extractor, pdf_extractor, recognition


def _doc(name: str, content: bytes = b"", mime_type: str = "") -> UploadedDocument:
    return UploadedDocument(name=name, content=content, mime_type=mime_type)


class TestRoute:
    def test_pdf_mime(self) -> None:
        assert route("upload", "application/pdf") is ExtractionRoute.PDF

    def test_uppercase_pdf_extension_without_mime(self) -> None:
        assert route("report.PDF", "") is ExtractionRoute.PDF

    def test_image_mime_without_extension(self) -> None:
        assert route("capture", "image/png") is ExtractionRoute.IMAGE

    def test_pdf_wins_over_image_mime(self) -> None:
        assert route("scan.pdf", "image/jpeg") is ExtractionRoute.PDF

    def test_docx_extension(self) -> None:
        assert route("Proposal.DOCX", "application/octet-stream") is ExtractionRoute.DOCX

    def test_image_mime_wins_over_docx_name(self) -> None:
        assert route("photo.docx", "image/png") is ExtractionRoute.IMAGE

    @pytest.mark.parametrize("name", ["notes.txt", "data.csv", "readme.md", "blob"])
    def test_falls_back_to_text(self, name: str) -> None:
        assert route(name, "") is ExtractionRoute.TEXT


class TestTextPath:
    async def test_decodes_utf8(self) -> None:
        extractor, _pdf, recognition = _make_extractor()
        text = await extractor.extract(_doc("notes.txt", "Grüße".encode("utf-8")))
        assert text == "Grüße"
        recognition.recognize.assert_not_called()

    async def test_strips_byte_order_mark(self) -> None:
        extractor, _pdf, _rec = _make_extractor()
        text = await extractor.extract(_doc("notes.csv", b"\xef\xbb\xbfa,b"))
        assert text == "a,b"

    async def test_replaces_invalid_bytes(self) -> None:
        extractor, _pdf, _rec = _make_extractor()
        text = await extractor.extract(_doc("blob", b"ok\xff"))
        assert text.startswith("ok")


class TestDocxPath:
    async def test_delegates_to_office_helper(self) -> None:
        docx = MagicMock(spec=DocxTextExtractor)
        docx.extract.return_value = "from docx"
        extractor = DocumentExtractor(
            pdf_extractor=MagicMock(spec=BasePdfExtractor),
            recognition_client=AsyncMock(),
            docx_extractor=docx,
            offload=False,
        )
        text = await extractor.extract(_doc("deal.docx", b"PK..."))
        assert text == "from docx"
        docx.extract.assert_called_once_with(b"PK...")


class TestPdfEmbeddedText:
    async def test_returns_embedded_text_when_dense(self) -> None:
        pages = ["a" * 60, "b" * 60, "c" * 60]
        extractor, pdf, recognition = _make_extractor(page_texts=pages)
        text = await extractor.extract(_doc("deck.pdf", b"%PDF"))
        assert text == "\n".join(pages)
        pdf.render_page.assert_not_called()
        recognition.recognize.assert_not_called()

    async def test_embedded_text_keeps_surrounding_whitespace(self) -> None:
        pages = ["\n  " + "a" * 60 + "  ", "b" * 60 + "\n\n"]
        extractor, _pdf, recognition = _make_extractor(page_texts=pages)
        text = await extractor.extract(_doc("deck.pdf", b"%PDF"))
        assert text == "\n  " + "a" * 60 + "  \n" + "b" * 60 + "\n\n"
        recognition.recognize.assert_not_called()

    async def test_no_signals_when_embedded_text_used(self) -> None:
        extractor, _pdf, _rec = _make_extractor(page_texts=["a" * 200])
        observer = QueueObserver()
        await extractor.extract(_doc("deck.pdf", b"%PDF"), observer)
        assert observer.drain() == []


class TestPdfRecognitionFallback:
    async def test_sparse_text_triggers_recognition_per_page(self) -> None:
        extractor, pdf, recognition = _make_extractor(
            page_texts=["", "x", ""],
            recognized=["first", "second", "third"],
        )
        text = await extractor.extract(_doc("scan.pdf", b"%PDF"))
        assert text == (
            "--- PAGE 1 ---\nfirst\n\n"
            "--- PAGE 2 ---\nsecond\n\n"
            "--- PAGE 3 ---\nthird\n\n"
        )
        assert [c.args[1] for c in pdf.render_page.call_args_list] == [1, 2, 3]
        assert recognition.recognize.await_count == 3

    async def test_renders_at_configured_scale(self) -> None:
        extractor, pdf, _rec = _make_extractor(page_texts=[""])
        await extractor.extract(_doc("scan.pdf", b"%PDF"))
        pdf.render_page.assert_called_once_with(b"%PDF", 1, 4.0)

    async def test_sends_png_to_recognition(self) -> None:
        extractor, _pdf, recognition = _make_extractor(page_texts=[""])
        await extractor.extract(_doc("scan.pdf", b"%PDF"))
        image_bytes, mime_type = recognition.recognize.await_args.args
        assert image_bytes.startswith(b"\x89PNG")
        assert mime_type == "image/png"

    async def test_publishes_progress_and_status(self) -> None:
        extractor, _pdf, _rec = _make_extractor(page_texts=["", "", ""])
        observer = QueueObserver()
        await extractor.extract(_doc("scan.pdf", b"%PDF"), observer)
        events = [(e.kind, e.value) for e in observer.drain()]
        assert events == [
            (EventKind.RECOGNITION_ACTIVE, True),
            (EventKind.PROGRESS, 33),
            (EventKind.PROGRESS, 67),
            (EventKind.PROGRESS, 100),
            (EventKind.PROGRESS, 0),
            (EventKind.RECOGNITION_ACTIVE, False),
        ]

    async def test_recognition_failure_fails_whole_document(self) -> None:
        extractor, _pdf, recognition = _make_extractor(page_texts=["", ""])
        recognition.recognize.side_effect = ["page one", RecognitionNetworkError("down")]
        observer = QueueObserver()
        with pytest.raises(RecognitionNetworkError):
            await extractor.extract(_doc("scan.pdf", b"%PDF"), observer)
        events = [(e.kind, e.value) for e in observer.drain()]
        assert events[-2:] == [
            (EventKind.PROGRESS, 0),
            (EventKind.RECOGNITION_ACTIVE, False),
        ]


class TestImagePath:
    async def test_recognizes_preprocessed_image(self, png_bytes: bytes) -> None:
        extractor, _pdf, recognition = _make_extractor(recognized=["whiteboard"])
        text = await extractor.extract(_doc("photo", png_bytes, "image/png"))
        assert text == "whiteboard"
        image_bytes, mime_type = recognition.recognize.await_args.args
        assert image_bytes.startswith(b"\x89PNG")
        assert mime_type == "image/png"

    async def test_signals_recognition_for_duration(self, png_bytes: bytes) -> None:
        extractor, _pdf, _rec = _make_extractor()
        observer = QueueObserver()
        await extractor.extract(_doc("photo.jpg", png_bytes, "image/jpeg"), observer)
        events = [(e.kind, e.value) for e in observer.drain()]
        assert events == [
            (EventKind.RECOGNITION_ACTIVE, True),
            (EventKind.RECOGNITION_ACTIVE, False),
        ]

    async def test_undecodable_image_raises(self) -> None:
        extractor, _pdf, recognition = _make_extractor()
        with pytest.raises(UnreadableImageError):
            await extractor.extract(_doc("photo.png", b"not an image", "image/png"))
        recognition.recognize.assert_not_called()
