import io

from docx import Document

from dealbrief.office.exceptions import OfficeExtractionError


class DocxTextExtractor:
    """Extracts raw paragraph text from a .docx container using python-docx."""

    def extract(self, docx_bytes: bytes) -> str:
        try:
            document = Document(io.BytesIO(docx_bytes))
        except Exception as exc:
            raise OfficeExtractionError(f"docx extraction failed: {exc}") from exc
        return "\n".join(paragraph.text for paragraph in document.paragraphs)
