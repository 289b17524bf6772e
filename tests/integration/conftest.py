import pytest

from dealbrief.extraction.extractor import DocumentExtractor
from dealbrief.pdf.pymupdf_adapter import PyMuPdfAdapter
from dealbrief.recognition.example_client_adapter import ExampleRecognitionAdapter


@pytest.fixture()
def recognition() -> ExampleRecognitionAdapter:
    return ExampleRecognitionAdapter(text="scanned words")


@pytest.fixture()
def extractor(recognition: ExampleRecognitionAdapter) -> DocumentExtractor:
    """Real PDF and image stack, with recognition answered locally."""
    return DocumentExtractor(
        pdf_extractor=PyMuPdfAdapter(),
        recognition_client=recognition,
        render_scale=1.0,
    )
