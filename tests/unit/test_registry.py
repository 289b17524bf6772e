from dealbrief.ingestion.models import DocumentStatus, UploadedDocument
from dealbrief.ingestion.registry import DocumentRegistry


def _ready(name: str, text: str) -> UploadedDocument:
    document = UploadedDocument(name=name, content=b"raw")
    document.mark_ready(text)
    return document


class TestUploadedDocument:
    def test_defaults_to_processing(self) -> None:
        document = UploadedDocument(name="a.txt", content=b"abc")
        assert document.status is DocumentStatus.PROCESSING
        assert document.size_bytes == 3
        assert not document.is_ready

    def test_mark_ready(self) -> None:
        document = _ready("a.txt", "hello")
        assert document.is_ready
        assert document.text == "hello"
        assert document.content == b""

    def test_mark_error_clears_text(self) -> None:
        document = _ready("a.txt", "hello")
        document.mark_error("bad")
        assert document.status is DocumentStatus.ERROR
        assert document.text == ""
        assert document.error_message == "bad"


class TestDocumentRegistry:
    def test_add_replaces_same_name(self) -> None:
        registry = DocumentRegistry()
        registry.add(_ready("a.txt", "old"))
        registry.add(_ready("a.txt", "new"))
        assert len(registry.all()) == 1
        assert registry.get("a.txt").text == "new"  # type: ignore[union-attr]

    def test_remove(self) -> None:
        registry = DocumentRegistry()
        registry.add(_ready("a.txt", "x"))
        assert registry.remove("a.txt") is True
        assert registry.remove("a.txt") is False
        assert registry.get("a.txt") is None

    def test_ready_and_processing_views(self) -> None:
        registry = DocumentRegistry()
        registry.add(_ready("a.txt", "x"))
        registry.add(UploadedDocument(name="b.pdf", content=b"%PDF"))
        failed = registry.add(UploadedDocument(name="c.png", content=b""))
        failed.mark_error("unreadable")

        assert [d.name for d in registry.ready()] == ["a.txt"]
        assert [d.name for d in registry.processing()] == ["b.pdf"]
        assert registry.ready_count == 1
        assert registry.is_busy

    def test_combined_content_skips_unready(self) -> None:
        registry = DocumentRegistry()
        registry.add(_ready("a.txt", "alpha"))
        registry.add(UploadedDocument(name="b.txt", content=b"pending"))
        registry.add(_ready("c.txt", "gamma"))
        assert registry.combined_content() == "FILE: a.txt\nalpha\n\nFILE: c.txt\ngamma"

    def test_combined_content_empty(self) -> None:
        assert DocumentRegistry().combined_content() == ""

    def test_fingerprint_ignores_insertion_order(self) -> None:
        first = DocumentRegistry()
        first.add(_ready("a.txt", "alpha"))
        first.add(_ready("b.txt", "beta"))
        second = DocumentRegistry()
        second.add(_ready("b.txt", "beta"))
        second.add(_ready("a.txt", "alpha"))
        assert first.fingerprint() == second.fingerprint()

    def test_fingerprint_changes_with_text(self) -> None:
        registry = DocumentRegistry()
        registry.add(_ready("a.txt", "alpha"))
        before = registry.fingerprint()
        registry.add(_ready("a.txt", "alpha v2"))
        assert registry.fingerprint() != before

    def test_clear(self) -> None:
        registry = DocumentRegistry()
        registry.add(_ready("a.txt", "x"))
        registry.clear()
        assert registry.all() == []
