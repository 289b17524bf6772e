import hashlib

from dealbrief.ingestion.models import DocumentStatus, UploadedDocument


class DocumentRegistry:
    """Session-scoped, name-keyed store of uploaded documents."""

    def __init__(self) -> None:
        self._documents: dict[str, UploadedDocument] = {}

    def add(self, document: UploadedDocument) -> UploadedDocument:
        """Register a document, replacing any earlier one with the same name."""
        self._documents[document.name] = document
        return document

    def get(self, name: str) -> UploadedDocument | None:
        return self._documents.get(name)

    def remove(self, name: str) -> bool:
        return self._documents.pop(name, None) is not None

    def clear(self) -> None:
        self._documents.clear()

    def all(self) -> list[UploadedDocument]:
        return list(self._documents.values())

    def ready(self) -> list[UploadedDocument]:
        return [d for d in self._documents.values() if d.status is DocumentStatus.READY]

    def processing(self) -> list[UploadedDocument]:
        return [d for d in self._documents.values() if d.status is DocumentStatus.PROCESSING]

    @property
    def ready_count(self) -> int:
        return len(self.ready())

    @property
    def is_busy(self) -> bool:
        return bool(self.processing())

    def combined_content(self) -> str:
        """Concatenate ready documents for a prompt, one labelled block per file."""
        return "\n\n".join(f"FILE: {d.name}\n{d.text}" for d in self.ready())

    def fingerprint(self) -> str:
        """Stable digest of the ready document set and its extracted text."""
        digest = hashlib.sha256()
        for document in sorted(self.ready(), key=lambda d: d.name):
            digest.update(document.name.encode("utf-8"))
            digest.update(b"\x00")
            digest.update(document.text.encode("utf-8"))
            digest.update(b"\x00")
        return digest.hexdigest()
