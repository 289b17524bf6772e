import asyncio
from collections.abc import Iterable

from dealbrief.extraction.events import ExtractionObserver
from dealbrief.extraction.extractor import DocumentExtractor
from dealbrief.ingestion.models import UploadedDocument
from dealbrief.ingestion.registry import DocumentRegistry
from dealbrief.logging.logger import Log


class IngestionOrchestrator:
    """Moves each uploaded document from processing to ready or error.

    Every document is registered as processing before any extraction starts.
    A failure is confined to its own document.
    """

    def __init__(
        self,
        extractor: DocumentExtractor,
        registry: DocumentRegistry,
        *,
        concurrency: int = 1,
        observer: ExtractionObserver | None = None,
    ) -> None:
        self._extractor = extractor
        self._registry = registry
        self._concurrency = max(1, concurrency)
        self._observer = observer

    async def ingest(self, files: Iterable[UploadedDocument]) -> list[UploadedDocument]:
        documents = [self._registry.add(document) for document in files]
        Log.info(f"Ingesting {len(documents)} document(s)")

        if self._concurrency == 1:
            for document in documents:
                await self._run(document)
        else:
            semaphore = asyncio.Semaphore(self._concurrency)

            async def bounded(document: UploadedDocument) -> None:
                async with semaphore:
                    await self._run(document)

            await asyncio.gather(*(bounded(document) for document in documents))

        return documents

    async def _run(self, document: UploadedDocument) -> None:
        """Extract a single document with error handling."""
        Log.info(f"Extracting {document.name} ({document.size_bytes} bytes)")
        try:
            text = await self._extractor.extract(document, self._observer)
        except Exception as exc:
            self._handle_failure(document, exc)
            return
        document.mark_ready(text)
        Log.info(f"Document {document.name} ready: {len(text)} chars")

    def _handle_failure(self, document: UploadedDocument, exc: Exception) -> None:
        document.mark_error(str(exc) or type(exc).__name__)
        Log.error(f"Document {document.name} failed: {document.error_message}")
