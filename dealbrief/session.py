from collections.abc import Iterable

from dealbrief.config.settings import Settings
from dealbrief.extraction.events import ExtractionObserver
from dealbrief.extraction.extractor import DocumentExtractor
from dealbrief.generation.factory import GenerationClientFactory
from dealbrief.ingestion.models import UploadedDocument
from dealbrief.ingestion.orchestrator import IngestionOrchestrator
from dealbrief.ingestion.registry import DocumentRegistry
from dealbrief.logging.logger import Log
from dealbrief.pdf.factory import PdfExtractorFactory
from dealbrief.recognition.factory import RecognitionClientFactory
from dealbrief.search.analysis import StrategicAnalyzer
from dealbrief.search.cache import ResponseCache
from dealbrief.search.context import MeetingContext
from dealbrief.search.models import CognitiveSearchResult
from dealbrief.search.service import CognitiveSearch


class Session:
    """State that lives from startup to shutdown: documents, cache, services."""

    def __init__(
        self,
        *,
        registry: DocumentRegistry,
        cache: ResponseCache[CognitiveSearchResult],
        orchestrator: IngestionOrchestrator,
        search: CognitiveSearch,
        analyzer: StrategicAnalyzer,
    ) -> None:
        self.registry = registry
        self.cache = cache
        self.orchestrator = orchestrator
        self.search = search
        self.analyzer = analyzer

    @property
    def context(self) -> MeetingContext:
        return self.search.context

    def set_context(self, context: MeetingContext) -> None:
        """Switch the meeting context for every later search and analysis."""
        self.search.context = context
        self.analyzer.context = context
        self.cache.invalidate()
        Log.info(f"Meeting context set for {context.prospect} ({context.persona.value})")

    async def ingest(self, files: Iterable[UploadedDocument]) -> list[UploadedDocument]:
        documents = await self.orchestrator.ingest(files)
        self.cache.invalidate()
        return documents

    def remove(self, name: str) -> bool:
        removed = self.registry.remove(name)
        if removed:
            self.cache.invalidate()
            Log.info(f"Removed document {name}")
        return removed

    def close(self) -> None:
        self.cache.invalidate()
        self.registry.clear()


def build_session(
    settings: Settings,
    observer: ExtractionObserver | None = None,
    context: MeetingContext | None = None,
) -> Session:
    """Build a Session with all required adapters."""
    registry = DocumentRegistry()
    cache: ResponseCache[CognitiveSearchResult] = ResponseCache()
    context = context or MeetingContext()
    extractor = DocumentExtractor(
        pdf_extractor=PdfExtractorFactory.create(settings),
        recognition_client=RecognitionClientFactory.create(settings),
        render_scale=settings.pdf_render_scale,
        min_chars_per_page=settings.ocr_min_chars_per_page,
        offload=settings.offload_image_processing,
    )
    orchestrator = IngestionOrchestrator(
        extractor,
        registry,
        concurrency=settings.ingest_concurrency,
        observer=observer,
    )
    generation_client = GenerationClientFactory.create(settings)
    search = CognitiveSearch(
        client=generation_client,
        registry=registry,
        cache=cache,
        model=settings.generation_model_name,
        temperature=settings.generation_temperature,
        context=context,
    )
    analyzer = StrategicAnalyzer(
        client=generation_client,
        registry=registry,
        model=settings.generation_model_name,
        temperature=settings.generation_temperature,
        context=context,
    )
    return Session(
        registry=registry,
        cache=cache,
        orchestrator=orchestrator,
        search=search,
        analyzer=analyzer,
    )
