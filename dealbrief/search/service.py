"""Question answering over the ready documents with a live streamed preview."""

from collections.abc import AsyncIterator, Sequence
from pathlib import Path

from dealbrief.generation.base import BaseGenerationClient
from dealbrief.generation.models import GenerationMessage
from dealbrief.ingestion.registry import DocumentRegistry
from dealbrief.logging.logger import Log
from dealbrief.search.cache import ResponseCache, session_fingerprint
from dealbrief.search.context import MeetingContext
from dealbrief.search.exceptions import SearchError
from dealbrief.search.models import CognitiveSearchResult, SearchUpdate
from dealbrief.search.prompt_loader import load_prompt
from dealbrief.search.validator import validate_and_build, validate_suggestions
from dealbrief.streaming.aggregator import StreamAggregator, collect_final
from dealbrief.streaming.models import StreamSnapshot

STREAMED_FIELDS = ("answer", "articularSoundbite", "briefExplanation")


class CognitiveSearch:
    """Answers questions against the session's ready documents.

    ``context`` may be replaced between searches; answers cached under a
    different context are never served.
    """

    def __init__(
        self,
        *,
        client: BaseGenerationClient,
        registry: DocumentRegistry,
        cache: ResponseCache[CognitiveSearchResult],
        model: str,
        temperature: float = 0.2,
        context: MeetingContext | None = None,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._registry = registry
        self._cache = cache
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self.context = context or MeetingContext()
        self._prompt_template = load_prompt("search_prompt.txt", prompt_template_path)
        self._json_schema = load_prompt("search_schema.json", json_schema_path)
        self._system_template = load_prompt("system_prompt.txt")
        self._suggest_template = load_prompt("suggest_prompt.txt")

    async def search(
        self,
        question: str,
        history: Sequence[GenerationMessage] = (),
    ) -> AsyncIterator[SearchUpdate]:
        """Yield a preview update per fragment, then one final update.

        Raises:
            SearchError: if the question is empty or no document is ready.
            GenerationError: if the provider stream fails.
            StreamParseError: if the completed stream cannot be parsed.
            SearchValidationError: if the parsed response has the wrong shape.
        """
        question = question.strip()
        self._require_ready(question)
        fingerprint = session_fingerprint(
            self._registry, self.context, self._model, self._temperature
        )

        cached = self._cache.get(question, fingerprint)
        if cached is not None:
            Log.info("Search served from cache")
            yield SearchUpdate(snapshot=_snapshot_of(cached), result=cached, cached=True)
            return

        prompt = self._prompt_template.format(
            question=question,
            documents=self._registry.combined_content(),
            json_schema=self._json_schema,
            **self.context.prompt_fields(),
        )
        Log.debug(f"Search prompt:\n{prompt}")

        aggregator = StreamAggregator(STREAMED_FIELDS)
        fragments = self._client.stream(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt(),
            user_prompt=prompt,
            history=history,
        )
        async for snapshot in aggregator.consume(fragments):
            yield SearchUpdate(snapshot=snapshot)

        Log.debug(f"Search raw response:\n{aggregator.buffer}")
        result = validate_and_build(aggregator.finalize().unwrap())
        self._cache.put(question, fingerprint, result)
        Log.info(f"Search complete: {len(result.answer)} chars, {len(result.citations)} citations")
        yield SearchUpdate(snapshot=_snapshot_of(result), result=result)

    async def ask(
        self,
        question: str,
        history: Sequence[GenerationMessage] = (),
    ) -> CognitiveSearchResult:
        """Run a search to completion and return only the final result."""
        result: CognitiveSearchResult | None = None
        async for update in self.search(question, history):
            if update.result is not None:
                result = update.result
        if result is None:
            raise SearchError("Search ended without a result")
        return result

    async def suggest_questions(self) -> list[str]:
        """Ask for a few strategic questions grounded in the ready documents."""
        if self._registry.ready_count == 0:
            return []
        prompt = self._suggest_template.format(
            documents=self._registry.combined_content(),
            **self.context.prompt_fields(),
        )
        data = await collect_final(
            self._client.stream(
                model=self._model,
                temperature=self._temperature,
                system_prompt=self._system_prompt(),
                user_prompt=prompt,
            )
        )
        return validate_suggestions(data)

    def _system_prompt(self) -> str:
        return self._system_template.format(
            base_directive=self.context.base_directive(),
            **self.context.prompt_fields(),
        )

    def _require_ready(self, question: str) -> None:
        if not question:
            raise SearchError("Question must not be empty")
        if self._registry.ready_count == 0:
            raise SearchError("No ready documents to search")


def _snapshot_of(result: CognitiveSearchResult) -> StreamSnapshot:
    fields = {
        "answer": result.answer,
        "articularSoundbite": result.articular_soundbite,
        "briefExplanation": result.brief_explanation,
    }
    return StreamSnapshot(fields={k: v for k, v in fields.items() if v})
