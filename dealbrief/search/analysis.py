"""Strategic meeting analysis over every ready document."""

import dataclasses
import json
from collections.abc import AsyncIterator

from dealbrief.generation.base import BaseGenerationClient
from dealbrief.ingestion.registry import DocumentRegistry
from dealbrief.logging.logger import Log
from dealbrief.search.analysis_models import StrategicAnalysis
from dealbrief.search.cache import session_fingerprint
from dealbrief.search.context import MeetingContext
from dealbrief.search.exceptions import SearchError
from dealbrief.search.prompt_loader import load_prompt
from dealbrief.search.validator import validate_analysis, validate_explanation
from dealbrief.streaming.aggregator import collect_final


class StrategicAnalyzer:
    """Builds the buyer snapshot, competitor profiles and coaching for a meeting.

    The last analysis is remembered and returned again while neither the
    ready documents nor the context nor the model configuration changed.
    """

    def __init__(
        self,
        *,
        client: BaseGenerationClient,
        registry: DocumentRegistry,
        model: str,
        temperature: float = 0.2,
        context: MeetingContext | None = None,
    ) -> None:
        self._client = client
        self._registry = registry
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self.context = context or MeetingContext()
        self._prompt_template = load_prompt("analysis_prompt.txt")
        self._json_schema = load_prompt("analysis_schema.json")
        self._explanation_template = load_prompt("explanation_prompt.txt")
        self._system_template = load_prompt("system_prompt.txt")
        self._last: tuple[str, StrategicAnalysis] | None = None

    async def analyze(self) -> StrategicAnalysis:
        """Analyze the ready documents for the current meeting context.

        Raises:
            SearchError: if no document is ready.
            GenerationError: if the provider stream fails.
            StreamParseError: if the completed stream cannot be parsed.
            SearchValidationError: if the parsed response has the wrong shape.
        """
        if self._registry.ready_count == 0:
            raise SearchError("No ready documents to analyze")
        fingerprint = session_fingerprint(
            self._registry, self.context, self._model, self._temperature
        )
        if self._last is not None and self._last[0] == fingerprint:
            Log.info("Analysis unchanged since last run")
            return self._last[1]

        prompt = self._prompt_template.format(
            documents=self._registry.combined_content(),
            json_schema=self._json_schema,
            **self.context.prompt_fields(),
        )
        Log.debug(f"Analysis prompt:\n{prompt}")
        analysis = validate_analysis(await collect_final(self._stream(prompt)))
        self._last = (fingerprint, analysis)
        Log.info(
            f"Analysis complete: {len(analysis.ground_matrix)} truths, "
            f"{len(analysis.competitors)} competitors"
        )
        return analysis

    async def explain(self, question: str, analysis: StrategicAnalysis) -> str:
        """Explain the sales strategy behind ``question`` for the analysed buyer."""
        question = question.strip()
        if not question:
            raise SearchError("Question must not be empty")
        snapshot = json.dumps(dataclasses.asdict(analysis.snapshot), indent=2)
        prompt = self._explanation_template.format(
            question=question,
            snapshot=snapshot,
            **self.context.prompt_fields(),
        )
        return validate_explanation(await collect_final(self._stream(prompt)))

    def _stream(self, prompt: str) -> AsyncIterator[str]:
        system_prompt = self._system_template.format(
            base_directive=self.context.base_directive(),
            **self.context.prompt_fields(),
        )
        return self._client.stream(
            model=self._model,
            temperature=self._temperature,
            system_prompt=system_prompt,
            user_prompt=prompt,
        )
