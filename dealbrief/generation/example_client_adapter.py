"""Example generation client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseGenerationClient and register the provider in
GenerationClientFactory.
"""

import json
from collections.abc import AsyncIterator, Sequence
from typing import ClassVar

from dealbrief.generation.base import BaseGenerationClient
from dealbrief.generation.models import GenerationMessage


class ExampleGenerationAdapter(BaseGenerationClient):
    """Example adapter that streams a fixed valid JSON document.

    The default document carries the keys of every request type (search,
    suggestions, analysis, explanation), so each of them validates.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "articularSoundbite": "Grounded answers win the room.",
        "briefExplanation": "Example response streamed without a provider.",
        "answer": "### Summary\nNo provider is configured.",
        "psychologicalProjection": {
            "buyerFear": "Unproven claims",
            "buyerIncentive": "Evidence",
            "strategicLever": "Cite the source documents",
        },
        "citations": [],
        "reasoningChain": {
            "painPoint": "Unknown",
            "capability": "Unknown",
            "strategicValue": "Unknown",
        },
        "questions": ["Which outcome matters most this quarter?"],
        "explanation": "Example explanation streamed without a provider.",
        "snapshot": {"role": "Unknown", "tone": "Neutral"},
        "groundMatrix": [],
    }

    def __init__(self, response: object | None = None, fragment_size: int = 16) -> None:
        payload = self.DEFAULT_RESPONSE if response is None else response
        self._text = payload if isinstance(payload, str) else json.dumps(payload)
        self._fragment_size = max(1, fragment_size)
        self.calls = 0

    async def stream(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        history: Sequence[GenerationMessage] = (),
    ) -> AsyncIterator[str]:
        _ = model, temperature, system_prompt, user_prompt, history
        self.calls += 1
        for start in range(0, len(self._text), self._fragment_size):
            yield self._text[start:start + self._fragment_size]
