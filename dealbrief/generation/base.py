from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence

from dealbrief.generation.models import GenerationMessage


class BaseGenerationClient(ABC):
    """Contract for provider-specific streaming generation clients."""

    @abstractmethod
    def stream(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        history: Sequence[GenerationMessage] = (),
    ) -> AsyncIterator[str]:
        """Yield text fragments whose concatenation is one JSON document.

        Raises:
            GenerationError: on any provider failure, possibly mid-stream.
        """
