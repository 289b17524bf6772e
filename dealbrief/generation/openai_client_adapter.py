from collections.abc import AsyncIterator, Sequence

import httpx
import openai

from dealbrief.generation.base import BaseGenerationClient
from dealbrief.generation.exceptions import GenerationNetworkError
from dealbrief.generation.models import GenerationMessage


class OpenAIGenerationAdapter(BaseGenerationClient):
    """Streaming generation client built on an OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    async def stream(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        history: Sequence[GenerationMessage] = (),
    ) -> AsyncIterator[str]:
        messages = [{"role": "system", "content": system_prompt}]
        messages.extend({"role": m.role, "content": m.content} for m in history)
        messages.append({"role": "user", "content": user_prompt})
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={"type": "json_object"},
                messages=messages,  # type: ignore[arg-type]
                stream=True,
            )
            async for chunk in response:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise GenerationNetworkError(
                f"Generation provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise GenerationNetworkError(
                f"Generation provider API error: {exc}"
            ) from exc
