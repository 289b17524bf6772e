import base64

import httpx
import openai

from dealbrief.recognition.base import BaseRecognitionClient
from dealbrief.recognition.exceptions import RecognitionError, RecognitionNetworkError

TRANSCRIPTION_PROMPT = (
    "Act as a high-precision OCR engine. "
    "Extract ALL text from this image exactly as written. "
    "Maintain the layout. Output ONLY the text."
)


class OpenAIRecognitionAdapter(BaseRecognitionClient):
    """Recognition client built on an OpenAI-compatible vision chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        model: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._model = model
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    async def recognize(self, image_bytes: bytes, mime_type: str) -> str:
        encoded = base64.b64encode(image_bytes).decode("ascii")
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                temperature=0.0,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image_url",
                                "image_url": {"url": f"data:{mime_type};base64,{encoded}"},
                            },
                            {"type": "text", "text": TRANSCRIPTION_PROMPT},
                        ],
                    }
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise RecognitionNetworkError(
                f"Recognition provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise RecognitionNetworkError(
                f"Recognition provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise RecognitionError("Recognition provider returned no choices")
        return response.choices[0].message.content or ""
