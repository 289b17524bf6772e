"""Example recognition client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseRecognitionClient and register the provider in
RecognitionClientFactory.
"""

from typing import ClassVar

from dealbrief.recognition.base import BaseRecognitionClient


class ExampleRecognitionAdapter(BaseRecognitionClient):
    """Example adapter that returns a fixed transcription.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_TEXT: ClassVar[str] = "Recognized text"

    def __init__(self, text: str | None = None) -> None:
        self._text = self.DEFAULT_TEXT if text is None else text
        self.calls: list[tuple[int, str]] = []

    async def recognize(self, image_bytes: bytes, mime_type: str) -> str:
        self.calls.append((len(image_bytes), mime_type))
        return self._text
