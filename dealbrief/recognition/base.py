from abc import ABC, abstractmethod


class BaseRecognitionClient(ABC):
    """Contract for provider-specific image text recognition clients."""

    @abstractmethod
    async def recognize(self, image_bytes: bytes, mime_type: str) -> str:
        """Transcribe the text of one encoded still image.

        Args:
            image_bytes: Encoded raster (PNG, JPEG, ...).
            mime_type: Declared MIME type of ``image_bytes``.

        Returns:
            Transcribed text in reading order. Empty when nothing was found.

        Raises:
            RecognitionError: on any provider failure.
        """
