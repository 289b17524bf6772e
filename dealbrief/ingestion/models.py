from dataclasses import dataclass, field
from enum import Enum


class DocumentStatus(str, Enum):
    PROCESSING = "processing"
    READY = "ready"
    ERROR = "error"


@dataclass
class UploadedDocument:
    """A user-selected file and the text extracted from it.

    ``name`` is the identity within a session. ``content`` is owned by the
    ingestion orchestrator and released once extraction finishes.
    """

    name: str
    content: bytes
    mime_type: str = ""
    status: DocumentStatus = DocumentStatus.PROCESSING
    text: str = ""
    error_message: str = ""
    size_bytes: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self.size_bytes = len(self.content)

    @property
    def is_ready(self) -> bool:
        return self.status is DocumentStatus.READY

    def mark_ready(self, text: str) -> None:
        self.status = DocumentStatus.READY
        self.text = text
        self.error_message = ""
        self.content = b""

    def mark_error(self, message: str) -> None:
        self.status = DocumentStatus.ERROR
        self.text = ""
        self.error_message = message
        self.content = b""
