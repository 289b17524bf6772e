"""Status channel for long-running extractions.

Two signals are published per document: fractional progress in [0, 100]
and whether remote recognition is currently running.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum


class EventKind(str, Enum):
    PROGRESS = "progress"
    RECOGNITION_ACTIVE = "recognition_active"


@dataclass(frozen=True)
class ExtractionEvent:
    document_name: str
    kind: EventKind
    value: int | bool


class ExtractionObserver:
    """Receives extraction status signals. Default implementation ignores them."""

    def on_progress(self, document_name: str, percent: int) -> None:
        pass

    def on_recognition_active(self, document_name: str, active: bool) -> None:
        pass


class NullObserver(ExtractionObserver):
    pass


class QueueObserver(ExtractionObserver):
    """Publishes every signal onto an asyncio queue for asynchronous consumers."""

    def __init__(self, queue: asyncio.Queue[ExtractionEvent] | None = None) -> None:
        self.queue: asyncio.Queue[ExtractionEvent] = queue if queue is not None else asyncio.Queue()

    def on_progress(self, document_name: str, percent: int) -> None:
        self.queue.put_nowait(ExtractionEvent(document_name, EventKind.PROGRESS, percent))

    def on_recognition_active(self, document_name: str, active: bool) -> None:
        self.queue.put_nowait(
            ExtractionEvent(document_name, EventKind.RECOGNITION_ACTIVE, active)
        )

    def drain(self) -> list[ExtractionEvent]:
        """Return and remove every event currently queued."""
        events: list[ExtractionEvent] = []
        while not self.queue.empty():
            events.append(self.queue.get_nowait())
        return events
