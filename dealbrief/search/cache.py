import hashlib
import json
from typing import Generic, TypeVar

from dealbrief.ingestion.registry import DocumentRegistry
from dealbrief.search.context import MeetingContext

V = TypeVar("V")


class ResponseCache(Generic[V]):
    """Deterministic response cache keyed by question and document fingerprint.

    Entries never expire by time; the owner invalidates the cache whenever
    the document set or the search configuration changes.
    """

    def __init__(self) -> None:
        self._entries: dict[str, V] = {}

    @staticmethod
    def key(question: str, fingerprint: str) -> str:
        material = f"{question.strip()}\x00{fingerprint}".encode("utf-8")
        return hashlib.sha256(material).hexdigest()

    def get(self, question: str, fingerprint: str) -> V | None:
        return self._entries.get(self.key(question, fingerprint))

    def put(self, question: str, fingerprint: str, value: V) -> None:
        self._entries[self.key(question, fingerprint)] = value

    def invalidate(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


def session_fingerprint(
    registry: DocumentRegistry,
    context: MeetingContext,
    model: str,
    temperature: float,
) -> str:
    """Everything a cached answer depends on besides the question itself."""
    config = json.dumps({"model": model, "temperature": temperature})
    return f"{registry.fingerprint()}:{context.fingerprint()}:{config}"
