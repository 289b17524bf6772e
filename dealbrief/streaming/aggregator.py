from collections.abc import AsyncIterable, AsyncIterator, Iterable
from typing import Any

from dealbrief.logging.logger import Log
from dealbrief.streaming.exceptions import StreamParseError
from dealbrief.streaming.finalizer import parse_final
from dealbrief.streaming.models import FinalResult, ParseFailure, StreamSnapshot, StructuredResult
from dealbrief.streaming.partial_json import extract_partial_field


class StreamAggregator:
    """Accumulates the fragments of one generation request.

    While the stream runs, every fragment yields a snapshot of the tracked
    string fields. Once the stream ends, ``finalize`` produces the
    authoritative parse. One instance serves exactly one request.
    """

    def __init__(self, fields: Iterable[str]) -> None:
        self._fields = tuple(fields)
        self._fragments: list[str] = []
        self._buffer = ""
        self._values: dict[str, str] = {}

    @property
    def buffer(self) -> str:
        return self._buffer

    def feed(self, fragment: str) -> StreamSnapshot:
        if fragment:
            self._fragments.append(fragment)
            self._buffer += fragment
        for field in self._fields:
            candidate = extract_partial_field(self._buffer, field)
            # Started content never regresses to empty or to a shorter preview.
            if candidate and len(candidate) >= len(self._values.get(field, "")):
                self._values[field] = candidate
        return self.snapshot()

    def snapshot(self) -> StreamSnapshot:
        return StreamSnapshot(
            fields=dict(self._values),
            fragment_count=len(self._fragments),
            buffer_length=len(self._buffer),
        )

    async def consume(self, fragments: AsyncIterable[str]) -> AsyncIterator[StreamSnapshot]:
        """Feed every fragment of ``fragments``, yielding a snapshot after each."""
        async for fragment in fragments:
            yield self.feed(fragment)

    def finalize(self) -> FinalResult:
        try:
            data = parse_final(self._buffer)
        except StreamParseError as exc:
            Log.error(f"Stream finalization failed after {len(self._fragments)} fragments: {exc}")
            return ParseFailure(message=str(exc), buffer=self._buffer)
        return StructuredResult(data=data)


async def collect_final(fragments: AsyncIterable[str]) -> Any:
    """Drain a whole stream without previews and return its parsed value.

    Raises:
        StreamParseError: if the completed stream cannot be parsed.
    """
    aggregator = StreamAggregator(())
    async for _ in aggregator.consume(fragments):
        pass
    return aggregator.finalize().unwrap()
