from dataclasses import dataclass, field
from typing import Any

from dealbrief.streaming.exceptions import StreamParseError

PLACEHOLDER = "..."


@dataclass(frozen=True)
class StreamSnapshot:
    """Best-effort view of the tracked fields after one fragment.

    ``fields`` only holds fields whose content has started streaming.
    """

    fields: dict[str, str] = field(default_factory=dict)
    fragment_count: int = 0
    buffer_length: int = 0

    def value(self, name: str) -> str | None:
        """Real streamed content for ``name``, or None if not started."""
        return self.fields.get(name)

    def display(self, name: str) -> str:
        """Content for live display, with the placeholder for unstarted fields."""
        return self.fields.get(name) or PLACEHOLDER


@dataclass(frozen=True)
class StructuredResult:
    """Authoritative parse of a completed stream."""

    data: Any
    ok: bool = field(default=True, init=False)

    def unwrap(self) -> Any:
        return self.data


@dataclass(frozen=True)
class ParseFailure:
    """Every recovery strategy failed on the completed stream."""

    message: str
    buffer: str = ""
    ok: bool = field(default=False, init=False)

    def unwrap(self) -> Any:
        raise StreamParseError(self.message)


FinalResult = StructuredResult | ParseFailure
