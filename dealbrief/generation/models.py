from dataclasses import dataclass


@dataclass(frozen=True)
class GenerationMessage:
    """One prior turn of conversation history."""

    role: str
    content: str
