from dataclasses import dataclass, field

from dealbrief.streaming.models import StreamSnapshot


@dataclass(frozen=True)
class PsychologicalProjection:
    buyer_fear: str = ""
    buyer_incentive: str = ""
    strategic_lever: str = ""


@dataclass(frozen=True)
class Citation:
    snippet: str
    source: str = ""


@dataclass(frozen=True)
class ReasoningChain:
    pain_point: str = ""
    capability: str = ""
    strategic_value: str = ""


@dataclass(frozen=True)
class CognitiveSearchResult:
    """Authoritative answer to one question over the ready documents."""

    answer: str
    brief_explanation: str = ""
    articular_soundbite: str = ""
    psychological_projection: PsychologicalProjection = field(default_factory=PsychologicalProjection)
    citations: list[Citation] = field(default_factory=list)
    reasoning_chain: ReasoningChain = field(default_factory=ReasoningChain)


@dataclass(frozen=True)
class SearchUpdate:
    """One step of a running search.

    ``result`` is only set on the last update of a search.
    """

    snapshot: StreamSnapshot
    result: CognitiveSearchResult | None = None
    cached: bool = False

    @property
    def is_final(self) -> bool:
        return self.result is not None
