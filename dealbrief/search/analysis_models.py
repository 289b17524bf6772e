from dataclasses import dataclass, field

from dealbrief.search.models import Citation


@dataclass(frozen=True)
class EvidenceItem:
    text: str
    citation: Citation | None = None


@dataclass(frozen=True)
class PsychometricProfile:
    """Buyer traits scored 0..100."""

    risk_tolerance: int = 0
    strategic_priority_focus: int = 0
    analytical_depth: int = 0
    directness: int = 0
    innovation_appetite: int = 0


@dataclass(frozen=True)
class BuyerSnapshot:
    role: str = ""
    role_citation: Citation | None = None
    priorities: list[EvidenceItem] = field(default_factory=list)
    likely_objections: list[EvidenceItem] = field(default_factory=list)
    decision_style: str = ""
    risk_tolerance: str = ""
    tone: str = ""
    metrics: PsychometricProfile = field(default_factory=PsychometricProfile)
    persona_identity: str = ""
    decision_logic: str = ""


@dataclass(frozen=True)
class DocumentEntity:
    name: str
    kind: str = ""
    context: str = ""
    citation: Citation | None = None


@dataclass(frozen=True)
class DocumentSummary:
    file_name: str
    summary: str = ""
    strategic_impact: str = ""
    critical_insights: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class DocumentInsights:
    entities: list[DocumentEntity] = field(default_factory=list)
    summaries: list[DocumentSummary] = field(default_factory=list)
    material_synthesis: str = ""


@dataclass(frozen=True)
class MatrixItem:
    category: str
    observation: str
    significance: str = ""
    evidence: Citation | None = None


@dataclass(frozen=True)
class CompetitorInsight:
    name: str
    overview: str = ""
    threat_profile: str = ""
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    our_wedge: str = ""
    citation: Citation | None = None


@dataclass(frozen=True)
class OpeningLine:
    text: str
    label: str = ""
    citation: Citation | None = None


@dataclass(frozen=True)
class QuestionPair:
    customer_asks: str
    salesperson_should_respond: str = ""
    reasoning: str = ""
    category: str = ""
    citation: Citation | None = None


@dataclass(frozen=True)
class StrategicQuestion:
    question: str
    why_it_matters: str = ""
    citation: Citation | None = None


@dataclass(frozen=True)
class ObjectionPair:
    objection: str
    real_meaning: str = ""
    strategy: str = ""
    exact_wording: str = ""
    citation: Citation | None = None


@dataclass(frozen=True)
class ToneGuidance:
    words_to_use: list[str] = field(default_factory=list)
    words_to_avoid: list[str] = field(default_factory=list)
    sentence_length: str = ""
    technical_depth: str = ""


@dataclass(frozen=True)
class FinalCoaching:
    dos: list[str] = field(default_factory=list)
    donts: list[str] = field(default_factory=list)
    final_advice: str = ""


@dataclass(frozen=True)
class StrategicAnalysis:
    """Meeting-prep intelligence derived from every ready document."""

    snapshot: BuyerSnapshot = field(default_factory=BuyerSnapshot)
    document_insights: DocumentInsights = field(default_factory=DocumentInsights)
    ground_matrix: list[MatrixItem] = field(default_factory=list)
    competitors: list[CompetitorInsight] = field(default_factory=list)
    opening_lines: list[OpeningLine] = field(default_factory=list)
    predicted_questions: list[QuestionPair] = field(default_factory=list)
    strategic_questions: list[StrategicQuestion] = field(default_factory=list)
    objection_handling: list[ObjectionPair] = field(default_factory=list)
    tone_guidance: ToneGuidance = field(default_factory=ToneGuidance)
    final_coaching: FinalCoaching = field(default_factory=FinalCoaching)
