"""Validates parsed model responses and builds the typed results."""

from typing import Any

from dealbrief.search.analysis_models import (
    BuyerSnapshot,
    CompetitorInsight,
    DocumentEntity,
    DocumentInsights,
    DocumentSummary,
    EvidenceItem,
    FinalCoaching,
    MatrixItem,
    ObjectionPair,
    OpeningLine,
    PsychometricProfile,
    QuestionPair,
    StrategicAnalysis,
    StrategicQuestion,
    ToneGuidance,
)
from dealbrief.search.exceptions import SearchValidationError
from dealbrief.search.models import (
    Citation,
    CognitiveSearchResult,
    PsychologicalProjection,
    ReasoningChain,
)

_MAX_SUGGESTIONS = 3


def validate_and_build(data: Any) -> CognitiveSearchResult:
    """Validate raw parsed JSON and build a CognitiveSearchResult.

    Raises:
        SearchValidationError: on any validation failure.
    """
    if not isinstance(data, dict):
        raise SearchValidationError("Search response must be an object")
    answer = data.get("answer")
    if not isinstance(answer, str):
        raise SearchValidationError("'answer' must be a string")
    return CognitiveSearchResult(
        answer=answer,
        brief_explanation=_optional_str(data, "briefExplanation"),
        articular_soundbite=_optional_str(data, "articularSoundbite"),
        psychological_projection=_build_projection(data.get("psychologicalProjection")),
        citations=_build_citations(data.get("citations")),
        reasoning_chain=_build_reasoning_chain(data.get("reasoningChain")),
    )


def validate_suggestions(data: Any) -> list[str]:
    """Accept a bare JSON array or an object wrapping it under "questions"."""
    if isinstance(data, dict):
        data = data.get("questions")
    if not isinstance(data, list):
        raise SearchValidationError("Suggestions must be a list")
    if not all(isinstance(item, str) for item in data):
        raise SearchValidationError("Every suggestion must be a string")
    return [item for item in data if item.strip()][:_MAX_SUGGESTIONS]


def _optional_str(raw: dict[str, Any], key: str) -> str:
    value = raw.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise SearchValidationError(f"'{key}' must be a string")
    return value


def _optional_object(raw: Any, key: str) -> dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise SearchValidationError(f"'{key}' must be an object")
    return raw


def _build_projection(raw: Any) -> PsychologicalProjection:
    data = _optional_object(raw, "psychologicalProjection")
    return PsychologicalProjection(
        buyer_fear=_optional_str(data, "buyerFear"),
        buyer_incentive=_optional_str(data, "buyerIncentive"),
        strategic_lever=_optional_str(data, "strategicLever"),
    )


def _build_reasoning_chain(raw: Any) -> ReasoningChain:
    data = _optional_object(raw, "reasoningChain")
    return ReasoningChain(
        pain_point=_optional_str(data, "painPoint"),
        capability=_optional_str(data, "capability"),
        strategic_value=_optional_str(data, "strategicValue"),
    )


def _build_citations(raw: Any) -> list[Citation]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise SearchValidationError("'citations' must be a list")
    citations: list[Citation] = []
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise SearchValidationError(f"Citation at index {i} must be an object")
        snippet = item.get("snippet")
        if not isinstance(snippet, str):
            raise SearchValidationError(f"Citation at index {i}: 'snippet' must be a string")
        citations.append(Citation(snippet=snippet, source=_optional_str(item, "source")))
    return citations


def validate_explanation(data: Any) -> str:
    """Extract the explanation text from ``{"explanation": "..."}``."""
    if not isinstance(data, dict):
        raise SearchValidationError("Explanation response must be an object")
    explanation = data.get("explanation")
    if not isinstance(explanation, str) or not explanation.strip():
        raise SearchValidationError("'explanation' must be a non-empty string")
    return explanation.strip()


def validate_analysis(data: Any) -> StrategicAnalysis:
    """Validate raw parsed JSON and build a StrategicAnalysis.

    Every section is optional; a present section must have the right shape.

    Raises:
        SearchValidationError: on any validation failure.
    """
    if not isinstance(data, dict):
        raise SearchValidationError("Analysis response must be an object")
    tone = _optional_object(data.get("toneGuidance"), "toneGuidance")
    coaching = _optional_object(data.get("finalCoaching"), "finalCoaching")
    return StrategicAnalysis(
        snapshot=_build_snapshot(data.get("snapshot")),
        document_insights=_build_insights(data.get("documentInsights")),
        ground_matrix=[
            MatrixItem(
                category=_optional_str(item, "category"),
                observation=_required_str(item, "observation", where),
                significance=_optional_str(item, "significance"),
                evidence=_build_evidence(item.get("evidence"), where),
            )
            for where, item in _objects(data, "groundMatrix")
        ],
        competitors=[
            CompetitorInsight(
                name=_required_str(item, "name", where),
                overview=_optional_str(item, "overview"),
                threat_profile=_optional_str(item, "threatProfile"),
                strengths=_str_list(item, "strengths"),
                weaknesses=_str_list(item, "weaknesses"),
                our_wedge=_optional_str(item, "ourWedge"),
                citation=_build_evidence(item.get("citation"), where),
            )
            for where, item in _objects(data, "competitors")
        ],
        opening_lines=[
            OpeningLine(
                text=_required_str(item, "text", where),
                label=_optional_str(item, "label"),
                citation=_build_evidence(item.get("citation"), where),
            )
            for where, item in _objects(data, "openingLines")
        ],
        predicted_questions=[
            QuestionPair(
                customer_asks=_required_str(item, "customerAsks", where),
                salesperson_should_respond=_optional_str(item, "salespersonShouldRespond"),
                reasoning=_optional_str(item, "reasoning"),
                category=_optional_str(item, "category"),
                citation=_build_evidence(item.get("citation"), where),
            )
            for where, item in _objects(data, "predictedQuestions")
        ],
        strategic_questions=[
            StrategicQuestion(
                question=_required_str(item, "question", where),
                why_it_matters=_optional_str(item, "whyItMatters"),
                citation=_build_evidence(item.get("citation"), where),
            )
            for where, item in _objects(data, "strategicQuestionsToAsk")
        ],
        objection_handling=[
            ObjectionPair(
                objection=_required_str(item, "objection", where),
                real_meaning=_optional_str(item, "realMeaning"),
                strategy=_optional_str(item, "strategy"),
                exact_wording=_optional_str(item, "exactWording"),
                citation=_build_evidence(item.get("citation"), where),
            )
            for where, item in _objects(data, "objectionHandling")
        ],
        tone_guidance=ToneGuidance(
            words_to_use=_str_list(tone, "wordsToUse"),
            words_to_avoid=_str_list(tone, "wordsToAvoid"),
            sentence_length=_optional_str(tone, "sentenceLength"),
            technical_depth=_optional_str(tone, "technicalDepth"),
        ),
        final_coaching=FinalCoaching(
            dos=_str_list(coaching, "dos"),
            donts=_str_list(coaching, "donts"),
            final_advice=_optional_str(coaching, "finalAdvice"),
        ),
    )


def _required_str(raw: dict[str, Any], key: str, where: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str):
        raise SearchValidationError(f"{where}: '{key}' must be a string")
    return value


def _str_list(raw: dict[str, Any], key: str) -> list[str]:
    value = raw.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise SearchValidationError(f"'{key}' must be a list of strings")
    return value


def _objects(raw: dict[str, Any], key: str) -> list[tuple[str, dict[str, Any]]]:
    """Items of an optional list of objects, each paired with its location."""
    value = raw.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise SearchValidationError(f"'{key}' must be a list")
    items: list[tuple[str, dict[str, Any]]] = []
    for i, item in enumerate(value):
        if not isinstance(item, dict):
            raise SearchValidationError(f"{key}[{i}] must be an object")
        items.append((f"{key}[{i}]", item))
    return items


def _build_evidence(raw: Any, where: str) -> Citation | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise SearchValidationError(f"{where}: citation must be an object")
    snippet = raw.get("snippet")
    if not isinstance(snippet, str):
        raise SearchValidationError(f"{where}: citation 'snippet' must be a string")
    source_key = "sourceFile" if "sourceFile" in raw else "source"
    return Citation(snippet=snippet, source=_optional_str(raw, source_key))


def _score(raw: dict[str, Any], key: str) -> int:
    value = raw.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SearchValidationError(f"'{key}' must be a number")
    return int(max(0.0, min(100.0, float(value))) + 0.5)


def _build_snapshot(raw: Any) -> BuyerSnapshot:
    data = _optional_object(raw, "snapshot")
    metrics = _optional_object(data.get("metrics"), "metrics")
    return BuyerSnapshot(
        role=_optional_str(data, "role"),
        role_citation=_build_evidence(data.get("roleCitation"), "snapshot"),
        priorities=[
            EvidenceItem(
                text=_required_str(item, "text", where),
                citation=_build_evidence(item.get("citation"), where),
            )
            for where, item in _objects(data, "priorities")
        ],
        likely_objections=[
            EvidenceItem(
                text=_required_str(item, "text", where),
                citation=_build_evidence(item.get("citation"), where),
            )
            for where, item in _objects(data, "likelyObjections")
        ],
        decision_style=_optional_str(data, "decisionStyle"),
        risk_tolerance=_optional_str(data, "riskTolerance"),
        tone=_optional_str(data, "tone"),
        metrics=PsychometricProfile(
            risk_tolerance=_score(metrics, "riskToleranceValue"),
            strategic_priority_focus=_score(metrics, "strategicPriorityFocus"),
            analytical_depth=_score(metrics, "analyticalDepth"),
            directness=_score(metrics, "directness"),
            innovation_appetite=_score(metrics, "innovationAppetite"),
        ),
        persona_identity=_optional_str(data, "personaIdentity"),
        decision_logic=_optional_str(data, "decisionLogic"),
    )


def _build_insights(raw: Any) -> DocumentInsights:
    data = _optional_object(raw, "documentInsights")
    return DocumentInsights(
        entities=[
            DocumentEntity(
                name=_required_str(item, "name", where),
                kind=_optional_str(item, "type"),
                context=_optional_str(item, "context"),
                citation=_build_evidence(item.get("citation"), where),
            )
            for where, item in _objects(data, "entities")
        ],
        summaries=[
            DocumentSummary(
                file_name=_required_str(item, "fileName", where),
                summary=_optional_str(item, "summary"),
                strategic_impact=_optional_str(item, "strategicImpact"),
                critical_insights=_str_list(item, "criticalInsights"),
            )
            for where, item in _objects(data, "summaries")
        ],
        material_synthesis=_optional_str(data, "materialSynthesis"),
    )
