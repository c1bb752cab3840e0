"""Maps a parsed model response onto the analysis schema, section by section.

Each section is built independently: a section that is absent, null or of the
wrong shape is replaced by its named default without affecting the others.
Inside a section, missing or out-of-domain sub-fields are back-filled.
"""

import math
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

from contract_analyzer.analysis.defaults import (
    DEFAULT_CONFIDENCE_SCORE,
    DEFAULT_ITEM_CONFIDENCE,
    default_compliance_check,
    default_executive_summary,
    default_risk_assessment,
)
from contract_analyzer.analysis.models import (
    AnalysisResult,
    ClauseAnalysis,
    ComplianceCheck,
    ExecutiveSummary,
    KeyTerm,
    Risk,
    RiskAssessment,
    RiskLevel,
    TermType,
)
from contract_analyzer.logging.logger import Log

T = TypeVar("T")

_SCORE_MIN = 0
_SCORE_MAX = 100
_TRUE_WORDS = frozenset({"true", "yes", "1"})


class MalformedSectionError(ValueError):
    """Raised internally when a section has the wrong shape."""


def build_analysis(data: dict[str, Any], processed_at: datetime) -> AnalysisResult:
    """Build an AnalysisResult from a parsed JSON object.

    Never raises for malformed sections; those fall back to their defaults.
    """
    return AnalysisResult(
        key_terms=_section(data, "keyTerms", _build_key_terms, list),
        risk_assessment=_section(
            data, "riskAssessment", _build_risk_assessment, default_risk_assessment
        ),
        clause_analysis=_section(data, "clauseAnalysis", _build_clause_analysis, list),
        compliance_check=_section(
            data, "complianceCheck", _build_compliance_check, default_compliance_check
        ),
        executive_summary=_section(
            data, "executiveSummary", _build_executive_summary, default_executive_summary
        ),
        confidence_score=coerce_score(data.get("confidenceScore"), DEFAULT_CONFIDENCE_SCORE),
        processed_at=processed_at,
    )


def _section(
    data: dict[str, Any],
    key: str,
    builder: Callable[[Any], T],
    default: Callable[[], T],
) -> T:
    raw = data.get(key)
    if raw is None:
        Log.debug(f"Section '{key}' missing from model response, using default")
        return default()
    try:
        return builder(raw)
    except MalformedSectionError as exc:
        Log.warning(f"Section '{key}' malformed, using default: {exc}")
        return default()


def coerce_score(raw: Any, default: float) -> float:
    """Clamp a numeric value into [0, 100]; non-numeric values give the default."""
    if isinstance(raw, bool) or raw is None:
        return default
    if isinstance(raw, str):
        try:
            raw = float(raw.strip().rstrip("%"))
        except ValueError:
            return default
    if not isinstance(raw, (int, float)) or (isinstance(raw, float) and math.isnan(raw)):
        return default
    return max(_SCORE_MIN, min(_SCORE_MAX, raw))


def _text(raw: Any, default: str = "") -> str:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return str(raw)
    return default


def _text_list(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        return []
    return [
        _text(item)
        for item in raw
        if isinstance(item, (str, int, float)) and not isinstance(item, bool)
    ]


def _flag(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        return raw.strip().lower() in _TRUE_WORDS
    return False


def _require_list(raw: Any, name: str) -> list[Any]:
    if not isinstance(raw, list):
        raise MalformedSectionError(f"'{name}' must be a list, got {type(raw).__name__}")
    return raw


def _require_object(raw: Any, name: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise MalformedSectionError(f"'{name}' must be an object, got {type(raw).__name__}")
    return raw


def _objects(items: list[Any]) -> list[dict[str, Any]]:
    return [item for item in items if isinstance(item, dict)]


def _build_key_terms(raw: Any) -> list[KeyTerm]:
    return [
        KeyTerm(
            type=TermType.coerce(item.get("type")),
            value=_text(item.get("value")),
            confidence=coerce_score(item.get("confidence"), DEFAULT_ITEM_CONFIDENCE),
            location=_text(item.get("location")),
        )
        for item in _objects(_require_list(raw, "keyTerms"))
    ]


def _build_risk(item: dict[str, Any]) -> Risk:
    return Risk(
        category=_text(item.get("category")),
        description=_text(item.get("description")),
        severity=RiskLevel.coerce(item.get("severity")),
        recommendation=_text(item.get("recommendation")),
        confidence=coerce_score(item.get("confidence"), DEFAULT_ITEM_CONFIDENCE),
    )


def _build_risk_assessment(raw: Any) -> RiskAssessment:
    section = _require_object(raw, "riskAssessment")
    default = default_risk_assessment()
    risks = section.get("risks")
    return RiskAssessment(
        overall_risk=RiskLevel.coerce(section.get("overallRisk")),
        risks=[_build_risk(item) for item in _objects(risks)] if isinstance(risks, list) else [],
        total_score=coerce_score(section.get("totalScore"), default.total_score),
    )


def _build_clause_analysis(raw: Any) -> list[ClauseAnalysis]:
    return [
        ClauseAnalysis(
            clause_type=_text(item.get("clauseType")),
            content=_text(item.get("content")),
            is_standard=_flag(item.get("isStandard")),
            unusual_aspects=_text_list(item.get("unusualAspects")),
            recommendation=_text(item.get("recommendation")),
        )
        for item in _objects(_require_list(raw, "clauseAnalysis"))
    ]


def _build_compliance_check(raw: Any) -> ComplianceCheck:
    section = _require_object(raw, "complianceCheck")
    default = default_compliance_check()
    return ComplianceCheck(
        overall_compliance=coerce_score(
            section.get("overallCompliance"), default.overall_compliance
        ),
        missing_clauses=_text_list(section.get("missingClauses")),
        non_standard_clauses=_text_list(section.get("nonStandardClauses")),
        recommendations=_text_list(section.get("recommendations")),
    )


def _build_executive_summary(raw: Any) -> ExecutiveSummary:
    section = _require_object(raw, "executiveSummary")
    default = default_executive_summary()
    return ExecutiveSummary(
        overview=_text(section.get("overview"), default.overview),
        key_highlights=_text_list(section.get("keyHighlights")),
        major_concerns=_text_list(section.get("majorConcerns")),
        recommendation=_text(section.get("recommendation"), default.recommendation),
    )
