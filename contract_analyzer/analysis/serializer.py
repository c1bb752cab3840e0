"""Wire/persistence format of AnalysisResult (camelCase JSON object)."""

from datetime import datetime
from typing import Any

from contract_analyzer.analysis.interpreter import utc_now
from contract_analyzer.analysis.models import (
    AnalysisResult,
    ClauseAnalysis,
    KeyTerm,
    Risk,
)
from contract_analyzer.analysis.validator import build_analysis


def analysis_to_payload(result: AnalysisResult) -> dict[str, Any]:
    """Render an AnalysisResult with the persisted field names."""
    risk = result.risk_assessment
    compliance = result.compliance_check
    summary = result.executive_summary
    return {
        "keyTerms": [_key_term_to_dict(term) for term in result.key_terms],
        "riskAssessment": {
            "overallRisk": risk.overall_risk.value,
            "risks": [_risk_to_dict(item) for item in risk.risks],
            "totalScore": risk.total_score,
        },
        "clauseAnalysis": [_clause_to_dict(clause) for clause in result.clause_analysis],
        "complianceCheck": {
            "overallCompliance": compliance.overall_compliance,
            "missingClauses": list(compliance.missing_clauses),
            "nonStandardClauses": list(compliance.non_standard_clauses),
            "recommendations": list(compliance.recommendations),
        },
        "executiveSummary": {
            "overview": summary.overview,
            "keyHighlights": list(summary.key_highlights),
            "majorConcerns": list(summary.major_concerns),
            "recommendation": summary.recommendation,
        },
        "confidenceScore": result.confidence_score,
        "processedAt": result.processed_at.isoformat(),
    }


def analysis_from_payload(payload: dict[str, Any]) -> AnalysisResult:
    """Read a stored payload back through the same mapping used for model output."""
    return build_analysis(payload, _parse_timestamp(payload.get("processedAt")))


def _parse_timestamp(raw: Any) -> datetime:
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, str):
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            pass
    return utc_now()


def _key_term_to_dict(term: KeyTerm) -> dict[str, Any]:
    return {
        "type": term.type.value,
        "value": term.value,
        "confidence": term.confidence,
        "location": term.location,
    }


def _risk_to_dict(risk: Risk) -> dict[str, Any]:
    return {
        "category": risk.category,
        "description": risk.description,
        "severity": risk.severity.value,
        "recommendation": risk.recommendation,
        "confidence": risk.confidence,
    }


def _clause_to_dict(clause: ClauseAnalysis) -> dict[str, Any]:
    return {
        "clauseType": clause.clause_type,
        "content": clause.content,
        "isStandard": clause.is_standard,
        "unusualAspects": list(clause.unusual_aspects),
        "recommendation": clause.recommendation,
    }
