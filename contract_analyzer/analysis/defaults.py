"""Named defaults for missing sections and the whole-response fallback."""

from datetime import datetime

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

DEFAULT_CONFIDENCE_SCORE = 75
DEFAULT_ITEM_CONFIDENCE = 50
FALLBACK_CONFIDENCE_SCORE = 50

_MANUAL_REVIEW = "Manual review recommended"


def default_risk_assessment() -> RiskAssessment:
    return RiskAssessment(overall_risk=RiskLevel.MEDIUM, risks=[], total_score=50)


def default_compliance_check() -> ComplianceCheck:
    return ComplianceCheck(
        overall_compliance=70,
        missing_clauses=[],
        non_standard_clauses=[],
        recommendations=[],
    )


def default_executive_summary() -> ExecutiveSummary:
    return ExecutiveSummary(
        overview="Analysis completed",
        key_highlights=[],
        major_concerns=[],
        recommendation="Review recommended",
    )


def fallback_analysis(processed_at: datetime) -> AnalysisResult:
    """Safe analysis used when the model response cannot be parsed at all."""
    return AnalysisResult(
        key_terms=[
            KeyTerm(
                type=TermType.OTHER,
                value="Analysis completed",
                confidence=50,
                location="Document",
            )
        ],
        risk_assessment=RiskAssessment(
            overall_risk=RiskLevel.MEDIUM,
            risks=[
                Risk(
                    category="General",
                    description="Document processed but detailed analysis unavailable",
                    severity=RiskLevel.MEDIUM,
                    recommendation=_MANUAL_REVIEW,
                    confidence=50,
                )
            ],
            total_score=50,
        ),
        clause_analysis=[
            ClauseAnalysis(
                clause_type="General",
                content="Document processed",
                is_standard=True,
                unusual_aspects=[],
                recommendation=_MANUAL_REVIEW,
            )
        ],
        compliance_check=ComplianceCheck(
            overall_compliance=50,
            missing_clauses=[],
            non_standard_clauses=[],
            recommendations=[_MANUAL_REVIEW],
        ),
        executive_summary=ExecutiveSummary(
            overview="Document processed successfully",
            key_highlights=["Text extraction completed"],
            major_concerns=["Detailed analysis unavailable"],
            recommendation=_MANUAL_REVIEW,
        ),
        confidence_score=FALLBACK_CONFIDENCE_SCORE,
        processed_at=processed_at,
    )
