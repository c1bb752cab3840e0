from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class TermType(str, Enum):
    """Kind of key term extracted from a contract."""

    PARTY = "party"
    DATE = "date"
    AMOUNT = "amount"
    PAYMENT_TERM = "payment_term"
    OBLIGATION = "obligation"
    OTHER = "other"

    @classmethod
    def coerce(cls, raw: object) -> "TermType":
        """Map model vocabulary onto a term type; unknown values become OTHER."""
        if isinstance(raw, str):
            try:
                return cls(raw.strip().lower())
            except ValueError:
                pass
        return cls.OTHER


class RiskLevel(str, Enum):
    """Severity scale shared by overall risk and individual risks."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @classmethod
    def coerce(cls, raw: object) -> "RiskLevel":
        """Map model vocabulary onto a risk level; unknown values become MEDIUM."""
        if isinstance(raw, str):
            try:
                return cls(raw.strip().lower())
            except ValueError:
                pass
        return cls.MEDIUM


@dataclass(frozen=True)
class KeyTerm:
    """A party, date, amount or other notable term found in the contract."""

    type: TermType
    value: str
    confidence: float
    location: str = ""


@dataclass(frozen=True)
class Risk:
    """A single identified risk with its mitigation."""

    category: str
    description: str
    severity: RiskLevel
    recommendation: str
    confidence: float


@dataclass(frozen=True)
class RiskAssessment:
    overall_risk: RiskLevel = RiskLevel.MEDIUM
    risks: list[Risk] = field(default_factory=list)
    total_score: float = 50


@dataclass(frozen=True)
class ClauseAnalysis:
    clause_type: str
    content: str
    is_standard: bool
    unusual_aspects: list[str] = field(default_factory=list)
    recommendation: str = ""


@dataclass(frozen=True)
class ComplianceCheck:
    overall_compliance: float = 70
    missing_clauses: list[str] = field(default_factory=list)
    non_standard_clauses: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ExecutiveSummary:
    overview: str = "Analysis completed"
    key_highlights: list[str] = field(default_factory=list)
    major_concerns: list[str] = field(default_factory=list)
    recommendation: str = "Review recommended"


@dataclass(frozen=True)
class AnalysisResult:
    """Structured legal analysis of one document."""

    key_terms: list[KeyTerm]
    risk_assessment: RiskAssessment
    clause_analysis: list[ClauseAnalysis]
    compliance_check: ComplianceCheck
    executive_summary: ExecutiveSummary
    confidence_score: float
    processed_at: datetime


@dataclass(frozen=True)
class ModelResponse:
    """Raw output of a model call: one or more text segments."""

    segments: list[str]

    @property
    def text(self) -> str:
        return self.segments[0] if self.segments else ""
