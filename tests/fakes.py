"""In-memory collaborators for pipeline tests."""

import threading
import time
from dataclasses import replace
from typing import Any

from contract_analyzer.analysis.client_base import BaseModelClient
from contract_analyzer.analysis.models import ModelResponse
from contract_analyzer.database.models import DocumentRecord, DocumentStatus, DocumentSummary
from contract_analyzer.database.repositories.base import BaseDocumentStore, check_updatable
from contract_analyzer.processor.exceptions import DocumentNotFoundError, StaleDocumentError


class InMemoryDocumentStore(BaseDocumentStore):
    """Thread-safe dict-backed store with the same merge/CAS semantics as the DB."""

    def __init__(self, records: list[DocumentRecord] | None = None) -> None:
        self._lock = threading.Lock()
        self._records: dict[str, DocumentRecord] = {r.id: r for r in records or []}
        self.writes: list[tuple[str, dict[str, Any]]] = []

    def find_by_id(self, document_id: str) -> DocumentRecord:
        with self._lock:
            record = self._records.get(document_id)
        if record is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return record

    def insert(self, record: DocumentRecord) -> None:
        with self._lock:
            self._records[record.id] = record
            self.writes.append((record.id, {"insert": True}))

    def update(
        self,
        document_id: str,
        fields: dict[str, Any],
        *,
        expected_status: DocumentStatus | None = None,
    ) -> None:
        check_updatable(fields)
        with self._lock:
            record = self._records.get(document_id)
            if record is None:
                raise DocumentNotFoundError(f"Document {document_id} not found")
            if expected_status is not None and record.status != expected_status:
                raise StaleDocumentError(
                    f"Document {document_id} is '{record.status.value}', "
                    f"expected '{expected_status.value}'"
                )
            self._records[document_id] = replace(record, **fields)
            self.writes.append((document_id, dict(fields)))

    def list_summaries(self) -> list[DocumentSummary]:
        with self._lock:
            records = list(self._records.values())
        return [
            DocumentSummary(
                id=r.id,
                file_name=r.file_name,
                file_size=r.file_size,
                status=r.status,
                uploaded_at=r.uploaded_at,
            )
            for r in records
        ]


class StubModelClient(BaseModelClient):
    """Returns a fixed text after an optional delay; records every prompt."""

    def __init__(self, text: str, delay_seconds: float = 0.0) -> None:
        self._text = text
        self._delay_seconds = delay_seconds
        self.prompts: list[str] = []

    def invoke(
        self,
        *,
        model: str,
        max_tokens: int,
        temperature: float,
        prompt: str,
    ) -> ModelResponse:
        self.prompts.append(prompt)
        if self._delay_seconds:
            time.sleep(self._delay_seconds)
        return ModelResponse(segments=[self._text])


def make_record(
    document_id: str = "doc-1",
    content_type: str = "text/plain",
    location: str = "documents/doc-1/contract.txt",
    status: DocumentStatus = DocumentStatus.PROCESSING,
) -> DocumentRecord:
    return DocumentRecord(
        id=document_id,
        file_name=location.rsplit("/", 1)[-1],
        file_size=5,
        content_type=content_type,
        location=location,
        status=status,
    )


def full_analysis_payload() -> dict[str, Any]:
    """A well-formed model analysis with all six sections present."""
    return {
        "keyTerms": [
            {"type": "party", "value": "Acme Corp", "confidence": 95, "location": "Preamble"},
            {"type": "amount", "value": "$10,000", "confidence": 88.5, "location": "Section 4"},
        ],
        "riskAssessment": {
            "overallRisk": "high",
            "risks": [
                {
                    "category": "Liability",
                    "description": "Uncapped indemnity",
                    "severity": "critical",
                    "recommendation": "Negotiate a liability cap",
                    "confidence": 80,
                }
            ],
            "totalScore": 72,
        },
        "clauseAnalysis": [
            {
                "clauseType": "Termination",
                "content": "Either party may terminate with 5 days notice",
                "isStandard": False,
                "unusualAspects": ["Very short notice period"],
                "recommendation": "Extend notice to 30 days",
            }
        ],
        "complianceCheck": {
            "overallCompliance": 64,
            "missingClauses": ["Force majeure"],
            "nonStandardClauses": ["Termination"],
            "recommendations": ["Add a force majeure clause"],
        },
        "executiveSummary": {
            "overview": "Services agreement between Acme Corp and Globex LLC",
            "keyHighlights": ["Fixed fee of $10,000"],
            "majorConcerns": ["Uncapped indemnity"],
            "recommendation": "Negotiate before signing",
        },
        "confidenceScore": 82,
    }
