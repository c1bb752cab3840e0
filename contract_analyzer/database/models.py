from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from contract_analyzer.analysis.models import AnalysisResult
from contract_analyzer.analysis.serializer import analysis_to_payload


class DocumentStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class DocumentRecord:
    """Represents a row from the documents table."""

    id: str
    file_name: str
    file_size: int
    content_type: str
    location: str
    status: DocumentStatus = DocumentStatus.PROCESSING
    analysis: AnalysisResult | None = None
    uploaded_at: datetime | None = None
    processed_at: datetime | None = None

    def to_payload(self) -> dict[str, Any]:
        """Render the record with its wire field names."""
        return {
            "id": self.id,
            "fileName": self.file_name,
            "fileSize": self.file_size,
            "contentType": self.content_type,
            "location": self.location,
            "status": self.status.value,
            "analysis": analysis_to_payload(self.analysis) if self.analysis else None,
            "uploadedAt": _isoformat(self.uploaded_at),
            "processedAt": _isoformat(self.processed_at),
        }


@dataclass(frozen=True)
class DocumentSummary:
    """Listing projection of a document (no analysis)."""

    id: str
    file_name: str
    file_size: int
    status: DocumentStatus
    uploaded_at: datetime | None = None

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "fileName": self.file_name,
            "uploadedAt": _isoformat(self.uploaded_at),
            "status": self.status.value,
            "fileSize": self.file_size,
        }


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
