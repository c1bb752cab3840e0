from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from contract_analyzer.analysis.models import AnalysisResult
from contract_analyzer.database.models import DocumentRecord, DocumentStatus, DocumentSummary

UPDATABLE_FIELDS = frozenset({"status", "analysis", "processed_at"})


class BaseDocumentStore(ABC):
    """Persistence contract for document records and their lifecycle status."""

    @abstractmethod
    def find_by_id(self, document_id: str) -> DocumentRecord:
        """Find a document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
            PersistenceError: if the store cannot be read.
        """

    @abstractmethod
    def insert(self, record: DocumentRecord) -> None:
        """Create a new document record.

        Raises:
            PersistenceError: if the write fails.
        """

    @abstractmethod
    def update(
        self,
        document_id: str,
        fields: dict[str, Any],
        *,
        expected_status: DocumentStatus | None = None,
    ) -> None:
        """Merge the given fields into a record, leaving other fields untouched.

        Only status, analysis and processed_at may be updated. With
        expected_status the write only applies while the record still has
        that status.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
            StaleDocumentError: if expected_status no longer matches.
            PersistenceError: if the write fails.
        """

    @abstractmethod
    def list_summaries(self) -> list[DocumentSummary]:
        """List all documents, newest first, without their analysis."""

    def mark_completed(
        self,
        document_id: str,
        analysis: AnalysisResult,
        processed_at: datetime,
        *,
        expected_status: DocumentStatus | None = None,
    ) -> None:
        self.update(
            document_id,
            {
                "status": DocumentStatus.COMPLETED,
                "analysis": analysis,
                "processed_at": processed_at,
            },
            expected_status=expected_status,
        )

    def mark_failed(
        self,
        document_id: str,
        *,
        expected_status: DocumentStatus | None = None,
    ) -> None:
        self.update(
            document_id,
            {"status": DocumentStatus.FAILED, "analysis": None},
            expected_status=expected_status,
        )


def check_updatable(fields: dict[str, Any]) -> None:
    unknown = set(fields) - UPDATABLE_FIELDS
    if unknown:
        raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")
    if not fields:
        raise ValueError("No fields to update")
