from typing import Any

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from contract_analyzer.analysis.serializer import analysis_from_payload, analysis_to_payload
from contract_analyzer.database.connection import get_connection
from contract_analyzer.database.models import DocumentRecord, DocumentStatus, DocumentSummary
from contract_analyzer.database.repositories.base import BaseDocumentStore, check_updatable
from contract_analyzer.processor.exceptions import (
    DocumentNotFoundError,
    PersistenceError,
    StaleDocumentError,
)


class DocumentsRepository(BaseDocumentStore):
    """Database operations for the documents table."""

    def find_by_id(self, document_id: str) -> DocumentRecord:
        """Find a document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        """
                        SELECT id, file_name, file_size, content_type, location,
                               status, analysis, uploaded_at, processed_at
                        FROM documents
                        WHERE id = %s
                        """,
                        (document_id,),
                    )
                    row = cur.fetchone()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to read document {document_id}: {exc}") from exc

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        analysis = row["analysis"]
        return DocumentRecord(
            id=row["id"],
            file_name=row["file_name"],
            file_size=row["file_size"],
            content_type=row["content_type"],
            location=row["location"],
            status=DocumentStatus(row["status"]),
            analysis=analysis_from_payload(analysis) if analysis is not None else None,
            uploaded_at=row["uploaded_at"],
            processed_at=row["processed_at"],
        )

    def insert(self, record: DocumentRecord) -> None:
        """Insert a new document row."""
        try:
            with get_connection() as conn:
                conn.execute(
                    """
                    INSERT INTO documents
                    (id, file_name, file_size, content_type, location, status, uploaded_at)
                    VALUES (%s, %s, %s, %s, %s, %s, COALESCE(%s, NOW()))
                    """,
                    (
                        record.id,
                        record.file_name,
                        record.file_size,
                        record.content_type,
                        record.location,
                        record.status.value,
                        record.uploaded_at,
                    ),
                )
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to insert document {record.id}: {exc}") from exc

    def update(
        self,
        document_id: str,
        fields: dict[str, Any],
        *,
        expected_status: DocumentStatus | None = None,
    ) -> None:
        """Merge fields into the row; with expected_status, compare-and-swap on status.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
            StaleDocumentError: if the row's status differs from expected_status.
        """
        check_updatable(fields)
        columns = sorted(fields)
        assignments = sql.SQL(", ").join(
            sql.SQL("{} = %s").format(sql.Identifier(column)) for column in columns
        )
        query = sql.SQL("UPDATE documents SET {} WHERE id = %s").format(assignments)
        params: list[Any] = [_to_column_value(column, fields[column]) for column in columns]
        params.append(document_id)
        if expected_status is not None:
            query = query + sql.SQL(" AND status = %s")
            params.append(expected_status.value)

        try:
            with get_connection() as conn:
                with conn.cursor() as cur:
                    cur.execute(query, params)
                    if cur.rowcount == 0:
                        self._raise_for_missed_update(cur, document_id, expected_status)
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to update document {document_id}: {exc}") from exc

    def list_summaries(self) -> list[DocumentSummary]:
        """Return every document, newest first."""
        try:
            with get_connection() as conn:
                with conn.cursor(row_factory=dict_row) as cur:
                    cur.execute(
                        """
                        SELECT id, file_name, uploaded_at, status, file_size
                        FROM documents
                        ORDER BY uploaded_at DESC
                        """
                    )
                    rows = cur.fetchall()
        except psycopg.Error as exc:
            raise PersistenceError(f"Failed to list documents: {exc}") from exc

        return [
            DocumentSummary(
                id=row["id"],
                file_name=row["file_name"],
                file_size=row["file_size"],
                status=DocumentStatus(row["status"]),
                uploaded_at=row["uploaded_at"],
            )
            for row in rows
        ]

    @staticmethod
    def _raise_for_missed_update(
        cur: psycopg.Cursor[Any],
        document_id: str,
        expected_status: DocumentStatus | None,
    ) -> None:
        if expected_status is not None:
            cur.execute("SELECT status FROM documents WHERE id = %s", (document_id,))
            row = cur.fetchone()
            if row is not None:
                raise StaleDocumentError(
                    f"Document {document_id} is '{row[0]}', expected '{expected_status.value}'"
                )
        raise DocumentNotFoundError(f"Document {document_id} not found")


def _to_column_value(column: str, value: Any) -> Any:
    if column == "status":
        return DocumentStatus(value).value
    if column == "analysis":
        return Jsonb(analysis_to_payload(value)) if value is not None else None
    return value
