from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import psycopg
import pytest
from psycopg.types.json import Jsonb

from contract_analyzer.analysis.defaults import fallback_analysis
from contract_analyzer.analysis.serializer import analysis_to_payload
from contract_analyzer.database.models import DocumentRecord, DocumentStatus
from contract_analyzer.database.repositories.documents_repository import DocumentsRepository
from contract_analyzer.processor.exceptions import (
    DocumentNotFoundError,
    PersistenceError,
    StaleDocumentError,
)

CONNECTION_PATH = "contract_analyzer.database.repositories.documents_repository.get_connection"
UPLOADED = datetime(2025, 1, 10, 8, 0, tzinfo=timezone.utc)
PROCESSED = datetime(2025, 1, 10, 8, 5, tzinfo=timezone.utc)


def _make_row(**overrides: object) -> dict:
    row = {
        "id": "550e8400-e29b-41d4-a716-446655440000",
        "file_name": "contract.pdf",
        "file_size": 2048,
        "content_type": "application/pdf",
        "location": "documents/550e8400-e29b-41d4-a716-446655440000/contract.pdf",
        "status": "processing",
        "analysis": None,
        "uploaded_at": UPLOADED,
        "processed_at": None,
    }
    row.update(overrides)
    return row


def _mock_connection(mock_get_conn: MagicMock) -> tuple[MagicMock, MagicMock]:
    """Wire up a mock connection + cursor and return (mock_conn, mock_cursor)."""
    mock_cursor = MagicMock()
    mock_conn = MagicMock()
    mock_conn.cursor.return_value.__enter__ = MagicMock(return_value=mock_cursor)
    mock_conn.cursor.return_value.__exit__ = MagicMock(return_value=False)
    mock_get_conn.return_value.__enter__ = MagicMock(return_value=mock_conn)
    mock_get_conn.return_value.__exit__ = MagicMock(return_value=False)
    return mock_conn, mock_cursor


class TestFindById:
    @patch(CONNECTION_PATH)
    def test_returns_record_when_found(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = _make_row()

        result = DocumentsRepository().find_by_id("550e8400-e29b-41d4-a716-446655440000")

        assert isinstance(result, DocumentRecord)
        assert result.file_name == "contract.pdf"
        assert result.file_size == 2048
        assert result.content_type == "application/pdf"
        assert result.status is DocumentStatus.PROCESSING
        assert result.analysis is None
        assert result.uploaded_at == UPLOADED

    @patch(CONNECTION_PATH)
    def test_decodes_stored_analysis(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        analysis = fallback_analysis(PROCESSED)
        mock_cursor.fetchone.return_value = _make_row(
            status="completed",
            analysis=analysis_to_payload(analysis),
            processed_at=PROCESSED,
        )

        result = DocumentsRepository().find_by_id("550e8400-e29b-41d4-a716-446655440000")

        assert result.status is DocumentStatus.COMPLETED
        assert result.analysis == analysis

    @patch(CONNECTION_PATH)
    def test_raises_document_not_found_when_missing(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchone.return_value = None

        with pytest.raises(DocumentNotFoundError, match="Document abc not found"):
            DocumentsRepository().find_by_id("abc")

    @patch(CONNECTION_PATH)
    def test_wraps_database_errors(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.execute.side_effect = psycopg.OperationalError("server closed")

        with pytest.raises(PersistenceError, match="Failed to read document abc"):
            DocumentsRepository().find_by_id("abc")


class TestInsert:
    @patch(CONNECTION_PATH)
    def test_inserts_and_commits(self, mock_get_conn: MagicMock) -> None:
        mock_conn, _cursor = _mock_connection(mock_get_conn)
        record = DocumentRecord(
            id="abc",
            file_name="contract.txt",
            file_size=5,
            content_type="text/plain",
            location="documents/abc/contract.txt",
        )

        DocumentsRepository().insert(record)

        params = mock_conn.execute.call_args[0][1]
        assert params == (
            "abc",
            "contract.txt",
            5,
            "text/plain",
            "documents/abc/contract.txt",
            "processing",
            None,
        )
        mock_conn.commit.assert_called_once()


class TestUpdate:
    @patch(CONNECTION_PATH)
    def test_merges_only_given_fields(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 1

        DocumentsRepository().update("abc", {"status": DocumentStatus.FAILED, "analysis": None})

        query, params = mock_cursor.execute.call_args[0]
        assert "Identifier('analysis')" in repr(query)
        assert "Identifier('status')" in repr(query)
        assert params == [None, "failed", "abc"]
        mock_conn.commit.assert_called_once()

    @patch(CONNECTION_PATH)
    def test_mark_completed_stores_analysis_as_jsonb(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 1
        analysis = fallback_analysis(PROCESSED)

        DocumentsRepository().mark_completed("abc", analysis, PROCESSED)

        _query, params = mock_cursor.execute.call_args[0]
        jsonb, processed_at, status, document_id = params
        assert isinstance(jsonb, Jsonb)
        assert jsonb.obj == analysis_to_payload(analysis)
        assert processed_at == PROCESSED
        assert status == "completed"
        assert document_id == "abc"

    @patch(CONNECTION_PATH)
    def test_expected_status_adds_condition(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 1

        DocumentsRepository().mark_failed("abc", expected_status=DocumentStatus.PROCESSING)

        query, params = mock_cursor.execute.call_args[0]
        assert "AND status = %s" in repr(query)
        assert params[-2:] == ["abc", "processing"]

    @patch(CONNECTION_PATH)
    def test_missing_row_raises_not_found(self, mock_get_conn: MagicMock) -> None:
        mock_conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 0

        with pytest.raises(DocumentNotFoundError):
            DocumentsRepository().mark_failed("abc")
        mock_conn.commit.assert_not_called()

    @patch(CONNECTION_PATH)
    def test_status_mismatch_raises_stale(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.rowcount = 0
        mock_cursor.fetchone.return_value = ("completed",)

        with pytest.raises(StaleDocumentError, match="is 'completed'"):
            DocumentsRepository().mark_failed("abc", expected_status=DocumentStatus.PROCESSING)

    def test_rejects_immutable_fields(self) -> None:
        with pytest.raises(ValueError, match="cannot be updated"):
            DocumentsRepository().update("abc", {"file_name": "other.pdf"})

    @patch(CONNECTION_PATH)
    def test_wraps_database_errors(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.execute.side_effect = psycopg.OperationalError("server closed")

        with pytest.raises(PersistenceError, match="Failed to update document abc"):
            DocumentsRepository().mark_failed("abc")


class TestListSummaries:
    @patch(CONNECTION_PATH)
    def test_returns_summaries(self, mock_get_conn: MagicMock) -> None:
        _conn, mock_cursor = _mock_connection(mock_get_conn)
        mock_cursor.fetchall.return_value = [
            {
                "id": "b",
                "file_name": "b.pdf",
                "uploaded_at": PROCESSED,
                "status": "failed",
                "file_size": 3,
            },
            {
                "id": "a",
                "file_name": "a.txt",
                "uploaded_at": UPLOADED,
                "status": "completed",
                "file_size": 5,
            },
        ]

        summaries = DocumentsRepository().list_summaries()

        assert [s.id for s in summaries] == ["b", "a"]
        assert summaries[0].status is DocumentStatus.FAILED
        assert "ORDER BY uploaded_at DESC" in mock_cursor.execute.call_args[0][0]
