import json
from dataclasses import dataclass
from typing import Any

from contract_analyzer.analysis.serializer import analysis_to_payload
from contract_analyzer.logging.logger import Log
from contract_analyzer.processor.exceptions import DocumentNotFoundError
from contract_analyzer.processor.processor import Processor


@dataclass(frozen=True)
class ApiResponse:
    """Caller-facing envelope. Error messages never carry internal detail."""

    status_code: int
    success: bool
    data: Any = None
    error: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            payload["data"] = self.data
        if self.error is not None:
            payload["error"] = self.error
        return payload


class RequestRunner:
    """Run one processing request and map the outcome to a generic response."""

    def __init__(self, processor: Processor) -> None:
        self._processor = processor

    def run(self, body: str | None) -> ApiResponse:
        """Execute a processing request body of the form {"documentId": "..."}."""
        document_id = _document_id_from_body(body)
        if document_id is None:
            return ApiResponse(400, False, error="Document ID is required")

        Log.info(f"Running processing request for document {document_id}")
        try:
            analysis = self._processor.process(document_id)
        except DocumentNotFoundError:
            Log.warning(f"Processing requested for unknown document {document_id}")
            return ApiResponse(404, False, error="Document not found")
        except Exception as exc:
            Log.error(f"Processing failed for document {document_id}: {exc}")
            return ApiResponse(500, False, error="Processing failed")

        return ApiResponse(200, True, data=analysis_to_payload(analysis))


def _document_id_from_body(body: str | None) -> str | None:
    try:
        payload = json.loads(body or "{}")
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    document_id = payload.get("documentId")
    if not isinstance(document_id, str) or not document_id.strip():
        return None
    return document_id.strip()
