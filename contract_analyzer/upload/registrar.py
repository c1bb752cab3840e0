import uuid
from collections.abc import Callable
from datetime import datetime

from contract_analyzer.analysis.interpreter import utc_now
from contract_analyzer.database.models import DocumentRecord, DocumentStatus
from contract_analyzer.database.repositories.base import BaseDocumentStore
from contract_analyzer.extraction.factory import DOCX, PDF
from contract_analyzer.extraction.resolver import PLAIN_TEXT
from contract_analyzer.logging.logger import Log
from contract_analyzer.storage.file_storage import FileStorage, document_location
from contract_analyzer.upload.exceptions import UploadValidationError

ALLOWED_CONTENT_TYPES = frozenset({PDF, DOCX, PLAIN_TEXT})
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


class DocumentRegistrar:
    """Validates an upload, stores its bytes and creates the document record."""

    def __init__(
        self,
        storage: FileStorage,
        store: BaseDocumentStore,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._storage = storage
        self._store = store
        self._max_upload_bytes = max_upload_bytes
        self._clock = clock

    def register(self, file_name: str, data: bytes, content_type: str) -> DocumentRecord:
        """Register a new document at status 'processing'.

        Raises:
            UploadValidationError: if fields are missing, the type is not
                PDF/DOCX/plain text, or the file exceeds the size ceiling.
            PersistenceError: if the record cannot be created.
        """
        self._validate(file_name, data, content_type)

        document_id = str(uuid.uuid4())
        location = document_location(document_id, file_name)
        self._storage.write(location, data)

        record = DocumentRecord(
            id=document_id,
            file_name=file_name,
            file_size=len(data),
            content_type=content_type,
            location=location,
            status=DocumentStatus.PROCESSING,
            uploaded_at=self._clock(),
        )
        try:
            self._store.insert(record)
        except Exception:
            Log.error(f"Failed to register document {document_id}, removing stored file")
            self._storage.delete(location)
            raise
        Log.info(f"Registered document {document_id} ({file_name}, {len(data)} bytes)")
        return record

    def _validate(self, file_name: str, data: bytes, content_type: str) -> None:
        if not file_name or not data or not content_type:
            raise UploadValidationError(
                "Missing required fields: fileName, fileSize, contentType"
            )
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise UploadValidationError(
                "Unsupported file type. Only PDF, DOCX, and TXT files are allowed."
            )
        if len(data) > self._max_upload_bytes:
            raise UploadValidationError(
                f"File too large: {len(data)} bytes (max {self._max_upload_bytes})"
            )
