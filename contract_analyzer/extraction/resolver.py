from collections.abc import Mapping

from contract_analyzer.database.models import DocumentRecord
from contract_analyzer.extraction.base import BaseLineExtractor
from contract_analyzer.extraction.exceptions import ExtractionError, UnsupportedContentTypeError
from contract_analyzer.logging.logger import Log
from contract_analyzer.storage.exceptions import StorageError
from contract_analyzer.storage.file_storage import FileStorage

PLAIN_TEXT = "text/plain"


class TextSourceResolver:
    """Returns a document's raw text by direct read or line extraction.

    Plain text is decoded as UTF-8. Other content types go through the
    extractor registered for them; the returned lines are joined with
    newlines in the order the extractor produced them. No retries.
    """

    def __init__(
        self,
        storage: FileStorage,
        extractors: Mapping[str, BaseLineExtractor],
    ) -> None:
        self._storage = storage
        self._extractors = dict(extractors)

    def resolve(self, document: DocumentRecord) -> str:
        """Resolve the text of a document.

        Raises:
            ExtractionError: if the source is unreadable, the content type is
                unsupported or the extractor fails.
        """
        content_type = _base_content_type(document.content_type)
        if content_type == PLAIN_TEXT:
            return self._read_plain_text(document)

        extractor = self._extractors.get(content_type)
        if extractor is None:
            raise UnsupportedContentTypeError(
                f"No text extractor for content type '{document.content_type}'"
            )
        data = self._read(document)
        lines = extractor.extract_lines(data)
        Log.info(f"Extracted {len(lines)} lines from document {document.id}")
        return "\n".join(lines)

    def _read_plain_text(self, document: DocumentRecord) -> str:
        data = self._read(document)
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ExtractionError(
                f"Document {document.id} is not valid UTF-8 text: {exc}"
            ) from exc
        Log.info(f"Read {len(text)} chars of plain text from document {document.id}")
        return text

    def _read(self, document: DocumentRecord) -> bytes:
        try:
            return self._storage.read(document.location)
        except StorageError as exc:
            raise ExtractionError(f"Cannot read document {document.id}: {exc}") from exc


def _base_content_type(content_type: str) -> str:
    return content_type.split(";", 1)[0].strip().lower()
