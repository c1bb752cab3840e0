from abc import ABC, abstractmethod


class BaseLineExtractor(ABC):
    """Contract for all line-level text extraction adapters."""

    @abstractmethod
    def extract_lines(self, data: bytes) -> list[str]:
        """Extract text lines from document bytes.

        Args:
            data: Raw file content.

        Returns:
            Non-empty text lines in reading order. An empty list when the
            document has no extractable text.

        Raises:
            ExtractionError: if the backend fails to read the document.
        """
