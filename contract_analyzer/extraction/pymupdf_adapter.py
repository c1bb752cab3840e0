import pymupdf

from contract_analyzer.extraction.base import BaseLineExtractor
from contract_analyzer.extraction.exceptions import ExtractionError


class PyMuPdfAdapter(BaseLineExtractor):
    """Extracts text lines from PDF using PyMuPDF."""

    def extract_lines(self, data: bytes) -> list[str]:
        try:
            with pymupdf.open(stream=data, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                lines = [line for page in doc for line in page.get_text().splitlines()]
            return [line for line in lines if line.strip()]
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(f"pymupdf extraction failed: {exc}") from exc
