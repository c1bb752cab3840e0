import io

import pdfplumber

from contract_analyzer.extraction.base import BaseLineExtractor
from contract_analyzer.extraction.exceptions import ExtractionError


class PdfPlumberAdapter(BaseLineExtractor):
    """Extracts text lines from PDF using pdfplumber."""

    def extract_lines(self, data: bytes) -> list[str]:
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                lines = [
                    line["text"]
                    for page in pdf.pages
                    for line in page.extract_text_lines()
                ]
            return [line for line in lines if line.strip()]
        except ExtractionError:
            raise
        except Exception as exc:
            raise ExtractionError(f"pdfplumber extraction failed: {exc}") from exc
