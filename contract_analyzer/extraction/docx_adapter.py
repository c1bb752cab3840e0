import io

from docx import Document

from contract_analyzer.extraction.base import BaseLineExtractor
from contract_analyzer.extraction.exceptions import ExtractionError


class DocxAdapter(BaseLineExtractor):
    """Extracts paragraph and table-cell lines from DOCX using python-docx."""

    def extract_lines(self, data: bytes) -> list[str]:
        try:
            document = Document(io.BytesIO(data))
            texts = [paragraph.text for paragraph in document.paragraphs]
            for table in document.tables:
                for row in table.rows:
                    texts.extend(cell.text for cell in row.cells)
        except Exception as exc:
            raise ExtractionError(f"docx extraction failed: {exc}") from exc
        return [line for text in texts for line in text.splitlines() if line.strip()]
