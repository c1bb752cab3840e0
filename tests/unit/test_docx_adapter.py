import pytest

from contract_analyzer.extraction.docx_adapter import DocxAdapter
from contract_analyzer.extraction.exceptions import ExtractionError


class TestDocxAdapter:
    def test_extracts_paragraphs_then_table_cells(self, sample_docx_bytes: bytes) -> None:
        lines = DocxAdapter().extract_lines(sample_docx_bytes)
        assert lines == [
            "MASTER SERVICES AGREEMENT",
            "Payment due within 30 days",
            "Fee",
            "$10,000",
        ]

    def test_skips_blank_paragraphs(self, sample_docx_bytes: bytes) -> None:
        assert all(line.strip() for line in DocxAdapter().extract_lines(sample_docx_bytes))

    def test_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(ExtractionError, match="docx"):
            DocxAdapter().extract_lines(b"not a docx")
