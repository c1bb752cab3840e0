from contract_analyzer.config.settings import Settings
from contract_analyzer.extraction.base import BaseLineExtractor
from contract_analyzer.extraction.docx_adapter import DocxAdapter
from contract_analyzer.extraction.pdfplumber_adapter import PdfPlumberAdapter
from contract_analyzer.extraction.pymupdf_adapter import PyMuPdfAdapter

PDF = "application/pdf"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class ExtractorFactory:
    """Creates the line extractors for each supported content type."""

    PDF_ENGINES: dict[str, type[BaseLineExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> dict[str, BaseLineExtractor]:
        engine = settings.pdf_engine.lower()
        pdf_cls = cls.PDF_ENGINES.get(engine)
        if pdf_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ENGINES)}"
            )
        return {PDF: pdf_cls(), DOCX: DocxAdapter()}
