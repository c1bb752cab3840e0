from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from contract_analyzer.analysis.analyzer import ContractAnalyzer
from contract_analyzer.analysis.factory import ContractAnalyzerFactory
from contract_analyzer.analysis.interpreter import ResponseInterpreter, utc_now
from contract_analyzer.analysis.models import AnalysisResult
from contract_analyzer.config.settings import Settings
from contract_analyzer.database.repositories.base import BaseDocumentStore
from contract_analyzer.database.repositories.documents_repository import DocumentsRepository
from contract_analyzer.extraction.factory import ExtractorFactory
from contract_analyzer.extraction.resolver import TextSourceResolver
from contract_analyzer.logging.logger import Log
from contract_analyzer.processor.exceptions import PersistenceError
from contract_analyzer.processor.pipeline import PipelineContext, PipelineStep
from contract_analyzer.processor.steps import (
    AnalyzeStep,
    ExtractTextStep,
    InterpretStep,
    LoadDocumentStep,
    MarkFailedStep,
    PersistResultStep,
)
from contract_analyzer.storage.file_storage import FileStorage


class Processor:
    """Orchestrates the document analysis pipeline.

    Pipeline: load -> extract -> analyze -> interpret -> persist.

    An unknown id fails before any write. A failure while extracting or
    analyzing marks the document failed and re-raises. A failure while
    persisting the result is raised as PersistenceError and leaves the
    document status as it was.
    """

    def __init__(
        self,
        store: BaseDocumentStore,
        resolver: TextSourceResolver,
        analyzer: ContractAnalyzer,
        interpreter: ResponseInterpreter,
        *,
        single_flight: bool = False,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._load_step = LoadDocumentStep(store)
        self._analysis_steps: list[PipelineStep] = [
            ExtractTextStep(resolver),
            AnalyzeStep(analyzer),
            InterpretStep(interpreter),
        ]
        self._persist_step = PersistResultStep(store, clock, single_flight)
        self._mark_failed_step = MarkFailedStep(store, single_flight)

    def process(self, document_id: str) -> AnalysisResult:
        """Run the full pipeline for a document and return its analysis.

        Raises:
            DocumentNotFoundError: if the document does not exist.
            ExtractionError: if the document text cannot be obtained.
            ModelInvocationError: if the model call fails.
            PersistenceError: if the result cannot be stored.
        """
        Log.info(f"Processing document {document_id}")
        context = PipelineContext(document_id=document_id)
        self._load_step.run(context)

        try:
            for step in self._analysis_steps:
                step.run(context)
        except Exception as exc:
            context.error_message = f"{type(exc).__name__}: {exc}"
            self._mark_failed(context)
            raise

        try:
            self._persist_step.run(context)
        except PersistenceError:
            Log.error(f"Failed to persist analysis for document {document_id}")
            raise
        except Exception as exc:
            Log.error(f"Failed to persist analysis for document {document_id}: {exc}")
            raise PersistenceError(
                f"Failed to persist analysis for document {document_id}"
            ) from exc

        if context.analysis is None:
            raise ValueError("PipelineContext.analysis missing after persist")
        Log.info(f"Document {document_id} processed successfully")
        return context.analysis

    def _mark_failed(self, context: PipelineContext) -> None:
        try:
            self._mark_failed_step.run(context)
        except Exception as exc:  # noqa: BLE001
            Log.error(
                f"Could not mark document {context.document_id} as failed "
                f"after '{context.error_message}': {exc}"
            )


def build_processor(
    settings: Settings,
    store: BaseDocumentStore | None = None,
    files_root: Path | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    storage = FileStorage(files_root=files_root or settings.files_root)
    resolver = TextSourceResolver(storage, ExtractorFactory.create(settings))
    return Processor(
        store=store if store is not None else DocumentsRepository(),
        resolver=resolver,
        analyzer=ContractAnalyzerFactory.create(settings),
        interpreter=ResponseInterpreter(),
        single_flight=settings.single_flight_guard,
    )
