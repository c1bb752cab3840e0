from collections.abc import Callable
from datetime import datetime

from contract_analyzer.analysis.analyzer import ContractAnalyzer
from contract_analyzer.analysis.interpreter import ResponseInterpreter
from contract_analyzer.database.models import DocumentStatus
from contract_analyzer.database.repositories.base import BaseDocumentStore
from contract_analyzer.extraction.resolver import TextSourceResolver
from contract_analyzer.logging.logger import Log
from contract_analyzer.processor.pipeline import PipelineContext, PipelineState, PipelineStep


class LoadDocumentStep(PipelineStep):
    def __init__(self, store: BaseDocumentStore) -> None:
        self._store = store

    def run(self, context: PipelineContext) -> PipelineContext:
        context.document = self._store.find_by_id(context.document_id)
        context.state = PipelineState.EXTRACTING
        Log.info(
            f"Loaded document {context.document_id} "
            f"({context.document.content_type}, {context.document.file_size} bytes)"
        )
        return context


class ExtractTextStep(PipelineStep):
    def __init__(self, resolver: TextSourceResolver) -> None:
        self._resolver = resolver

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.document is None:
            raise ValueError("PipelineContext.document must be set before extraction")
        context.extracted_text = self._resolver.resolve(context.document)
        context.state = PipelineState.ANALYZING
        Log.info(
            f"Extracted {len(context.extracted_text)} chars from document "
            f"{context.document_id}"
        )
        return context


class AnalyzeStep(PipelineStep):
    def __init__(self, analyzer: ContractAnalyzer) -> None:
        self._analyzer = analyzer

    def run(self, context: PipelineContext) -> PipelineContext:
        context.model_response = self._analyzer.request_analysis(context.extracted_text)
        context.state = PipelineState.INTERPRETING
        return context


class InterpretStep(PipelineStep):
    def __init__(self, interpreter: ResponseInterpreter) -> None:
        self._interpreter = interpreter

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.model_response is None:
            raise ValueError("PipelineContext.model_response must be set before interpretation")
        context.analysis = self._interpreter.interpret(context.model_response.text)
        context.state = PipelineState.PERSISTING
        return context


class PersistResultStep(PipelineStep):
    """Writes the completed status and analysis.

    With single_flight enabled the write only succeeds while the document is
    still processing, so only the first finishing attempt is stored.
    """

    def __init__(
        self,
        store: BaseDocumentStore,
        clock: Callable[[], datetime],
        single_flight: bool = False,
    ) -> None:
        self._store = store
        self._clock = clock
        self._single_flight = single_flight

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.analysis is None:
            raise ValueError("PipelineContext.analysis must be set before persist")
        self._store.mark_completed(
            context.document_id,
            context.analysis,
            self._clock(),
            expected_status=DocumentStatus.PROCESSING if self._single_flight else None,
        )
        context.state = PipelineState.DONE
        Log.info(f"Document {context.document_id} marked as completed")
        return context


class MarkFailedStep(PipelineStep):
    def __init__(self, store: BaseDocumentStore, single_flight: bool = False) -> None:
        self._store = store
        self._single_flight = single_flight

    def run(self, context: PipelineContext) -> PipelineContext:
        context.state = PipelineState.FAILED
        self._store.mark_failed(
            context.document_id,
            expected_status=DocumentStatus.PROCESSING if self._single_flight else None,
        )
        Log.error(f"Document {context.document_id} marked as failed: {context.error_message}")
        return context
