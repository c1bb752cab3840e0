from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from contract_analyzer.analysis.models import AnalysisResult, ModelResponse
from contract_analyzer.database.models import DocumentRecord


class PipelineState(str, Enum):
    RECEIVED = "received"
    EXTRACTING = "extracting"
    ANALYZING = "analyzing"
    INTERPRETING = "interpreting"
    PERSISTING = "persisting"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class PipelineContext:
    document_id: str
    state: PipelineState = PipelineState.RECEIVED
    document: DocumentRecord | None = None
    extracted_text: str = ""
    model_response: ModelResponse | None = None
    analysis: AnalysisResult | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
