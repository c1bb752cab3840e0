"""Example model client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseModelClient and register the provider in ContractAnalyzerFactory.
"""

import json
from typing import ClassVar

from contract_analyzer.analysis.client_base import BaseModelClient
from contract_analyzer.analysis.models import ModelResponse


class ExampleClientAdapter(BaseModelClient):
    """Example adapter that returns a fixed analysis wrapped in prose.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_ANALYSIS: ClassVar[dict[str, object]] = {
        "keyTerms": [
            {
                "type": "other",
                "value": "Example analysis",
                "confidence": 60,
                "location": "Document",
            }
        ],
        "riskAssessment": {"overallRisk": "low", "risks": [], "totalScore": 20},
        "clauseAnalysis": [],
        "complianceCheck": {
            "overallCompliance": 80,
            "missingClauses": [],
            "nonStandardClauses": [],
            "recommendations": [],
        },
        "executiveSummary": {
            "overview": "Example analysis generated without a model provider",
            "keyHighlights": [],
            "majorConcerns": [],
            "recommendation": "Configure a model provider for real analysis",
        },
        "confidenceScore": 60,
    }

    def __init__(self) -> None:
        pass

    def invoke(
        self,
        *,
        model: str,
        max_tokens: int,
        temperature: float,
        prompt: str,
    ) -> ModelResponse:
        _ = model, max_tokens, temperature, prompt
        text = "Here is the analysis:\n" + json.dumps(self.DEFAULT_ANALYSIS, indent=2)
        return ModelResponse(segments=[text])
