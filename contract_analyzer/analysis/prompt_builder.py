from pathlib import Path

from contract_analyzer.analysis.prompt_loader import load_prompt_template

SECTION_NAMES = (
    "keyTerms",
    "riskAssessment",
    "clauseAnalysis",
    "complianceCheck",
    "executiveSummary",
    "confidenceScore",
)


class PromptBuilder:
    """Renders the analysis instruction for a document's text.

    Pure: the same text always yields the same prompt. The text is embedded
    verbatim, without truncation.
    """

    def __init__(self, template_path: Path | None = None) -> None:
        self._template = load_prompt_template(template_path)

    def build(self, text: str) -> str:
        return self._template.replace("{document_text}", text, 1)
