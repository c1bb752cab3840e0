from pathlib import Path

from contract_analyzer.analysis.exceptions import PromptTemplateError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the analysis prompt template from a file.

    Args:
        path: Path to the prompt template file.
              Defaults to the bundled analysis_prompt.txt.

    Returns:
        The raw template string with a {document_text} placeholder.

    Raises:
        PromptTemplateError: if the file cannot be read or lacks the placeholder.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "analysis_prompt.txt"
    try:
        template = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptTemplateError(f"Failed to load prompt template: {exc}") from exc
    if "{document_text}" not in template:
        raise PromptTemplateError(
            f"Prompt template {path} has no {{document_text}} placeholder"
        )
    return template
