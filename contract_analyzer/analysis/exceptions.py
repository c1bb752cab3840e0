class AnalysisError(Exception):
    """Base exception for the analysis stage."""


class ModelInvocationError(AnalysisError):
    """Raised when the model call fails (transport, auth, upstream or empty output)."""


class PromptTemplateError(AnalysisError):
    """Raised when the prompt template cannot be loaded or rendered."""
