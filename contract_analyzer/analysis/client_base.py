from abc import ABC, abstractmethod

from contract_analyzer.analysis.models import ModelResponse


class BaseModelClient(ABC):
    """Contract for provider-specific generative model clients."""

    @abstractmethod
    def invoke(
        self,
        *,
        model: str,
        max_tokens: int,
        temperature: float,
        prompt: str,
    ) -> ModelResponse:
        """Send a single-turn prompt and return the raw response.

        Raises:
            ModelInvocationError: on transport, authentication or upstream
                failure, or when the provider returns no text.
        """
