"""Builds the analysis prompt and sends it to the configured model."""

from contract_analyzer.analysis.client_base import BaseModelClient
from contract_analyzer.analysis.models import ModelResponse
from contract_analyzer.analysis.prompt_builder import PromptBuilder
from contract_analyzer.logging.logger import Log


class ContractAnalyzer:
    """Requests a legal analysis of document text from a generative model."""

    def __init__(
        self,
        *,
        client: BaseModelClient,
        model: str,
        max_tokens: int = 4000,
        temperature: float = 0.0,
        prompt_builder: PromptBuilder | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = max(0.0, min(1.0, temperature))
        self._prompt_builder = prompt_builder if prompt_builder is not None else PromptBuilder()

    def request_analysis(self, text: str) -> ModelResponse:
        """Send the analysis prompt for text to the model.

        Raises:
            ModelInvocationError: if the model call fails.
        """
        prompt = self._prompt_builder.build(text)
        Log.debug(f"Analysis prompt:\n{prompt}")

        response = self._client.invoke(
            model=self._model,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
            prompt=prompt,
        )
        Log.debug(f"Model raw response:\n{response.text}")
        Log.info(f"Model {self._model} returned {len(response.text)} chars")
        return response
