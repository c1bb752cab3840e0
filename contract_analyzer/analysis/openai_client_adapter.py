import httpx
import openai

from contract_analyzer.analysis.client_base import BaseModelClient
from contract_analyzer.analysis.exceptions import ModelInvocationError
from contract_analyzer.analysis.models import ModelResponse
from contract_analyzer.logging.logger import Log


class OpenAIClientAdapter(BaseModelClient):
    """Model client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def invoke(
        self,
        *,
        model: str,
        max_tokens: int,
        temperature: float,
        prompt: str,
    ) -> ModelResponse:
        try:
            response = self._client.chat.completions.create(
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ModelInvocationError(f"Model provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ModelInvocationError(f"Model provider API error: {exc}") from exc

        if not response.choices:
            raise ModelInvocationError("Model returned no choices")
        segments = [
            choice.message.content
            for choice in response.choices
            if choice.message is not None and choice.message.content
        ]
        if not segments:
            Log.warning("Model returned empty content")
            return ModelResponse(segments=[""])
        return ModelResponse(segments=segments)
