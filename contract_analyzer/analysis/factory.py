from typing import Any, ClassVar

from contract_analyzer.analysis.analyzer import ContractAnalyzer
from contract_analyzer.analysis.example_client_adapter import ExampleClientAdapter
from contract_analyzer.analysis.openai_client_adapter import OpenAIClientAdapter
from contract_analyzer.config.settings import Settings


class ContractAnalyzerFactory:
    """Creates the analyzer for the configured model provider."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> ContractAnalyzer:
        """Create a configured analyzer from application settings."""
        provider = settings.analysis_provider.lower()
        if provider == "example":
            return ContractAnalyzer(
                client=ExampleClientAdapter(),
                model="example",
                max_tokens=settings.analysis_max_tokens,
            )
        base_url = cls._resolve_base_url(provider, settings)
        model = cls._provider_setting(provider, "model_name", settings)
        if not model:
            raise ValueError(
                f"analysis_{provider}_model_name is required for analysis_provider={provider}"
            )
        client = OpenAIClientAdapter(
            api_key=cls._provider_setting(provider, "api_key", settings),
            timeout_seconds=cls._provider_setting(provider, "timeout_seconds", settings),
            base_url=base_url,
        )
        return ContractAnalyzer(
            client=client,
            model=model,
            max_tokens=settings.analysis_max_tokens,
            temperature=settings.analysis_temperature,
        )

    @classmethod
    def supported_providers(cls) -> list[str]:
        return ["example", "openai", "openai_compatible", *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS)]

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.analysis_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "analysis_openai_compatible_base_url is required for "
                    "analysis_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {cls.supported_providers()}"
        )

    @staticmethod
    def _provider_setting(provider: str, name: str, settings: Settings) -> Any:
        return getattr(settings, f"analysis_{provider}_{name}")
