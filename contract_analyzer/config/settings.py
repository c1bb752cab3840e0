from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "contract_analyzer"
    db_username: str = "contract_analyzer"
    db_password: str = "secret"

    files_root: Path = Path("/app/files")
    max_upload_bytes: int = 10 * 1024 * 1024
    pdf_engine: str = "pdfplumber"

    single_flight_guard: bool = False

    analysis_provider: str = "openai"
    analysis_max_tokens: int = 4000
    analysis_temperature: float = 0.0

    analysis_openai_api_key: str = ""
    analysis_openai_model_name: str = "gpt-4o-mini"
    analysis_openai_timeout_seconds: int = 60

    analysis_openai_compatible_api_key: str = ""
    analysis_openai_compatible_model_name: str = ""
    analysis_openai_compatible_timeout_seconds: int = 60
    analysis_openai_compatible_base_url: str = ""

    analysis_openrouter_api_key: str = ""
    analysis_openrouter_model_name: str = ""
    analysis_openrouter_timeout_seconds: int = 60

    analysis_groq_api_key: str = ""
    analysis_groq_model_name: str = ""
    analysis_groq_timeout_seconds: int = 60

    analysis_together_api_key: str = ""
    analysis_together_model_name: str = ""
    analysis_together_timeout_seconds: int = 60

    analysis_deepseek_api_key: str = ""
    analysis_deepseek_model_name: str = ""
    analysis_deepseek_timeout_seconds: int = 60

    analysis_ollama_api_key: str = "ollama"
    analysis_ollama_model_name: str = ""
    analysis_ollama_timeout_seconds: int = 120
