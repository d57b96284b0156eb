from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    batch_concurrency: int = Field(default=3, ge=1)

    pdf_engine: str = "pdfplumber"

    judgment_provider: str = "dashscope"
    judgment_timeout_seconds: int = Field(default=30, ge=1)
    judgment_max_content_chars: int = Field(default=80000, ge=1)
    judgment_temperature: float = 0.1
    judgment_max_tokens: int = Field(default=4096, ge=1)

    judgment_openai_api_key: str = ""
    judgment_openai_model_name: str = "gpt-4o-mini"

    judgment_dashscope_api_key: str = ""
    judgment_dashscope_model_name: str = "qwen-turbo"

    judgment_openai_compatible_api_key: str = ""
    judgment_openai_compatible_model_name: str = ""
    judgment_openai_compatible_base_url: str = ""

    judgment_openrouter_api_key: str = ""
    judgment_openrouter_model_name: str = ""

    judgment_deepseek_api_key: str = ""
    judgment_deepseek_model_name: str = "deepseek-chat"

    judgment_ollama_api_key: str = "ollama"
    judgment_ollama_model_name: str = ""
