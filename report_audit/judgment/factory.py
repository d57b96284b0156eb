from typing import ClassVar

from report_audit.config.settings import Settings
from report_audit.judgment.base import BaseJudge
from report_audit.judgment.client_base import BaseJudgmentClient
from report_audit.judgment.example_client_adapter import ExampleClientAdapter
from report_audit.judgment.judge import Judge
from report_audit.judgment.openai_client_adapter import OpenAIClientAdapter


class JudgeFactory:
    """Creates the configured judge."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "dashscope": "https://dashscope.aliyuncs.com/compatible-mode/v1",
        "openrouter": "https://openrouter.ai/api/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseJudge:
        """Create a configured judge from application settings."""
        provider = settings.judgment_provider.lower()
        if provider == "example":
            return cls._build_judge(ExampleClientAdapter(), "example", settings)
        base_url = cls._resolve_base_url(provider, settings)
        client = OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=settings.judgment_timeout_seconds,
            base_url=base_url,
            provider=provider,
        )
        return cls._build_judge(client, cls._resolve_model_name(provider, settings), settings)

    @classmethod
    def _build_judge(
        cls,
        client: BaseJudgmentClient,
        model: str,
        settings: Settings,
    ) -> Judge:
        return Judge(
            client=client,
            model=model,
            temperature=settings.judgment_temperature,
            max_tokens=settings.judgment_max_tokens,
            timeout_seconds=settings.judgment_timeout_seconds,
            max_content_chars=settings.judgment_max_content_chars,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = (settings.judgment_openai_compatible_base_url or "").strip()
            if not url:
                raise ValueError(
                    "judgment_openai_compatible_base_url is required for "
                    "judgment_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown judgment provider '{provider}'. Choose from: {supported}")

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.judgment_openai_api_key,
            "openai_compatible": settings.judgment_openai_compatible_api_key,
            "dashscope": settings.judgment_dashscope_api_key,
            "openrouter": settings.judgment_openrouter_api_key,
            "deepseek": settings.judgment_deepseek_api_key,
            "ollama": settings.judgment_ollama_api_key,
        }
        return key_map.get(provider, "") or ""

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.judgment_openai_model_name,
            "openai_compatible": settings.judgment_openai_compatible_model_name,
            "dashscope": settings.judgment_dashscope_model_name,
            "openrouter": settings.judgment_openrouter_model_name,
            "deepseek": settings.judgment_deepseek_model_name,
            "ollama": settings.judgment_ollama_model_name,
        }
        return key_map.get(provider, "") or ""
