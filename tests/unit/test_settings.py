import pytest
from pydantic import ValidationError

from report_audit.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_batch_concurrency(self) -> None:
        s = Settings()
        assert s.batch_concurrency == 3

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pdfplumber"

    def test_default_judgment_provider(self) -> None:
        s = Settings()
        assert s.judgment_provider == "dashscope"
        assert s.judgment_dashscope_model_name == "qwen-turbo"

    def test_default_judgment_timeout(self) -> None:
        s = Settings()
        assert s.judgment_timeout_seconds == 30

    def test_default_temperature_is_low(self) -> None:
        s = Settings()
        assert 0.0 <= s.judgment_temperature <= 0.2


class TestSettingsFromEnv:
    def test_loads_app_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_ENV", "production")
        s = Settings()
        assert s.app_env == "production"

    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_batch_concurrency(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BATCH_CONCURRENCY", "5")
        s = Settings()
        assert s.batch_concurrency == 5

    def test_loads_provider_credentials(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JUDGMENT_PROVIDER", "openai")
        monkeypatch.setenv("JUDGMENT_OPENAI_API_KEY", "sk-test")
        s = Settings()
        assert s.judgment_provider == "openai"
        assert s.judgment_openai_api_key == "sk-test"


class TestSettingsValidation:
    def test_invalid_timeout_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JUDGMENT_TIMEOUT_SECONDS", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    @pytest.mark.parametrize(
        "variable",
        ["BATCH_CONCURRENCY", "JUDGMENT_TIMEOUT_SECONDS", "JUDGMENT_MAX_CONTENT_CHARS"],
    )
    def test_non_positive_limits_raise(
        self, monkeypatch: pytest.MonkeyPatch, variable: str
    ) -> None:
        monkeypatch.setenv(variable, "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_concurrency_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("BATCH_CONCURRENCY", "abc")
        with pytest.raises(ValidationError):
            Settings()
