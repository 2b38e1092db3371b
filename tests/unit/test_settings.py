"""
Unit tests for application settings and adapter wiring.
"""

import pytest
from pydantic import ValidationError

from src.adapters.smtp.client import SmtpMessageClient
from src.adapters.smtp.console import ConsoleMessageClient
from src.api.dependencies import build_message_client
from src.config.settings import Settings


@pytest.fixture(autouse=True)
def no_env_file(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Run each test away from any local .env file."""
    monkeypatch.chdir(tmp_path)


class TestDefaults:
    def test_defaults(self) -> None:
        settings = Settings()

        assert settings.persistence_backend == "memory"
        assert settings.message_client == "console"
        assert settings.confirmation_base_url == "http://localhost:8080"
        assert settings.confirmation_code_length == 10
        assert settings.propagate_delivery_errors is True


class TestEnvironmentOverrides:
    def test_values_come_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CONFIRMATION_BASE_URL", "https://regal.example")
        monkeypatch.setenv("PROPAGATE_DELIVERY_ERRORS", "false")
        monkeypatch.setenv("persistence_backend", "postgres")

        settings = Settings()

        assert settings.confirmation_base_url == "https://regal.example"
        assert settings.propagate_delivery_errors is False
        assert settings.persistence_backend == "postgres"

    def test_short_code_length_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CONFIRMATION_CODE_LENGTH", "6")

        with pytest.raises(ValidationError):
            Settings()

    def test_unknown_backend_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PERSISTENCE_BACKEND", "sqlite")

        with pytest.raises(ValidationError):
            Settings()


class TestBuildMessageClient:
    def test_console_by_default(self) -> None:
        assert isinstance(build_message_client(Settings()), ConsoleMessageClient)

    def test_smtp_when_selected(self) -> None:
        settings = Settings(message_client="smtp", smtp_host="mail.test")

        assert isinstance(build_message_client(settings), SmtpMessageClient)
