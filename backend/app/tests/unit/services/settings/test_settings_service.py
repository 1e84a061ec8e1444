"""Test SettingsService."""

from unittest.mock import MagicMock

import pytest

from src.repositories.crm.crud.system_settings_crud import CRUDSystemSetting
from src.services.ai.openai_client import OpenAIClient
from src.services.errors import ConfigurationError, ProviderError
from src.services.messaging.email.smtp_client import SMTPMailer
from src.services.settings.runtime_config import ConfigManager, Integrations
from src.services.settings.settings_service import SettingsService


class TestSettingsService:
    """Test cases for SettingsService."""

    @pytest.fixture(autouse=True)
    def setup(self, db, env_settings) -> None:
        self.db = db
        self.mock_openai = MagicMock(spec=OpenAIClient)
        self.mock_mailer = MagicMock(spec=SMTPMailer)
        self.integrations = Integrations()

        def factory(_config):
            return self.integrations

        self.manager = ConfigManager(env_settings, integrations_factory=factory)
        self.service = SettingsService(CRUDSystemSetting(), self.manager)

    def test_update_settings_upserts_and_reloads(self) -> None:
        self.service.update_settings(self.db, {"app_name": "Agency", "smtp_port": 2525})
        config = self.service.update_settings(self.db, {"app_name": "Agency CRM"})

        assert self.service.get_settings(self.db) == {
            "app_name": "Agency CRM",
            "smtp_port": "2525",
        }
        assert config.smtp_port == 2525
        assert self.manager.config is config

    def test_openai_connection_test(self) -> None:
        self.integrations = Integrations(openai=self.mock_openai)
        self.mock_openai.complete.return_value = "Hello!"

        assert self.service.test_openai(self.db) == "Hello!"
        assert self.mock_openai.complete.call_args.kwargs["max_tokens"] == 10

    def test_openai_connection_test_without_key(self) -> None:
        with pytest.raises(ConfigurationError):
            self.service.test_openai(self.db)

    def test_openai_connection_test_failure(self) -> None:
        self.integrations = Integrations(openai=self.mock_openai)
        self.mock_openai.complete.side_effect = RuntimeError("invalid api key")

        with pytest.raises(ProviderError):
            self.service.test_openai(self.db)

    def test_smtp_connection_test(self) -> None:
        self.integrations = Integrations(mailer=self.mock_mailer)
        self.manager.reload(self.db)

        self.service.test_smtp()

        self.mock_mailer.verify.assert_called_once_with()

    def test_smtp_not_configured(self) -> None:
        with pytest.raises(ConfigurationError):
            self.service.test_smtp()
