"""Admin settings: persisted key/values and provider connection tests."""

import logging
from typing import Any, Dict, Mapping, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from src.repositories.crm.crud.system_settings_crud import CRUDSystemSetting
from src.services.errors import ConfigurationError, ProviderError
from src.services.settings.runtime_config import (
    ConfigManager,
    RuntimeConfig,
    get_config_manager,
)

logger = logging.getLogger(__name__)


class SettingsService:
    """Read and write ``system_settings`` and reload the runtime configuration."""

    def __init__(self, repository: CRUDSystemSetting, config_manager: ConfigManager) -> None:
        self.repository = repository
        self.config_manager = config_manager

    def get_settings(self, db: Session) -> Dict[str, Optional[str]]:
        return self.repository.as_dict(db)

    def update_settings(self, db: Session, values: Mapping[str, Any]) -> RuntimeConfig:
        """Upsert every pair, then rebuild the configuration snapshot."""
        for key, value in values.items():
            self.repository.upsert(db, key, None if value is None else str(value))
        db.commit()
        return self.config_manager.reload(db)

    def test_openai(self, db: Session) -> str:
        """Reload settings and run a tiny completion."""
        self.config_manager.reload(db)
        client = self.config_manager.integrations.openai
        if client is None:
            raise ConfigurationError("OpenAI API key is not configured.")
        try:
            return client.complete(
                [{"role": "user", "content": "Hello, this is a test message"}],
                max_tokens=10,
            )
        except Exception as exc:
            logger.error("OpenAI connection test failed: %s", exc)
            raise ProviderError(str(exc)) from exc

    def test_smtp(self) -> None:
        mailer = self.config_manager.integrations.mailer
        if mailer is None:
            raise ConfigurationError("SMTP is not configured.")
        try:
            mailer.verify()
        except Exception as exc:
            logger.error("SMTP connection test failed: %s", exc)
            raise ProviderError(str(exc)) from exc


def get_settings_service(
    repository: CRUDSystemSetting = Depends(),
    config_manager: ConfigManager = Depends(get_config_manager),
) -> SettingsService:
    return SettingsService(repository, config_manager)
