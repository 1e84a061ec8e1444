"""Runtime configuration snapshots and the provider clients derived from them.

Environment settings (``configs.Settings``) are merged with the
``system_settings`` table into an immutable ``RuntimeConfig``. Each snapshot
owns an ``Integrations`` bundle with one client per configured provider.
``ConfigManager.reload`` swaps both at once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from fastapi import Request
from sqlalchemy.orm import Session

from configs import Settings
from src.repositories.crm.crud.system_settings_crud import CRUDSystemSetting
from src.services.ai.openai_client import OpenAIClient
from src.services.messaging.email.smtp_client import SMTPMailer
from src.services.messaging.whatsapp.twilio_client import TwilioWhatsAppClient

logger = logging.getLogger(__name__)


def _pick(overrides: Mapping[str, Optional[str]], key: str, fallback: Optional[str]) -> Optional[str]:
    """Stored value when it is non-blank, otherwise the environment value."""
    value = overrides.get(key)
    if value is not None and str(value).strip():
        return str(value).strip()
    return fallback


@dataclass(frozen=True)
class RuntimeConfig:
    """Immutable view of every setting the services need."""

    openai_api_key: Optional[str]
    openai_model: str
    transcription_model: str
    transcription_language: Optional[str]
    twilio_account_sid: Optional[str]
    twilio_auth_token: Optional[str]
    twilio_whatsapp_number: Optional[str]
    smtp_host: Optional[str]
    smtp_port: int
    smtp_user: Optional[str]
    smtp_pass: Optional[str]
    annotation_min_length: int = 50
    annotation_confidence: float = 0.85
    note_task_due_days: int = 2
    analysis_task_due_days: int = 1
    phone_match_digits: int = 10

    @classmethod
    def from_sources(
        cls, env: Settings, overrides: Optional[Mapping[str, Optional[str]]] = None
    ) -> "RuntimeConfig":
        """Merge env settings with stored overrides (stored non-blank values win)."""
        stored = overrides or {}
        smtp_port = _pick(stored, "smtp_port", None)
        return cls(
            openai_api_key=_pick(stored, "openai_api_key", env.OPENAI_API_KEY),
            openai_model=env.OPENAI_MODEL,
            transcription_model=env.TRANSCRIPTION_MODEL,
            transcription_language=env.TRANSCRIPTION_LANGUAGE,
            twilio_account_sid=_pick(stored, "twilio_account_sid", env.TWILIO_ACCOUNT_SID),
            twilio_auth_token=_pick(stored, "twilio_auth_token", env.TWILIO_AUTH_TOKEN),
            twilio_whatsapp_number=_pick(
                stored, "twilio_whatsapp_number", env.TWILIO_WHATSAPP_NUMBER
            ),
            smtp_host=_pick(stored, "smtp_host", env.SMTP_HOST),
            smtp_port=int(smtp_port) if smtp_port and smtp_port.isdigit() else env.SMTP_PORT,
            smtp_user=_pick(stored, "smtp_user", env.SMTP_USER),
            smtp_pass=_pick(stored, "smtp_pass", env.SMTP_PASS),
            annotation_min_length=env.ANNOTATION_MIN_LENGTH,
            annotation_confidence=env.ANNOTATION_CONFIDENCE,
            note_task_due_days=env.NOTE_TASK_DUE_DAYS,
            analysis_task_due_days=env.ANALYSIS_TASK_DUE_DAYS,
            phone_match_digits=env.PHONE_MATCH_DIGITS,
        )


@dataclass(frozen=True)
class Integrations:
    """Provider clients for one configuration snapshot; ``None`` means unconfigured."""

    openai: Optional[OpenAIClient] = None
    whatsapp: Optional[TwilioWhatsAppClient] = None
    mailer: Optional[SMTPMailer] = None


def build_integrations(config: RuntimeConfig) -> Integrations:
    """Create a client for every provider that has credentials."""
    openai_client = None
    if config.openai_api_key:
        try:
            openai_client = OpenAIClient(
                api_key=config.openai_api_key,
                model=config.openai_model,
                transcription_model=config.transcription_model,
                transcription_language=config.transcription_language,
            )
            logger.info("OpenAI initialized")
        except Exception as exc:
            logger.error("OpenAI initialization failed: %s", exc)
    else:
        logger.warning("OpenAI API key not configured")

    whatsapp_client = None
    if config.twilio_account_sid and config.twilio_auth_token:
        try:
            whatsapp_client = TwilioWhatsAppClient(
                config.twilio_account_sid,
                config.twilio_auth_token,
                config.twilio_whatsapp_number,
            )
            logger.info("Twilio initialized")
        except Exception as exc:
            logger.error("Twilio initialization failed: %s", exc)

    mailer = None
    if config.smtp_host and config.smtp_user and config.smtp_pass:
        mailer = SMTPMailer(
            config.smtp_host, config.smtp_port, config.smtp_user, config.smtp_pass
        )
        logger.info("Email transporter initialized")

    return Integrations(openai=openai_client, whatsapp=whatsapp_client, mailer=mailer)


class ConfigManager:
    """Holds the current configuration snapshot and its integrations."""

    def __init__(
        self,
        env: Settings,
        integrations_factory: Callable[[RuntimeConfig], Integrations] = build_integrations,
        settings_repository: Optional[CRUDSystemSetting] = None,
    ) -> None:
        self.env = env
        self._integrations_factory = integrations_factory
        self._settings_repository = settings_repository or CRUDSystemSetting()
        self._config = RuntimeConfig.from_sources(env)
        self._integrations = integrations_factory(self._config)

    @property
    def config(self) -> RuntimeConfig:
        return self._config

    @property
    def integrations(self) -> Integrations:
        return self._integrations

    def reload(self, db: Session) -> RuntimeConfig:
        """Re-read ``system_settings`` and rebuild the snapshot and its clients."""
        overrides = self._settings_repository.as_dict(db)
        config = RuntimeConfig.from_sources(self.env, overrides)
        integrations = self._integrations_factory(config)
        self._config, self._integrations = config, integrations
        logger.info("Settings loaded from database")
        return config


def get_config_manager(request: Request) -> ConfigManager:
    """FastAPI dependency returning the manager stored on the application."""
    manager: ConfigManager = request.app.state.config_manager
    return manager
