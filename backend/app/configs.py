"""Application settings loaded from environment variables.

Defines all environment-driven configuration used by the app. Values stored in
the ``system_settings`` table take precedence at runtime, see
``src.services.settings.runtime_config``.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Typed configuration model for the application."""

    # Database
    DATABASE_URL: str = "sqlite:///./agency_crm.db"

    # LLM parameters
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    TRANSCRIPTION_MODEL: str = "whisper-1"
    TRANSCRIPTION_LANGUAGE: Optional[str] = "tr"

    # Twilio WhatsApp credentials
    TWILIO_ACCOUNT_SID: Optional[str] = None
    TWILIO_AUTH_TOKEN: Optional[str] = None
    TWILIO_WHATSAPP_NUMBER: Optional[str] = None

    # SMTP
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 587
    SMTP_USER: Optional[str] = None
    SMTP_PASS: Optional[str] = None

    # Interaction log tunables
    ANNOTATION_MIN_LENGTH: int = 50
    ANNOTATION_CONFIDENCE: float = 0.85
    NOTE_TASK_DUE_DAYS: int = 2
    ANALYSIS_TASK_DUE_DAYS: int = 1
    PHONE_MATCH_DIGITS: int = 10

    # Logging
    LOG_LEVEL: str = "INFO"

    # API parameters
    ROOT_PATH_BACKEND: str = ""
    ALLOWED_ORIGINS: list[str] = ["http://localhost:5173"]

    model_config = SettingsConfigDict(env_file=(".env", "../../.env"), extra="ignore")


settings = Settings()
