"""Handling audio."""

import logging
from typing import BinaryIO, Optional

from fastapi import Depends

from src.services.ai.openai_client import OpenAIClient
from src.services.errors import ConfigurationError, ProviderError, ValidationError
from src.services.settings.runtime_config import ConfigManager, get_config_manager

logger = logging.getLogger(__name__)


class TranscriptionService:
    """Turn uploaded audio into text."""

    def __init__(self, client: Optional[OpenAIClient]) -> None:
        self.client = client

    def transcribe(self, audio: BinaryIO, filename: str = "audio.mp3") -> str:
        """
        Audio to text.

        Raises:
            ConfigurationError: no OpenAI credentials.
            ProviderError: the transcription call failed.
            ValidationError: the transcription came back empty.
        """
        if self.client is None:
            raise ConfigurationError("OpenAI integration is not configured.")

        try:
            text = self.client.transcribe(audio, filename)
        except Exception as exc:
            logger.error("OpenAI transcription error: %s", exc)
            raise ProviderError(f"OpenAI transcription error: {exc}") from exc

        text = text.strip()
        if not text:
            raise ValidationError("The audio file could not be transcribed into text.")
        return text


def get_transcription_service(
    config_manager: ConfigManager = Depends(get_config_manager),
) -> TranscriptionService:
    return TranscriptionService(config_manager.integrations.openai)
