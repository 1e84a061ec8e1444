"""OpenAI client wrapper used for note annotation, customer analysis and transcription."""

import json
from typing import Any, BinaryIO, Optional, cast

from openai import OpenAI, NOT_GIVEN

from src.logger_config import get_logger

logger = get_logger("openai.client")


class OpenAIClient:
    """Wrapper around the OpenAI client to provide chat, JSON and transcription calls."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        transcription_model: str = "whisper-1",
        transcription_language: Optional[str] = None,
    ) -> None:
        """Initialize client with model names and an API key."""
        self.model = model
        self.transcription_model = transcription_model
        self.transcription_language = transcription_language
        self.client = OpenAI(api_key=api_key)

    def complete(
        self,
        messages: list[dict[str, Any]],
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """Call chat completions and return only the content string."""
        response = self.client.chat.completions.create(
            model=self.model,
            messages=cast(Any, messages),
            max_tokens=max_tokens if max_tokens is not None else NOT_GIVEN,
            temperature=temperature if temperature is not None else NOT_GIVEN,
        )
        return response.choices[0].message.content or ""

    def complete_json(
        self,
        system_prompt: str,
        user_content: str,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> dict[str, Any]:
        """Ask for a JSON object and parse it.

        Raises:
            ValueError: when the model output is not a JSON object.
        """
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
            response_format={"type": "json_object"},
            max_tokens=max_tokens if max_tokens is not None else NOT_GIVEN,
            temperature=temperature if temperature is not None else NOT_GIVEN,
        )
        content = response.choices[0].message.content or ""
        parsed = json.loads(content)
        if not isinstance(parsed, dict):
            raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")
        return parsed

    def transcribe(self, audio: BinaryIO, filename: str = "audio.mp3") -> str:
        """Audio to text."""
        transcription = self.client.audio.transcriptions.create(
            model=self.transcription_model,
            file=(filename, audio.read()),
            language=self.transcription_language or NOT_GIVEN,
        )
        logger.info("Transcription finished for %s", filename)
        return str(transcription.text)
