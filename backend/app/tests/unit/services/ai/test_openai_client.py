"""Test OpenAIClient against a mocked SDK."""

import io
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from src.services.ai.openai_client import OpenAIClient


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class TestOpenAIClient:
    """Test cases for OpenAIClient."""

    def setup_method(self) -> None:
        self.patcher = patch("src.services.ai.openai_client.OpenAI")
        self.mock_openai_cls = self.patcher.start()
        self.mock_sdk = MagicMock()
        self.mock_openai_cls.return_value = self.mock_sdk
        self.client = OpenAIClient(
            api_key="sk-test", model="gpt-4o-mini", transcription_language="tr"
        )

    def teardown_method(self) -> None:
        self.patcher.stop()

    def test_complete_returns_content(self) -> None:
        self.mock_sdk.chat.completions.create.return_value = _completion("Hello")

        assert self.client.complete([{"role": "user", "content": "Hi"}], max_tokens=10) == "Hello"
        kwargs = self.mock_sdk.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["max_tokens"] == 10

    def test_complete_json_parses_object(self) -> None:
        self.mock_sdk.chat.completions.create.return_value = _completion('{"priority": "high"}')

        result = self.client.complete_json("system", "user")

        assert result == {"priority": "high"}
        kwargs = self.mock_sdk.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}

    def test_complete_json_rejects_non_objects(self) -> None:
        self.mock_sdk.chat.completions.create.return_value = _completion("[1, 2]")

        with pytest.raises(ValueError):
            self.client.complete_json("system", "user")

    def test_transcribe_sends_file_and_language(self) -> None:
        self.mock_sdk.audio.transcriptions.create.return_value = SimpleNamespace(text="Merhaba")

        text = self.client.transcribe(io.BytesIO(b"abc"), "call.mp3")

        assert text == "Merhaba"
        kwargs = self.mock_sdk.audio.transcriptions.create.call_args.kwargs
        assert kwargs["file"] == ("call.mp3", b"abc")
        assert kwargs["language"] == "tr"
        assert kwargs["model"] == "whisper-1"
