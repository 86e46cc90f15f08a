"""
Unit tests for the Google Gen AI adapters, their fakes and the retry helper.
"""

from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from talentgate.crosscutting.exceptions import EmbeddingError, LLMError
from talentgate.infrastructure.services import (
    FakeEmbeddingService,
    FakeLLMService,
    GoogleEmbeddingService,
    GoogleLLMService,
    create_retry_decorator,
    is_transient_error,
)

pytestmark = pytest.mark.unit


def no_retry(fn):
    return fn


class _ApiError(Exception):
    def __init__(self, code: int, message: str = "api error"):
        super().__init__(message)
        self.code = code


class TestGoogleEmbeddingService:
    def _service(self, client):
        return GoogleEmbeddingService(client=client, retry_decorator=no_retry)

    def test_embed_text_uses_semantic_similarity(self):
        client = Mock()
        client.models.embed_content.return_value = SimpleNamespace(
            embeddings=[SimpleNamespace(values=[0.1, 0.2, 0.3])]
        )

        vector = self._service(client).embed_text("python developer")

        assert vector == [0.1, 0.2, 0.3]
        client.models.embed_content.assert_called_once_with(
            model="gemini-embedding-exp-03-07",
            contents="python developer",
            config={"task_type": "SEMANTIC_SIMILARITY"},
        )

    def test_provider_error_becomes_embedding_error(self):
        client = Mock()
        client.models.embed_content.side_effect = _ApiError(429, "quota")

        with pytest.raises(EmbeddingError) as exc_info:
            self._service(client).embed_text("text")

        assert isinstance(exc_info.value.original_error, _ApiError)

    def test_empty_response_is_an_error(self):
        client = Mock()
        client.models.embed_content.return_value = SimpleNamespace(embeddings=[])

        with pytest.raises(EmbeddingError):
            self._service(client).embed_text("text")

    def test_blank_text_never_reaches_provider(self):
        client = Mock()

        with pytest.raises(EmbeddingError):
            self._service(client).embed_text("   ")

        client.models.embed_content.assert_not_called()

    def test_missing_key_without_client(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_API_KEY", raising=False)

        with pytest.raises(EmbeddingError):
            GoogleEmbeddingService(api_key="", retry_decorator=no_retry)


class TestGoogleLLMService:
    def test_generate_text_strips_response(self):
        client = Mock()
        client.models.generate_content.return_value = SimpleNamespace(text="  Hi.\n")
        service = GoogleLLMService(
            client=client, model_id="gemini-test", retry_decorator=no_retry
        )

        assert service.generate_text("prompt") == "Hi."
        client.models.generate_content.assert_called_once_with(
            model="gemini-test", contents="prompt"
        )
        assert service.model_id == "gemini-test"

    def test_provider_error_becomes_llm_error(self):
        client = Mock()
        client.models.generate_content.side_effect = _ApiError(400, "bad request")
        service = GoogleLLMService(client=client, retry_decorator=no_retry)

        with pytest.raises(LLMError) as exc_info:
            service.generate_text("prompt")

        assert exc_info.value.message == "Failed to generate text"

    def test_transient_error_is_retried(self):
        client = Mock()
        client.models.generate_content.side_effect = [
            _ApiError(503, "unavailable"),
            SimpleNamespace(text="bio"),
        ]
        service = GoogleLLMService(
            client=client,
            retry_decorator=create_retry_decorator(
                max_attempts=2, base_delay=0, max_delay=0.01
            ),
        )

        assert service.generate_text("prompt") == "bio"
        assert client.models.generate_content.call_count == 2


class TestFakes:
    def test_fake_embeddings_are_deterministic(self):
        service = FakeEmbeddingService(dimension=8)

        first = service.embed_text("python")

        assert first == service.embed_text("  python ")
        assert first != service.embed_text("rust")
        assert len(first) == 8
        assert all(-1.0 <= v < 1.0 for v in first)

    def test_fake_llm_is_deterministic(self):
        service = FakeLLMService()
        assert service.generate_text("p") == service.generate_text("p")
        with pytest.raises(LLMError):
            service.generate_text("")


class TestIsTransientError:
    @pytest.mark.parametrize("code", [408, 429, 500, 502, 503, 504])
    def test_transient_codes(self, code):
        assert is_transient_error(_ApiError(code))

    @pytest.mark.parametrize("code", [400, 401, 403, 404])
    def test_permanent_codes(self, code):
        assert not is_transient_error(_ApiError(code, "timed out"))

    def test_io_errors_and_messages(self):
        assert is_transient_error(TimeoutError())
        assert is_transient_error(ConnectionError())
        assert is_transient_error(RuntimeError("Rate limit reached"))
        assert not is_transient_error(ValueError("bad input"))

    def test_invalid_retry_configuration(self):
        with pytest.raises(ValueError):
            create_retry_decorator(max_attempts=0)
