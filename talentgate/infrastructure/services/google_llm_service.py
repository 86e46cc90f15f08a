"""
Name: Google Gemini LLM Service Implementation (Adapter)

CRC (Class-Responsibility-Collaboration)
----------------------------------------
Class: GoogleLLMService
Responsibilities:
  - Generate plain text from a prompt (bio generation)
  - Retry transient errors (retry.create_retry_decorator)
  - Map any provider failure to LLMError
Collaborators:
  - google.genai.Client: external SDK
  - retry.create_retry_decorator: resilience
Constraints:
  - Empty prompts are rejected before calling the provider
"""

from __future__ import annotations

import os

from google import genai

from ...crosscutting.exceptions import LLMError
from ...crosscutting.logger import logger
from ...domain.services import LLMService
from .retry import create_retry_decorator


class GoogleLLMService(LLMService):
    """R: Google Gemini implementation of LLMService."""

    DEFAULT_MODEL_ID = "gemini-2.5-flash"

    def __init__(
        self,
        api_key: str | None = None,
        *,
        client: genai.Client | None = None,
        model_id: str | None = None,
        retry_decorator=None,
    ) -> None:
        """
        R: Initialize the service (preferably through the container).

        Raises:
            LLMError: if there is no API key and no injected `client`.
        """
        resolved_key = (api_key or os.getenv("GOOGLE_API_KEY") or "").strip()
        if not resolved_key and client is None:
            logger.error("GoogleLLMService: GOOGLE_API_KEY not configured")
            raise LLMError("GOOGLE_API_KEY not configured")

        self._client = client or genai.Client(api_key=resolved_key)
        self._model_id = (model_id or self.DEFAULT_MODEL_ID).strip()

        decorator = retry_decorator or create_retry_decorator()
        self._generate_content = decorator(self._client.models.generate_content)

        logger.info("GoogleLLMService initialized", extra={"model_id": self._model_id})

    @property
    def model_id(self) -> str:
        return self._model_id

    def generate_text(self, prompt: str) -> str:
        if not (prompt or "").strip():
            raise LLMError("Prompt must not be empty")

        try:
            response = self._generate_content(model=self._model_id, contents=prompt)
        except Exception as exc:
            logger.error(
                "GoogleLLMService: Text generation failed",
                exc_info=True,
                extra={"model_id": self._model_id, "error_type": type(exc).__name__},
            )
            raise LLMError("Failed to generate text", original_error=exc) from exc

        text = (getattr(response, "text", "") or "").strip()
        logger.info(
            "GoogleLLMService: Text generated",
            extra={"model_id": self._model_id, "text_chars": len(text)},
        )
        return text
