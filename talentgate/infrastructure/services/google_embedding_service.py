"""
Name: Google Embeddings Service Implementation

Responsibilities:
  - Implement EmbeddingService over the Google Gen AI SDK
  - Embed one text per call with the configured task type
    (default SEMANTIC_SIMILARITY, model gemini-embedding-exp-03-07)
  - Retry transient errors with exponential backoff + jitter

Collaborators:
  - domain.services.EmbeddingService: Interface implementation
  - google.genai: Google Gen AI SDK
  - retry: Resilience helper for transient errors

Notes:
  - Adapter pattern over the Google GenAI SDK
  - Any provider failure surfaces as EmbeddingError
"""

from __future__ import annotations

import os
from typing import Callable

from google import genai

from ...crosscutting.exceptions import EmbeddingError
from ...crosscutting.logger import logger
from ...domain.services import EmbeddingService
from .retry import create_retry_decorator


class GoogleEmbeddingService(EmbeddingService):
    """R: Google implementation of EmbeddingService."""

    MODEL_ID = "gemini-embedding-exp-03-07"
    TASK_TYPE = "SEMANTIC_SIMILARITY"

    def __init__(
        self,
        api_key: str | None = None,
        *,
        client: genai.Client | None = None,
        model_id: str | None = None,
        task_type: str | None = None,
        retry_decorator: Callable | None = None,
    ):
        """
        R: Initialize Google Embedding Service.

        Args:
            api_key: Google API key (preferred: inject via container/config)
            client: Optional pre-built genai.Client (useful for tests)
            model_id: Override model id
            task_type: Override embedding task type
            retry_decorator: Optional tenacity retry decorator

        Raises:
            EmbeddingError: If API key not configured
        """
        resolved_key = (api_key or os.getenv("GOOGLE_API_KEY") or "").strip()
        if not resolved_key and client is None:
            logger.error("GoogleEmbeddingService: GOOGLE_API_KEY not configured")
            raise EmbeddingError("GOOGLE_API_KEY not configured")

        self._model_id = (model_id or self.MODEL_ID).strip()
        self._task_type = (task_type or self.TASK_TYPE).strip()

        self._client = client or genai.Client(api_key=resolved_key)

        # R: Build the retry-wrapped callable once
        decorator = retry_decorator or create_retry_decorator()
        self._embed_content = decorator(self._client.models.embed_content)

        logger.info(
            "GoogleEmbeddingService initialized",
            extra={"model_id": self._model_id, "task_type": self._task_type},
        )

    def embed_text(self, text: str) -> list[float]:
        """R: Embedding for a single text."""
        if not (text or "").strip():
            raise EmbeddingError("Text must not be empty")

        try:
            resp = self._embed_content(
                model=self._model_id,
                contents=text,
                config={"task_type": self._task_type},
            )
        except Exception as exc:
            logger.error(
                "GoogleEmbeddingService: embed_content failed",
                exc_info=True,
                extra={
                    "model_id": self._model_id,
                    "task_type": self._task_type,
                    "error_type": type(exc).__name__,
                },
            )
            raise EmbeddingError(
                "Failed to call embedding provider", original_error=exc
            ) from exc

        embeddings = getattr(resp, "embeddings", None) or []
        values = getattr(embeddings[0], "values", None) if embeddings else None
        if not values:
            raise EmbeddingError("Empty embedding response")

        vector = [float(v) for v in values]
        logger.info(
            "GoogleEmbeddingService: Embedded text",
            extra={
                "model_id": self._model_id,
                "text_chars": len(text),
                "dimensions": len(vector),
            },
        )
        return vector

    @property
    def model_id(self) -> str:
        return self._model_id
