"""
Infrastructure Services (package facade)

Re-exports the provider adapters so the container imports from one place.

Component: infrastructure.services
Responsibilities:
  - Publish the Google adapters, their fakes and the retry helpers
Constraints:
  - No logic here, only re-exports
"""

# ---------------------------------------------------------------------------
# Embeddings
# ---------------------------------------------------------------------------
from .fake_embedding_service import FakeEmbeddingService  # noqa: F401
from .google_embedding_service import GoogleEmbeddingService  # noqa: F401

# ---------------------------------------------------------------------------
# LLM
# ---------------------------------------------------------------------------
from .fake_llm import FakeLLMService  # noqa: F401
from .google_llm_service import GoogleLLMService  # noqa: F401

# ---------------------------------------------------------------------------
# Resilience / Retry utilities
# ---------------------------------------------------------------------------
from .retry import (  # noqa: F401
    PERMANENT_HTTP_CODES,
    TRANSIENT_HTTP_CODES,
    create_retry_decorator,
    is_transient_error,
)

__all__ = [
    "FakeEmbeddingService",
    "GoogleEmbeddingService",
    "FakeLLMService",
    "GoogleLLMService",
    "is_transient_error",
    "create_retry_decorator",
    "TRANSIENT_HTTP_CODES",
    "PERMANENT_HTTP_CODES",
]
