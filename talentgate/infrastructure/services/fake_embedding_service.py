"""
Name: Fake Embeddings Service (Deterministic Test Double)

CRC (Class-Responsibility-Collaboration)
----------------------------------------
Class: FakeEmbeddingService
Responsibilities:
  - Produce deterministic embeddings (same text -> same vector)
  - Expose a stable `model_id`
Collaborators:
  - domain.services.EmbeddingService (contract)
Constraints:
  - No IO, no network
"""

from __future__ import annotations

import hashlib
import struct
from typing import List

from ...crosscutting.exceptions import EmbeddingError
from ...crosscutting.logger import logger
from ...domain.services import EmbeddingService

DEFAULT_EMBEDDING_DIMENSION = 768


def _hash_to_signed_float(text: str, index: int) -> float:
    """R: Map (text, index) deterministically into [-1, 1)."""
    digest = hashlib.sha256(f"{text}|{index}".encode("utf-8")).digest()
    value_u64 = struct.unpack(">Q", digest[:8])[0]
    return (value_u64 / 2**64) * 2.0 - 1.0


class FakeEmbeddingService(EmbeddingService):
    """R: Deterministic EmbeddingService for tests/CI (not semantic)."""

    MODEL_ID = "fake-embedding-v1"

    def __init__(self, *, dimension: int = DEFAULT_EMBEDDING_DIMENSION) -> None:
        if dimension <= 0:
            raise ValueError("dimension must be > 0")
        self._dimension = dimension
        logger.debug(
            "FakeEmbeddingService initialized",
            extra={"dimension": self._dimension, "model_id": self.MODEL_ID},
        )

    def embed_text(self, text: str) -> List[float]:
        normalized = (text or "").strip()
        if not normalized:
            raise EmbeddingError("Text must not be empty")
        return [_hash_to_signed_float(normalized, i) for i in range(self._dimension)]

    @property
    def model_id(self) -> str:
        return self.MODEL_ID
