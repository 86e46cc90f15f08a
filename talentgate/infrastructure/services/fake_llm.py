"""
Name: Fake LLM Service (Deterministic Test Double)

CRC (Class-Responsibility-Collaboration)
----------------------------------------
Class: FakeLLMService
Responsibilities:
  - Return a deterministic professional bio for a prompt
  - Expose a stable model_id
Collaborators:
  - domain.services.LLMService
Constraints:
  - No IO, no external dependencies
  - Same prompt -> same output
"""

from __future__ import annotations

import hashlib

from ...crosscutting.exceptions import LLMError
from ...crosscutting.logger import logger
from ...domain.services import LLMService


class FakeLLMService(LLMService):
    """R: Deterministic LLMService for tests/CI."""

    MODEL_ID = "fake-llm-v1"

    def __init__(self) -> None:
        logger.debug("FakeLLMService initialized", extra={"model_id": self.MODEL_ID})

    def generate_text(self, prompt: str) -> str:
        normalized = (prompt or "").strip()
        if not normalized:
            raise LLMError("Prompt must not be empty")
        digest = hashlib.sha256(normalized.encode("utf-8")).hexdigest()[:12]
        return (
            "  Motivated professional who turns experience into measurable "
            f"results and thrives in collaborative teams. ({digest})  \n"
        )

    @property
    def model_id(self) -> str:
        return self.MODEL_ID
