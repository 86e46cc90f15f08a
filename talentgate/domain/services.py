"""
===============================================================================
CRC CARD — domain/services.py
===============================================================================

Module:
    Service ports (Protocols) for the AI helper endpoints

Responsibilities:
    - EmbeddingService: text -> vector.
    - LLMService: prompt -> text.
    - ResumeTextExtractor: uploaded resume bytes -> plain text.

Collaborators:
    - infrastructure/services/*: Google + fake implementations.
    - infrastructure/parsers/*: pypdf-based extractor.
    - application/*, api/ai_routes.py: consumers.
===============================================================================
"""

from __future__ import annotations

from typing import Protocol


class EmbeddingService(Protocol):
    """Embedding provider contract."""

    def embed_text(self, text: str) -> list[float]: ...

    @property
    def model_id(self) -> str: ...


class LLMService(Protocol):
    """Text generation contract."""

    def generate_text(self, prompt: str) -> str: ...

    @property
    def model_id(self) -> str: ...


class ResumeTextExtractor(Protocol):
    """Resume file -> text."""

    def extract_text(self, mime_type: str, content: bytes) -> str: ...
