"""
============================================================
CRC CARD — infrastructure/repositories/in_memory_profiles.py
============================================================
Class: InMemoryProfileIndex (+ talent / opportunity stores)

Responsibilities:
  - Store profiles by id, replacing on upsert.
  - Rank stored profiles by cosine similarity to a query embedding.
  - Apply the similarity threshold and the top_k cap.

Collaborators:
  - domain.repositories.TalentProfileRepository / OpportunityRepository
  - domain.entities.TalentProfile, Opportunity, ProfileMatch
  - numpy (vector math)

Constraints:
  - Thread-safe: a Lock guards the table; ranking runs on a snapshot.
  - Profiles without an embedding, or with a different dimension, never match.
  - Ties keep insertion order (stable sort).
============================================================
"""

from __future__ import annotations

from threading import Lock
from typing import Dict, Generic, List
from uuid import UUID

import numpy as np

from ...domain.entities import P, Opportunity, ProfileMatch, TalentProfile
from ...domain.repositories import OpportunityRepository, TalentProfileRepository


def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """Cosine similarity; 0.0 when either vector has zero norm."""
    na = np.linalg.norm(a)
    nb = np.linalg.norm(b)
    if na == 0.0 or nb == 0.0:
        return 0.0
    return float(np.dot(a, b) / (na * nb))


class InMemoryProfileIndex(Generic[P]):
    """Thread-safe id -> profile table with brute-force similarity search."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._by_id: Dict[UUID, P] = {}

    def upsert(self, profile: P) -> P:
        with self._lock:
            self._by_id[profile.id] = profile
        return profile

    def get_by_id(self, profile_id: UUID) -> P | None:
        with self._lock:
            return self._by_id.get(profile_id)

    def find_similar(
        self, embedding: List[float], *, threshold: float, top_k: int
    ) -> List[ProfileMatch[P]]:
        if top_k <= 0 or not embedding:
            return []

        query = np.asarray(embedding, dtype=float)
        with self._lock:
            candidates = list(self._by_id.values())

        scored: List[ProfileMatch[P]] = []
        for profile in candidates:
            if len(profile.embedding) != len(query):
                continue
            score = cosine_similarity(query, np.asarray(profile.embedding, dtype=float))
            if score >= threshold:
                scored.append(ProfileMatch(profile=profile, similarity=score))

        scored.sort(key=lambda m: m.similarity, reverse=True)
        return scored[:top_k]


class InMemoryTalentProfileRepository(
    InMemoryProfileIndex[TalentProfile], TalentProfileRepository
):
    """Talent profiles (local dev / tests)."""


class InMemoryOpportunityRepository(
    InMemoryProfileIndex[Opportunity], OpportunityRepository
):
    """Posted opportunities (local dev / tests)."""
