"""
============================================================
CRC CARD — infrastructure/repositories/in_memory_accounts.py
============================================================
Class: InMemoryAccountRepository

Responsibilities:
  - Store portal accounts in memory (local dev / tests).
  - Enforce unique emails.
  - Flip the onboarding flag.

Collaborators:
  - domain.repositories.AccountRepository (contract)
  - identity.accounts.Account

Constraints:
  - Thread-safe: a Lock guards both indexes.
  - Accounts are frozen dataclasses, so returned objects cannot alias state.
============================================================
"""

from __future__ import annotations

from threading import Lock
from typing import Dict
from uuid import UUID

from ...domain.repositories import AccountRepository
from ...identity.accounts import Account, normalize_email


class InMemoryAccountRepository(AccountRepository):
    """Thread-safe in-memory account table (id -> Account, email -> id)."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._by_id: Dict[UUID, Account] = {}
        self._ids_by_email: Dict[str, UUID] = {}

    def get_by_email(self, email: str) -> Account | None:
        with self._lock:
            account_id = self._ids_by_email.get(normalize_email(email))
            return self._by_id.get(account_id) if account_id else None

    def get_by_id(self, account_id: UUID) -> Account | None:
        with self._lock:
            return self._by_id.get(account_id)

    def add(self, account: Account) -> Account:
        email = normalize_email(account.email)
        with self._lock:
            if email in self._ids_by_email:
                raise ValueError(f"account already exists: {email}")
            self._by_id[account.id] = account
            self._ids_by_email[email] = account.id
        return account

    def mark_onboarded(self, account_id: UUID) -> Account | None:
        with self._lock:
            account = self._by_id.get(account_id)
            if account is None:
                return None
            updated = account.onboarded()
            self._by_id[account_id] = updated
            return updated
