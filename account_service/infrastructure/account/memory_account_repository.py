"""
Adapter: In-memory account store.

Implements AccountRepository port with a dict guarded by a lock.
Used for local development (ACCOUNT_STORE=memory) and tests. Data is lost
on restart. Revisions are checked exactly like the SQL store.
"""

from collections.abc import Collection
from dataclasses import replace
from threading import Lock
from typing import Optional
from uuid import uuid4

from account_service.domain.account.entities import Account
from account_service.domain.account.errors import (
    AccountAlreadyExistsError,
    RevisionConflictError,
)
from account_service.domain.account.ports import AccountRepository


class InMemoryAccountRepository(AccountRepository):
    """Dict-backed account store. Hands out copies, never shared instances."""

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}
        self._lock = Lock()

    def get(self, account_id: str) -> Optional[Account]:
        with self._lock:
            account = self._accounts.get(account_id)
            return replace(account) if account is not None else None

    def get_by_owner(self, owner: str) -> Optional[Account]:
        with self._lock:
            for account in self._accounts.values():
                if account.owner == owner:
                    return replace(account)
        return None

    def list(
        self,
        offset: int = 0,
        limit: Optional[int] = None,
        owners: Optional[Collection[str]] = None,
    ) -> list[Account]:
        with self._lock:
            accounts = sorted(self._accounts.values(), key=lambda a: a.owner)
        if owners is not None:
            wanted = set(owners)
            accounts = [a for a in accounts if a.owner in wanted]
        end = None if limit is None else offset + limit
        return [replace(a) for a in accounts[offset:end]]

    def put(self, account: Account) -> Account:
        with self._lock:
            if account.id is None:
                if any(a.owner == account.owner for a in self._accounts.values()):
                    raise AccountAlreadyExistsError(account.owner)
                stored = replace(account, id=uuid4().hex, revision=1)
            else:
                current = self._accounts.get(account.id)
                if current is None or current.revision != account.revision:
                    raise RevisionConflictError(account.id, account.revision)
                stored = replace(account, revision=account.revision + 1)

            self._accounts[stored.id] = stored
            return replace(stored)

    def delete(self, account_id: str) -> bool:
        with self._lock:
            return self._accounts.pop(account_id, None) is not None
