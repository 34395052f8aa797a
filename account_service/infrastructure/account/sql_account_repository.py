"""
Adapter: SQL account store.

Implements AccountRepository port on top of a SQLAlchemy engine.
SQLite is the default engine; any SQLAlchemy URL works.

Every row carries a ``revision`` counter. Updates only match the row when
the revision is still the one the account was read at, so a concurrent
writer makes the update affect zero rows and a RevisionConflictError is
raised instead of silently overwriting.
"""

import logging
from collections.abc import Collection
from dataclasses import replace
from decimal import Decimal
from typing import Any, Optional
from uuid import uuid4

from sqlalchemy import (
    Column,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    delete,
    insert,
    select,
    update,
)
from sqlalchemy.engine import Engine, RowMapping
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from account_service.domain.account.entities import Account
from account_service.domain.account.errors import (
    AccountAlreadyExistsError,
    RevisionConflictError,
    StoreFailureError,
)
from account_service.domain.account.ports import AccountRepository

logger = logging.getLogger(__name__)

metadata = MetaData()

accounts_table = Table(
    "accounts",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("revision", Integer, nullable=False),
    Column("owner", String(255), nullable=False, unique=True, index=True),
    Column("loyalty", String(32), nullable=False),
    Column("balance", Numeric(14, 2), nullable=False),
    Column("commissions", Numeric(14, 2), nullable=False),
    Column("free", Integer, nullable=False),
    Column("sentiment", String(64), nullable=False),
    Column("next_commission", Numeric(14, 2), nullable=False),
)


def init_schema(engine: Engine) -> None:
    """Create the accounts table if it does not exist."""
    metadata.create_all(engine)


def _to_entity(row: RowMapping) -> Account:
    return Account(
        id=row["id"],
        revision=row["revision"],
        owner=row["owner"],
        loyalty=row["loyalty"],
        balance=Decimal(str(row["balance"])),
        commissions=Decimal(str(row["commissions"])),
        free=row["free"],
        sentiment=row["sentiment"],
        next_commission=Decimal(str(row["next_commission"])),
    )


def _to_values(account: Account) -> dict[str, Any]:
    return {
        "owner": account.owner,
        "loyalty": account.loyalty,
        "balance": account.balance,
        "commissions": account.commissions,
        "free": account.free,
        "sentiment": account.sentiment,
        "next_commission": account.next_commission,
    }


class SqlAccountRepository(AccountRepository):
    """SQLAlchemy implementation of the account store."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get(self, account_id: str) -> Optional[Account]:
        query = select(accounts_table).where(accounts_table.c.id == account_id)
        return self._fetch_one(query, "get")

    def get_by_owner(self, owner: str) -> Optional[Account]:
        query = select(accounts_table).where(accounts_table.c.owner == owner)
        return self._fetch_one(query, "get_by_owner")

    def list(
        self,
        offset: int = 0,
        limit: Optional[int] = None,
        owners: Optional[Collection[str]] = None,
    ) -> list[Account]:
        """Return accounts ordered by owner ascending.

        Args:
            offset: Number of accounts to skip.
            limit: Maximum number of accounts to return. None means all.
            owners: Optional owner filter.

        Returns:
            List of accounts.
        """
        query = select(accounts_table).order_by(accounts_table.c.owner)
        if owners is not None:
            query = query.where(accounts_table.c.owner.in_(list(owners)))
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        try:
            with self._engine.connect() as conn:
                rows = conn.execute(query).mappings().all()
        except SQLAlchemyError as exc:
            raise StoreFailureError("list", str(exc)) from exc
        return [_to_entity(row) for row in rows]

    def put(self, account: Account) -> Account:
        """Insert an account without id, or update one with id.

        Args:
            account: Account to persist.

        Returns:
            A copy of the account with its id and new revision.

        Raises:
            AccountAlreadyExistsError: If the owner is already taken on insert.
            RevisionConflictError: If the stored revision has moved on.
            StoreFailureError: On any other database error.
        """
        if account.id is None:
            return self._insert(account)
        return self._update(account)

    def delete(self, account_id: str) -> bool:
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    delete(accounts_table).where(accounts_table.c.id == account_id)
                )
        except SQLAlchemyError as exc:
            raise StoreFailureError("delete", str(exc)) from exc
        return result.rowcount > 0

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _fetch_one(self, query, operation: str) -> Optional[Account]:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(query).mappings().first()
        except SQLAlchemyError as exc:
            raise StoreFailureError(operation, str(exc)) from exc
        return _to_entity(row) if row is not None else None

    def _insert(self, account: Account) -> Account:
        stored = replace(account, id=uuid4().hex, revision=1)
        values = _to_values(stored)
        values.update(id=stored.id, revision=stored.revision)
        try:
            with self._engine.begin() as conn:
                conn.execute(insert(accounts_table).values(**values))
        except IntegrityError as exc:
            raise AccountAlreadyExistsError(account.owner) from exc
        except SQLAlchemyError as exc:
            raise StoreFailureError("insert", str(exc)) from exc
        return stored

    def _update(self, account: Account) -> Account:
        statement = (
            update(accounts_table)
            .where(accounts_table.c.id == account.id)
            .where(accounts_table.c.revision == account.revision)
            .values(**_to_values(account), revision=account.revision + 1)
        )
        try:
            with self._engine.begin() as conn:
                result = conn.execute(statement)
        except SQLAlchemyError as exc:
            raise StoreFailureError("update", str(exc)) from exc

        if result.rowcount == 0:
            logger.debug(
                "Update of account id=%s matched no row at revision %d",
                account.id,
                account.revision,
            )
            raise RevisionConflictError(account.id, account.revision)

        return replace(account, revision=account.revision + 1)
