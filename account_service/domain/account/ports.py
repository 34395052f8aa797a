"""
Port interfaces (ABCs) for the account bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.
"""

from abc import ABC, abstractmethod
from collections.abc import Collection
from decimal import Decimal
from typing import Optional

from account_service.domain.account.entities import Account, LoyaltyChange


class AccountRepository(ABC):
    """Port for persisting and retrieving accounts.

    Writes of existing accounts are revision-checked: ``put`` raises
    RevisionConflictError when the stored revision moved on since the
    account was read. Engine failures surface as StoreFailureError.
    """

    @abstractmethod
    def get(self, account_id: str) -> Optional[Account]:
        """Return an account by its id, or None if not found."""
        raise NotImplementedError

    @abstractmethod
    def get_by_owner(self, owner: str) -> Optional[Account]:
        """Return the account belonging to owner, or None if not found."""
        raise NotImplementedError

    @abstractmethod
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
        raise NotImplementedError

    @abstractmethod
    def put(self, account: Account) -> Account:
        """Insert an account without id, or update one with id.

        Returns:
            The stored account with its id and new revision.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, account_id: str) -> bool:
        """Delete an account. Returns False if nothing was deleted."""
        raise NotImplementedError


class LoyaltyRulePort(ABC):
    """Port for the loyalty-level business rule."""

    @abstractmethod
    def determine_loyalty(self, portfolio_total: Decimal) -> str:
        """Return the loyalty tier name for a portfolio total.

        Raises:
            UpstreamUnavailableError: If the rule service cannot be reached.
        """
        raise NotImplementedError


class SentimentPort(ABC):
    """Port for tone analysis of customer feedback."""

    @abstractmethod
    def analyze(self, text: str) -> str:
        """Return the dominant sentiment label for text.

        Raises:
            UpstreamUnavailableError: If the analyzer cannot be reached.
        """
        raise NotImplementedError


class ChangeNotifierPort(ABC):
    """Port for publishing loyalty level changes."""

    @abstractmethod
    def publish(self, change: LoyaltyChange) -> None:
        """Publish a loyalty change event."""
        raise NotImplementedError
