"""
Domain entities for the account bounded context.

Entities represent core business objects with identity and lifecycle.
They contain no framework imports and no IO operations.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class LoyaltyTier(Enum):
    """Loyalty levels a portfolio can reach."""

    BASIC = "Basic"
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"
    PLATINUM = "Platinum"
    UNKNOWN = "Unknown"


UNKNOWN_SENTIMENT = "Unknown"

DEFAULT_BALANCE = Decimal("50.00")
DEFAULT_COMMISSION = Decimal("9.99")


@dataclass
class Account:
    """A customer's non-stock account attributes.

    ``id`` and ``revision`` are assigned by the store. ``revision`` is the
    optimistic-concurrency token a write must match.
    """

    owner: str
    id: Optional[str] = None
    loyalty: str = LoyaltyTier.BASIC.value
    balance: Decimal = DEFAULT_BALANCE
    commissions: Decimal = Decimal("0.00")
    free: int = 0
    sentiment: str = UNKNOWN_SENTIMENT
    next_commission: Decimal = DEFAULT_COMMISSION
    revision: int = 0


@dataclass(frozen=True)
class Feedback:
    """Outcome of a feedback submission. Not persisted."""

    message: str
    free: int
    sentiment: str


@dataclass(frozen=True)
class LoyaltyChange:
    """Event emitted when an owner's loyalty tier changes."""

    owner: str
    old: str
    new: str
    user_id: str = ""

    def to_dict(self) -> dict[str, str]:
        """Serialize the event for transport."""
        return {"owner": self.owner, "old": self.old, "new": self.new, "id": self.user_id}
