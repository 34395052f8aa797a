"""
Data Transfer Objects for the account application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from decimal import Decimal

from account_service.domain.account.entities import Account, Feedback


@dataclass(frozen=True)
class CreateAccountCommand:
    """Input DTO for opening an account.

    Attributes:
        owner: External customer identifier.
    """

    owner: str


@dataclass(frozen=True)
class GetAccountQuery:
    """Input DTO for reading an account.

    Attributes:
        account_id: Store-assigned account id.
        portfolio_total: When given, loyalty and next commission are
            refreshed against this total before returning.
        acting_user: Id of the caller, recorded on loyalty change events.
    """

    account_id: str
    portfolio_total: Decimal | None = None
    acting_user: str = ""


@dataclass(frozen=True)
class GetAccountByOwnerQuery:
    """Input DTO for reading the account of an owner."""

    owner: str


@dataclass(frozen=True)
class ListAccountsQuery:
    """Input DTO for listing accounts.

    Attributes:
        page: 1-based page number. Ignored unless page_size is set.
        page_size: Number of accounts per page. None returns every account.
        owners: Optional owner filter.
    """

    page: int = 1
    page_size: int | None = None
    owners: tuple[str, ...] | None = None


@dataclass(frozen=True)
class UpdateAccountCommand:
    """Input DTO for settling a trade against an account.

    Attributes:
        account_id: Store-assigned account id.
        portfolio_total: Current total value of the owner's holdings.
        acting_user: Id of the caller, recorded on loyalty change events.
    """

    account_id: str
    portfolio_total: Decimal
    acting_user: str = ""


@dataclass(frozen=True)
class DeleteAccountCommand:
    """Input DTO for removing an account."""

    account_id: str


@dataclass(frozen=True)
class SubmitFeedbackCommand:
    """Input DTO for submitting customer feedback.

    Attributes:
        account_id: Store-assigned account id.
        text: Free-text feedback to analyze.
    """

    account_id: str
    text: str


@dataclass(frozen=True)
class AccountResult:
    """Output DTO for an account.

    Attributes:
        id: Store-assigned account id.
        owner: External customer identifier.
        loyalty: Current loyalty tier.
        balance: Cash balance.
        commissions: Commissions charged to date.
        free: Free trades remaining.
        sentiment: Last observed sentiment.
        next_commission: Commission that applies to the next trade.
    """

    id: str
    owner: str
    loyalty: str
    balance: Decimal
    commissions: Decimal
    free: int
    sentiment: str
    next_commission: Decimal

    @classmethod
    def from_entity(cls, account: Account) -> "AccountResult":
        return cls(
            id=account.id or "",
            owner=account.owner,
            loyalty=account.loyalty,
            balance=account.balance,
            commissions=account.commissions,
            free=account.free,
            sentiment=account.sentiment,
            next_commission=account.next_commission,
        )


@dataclass(frozen=True)
class FeedbackResult:
    """Output DTO for a feedback submission.

    Attributes:
        message: Message shown to the customer.
        free: Free trades granted by this submission.
        sentiment: Detected sentiment.
    """

    message: str
    free: int
    sentiment: str

    @classmethod
    def from_entity(cls, feedback: Feedback) -> "FeedbackResult":
        return cls(
            message=feedback.message,
            free=feedback.free,
            sentiment=feedback.sentiment,
        )
