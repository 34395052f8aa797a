"""
Domain service: commission, settlement and feedback rules.

Pure business logic for charging trades against an account.
No framework imports. No IO. No side effects beyond the account passed in.
"""

from decimal import Decimal

from account_service.domain.account.entities import (
    DEFAULT_COMMISSION,
    UNKNOWN_SENTIMENT,
    Account,
    Feedback,
    LoyaltyTier,
)

FREE_TRADE = Decimal("0.00")

COMMISSION_RATES: dict[str, Decimal] = {
    LoyaltyTier.BRONZE.value.lower(): Decimal("8.99"),
    LoyaltyTier.SILVER.value.lower(): Decimal("7.99"),
    LoyaltyTier.GOLD.value.lower(): Decimal("6.99"),
    LoyaltyTier.PLATINUM.value.lower(): Decimal("5.99"),
}

ANGER = "Anger"

ANGRY_FREE_TRADES = 3
ANGRY_MESSAGE = "We're sorry you are upset.  Have three free trades on us!"
UNKNOWN_MESSAGE = "Error communicating with the Watson Tone Analyzer"
THANKS_MESSAGE = "Thanks for providing feedback.  Have a free trade on us!"


def commission_for(loyalty: str | None) -> Decimal:
    """Return the flat commission charged at a loyalty tier.

    Basic, Unknown and unrecognised tiers pay the default rate.
    """
    if loyalty is None:
        return DEFAULT_COMMISSION
    return COMMISSION_RATES.get(loyalty.lower(), DEFAULT_COMMISSION)


def same_tier(old: str | None, new: str | None) -> bool:
    """Case-insensitive tier comparison."""
    if old is None or new is None:
        return old is new
    return old.lower() == new.lower()


def refresh_next_commission(account: Account) -> Decimal:
    """Set the commission that will apply to the account's next trade."""
    account.next_commission = (
        FREE_TRADE if account.free > 0 else commission_for(account.loyalty)
    )
    return account.next_commission


def settle_trade(account: Account, commission: Decimal) -> Decimal:
    """Charge one trade against the account.

    Uses a free trade when one is available. Otherwise the commission is
    added to the running total and taken from the balance, which may go
    negative.

    Args:
        account: Account to mutate.
        commission: Rate to charge when no free trade is available.

    Returns:
        The commission actually charged for this trade.
    """
    if account.free > 0:
        account.free -= 1
        charged = FREE_TRADE
    else:
        account.commissions += commission
        account.balance -= commission
        charged = commission

    refresh_next_commission(account)
    return charged


def reapply_trade(account: Account, charged: Decimal, commission: Decimal) -> Decimal:
    """Apply a trade already settled on a stale copy to a newer copy.

    A charged trade moves exactly ``charged`` again and leaves ``free``
    alone, even if credits were granted in between. A trade that used a
    free credit uses one on the newer copy too; if none is left there,
    ``commission`` is charged instead.

    Returns:
        The commission actually charged on the newer copy.
    """
    if charged > FREE_TRADE:
        account.commissions += charged
        account.balance -= charged
        refresh_next_commission(account)
        return charged
    return settle_trade(account, commission)


def feedback_for_sentiment(sentiment: str | None) -> Feedback:
    """Map a tone-analysis label to the free trades it earns."""
    label = sentiment or UNKNOWN_SENTIMENT
    if label.lower() == ANGER.lower():
        return Feedback(message=ANGRY_MESSAGE, free=ANGRY_FREE_TRADES, sentiment=label)
    if label.lower() == UNKNOWN_SENTIMENT.lower():
        return Feedback(message=UNKNOWN_MESSAGE, free=0, sentiment=label)
    return Feedback(message=THANKS_MESSAGE, free=1, sentiment=label)


def apply_feedback(account: Account, feedback: Feedback) -> None:
    """Credit the granted free trades and record the sentiment."""
    account.free += feedback.free
    account.sentiment = feedback.sentiment
    refresh_next_commission(account)
