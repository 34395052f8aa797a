"""
Loyalty recalculation step shared by the read and settlement use cases.

Input: an Account, the owner's portfolio total, the acting user id.
Output: the loyalty tier now recorded on the account.
Side effects: mutates the account in memory, publishes a LoyaltyChange
    when the tier moves. Never persists.
Failure cases: none surfaced. A failing rule service keeps the current
    tier; a failing notifier is logged and ignored.
"""

import logging
from decimal import Decimal

from account_service.application.account.upstream import (
    LOYALTY_RULES,
    NOTIFIER,
    UpstreamHealth,
)
from account_service.domain.account.entities import Account, LoyaltyChange
from account_service.domain.account.errors import UpstreamUnavailableError
from account_service.domain.account.loyalty import refresh_next_commission, same_tier
from account_service.domain.account.ports import ChangeNotifierPort, LoyaltyRulePort

logger = logging.getLogger(__name__)


class LoyaltyRecalculator:
    """Re-evaluates an account's loyalty tier against a portfolio total."""

    def __init__(
        self,
        loyalty_port: LoyaltyRulePort,
        notifier: ChangeNotifierPort,
        health: UpstreamHealth,
    ) -> None:
        self._loyalty_port = loyalty_port
        self._notifier = notifier
        self._health = health

    def recalculate(
        self, account: Account, portfolio_total: Decimal, acting_user: str = ""
    ) -> str:
        """Apply the current loyalty rule to the account.

        Args:
            account: Account to update in place.
            portfolio_total: Total value of the owner's holdings.
            acting_user: Caller id recorded on the change event.

        Returns:
            The loyalty tier recorded on the account afterwards.
        """
        old_loyalty = account.loyalty
        try:
            loyalty = self._loyalty_port.determine_loyalty(portfolio_total)
        except UpstreamUnavailableError as exc:
            self._health.record_failure(
                LOYALTY_RULES, exc, "Loyalty level will remain unchanged."
            )
            loyalty = old_loyalty

        if not same_tier(old_loyalty, loyalty):
            logger.info(
                "Change in loyalty level detected for owner=%s: %s -> %s",
                account.owner,
                old_loyalty,
                loyalty,
            )
            account.loyalty = loyalty
            self._notify(
                LoyaltyChange(
                    owner=account.owner,
                    old=old_loyalty,
                    new=loyalty,
                    user_id=acting_user,
                )
            )

        refresh_next_commission(account)
        return account.loyalty

    def _notify(self, change: LoyaltyChange) -> None:
        try:
            self._notifier.publish(change)
        except Exception as exc:
            self._health.record_failure(
                NOTIFIER,
                exc,
                "Continuing without notification of change in loyalty level.",
            )
