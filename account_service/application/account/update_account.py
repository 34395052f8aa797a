"""
Use case: Settle a trade against an account.

Input: UpdateAccountCommand (account_id, portfolio_total, acting_user)
Output: AccountResult
Side effects: Re-evaluates the loyalty tier (may publish a LoyaltyChange),
    uses a free trade or charges the tier's commission, persists the account.
Failure cases: AccountNotFoundError, RevisionConflictError (after one
    retry), StoreFailureError.

Concurrent settlements against the same account are reconciled by the
store's revision check. On a conflict the latest version is reloaded, the
loyalty tier determined for this call is set on it and the same charge is
applied again: a charged trade moves the same amount without touching free
credits, a free trade uses a credit if the latest copy still has one. The
rule service is not asked a second time. The save is retried once.
"""

import logging
from decimal import Decimal

from account_service.application.account.dtos import AccountResult, UpdateAccountCommand
from account_service.application.account.recalculate_loyalty import LoyaltyRecalculator
from account_service.domain.account.entities import Account
from account_service.domain.account.errors import (
    AccountNotFoundError,
    RevisionConflictError,
)
from account_service.domain.account.loyalty import (
    commission_for,
    reapply_trade,
    settle_trade,
)
from account_service.domain.account.ports import AccountRepository

logger = logging.getLogger(__name__)


class UpdateAccountUseCase:
    """Orchestrates loyalty recalculation and commission settlement."""

    def __init__(
        self,
        account_repo: AccountRepository,
        recalculator: LoyaltyRecalculator,
    ) -> None:
        self._account_repo = account_repo
        self._recalculator = recalculator

    def execute(self, command: UpdateAccountCommand) -> AccountResult:
        """Run the settlement use case.

        Args:
            command: Account id, portfolio total and acting user.

        Returns:
            The updated account.

        Raises:
            AccountNotFoundError: If the id does not resolve.
            RevisionConflictError: If the retried save conflicts again.
        """
        account = self._load(command.account_id)

        loyalty = self._recalculator.recalculate(
            account, command.portfolio_total, command.acting_user
        )
        commission = commission_for(loyalty)
        charged = settle_trade(account, commission)
        self._log_trade(account, charged)

        try:
            saved = self._account_repo.put(account)
        except RevisionConflictError as exc:
            logger.warning(
                "Tried to update account id=%s at revision %d, retrying on latest copy",
                exc.account_id,
                exc.revision,
            )
            latest = self._load(command.account_id)
            latest.loyalty = loyalty
            self._log_trade(latest, reapply_trade(latest, charged, commission))
            saved = self._account_repo.put(latest)

        return AccountResult.from_entity(saved)

    def _load(self, account_id: str) -> Account:
        account = self._account_repo.get(account_id)
        if account is None:
            logger.warning("No account found for id=%s", account_id)
            raise AccountNotFoundError(account_id)
        return account

    @staticmethod
    def _log_trade(account: Account, charged: Decimal) -> None:
        if charged:
            logger.info("Charging commission of $%s for %s", charged, account.owner)
        else:
            logger.info("Using free trade for %s", account.owner)
