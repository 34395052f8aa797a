"""
Use case: Read an account, optionally refreshing its loyalty tier.

Input: GetAccountQuery (account_id, optional portfolio_total, acting_user)
Output: AccountResult
Side effects: When a portfolio total is given and it moves the loyalty tier
    or next commission, the account is persisted. Otherwise the store is
    not written. No commission is charged.
Failure cases: AccountNotFoundError.
"""

import logging

from account_service.application.account.dtos import (
    AccountResult,
    GetAccountByOwnerQuery,
    GetAccountQuery,
)
from account_service.application.account.recalculate_loyalty import LoyaltyRecalculator
from account_service.domain.account.errors import AccountNotFoundError
from account_service.domain.account.ports import AccountRepository

logger = logging.getLogger(__name__)


class GetAccountUseCase:
    """Fetches an account by id."""

    def __init__(
        self,
        account_repo: AccountRepository,
        recalculator: LoyaltyRecalculator,
    ) -> None:
        self._account_repo = account_repo
        self._recalculator = recalculator

    def execute(self, query: GetAccountQuery) -> AccountResult:
        """Run the account retrieval use case.

        Args:
            query: Account id and optional portfolio total.

        Returns:
            The account, refreshed when a total was supplied.

        Raises:
            AccountNotFoundError: If the id does not resolve.
        """
        account = self._account_repo.get(query.account_id)
        if account is None:
            logger.warning("No account found for id=%s", query.account_id)
            raise AccountNotFoundError(query.account_id)

        if query.portfolio_total is not None:
            before = (account.loyalty, account.next_commission)
            self._recalculator.recalculate(
                account, query.portfolio_total, query.acting_user
            )
            if (account.loyalty, account.next_commission) != before:
                account = self._account_repo.put(account)

        return AccountResult.from_entity(account)


class GetAccountByOwnerUseCase:
    """Fetches the account belonging to an owner."""

    def __init__(self, account_repo: AccountRepository) -> None:
        self._account_repo = account_repo

    def execute(self, query: GetAccountByOwnerQuery) -> AccountResult:
        account = self._account_repo.get_by_owner(query.owner)
        if account is None:
            logger.warning("No account found for owner=%s", query.owner)
            raise AccountNotFoundError(query.owner)
        return AccountResult.from_entity(account)
