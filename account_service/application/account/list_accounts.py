"""
Use case: List accounts.

Input: ListAccountsQuery (optional page, page_size, owners)
Output: list[AccountResult], ordered by owner ascending
Side effects: None.
Failure cases: None.
"""

import logging

from account_service.application.account.dtos import AccountResult, ListAccountsQuery
from account_service.domain.account.ports import AccountRepository

logger = logging.getLogger(__name__)


class ListAccountsUseCase:
    """Pages through the account store."""

    def __init__(self, account_repo: AccountRepository) -> None:
        self._account_repo = account_repo

    def execute(self, query: ListAccountsQuery) -> list[AccountResult]:
        """Run the listing use case.

        Args:
            query: Paging and owner filter.

        Returns:
            Matching accounts, owner ascending.
        """
        offset = 0
        if query.page_size is not None:
            offset = (max(query.page, 1) - 1) * query.page_size

        accounts = self._account_repo.list(
            offset=offset,
            limit=query.page_size,
            owners=query.owners,
        )
        logger.debug("Returning %d accounts", len(accounts))
        return [AccountResult.from_entity(a) for a in accounts]
