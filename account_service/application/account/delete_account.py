"""
Use case: Delete an account.

Input: DeleteAccountCommand (account_id)
Output: AccountResult of the removed account
Side effects: Removes the account from the store. Irreversible.
Failure cases: AccountNotFoundError.
"""

import logging

from account_service.application.account.dtos import AccountResult, DeleteAccountCommand
from account_service.domain.account.errors import AccountNotFoundError
from account_service.domain.account.ports import AccountRepository

logger = logging.getLogger(__name__)


class DeleteAccountUseCase:
    """Removes an account and returns what was removed."""

    def __init__(self, account_repo: AccountRepository) -> None:
        self._account_repo = account_repo

    def execute(self, command: DeleteAccountCommand) -> AccountResult:
        account = self._account_repo.get(command.account_id)
        if account is None or not self._account_repo.delete(command.account_id):
            logger.warning("Nothing to delete for id=%s", command.account_id)
            raise AccountNotFoundError(command.account_id)

        logger.info(
            "Deleted account id=%s for owner=%s", command.account_id, account.owner
        )
        return AccountResult.from_entity(account)
