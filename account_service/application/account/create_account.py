"""
Use case: Open an account for a new owner.

Input: CreateAccountCommand (owner)
Output: AccountResult
Side effects: Persists a new account with default balances.
Failure cases: InvalidOwnerError, AccountAlreadyExistsError.
"""

import logging

from account_service.application.account.dtos import AccountResult, CreateAccountCommand
from account_service.domain.account.entities import Account
from account_service.domain.account.errors import (
    AccountAlreadyExistsError,
    InvalidOwnerError,
)
from account_service.domain.account.ports import AccountRepository

logger = logging.getLogger(__name__)

# Creating an account with this owner always fails; used by test harnesses.
FAIL_OWNER = "FAIL"


class CreateAccountUseCase:
    """Creates an account after checking the owner is usable and new."""

    def __init__(self, account_repo: AccountRepository) -> None:
        self._account_repo = account_repo

    def execute(self, command: CreateAccountCommand) -> AccountResult:
        """Run the account creation use case.

        Args:
            command: Contains the owner to open an account for.

        Returns:
            The created account.

        Raises:
            InvalidOwnerError: If the owner is the reserved failure name.
            AccountAlreadyExistsError: If the owner already has an account.
        """
        owner = command.owner
        if owner.upper() == FAIL_OWNER:
            logger.warning("Rejecting account creation for reserved owner=%s", owner)
            raise InvalidOwnerError(owner)

        if self._account_repo.get_by_owner(owner) is not None:
            logger.warning("Account already exists for owner=%s", owner)
            raise AccountAlreadyExistsError(owner)

        account = self._account_repo.put(Account(owner=owner))
        logger.info("Created account id=%s for owner=%s", account.id, owner)
        return AccountResult.from_entity(account)
