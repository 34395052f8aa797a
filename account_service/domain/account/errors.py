"""
Domain-specific errors for the account bounded context.

All errors raised from the domain layer must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""


class AccountDomainError(Exception):
    """Base error for all account domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidOwnerError(AccountDomainError):
    """Raised when an account is requested for a reserved owner name."""

    def __init__(self, owner: str) -> None:
        super().__init__(f"Invalid value for account owner: {owner}")
        self.owner = owner


class AccountAlreadyExistsError(AccountDomainError):
    """Raised when creating an account for an owner that already has one."""

    def __init__(self, owner: str) -> None:
        super().__init__(f"Account already exists for {owner}!")
        self.owner = owner


class AccountNotFoundError(AccountDomainError):
    """Raised when no account matches the given id or owner."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Account not found: {key}")
        self.key = key


class RevisionConflictError(AccountDomainError):
    """Raised when a write carries a revision the store no longer holds."""

    def __init__(self, account_id: str, revision: int) -> None:
        super().__init__(
            f"Revision conflict on account {account_id} (revision {revision})"
        )
        self.account_id = account_id
        self.revision = revision


class UpstreamUnavailableError(AccountDomainError):
    """Raised by adapters when a rule, sentiment or notification service fails."""

    def __init__(self, service: str, reason: str) -> None:
        super().__init__(f"{service} unavailable: {reason}")
        self.service = service
        self.reason = reason


class StoreFailureError(AccountDomainError):
    """Raised when the account store cannot complete an operation."""

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"Account store failed during {operation}: {reason}")
        self.operation = operation
        self.reason = reason
