"""
FastAPI router for the account bounded context.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas and query constraints.
Error mapping is handled by centralized error handlers.
"""

from decimal import Decimal

from fastapi import APIRouter, Depends, Header, Query, Request

from account_service.application.account.create_account import CreateAccountUseCase
from account_service.application.account.delete_account import DeleteAccountUseCase
from account_service.application.account.dtos import (
    CreateAccountCommand,
    DeleteAccountCommand,
    GetAccountByOwnerQuery,
    GetAccountQuery,
    ListAccountsQuery,
    SubmitFeedbackCommand,
    UpdateAccountCommand,
)
from account_service.application.account.get_account import (
    GetAccountByOwnerUseCase,
    GetAccountUseCase,
)
from account_service.application.account.list_accounts import ListAccountsUseCase
from account_service.application.account.submit_feedback import SubmitFeedbackUseCase
from account_service.application.account.update_account import UpdateAccountUseCase
from account_service.core.config import settings
from account_service.interfaces.account.dependencies import (
    get_account_by_owner_use_case,
    get_account_use_case,
    get_create_account_use_case,
    get_delete_account_use_case,
    get_list_accounts_use_case,
    get_submit_feedback_use_case,
    get_update_account_use_case,
)
from account_service.interfaces.account.schemas import (
    AccountResponse,
    ErrorResponse,
    FeedbackRequest,
    FeedbackResponse,
)
from account_service.shared.security.rate_limiting import ACTING_USER_HEADER, limiter

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get(
    "",
    response_model=list[AccountResponse],
    summary="List accounts",
    description="List accounts in owner order, optionally paged and filtered by owner.",
)
def list_accounts(
    page: int = Query(1, ge=1, description="1-based page number"),
    page_size: int | None = Query(None, ge=1, le=1000, description="Accounts per page"),
    owners: list[str] | None = Query(None, description="Only return these owners"),
    use_case: ListAccountsUseCase = Depends(get_list_accounts_use_case),
) -> list[AccountResponse]:
    """List accounts."""
    query = ListAccountsQuery(
        page=page,
        page_size=page_size,
        owners=tuple(owners) if owners else None,
    )
    return [AccountResponse.from_result(r) for r in use_case.execute(query)]


@router.post(
    "/{owner}",
    response_model=AccountResponse,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Create an account",
    description="Open an account with the default balance for a new owner.",
)
def create_account(
    owner: str,
    use_case: CreateAccountUseCase = Depends(get_create_account_use_case),
) -> AccountResponse:
    """Create an account for an owner."""
    result = use_case.execute(CreateAccountCommand(owner=owner))
    return AccountResponse.from_result(result)


@router.get(
    "/owner/{owner}",
    response_model=AccountResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get an account by owner",
)
def get_account_by_owner(
    owner: str,
    use_case: GetAccountByOwnerUseCase = Depends(get_account_by_owner_use_case),
) -> AccountResponse:
    """Get the account belonging to an owner."""
    result = use_case.execute(GetAccountByOwnerQuery(owner=owner))
    return AccountResponse.from_result(result)


@router.get(
    "/{account_id}",
    response_model=AccountResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get an account",
    description=(
        "Get an account by id. Passing the portfolio total refreshes the "
        "loyalty level and next commission without charging a trade."
    ),
)
def get_account(
    account_id: str,
    total: Decimal | None = Query(None, ge=0, description="Current portfolio total"),
    acting_user: str = Header("", alias=ACTING_USER_HEADER),
    use_case: GetAccountUseCase = Depends(get_account_use_case),
) -> AccountResponse:
    """Get an account by id."""
    query = GetAccountQuery(
        account_id=account_id,
        portfolio_total=total,
        acting_user=acting_user,
    )
    return AccountResponse.from_result(use_case.execute(query))


@router.put(
    "/{account_id}",
    response_model=AccountResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Settle a trade",
    description=(
        "Re-evaluate the loyalty level against the portfolio total, then use "
        "a free trade or charge the commission for that level."
    ),
)
def update_account(
    account_id: str,
    total: Decimal = Query(..., ge=0, description="Current portfolio total"),
    acting_user: str = Header("", alias=ACTING_USER_HEADER),
    use_case: UpdateAccountUseCase = Depends(get_update_account_use_case),
) -> AccountResponse:
    """Settle a trade against an account."""
    command = UpdateAccountCommand(
        account_id=account_id,
        portfolio_total=total,
        acting_user=acting_user,
    )
    return AccountResponse.from_result(use_case.execute(command))


@router.delete(
    "/{account_id}",
    response_model=AccountResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Delete an account",
)
def delete_account(
    account_id: str,
    use_case: DeleteAccountUseCase = Depends(get_delete_account_use_case),
) -> AccountResponse:
    """Delete an account and return what was removed."""
    result = use_case.execute(DeleteAccountCommand(account_id=account_id))
    return AccountResponse.from_result(result)


@router.post(
    "/{account_id}/feedback",
    response_model=FeedbackResponse,
    responses={404: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
    summary="Submit feedback",
    description="Analyze feedback tone and grant free trades accordingly.",
)
@limiter.limit(settings.rate_limit_heavy)
def submit_feedback(
    request: Request,
    account_id: str,
    body: FeedbackRequest,
    use_case: SubmitFeedbackUseCase = Depends(get_submit_feedback_use_case),
) -> FeedbackResponse:
    """Submit feedback for an account."""
    command = SubmitFeedbackCommand(account_id=account_id, text=body.text)
    return FeedbackResponse.from_result(use_case.execute(command))
