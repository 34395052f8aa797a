"""
Pydantic schemas for account API request/response validation.

These schemas enforce input validation and define the API contract.
Field names follow the JSON the StockTrader front ends already consume
(``nextCommission`` in camelCase).
No business logic belongs here.
"""

from pydantic import BaseModel, ConfigDict, Field

from account_service.application.account.dtos import AccountResult, FeedbackResult

FEEDBACK_MAX_LEN = 10_000


class AccountResponse(BaseModel):
    """An account as returned by every account endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    owner: str
    loyalty: str
    balance: float
    commissions: float
    free: int
    sentiment: str
    next_commission: float = Field(..., alias="nextCommission")

    @classmethod
    def from_result(cls, result: AccountResult) -> "AccountResponse":
        return cls(
            id=result.id,
            owner=result.owner,
            loyalty=result.loyalty,
            balance=float(result.balance),
            commissions=float(result.commissions),
            free=result.free,
            sentiment=result.sentiment,
            next_commission=float(result.next_commission),
        )


class FeedbackRequest(BaseModel):
    """Request schema for the feedback endpoint.

    Attributes:
        text: Free-text feedback passed to the tone analyzer.
    """

    text: str = Field(
        ...,
        min_length=1,
        max_length=FEEDBACK_MAX_LEN,
        description="Customer feedback to analyze",
    )


class FeedbackResponse(BaseModel):
    """Response schema for the feedback endpoint."""

    message: str
    free: int
    sentiment: str

    @classmethod
    def from_result(cls, result: FeedbackResult) -> "FeedbackResponse":
        return cls(message=result.message, free=result.free, sentiment=result.sentiment)


class HealthResponse(BaseModel):
    """Response schema for the health check endpoints."""

    status: str
    version: str
    degraded: list[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    """Standard error response returned by all error handlers."""

    error: str
    detail: str | None = None
