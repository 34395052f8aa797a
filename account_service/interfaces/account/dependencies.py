"""
Dependency injection for the account bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the account context.

Long-lived collaborators (the SQL engine, the store, the upstream health
tracker) are built once per process. Use cases are built per request.
Tests replace any of them through ``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from account_service.application.account.create_account import CreateAccountUseCase
from account_service.application.account.delete_account import DeleteAccountUseCase
from account_service.application.account.get_account import (
    GetAccountByOwnerUseCase,
    GetAccountUseCase,
)
from account_service.application.account.list_accounts import ListAccountsUseCase
from account_service.application.account.recalculate_loyalty import LoyaltyRecalculator
from account_service.application.account.submit_feedback import SubmitFeedbackUseCase
from account_service.application.account.update_account import UpdateAccountUseCase
from account_service.application.account.upstream import UpstreamHealth
from account_service.core.config import settings
from account_service.domain.account.ports import (
    AccountRepository,
    ChangeNotifierPort,
    LoyaltyRulePort,
    SentimentPort,
)
from account_service.infrastructure.account.change_notifier import (
    LoggingChangeNotifier,
    WebhookChangeNotifier,
)
from account_service.infrastructure.account.loyalty_rule_adapter import (
    HttpLoyaltyRuleAdapter,
)
from account_service.infrastructure.account.memory_account_repository import (
    InMemoryAccountRepository,
)
from account_service.infrastructure.account.sentiment_adapter import HttpSentimentAdapter
from account_service.infrastructure.account.sql_account_repository import (
    SqlAccountRepository,
    init_schema,
)


@lru_cache
def get_db_engine() -> Engine:
    """Build a SQLAlchemy engine from application settings."""
    if settings.is_sqlite():
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in settings.database_url or settings.database_url == "sqlite://":
            kwargs["poolclass"] = StaticPool
        engine = create_engine(settings.database_url, **kwargs)
    else:
        engine = create_engine(settings.database_url, pool_pre_ping=True)
    init_schema(engine)
    return engine


@lru_cache
def get_account_repository() -> AccountRepository:
    """Build the account store selected by ACCOUNT_STORE."""
    if settings.account_store == "memory":
        return InMemoryAccountRepository()
    return SqlAccountRepository(engine=get_db_engine())


@lru_cache
def get_upstream_health() -> UpstreamHealth:
    """Return the process-wide upstream health tracker."""
    return UpstreamHealth()


def get_loyalty_rule_port() -> LoyaltyRulePort:
    """Build the loyalty rule client from application settings."""
    return HttpLoyaltyRuleAdapter(
        url=settings.odm_url,
        username=settings.odm_id,
        password=settings.odm_pwd,
        timeout=settings.upstream_timeout_seconds,
    )


def get_sentiment_port() -> SentimentPort:
    """Build the tone analyzer client from application settings."""
    return HttpSentimentAdapter(
        url=settings.watson_url,
        username=settings.watson_id,
        password=settings.watson_pwd,
        timeout=settings.upstream_timeout_seconds,
    )


def get_change_notifier() -> ChangeNotifierPort:
    """Build the loyalty change notifier.

    Messaging off, or on without a webhook URL, falls back to logging.
    """
    if settings.messaging_enabled and settings.loyalty_change_webhook_url:
        return WebhookChangeNotifier(
            url=settings.loyalty_change_webhook_url,
            queue=settings.loyalty_change_queue,
            timeout=settings.upstream_timeout_seconds,
        )
    return LoggingChangeNotifier()


def get_loyalty_recalculator(
    loyalty_port: LoyaltyRulePort = Depends(get_loyalty_rule_port),
    notifier: ChangeNotifierPort = Depends(get_change_notifier),
    health: UpstreamHealth = Depends(get_upstream_health),
) -> LoyaltyRecalculator:
    """Build the loyalty recalculation step shared by read and update."""
    return LoyaltyRecalculator(
        loyalty_port=loyalty_port,
        notifier=notifier,
        health=health,
    )


def get_create_account_use_case(
    account_repo: AccountRepository = Depends(get_account_repository),
) -> CreateAccountUseCase:
    """Build CreateAccountUseCase with its infrastructure dependencies."""
    return CreateAccountUseCase(account_repo=account_repo)


def get_account_use_case(
    account_repo: AccountRepository = Depends(get_account_repository),
    recalculator: LoyaltyRecalculator = Depends(get_loyalty_recalculator),
) -> GetAccountUseCase:
    """Build GetAccountUseCase with its infrastructure dependencies."""
    return GetAccountUseCase(account_repo=account_repo, recalculator=recalculator)


def get_account_by_owner_use_case(
    account_repo: AccountRepository = Depends(get_account_repository),
) -> GetAccountByOwnerUseCase:
    """Build GetAccountByOwnerUseCase with its infrastructure dependencies."""
    return GetAccountByOwnerUseCase(account_repo=account_repo)


def get_list_accounts_use_case(
    account_repo: AccountRepository = Depends(get_account_repository),
) -> ListAccountsUseCase:
    """Build ListAccountsUseCase with its infrastructure dependencies."""
    return ListAccountsUseCase(account_repo=account_repo)


def get_update_account_use_case(
    account_repo: AccountRepository = Depends(get_account_repository),
    recalculator: LoyaltyRecalculator = Depends(get_loyalty_recalculator),
) -> UpdateAccountUseCase:
    """Build UpdateAccountUseCase with its infrastructure dependencies."""
    return UpdateAccountUseCase(account_repo=account_repo, recalculator=recalculator)


def get_delete_account_use_case(
    account_repo: AccountRepository = Depends(get_account_repository),
) -> DeleteAccountUseCase:
    """Build DeleteAccountUseCase with its infrastructure dependencies."""
    return DeleteAccountUseCase(account_repo=account_repo)


def get_submit_feedback_use_case(
    account_repo: AccountRepository = Depends(get_account_repository),
    sentiment_port: SentimentPort = Depends(get_sentiment_port),
    health: UpstreamHealth = Depends(get_upstream_health),
) -> SubmitFeedbackUseCase:
    """Build SubmitFeedbackUseCase with its infrastructure dependencies."""
    return SubmitFeedbackUseCase(
        account_repo=account_repo,
        sentiment_port=sentiment_port,
        health=health,
    )
