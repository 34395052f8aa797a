"""
Shared test fixtures.

Test doubles for the account ports plus an API client whose store and
upstream services are replaced through ``app.dependency_overrides``.
No real database file, network or rate limiting is involved.
"""

import os

os.environ.setdefault("ACCOUNT_STORE", "memory")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from account_service.application.account.recalculate_loyalty import (  # noqa: E402
    LoyaltyRecalculator,
)
from account_service.application.account.upstream import UpstreamHealth  # noqa: E402
from account_service.domain.account.entities import LoyaltyChange  # noqa: E402
from account_service.domain.account.errors import UpstreamUnavailableError  # noqa: E402
from account_service.domain.account.ports import (  # noqa: E402
    ChangeNotifierPort,
    LoyaltyRulePort,
    SentimentPort,
)
from account_service.infrastructure.account.memory_account_repository import (  # noqa: E402
    InMemoryAccountRepository,
)


class StubLoyaltyRules(LoyaltyRulePort):
    """Threshold rule mirroring the sample ODM ruleset."""

    def __init__(self, broken: bool = False) -> None:
        self.broken = broken
        self.calls: list[Decimal] = []

    def determine_loyalty(self, portfolio_total: Decimal) -> str:
        self.calls.append(portfolio_total)
        if self.broken:
            raise UpstreamUnavailableError("ODM loyalty rule", "connection refused")
        if portfolio_total >= 1_000_000:
            return "Platinum"
        if portfolio_total >= 100_000:
            return "Gold"
        if portfolio_total >= 50_000:
            return "Silver"
        if portfolio_total >= 10_000:
            return "Bronze"
        return "Basic"


class StubSentiment(SentimentPort):
    def __init__(self, sentiment: str = "Joy", broken: bool = False) -> None:
        self.sentiment = sentiment
        self.broken = broken
        self.texts: list[str] = []

    def analyze(self, text: str) -> str:
        self.texts.append(text)
        if self.broken:
            raise UpstreamUnavailableError("Watson Tone Analyzer", "timed out")
        return self.sentiment


class RecordingNotifier(ChangeNotifierPort):
    def __init__(self, broken: bool = False) -> None:
        self.broken = broken
        self.changes: list[LoyaltyChange] = []

    def publish(self, change: LoyaltyChange) -> None:
        if self.broken:
            raise RuntimeError("queue manager not available")
        self.changes.append(change)


@pytest.fixture
def repo() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def loyalty_rules() -> StubLoyaltyRules:
    return StubLoyaltyRules()


@pytest.fixture
def sentiment() -> StubSentiment:
    return StubSentiment()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def health() -> UpstreamHealth:
    return UpstreamHealth()


@pytest.fixture
def recalculator(loyalty_rules, notifier, health) -> LoyaltyRecalculator:
    return LoyaltyRecalculator(
        loyalty_port=loyalty_rules, notifier=notifier, health=health
    )


@pytest.fixture
def client(repo, loyalty_rules, sentiment, notifier, health):
    """TestClient wired to in-memory doubles."""
    from account_service.interfaces.account import dependencies
    from account_service.main import app

    app.dependency_overrides.update(
        {
            dependencies.get_account_repository: lambda: repo,
            dependencies.get_loyalty_rule_port: lambda: loyalty_rules,
            dependencies.get_sentiment_port: lambda: sentiment,
            dependencies.get_change_notifier: lambda: notifier,
            dependencies.get_upstream_health: lambda: health,
        }
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
