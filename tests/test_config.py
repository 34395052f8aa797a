"""Tests for settings loading and adapter selection in the composition root."""

from account_service.core.config import Settings
from account_service.interfaces.account import dependencies
from account_service.infrastructure.account.change_notifier import (
    LoggingChangeNotifier,
    WebhookChangeNotifier,
)
from account_service.infrastructure.account.sql_account_repository import (
    SqlAccountRepository,
)


class TestSettings:
    def test_environment_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("ODM_URL", "http://odm:9060/DecisionService/determineLoyalty")
        monkeypatch.setenv("MESSAGING_ENABLED", "true")
        monkeypatch.setenv("PORT", "9443")

        config = Settings(_env_file=None)

        assert config.odm_url.endswith("determineLoyalty")
        assert config.messaging_enabled is True
        assert config.port == 9443

    def test_defaults(self, monkeypatch) -> None:
        for name in ("ACCOUNT_STORE", "DATABASE_URL", "WATSON_URL"):
            monkeypatch.delenv(name, raising=False)

        config = Settings(_env_file=None)

        assert config.account_store == "sql"
        assert config.is_sqlite()
        assert config.watson_url is None
        assert config.odm_id == "odmAdmin"
        assert config.loyalty_change_queue == "LoyaltyLevelChange"


class TestWiring:
    def test_notifier_logs_when_messaging_disabled(self, monkeypatch) -> None:
        monkeypatch.setattr(dependencies.settings, "messaging_enabled", False)
        assert isinstance(dependencies.get_change_notifier(), LoggingChangeNotifier)

    def test_notifier_needs_a_webhook_url(self, monkeypatch) -> None:
        monkeypatch.setattr(dependencies.settings, "messaging_enabled", True)
        monkeypatch.setattr(dependencies.settings, "loyalty_change_webhook_url", None)
        assert isinstance(dependencies.get_change_notifier(), LoggingChangeNotifier)

        monkeypatch.setattr(
            dependencies.settings,
            "loyalty_change_webhook_url",
            "http://mq-bridge:8080/queues/LoyaltyLevelChange",
        )
        assert isinstance(dependencies.get_change_notifier(), WebhookChangeNotifier)

    def test_sql_store_on_in_memory_sqlite(self, monkeypatch) -> None:
        monkeypatch.setattr(dependencies.settings, "account_store", "sql")
        monkeypatch.setattr(dependencies.settings, "database_url", "sqlite://")
        dependencies.get_db_engine.cache_clear()
        dependencies.get_account_repository.cache_clear()
        try:
            repo = dependencies.get_account_repository()
            assert isinstance(repo, SqlAccountRepository)
            assert repo.list() == []
        finally:
            dependencies.get_db_engine.cache_clear()
            dependencies.get_account_repository.cache_clear()
