"""
Tests for the account domain: commission table, trade settlement and
the feedback policy. Pure functions, no fixtures needed.
"""

from decimal import Decimal

import pytest

from account_service.domain.account.entities import (
    DEFAULT_BALANCE,
    DEFAULT_COMMISSION,
    Account,
    LoyaltyChange,
)
from account_service.domain.account.errors import (
    AccountAlreadyExistsError,
    AccountDomainError,
    RevisionConflictError,
    UpstreamUnavailableError,
)
from account_service.domain.account.loyalty import (
    ANGRY_MESSAGE,
    THANKS_MESSAGE,
    UNKNOWN_MESSAGE,
    apply_feedback,
    commission_for,
    feedback_for_sentiment,
    reapply_trade,
    same_tier,
    settle_trade,
)


class TestAccountDefaults:
    def test_new_account_defaults(self) -> None:
        account = Account(owner="John")
        assert account.id is None
        assert account.loyalty == "Basic"
        assert account.balance == DEFAULT_BALANCE == Decimal("50.00")
        assert account.commissions == Decimal("0.00")
        assert account.free == 0
        assert account.sentiment == "Unknown"
        assert account.next_commission == DEFAULT_COMMISSION == Decimal("9.99")


class TestCommissionTable:
    @pytest.mark.parametrize(
        ("loyalty", "expected"),
        [
            ("Bronze", "8.99"),
            ("Silver", "7.99"),
            ("Gold", "6.99"),
            ("Platinum", "5.99"),
            ("Basic", "9.99"),
            ("Unknown", "9.99"),
            ("Diamond", "9.99"),
        ],
    )
    def test_rate_per_tier(self, loyalty, expected) -> None:
        assert commission_for(loyalty) == Decimal(expected)

    def test_tier_names_are_case_insensitive(self) -> None:
        assert commission_for("GOLD") == Decimal("6.99")
        assert commission_for("platinum") == Decimal("5.99")

    def test_missing_tier_pays_default(self) -> None:
        assert commission_for(None) == DEFAULT_COMMISSION

    def test_same_tier_ignores_case(self) -> None:
        assert same_tier("gold", "Gold")
        assert not same_tier("Silver", "Gold")
        assert same_tier(None, None)
        assert not same_tier(None, "Basic")


class TestSettleTrade:
    def test_charges_commission_when_no_free_trades(self) -> None:
        account = Account(owner="John", loyalty="Gold")
        charged = settle_trade(account, Decimal("6.99"))

        assert charged == Decimal("6.99")
        assert account.balance == Decimal("43.01")
        assert account.commissions == Decimal("6.99")
        assert account.next_commission == Decimal("6.99")

    def test_uses_free_trade_first(self) -> None:
        account = Account(owner="John", free=2)
        charged = settle_trade(account, Decimal("9.99"))

        assert charged == Decimal("0.00")
        assert account.free == 1
        assert account.balance == Decimal("50.00")
        assert account.commissions == Decimal("0.00")
        assert account.next_commission == Decimal("0.00")

    def test_last_free_trade_restores_tier_rate(self) -> None:
        account = Account(owner="John", loyalty="Silver", free=1)
        settle_trade(account, Decimal("7.99"))
        assert account.free == 0
        assert account.next_commission == Decimal("7.99")

    def test_balance_may_go_negative(self) -> None:
        account = Account(owner="John", balance=Decimal("5.00"))
        settle_trade(account, Decimal("9.99"))
        assert account.balance == Decimal("-4.99")


class TestReapplyTrade:
    def test_charge_moves_same_amount_and_keeps_credits(self) -> None:
        account = Account(owner="John", loyalty="Gold", free=3, balance=Decimal("40.00"))
        charged = reapply_trade(account, Decimal("6.99"), Decimal("6.99"))

        assert charged == Decimal("6.99")
        assert account.free == 3
        assert account.balance == Decimal("33.01")
        assert account.commissions == Decimal("6.99")
        assert account.next_commission == Decimal("0.00")

    def test_free_trade_spends_a_credit_when_available(self) -> None:
        account = Account(owner="John", free=2)
        charged = reapply_trade(account, Decimal("0.00"), Decimal("9.99"))

        assert charged == Decimal("0.00")
        assert account.free == 1
        assert account.balance == Decimal("50.00")

    def test_free_trade_without_credit_is_charged(self) -> None:
        account = Account(owner="John", loyalty="Silver")
        charged = reapply_trade(account, Decimal("0.00"), Decimal("7.99"))

        assert charged == Decimal("7.99")
        assert account.balance == Decimal("42.01")
        assert account.next_commission == Decimal("7.99")


class TestFeedbackPolicy:
    def test_anger_earns_three_trades(self) -> None:
        feedback = feedback_for_sentiment("Anger")
        assert feedback.free == 3
        assert feedback.message == ANGRY_MESSAGE
        assert feedback.sentiment == "Anger"

    def test_unknown_earns_nothing(self) -> None:
        feedback = feedback_for_sentiment("Unknown")
        assert feedback.free == 0
        assert feedback.message == UNKNOWN_MESSAGE

    def test_missing_sentiment_is_unknown(self) -> None:
        assert feedback_for_sentiment(None).sentiment == "Unknown"

    @pytest.mark.parametrize("sentiment", ["Joy", "Sadness", "Tentative"])
    def test_other_tones_earn_one_trade(self, sentiment) -> None:
        feedback = feedback_for_sentiment(sentiment)
        assert feedback.free == 1
        assert feedback.message == THANKS_MESSAGE

    def test_apply_feedback_credits_account(self) -> None:
        account = Account(owner="John", loyalty="Gold", free=1)
        apply_feedback(account, feedback_for_sentiment("Anger"))

        assert account.free == 4
        assert account.sentiment == "Anger"
        assert account.next_commission == Decimal("0.00")


class TestLoyaltyChange:
    def test_to_dict_uses_wire_keys(self) -> None:
        change = LoyaltyChange(owner="John", old="Basic", new="Gold", user_id="admin")
        assert change.to_dict() == {
            "owner": "John",
            "old": "Basic",
            "new": "Gold",
            "id": "admin",
        }


class TestErrors:
    def test_errors_share_base_and_message(self) -> None:
        exc = AccountAlreadyExistsError("John")
        assert isinstance(exc, AccountDomainError)
        assert exc.message == "Account already exists for John!"
        assert str(exc) == exc.message

    def test_conflict_carries_revision(self) -> None:
        exc = RevisionConflictError("abc", 4)
        assert exc.account_id == "abc"
        assert exc.revision == 4

    def test_upstream_error_names_service(self) -> None:
        exc = UpstreamUnavailableError("Watson Tone Analyzer", "timed out")
        assert exc.service == "Watson Tone Analyzer"
        assert "timed out" in exc.message
