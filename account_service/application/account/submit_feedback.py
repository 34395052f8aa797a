"""
Use case: Submit customer feedback.

Input: SubmitFeedbackCommand (account_id, text)
Output: FeedbackResult (message, free trades granted, sentiment)
Side effects: Credits free trades and records the sentiment on the account.
Failure cases: AccountNotFoundError. A failing tone analyzer is not an
    error: the sentiment becomes "Unknown" and no trades are granted.
"""

import logging

from account_service.application.account.dtos import FeedbackResult, SubmitFeedbackCommand
from account_service.application.account.upstream import SENTIMENT, UpstreamHealth
from account_service.domain.account.entities import UNKNOWN_SENTIMENT
from account_service.domain.account.errors import (
    AccountNotFoundError,
    UpstreamUnavailableError,
)
from account_service.domain.account.loyalty import apply_feedback, feedback_for_sentiment
from account_service.domain.account.ports import AccountRepository, SentimentPort

logger = logging.getLogger(__name__)


class SubmitFeedbackUseCase:
    """Turns feedback sentiment into free-trade credits."""

    def __init__(
        self,
        account_repo: AccountRepository,
        sentiment_port: SentimentPort,
        health: UpstreamHealth,
    ) -> None:
        self._account_repo = account_repo
        self._sentiment_port = sentiment_port
        self._health = health

    def execute(self, command: SubmitFeedbackCommand) -> FeedbackResult:
        """Run the feedback use case.

        Args:
            command: Account id and the feedback text.

        Returns:
            The feedback outcome, not the updated account.

        Raises:
            AccountNotFoundError: If the id does not resolve.
        """
        account = self._account_repo.get(command.account_id)
        if account is None:
            logger.warning("No account found for id=%s", command.account_id)
            raise AccountNotFoundError(command.account_id)

        try:
            sentiment = self._sentiment_port.analyze(command.text)
        except UpstreamUnavailableError as exc:
            self._health.record_failure(
                SENTIMENT, exc, "Sentiment recorded as Unknown."
            )
            sentiment = UNKNOWN_SENTIMENT

        feedback = feedback_for_sentiment(sentiment)
        logger.info(
            "Feedback from %s has tone %s, granting %d free trades",
            account.owner,
            feedback.sentiment,
            feedback.free,
        )

        apply_feedback(account, feedback)
        self._account_repo.put(account)
        return FeedbackResult.from_entity(feedback)
