"""
Adapter: Tone analysis over HTTP.

Implements SentimentPort against a Watson-style tone analyzer. The tone
with the highest score wins; no tones at all means "Unknown".
"""

import logging
from typing import Any, Optional

import httpx

from account_service.domain.account.entities import UNKNOWN_SENTIMENT
from account_service.domain.account.errors import UpstreamUnavailableError
from account_service.domain.account.ports import SentimentPort

logger = logging.getLogger(__name__)

SERVICE_NAME = "Watson Tone Analyzer"


def parse_sentiment(payload: Any) -> str:
    """Pick the best-scoring tone name out of a tone analyzer response.

    Accepts ``{"document_tone": {"tones": [{"score": .., "tone_name": ..}]}}``
    or a flat ``{"sentiment": ..}``.
    """
    if not isinstance(payload, dict):
        raise ValueError(f"unexpected response body: {type(payload).__name__}")

    if "sentiment" in payload and "document_tone" not in payload:
        return str(payload["sentiment"] or UNKNOWN_SENTIMENT)

    document_tone = payload.get("document_tone") or {}
    sentiment = UNKNOWN_SENTIMENT
    best = 0.0
    for tone in document_tone.get("tones") or []:
        score = float(tone.get("score", 0.0))
        if score > best:
            sentiment = tone.get("tone_name") or UNKNOWN_SENTIMENT
            best = score
    return sentiment


class HttpSentimentAdapter(SentimentPort):
    """Posts feedback text to the tone analyzer with HTTP basic auth."""

    def __init__(
        self,
        url: Optional[str],
        username: str,
        password: Optional[str],
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._url = url
        self._auth = httpx.BasicAuth(username, password or "")
        self._timeout = timeout
        self._client = client

    def analyze(self, text: str) -> str:
        """Return the dominant tone of text.

        Raises:
            UpstreamUnavailableError: On missing configuration, transport
                errors, non-2xx responses or unreadable bodies.
        """
        if not self._url:
            raise UpstreamUnavailableError(SERVICE_NAME, "WATSON_URL is not configured")

        logger.info("Calling Watson Tone Analyzer")
        try:
            if self._client is not None:
                response = self._client.post(
                    self._url, json={"text": text}, auth=self._auth, timeout=self._timeout
                )
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.post(self._url, json={"text": text}, auth=self._auth)
            response.raise_for_status()
            return parse_sentiment(response.json())
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamUnavailableError(SERVICE_NAME, str(exc)) from exc
