"""
Adapters: Loyalty change notification channels.

Implements ChangeNotifierPort:
    - LoggingChangeNotifier: writes the event to the log (messaging disabled).
    - WebhookChangeNotifier: POSTs the event JSON to a configured URL.

Delivery is best effort. Callers treat any error as non-fatal.
"""

import json
import logging
from typing import Optional
from urllib.parse import urlparse

import httpx

from account_service.domain.account.entities import LoyaltyChange
from account_service.domain.account.errors import UpstreamUnavailableError
from account_service.domain.account.ports import ChangeNotifierPort

logger = logging.getLogger(__name__)


class LoggingChangeNotifier(ChangeNotifierPort):
    """Records loyalty changes in the application log only."""

    def publish(self, change: LoyaltyChange) -> None:
        logger.info("Loyalty change (messaging disabled): %s", json.dumps(change.to_dict()))


class WebhookChangeNotifier(ChangeNotifierPort):
    """Delivers loyalty changes to an HTTP endpoint.

    Args:
        url: Full URL (must be http/https).
        queue: Logical destination name, sent as the X-StockTrader-Queue header.
        timeout: HTTP timeout in seconds.
        client: Optional pre-built httpx client (used in tests).

    Raises:
        ValueError: If the URL is invalid.
    """

    def __init__(
        self,
        url: str,
        queue: str = "LoyaltyLevelChange",
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https"):
            msg = f"Invalid webhook URL scheme: {parsed.scheme}"
            raise ValueError(msg)
        self._url = url
        self._queue = queue
        self._timeout = timeout
        self._client = client

    def publish(self, change: LoyaltyChange) -> None:
        """POST the change event.

        Raises:
            UpstreamUnavailableError: If the webhook call fails.
        """
        headers = {
            "Content-Type": "application/json",
            "X-StockTrader-Queue": self._queue,
        }
        try:
            if self._client is not None:
                response = self._client.post(
                    self._url, json=change.to_dict(), headers=headers, timeout=self._timeout
                )
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.post(self._url, json=change.to_dict(), headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError("loyalty change webhook", str(exc)) from exc

        logger.info("Sent loyalty change for %s to %s", change.owner, self._queue)
