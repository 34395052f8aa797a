"""
Adapter: Loyalty-level business rule over HTTP.

Implements LoyaltyRulePort against an ODM decision service.

Request body::

    {"theLoyaltyDecision": {"tradeTotal": 110000.0}}

Response body::

    {"theLoyaltyDecision": {"tradeTotal": 110000.0, "loyalty": "Gold"}}

A flat ``{"loyalty": "Gold"}`` response is accepted too. A response without
a decision maps to "Unknown", as the rule service itself does.
"""

import logging
from decimal import Decimal
from typing import Any, Optional

import httpx

from account_service.domain.account.entities import LoyaltyTier
from account_service.domain.account.errors import UpstreamUnavailableError
from account_service.domain.account.ports import LoyaltyRulePort

logger = logging.getLogger(__name__)

SERVICE_NAME = "ODM loyalty rule"


def parse_loyalty(payload: Any) -> str:
    """Extract the tier name from a rule service response body."""
    if not isinstance(payload, dict):
        raise ValueError(f"unexpected response body: {type(payload).__name__}")

    decision = payload.get("theLoyaltyDecision", payload)
    if not isinstance(decision, dict):
        return LoyaltyTier.UNKNOWN.value
    loyalty = decision.get("loyalty")
    return str(loyalty) if loyalty else LoyaltyTier.UNKNOWN.value


class HttpLoyaltyRuleAdapter(LoyaltyRulePort):
    """Calls the loyalty-level rule with HTTP basic auth.

    Args:
        url: Endpoint of the rule service. None means not configured.
        username: Basic auth user.
        password: Basic auth password.
        timeout: Request timeout in seconds.
        client: Optional pre-built httpx client (used in tests).
    """

    def __init__(
        self,
        url: Optional[str],
        username: str,
        password: str,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._url = url
        self._auth = httpx.BasicAuth(username, password)
        self._timeout = timeout
        self._client = client

    def determine_loyalty(self, portfolio_total: Decimal) -> str:
        """Return the loyalty tier for a portfolio total.

        Raises:
            UpstreamUnavailableError: On missing configuration, transport
                errors, non-2xx responses or unreadable bodies.
        """
        if not self._url:
            raise UpstreamUnavailableError(SERVICE_NAME, "ODM_URL is not configured")

        body = {"theLoyaltyDecision": {"tradeTotal": float(portfolio_total)}}
        logger.debug("Calling loyalty-level rule for total=%s", portfolio_total)

        try:
            if self._client is not None:
                response = self._client.post(
                    self._url, json=body, auth=self._auth, timeout=self._timeout
                )
            else:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.post(self._url, json=body, auth=self._auth)
            response.raise_for_status()
            loyalty = parse_loyalty(response.json())
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamUnavailableError(SERVICE_NAME, str(exc)) from exc

        logger.debug("Loyalty rule returned %s", loyalty)
        return loyalty
