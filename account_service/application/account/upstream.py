"""
Service-scoped health tracking for upstream dependencies.

Remembers which upstream services (rule engine, tone analyzer, notifier)
have failed so a broken dependency produces one traceback in the logs
rather than one per request. The tracker is created once by the
composition root and shared by the use cases.
"""

import logging
import threading

logger = logging.getLogger(__name__)

LOYALTY_RULES = "loyalty-rules"
SENTIMENT = "sentiment"
NOTIFIER = "change-notifier"


class UpstreamHealth:
    """Per-dependency degraded flags for the lifetime of the service."""

    def __init__(self) -> None:
        self._degraded: set[str] = set()
        self._lock = threading.Lock()

    def is_degraded(self, service: str) -> bool:
        """Return True once service has failed at least once."""
        with self._lock:
            return service in self._degraded

    @property
    def degraded(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._degraded)

    def record_failure(self, service: str, exc: BaseException, fallback: str) -> None:
        """Log an upstream failure.

        The first failure of a service is logged with its traceback.
        Repeats are logged at debug level only.

        Args:
            service: Name of the failing dependency.
            exc: The error raised by the adapter.
            fallback: Human-readable description of what happens instead.
        """
        with self._lock:
            first = service not in self._degraded
            self._degraded.add(service)

        if first:
            logger.warning(
                "Error invoking %s: %s. %s", service, exc, fallback, exc_info=exc
            )
        else:
            logger.debug("%s still unavailable: %s. %s", service, exc, fallback)
