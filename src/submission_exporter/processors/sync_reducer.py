"""
Reduction of sync collaborator results into an auto-expiring summary.
"""
import logging
import time
from typing import Any, Callable, Dict, Optional

from ..models.core import SyncResult


logger = logging.getLogger(__name__)

DEFAULT_RESULT_TTL = 5.0


def get_error_message(error: BaseException) -> str:
    """Human-readable message for a failed sync."""
    message = getattr(error, "message", None) or str(error)
    return message or type(error).__name__


class _ExpiryTimer:
    """Single re-armable deadline measured on a monotonic clock."""

    def __init__(self, clock: Callable[[], float]):
        self._clock = clock
        self._deadline: Optional[float] = None

    @property
    def armed(self) -> bool:
        return self._deadline is not None

    def arm(self, delay: float) -> None:
        # Replaces any earlier deadline
        self._deadline = self._clock() + delay

    def cancel(self) -> None:
        self._deadline = None

    def expired(self) -> bool:
        return self._deadline is not None and self._clock() >= self._deadline


class SyncResultReducer:
    """
    Holds the latest sync outcome and clears it after a fixed delay.

    Each call to run() drops any still-visible result and its pending timer
    before invoking the collaborator, then stores the new outcome and arms a
    fresh timer. At most one timer is outstanding at a time.
    """

    def __init__(self, ttl: float = DEFAULT_RESULT_TTL, clock: Callable[[], float] = time.monotonic):
        """
        Initialize the reducer.

        Args:
            ttl: Seconds a result stays visible
            clock: Monotonic clock, injectable for tests
        """
        if ttl <= 0:
            raise ValueError("ttl must be positive")

        self.ttl = ttl
        self._timer = _ExpiryTimer(clock)
        self._result: Optional[SyncResult] = None

    @property
    def current(self) -> Optional[SyncResult]:
        """The visible result, or None once it has expired or been cleared."""
        if self._timer.expired():
            logger.debug("Sync result expired")
            self.clear()
        return self._result

    @property
    def timer_pending(self) -> bool:
        return self._timer.armed and not self._timer.expired()

    def clear(self) -> None:
        self._timer.cancel()
        self._result = None

    def run(self, sync: Callable[[str], Dict[str, Any]], client_id: str) -> SyncResult:
        """
        Invoke the sync collaborator and store its outcome.

        Args:
            sync: Callable taking a client ID and returning {'synced', 'skipped'}
            client_id: Client to synchronize

        Returns:
            The stored SyncResult
        """
        self.clear()

        try:
            response = sync(client_id) or {}
            result = self.reduce_success(response)
            logger.info(f"Sync for client {client_id}: {result.synced} synced, {result.skipped} skipped")
        except Exception as e:
            result = SyncResult(error=get_error_message(e))
            logger.error(f"Sync for client {client_id} failed: {result.error}")

        self._result = result
        self._timer.arm(self.ttl)
        return result

    @staticmethod
    def reduce_success(response: Dict[str, Any]) -> SyncResult:
        """Build a success result, defaulting missing counts to zero."""
        return SyncResult(
            synced=int(response.get("synced") or 0),
            skipped=int(response.get("skipped") or 0),
        )
