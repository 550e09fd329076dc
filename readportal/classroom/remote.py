"""
SimulatedBackend - Stand-in for the remote API the portal does not have.

Every call waits a bounded delay on the event loop and then either
returns its payload or raises RemoteCallError.
"""

import asyncio
import logging
import random
from collections import deque
from typing import Any, Optional

from readportal.errors import RemoteCallError

logger = logging.getLogger(__name__)

# Most recent operations kept for inspection
CALL_LOG_SIZE = 100


class SimulatedBackend:
    """
    Simulated remote calls.

    Failures happen with probability `failure_rate`, or deterministically
    for the next N calls after fail_next(N).
    """

    def __init__(
        self,
        latency: float = 1.0,
        failure_rate: float = 0.0,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize backend.

        Args:
            latency: Default delay per call in seconds
            failure_rate: Probability (0.0-1.0) that a call fails
            rng: Random source for failures (seeded in tests)
        """
        self.latency = latency
        self.failure_rate = failure_rate
        self._rng = rng or random.Random()
        self._forced_failures = 0
        self._calls: deque[str] = deque(maxlen=CALL_LOG_SIZE)

    @property
    def calls(self) -> list[str]:
        """Operation names of the most recent calls, oldest first."""
        return list(self._calls)

    def fail_next(self, count: int = 1):
        """Make the next `count` calls fail."""
        self._forced_failures += count

    async def call(self, operation: str, payload: Any = None, delay: Optional[float] = None) -> Any:
        """
        Perform a simulated remote operation.

        Raises:
            RemoteCallError: When the call is made to fail
        """
        self._calls.append(operation)
        await asyncio.sleep(self.latency if delay is None else delay)

        if self._forced_failures > 0:
            self._forced_failures -= 1
            logger.warning(f"Simulated remote failure: {operation}")
            raise RemoteCallError(operation)
        if self.failure_rate and self._rng.random() < self.failure_rate:
            logger.warning(f"Simulated remote failure: {operation}")
            raise RemoteCallError(operation)

        logger.debug(f"Simulated remote call succeeded: {operation}")
        return payload
