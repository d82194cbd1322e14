"""Paced batch dispatch of trade offer declines.

Every decline in a batch is dispatched, each one starting a fixed pacing
interval after the previous one. Results are observed in submission
order through a FIFO queue of tasks; the first failure observed ends the
batch and is raised to the caller. Declines queued behind it keep
running (a sent request cannot be taken back) and their outcome is only
logged.
"""

import asyncio
from collections import deque
from functools import partial
from typing import Awaitable, Callable, Sequence

from .logging_config import get_logger


class BatchDeclinePacer:
    """Ordered, paced dispatcher for decline requests.

    Example:
        >>> pacer = BatchDeclinePacer(manager.decline_offer, pacing_delay=1.0)
        >>> declined = await pacer.run([6001, 6002, 6003])
        >>> declined
        3
    """

    def __init__(self, decline: Callable[[int], Awaitable[None]], pacing_delay: float):
        self.decline = decline
        self.pacing_delay = pacing_delay
        self.logger = get_logger(__name__)

    async def _paced_decline(self, tradeoffer_id: int, position: int) -> None:
        if position:
            await asyncio.sleep(position * self.pacing_delay)
        await self.decline(tradeoffer_id)

    def _log_unawaited(self, tradeoffer_id: int, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.logger.warning(
                "decline_failed_after_batch_abort",
                extra={"tradeoffer_id": tradeoffer_id, "error": str(error)},
            )
        else:
            self.logger.info("decline_completed_after_batch_abort", extra={"tradeoffer_id": tradeoffer_id})

    async def run(self, tradeoffer_ids: Sequence[int]) -> int:
        """Decline every offer in `tradeoffer_ids`.

        Returns:
            Number of declines observed successful (all of them on success)

        Raises:
            The first error observed, in submission order
        """
        queue: deque[tuple[int, asyncio.Task]] = deque()
        for position, tradeoffer_id in enumerate(tradeoffer_ids):
            task = asyncio.create_task(self._paced_decline(tradeoffer_id, position))
            queue.append((tradeoffer_id, task))

        declined = 0
        while queue:
            tradeoffer_id, task = queue.popleft()
            try:
                await task
            except Exception as e:
                self.logger.error(
                    "decline_failed",
                    extra={
                        "tradeoffer_id": tradeoffer_id,
                        "declined": declined,
                        "abandoned": len(queue),
                        "error": str(e),
                    },
                )
                for pending_id, pending in queue:
                    pending.add_done_callback(partial(self._log_unawaited, pending_id))
                raise

            declined += 1
            self.logger.debug("offer_declined", extra={"tradeoffer_id": tradeoffer_id})

        return declined
