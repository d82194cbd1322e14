"""Tests for paced batch declines."""

import asyncio
import logging
from unittest.mock import AsyncMock, patch

import pytest

from steam_trading.exceptions import InvalidStateError, RateLimitedError
from steam_trading.pacer import BatchDeclinePacer


def recording_decline(failures=None, delays=None):
    """Decline stub recording completions; raises the mapped error for failing ids."""
    failures = failures or {}
    delays = delays or {}
    started, completed = [], []

    async def decline(tradeoffer_id):
        started.append(tradeoffer_id)
        if tradeoffer_id in delays:
            await asyncio.sleep(delays[tradeoffer_id])
        completed.append(tradeoffer_id)
        if tradeoffer_id in failures:
            raise failures[tradeoffer_id]

    return decline, started, completed


class TestBatchDeclinePacer:
    """Test suite for BatchDeclinePacer."""

    @pytest.mark.asyncio
    async def test_all_succeed(self):
        decline, started, completed = recording_decline()
        pacer = BatchDeclinePacer(decline, pacing_delay=0)

        declined = await pacer.run([1, 2, 3, 4])

        assert declined == 4
        assert started == [1, 2, 3, 4]
        assert sorted(completed) == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_empty_batch(self):
        decline, started, _ = recording_decline()
        assert await BatchDeclinePacer(decline, pacing_delay=0).run([]) == 0
        assert started == []

    @pytest.mark.asyncio
    async def test_returns_kth_error_after_observing_earlier(self, caplog):
        """Offers 1 and 2 finish last but are still observed before the failing 3."""
        failure = InvalidStateError("offer already accepted")
        decline, _, completed = recording_decline(failures={3: failure}, delays={1: 0.03, 2: 0.01})
        pacer = BatchDeclinePacer(decline, pacing_delay=0)
        caplog.set_level(logging.DEBUG, logger="steam_trading.pacer")

        with pytest.raises(InvalidStateError) as excinfo:
            await pacer.run([1, 2, 3, 4, 5])

        observed = [
            (record.getMessage(), record.tradeoffer_id)
            for record in caplog.records
            if record.name == "steam_trading.pacer"
        ]
        assert observed[:3] == [("offer_declined", 1), ("offer_declined", 2), ("decline_failed", 3)]
        assert excinfo.value is failure
        assert completed.index(3) < completed.index(2) < completed.index(1)

    @pytest.mark.asyncio
    async def test_order_is_submission_not_completion(self):
        """A slow earlier failure wins over a fast later failure."""
        slow_failure = RateLimitedError("slow")
        fast_failure = InvalidStateError("fast")
        decline, _, completed = recording_decline(
            failures={1: slow_failure, 2: fast_failure},
            delays={1: 0.05},
        )
        pacer = BatchDeclinePacer(decline, pacing_delay=0)

        with pytest.raises(RateLimitedError) as excinfo:
            await pacer.run([1, 2])

        assert excinfo.value is slow_failure
        assert completed == [2, 1]

    @pytest.mark.asyncio
    async def test_earlier_slow_success_observed_before_later_failure(self):
        failure = InvalidStateError("declined already")
        decline, _, completed = recording_decline(failures={2: failure}, delays={1: 0.05})
        pacer = BatchDeclinePacer(decline, pacing_delay=0)

        with pytest.raises(InvalidStateError):
            await pacer.run([1, 2])

        assert 1 in completed

    @pytest.mark.asyncio
    async def test_every_offer_dispatched_despite_failure(self):
        decline, started, _ = recording_decline(failures={1: InvalidStateError("x")})
        pacer = BatchDeclinePacer(decline, pacing_delay=0)

        with pytest.raises(InvalidStateError):
            await pacer.run([1, 2, 3])

        # queued declines keep running after the batch gave up on them
        await asyncio.sleep(0.01)
        assert started == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_dispatch_paced_by_position(self):
        decline, _, _ = recording_decline()
        pacer = BatchDeclinePacer(decline, pacing_delay=1.0)

        with patch("steam_trading.pacer.asyncio.sleep", new=AsyncMock()) as sleep:
            await pacer.run([10, 20, 30])

        assert sorted(call.args[0] for call in sleep.await_args_list) == [1.0, 2.0]
