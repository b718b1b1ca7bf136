"""Tests for pacing strategies."""
import pytest
from unittest.mock import AsyncMock
from template_deployer.core.pacing import DATABASE, RECORD, FixedIntervalPacer, TokenBucketPacer, build_pacer


@pytest.mark.asyncio
async def test_fixed_interval_per_operation():
    sleep = AsyncMock()
    pacer = FixedIntervalPacer({DATABASE: 1.0, RECORD: 0.5}, sleep=sleep)

    await pacer.pause(DATABASE)
    await pacer.pause(RECORD)
    await pacer.pause("other")

    assert [c.args[0] for c in sleep.await_args_list] == [1.0, 0.5]


@pytest.mark.asyncio
async def test_token_bucket_allows_burst_then_waits():
    now = [0.0]
    sleep = AsyncMock()
    pacer = TokenBucketPacer(rate=3.0, capacity=3.0, sleep=sleep, clock=lambda: now[0])

    for _ in range(3):
        await pacer.pause(DATABASE)
    sleep.assert_not_awaited()

    await pacer.pause(DATABASE)
    sleep.assert_awaited_once()
    assert sleep.await_args.args[0] == pytest.approx(1 / 3)


def test_build_pacer():
    assert isinstance(build_pacer("fixed", 1.0, 0.5), FixedIntervalPacer)
    assert isinstance(build_pacer("token_bucket", 1.0, 0.5), TokenBucketPacer)
