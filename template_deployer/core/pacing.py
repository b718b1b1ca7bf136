"""Pacing between remote creation calls."""
import asyncio
import time
from typing import Awaitable, Callable, Dict

Sleep = Callable[[float], Awaitable[None]]
Clock = Callable[[], float]

DATABASE = "database"
RECORD = "record"


class Pacer:
    async def pause(self, operation: str) -> None:
        raise NotImplementedError


class FixedIntervalPacer(Pacer):
    """Sleeps a fixed interval per operation kind after each call."""

    def __init__(self, intervals: Dict[str, float], sleep: Sleep = asyncio.sleep):
        self.intervals = dict(intervals)
        self.sleep = sleep

    async def pause(self, operation: str) -> None:
        delay = self.intervals.get(operation, 0.0)
        if delay > 0:
            await self.sleep(delay)


class TokenBucketPacer(Pacer):
    """Allows bursts up to ``capacity`` and a sustained ``rate`` ops/second."""

    def __init__(self, rate: float = 3.0, capacity: float = 3.0, sleep: Sleep = asyncio.sleep, clock: Clock = time.monotonic):
        if rate <= 0:
            raise ValueError("rate must be positive")
        self.rate = rate
        self.capacity = capacity
        self.sleep = sleep
        self.clock = clock
        self.tokens = capacity
        self.updated = clock()

    def _refill(self) -> None:
        now = self.clock()
        self.tokens = min(self.capacity, self.tokens + (now - self.updated) * self.rate)
        self.updated = now

    async def pause(self, operation: str) -> None:
        self._refill()
        if self.tokens < 1:
            await self.sleep((1 - self.tokens) / self.rate)
            self._refill()
        self.tokens = max(0.0, self.tokens - 1)


class NoPacer(Pacer):
    async def pause(self, operation: str) -> None:
        return None


def build_pacer(strategy: str, database_interval: float, record_interval: float) -> Pacer:
    if strategy == "token_bucket":
        return TokenBucketPacer()
    return FixedIntervalPacer({DATABASE: database_interval, RECORD: record_interval})
