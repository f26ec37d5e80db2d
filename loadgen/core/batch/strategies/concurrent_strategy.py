"""Concurrent blob creation strategy for loadgen.

Runs one task per request under asyncio.gather(), with an optional semaphore
capping how many requests are in flight.
"""

import asyncio
from contextlib import nullcontext

from loadgen.core.batch.strategies.base import ContentFn, CreateFn, CreateStrategy
from loadgen.core.logging import logger


class ConcurrentCreateStrategy(CreateStrategy):
    """Fan out all create requests at once.

    ``max_in_flight`` <= 0 leaves concurrency unbounded.
    """

    name = "concurrent"

    def __init__(self, max_in_flight: int = 16):
        self.max_in_flight = max_in_flight

    async def execute(
        self,
        count: int,
        make_content: ContentFn,
        create: CreateFn,
        queue: asyncio.Queue,
    ) -> None:
        logger.info(
            "concurrent_create_started",
            total=count,
            max_in_flight=self.max_in_flight if self.max_in_flight > 0 else "unbounded",
        )

        semaphore = asyncio.Semaphore(self.max_in_flight) if self.max_in_flight > 0 else None

        async def worker(index: int):
            async with semaphore if semaphore is not None else nullcontext():
                await self._create_one(index, make_content, create, queue)

        tasks = [asyncio.create_task(worker(index)) for index in range(count)]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            # No sibling outlives a failed or cancelled gather
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
