"""Sequential blob creation strategy for loadgen.

Creates objects one by one. Useful against servers that throttle hard.
"""

import asyncio

from loadgen.core.batch.strategies.base import ContentFn, CreateFn, CreateStrategy
from loadgen.core.logging import logger


class SequentialCreateStrategy(CreateStrategy):
    """Issue create requests one at a time, in index order."""

    name = "sequential"

    async def execute(
        self,
        count: int,
        make_content: ContentFn,
        create: CreateFn,
        queue: asyncio.Queue,
    ) -> None:
        logger.info("sequential_create_started", total=count)

        for index in range(count):
            await self._create_one(index, make_content, create, queue)
