"""Base blob creation strategy for loadgen.

A strategy decides how the N independent create requests are scheduled. All
strategies deliver one CreateOutcome per index onto the shared queue; closing
the queue is left to the caller.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from loadgen.core.batch.models import CreateOutcome
from loadgen.core.errors import LoadgenError
from loadgen.core.logging import logger

CreateFn = Callable[[str], Awaitable[str]]
ContentFn = Callable[[int], str]


class CreateStrategy(ABC):
    """Abstract base class for blob creation strategies.

    - ConcurrentCreateStrategy: many requests in flight, optionally capped
    - SequentialCreateStrategy: one request at a time
    """

    name = "base"

    @abstractmethod
    async def execute(
        self,
        count: int,
        make_content: ContentFn,
        create: CreateFn,
        queue: asyncio.Queue,
    ) -> None:
        """Issue ``count`` create requests and queue their outcomes.

        Args:
            count: Number of objects to create
            make_content: Builds the payload for an index
            create: Coroutine function creating one object, returning its id
            queue: Receives one CreateOutcome per index, in completion order
        """

    async def _create_one(
        self,
        index: int,
        make_content: ContentFn,
        create: CreateFn,
        queue: asyncio.Queue,
    ) -> None:
        try:
            oid = await create(make_content(index))
        except LoadgenError as e:
            outcome = CreateOutcome.failure(index, e)
            logger.warning("blob_create_failed", index=index, kind=outcome.kind.value, error=str(e))
        else:
            outcome = CreateOutcome.success(index, oid)
            logger.debug("blob_created", index=index, sha=oid)
        await queue.put(outcome)
