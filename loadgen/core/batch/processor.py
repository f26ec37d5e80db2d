"""Batch publisher for loadgen.

Fans out blob creation, then drains the outcomes in completion order,
groups the identifiers into fixed-size batches and runs the tree + commit
pipeline for each sealed batch before reading on.
"""

import asyncio
import time
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from loadgen.core.batch.assembler import BatchAssembler
from loadgen.core.batch.models import AggregateOutcome, Batch, PublishResult
from loadgen.core.batch.strategies import (
    ConcurrentCreateStrategy,
    CreateStrategy,
    SequentialCreateStrategy,
)
from loadgen.core.errors import LoadgenError
from loadgen.core.logging import logger

if TYPE_CHECKING:
    from loadgen.config import PublisherSettings
    from loadgen.integrations.github import GitDataClient

# Enqueued once every create request has terminated.
_CLOSED = object()


def make_blob_content(index: int, timestamp: str) -> str:
    """Payload for blob ``index``; unique per run through the shared timestamp."""
    return f"{index} {timestamp}\n"


def commit_message(batch: Batch) -> str:
    return f"load test commit {batch.number}"


class BatchPublisher:
    """Creates blobs concurrently, then trees and commits batch by batch."""

    def __init__(
        self,
        client: "GitDataClient",
        settings: "PublisherSettings",
        strategy: Optional[CreateStrategy] = None,
    ):
        """Initialize publisher.

        Args:
            client: Object exposing create_blob, create_tree and create_commit
            settings: Object count, batch size and concurrency
            strategy: Creation strategy (selected from settings if omitted)
        """
        self.client = client
        self.settings = settings
        self.strategy = strategy or self._select_strategy(settings.concurrency)

    async def publish(self, timestamp: Optional[str] = None) -> PublishResult:
        """Run the whole pipeline once.

        Args:
            timestamp: Shared timestamp embedded in every blob (defaults to now)

        Returns:
            PublishResult with every create and aggregate outcome
        """
        if timestamp is None:
            timestamp = datetime.now(timezone.utc).isoformat()

        count = self.settings.object_count
        result = PublishResult(
            requested=count,
            batch_size=self.settings.batch_size,
            strategy=self.strategy.name,
        )
        start_time = time.time()

        logger.info(
            "publish_started",
            objects=count,
            batch_size=self.settings.batch_size,
            strategy=self.strategy.name,
        )

        queue: asyncio.Queue = asyncio.Queue()
        producer = asyncio.create_task(self._produce(queue, count, timestamp))

        assembler = BatchAssembler(self.settings.batch_size)
        try:
            while True:
                outcome = await queue.get()
                if outcome is _CLOSED:
                    break
                result.creates.append(outcome)
                if not outcome.ok:
                    continue
                batch = assembler.add(outcome.oid)
                if batch is not None:
                    result.aggregates.append(await self._aggregate(batch))

            batch = assembler.flush()
            if batch is not None:
                result.aggregates.append(await self._aggregate(batch))
        except BaseException:
            producer.cancel()
            await asyncio.gather(producer, return_exceptions=True)
            raise

        # Re-raise anything unexpected from the workers
        await producer

        result.processing_time_seconds = round(time.time() - start_time, 2)

        logger.info(
            "publish_completed",
            status=result.status,
            batch_size=result.batch_size,
            objects=result.objects_created,
            failed=result.failed_creates,
            trees=result.aggregates_created,
            commits=result.finalizations_created,
            processing_time=result.processing_time_seconds,
        )
        return result

    async def _produce(self, queue: asyncio.Queue, count: int, timestamp: str) -> None:
        try:
            await self.strategy.execute(
                count,
                lambda index: make_blob_content(index, timestamp),
                self.client.create_blob,
                queue,
            )
        finally:
            queue.put_nowait(_CLOSED)

    async def _aggregate(self, batch: Batch) -> AggregateOutcome:
        """Create the tree for a batch, then the commit wrapping it."""
        try:
            tree_sha = await self.client.create_tree(list(batch.oids))
        except LoadgenError as e:
            logger.warning(
                "tree_create_failed", batch=batch.number, size=len(batch), kind=e.kind.value, error=str(e)
            )
            return AggregateOutcome(batch=batch, error=str(e), kind=e.kind)

        try:
            commit = await self.client.create_commit(commit_message(batch), tree_sha)
        except LoadgenError as e:
            logger.warning(
                "commit_create_failed", batch=batch.number, tree=tree_sha, kind=e.kind.value, error=str(e)
            )
            return AggregateOutcome(batch=batch, tree_sha=tree_sha, error=str(e), kind=e.kind)

        logger.info("batch_published", batch=batch.number, size=len(batch), tree=tree_sha, commit=commit.sha)
        return AggregateOutcome(batch=batch, tree_sha=tree_sha, commit=commit)

    def _select_strategy(self, concurrency: int) -> CreateStrategy:
        """Pick the creation strategy for a concurrency setting.

        1 means strictly sequential; <= 0 means unbounded fan-out.
        """
        if concurrency == 1:
            return SequentialCreateStrategy()
        return ConcurrentCreateStrategy(max_in_flight=concurrency)
