"""Batch publishing for loadgen.

Components:
- BatchPublisher: fan-out / fan-in pipeline
- BatchAssembler: groups identifiers into fixed-size batches
- CreateOutcome, AggregateOutcome, PublishResult: result models
- ConcurrentCreateStrategy, SequentialCreateStrategy: blob creation scheduling
"""

from loadgen.core.batch.assembler import BatchAssembler
from loadgen.core.batch.models import AggregateOutcome, Batch, CreateOutcome, PublishResult
from loadgen.core.batch.processor import BatchPublisher
from loadgen.core.batch.strategies import (
    ConcurrentCreateStrategy,
    CreateStrategy,
    SequentialCreateStrategy,
)

__all__ = [
    "AggregateOutcome",
    "Batch",
    "BatchAssembler",
    "BatchPublisher",
    "CreateOutcome",
    "PublishResult",
    "CreateStrategy",
    "ConcurrentCreateStrategy",
    "SequentialCreateStrategy",
]
