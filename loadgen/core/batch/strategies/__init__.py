"""Blob creation strategies for loadgen."""

from loadgen.core.batch.strategies.base import CreateStrategy
from loadgen.core.batch.strategies.concurrent_strategy import ConcurrentCreateStrategy
from loadgen.core.batch.strategies.sequential_strategy import SequentialCreateStrategy

__all__ = [
    "CreateStrategy",
    "ConcurrentCreateStrategy",
    "SequentialCreateStrategy",
]
