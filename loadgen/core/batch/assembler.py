"""Batch assembler for loadgen.

Groups identifiers into sealed batches of a fixed capacity, in arrival order.
"""

from typing import List, Optional

from loadgen.core.batch.models import Batch


class BatchAssembler:
    """Accumulates identifiers and seals a batch every ``capacity`` items.

    Usage:
        assembler = BatchAssembler(10)
        for oid in oids:
            batch = assembler.add(oid)
            if batch:
                handle(batch)
        batch = assembler.flush()
        if batch:
            handle(batch)
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"batch capacity must be >= 1, got {capacity}")
        self.capacity = capacity
        self._pending: List[str] = []
        self._sealed = 0

    @property
    def pending(self) -> int:
        """Number of identifiers waiting in the open batch."""
        return len(self._pending)

    @property
    def sealed(self) -> int:
        """Number of batches sealed so far."""
        return self._sealed

    def add(self, oid: str) -> Optional[Batch]:
        """Add one identifier; return the sealed batch if it filled up."""
        self._pending.append(oid)
        if len(self._pending) == self.capacity:
            return self._seal()
        return None

    def flush(self) -> Optional[Batch]:
        """Seal the remaining partial batch, if any."""
        if not self._pending:
            return None
        return self._seal()

    def _seal(self) -> Batch:
        batch = Batch(number=self._sealed, oids=tuple(self._pending))
        self._pending = []
        self._sealed += 1
        return batch
