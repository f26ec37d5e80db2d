"""Batch publishing models for loadgen.

Result types for every unit of work. The consumer collects these instead of
relying on log output, so callers can count successes and failures directly.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from loadgen.core.errors import ErrorClassifier, FailureKind
from loadgen.models.git_data import CommitResponse


@dataclass(frozen=True)
class CreateOutcome:
    """Outcome of one blob creation request."""

    index: int
    oid: Optional[str] = None
    error: Optional[str] = None
    kind: Optional[FailureKind] = None

    @property
    def ok(self) -> bool:
        return self.oid is not None

    @classmethod
    def success(cls, index: int, oid: str) -> "CreateOutcome":
        return cls(index=index, oid=oid)

    @classmethod
    def failure(cls, index: int, error: Exception) -> "CreateOutcome":
        return cls(index=index, error=str(error), kind=ErrorClassifier.categorize(error))


@dataclass(frozen=True)
class Batch:
    """A sealed, ordered group of blob identifiers."""

    number: int
    oids: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.oids)


@dataclass(frozen=True)
class AggregateOutcome:
    """Outcome of the tree + commit pipeline for one batch."""

    batch: Batch
    tree_sha: Optional[str] = None
    commit: Optional[CommitResponse] = None
    error: Optional[str] = None
    kind: Optional[FailureKind] = None

    @property
    def ok(self) -> bool:
        return self.commit is not None


@dataclass
class PublishResult:
    """Summary of one publishing run."""

    requested: int
    batch_size: int
    strategy: str
    creates: List[CreateOutcome] = field(default_factory=list)
    aggregates: List[AggregateOutcome] = field(default_factory=list)
    processing_time_seconds: float = 0.0

    @property
    def objects_created(self) -> int:
        return sum(1 for c in self.creates if c.ok)

    @property
    def failed_creates(self) -> int:
        return sum(1 for c in self.creates if not c.ok)

    @property
    def aggregates_created(self) -> int:
        return sum(1 for a in self.aggregates if a.tree_sha is not None)

    @property
    def finalizations_created(self) -> int:
        return sum(1 for a in self.aggregates if a.ok)

    @property
    def status(self) -> str:
        failed = self.failed_creates + sum(1 for a in self.aggregates if not a.ok)
        return "completed" if failed == 0 else "completed_with_errors"

    def summary_line(self) -> str:
        """Plain-text summary for stdout."""
        return (
            f"created {self.objects_created} objects, {self.aggregates_created} trees, "
            f"{self.finalizations_created} commits ({self.failed_creates} failed)"
        )
