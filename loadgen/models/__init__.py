"""Pydantic models for loadgen.

- git_data: request and response bodies of the Git data API
"""

from loadgen.models.git_data import (
    BlobCreateRequest,
    CommitCreateRequest,
    CommitResponse,
    ObjectResponse,
    TreeCreateRequest,
    TreeEntry,
)

__all__ = [
    "BlobCreateRequest",
    "CommitCreateRequest",
    "CommitResponse",
    "ObjectResponse",
    "TreeCreateRequest",
    "TreeEntry",
]
