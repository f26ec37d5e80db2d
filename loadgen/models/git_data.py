"""Git data API payload models for loadgen.

Request bodies are serialized with ``model_dump``; response bodies are
validated with ``model_validate_json`` so malformed payloads surface as
pydantic validation errors.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

BLOB_MODE = "100644"


class BlobCreateRequest(BaseModel):
    """Request for POST /repos/{owner}/{repo}/git/blobs."""
    content: str


class TreeEntry(BaseModel):
    """One entry of a tree request."""
    path: str
    mode: str = BLOB_MODE
    type: str = "blob"
    sha: str = Field(..., min_length=1)


class TreeCreateRequest(BaseModel):
    """Request for POST /repos/{owner}/{repo}/git/trees."""
    tree: List[TreeEntry]

    @classmethod
    def for_blobs(cls, oids: List[str]) -> "TreeCreateRequest":
        """Build a flat tree naming each blob ``file-<position>.txt``."""
        return cls(
            tree=[TreeEntry(path=f"file-{i}.txt", sha=oid) for i, oid in enumerate(oids)]
        )


class CommitCreateRequest(BaseModel):
    """Request for POST /repos/{owner}/{repo}/git/commits."""
    message: str = Field(..., min_length=1)
    tree: str = Field(..., min_length=1)


class ObjectResponse(BaseModel):
    """Response carrying the sha of a created blob or tree."""
    model_config = ConfigDict(extra="ignore")

    sha: str = Field(..., min_length=1)


class CommitResponse(BaseModel):
    """Response of a created commit."""
    model_config = ConfigDict(extra="ignore")

    sha: str = Field(..., min_length=1)
    url: str
