"""Shared fixtures for loadgen tests."""

import pytest

from loadgen.config import PublisherSettings
from loadgen.core.errors import ProtocolError
from loadgen.models.git_data import CommitResponse


class FakeGitDataClient:
    """In-memory stand-in for GitDataClient that records every call."""

    def __init__(self, failing_blobs=(), failing_trees=(), failing_commits=()):
        self.failing_blobs = set(failing_blobs)
        self.failing_trees = set(failing_trees)
        self.failing_commits = set(failing_commits)
        self.blob_contents = []
        self.tree_calls = []
        self.commit_calls = []

    async def create_blob(self, content: str) -> str:
        index = int(content.split(" ", 1)[0])
        self.blob_contents.append(content)
        if index in self.failing_blobs:
            raise ProtocolError("blobs", 422, "Unprocessable Entity", '{"message": "nope"}')
        return f"blob{index:04d}"

    async def create_tree(self, oids: list) -> str:
        number = len(self.tree_calls)
        self.tree_calls.append(list(oids))
        if number in self.failing_trees:
            raise ProtocolError("trees", 500, "Internal Server Error", "boom")
        return f"tree{number:04d}"

    async def create_commit(self, message: str, tree_sha: str) -> CommitResponse:
        self.commit_calls.append((message, tree_sha))
        if tree_sha in self.failing_commits:
            raise ProtocolError("commits", 404, "Not Found", "missing")
        return CommitResponse(sha=f"commit-{tree_sha}", url=f"https://api.test/commits/{tree_sha}")


@pytest.fixture
def settings():
    return PublisherSettings(
        token="test-token",
        api_url="https://api.test",
        owner="octo",
        repo="load",
        object_count=100,
        batch_size=10,
        concurrency=8,
        timeout=5.0,
    )


@pytest.fixture
def fake_client():
    return FakeGitDataClient()
