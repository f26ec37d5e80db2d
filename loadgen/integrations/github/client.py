"""GitHub Git data API client for loadgen.

Creates blobs, trees and commits through the REST API. Every call follows the
same cycle: marshal body, POST, require HTTP 201, decode the JSON response.
Each step raises its own LoadgenError subclass.
"""

from typing import Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from loadgen.config import PublisherSettings
from loadgen.core.errors import DecodeError, ProtocolError, RequestBuildError, TransportError
from loadgen.core.logging import logger
from loadgen.models.git_data import (
    BlobCreateRequest,
    CommitCreateRequest,
    CommitResponse,
    ObjectResponse,
    TreeCreateRequest,
)

ResponseT = TypeVar("ResponseT", bound=BaseModel)

CREATED = 201


def pool_limits(settings: PublisherSettings) -> httpx.Limits:
    """Connection pool sized to the creation concurrency.

    Unbounded fan-out (concurrency <= 0) gets an unbounded pool. Otherwise the
    pool holds one connection per in-flight create plus one for the
    tree and commit calls.
    """
    if settings.concurrency <= 0:
        return httpx.Limits(max_connections=None, max_keepalive_connections=20)
    return httpx.Limits(max_connections=settings.concurrency + 1, max_keepalive_connections=20)


class GitDataClient:
    """Async client for the blobs, trees and commits endpoints.

    One instance shares a single connection pool across all concurrent
    callers. Use it as an async context manager so the pool gets closed.
    """

    def __init__(
        self,
        settings: PublisherSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize client.

        Args:
            settings: Token, endpoint and timeout settings
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.settings = settings
        self.base_url = settings.git_data_url
        self._client = httpx.AsyncClient(
            headers={
                "Accept": "application/vnd.github+json",
                "Content-Type": "application/json",
                "X-GitHub-Api-Version": settings.api_version,
                "Authorization": f"Bearer {settings.token}",
            },
            timeout=settings.timeout,
            limits=pool_limits(settings),
            transport=transport,
        )

    async def __aenter__(self) -> "GitDataClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def create_blob(self, content: str) -> str:
        """Create a blob and return its sha."""
        response = await self._post("blobs", lambda: BlobCreateRequest(content=content), ObjectResponse)
        return response.sha

    async def create_tree(self, oids: list[str]) -> str:
        """Create a flat tree referencing ``oids`` in order and return its sha."""
        response = await self._post("trees", lambda: TreeCreateRequest.for_blobs(oids), ObjectResponse)
        return response.sha

    async def create_commit(self, message: str, tree_sha: str) -> CommitResponse:
        """Create a parentless commit pointing at ``tree_sha``."""
        return await self._post(
            "commits",
            lambda: CommitCreateRequest(message=message, tree=tree_sha),
            CommitResponse,
        )

    async def _post(self, endpoint: str, build_body, response_model: Type[ResponseT]) -> ResponseT:
        """POST a request body and decode the 201 response.

        Args:
            endpoint: Path under the repository's git data URL
            build_body: Callable returning the pydantic request model
            response_model: Model used to validate the response body

        Returns:
            Validated response model

        Raises:
            RequestBuildError: If the body cannot be built or serialized
            TransportError: If no HTTP response was received
            ProtocolError: If the status is not 201
            DecodeError: If the response body is malformed
        """
        url = f"{self.base_url}/{endpoint}"

        try:
            content = build_body().model_dump_json()
        except (ValidationError, ValueError, TypeError) as e:
            raise RequestBuildError(f"{url}: {e}") from e

        try:
            response = await self._client.post(url, content=content)
        except httpx.HTTPError as e:
            raise TransportError(url, e) from e

        if response.status_code != CREATED:
            raise ProtocolError(url, response.status_code, response.reason_phrase, response.text)

        try:
            result = response_model.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(url, str(e), response.text) from e

        logger.debug("git_object_created", endpoint=endpoint, sha=result.sha)
        return result
