"""Error taxonomy for loadgen.

Every failure of a single unit of remote work falls into one FailureKind.
The pipeline treats all kinds the same way (log and continue); the kind is
kept on the outcome so callers and tests can tell them apart.
"""

from enum import Enum
from typing import Optional

import httpx


class FailureKind(str, Enum):
    """Failure categories for one unit of remote work.

    - REQUEST: the request body could not be built
    - TRANSPORT: connection, DNS or timeout failure
    - PROTOCOL: the server answered with something other than 201
    - DECODE: the response body was not the expected JSON
    - UNKNOWN: anything else
    """

    REQUEST = "request"
    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    DECODE = "decode"
    UNKNOWN = "unknown"


class LoadgenError(Exception):
    """Base class for loadgen errors."""

    kind = FailureKind.UNKNOWN


class ConfigError(LoadgenError):
    """Required configuration is missing or invalid."""


class RequestBuildError(LoadgenError):
    """Request body could not be marshalled."""

    kind = FailureKind.REQUEST


class TransportError(LoadgenError):
    """The request never produced an HTTP response."""

    kind = FailureKind.TRANSPORT

    def __init__(self, url: str, cause: Exception):
        super().__init__(f"{url}: {cause}")
        self.url = url
        self.cause = cause


class ProtocolError(LoadgenError):
    """The server responded with an unexpected status."""

    kind = FailureKind.PROTOCOL

    def __init__(self, url: str, status_code: int, reason: str, body: str):
        super().__init__(f"HTTP {status_code} {reason} response to {url}.\n{body}")
        self.url = url
        self.status_code = status_code
        self.reason = reason
        self.body = body


class DecodeError(LoadgenError):
    """The response body could not be parsed."""

    kind = FailureKind.DECODE

    def __init__(self, url: str, detail: str, payload: str):
        super().__init__(f"error parsing response body from {url}: {detail}\n{payload}")
        self.url = url
        self.detail = detail
        self.payload = payload


class CommandError(LoadgenError):
    """An external command exited with a non-zero status."""

    def __init__(self, cmd: list[str], returncode: int, stderr: str):
        super().__init__(f"{' '.join(cmd)} exited with {returncode}: {stderr.strip()}")
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = stderr


class ErrorClassifier:
    """Maps exceptions onto FailureKind values.

    Static methods for stateless classification.
    """

    @staticmethod
    def categorize(error: Optional[BaseException]) -> FailureKind:
        """Categorize an error.

        Args:
            error: Exception to categorize

        Returns:
            FailureKind enum value
        """
        if error is None:
            return FailureKind.UNKNOWN

        if isinstance(error, LoadgenError):
            return error.kind

        # Raw httpx errors that escaped the client wrapper
        if isinstance(error, httpx.TransportError):
            return FailureKind.TRANSPORT
        if isinstance(error, httpx.HTTPStatusError):
            return FailureKind.PROTOCOL

        return FailureKind.UNKNOWN
