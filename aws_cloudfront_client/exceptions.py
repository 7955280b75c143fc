#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias


class CloudFrontClientError(Exception):
    """Base exception type for all exceptions raised by aws-cloudfront-client."""


Fault: TypeAlias = Literal["client", "server"] | None
"""Whether the client or server is at fault.

If None, then there was not enough information to determine fault.
"""


@dataclass(kw_only=True)
class CallError(CloudFrontClientError):
    """Base exception for errors raised while invoking a CloudFront operation.

    Implements :py:class:`.interfaces.ErrorRetryInfo`.
    """

    fault: Fault = None
    """Whether the client or server is at fault.

    If None, then there was not enough information to determine fault.
    """

    message: str = field(default="", kw_only=False)
    """The message of the error."""

    is_retry_safe: bool | None = None
    """Whether the exception is safe to retry.

    A value of True does not mean a retry will occur, but rather that a retry is allowed
    to occur.
    """

    retry_after: float | None = None
    """The amount of time that should pass before a retry."""

    is_throttling_error: bool = False
    """Whether the error is a throttling error."""

    def __post_init__(self):
        super().__init__(self.message)


@dataclass(kw_only=True)
class CloudFrontServiceError(CallError):
    """An error response returned by the CloudFront service.

    The message is the service error code (for example ``NoSuchDistribution``) or,
    when the response carried no parseable error document, the HTTP status line.
    """

    status: int
    """The HTTP status code of the error response."""

    body: dict[str, Any] | None = None
    """The parsed XML error document, if any."""

    @property
    def code(self) -> str | None:
        return self._error.get("Code")

    @property
    def type(self) -> str | None:
        return self._error.get("Type")

    @property
    def error_message(self) -> str | None:
        return self._error.get("Message")

    @property
    def request_id(self) -> str | None:
        if self.body is None:
            return None
        return self.body.get("RequestId")

    @property
    def _error(self) -> dict[str, Any]:
        if self.body is None:
            return {}
        return self.body.get("Error") or {}


@dataclass(kw_only=True)
class TransportError(CallError):
    """The request could not be sent or its response could not be read."""

    is_retry_safe: bool | None = True


class ResponseParseError(CloudFrontClientError, ValueError):
    """A response body could not be parsed as XML."""


class IdentityError(CloudFrontClientError, ValueError):
    """Credentials are missing, malformed, or expired."""


class RetryError(CloudFrontClientError):
    """Raised by retry strategies when no further attempts are allowed."""
