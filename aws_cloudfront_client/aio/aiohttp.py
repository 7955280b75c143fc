#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from dataclasses import dataclass
from typing import Final

import aiohttp
from yarl import URL

from ..exceptions import TransportError
from ..http import HTTPRequest, HTTPResponse, tuples_to_fields
from ..interfaces import HTTPClient

logger: Final = logging.getLogger(__name__)

KEEP_ALIVE_CACHESIZE: Final = 10
REDIRECTABLE_METHODS: Final = frozenset({"GET", "DELETE", "PUT"})


@dataclass(kw_only=True)
class AIOHTTPClientConfig:
    """Client-level HTTP configuration.

    :param timeout: Total time, in seconds, allowed for a single request including
        connection setup and reading the response.
    :param proxy: URL of an HTTP proxy. When unset, the ``HTTP_PROXY`` and
        ``HTTPS_PROXY`` environment variables are honoured.
    :param max_connections: Size of the keep-alive connection pool.
    """

    timeout: float | None = 30
    proxy: str | None = None
    max_connections: int = KEEP_ALIVE_CACHESIZE


class AIOHTTPClient(HTTPClient):
    """Implementation of :py:class:`.interfaces.HTTPClient` using aiohttp."""

    TIMEOUT_EXCEPTIONS = (TimeoutError,)

    def __init__(
        self,
        *,
        client_config: AIOHTTPClientConfig | None = None,
        _session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        :param client_config: Configuration that applies to all requests made with this
        client.
        """
        self._config = client_config or AIOHTTPClientConfig()
        self._session = _session

    def _get_session(self) -> aiohttp.ClientSession:
        # Sessions must be created inside a running event loop.
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._config.timeout),
                connector=aiohttp.TCPConnector(limit=self._config.max_connections),
                trust_env=True,
            )
        return self._session

    async def send(self, request: HTTPRequest) -> HTTPResponse:
        """Send HTTP request using aiohttp client.

        :param request: The request including destination URI, fields, payload.
        :raises TransportError: If the request fails before a response is read.
        """
        headers = [tup for fld in request.fields for tup in fld.as_tuples()]
        try:
            async with self._get_session().request(
                method=request.method,
                url=URL(request.destination.build(), encoded=True),
                headers=headers,
                data=request.body or None,
                proxy=self._config.proxy,
                allow_redirects=request.method in REDIRECTABLE_METHODS,
            ) as resp:
                return HTTPResponse(
                    status=resp.status,
                    fields=tuples_to_fields(resp.headers.items()),
                    body=await resp.read(),
                    reason=resp.reason,
                )
        except self.TIMEOUT_EXCEPTIONS as e:
            logger.debug("Request to %s timed out.", request.destination)
            raise TransportError(f"Request timed out: {e}", fault="client") from e
        except aiohttp.ClientError as e:
            logger.debug("Request to %s failed: %s", request.destination, e)
            raise TransportError(f"Request failed: {e}", fault="client") from e

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
