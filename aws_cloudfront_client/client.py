#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from asyncio import sleep
from collections.abc import Mapping
from typing import Any, Self

from .aio.aiohttp import AIOHTTPClient, AIOHTTPClientConfig
from .codec import parse_xml, serialize_xml
from .config import CloudFrontConfig
from .endpoints import StaticEndpointResolver, resource_path
from .exceptions import CloudFrontServiceError, ResponseParseError, RetryError
from .http import Field, Fields, HTTPRequest, HTTPResponse
from .identity import StaticCredentialsResolver
from .interfaces import HTTPClient, IdentityResolver, RetryStrategy
from .models import (
    Distribution,
    DistributionList,
    ErrorResponse,
    Invalidation,
    InvalidationList,
    normalize_invalidation_batch,
    parse_distribution,
    parse_distribution_list,
    parse_invalidation,
    parse_invalidation_list,
)
from .retries import RETRYABLE_STATUS_CODES, SimpleRetryStrategy
from .signers import HmacV1Signer, HmacV1SigningProperties

_LOGGER = logging.getLogger(__name__)


class CloudFrontClient:
    """Client for the Amazon CloudFront 2010-11-01 API.

    .. code-block:: python

        async with CloudFrontClient(
            CloudFrontConfig(
                aws_access_key_id="AKID",
                aws_secret_access_key="SECRET",
            )
        ) as cf:
            listing = await cf.get_distribution_list()
            for summary in listing["DistributionSummary"]:
                print(summary["Id"], summary["IsDeployed"])

    When an operation fails and ``fatal`` is on (the default), a
    :py:class:`CloudFrontServiceError` is raised. When ``fatal`` is off the operation
    returns ``None``. In both cases the parsed error document is kept in
    :py:attr:`error` until the next successful operation.
    """

    def __init__(self, config: CloudFrontConfig | None = None) -> None:
        self._config = config or CloudFrontConfig()
        self._signer = HmacV1Signer()
        self._http_client: HTTPClient | None = None
        self._identity_resolver: IdentityResolver | None = None
        self._retry_strategy: RetryStrategy | None = None
        self._endpoint_resolver: StaticEndpointResolver | None = None
        self.error: ErrorResponse | None = None
        """The parsed error document of the last failed operation."""

    @property
    def config(self) -> CloudFrontConfig:
        return self._config

    async def __aenter__(self) -> Self:
        await self._ensure_resolved()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._http_client is not None:
            await self._http_client.close()

    async def get_distribution_list(
        self, *, marker: str | None = None, max_items: int | None = None
    ) -> DistributionList | None:
        """Retrieve a list of distributions.

        :param marker: Start listing after this distribution id, as returned in a
            previous page's ``NextMarker``.
        :param max_items: Maximum number of distributions to return.
        """
        response = await self._request(
            resource_path("distribution"),
            query={"Marker": marker, "MaxItems": max_items},
        )
        if response is None:
            return None
        return parse_distribution_list(response)

    async def get_distribution(self, distribution_id: str) -> Distribution | None:
        """Retrieve all information about a distribution, including its ETag.

        :param distribution_id: The distribution's id.
        """
        response = await self._request(resource_path("distribution", distribution_id))
        if response is None:
            return None
        return parse_distribution(response, response["HTTPResponse"].header("ETag"))

    async def get_invalidation_list(
        self,
        distribution_id: str,
        *,
        marker: str | None = None,
        max_items: int | None = None,
    ) -> InvalidationList | None:
        """Retrieve the invalidation batches of a distribution.

        :param distribution_id: The distribution's id.
        :param marker: Start listing after this invalidation id.
        :param max_items: Maximum number of invalidation batches to return.
        """
        response = await self._request(
            resource_path("distribution", distribution_id, "invalidation"),
            query={"Marker": marker, "MaxItems": max_items},
        )
        if response is None:
            return None
        return parse_invalidation_list(response)

    async def post_invalidation(
        self, distribution_id: str, batch: Mapping[str, Any]
    ) -> Invalidation | None:
        """Create an invalidation batch, removing objects from the edge caches.

        .. code-block:: python

            await cf.post_invalidation(
                "E1EXAMPLE",
                {"Path": ["/image1.jpg", "/image2.jpg"], "CallerReference": "batch-1"},
            )

        :param distribution_id: The distribution's id.
        :param batch: ``Path`` (a path or list of paths) and ``CallerReference``, a
            unique identifier for this request. The batch is not modified.
        """
        content = serialize_xml(
            "InvalidationBatch", normalize_invalidation_batch(dict(batch))
        )
        response = await self._request(
            resource_path("distribution", distribution_id, "invalidation"),
            method="POST",
            body=content,
            content_type="text/xml",
        )
        if response is None:
            return None
        return parse_invalidation(response)

    async def _ensure_resolved(self) -> None:
        config = self._config
        if not config.resolved:
            await config.resolve()
        if self._http_client is None:
            self._http_client = config.http_client or AIOHTTPClient(
                client_config=AIOHTTPClientConfig(
                    timeout=config.timeout, proxy=config.proxy
                )
            )
        if self._identity_resolver is None:
            self._identity_resolver = StaticCredentialsResolver(
                access_key_id=config.aws_access_key_id,
                secret_access_key=config.aws_secret_access_key,
                session_token=config.aws_session_token,
            )
        if self._endpoint_resolver is None:
            self._endpoint_resolver = StaticEndpointResolver(
                host=config.cloudfront_host
            )

    async def _request(
        self,
        resource: str,
        *,
        method: str = "GET",
        query: Mapping[str, Any] | None = None,
        body: bytes = b"",
        content_type: str | None = None,
    ) -> dict[str, Any] | None:
        """Send a request and parse the XML response.

        Returns the parsed document with the ``HTTPRequest`` and ``HTTPResponse``
        attached, or ``None`` if the request failed and ``fatal`` is off.
        """
        request = await self._build_request(
            resource,
            method=method,
            query=query,
            body=body,
            content_type=content_type,
        )
        _LOGGER.debug("Sending %s request to %s", request.method, request.destination)
        response = await self._send(request)
        _LOGGER.debug(
            "Received response %s with %d byte body",
            response.status_line,
            len(response.body),
        )

        if response.is_success:
            data = parse_xml(response.body)
            _LOGGER.debug("Parsed response: %s", data)
            self.error = None
            data["HTTPRequest"] = request
            data["HTTPResponse"] = response
            return data

        self.error = self._parse_error(response)
        _LOGGER.debug("Request failed with %s: %s", response.status_line, self.error)
        if self._config.fatal:
            raise self._service_error(response, self.error)
        return None

    async def _build_request(
        self,
        resource: str,
        *,
        method: str,
        query: Mapping[str, Any] | None,
        body: bytes,
        content_type: str | None,
    ) -> HTTPRequest:
        await self._ensure_resolved()
        assert self._endpoint_resolver is not None
        assert self._identity_resolver is not None

        fields = Fields()
        if content_type is not None:
            fields.set_field(Field(name="Content-Type", values=[content_type]))
        request = HTTPRequest(
            destination=self._endpoint_resolver.resolve(resource, query),
            method=method,
            fields=fields,
            body=body,
        )
        signing_properties = HmacV1SigningProperties()
        if self._config.date is not None:
            signing_properties["date"] = self._config.date
        return self._signer.sign(
            http_request=request,
            identity=await self._identity_resolver.get_identity(),
            signing_properties=signing_properties,
        )

    async def _send(self, request: HTTPRequest) -> HTTPResponse:
        assert self._http_client is not None
        if not self._config.retry:
            return await self._http_client.send(request)

        retry_strategy = self._get_retry_strategy()
        retry_token = retry_strategy.acquire_initial_retry_token()
        while True:
            if retry_token.retry_delay:
                await sleep(retry_token.retry_delay)

            error: Exception
            try:
                response = await self._http_client.send(request)
            except Exception as e:
                error = e
                response = None
            else:
                if response.status not in RETRYABLE_STATUS_CODES:
                    retry_strategy.record_success(token=retry_token)
                    return response
                error = self._service_error(response, None, is_retry_safe=True)

            try:
                retry_token = retry_strategy.refresh_retry_token_for_retry(
                    token_to_renew=retry_token, error=error
                )
            except RetryError:
                if response is None:
                    raise error
                return response

            _LOGGER.debug(
                "Retry needed. Attempting request #%s in %.4f seconds.",
                retry_token.retry_count + 1,
                retry_token.retry_delay,
            )

    def _get_retry_strategy(self) -> RetryStrategy:
        if self._config.retry_strategy is not None:
            return self._config.retry_strategy
        if self._retry_strategy is None:
            self._retry_strategy = SimpleRetryStrategy()
        return self._retry_strategy

    def _parse_error(self, response: HTTPResponse) -> ErrorResponse | None:
        try:
            return parse_xml(response.body)  # type: ignore[return-value]
        except ResponseParseError:
            _LOGGER.debug("Error response %s has no XML body.", response.status_line)
            return None

    def _service_error(
        self,
        response: HTTPResponse,
        body: ErrorResponse | None,
        *,
        is_retry_safe: bool | None = None,
    ) -> CloudFrontServiceError:
        code = ((body or {}).get("Error") or {}).get("Code")
        return CloudFrontServiceError(
            code or response.status_line,
            status=response.status,
            body=body,  # type: ignore[arg-type]
            fault="server" if response.status >= 500 else "client",
            is_retry_safe=is_retry_safe,
            is_throttling_error=code == "Throttling",
        )
