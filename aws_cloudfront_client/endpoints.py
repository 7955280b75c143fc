#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Mapping
from typing import Any, Final
from urllib.parse import quote, urlencode, urljoin, urlsplit

from .http import URI

API_VERSION: Final = "2010-11-01"
DEFAULT_CLOUDFRONT_HOST: Final = "cloudfront.amazonaws.com"


def resource_path(*segments: str) -> str:
    """Join path segments under the API version, escaping each one.

    >>> resource_path("distribution", "E1/2")
    '2010-11-01/distribution/E1%2F2'
    """
    return "/".join([API_VERSION, *(quote(str(seg), safe="") for seg in segments)])


class StaticEndpointResolver:
    """Resolves relative API paths against a fixed CloudFront host."""

    def __init__(self, *, host: str = DEFAULT_CLOUDFRONT_HOST, scheme: str = "https"):
        self.host = host
        self.scheme = scheme

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}/"

    def resolve(
        self, resource: str, query: Mapping[str, Any] | None = None
    ) -> URI:
        """Build the destination URI for a resource.

        :param resource: An API path relative to the service root, such as
            ``2010-11-01/distribution``, or an absolute URL.
        :param query: Optional query parameters, encoded in insertion order.
            Parameters whose value is ``None`` are dropped.
        """
        parts = urlsplit(urljoin(self.base_url, resource))
        query_string = parts.query or None
        if query:
            params = [(k, str(v)) for k, v in query.items() if v is not None]
            if params:
                query_string = urlencode(params)
        return URI(
            scheme=parts.scheme,
            host=parts.hostname or self.host,
            port=parts.port,
            path=parts.path or "/",
            query=query_string,
        )
