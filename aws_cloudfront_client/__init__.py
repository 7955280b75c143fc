#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Asynchronous client for the Amazon CloudFront 2010-11-01 API."""

from .client import CloudFrontClient
from .config import CloudFrontConfig
from .exceptions import (
    CloudFrontClientError,
    CloudFrontServiceError,
    IdentityError,
    ResponseParseError,
    RetryError,
    TransportError,
)
from .identity import AWSCredentialIdentity
from .signers import HmacV1Signer

__license__ = "Apache-2.0"
__version__ = "0.1.0"

__all__ = (
    "AWSCredentialIdentity",
    "CloudFrontClient",
    "CloudFrontClientError",
    "CloudFrontConfig",
    "CloudFrontServiceError",
    "HmacV1Signer",
    "IdentityError",
    "ResponseParseError",
    "RetryError",
    "TransportError",
)
