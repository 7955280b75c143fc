#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Shapes of the data returned by :py:class:`CloudFrontClient` operations.

Results are plain dicts keyed by the element names of the CloudFront 2010-11-01 API.
The ``TypedDict`` definitions below document the keys that are present, including
the derived convenience flags (``IsDeployed``, ``IsInProgress``, ``IsCompleted``)
that are computed from ``Status``. Every result also carries the signed
``HTTPRequest`` and the raw ``HTTPResponse``.
"""

from typing import Any, NotRequired, TypedDict

from .http import HTTPRequest, HTTPResponse

STATUS_DEPLOYED = "Deployed"
STATUS_IN_PROGRESS = "InProgress"
STATUS_COMPLETED = "Completed"


class S3Origin(TypedDict, total=False):
    DNSName: str
    OriginAccessIdentity: str


class CustomOrigin(TypedDict, total=False):
    DNSName: str
    HTTPPort: str
    HTTPSPort: str
    OriginProtocolPolicy: str


class TrustedSigners(TypedDict, total=False):
    Self: None
    KeyPairId: list[str]
    AwsAccountNumber: list[str]


class Logging(TypedDict, total=False):
    Bucket: str
    Prefix: str


class DistributionSummary(TypedDict):
    Id: str
    Status: str
    IsDeployed: bool
    IsInProgress: bool
    LastModifiedTime: str
    DomainName: str
    Enabled: bool
    InProgressInvalidationBatches: int
    S3Origin: NotRequired[S3Origin]
    CustomOrigin: NotRequired[CustomOrigin]
    CNAME: NotRequired[list[str]]
    Comment: NotRequired[str]
    TrustedSigners: NotRequired[TrustedSigners]


class DistributionList(TypedDict):
    IsTruncated: bool
    Marker: str | None
    MaxItems: int
    NextMarker: NotRequired[str]
    DistributionSummary: list[DistributionSummary]
    HTTPRequest: HTTPRequest
    HTTPResponse: HTTPResponse


class DistributionConfig(TypedDict, total=False):
    S3Origin: S3Origin
    CustomOrigin: CustomOrigin
    CallerReference: str
    CNAME: list[str]
    Comment: str
    Enabled: bool
    DefaultRootObject: str
    Logging: Logging
    TrustedSigners: TrustedSigners


class Distribution(TypedDict):
    Id: str
    Status: str
    IsDeployed: bool
    IsInProgress: bool
    LastModifiedTime: str
    InProgressInvalidationBatches: int
    DomainName: str
    ActiveTrustedSigners: NotRequired[dict[str, Any]]
    DistributionConfig: DistributionConfig
    ETag: str | None
    HTTPRequest: HTTPRequest
    HTTPResponse: HTTPResponse


class InvalidationSummary(TypedDict):
    Id: str
    Status: str
    IsCompleted: bool


class InvalidationList(TypedDict):
    IsTruncated: bool
    Marker: str | None
    MaxItems: int
    NextMarker: NotRequired[str]
    InvalidationSummary: list[InvalidationSummary]
    HTTPRequest: HTTPRequest
    HTTPResponse: HTTPResponse


class InvalidationBatch(TypedDict):
    Path: list[str]
    CallerReference: str


class Invalidation(TypedDict):
    Id: str
    Status: str
    IsCompleted: bool
    CreateTime: str
    InvalidationBatch: InvalidationBatch
    HTTPRequest: HTTPRequest
    HTTPResponse: HTTPResponse


class ErrorDetail(TypedDict, total=False):
    Code: str
    Type: str
    Message: str


class ErrorResponse(TypedDict, total=False):
    Error: ErrorDetail
    RequestId: str
    xmlns: str


def to_bool(value: Any) -> bool:
    """CloudFront booleans are the literal strings ``true`` and ``false``."""
    return value == "true"


def to_int(value: Any) -> int:
    return int(value) if value is not None else 0


def parse_distribution_list(data: dict[str, Any]) -> DistributionList:
    data["IsTruncated"] = to_bool(data.get("IsTruncated"))
    data["MaxItems"] = to_int(data.get("MaxItems"))
    data["DistributionSummary"] = [
        _parse_distribution_summary(ds) for ds in data.get("DistributionSummary") or []
    ]
    return data  # type: ignore[return-value]


def _parse_distribution_summary(ds: dict[str, Any]) -> DistributionSummary:
    ds["IsDeployed"] = ds.get("Status") == STATUS_DEPLOYED
    ds["IsInProgress"] = ds.get("Status") == STATUS_IN_PROGRESS
    ds["Enabled"] = to_bool(ds.get("Enabled"))
    ds["InProgressInvalidationBatches"] = to_int(ds.get("InProgressInvalidationBatches"))
    return ds  # type: ignore[return-value]


def parse_distribution(data: dict[str, Any], etag: str | None) -> Distribution:
    data["InProgressInvalidationBatches"] = to_int(
        data.get("InProgressInvalidationBatches")
    )
    data["IsDeployed"] = data.get("Status") == STATUS_DEPLOYED
    data["IsInProgress"] = data.get("Status") == STATUS_IN_PROGRESS
    if dc := data.get("DistributionConfig"):
        dc["Enabled"] = to_bool(dc.get("Enabled"))
    data["ETag"] = etag
    return data  # type: ignore[return-value]


def parse_invalidation_list(data: dict[str, Any]) -> InvalidationList:
    data["IsTruncated"] = to_bool(data.get("IsTruncated"))
    data["MaxItems"] = to_int(data.get("MaxItems"))
    data["InvalidationSummary"] = [
        _parse_invalidation(summary)
        for summary in data.get("InvalidationSummary") or []
    ]
    return data  # type: ignore[return-value]


def parse_invalidation(data: dict[str, Any]) -> Invalidation:
    return _parse_invalidation(data)  # type: ignore[return-value]


def _parse_invalidation(data: dict[str, Any]) -> Any:
    data["IsCompleted"] = data.get("Status") == STATUS_COMPLETED
    return data


def normalize_invalidation_batch(batch: dict[str, Any]) -> InvalidationBatch:
    """Return a copy of ``batch`` with ``Path`` as a list of strings."""
    paths = batch.get("Path")
    if paths is None:
        raise ValueError("An invalidation batch requires at least one Path.")
    if isinstance(paths, str):
        paths = [paths]
    return {**batch, "Path": list(paths)}  # type: ignore[typeddict-item]
