#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0

from typing import Any

import pytest
from aws_cloudfront_client.codec import parse_xml
from aws_cloudfront_client.models import (
    normalize_invalidation_batch,
    parse_distribution,
    parse_distribution_list,
    parse_invalidation,
    parse_invalidation_list,
    to_bool,
)
from conftest import (
    DISTRIBUTION_LIST_XML,
    DISTRIBUTION_XML,
    INVALIDATION_LIST_XML,
    INVALIDATION_XML,
)


@pytest.mark.parametrize(
    "value, expected",
    [("true", True), ("false", False), ("True", False), ("", False), (None, False)],
)
def test_to_bool(value: Any, expected: bool) -> None:
    assert to_bool(value) is expected


def test_parse_distribution_list() -> None:
    data = parse_distribution_list(parse_xml(DISTRIBUTION_LIST_XML))
    assert data["IsTruncated"] is True
    assert data["MaxItems"] == 2
    assert data["Marker"] == "RMPARXS293KSTG7"
    assert data["NextMarker"] == "EMLARXS9EXAMPLE"

    deployed, in_progress = data["DistributionSummary"]
    assert deployed["Id"] == "EDFDVBD6EXAMPLE"
    assert deployed["Enabled"] is True
    assert deployed["IsDeployed"] is True
    assert deployed["IsInProgress"] is False
    assert deployed["S3Origin"]["DNSName"] == "mybucket.s3.amazonaws.com"

    assert in_progress["Enabled"] is False
    assert in_progress["IsDeployed"] is False
    assert in_progress["IsInProgress"] is True
    assert in_progress["CustomOrigin"]["HTTPPort"] == "80"


def test_parse_distribution_list_coerces_batch_counts() -> None:
    data = parse_distribution_list(
        {
            "IsTruncated": "false",
            "MaxItems": "100",
            "DistributionSummary": [
                {"Status": "Deployed", "InProgressInvalidationBatches": "3"},
                {"Status": "InProgress"},
            ],
        }
    )
    assert data["DistributionSummary"][0]["InProgressInvalidationBatches"] == 3
    assert data["DistributionSummary"][1]["InProgressInvalidationBatches"] == 0


def test_parse_empty_distribution_list() -> None:
    data = parse_distribution_list(
        parse_xml(
            b"<DistributionList><Marker/><MaxItems>100</MaxItems>"
            b"<IsTruncated>false</IsTruncated></DistributionList>"
        )
    )
    assert data["IsTruncated"] is False
    assert data["MaxItems"] == 100
    assert data["Marker"] is None
    assert data["DistributionSummary"] == []


def test_parse_distribution() -> None:
    data = parse_distribution(parse_xml(DISTRIBUTION_XML), etag="E2QWRUHEXAMPLE")
    assert data["ETag"] == "E2QWRUHEXAMPLE"
    assert data["InProgressInvalidationBatches"] == 1
    assert data["IsDeployed"] is True
    assert data["IsInProgress"] is False

    config = data["DistributionConfig"]
    assert config["Enabled"] is True
    assert config["CNAME"] == ["www.example.com"]
    assert config["Logging"] == {
        "Bucket": "mylogs.s3.amazonaws.com",
        "Prefix": "myprefix/",
    }


def test_parse_distribution_without_config() -> None:
    data = parse_distribution({"Status": "InProgress"}, etag=None)
    assert data["IsInProgress"] is True
    assert data["InProgressInvalidationBatches"] == 0
    assert data["ETag"] is None
    assert "DistributionConfig" not in data


def test_parse_invalidation_list() -> None:
    data = parse_invalidation_list(parse_xml(INVALIDATION_LIST_XML))
    assert data["IsTruncated"] is False
    assert data["MaxItems"] == 100
    assert data["InvalidationSummary"] == [
        {"Id": "IDFDVBD632BHDS5", "Status": "Completed", "IsCompleted": True}
    ]


def test_parse_invalidation() -> None:
    data = parse_invalidation(parse_xml(INVALIDATION_XML))
    assert data["IsCompleted"] is False
    assert data["InvalidationBatch"]["Path"] == ["/image1.jpg", "/image2.jpg"]
    assert data["InvalidationBatch"]["CallerReference"] == "my-batch"


class TestNormalizeInvalidationBatch:
    def test_wraps_single_path(self) -> None:
        batch = {"Path": "/index.html", "CallerReference": "ref"}
        assert normalize_invalidation_batch(batch) == {
            "Path": ["/index.html"],
            "CallerReference": "ref",
        }

    def test_does_not_mutate_input(self) -> None:
        paths = ("/a", "/b")
        batch = {"Path": paths, "CallerReference": "ref"}
        normalized = normalize_invalidation_batch(batch)
        assert normalized["Path"] == ["/a", "/b"]
        assert batch["Path"] is paths

    def test_requires_path(self) -> None:
        with pytest.raises(ValueError, match="Path"):
            normalize_invalidation_batch({"CallerReference": "ref"})
