#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0

from typing import Any

import pytest
from aws_cloudfront_client import CloudFrontClient, CloudFrontConfig
from aws_cloudfront_client.testing import MockHTTPClient

FIXED_DATE = "Thu, 14 Aug 2008 17:08:48 GMT"

DISTRIBUTION_LIST_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<DistributionList xmlns="http://cloudfront.amazonaws.com/doc/2010-11-01/">
   <Marker>RMPARXS293KSTG7</Marker>
   <NextMarker>EMLARXS9EXAMPLE</NextMarker>
   <MaxItems>2</MaxItems>
   <IsTruncated>true</IsTruncated>
   <DistributionSummary>
      <Id>EDFDVBD6EXAMPLE</Id>
      <Status>Deployed</Status>
      <LastModifiedTime>2009-11-19T19:37:58Z</LastModifiedTime>
      <DomainName>d604721fxaaqy9.cloudfront.net</DomainName>
      <S3Origin>
         <DNSName>mybucket.s3.amazonaws.com</DNSName>
         <OriginAccessIdentity>origin-access-identity/cloudfront/E127EXAMPLE51Z</OriginAccessIdentity>
      </S3Origin>
      <CNAME>www.example.com</CNAME>
      <Comment>First distribution</Comment>
      <Enabled>true</Enabled>
      <TrustedSigners>
         <Self/>
         <AwsAccountNumber>111122223333</AwsAccountNumber>
      </TrustedSigners>
   </DistributionSummary>
   <DistributionSummary>
      <Id>EMLARXS9EXAMPLE</Id>
      <Status>InProgress</Status>
      <LastModifiedTime>2010-04-19T19:37:58Z</LastModifiedTime>
      <DomainName>d111111abcdef8.cloudfront.net</DomainName>
      <CustomOrigin>
         <DNSName>www.example.net</DNSName>
         <HTTPPort>80</HTTPPort>
         <HTTPSPort>443</HTTPSPort>
         <OriginProtocolPolicy>match-viewer</OriginProtocolPolicy>
      </CustomOrigin>
      <CNAME>assets.example.net</CNAME>
      <CNAME>static.example.net</CNAME>
      <Comment>Second distribution</Comment>
      <Enabled>false</Enabled>
   </DistributionSummary>
</DistributionList>
"""

DISTRIBUTION_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<Distribution xmlns="http://cloudfront.amazonaws.com/doc/2010-11-01/">
   <Id>EDFDVBD6EXAMPLE</Id>
   <Status>Deployed</Status>
   <LastModifiedTime>2009-11-19T19:37:58Z</LastModifiedTime>
   <InProgressInvalidationBatches>1</InProgressInvalidationBatches>
   <DomainName>d604721fxaaqy9.cloudfront.net</DomainName>
   <DistributionConfig>
      <S3Origin>
         <DNSName>mybucket.s3.amazonaws.com</DNSName>
      </S3Origin>
      <CallerReference>20120229090000</CallerReference>
      <CNAME>www.example.com</CNAME>
      <Comment>My comments</Comment>
      <Enabled>true</Enabled>
      <DefaultRootObject>index.html</DefaultRootObject>
      <Logging>
         <Bucket>mylogs.s3.amazonaws.com</Bucket>
         <Prefix>myprefix/</Prefix>
      </Logging>
   </DistributionConfig>
</Distribution>
"""

INVALIDATION_LIST_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<InvalidationList xmlns="http://cloudfront.amazonaws.com/doc/2010-11-01/">
   <Marker/>
   <MaxItems>100</MaxItems>
   <IsTruncated>false</IsTruncated>
   <InvalidationSummary>
      <Id>IDFDVBD632BHDS5</Id>
      <Status>Completed</Status>
   </InvalidationSummary>
</InvalidationList>
"""

INVALIDATION_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<Invalidation xmlns="http://cloudfront.amazonaws.com/doc/2010-11-01/">
   <Id>IDFDVBD632BHDS5</Id>
   <Status>InProgress</Status>
   <CreateTime>2009-11-19T19:37:58Z</CreateTime>
   <InvalidationBatch>
      <Path>/image1.jpg</Path>
      <Path>/image2.jpg</Path>
      <CallerReference>my-batch</CallerReference>
   </InvalidationBatch>
</Invalidation>
"""

NO_SUCH_DISTRIBUTION_XML = b"""<?xml version="1.0"?>
<ErrorResponse xmlns="http://cloudfront.amazonaws.com/doc/2010-11-01/">
   <Error>
      <Type>Sender</Type>
      <Code>NoSuchDistribution</Code>
      <Message>The specified distribution does not exist.</Message>
   </Error>
   <RequestId>843f28f6-c2ac-11e0-93df-2591eca165a6</RequestId>
</ErrorResponse>
"""


@pytest.fixture
def mock_http_client() -> MockHTTPClient:
    return MockHTTPClient()


def make_config(http_client: MockHTTPClient, **overrides: Any) -> CloudFrontConfig:
    """Build a config that ignores the environment of the test run."""
    values: dict[str, Any] = {
        "aws_access_key_id": "AKIDEXAMPLE",
        "aws_secret_access_key": "wJalrXUtnFEMI/K7MDENG/bPxRfiCYEXAMPLEKEY",
        "aws_session_token": None,
        "cloudfront_host": "cloudfront.amazonaws.com",
        "retry": False,
        "fatal": True,
        "date": FIXED_DATE,
        "http_client": http_client,
    }
    values.update(overrides)
    return CloudFrontConfig(**values)


@pytest.fixture
def client(mock_http_client: MockHTTPClient) -> CloudFrontClient:
    return CloudFrontClient(make_config(mock_http_client))
