#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from datetime import datetime

from .exceptions import IdentityError
from .interfaces import AWSCredentialsIdentity as _AWSCredentialsIdentity
from .interfaces import IdentityResolver


@dataclass(kw_only=True)
class AWSCredentialIdentity(_AWSCredentialsIdentity):
    access_key_id: str
    secret_access_key: str
    session_token: str | None = None
    expiration: datetime | None = None


class StaticCredentialsResolver(IdentityResolver):
    """Resolve credentials that were supplied through client configuration."""

    def __init__(
        self,
        *,
        access_key_id: str | None,
        secret_access_key: str | None,
        session_token: str | None = None,
    ) -> None:
        self._access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self._session_token = session_token

    async def get_identity(self) -> AWSCredentialIdentity:
        if self._access_key_id is None or self._secret_access_key is None:
            raise IdentityError(
                "Attempted to resolve AWS credentials from config, but "
                "aws_access_key_id and aws_secret_access_key weren't configured."
            )
        return AWSCredentialIdentity(
            access_key_id=self._access_key_id,
            secret_access_key=self._secret_access_key,
            session_token=self._session_token,
        )
