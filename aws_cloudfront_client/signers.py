#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import base64
import hmac
from copy import deepcopy
from email.utils import formatdate
from hashlib import sha1
from typing import TypedDict

from .exceptions import IdentityError
from .http import Field, HTTPRequest
from .identity import AWSCredentialIdentity
from .interfaces import AWSCredentialsIdentity as _AWSCredentialsIdentity

AUTHORIZATION_SCHEME: str = "AWS"
SECURITY_TOKEN_HEADER: str = "x-amz-security-token"


class HmacV1SigningProperties(TypedDict, total=False):
    date: str
    """RFC-1123 date to sign and send in the ``Date`` header.

    Defaults to the current time.
    """


def http_date(timeval: float | None = None) -> str:
    """Format a POSIX timestamp as an RFC-1123 date, e.g.
    ``Sun, 06 Nov 1994 08:49:37 GMT``. Defaults to the current time."""
    return formatdate(timeval, usegmt=True)


class HmacV1Signer:
    """Request signer for the legacy ``AWS`` HMAC-SHA1 authorization scheme.

    The signature is the base64 encoded HMAC-SHA1 of the request date, keyed by the
    secret access key::

        Authorization: AWS <access_key_id>:<base64(hmac_sha1(date, secret_key))>
    """

    def sign(
        self,
        *,
        http_request: HTTPRequest,
        identity: AWSCredentialIdentity,
        signing_properties: HmacV1SigningProperties | None = None,
    ) -> HTTPRequest:
        """Apply the ``Date`` and ``Authorization`` fields to a copy of the request.

        :param http_request: The request to sign prior to sending to the service.
        :param identity: A set of credentials representing an AWS Identity.
        :param signing_properties: Optional properties, such as a fixed date.
        """
        self._validate_identity(identity=identity)
        date = (signing_properties or {}).get("date") or http_date()

        new_request = deepcopy(http_request)
        new_request.fields.set_field(Field(name="Date", values=[date]))
        if identity.session_token is not None:
            new_request.fields.set_field(
                Field(name=SECURITY_TOKEN_HEADER, values=[identity.session_token])
            )
        new_request.fields.set_field(
            self.generate_authorization_field(
                access_key_id=identity.access_key_id,
                signature=self.signature(
                    string_to_sign=date, secret_key=identity.secret_access_key
                ),
            )
        )
        return new_request

    def signature(self, *, string_to_sign: str, secret_key: str) -> str:
        digest = hmac.new(
            key=secret_key.encode(), msg=string_to_sign.encode(), digestmod=sha1
        ).digest()
        return base64.b64encode(digest).decode("ascii")

    def generate_authorization_field(
        self, *, access_key_id: str, signature: str
    ) -> Field:
        return Field(
            name="Authorization",
            values=[f"{AUTHORIZATION_SCHEME} {access_key_id}:{signature}"],
        )

    def _validate_identity(self, *, identity: AWSCredentialIdentity) -> None:
        """Perform runtime and expiration checks before attempting signing."""
        if not isinstance(identity, _AWSCredentialsIdentity):  # pyright: ignore
            raise IdentityError(
                "Received unexpected value for identity parameter. Expected "
                f"AWSCredentialIdentity but received {type(identity)}."
            )
        elif identity.is_expired:
            raise IdentityError(
                f"Provided identity expired at {identity.expiration}. Please "
                "refresh the credentials or update the expiration parameter."
            )
