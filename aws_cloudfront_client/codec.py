#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Conversion between CloudFront XML documents and plain dicts.

Documents are parsed with ``xmltodict``. The root element is unwrapped, attributes
(such as ``xmlns``) become ordinary keys, and empty elements become ``None``.
"""

from collections.abc import Mapping
from typing import Any, Final
from xml.parsers.expat import ExpatError

import xmltodict

from .exceptions import ResponseParseError

FORCE_LIST: Final = (
    "DistributionSummary",
    "InvalidationSummary",
    "Signer",
    "CNAME",
    "AwsAccountNumber",
    "KeyPairId",
    "Path",
)
"""Elements that always parse as lists, even when they occur once."""


def parse_xml(body: bytes | str) -> dict[str, Any]:
    """Parse an XML document and return the contents of its root element.

    :raises ResponseParseError: If the body is empty or not well-formed XML.
    """
    if not body or not body.strip():
        raise ResponseParseError("Expected an XML document, got an empty body.")
    try:
        document = xmltodict.parse(
            body,
            attr_prefix="",
            force_list=FORCE_LIST,
            dict_constructor=dict,
        )
    except ExpatError as e:
        raise ResponseParseError(f"Unable to parse XML response: {e}") from e

    (root,) = document.values()
    if root is None:
        return {}
    if not isinstance(root, dict):
        raise ResponseParseError(
            f"Expected child elements in the XML document, got text: {root!r}"
        )
    return root


def serialize_xml(root_name: str, data: Mapping[str, Any]) -> bytes:
    """Serialize ``data`` as the children of a ``root_name`` element.

    List values are written as repeated elements.
    """
    return xmltodict.unparse({root_name: dict(data)}, encoding="utf-8").encode("utf-8")
