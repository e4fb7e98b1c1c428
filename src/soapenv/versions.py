"""
SOAP version identifiers and the metadata each one implies.
"""

from typing import Optional

V11 = "1.1"
V12 = "1.2"
SUPPORTED_VERSIONS = (V11, V12)

NS_SOAP11 = "http://schemas.xmlsoap.org/soap/envelope/"
NS_SOAP12 = "http://www.w3.org/2003/05/soap-envelope"

CONTENT_TYPE_SOAP11 = "text/xml; charset=utf-8"
CONTENT_TYPE_SOAP12 = "application/soap+xml; charset=utf-8"

_NAMESPACES = {V11: NS_SOAP11, V12: NS_SOAP12}
_CONTENT_TYPES = {V11: CONTENT_TYPE_SOAP11, V12: CONTENT_TYPE_SOAP12}


def is_valid_version(version: object) -> bool:
    return version in SUPPORTED_VERSIONS


def namespace_for(version: str) -> Optional[str]:
    """Envelope namespace URI for `version`, or None if unsupported."""
    return _NAMESPACES.get(version)


def content_type_for(version: str) -> Optional[str]:
    """Default Content-Type for `version`, or None if unsupported."""
    return _CONTENT_TYPES.get(version)
