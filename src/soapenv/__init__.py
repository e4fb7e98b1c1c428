"""
soapenv — SOAP 1.1 / 1.2 envelope builder for Python.

Assembles header and body items into a versioned SOAP envelope and wraps it
in an httpx request ready to send.
"""

from soapenv.builder import EnvBuilder, EnvBuilderOption, new_envelope, with_namespaces
from soapenv.errors import (
    InvalidVersionError,
    RequestConstructionError,
    SerializationError,
    SoapEnvelopeError,
)
from soapenv.marshal import marshal
from soapenv.models.envelope import Body, Envelope, Envelope11, Envelope12, Header
from soapenv.versions import V11, V12, content_type_for, is_valid_version, namespace_for

__version__ = "0.1.0"
__all__ = [
    "EnvBuilder",
    "EnvBuilderOption",
    "new_envelope",
    "with_namespaces",
    "Envelope",
    "Envelope11",
    "Envelope12",
    "Header",
    "Body",
    "marshal",
    "SoapEnvelopeError",
    "InvalidVersionError",
    "SerializationError",
    "RequestConstructionError",
    "V11",
    "V12",
    "is_valid_version",
    "namespace_for",
    "content_type_for",
]
