"""
soapenv error types.
"""

from typing import Any, Optional


class SoapEnvelopeError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class InvalidVersionError(SoapEnvelopeError):
    def __init__(self, version: Any):
        super().__init__(
            "invalid_version",
            f"Invalid SOAP version {version!r}, expected one of: 1.1, 1.2",
            {"version": version},
        )
        self.version = version


class SerializationError(SoapEnvelopeError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("serialization_error", message, details)


class RequestConstructionError(SoapEnvelopeError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("request_construction_error", message, details)
