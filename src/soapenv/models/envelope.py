"""
SOAP envelope models — one variant per protocol version.

Header and Body carry inner XML that was serialized beforehand; it is
embedded verbatim when the envelope is rendered.
"""

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import TYPE_CHECKING, ClassVar, Mapping, Optional
from xml.sax.saxutils import quoteattr

from pydantic import BaseModel, ConfigDict, Field, field_validator

from soapenv.versions import (
    CONTENT_TYPE_SOAP11,
    CONTENT_TYPE_SOAP12,
    NS_SOAP11,
    NS_SOAP12,
    V11,
    V12,
)

if TYPE_CHECKING:
    import httpx

ENVELOPE_PREFIX = "soap"


class Header(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: bytes = b""


class Body(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: bytes = b""


class Envelope(BaseModel, ABC):
    """Base for the two envelope variants. Abstract: build Envelope11 or Envelope12."""

    VERSION: ClassVar[str]
    NAMESPACE: ClassVar[str]
    CONTENT_TYPE: ClassVar[str]
    PREFIX: ClassVar[str] = ENVELOPE_PREFIX

    model_config = ConfigDict(frozen=True)

    namespaces: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    header: Optional[Header] = None
    body: Body = Field(default_factory=Body)

    @field_validator("namespaces", mode="after")
    @classmethod
    def freeze_namespaces(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    def _with_header(self, header: Header) -> "Envelope":
        return self.model_copy(update={"header": header})

    def xmlns(self) -> dict[str, str]:
        """Root namespace declarations: envelope prefix first, then extras."""
        decls = {self.PREFIX: self.NAMESPACE}
        decls.update(self.namespaces)
        return decls

    def _qname(self, local: str) -> str:
        return f"{self.PREFIX}:{local}" if self.PREFIX else local

    def to_xml(self) -> bytes:
        attrs = "".join(
            f" xmlns:{prefix}={quoteattr(uri)}" if prefix else f" xmlns={quoteattr(uri)}"
            for prefix, uri in self.xmlns().items()
        )
        parts = [f"<{self._qname('Envelope')}{attrs}>".encode("utf-8")]
        if self.header is not None:
            parts += [
                f"<{self._qname('Header')}>".encode("utf-8"),
                self.header.content,
                f"</{self._qname('Header')}>".encode("utf-8"),
            ]
        parts += [
            f"<{self._qname('Body')}>".encode("utf-8"),
            self.body.content,
            f"</{self._qname('Body')}>".encode("utf-8"),
            f"</{self._qname('Envelope')}>".encode("utf-8"),
        ]
        return b"".join(parts)

    @abstractmethod
    def http_headers(self, action: str) -> dict[str, str]:
        """Content-Type and action headers for this version's HTTP binding."""

    def get_http_request(self, action: str, url: str = "") -> "httpx.Request":
        """Wrap this envelope in a POST request carrying `action`."""
        from soapenv.transport.http import build_http_request
        return build_http_request(self, action, url)


class Envelope11(Envelope):
    VERSION: ClassVar[str] = V11
    NAMESPACE: ClassVar[str] = NS_SOAP11
    CONTENT_TYPE: ClassVar[str] = CONTENT_TYPE_SOAP11

    def http_headers(self, action: str) -> dict[str, str]:
        # SOAP 1.1 HTTP binding: action goes in a quoted SOAPAction header
        return {"Content-Type": self.CONTENT_TYPE, "SOAPAction": f'"{action}"'}


class Envelope12(Envelope):
    VERSION: ClassVar[str] = V12
    NAMESPACE: ClassVar[str] = NS_SOAP12
    CONTENT_TYPE: ClassVar[str] = CONTENT_TYPE_SOAP12

    def http_headers(self, action: str) -> dict[str, str]:
        # SOAP 1.2 HTTP binding: action is a media type parameter
        if not action:
            return {"Content-Type": self.CONTENT_TYPE}
        return {"Content-Type": f'{self.CONTENT_TYPE}; action="{action}"'}


ENVELOPE_TYPES: dict[str, type[Envelope]] = {V11: Envelope11, V12: Envelope12}
