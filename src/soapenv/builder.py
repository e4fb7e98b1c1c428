"""
EnvBuilder — stages header and payload items and builds SOAP envelopes.

    bldr = EnvBuilder(namespaces={"tns": "urn:example"})
    bldr.set_headers(auth).set_payload(request)
    req = bldr.build_http_request("1.1", "urn:example#GetThing", url)

A builder is single-owner: use one per build sequence.
"""

import logging
from typing import Any, Callable, Mapping, Optional

import httpx
from lxml import etree

from soapenv.errors import InvalidVersionError, SerializationError
from soapenv.marshal import marshal
from soapenv.models.envelope import ENVELOPE_TYPES, Body, Envelope, Header
from soapenv.versions import is_valid_version

logger = logging.getLogger("soapenv.builder")

EnvBuilderOption = Callable[["EnvBuilder"], None]


def check_namespaces(namespaces: Mapping[str, str]) -> dict[str, str]:
    """Validated copy of a prefix -> URI mapping.

    The empty prefix declares the default namespace. Raises SerializationError
    for non-string entries, prefixes that are not NCNames, reserved `xml*`
    prefixes and URIs lxml refuses.
    """
    checked: dict[str, str] = {}
    for prefix, uri in dict(namespaces).items():
        if not isinstance(prefix, str) or not isinstance(uri, str):
            raise SerializationError(
                f"Namespace declaration {prefix!r}: {uri!r} must map str to str",
                {"prefix": prefix, "uri": uri},
            )
        if prefix.lower().startswith("xml"):
            raise SerializationError(f"Namespace prefix {prefix!r} is reserved", {"prefix": prefix})
        if prefix and not uri:
            raise SerializationError(f"Namespace prefix {prefix!r} needs a URI", {"prefix": prefix})
        try:
            etree.Element("ns-check", nsmap={prefix or None: uri})
        except ValueError as e:
            raise SerializationError(
                f"Invalid namespace declaration {prefix!r}: {uri!r}: {e}",
                {"prefix": prefix, "uri": uri},
            ) from e
        checked[prefix] = uri
    return checked


def with_namespaces(namespaces: Mapping[str, str]) -> EnvBuilderOption:
    """Option adding (or overriding) namespace declarations on the envelope root."""
    checked = check_namespaces(namespaces)

    def apply(bldr: "EnvBuilder") -> None:
        bldr._namespaces = dict(checked)
    return apply


class EnvBuilder:
    def __init__(self, *options: EnvBuilderOption, namespaces: Optional[Mapping[str, str]] = None):
        self._headers: tuple[Any, ...] = ()
        self._payload: tuple[Any, ...] = ()
        self._namespaces: dict[str, str] = check_namespaces(namespaces) if namespaces else {}
        self._env: Optional[Envelope] = None
        for opt in options:
            opt(self)

    def set_headers(self, *items: Any) -> "EnvBuilder":
        """Replace the header items. Validation is deferred to build()."""
        self._headers = items
        return self

    def set_payload(self, *items: Any) -> "EnvBuilder":
        """Replace the payload items. Validation is deferred to build()."""
        self._payload = items
        return self

    def env(self) -> Optional[Envelope]:
        """Last successfully built envelope, or None."""
        return self._env

    def build(self, version: str) -> Envelope:
        """Build an envelope for `version` ("1.1" or "1.2").

        Raises InvalidVersionError before any marshalling, and
        SerializationError if the payload or headers cannot be marshalled.
        On failure the previous envelope stays in env().
        """
        if not is_valid_version(version):
            raise InvalidVersionError(version)

        body = marshal(self._payload)
        env = ENVELOPE_TYPES[version](namespaces=dict(self._namespaces), body=Body(content=body))

        if self._headers:
            hdr = marshal(self._headers)
            if hdr:
                env = env._with_header(Header(content=hdr))
            else:
                logger.debug("Headers marshalled to nothing, omitting Header element")

        logger.debug(
            f"Built SOAP {version} envelope (header={env.header is not None}, body={len(body)} bytes)"
        )
        self._env = env
        return env

    def build_http_request(self, version: str, action: str, url: str = "") -> httpx.Request:
        """Build an envelope and wrap it in a POST request for `action`."""
        return self.build(version).get_http_request(action, url)


def new_envelope(
    version: str,
    header: Any,
    payload: Any,
    *options: EnvBuilderOption,
    namespaces: Optional[Mapping[str, str]] = None,
) -> Envelope:
    """One-shot build. A `header` of None produces no Header element."""
    bldr = EnvBuilder(*options, namespaces=namespaces).set_headers(header).set_payload(payload)
    return bldr.build(version)
