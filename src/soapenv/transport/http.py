"""
HTTP request construction for SOAP envelopes.

Requests are built, never sent: hand the result to httpx.Client.send() or
AsyncClient.send().
"""

from typing import TYPE_CHECKING

import httpx

from soapenv.errors import RequestConstructionError

if TYPE_CHECKING:
    from soapenv.models.envelope import Envelope

DEFAULT_HEADERS = {
    "User-Agent": "soapenv/0.1.0",
    "Accept": "text/xml, application/soap+xml",
}

_FORBIDDEN_ACTION_CHARS = frozenset('"\\\r\n\x00')


def _check_action(action: str) -> None:
    if not isinstance(action, str):
        raise RequestConstructionError(f"SOAP action must be a string, got {type(action).__name__}")
    if not action.isascii() or any(c in _FORBIDDEN_ACTION_CHARS or not c.isprintable() for c in action):
        raise RequestConstructionError(f"Invalid SOAP action {action!r}", {"action": action})


def build_http_request(envelope: "Envelope", action: str, url: str = "") -> httpx.Request:
    """POST request with the serialized envelope as body and the action attached per version."""
    _check_action(action)
    content = envelope.to_xml()
    headers = dict(DEFAULT_HEADERS)
    headers.update(envelope.http_headers(action))
    try:
        return httpx.Request("POST", url, content=content, headers=headers)
    except (httpx.InvalidURL, TypeError, ValueError) as e:
        raise RequestConstructionError(f"Failed to build HTTP request: {e}", {"url": url}) from e
