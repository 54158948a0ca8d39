# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Conversion between http-message objects and ``httpx``.

``httpx`` is the client and transport; this module lets it be driven
through the immutable message interface:

- ``to_httpx_request`` / ``from_httpx_request`` convert requests.
- ``from_httpx_response`` converts responses.
- ``send_request`` sends a ``Request`` with an ``httpx.Client`` and returns
  a ``Response``.

Header casing and order are carried both ways via ``httpx.Headers.raw``.
Bodies are text: request bodies are encoded as UTF-8, response bodies are
decoded with ``httpx.Response.text``.

Logger: ``http_message.httpx``; conversions are logged at DEBUG level.
"""

from __future__ import annotations

import logging
from email.message import Message

import httpx

from http_message._debug import fmt_headers, httpx_logger
from http_message.errors import InvalidArgument, describe_type
from http_message.request import Request
from http_message.response import Response
from http_message.stream import BoundedMemoryStream
from http_message.uri import Uri

__all__ = ["from_httpx_request", "from_httpx_response", "send_request", "to_httpx_request"]

_HTTP_VERSION_PREFIX = "HTTP/"
_DEFAULT_CHARSET = "utf-8"


def _raw_header_pairs(headers: httpx.Headers) -> list[tuple[str, str]]:
    """Return ``(name, value)`` pairs with the original name casing."""
    encoding = headers.encoding
    return [(name.decode(encoding), value.decode(encoding)) for name, value in headers.raw]


def _content_charset(headers: httpx.Headers) -> str:
    """Return the charset declared by ``Content-Type``, defaulting to UTF-8."""
    # Same parsing httpx applies to response Content-Type headers
    message = Message()
    message["content-type"] = headers.get("content-type", "")
    return message.get_content_charset(_DEFAULT_CHARSET)


def _wire_headers(request: Request, url: httpx.URL) -> list[tuple[str, str]]:
    """Flatten headers into pairs, sending the URL authority as Host.

    A Host header that still matches the URI host carries the IDNA-encoded
    host plus any non-default port; a Host set by the caller is sent as is.
    """
    uri_host = request.uri.host
    pairs: list[tuple[str, str]] = []
    for name, values in request.headers.items():
        if name.lower() == "host" and uri_host and values == [uri_host]:
            values = [url.netloc.decode("ascii")]
        pairs.extend((name, value) for value in values)
    return pairs


def _require_request(request: object) -> Request:
    if not isinstance(request, Request):
        raise InvalidArgument.create(1, "request", "Request", describe_type(request))
    return request


def to_httpx_request(request: Request) -> httpx.Request:
    """Build an ``httpx.Request`` from *request*.

    An explicit request-target that starts with ``/`` replaces the URL's
    path and query; other forms (absolute, authority, asterisk) are not
    representable in ``httpx`` and are ignored.

    The message keeps the bare URI host in Host; on the wire it becomes the
    ASCII authority, e.g. ``xn--mnchen-3ya.de`` or ``example.com:8080``.

    Raises:
        InvalidArgument: If *request* is not a ``Request``.

    """
    request = _require_request(request)
    url = httpx.URL(str(request.uri))
    target = request.request_target
    if target.startswith("/") and target != url.raw_path.decode("ascii"):
        url = url.copy_with(raw_path=target.encode("utf-8"))

    headers = _wire_headers(request, url)
    content = str(request.body)
    result = httpx.Request(
        request.method,
        url,
        headers=headers,
        content=content.encode("utf-8") if content else None,
    )
    if httpx_logger.isEnabledFor(logging.DEBUG):
        httpx_logger.debug(
            "To httpx: %s %s, headers=%s, body_size=%d",
            request.method,
            url,
            fmt_headers(request.headers),
            len(content),
        )
    return result


def from_httpx_request(request: httpx.Request) -> Request:
    """Build a ``Request`` from an ``httpx.Request``.

    The body is decoded with the charset from ``Content-Type`` (UTF-8 when
    none is declared).

    Raises:
        InvalidArgument: If *request* is not an ``httpx.Request``, or its
            body cannot be decoded with that charset.

    """
    if not isinstance(request, httpx.Request):
        raise InvalidArgument.create(1, "request", "httpx.Request", describe_type(request))
    charset = _content_charset(request.headers)
    try:
        content = request.read().decode(charset)
    except (LookupError, UnicodeDecodeError) as exc:
        raise InvalidArgument(f"Request body is not valid {charset}: {exc}") from exc
    return Request(
        request.method,
        Uri(request.url),
        headers=_raw_header_pairs(request.headers),
        body=BoundedMemoryStream.from_string(content),
    )


def from_httpx_response(response: httpx.Response) -> Response:
    """Build a ``Response`` from an ``httpx.Response``.

    The response body must already be read (``httpx.Client.send`` does
    this unless ``stream=True``).  The status code is kept even outside
    100-599, since httpx accepted it.

    Raises:
        InvalidArgument: If *response* is not an ``httpx.Response``.

    """
    if not isinstance(response, httpx.Response):
        raise InvalidArgument.create(1, "response", "httpx.Response", describe_type(response))
    version = response.http_version.removeprefix(_HTTP_VERSION_PREFIX)
    result = Response(
        headers=_raw_header_pairs(response.headers),
        body=BoundedMemoryStream.from_string(response.text),
        protocol_version=version,
    )._with_received_status(response.status_code, response.reason_phrase)
    if httpx_logger.isEnabledFor(logging.DEBUG):
        httpx_logger.debug(
            "From httpx: status=%d, version=%s, headers=%s, body_size=%d",
            response.status_code,
            version,
            fmt_headers(result.headers),
            len(response.content),
        )
    return result


def send_request(client: httpx.Client, request: Request) -> Response:
    """Send *request* with *client* and return the converted response.

    All I/O is performed by *client*; transport errors (``httpx.HTTPError``
    subclasses) propagate unchanged.

    Raises:
        InvalidArgument: If *request* is not a ``Request``.

    """
    request = _require_request(request)
    response = client.send(to_httpx_request(request))
    try:
        return from_httpx_response(response)
    finally:
        response.close()
