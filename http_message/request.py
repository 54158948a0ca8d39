# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Outgoing, client-side HTTP request.

A ``Request`` carries a method, a URI, an optional request-target override,
headers, a protocol version and a body.  Requests are immutable; every
``with_*`` method returns a new instance.

Setting a URI with a non-empty host synchronises the ``Host`` header to that
host and moves it to the front of the headers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Self

from http_message._debug import message_logger
from http_message.errors import InvalidArgument, describe_type
from http_message.message import DEFAULT_PROTOCOL_VERSION, HeaderedMessage, HeaderValue
from http_message.stream import StreamInterface
from http_message.uri import Uri, UriInterface

__all__ = ["Request"]


def _require_method(method: object) -> str:
    if not isinstance(method, str):
        raise InvalidArgument.create(1, "method", "str", describe_type(method))
    return method


def _coerce_uri(uri: object) -> UriInterface:
    if isinstance(uri, str):
        return Uri(uri)
    if not isinstance(uri, UriInterface):
        raise InvalidArgument.create(1, "uri", "UriInterface|str", describe_type(uri))
    return uri


class Request(HeaderedMessage):
    """Immutable HTTP request."""

    __slots__ = ("_method", "_request_target", "_uri")

    def __init__(
        self,
        method: str,
        uri: UriInterface | str,
        headers: Mapping[str, HeaderValue] | Iterable[tuple[str, HeaderValue]] | None = None,
        body: StreamInterface | None = None,
        protocol_version: str = DEFAULT_PROTOCOL_VERSION,
    ) -> None:
        """Initialize a request.

        The Host header is derived from *uri* after *headers* are applied, so
        a URI host overrides any Host passed in *headers*.

        Raises:
            InvalidArgument: If *method* is not a ``str``, *uri* is not a
                ``UriInterface`` or ``str``, or any header/body is invalid.

        """
        method = _require_method(method)
        uri = _coerce_uri(uri)
        super().__init__(headers, body, protocol_version)
        self._method = method
        self._request_target = ""
        self._set_uri(uri)

    @classmethod
    def from_method_and_uri(cls, method: str, uri: UriInterface | str) -> Request:
        """Create a request with *method* and *uri* and no other headers."""
        return cls(method, uri)

    def _set_uri(self, uri: UriInterface, preserve_host: bool = False) -> None:
        """Set the URI and synchronise the Host header.

        With *preserve_host*, a present and non-empty Host header is kept.
        """
        self._uri = uri
        host = uri.host
        if host == "":
            return
        if preserve_host and self.get_header_line("Host") != "":
            return
        if message_logger.isEnabledFor(logging.DEBUG):
            message_logger.debug("Host synchronised from URI: %s", host)
        self._update_header("Host", [host])

    # -- request target ------------------------------------------------------

    @property
    def request_target(self) -> str:
        """The request-target for the request line.

        Either the value set by :meth:`with_request_target`, or the origin
        form of the URI: its path (``"/"`` when empty) plus ``"?query"`` when
        a query is present.
        """
        if self._request_target != "":
            return self._request_target
        target = self._uri.path or "/"
        query = self._uri.query
        if query != "":
            target += "?" + query
        return target

    def with_request_target(self, request_target: str) -> Self:
        """Return a copy with an explicit request-target, used verbatim.

        An empty string is normalised to ``"/"``.  See RFC 7230 section 5.3
        for the absolute, authority and asterisk forms this allows.

        Raises:
            InvalidArgument: If *request_target* is not a ``str``.

        """
        if not isinstance(request_target, str):
            raise InvalidArgument.create(1, "request_target", "str", describe_type(request_target))
        request = self._clone()
        request._request_target = request_target or "/"
        return request

    # -- method --------------------------------------------------------------

    @property
    def method(self) -> str:
        """The HTTP method, exactly as given."""
        return self._method

    def with_method(self, method: str) -> Self:
        """Return a copy with the method replaced.

        Methods are case-sensitive and are not normalised.

        Raises:
            InvalidArgument: If *method* is not a ``str``.

        """
        method = _require_method(method)
        request = self._clone()
        request._method = method
        return request

    # -- uri -----------------------------------------------------------------

    @property
    def uri(self) -> UriInterface:
        """The request URI."""
        return self._uri

    def with_uri(self, uri: UriInterface | str, preserve_host: bool = False) -> Self:
        """Return a copy with the URI replaced.

        When the new URI has a host, the Host header is set to it.  When it
        has none, the existing Host header is carried over.

        With *preserve_host*, a Host header that is present and non-empty is
        never changed; a missing or empty one is still filled from the URI.

        Raises:
            InvalidArgument: If *uri* is not a ``UriInterface`` or ``str``.

        """
        uri = _coerce_uri(uri)
        request = self._clone()
        request._set_uri(uri, preserve_host)
        return request

    def __repr__(self) -> str:
        """Return a debug representation."""
        return (
            f"Request({self._method} {self.request_target} HTTP/{self._protocol_version}, "
            f"headers={self._fmt_headers()})"
        )
