# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Immutable HTTP request/response messages with in-memory body streams."""

from http_message.errors import InvalidArgument, StreamClosedError
from http_message.httpx_compat import from_httpx_request, from_httpx_response, send_request, to_httpx_request
from http_message.message import DEFAULT_PROTOCOL_VERSION, HeaderedMessage, HeaderValue
from http_message.request import Request
from http_message.response import Response
from http_message.stream import BoundedMemoryStream, StreamInterface
from http_message.uri import Uri, UriInterface

__version__ = "0.1.0"

__all__ = [
    "BoundedMemoryStream",
    "DEFAULT_PROTOCOL_VERSION",
    "HeaderValue",
    "HeaderedMessage",
    "InvalidArgument",
    "Request",
    "Response",
    "StreamClosedError",
    "StreamInterface",
    "Uri",
    "UriInterface",
    "__version__",
    "from_httpx_request",
    "from_httpx_response",
    "send_request",
    "to_httpx_request",
]
