# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Immutable HTTP response."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from http import HTTPStatus
from typing import Self

from http_message.errors import InvalidArgument, describe_type
from http_message.message import DEFAULT_PROTOCOL_VERSION, HeaderedMessage, HeaderValue
from http_message.stream import StreamInterface

__all__ = ["Response"]

_MIN_STATUS = 100
_MAX_STATUS = 599


def _require_status(code: object) -> int:
    if not isinstance(code, int) or isinstance(code, bool):
        raise InvalidArgument.create(1, "code", "int", describe_type(code))
    if not _MIN_STATUS <= code <= _MAX_STATUS:
        raise InvalidArgument(f"Argument #1 (code) must be between {_MIN_STATUS} and {_MAX_STATUS}, got {code}")
    return code


def _require_reason(reason_phrase: object) -> str:
    if not isinstance(reason_phrase, str):
        raise InvalidArgument.create(2, "reason_phrase", "str", describe_type(reason_phrase))
    return reason_phrase


def default_reason_phrase(code: int) -> str:
    """Return the standard reason phrase for *code*, or ``""`` if unregistered."""
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


class Response(HeaderedMessage):
    """Immutable HTTP response with a status code and reason phrase."""

    __slots__ = ("_reason_phrase", "_status_code")

    def __init__(
        self,
        status_code: int = 200,
        reason_phrase: str = "",
        headers: Mapping[str, HeaderValue] | Iterable[tuple[str, HeaderValue]] | None = None,
        body: StreamInterface | None = None,
        protocol_version: str = DEFAULT_PROTOCOL_VERSION,
    ) -> None:
        """Initialize a response.

        An empty *reason_phrase* falls back to the standard phrase for
        *status_code*.

        Raises:
            InvalidArgument: If *status_code* is not an ``int`` in 100-599,
                *reason_phrase* is not a ``str``, or any header/body is invalid.

        """
        self._status_code = _require_status(status_code)
        self._reason_phrase = _require_reason(reason_phrase) or default_reason_phrase(status_code)
        super().__init__(headers, body, protocol_version)

    @classmethod
    def from_status(cls, code: int, reason_phrase: str = "") -> Response:
        """Create a response with *code* and no headers."""
        return cls(code, reason_phrase)

    @property
    def status_code(self) -> int:
        """The HTTP status code."""
        return self._status_code

    @property
    def reason_phrase(self) -> str:
        """The reason phrase; may be ``""`` for unregistered codes."""
        return self._reason_phrase

    def with_status(self, code: int, reason_phrase: str = "") -> Self:
        """Return a copy with the status code and reason phrase replaced.

        Raises:
            InvalidArgument: As for the constructor.

        """
        code = _require_status(code)
        reason_phrase = _require_reason(reason_phrase)
        response = self._clone()
        response._status_code = code
        response._reason_phrase = reason_phrase or default_reason_phrase(code)
        return response

    def _with_received_status(self, code: int, reason_phrase: str) -> Self:
        """Return a copy carrying a status line received from a transport.

        Only the types are checked; codes outside 100-599 that the transport
        accepted are kept as-is.
        """
        if not isinstance(code, int) or isinstance(code, bool):
            raise InvalidArgument.create(1, "code", "int", describe_type(code))
        response = self._clone()
        response._status_code = code
        response._reason_phrase = _require_reason(reason_phrase) or default_reason_phrase(code)
        return response

    def __repr__(self) -> str:
        """Return a debug representation."""
        return (
            f"Response(HTTP/{self._protocol_version} {self._status_code} {self._reason_phrase}, "
            f"headers={self._fmt_headers()})"
        )
