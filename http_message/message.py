# © Copyright 2025-2026, Query.Farm LLC - https://query.farm
# SPDX-License-Identifier: Apache-2.0

"""Immutable header handling shared by requests and responses.

Headers are stored in two mappings kept in lockstep:

- ``_headers``: declared-case name -> list of values, in insertion order.
- ``_header_names``: lowercased name -> declared-case name.

Lookups go through ``_header_names`` so they are case-insensitive, while
``headers`` reports names exactly as first declared.  Every ``with_*``
operation works on a clone whose header structures are copied, so the
original instance is never touched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Self

from http_message._debug import fmt_headers, message_logger
from http_message.errors import InvalidArgument, describe_type
from http_message.stream import BoundedMemoryStream, StreamInterface

__all__ = ["DEFAULT_PROTOCOL_VERSION", "HeaderValue", "HeaderedMessage"]

DEFAULT_PROTOCOL_VERSION = "1.1"

HeaderValue = str | Sequence[str]
"""A single header value or a sequence of values."""

_HEADER_VALUE_TYPE = "str|list[str]"


def _require_name(name: object, position: int = 1) -> str:
    if not isinstance(name, str):
        raise InvalidArgument.create(position, "name", "str", describe_type(name))
    return name


def _normalize_values(value: object) -> list[str]:
    """Validate a header value and return it as a fresh list."""
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        raise InvalidArgument.create(2, "value", _HEADER_VALUE_TYPE, describe_type(value))
    for line in value:
        if not isinstance(line, str):
            raise InvalidArgument.create(2, "value", _HEADER_VALUE_TYPE, describe_type(line))
    return list(value)


class HeaderedMessage:
    """Base class for immutable HTTP messages.

    Subclasses add their own start-line fields and must list them in
    ``__slots__``; :meth:`_clone` copies every slot.
    """

    __slots__ = ("_body", "_header_names", "_headers", "_protocol_version")

    def __init__(
        self,
        headers: Mapping[str, HeaderValue] | Iterable[tuple[str, HeaderValue]] | None = None,
        body: StreamInterface | None = None,
        protocol_version: str = DEFAULT_PROTOCOL_VERSION,
    ) -> None:
        """Initialize headers, body and protocol version.

        Args:
            headers: Initial headers, as a mapping or as ``(name, value)``
                pairs.  Pairs repeating a name (in any casing) are appended.
            body: Body stream; defaults to an empty ``BoundedMemoryStream``.
            protocol_version: HTTP version number, e.g. ``"1.1"``.

        Raises:
            InvalidArgument: If any header, the body or the protocol version
                is invalid.

        """
        self._headers: dict[str, list[str]] = {}
        self._header_names: dict[str, str] = {}
        self._protocol_version = self._require_version(protocol_version)
        self._body: StreamInterface = BoundedMemoryStream() if body is None else self._require_body(body)
        if headers is not None:
            pairs = headers.items() if isinstance(headers, Mapping) else headers
            for name, value in pairs:
                values = _normalize_values(value)
                self._update_header(_require_name(name), self.get_header(name) + values)

    # -- validation helpers --------------------------------------------------

    @staticmethod
    def _require_version(version: object) -> str:
        if not isinstance(version, str):
            raise InvalidArgument.create(1, "version", "str", describe_type(version))
        return version

    @staticmethod
    def _require_body(body: object) -> StreamInterface:
        if not isinstance(body, StreamInterface):
            raise InvalidArgument.create(1, "body", "StreamInterface", describe_type(body))
        return body

    # -- copy-on-write -------------------------------------------------------

    def _clone(self) -> Self:
        """Return a copy with independent header structures.

        Scalar fields and the body stream are shared; the header dict, every
        value list and the name index are copied.
        """
        clone = object.__new__(type(self))
        for klass in type(self).__mro__:
            for slot in getattr(klass, "__slots__", ()):
                if hasattr(self, slot):
                    object.__setattr__(clone, slot, getattr(self, slot))
        clone._headers = {name: list(values) for name, values in self._headers.items()}
        clone._header_names = dict(self._header_names)
        return clone

    def _update_header(self, name: str, values: list[str]) -> None:
        """Set, replace or remove a header in place.

        Only ever called on a fresh clone (or during construction).  An empty
        *values* list removes the header.  Host is always moved to the front
        (RFC 7230 section 5.4); other headers keep insertion order.
        """
        key = name.lower()

        if key in self._header_names:
            del self._headers[self._header_names[key]]
            del self._header_names[key]

        if message_logger.isEnabledFor(logging.DEBUG):
            message_logger.debug("Update header %r: %r", name, values)

        if not values:
            return

        if key == "host":
            self._headers = {name: values, **self._headers}
        else:
            self._headers[name] = values
        self._header_names[key] = name

    # -- protocol version ----------------------------------------------------

    @property
    def protocol_version(self) -> str:
        """HTTP protocol version number, e.g. ``"1.1"``."""
        return self._protocol_version

    def with_protocol_version(self, version: str) -> Self:
        """Return a copy with the protocol version replaced.

        Raises:
            InvalidArgument: If *version* is not a ``str``.

        """
        version = self._require_version(version)
        message = self._clone()
        message._protocol_version = version
        return message

    # -- headers -------------------------------------------------------------

    @property
    def headers(self) -> dict[str, list[str]]:
        """All headers, keyed by the name as first declared, in wire order.

        The returned dict and its lists are copies.
        """
        return {name: list(values) for name, values in self._headers.items()}

    def has_header(self, name: str) -> bool:
        """Return whether a header exists, matching *name* case-insensitively.

        Raises:
            InvalidArgument: If *name* is not a ``str``.

        """
        return _require_name(name).lower() in self._header_names

    def get_header(self, name: str) -> list[str]:
        """Return the values of a header, or ``[]`` when it is absent.

        Raises:
            InvalidArgument: If *name* is not a ``str``.

        """
        declared = self._header_names.get(_require_name(name).lower())
        if declared is None:
            return []
        return list(self._headers[declared])

    def get_header_line(self, name: str) -> str:
        """Return the values of a header joined with ``","``, or ``""`` when absent.

        Not every header can be represented by comma concatenation; use
        :meth:`get_header` for those.
        """
        return ",".join(self.get_header(name))

    def with_header(self, name: str, value: HeaderValue) -> Self:
        """Return a copy with *name* set to *value*, replacing existing values.

        The casing of *name* is what ``headers`` will report.  An empty
        sequence removes the header.

        Raises:
            InvalidArgument: If *name* is not a ``str`` or *value* is not a
                ``str`` or a list/tuple of ``str``.

        """
        _require_name(name)
        values = _normalize_values(value)
        message = self._clone()
        message._update_header(name, values)
        return message

    def with_added_header(self, name: str, value: HeaderValue) -> Self:
        """Return a copy with *value* appended to the existing values of *name*.

        The header is added if it did not exist.

        Raises:
            InvalidArgument: As for :meth:`with_header`.

        """
        _require_name(name)
        values = _normalize_values(value)
        message = self._clone()
        message._update_header(name, message.get_header(name) + values)
        return message

    def without_header(self, name: str) -> Self:
        """Return a copy without the header *name* (case-insensitive).

        Raises:
            InvalidArgument: If *name* is not a ``str``.

        """
        _require_name(name)
        message = self._clone()
        message._update_header(name, [])
        return message

    # -- body ----------------------------------------------------------------

    @property
    def body(self) -> StreamInterface:
        """The body stream."""
        return self._body

    def with_body(self, body: StreamInterface) -> Self:
        """Return a copy with the body replaced.

        The stream itself is not copied; both messages share it.

        Raises:
            InvalidArgument: If *body* does not implement ``StreamInterface``.

        """
        body = self._require_body(body)
        message = self._clone()
        message._body = body
        return message

    def _fmt_headers(self) -> str:
        return fmt_headers(self._headers)
